"""
TaskLedger Backend — Route Pattern Compiler
============================================

What:  Turns a route definition string into a matcher for request paths.
How:   Three interpretation modes, checked in this order:

    1. Parameterized: the definition contains a `{name}` placeholder.
       Every placeholder becomes `([^/]+)` (one path segment). Names are
       dropped; captured values are returned by position, left to right.
       The text around placeholders is used as-is, NOT escaped.
    2. Raw regex: the definition contains a `(`. The definition is used as a
       regular expression body, unescaped. Example: the catch-all `(.*)`.
    3. Static: anything else. Every character is escaped.

    All three modes match the WHOLE path (`re.fullmatch`), never a prefix.

Known sharp edge:
    The mode is picked by sniffing characters, so a literal path that happens
    to contain `(` is treated as a regex, and a regex containing a `{2}`
    quantifier is treated as a placeholder. Existing route definitions rely on
    this exact behaviour, so it is kept.

Examples:
    "/tasks"        → static         → matches only "/tasks"
    "/tasks/{id}"   → parameterized  → "/tasks/42" gives ("42",)
    "/(.*)"         → regex          → "/a/b" gives ("a/b",), "/" gives ("",)
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Pattern, Tuple

from taskledger.exceptions import RouteDefinitionError

# Placeholder token: a brace pair with at least one non-`}` character inside
PLACEHOLDER_RE = re.compile(r"\{[^}]+\}")

# What a placeholder turns into: one path segment, no slashes, non-empty
SEGMENT_CAPTURE = "([^/]+)"


class PatternKind(str, Enum):
    """How a route definition was interpreted."""

    STATIC = "static"
    PARAMETERIZED = "parameterized"
    REGEX = "regex"


@dataclass(frozen=True)
class CompiledPattern:
    """
    A compiled route definition.

    Attributes:
        definition: The raw string the route was registered with
        kind:       Which of the three modes was applied
        regex:      The compiled expression, always used with fullmatch
    """

    definition: str
    kind: PatternKind
    regex: Pattern[str]

    def match(self, path: str) -> Optional[Tuple[str, ...]]:
        """
        Match `path` against the whole pattern.

        Returns:
            None if the path does not match, otherwise the captured groups in
            left-to-right order. A raw-regex group that did not take part in
            the match is returned as "".
        """
        found = self.regex.fullmatch(path)
        if found is None:
            return None
        return found.groups(default="")


def compile_pattern(definition: str) -> CompiledPattern:
    """
    Compile a route definition string.

    Raises:
        RouteDefinitionError: unbalanced placeholder braces or a malformed
            regular expression. Raised at registration time so a bad route
            aborts application boot instead of failing per request.
    """
    if PLACEHOLDER_RE.search(definition):
        kind = PatternKind.PARAMETERIZED
        source = PLACEHOLDER_RE.sub(SEGMENT_CAPTURE, definition)
        # Anything brace-like left over was never a complete placeholder
        if "{" in source or "}" in source:
            raise RouteDefinitionError(definition, "unbalanced placeholder braces")
    elif "(" in definition:
        kind = PatternKind.REGEX
        source = definition
    else:
        if "{" in definition or "}" in definition:
            raise RouteDefinitionError(definition, "unbalanced placeholder braces")
        kind = PatternKind.STATIC
        source = re.escape(definition)

    try:
        regex = re.compile(source)
    except re.error as e:
        raise RouteDefinitionError(definition, f"invalid pattern ({e})") from e

    return CompiledPattern(definition=definition, kind=kind, regex=regex)

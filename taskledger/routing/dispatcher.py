"""
TaskLedger Backend — Request Dispatcher
========================================

What:  Resolves an incoming (method, raw request URI) to a handler and its
       positional path parameters.
How:
    1. Extract the path from the raw URI with `urlsplit` (drops `?query` and
       `#fragment`, keeps percent-escapes as they are)
    2. Look up the bucket for the method; none → not found
    3. Try each route in registration order, whole-path match only
    4. First match wins: return its handler and captured groups
    5. Nothing matched → not found

Not found is a return value (None), not an exception. Turning it into a 404
is the caller's job (see taskledger.gateway).

Side effects: none. The dispatcher never logs, never mutates the table, never
calls the handler and never catches anything a handler raises.
"""

from typing import NamedTuple, Optional, Tuple
from urllib.parse import urlsplit

from taskledger.routing.table import Handler, Route, RouteTable


class RouteMatch(NamedTuple):
    """
    A successful dispatch.

    Attributes:
        handler: The matched route's handler
        params:  Captured path parameters, raw strings, left-to-right
        route:   The matched route itself (for logging and tooling)
    """

    handler: Handler
    params: Tuple[str, ...]
    route: Route


def resolve_path(raw_request_uri: str) -> str:
    """
    Return the path component of a raw request URI.

    Examples:
        "/tasks/42?x=1"  → "/tasks/42"
        "/tasks#top"     → "/tasks"
        "/a%20b"         → "/a%20b"   (no decoding)
        "?x=1"           → "/"
    """
    return urlsplit(raw_request_uri).path or "/"


def dispatch(
    table: RouteTable, method: str, raw_request_uri: str
) -> Optional[RouteMatch]:
    """
    Find the first route under `method` whose pattern matches the URI's path.

    Args:
        table:           The (normally frozen) route table
        method:          Request method exactly as received, e.g. "GET"
        raw_request_uri: Path plus optional query string, undecoded

    Returns:
        RouteMatch on success, None when no route matches (including an
        unsupported or unregistered method).
    """
    path = resolve_path(raw_request_uri)

    for route in table.bucket(method):
        params = route.pattern.match(path)
        if params is not None:
            return RouteMatch(handler=route.handler, params=params, route=route)

    return None

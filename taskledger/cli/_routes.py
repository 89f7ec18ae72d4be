"""``taskledger routes``: print the application route table.

Builds the same frozen table ``create_app()`` mounts and prints one row per
route in dispatch order: METHOD, PATTERN, KIND and HANDLER.
"""

import argparse
import sys
from typing import List, Tuple

from taskledger.exceptions import RouteDefinitionError
from taskledger.routing import RouteTable


def format_routes(table: RouteTable) -> List[str]:
    """Render the table as aligned text lines, header first."""
    rows: List[Tuple[str, str, str, str]] = []
    for route in table.routes():
        handler_name = getattr(route.handler, "__qualname__", str(route.handler))
        rows.append((route.method.value, route.definition, route.pattern.kind.value, handler_name))

    if not rows:
        return ["No routes registered."]

    max_method = max(max(len(r[0]) for r in rows), 6)  # "METHOD" header
    max_pattern = max(max(len(r[1]) for r in rows), 7)  # "PATTERN" header
    max_kind = max(max(len(r[2]) for r in rows), 4)  # "KIND" header

    fmt = f"{{:<{max_method}}}  {{:<{max_pattern}}}  {{:<{max_kind}}}  {{}}"
    lines = [fmt.format("METHOD", "PATTERN", "KIND", "HANDLER")]
    sep_len = max_method + max_pattern + max_kind + 6 + max(len(r[3]) for r in rows)
    lines.append("-" * min(sep_len, 100))
    lines.extend(fmt.format(*row) for row in rows)
    return lines


def run_routes(args: argparse.Namespace) -> None:
    from taskledger.routes import build_route_table

    try:
        table = build_route_table()
    except RouteDefinitionError as exc:
        print(f"Error: {exc.message}", file=sys.stderr)
        raise SystemExit(1) from exc

    for line in format_routes(table):
        print(line)

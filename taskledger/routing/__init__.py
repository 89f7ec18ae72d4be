# Routing package init
"""
TaskLedger Backend — Routing Core
==================================

What:  Method + path matching that maps requests to handler callbacks.

Modules:
    - patterns.py:    route definition string → CompiledPattern
    - table.py:       RouteTable, ordered per-method Route storage
    - dispatcher.py:  dispatch(table, method, raw_uri) → RouteMatch | None

Lifecycle (build-then-serve):
    table = RouteTable()      # startup: register everything
    table.freeze()            # no more registration
    dispatch(table, ...)      # per request: read-only lookups
"""

from taskledger.routing.dispatcher import RouteMatch, dispatch, resolve_path
from taskledger.routing.patterns import CompiledPattern, PatternKind, compile_pattern
from taskledger.routing.table import Handler, HttpMethod, Route, RouteTable

__all__ = [
    "CompiledPattern",
    "Handler",
    "HttpMethod",
    "PatternKind",
    "Route",
    "RouteMatch",
    "RouteTable",
    "compile_pattern",
    "dispatch",
    "resolve_path",
]

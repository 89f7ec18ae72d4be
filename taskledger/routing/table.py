"""
TaskLedger Backend — Route Table
=================================

What:  Stores registered routes per HTTP method, in registration order.
How:   One list per method. `register()` compiles the definition and appends;
       nothing is ever merged, deduplicated, reordered or removed.
When:  Built once inside `create_app()`, frozen, then only read by the
       dispatcher for the rest of the process lifetime.

First-match-wins:
    Registering `/tasks/{id}` before `/tasks/pending` makes the second route
    unreachable for GET, because `{id}` also matches "pending". That is
    accepted behaviour, not an error: register specific routes first.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Dict, Iterator, List, Union

from starlette.responses import Response

from taskledger.exceptions import RouteDefinitionError, RouteTableFrozenError
from taskledger.routing.patterns import CompiledPattern, compile_pattern

# A route handler receives the request context followed by the captured path
# parameters (raw strings, by position) and returns a response.
Handler = Callable[..., Awaitable[Response]]


class HttpMethod(str, Enum):
    """The only methods a route can be registered under."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    OPTIONS = "OPTIONS"


@dataclass(frozen=True)
class Route:
    """A (method, pattern, handler) triple. Immutable once created."""

    method: HttpMethod
    pattern: CompiledPattern
    handler: Handler

    @property
    def definition(self) -> str:
        return self.pattern.definition


class RouteTable:
    """
    Ordered per-method route storage.

    Usage:
        table = RouteTable()
        table.get("/tasks/{id}", get_task)
        table.register("POST", "/tasks", create_task)
        table.freeze()
    """

    def __init__(self) -> None:
        self._routes: Dict[HttpMethod, List[Route]] = {}
        self._frozen = False

    # ── Registration ──────────────────────────────────────────────────────
    def register(
        self, method: Union[str, HttpMethod], definition: str, handler: Handler
    ) -> Route:
        """
        Compile `definition` and append a route to the bucket for `method`.

        Raises:
            RouteDefinitionError: Unsupported method or uncompilable pattern
            RouteTableFrozenError: The table was already frozen
        """
        http_method = self._coerce_method(method, definition)
        if self._frozen:
            raise RouteTableFrozenError(http_method.value, definition)

        route = Route(
            method=http_method,
            pattern=compile_pattern(definition),
            handler=handler,
        )
        self._routes.setdefault(http_method, []).append(route)
        return route

    def get(self, definition: str, handler: Handler) -> Route:
        return self.register(HttpMethod.GET, definition, handler)

    def post(self, definition: str, handler: Handler) -> Route:
        return self.register(HttpMethod.POST, definition, handler)

    def put(self, definition: str, handler: Handler) -> Route:
        return self.register(HttpMethod.PUT, definition, handler)

    def delete(self, definition: str, handler: Handler) -> Route:
        return self.register(HttpMethod.DELETE, definition, handler)

    def options(self, definition: str, handler: Handler) -> Route:
        return self.register(HttpMethod.OPTIONS, definition, handler)

    def freeze(self) -> "RouteTable":
        """Close the table for registration. Returns self for chaining."""
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    # ── Lookup ────────────────────────────────────────────────────────────
    def bucket(self, method: str) -> List[Route]:
        """
        Routes registered under `method`, in registration order.

        Methods are compared exactly (HTTP methods are case-sensitive); an
        unsupported or unregistered method yields an empty list.
        """
        try:
            http_method = HttpMethod(method)
        except ValueError:
            return []
        return self._routes.get(http_method, [])

    def routes(self) -> Iterator[Route]:
        """Every route, grouped by method, each group in registration order."""
        for http_method in HttpMethod:
            yield from self._routes.get(http_method, [])

    def __len__(self) -> int:
        return sum(len(bucket) for bucket in self._routes.values())

    @staticmethod
    def _coerce_method(method: Union[str, HttpMethod], definition: str) -> HttpMethod:
        if isinstance(method, HttpMethod):
            return method
        try:
            return HttpMethod(method.upper())
        except ValueError as e:
            raise RouteDefinitionError(
                definition, f"unsupported HTTP method '{method}'"
            ) from e

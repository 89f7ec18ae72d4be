"""
TaskLedger Backend — Custom Exception Hierarchy
================================================

What:  Application-specific exceptions for request-time and boot-time failures.
How:   Each exception carries a message and an optional context dict.
       Global exception handlers (registered in main.py) turn the request-time
       ones into JSON envelopes with the right status code. Boot-time ones
       abort `create_app()`.
Who:   Raised by services, route handlers and the routing layer.

Exception Hierarchy:
    TaskLedgerError (base)
    ├── ValidationError          → 400 Bad Request (client can fix)
    ├── NotFoundError            → 404 Not Found
    ├── DatabaseError            → 500 Internal Server Error
    ├── RouteDefinitionError     → startup failure (bad route pattern)
    └── RouteTableFrozenError    → startup failure (late registration)

Note:
    A request that matches no route is NOT an exception. The dispatcher returns
    None and the gateway renders it as `404 {"error": "Route not found"}`.
"""

from typing import Any, Dict, Optional


class TaskLedgerError(Exception):
    """
    Base exception for all TaskLedger application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, only partly returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(TaskLedgerError):
    """
    Raised when client input fails validation.

    When:    Malformed JSON payload fields, a non-integer id path parameter,
             a date path parameter that is not ISO 8601.
    HTTP:    400 Bad Request

    Example response data:
        {
            "error": "Invalid task payload",
            "details": {"errors": [{"field": "title", "message": "Field required"}]}
        }
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(TaskLedgerError):
    """
    Raised when a requested record does not exist.

    When:    GET/PUT/DELETE /tasks/{id} with an id that has no row.
    HTTP:    404 Not Found

    The service layer converts SQLAlchemy's `None` into this exception so the
    route handlers never check for missing rows themselves.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource.capitalize()} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DatabaseError(TaskLedgerError):
    """
    Raised when database operations fail unexpectedly.

    When:    Connection lost mid-query, constraint violation, deadlock, etc.
    HTTP:    500 Internal Server Error

    Security Note:
        The message returned to the client is always generic. The original
        error type is kept in `context` and logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class RouteDefinitionError(TaskLedgerError):
    """
    Raised when a route definition cannot be compiled.

    When:    Registration time: invalid raw regex, unbalanced `{`/`}` placeholder,
             or an HTTP method outside GET/POST/PUT/DELETE/OPTIONS.
    Effect:  Propagates out of `create_app()` so the process never serves
             traffic with a half-built route table.
    """

    def __init__(
        self,
        definition: str,
        reason: str,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["definition"] = definition
        super().__init__(
            message=f"Invalid route definition '{definition}': {reason}",
            context=ctx,
        )
        self.definition = definition
        self.reason = reason


class RouteTableFrozenError(TaskLedgerError):
    """Raised when a route is registered after the table was frozen."""

    def __init__(self, method: str, definition: str):
        super().__init__(
            message=f"Cannot register {method} {definition}: route table is frozen",
            context={"method": method, "definition": definition},
        )

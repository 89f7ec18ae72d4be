"""
TaskLedger Backend — Request ID Middleware
===========================================

What:  Gives every request a correlation ID, returned in `X-Request-ID`.
How:   A client-sent X-Request-ID is reused only if it is a short token
       (letters, digits, `.`, `_`, `-`; at most 64 characters), so it can be
       written into log lines as-is. Anything else is replaced by an
       8-character hex ID.

The ID lives in `request_id_var` for the duration of the request (access log,
exception handlers) and on `request.state.request_id` (route handlers via
`ctx.request`). The ContextVar is reset once the response is produced.
"""

import re
import uuid
from contextvars import ContextVar
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

HEADER_NAME = "X-Request-ID"

request_id_var: ContextVar[str] = ContextVar("request_id", default="")

_CLIENT_ID_RE = re.compile(r"^[A-Za-z0-9._-]{1,64}$")


def new_request_id() -> str:
    return uuid.uuid4().hex[:8]


def accepted_request_id(header_value: Optional[str]) -> str:
    """The client's ID when it is a safe token, otherwise a fresh one."""
    if header_value and _CLIENT_ID_RE.match(header_value):
        return header_value
    return new_request_id()


class RequestIDMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = accepted_request_id(request.headers.get(HEADER_NAME))
        request.state.request_id = rid

        token = request_id_var.set(rid)
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers[HEADER_NAME] = rid
        return response

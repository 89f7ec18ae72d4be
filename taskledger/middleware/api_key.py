"""
TaskLedger Backend — API Key Middleware
========================================

What:  Rejects requests that do not carry a valid `X-Api-Key` header.
How:   Compares the header against the configured keys (settings.api_keys,
       from APP_KEY) in constant time.
When:  Innermost middleware, right before the gateway, so rejected requests
       are still logged and still get an X-Request-ID.

Responses:
    missing header → 401 {"error": "MISSING API KEY", "message": "API KEY not provided"}
    unknown key    → 403 {"error": "INVALID API KEY", "message": "Invalid API KEY"}

Exempt:
    - GET / (API metadata) and /health
    - API documentation (/docs, /redoc, /openapi.json)
    - every OPTIONS request (CORS preflight never carries custom headers)

Startup:
    create_app() validates the configured keys before registering the
    middleware; no keys, or a blank key, raises ValueError there and the app
    is never built. The constructor validates again for keys passed directly.
"""

import logging
import secrets
from enum import Enum
from typing import Iterable, List, Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.types import ASGIApp

from taskledger.config import settings

logger = logging.getLogger(__name__)

HEADER_NAME = "X-Api-Key"


class ApiKeyErrorType(str, Enum):
    MISSING = "MISSING API KEY"
    INVALID = "INVALID API KEY"


def validate_api_keys(keys: Iterable[str]) -> List[str]:
    """Return the keys as a list, or raise ValueError if any is unusable."""
    key_list = list(keys)
    if not key_list:
        raise ValueError("No API keys configured. Set APP_KEY (comma-separated for several keys).")
    for key in key_list:
        if not isinstance(key, str) or not key.strip():
            raise ValueError("Every API key must be a non-empty string.")
    return key_list


class ApiKeyMiddleware(BaseHTTPMiddleware):
    """Header-based API key check for every non-exempt request."""

    EXCLUDED_PATHS = {"/", "/health", "/docs", "/redoc", "/openapi.json"}

    def __init__(self, app: ASGIApp, api_keys: Optional[Iterable[str]] = None):
        super().__init__(app)
        self._api_keys = validate_api_keys(
            settings.api_keys if api_keys is None else api_keys
        )

    def set_valid_api_keys(self, keys: Iterable[str]) -> None:
        """Replace the accepted keys (validated the same way as at startup)."""
        self._api_keys = validate_api_keys(keys)

    def is_valid(self, candidate: str) -> bool:
        # Check every key so timing does not reveal which one matched
        matched = False
        for key in self._api_keys:
            if secrets.compare_digest(candidate.encode(), key.encode()):
                matched = True
        return matched

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.method == "OPTIONS" or request.url.path in self.EXCLUDED_PATHS:
            return await call_next(request)

        api_key = request.headers.get(HEADER_NAME)

        if not api_key:
            return self._reject(ApiKeyErrorType.MISSING, "API KEY not provided", 401)

        if not self.is_valid(api_key):
            client_ip = getattr(request.client, "host", "unknown") if request.client else "unknown"
            logger.warning("Invalid API key from %s on %s %s", client_ip, request.method, request.url.path)
            return self._reject(ApiKeyErrorType.INVALID, "Invalid API KEY", 403)

        return await call_next(request)

    @staticmethod
    def _reject(error_type: ApiKeyErrorType, message: str, status_code: int) -> JSONResponse:
        return JSONResponse(
            status_code=status_code,
            content={"error": error_type.value, "message": message},
        )

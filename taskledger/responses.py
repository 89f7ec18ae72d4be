"""
TaskLedger Backend — JSON Response Envelope
============================================

What:  Builds every JSON body the route handlers and exception handlers send.
How:   Wraps the payload in a fixed envelope:

    {
        "status": 200,
        "timestamp": "2024-01-15T06:00:00-06:00",
        "data": ...
    }

    Error responses add `"error": true` and carry `{"error": "<message>"}`
    (plus optional `details`) as data.

Payload merging (success):
    - dict data:   copied, `message` merged in when given
    - list data:   sent as-is, or wrapped as {"data": [...], "message": ...}
                   when a message is given
    - other data:  wrapped as {"data": value} (+ `message`)

Timestamps use settings.response_timezone (default America/Guatemala) with
second precision and an explicit UTC offset.
"""

from datetime import datetime
from typing import Any, Dict, Optional
from zoneinfo import ZoneInfo

from fastapi.responses import JSONResponse

from taskledger.config import settings


def timestamp() -> str:
    """Current time in the response timezone, ISO 8601 with offset."""
    now = datetime.now(ZoneInfo(settings.response_timezone))
    return now.replace(microsecond=0).isoformat()


def send(
    data: Any,
    status: int = 200,
    error: bool = False,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    """Wrap `data` in the envelope and build the JSONResponse."""
    body: Dict[str, Any] = {
        "status": status,
        "timestamp": timestamp(),
        "data": data,
    }
    if error:
        body["error"] = True
    return JSONResponse(status_code=status, content=body, headers=headers)


def success(data: Any, message: str = "", status: int = 200) -> JSONResponse:
    """Successful response; see module docstring for how `message` is merged."""
    if isinstance(data, dict):
        payload: Any = dict(data)
    elif isinstance(data, list) and not message:
        payload = data
    else:
        payload = {"data": data}

    if message:
        payload["message"] = message
    return send(payload, status)


def error(
    message: str,
    status: int = 400,
    details: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    """Error response with `{"error": message}` as data."""
    payload: Dict[str, Any] = {"error": message}
    if details:
        payload["details"] = details
    return send(payload, status, error=True, headers=headers)

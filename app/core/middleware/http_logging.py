"""HTTP logging middleware.

- Log *metadata only*: request bodies carry canvas snapshots and user-written notes.
- Generate or propagate X-Request-ID for correlation.
- Structured logging using the standard library logger `extra` fields.
"""

from __future__ import annotations

import logging
import re
import time
import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

logger = logging.getLogger("app.http")

_REQUEST_ID_HEADER = "X-Request-ID"
_CLIENT_KEY_HEADER = "X-OpenAI-Key"
_SAFE_REQUEST_ID_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]{0,127}$")


def _get_or_create_request_id(*, request: Request) -> str:
    """Return a safe request id, either propagated or newly generated.

    We only accept a narrow character set and length to avoid log injection and
    other unexpected values. If invalid, we generate a new UUID4.
    """

    candidate = request.headers.get(_REQUEST_ID_HEADER)
    if candidate and _SAFE_REQUEST_ID_PATTERN.fullmatch(candidate):
        return candidate
    return uuid.uuid4().hex


def _safe_route_label(*, request: Request) -> str:
    """
    Return a safe path label for logs.

    Prefer the framework's route template (e.g. /brainstorm/groups) and fall back to
    "unmatched" so unknown paths do not flood the logs.
    """

    route = request.scope.get("route")
    path = getattr(route, "path", None)
    if isinstance(path, str) and path:
        return path
    return "unmatched"


class HttpLoggingMiddleware(BaseHTTPMiddleware):
    """Log request/response metadata and propagate a correlation id.

    IMPORTANT: This middleware intentionally does NOT log:
    - request body / response body (canvas text, LLM output)
    - query string values
    - headers (X-OpenAI-Key carries a user API key)
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = _get_or_create_request_id(request=request)
        started = time.perf_counter()
        # Downstream handlers read the id from request.state for their own log records.
        request.state.request_id = request_id

        def fields(status_code: int) -> dict[str, object]:
            return {
                "request_id": request_id,
                "http_method": request.method,
                "request_path": _safe_route_label(request=request),
                "status_code": status_code,
                "duration_ms": round((time.perf_counter() - started) * 1000.0, 2),
                # Whether the whiteboard supplied its own API key; never the key itself.
                "client_api_key": _CLIENT_KEY_HEADER in request.headers,
            }

        try:
            response = await call_next(request)
        except Exception:  # noqa: BLE001 - we must log unexpected exceptions with stack trace
            logger.exception(
                "Unhandled exception while processing request", extra=fields(500)
            )
            raise

        response.headers[_REQUEST_ID_HEADER] = request_id
        logger.info("Request completed", extra=fields(response.status_code))
        return response

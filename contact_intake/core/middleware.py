"""HTTP middleware for request ID propagation and correlation.

Every response carries the request id (taken from the incoming header or
freshly generated) and the time spent serving it, so a rejected submission
reported by a user can be matched to the corresponding log lines.

Unexpected exceptions are turned into the generic 500 here, while the id is
still bound; Starlette would otherwise answer them outside this middleware,
without the header and with a null ``request_id`` in the body.

Usage:
    app.middleware("http")(request_id_middleware)
"""

from __future__ import annotations

import time
import uuid

from fastapi import Request, Response

from contact_intake.core.config import settings
from contact_intake.core.exception_handlers import general_exception_handler
from contact_intake.core.logging import clear_request_id, set_request_id


def _resolve_request_id(request: Request, header_name: str) -> str:
    incoming = request.headers.get(header_name, "").strip()
    return incoming or str(uuid.uuid4())


async def request_id_middleware(request: Request, call_next) -> Response:
    """Bind a correlation id to the request context and echo it back.

    Args:
        request: The incoming HTTP request object.
        call_next: The next middleware/route handler in the stack.

    Returns:
        Response: The downstream response (or the generic 500 when the
            handler raised) with ``X-Request-ID`` (or the configured header)
            and ``X-Request-Duration-ms`` added.
    """
    header_name = settings.log.request_id_header
    request_id = _resolve_request_id(request, header_name)
    set_request_id(request_id)
    start = time.perf_counter()
    try:
        try:
            response: Response = await call_next(request)
        except Exception as exc:
            response = await general_exception_handler(request, exc)
    finally:
        clear_request_id()

    elapsed_ms = (time.perf_counter() - start) * 1000
    response.headers[header_name] = request_id
    response.headers.setdefault("X-Request-Duration-ms", f"{elapsed_ms:.2f}")
    return response

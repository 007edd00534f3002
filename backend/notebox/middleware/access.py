"""
Notebox Backend - Request Context and Access Log Middleware
=============================================================

What:  Tags every request with a correlation ID and writes one access-log
       line per note operation once the response is ready.
How:   The ID comes from the client's X-Request-ID header or is generated,
       is stored in a ContextVar for exception handlers, and is echoed back
       in the response. The log line names the matched route template
       (`/api/notes/{note_id}`) and the note id separately, so lines for the
       same operation group together regardless of which note they touched.

Example line:
    PUT /api/notes/{note_id} note=6f1c2f4e-... -> 200 in 3.4ms [a1b2c3d4]

Request and response bodies are never logged.
"""

import logging
import time
import uuid
from contextvars import ContextVar
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("notebox.access")

request_id_var: ContextVar[str] = ContextVar("request_id", default="")

# Liveness probes, polled constantly
UNLOGGED_PATHS = frozenset({"/health"})


def route_template(request: Request) -> str:
    """Path pattern of the matched route, or the raw path if none matched."""
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


class AccessLogMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get("X-Request-ID") or uuid.uuid4().hex[:8]
        request_id_var.set(rid)
        request.state.request_id = rid

        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            # The fallback handler outside this middleware builds the 500
            self._log(request, rid, 500, started)
            raise

        response.headers["X-Request-ID"] = rid
        self._log(request, rid, response.status_code, started)
        return response

    def _log(self, request: Request, rid: str, status: int, started: float) -> None:
        if request.url.path in UNLOGGED_PATHS:
            return

        elapsed_ms = (time.perf_counter() - started) * 1000
        route = route_template(request)
        note_id: Optional[str] = request.path_params.get("note_id")

        if status >= 500:
            level = logging.ERROR
        elif status >= 400:
            level = logging.WARNING
        else:
            level = logging.INFO

        target = f"{route} note={note_id}" if note_id else route
        logger.log(
            level,
            "%s %s -> %d in %.1fms [%s]",
            request.method,
            target,
            status,
            elapsed_ms,
            rid,
            extra={
                "request_id": rid,
                "route": route,
                "note_id": note_id,
                "status": status,
                "elapsed_ms": round(elapsed_ms, 2),
            },
        )

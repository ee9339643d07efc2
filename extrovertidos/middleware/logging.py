import logging
import time
import uuid
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
QUIET_PATHS = {"/admin/cache/health"}

class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Tags each request with an id (reusing an inbound X-Request-ID) and logs
    one line per response with the acting user and latency."""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id
        actor = request.headers.get("X-User-Id") or "anonymous"
        route = f"{request.method} {request.url.path}"
        started = time.monotonic()

        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error(
                f"[{request_id}] {route} by {actor} failed: {exc}",
                extra={"request_id": request_id, "actor": actor, "duration_ms": self._elapsed_ms(started)},
            )
            raise

        duration_ms = self._elapsed_ms(started)
        if response.status_code >= 400:
            level = logging.WARNING
        elif request.url.path in QUIET_PATHS:
            level = logging.DEBUG
        else:
            level = logging.INFO
        logger.log(
            level,
            f"[{request_id}] {route} -> {response.status_code} by {actor} in {duration_ms}ms",
            extra={"request_id": request_id, "actor": actor, "status_code": response.status_code, "duration_ms": duration_ms},
        )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response

    @staticmethod
    def _elapsed_ms(started: float) -> float:
        return round((time.monotonic() - started) * 1000, 2)

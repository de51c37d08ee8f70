# Role: Request tracing. Tags every request with a request id, logs start/end/error with timing,
# and returns the id in x-request-id so callers can correlate gateway logs.

import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        request.state.request_id = request_id

        chat_id = request.query_params.get("chatId")
        logger.info("[START] request_id=%s chat_id=%s %s %s", request_id, chat_id, request.method, request.url.path)

        try:
            response = await call_next(request)
        except Exception as e:
            duration_ms = int((time.perf_counter() - start) * 1000)
            logger.error("[ERROR] request_id=%s duration_ms=%s err=%r", request_id, duration_ms, e)
            raise

        duration_ms = int((time.perf_counter() - start) * 1000)
        logger.info(
            "[END]   request_id=%s status=%s duration_ms=%s", request_id, response.status_code, duration_ms
        )

        response.headers["x-request-id"] = request_id
        return response

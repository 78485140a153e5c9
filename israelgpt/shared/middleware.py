import time
import uuid

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from israelgpt.shared.config import logger

REQUEST_ID_HEADER = "X-Request-ID"
PROCESS_TIME_HEADER = "X-Process-Time"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Tags each request with an ID (the caller's X-Request-ID when sent), times it,
    echoes both values as response headers and writes one access line per request.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = request_id
        started = time.perf_counter()

        response = await call_next(request)

        elapsed = time.perf_counter() - started
        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers[PROCESS_TIME_HEADER] = f"{elapsed:.4f}"
        logger.info(
            "%s %s -> %d in %.4fs [%s]",
            request.method, request.url.path, response.status_code, elapsed, request_id,
            extra={
                "req_id": request_id,
                "method": request.method,
                "path": request.url.path,
                "status": response.status_code,
                "duration_sec": round(elapsed, 4),
            },
        )
        return response

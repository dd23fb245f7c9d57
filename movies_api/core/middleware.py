import time
import uuid
import logging
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from movies_api.core.trace import bind_request_id, reset_request_id

alog = logging.getLogger("access")

REQUEST_ID_HEADER = "X-Request-Id"


class RequestContextMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        # берём id от шлюза, если он его прислал
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(
            uuid.uuid4())
        token = bind_request_id(request_id)
        start = time.perf_counter()
        status = 500
        try:
            response = await call_next(request)
            status = response.status_code
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            dur_ms = int((time.perf_counter() - start) * 1000)
            alog.info(
                "access",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "status": status,
                    "latency_ms": dur_ms,
                    "client_ip": request.client.host
                    if request.client else None,
                },
            )
            reset_request_id(token)

import time
import uuid
from contextvars import ContextVar
from typing import Optional

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from config import logger

request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Tags every request with an id and logs its outcome and duration."""
    
    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        token = request_id_var.set(request_id)
        start_time = time.perf_counter()
        
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)
        
        duration_ms = round((time.perf_counter() - start_time) * 1000, 2)
        logger.info(
            "%s %s -> %s in %sms [request_id=%s]",
            request.method, request.url.path, response.status_code, duration_ms, request_id
        )
        
        response.headers["X-Request-ID"] = request_id
        return response


def get_request_id() -> Optional[str]:
    return request_id_var.get()

import time
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from app.core.logger import logger

class LogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start_time = time.perf_counter()

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        path = request.url.path
        if request.url.query:
            path = f"{path}?{request.url.query}"

        # Backend outages surface as 5xx, make them stand out
        log = logger.warning if response.status_code >= 500 else logger.info
        log(
            f"Method: {request.method} | "
            f"Path: {path} | "
            f"Status: {response.status_code} | "
            f"Duration: {duration_ms:.1f}ms"
        )

        return response

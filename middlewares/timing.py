import logging
import time
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

logger = logging.getLogger(__name__)

SLOW_REQUEST_MS = 1000  # 이 이상이면 경고 로그 (주로 Gemini 호출)

class TimingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        latency_ms = int((time.perf_counter() - start) * 1000)
        response.headers["X-Latency-Ms"] = str(latency_ms)
        if latency_ms >= SLOW_REQUEST_MS:
            logger.warning("Slow request %s %s took %dms", request.method, request.url.path, latency_ms)
        return response

import time
import logging
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from jobsolution.config.errors import ErrorMessages

logger = logging.getLogger(__name__)


class TokenBucket:
    """Allows ``capacity`` requests at once, refilled evenly over ``period`` seconds."""

    def __init__(self, capacity: int, period: float, clock=time.monotonic):
        self.capacity = capacity
        self.rate = capacity / period if period > 0 else float("inf")
        self.clock = clock
        self.tokens = float(capacity)
        self.updated_at = clock()

    def consume(self) -> bool:
        now = self.clock()
        self.tokens = min(self.capacity, self.tokens + (now - self.updated_at) * self.rate)
        self.updated_at = now
        if self.tokens >= 1:
            self.tokens -= 1
            return True
        return False


class RateLimitMiddleware(BaseHTTPMiddleware):
    """One bucket shared by every client and route of the server."""

    def __init__(self, app, requests: int, period: float, clock=time.monotonic):
        super().__init__(app)
        self.bucket = TokenBucket(requests, period, clock)

    async def dispatch(self, request: Request, call_next):
        if not self.bucket.consume():
            logger.warning(f"Rate limit exceeded: {request.method} {request.url.path}")
            return JSONResponse(status_code=429, content={"detail": ErrorMessages.RATE_LIMIT_EXCEEDED})
        return await call_next(request)

"""Process-wide rate limiting."""

import logging
import threading
import time
from typing import Callable

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from wacdo.core.exceptions import RateLimitError, error_response

logger = logging.getLogger(__name__)


class TokenBucket:
    """
    Token-bucket limiter shared by every request and every client.

    Holds at most ``burst`` tokens, refilled continuously at ``rate`` tokens
    per second. Each admitted request takes one token.
    """

    def __init__(self, rate: float, burst: int, clock: Callable[[], float] = time.monotonic):
        if rate <= 0 or burst <= 0:
            raise ValueError("rate and burst must be positive")
        self.rate = float(rate)
        self.burst = burst
        self._clock = clock
        self._tokens = float(burst)
        self._updated = clock()
        self._lock = threading.Lock()

    def allow(self) -> bool:
        with self._lock:
            now = self._clock()
            elapsed = max(0.0, now - self._updated)
            self._tokens = min(float(self.burst), self._tokens + elapsed * self.rate)
            self._updated = now

            if self._tokens >= 1.0:
                self._tokens -= 1.0
                return True
            return False


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Rejects requests with 429 once the shared bucket is empty."""

    def __init__(self, app, bucket: TokenBucket):
        super().__init__(app)
        self.bucket = bucket

    async def dispatch(self, request: Request, call_next):
        if not self.bucket.allow():
            logger.warning(f"Rate limit exceeded: {request.method} {request.url.path}")
            return error_response(RateLimitError.status_code, RateLimitError.default_message)
        return await call_next(request)

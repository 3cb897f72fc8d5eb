import logging
import math
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from fastapi import HTTPException, Request, Response, status

logger = logging.getLogger("RateLimiter")

@dataclass(frozen=True)
class RateLimitStatus:
    limit: int
    remaining: int
    reset_seconds: int

    def headers(self) -> Dict[str, str]:
        return {
            "RateLimit-Limit": str(self.limit),
            "RateLimit-Remaining": str(self.remaining),
            "RateLimit-Reset": str(self.reset_seconds),
        }

class RateLimiter:
    """
    Sliding-window limiter, in-memory, keyed by client IP.
    At most `max_requests` per `window_seconds`; excess requests get a 429.
    Clients whose requests have all left the window are forgotten.
    """

    def __init__(self, max_requests: int, window_seconds: float, clock: Callable[[], float] = time.monotonic):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._buckets: Dict[str, List[float]] = {}
        self._last_sweep = clock()

    @property
    def tracked_clients(self) -> int:
        return len(self._buckets)

    def _sweep(self, now: float) -> None:
        expired = [k for k, b in self._buckets.items() if not b or now - b[-1] >= self.window_seconds]
        for key in expired:
            del self._buckets[key]
        if expired:
            logger.debug(f"Dropped {len(expired)} idle clients")

    def _reset_in(self, bucket: List[float], now: float) -> int:
        return max(math.ceil(self.window_seconds - (now - bucket[0])), 1)

    def check(self, key: str) -> RateLimitStatus:
        now = self._clock()
        with self._lock:
            # At most one full sweep per window
            if now - self._last_sweep >= self.window_seconds:
                self._sweep(now)
                self._last_sweep = now

            # Purge entries that fell out of the window
            bucket = [t for t in self._buckets.pop(key, []) if now - t < self.window_seconds]
            if len(bucket) >= self.max_requests:
                self._buckets[key] = bucket
                result = RateLimitStatus(self.max_requests, 0, self._reset_in(bucket, now))
                logger.warning(f"Rate limit exceeded for {key}")
                headers = result.headers()
                headers["Retry-After"] = str(result.reset_seconds)
                raise HTTPException(
                    status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                    detail="Too many requests, please try again later.",
                    headers=headers,
                )
            bucket.append(now)
            self._buckets[key] = bucket
            return RateLimitStatus(self.max_requests, self.max_requests - len(bucket), self._reset_in(bucket, now))

# --- DEPENDENCIES ---
def enforce_rate_limit(request: Request, response: Response) -> None:
    limiter: Optional[RateLimiter] = getattr(request.app.state, "rate_limiter", None)
    if limiter is None:
        return
    client_ip = request.client.host if request.client else "unknown"
    response.headers.update(limiter.check(client_ip).headers())

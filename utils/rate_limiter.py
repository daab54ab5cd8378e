"""Rate limiter for backend calls with RPM pacing and a per-run request cap."""

import logging
import time
from threading import Lock
from typing import Optional

from core.errors import RateLimitExceeded

logger = logging.getLogger(__name__)


class RateLimiter:
    """
    Rate limiter for LLM API calls.

    Enforces:
    - RPM (Requests Per Minute) limit with artificial delays
    - An optional hard cap on the number of requests in one run
    """

    def __init__(self, rpm_limit: int = 60, max_requests: Optional[int] = None):
        """
        Initialize rate limiter.

        Args:
            rpm_limit: Requests per minute limit
            max_requests: Total requests allowed before RateLimitExceeded (None for no cap)
        """
        self.rpm_limit = rpm_limit
        self.max_requests = max_requests

        # Thread safety
        self.lock = Lock()

        self.request_times: list[float] = []
        self.total_count = 0

    def wait_if_needed(self):
        """
        Wait if needed to stay under RPM limit.

        Raises RateLimitExceeded once the per-run cap is reached.
        """
        with self.lock:
            if self.max_requests is not None and self.total_count >= self.max_requests:
                logger.error(f"[RATE LIMIT] Request cap of {self.max_requests} reached")
                raise RateLimitExceeded(
                    f"Request cap of {self.max_requests} reached for this run"
                )

            now = time.time()

            # Remove requests older than 1 minute
            cutoff = now - 60
            self.request_times = [t for t in self.request_times if t > cutoff]

            if len(self.request_times) >= self.rpm_limit:
                # Wait until oldest request is > 1 minute old
                oldest = self.request_times[0]
                wait_time = 60 - (now - oldest) + 0.1

                if wait_time > 0:
                    logger.debug(
                        f"[RATE LIMIT] Sleeping {wait_time:.1f}s to stay under {self.rpm_limit} RPM"
                    )
                    time.sleep(wait_time)
                    now = time.time()
                    self.request_times = [t for t in self.request_times if t > now - 60]

            self.request_times.append(now)
            self.total_count += 1

            logger.debug(
                f"[RATE LIMIT] Request #{self.total_count} "
                f"({len(self.request_times)}/{self.rpm_limit} this minute)"
            )

    def get_stats(self) -> dict:
        """Get current rate limit statistics."""
        with self.lock:
            cutoff = time.time() - 60
            recent_requests = [t for t in self.request_times if t > cutoff]

            return {
                "rpm_current": len(recent_requests),
                "rpm_limit": self.rpm_limit,
                "total_requests": self.total_count,
                "max_requests": self.max_requests,
            }


def build_rate_limiter(config) -> Optional[RateLimiter]:
    """Create a limiter from ``config.rate_limit``, or None when pacing is disabled."""
    if not config.rate_limit.enabled:
        return None
    limiter = RateLimiter(
        rpm_limit=config.rate_limit.rpm_limit,
        max_requests=config.rate_limit.max_requests,
    )
    logger.info(
        f"[RATE LIMIT] Initialized: {limiter.rpm_limit} RPM, cap {limiter.max_requests}"
    )
    return limiter

"""
ThreadBoard Rate Limiter

Limits login and registration attempts per client address.
"""

import time
import logging
import threading
from dataclasses import dataclass
from typing import Dict

logger = logging.getLogger(__name__)


@dataclass
class RateBucket:
    """Token bucket for rate limiting."""
    tokens: float
    last_update: float
    max_tokens: int
    refill_rate: float  # tokens per second

    def consume(self, tokens: int = 1) -> bool:
        """
        Try to consume tokens from the bucket.

        Returns True if tokens were consumed, False if rate limited.
        """
        now = time.time()

        elapsed = now - self.last_update
        self.tokens = min(
            self.max_tokens,
            self.tokens + (elapsed * self.refill_rate)
        )
        self.last_update = now

        if self.tokens >= tokens:
            self.tokens -= tokens
            return True

        return False

    def time_until_ready(self, tokens: int = 1) -> float:
        """Return seconds until enough tokens are available."""
        if self.tokens >= tokens:
            return 0.0

        needed = tokens - self.tokens
        return needed / self.refill_rate


class RateLimiter:
    """
    Per-client token bucket limiter.

    Each client gets `attempts_per_minute` tokens, refilled evenly over a
    minute. Shared by request threads, so bucket access is locked.
    """

    CLEANUP_INTERVAL = 300

    def __init__(self, attempts_per_minute: int = 5):
        self.limit = attempts_per_minute
        self._buckets: Dict[str, RateBucket] = {}
        self._lock = threading.Lock()
        self._last_cleanup = time.time()

        logger.debug(f"RateLimiter initialized: {attempts_per_minute}/min")

    def _get_bucket(self, client: str) -> RateBucket:
        """Get or create a rate bucket for a client."""
        bucket = self._buckets.get(client)
        if bucket is None:
            bucket = RateBucket(
                tokens=self.limit,
                last_update=time.time(),
                max_tokens=self.limit,
                refill_rate=self.limit / 60.0
            )
            self._buckets[client] = bucket
        return bucket

    def check(self, client: str) -> bool:
        """
        Check if an attempt from this client should be allowed.

        Returns:
            True if allowed, False if rate limited
        """
        if self.limit <= 0:
            return True

        if time.time() - self._last_cleanup > self.CLEANUP_INTERVAL:
            self.cleanup()

        with self._lock:
            allowed = self._get_bucket(client).consume()

        if not allowed:
            logger.warning(f"Rate limit exceeded for {client}")
        return allowed

    def time_until_allowed(self, client: str) -> float:
        """Return seconds until the client may try again."""
        with self._lock:
            return self._get_bucket(client).time_until_ready()

    def cleanup(self, max_age_seconds: int = 600):
        """Remove buckets that have been idle for max_age_seconds."""
        now = time.time()
        with self._lock:
            self._last_cleanup = now
            stale = [
                client for client, bucket in self._buckets.items()
                if now - bucket.last_update > max_age_seconds
            ]
            for client in stale:
                del self._buckets[client]

        if stale:
            logger.debug(f"Cleaned up {len(stale)} stale rate limit buckets")

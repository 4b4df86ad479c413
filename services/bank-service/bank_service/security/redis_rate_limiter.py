"""Redis-backed sliding window limiter for form submissions."""

from __future__ import annotations

import math
import time
import uuid

from redis import Redis


class RedisSlidingWindowRateLimiter:
    """Sliding window limiter shared by every service replica.

    Each submission is a member of a sorted set scored by its arrival time in
    milliseconds. A submission is added optimistically inside a transaction
    and withdrawn again when the resulting count is over the limit.
    """

    def __init__(
        self,
        client: Redis,
        *,
        max_requests: int,
        window_seconds: int,
        key_prefix: str = "bank:submissions"
    ) -> None:
        """Initialise the Redis client and window configuration."""
        self._client = client
        self._max_requests = max_requests
        self._window_ms = window_seconds * 1000
        self._key_prefix = key_prefix

    def _key(self, key: str) -> str:
        return f"{self._key_prefix}:{key}"

    def allow(self, key: str) -> bool:
        """Record a submission for ``key`` and return ``False`` if it exceeds the limit."""
        now_ms = int(time.time() * 1000)
        redis_key = self._key(key)
        member = f"{now_ms}:{uuid.uuid4().hex}"

        pipe = self._client.pipeline(transaction=True)
        pipe.zremrangebyscore(redis_key, 0, now_ms - self._window_ms)
        pipe.zadd(redis_key, {member: now_ms})
        pipe.zcard(redis_key)
        pipe.pexpire(redis_key, self._window_ms)
        _, _, count, _ = pipe.execute()

        if int(count) > self._max_requests:
            self._client.zrem(redis_key, member)
            return False
        return True

    def retry_after(self, key: str) -> int:
        """Seconds until the oldest recorded submission leaves the window, at least one."""
        now_ms = int(time.time() * 1000)
        oldest = self._client.zrange(self._key(key), 0, 0, withscores=True)
        if not oldest:
            return 1
        _, score = oldest[0]
        remaining_ms = int(score) + self._window_ms - now_ms
        return max(1, math.ceil(remaining_ms / 1000))

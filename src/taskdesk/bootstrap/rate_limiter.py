"""Fixed-window admission control for the bootstrap endpoint.

A fixed-window counter, not a sliding log or token bucket: a client can burst
up to twice the quota across a window boundary. Each distinct key costs one
record and nothing sweeps stale records; the store decides their lifetime.

Each check is a read followed by a write. A lock serializes checks within one
process. Instances sharing a Redis store are not serialized against each
other: two instances that read the same count in the same instant both admit
their request, so across N instances a key can see up to N - 1 extra requests
per window.
"""

from __future__ import annotations

import logging
import math
import threading
import time
from typing import Callable

from taskdesk.core.protocols import IRateLimitStore
from taskdesk.models.rate_limit import RateLimitRecord

logger = logging.getLogger(__name__)

WINDOW_SECONDS = 60
MAX_REQUESTS_PER_WINDOW = 5


class FixedWindowRateLimiter:
    """Counts requests per key inside fixed windows that open on first use."""

    def __init__(
        self,
        store: IRateLimitStore,
        *,
        max_requests: int = MAX_REQUESTS_PER_WINDOW,
        window_seconds: int = WINDOW_SECONDS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._store = store
        self._max_requests = max_requests
        self._window_seconds = window_seconds
        self._clock = clock
        self._lock = threading.Lock()

    def is_limited(self, key: str) -> bool:
        """Record one request for ``key`` and report whether it must be rejected.

        A rejected request does not count against the window. Safe to call
        from several worker threads at once.
        """
        with self._lock:
            return self._check(key)

    def _check(self, key: str) -> bool:
        now = self._clock()
        record = self._store.get(key)

        if record is None or now > record.window_reset_at:
            fresh = RateLimitRecord(key=key, count=1, window_reset_at=now + self._window_seconds)
            self._store.put(fresh, self._window_seconds)
            return False

        if record.count >= self._max_requests:
            logger.debug("Rate limit hit for %s (%d requests)", key, record.count)
            return True

        remaining = max(1, math.ceil(record.window_reset_at - now))
        self._store.put(record.model_copy(update={"count": record.count + 1}), remaining)
        return False

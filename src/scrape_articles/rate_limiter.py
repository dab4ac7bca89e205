"""Admission gate and request spacing for outbound article fetches."""

import logging
import threading
import time
from contextlib import contextmanager
from typing import Callable, Iterator

logger = logging.getLogger(__name__)


class RateLimiter:
    """Bounds concurrent fetches and spaces out fetch starts.

    At most max_concurrent callers hold a slot at once. While holding a slot,
    a caller waits until min_interval seconds have passed since the previous
    fetch start; the wait happens under a lock, so starts are serialized.
    """

    def __init__(
        self,
        max_concurrent: int = 2,
        min_interval: float = 0.5,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if max_concurrent < 1:
            raise ValueError("max_concurrent must be at least 1")
        self.max_concurrent = max_concurrent
        self.min_interval = min_interval
        self._gate = threading.BoundedSemaphore(max_concurrent)
        self._lock = threading.Lock()
        self._clock = clock
        self._sleep = sleep
        self._last_request: float | None = None

    @contextmanager
    def slot(self) -> Iterator[None]:
        """Hold an admission slot for the duration of one fetch."""
        with self._gate:
            self._wait_for_spacing()
            yield

    def _wait_for_spacing(self) -> None:
        with self._lock:
            if self._last_request is not None:
                elapsed = self._clock() - self._last_request
                if elapsed < self.min_interval:
                    delay = self.min_interval - elapsed
                    logger.debug("Rate limiting fetch for %.3fs", delay)
                    self._sleep(delay)
            self._last_request = self._clock()

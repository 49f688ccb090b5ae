from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import ExitStack, contextmanager
from datetime import date


class DateLocks:
    """One lock per calendar date, acquired in date order to avoid deadlocks."""

    def __init__(self) -> None:
        self._locks: dict[date, threading.Lock] = {}
        self._lock_lock = threading.Lock()  # Lock for managing locks dict

    def _get_lock(self, day: date) -> threading.Lock:
        with self._lock_lock:
            if day not in self._locks:
                self._locks[day] = threading.Lock()
            return self._locks[day]

    @contextmanager
    def hold(self, *dates: date) -> Iterator[None]:
        with ExitStack() as stack:
            for day in sorted(set(dates)):
                stack.enter_context(self._get_lock(day))
            yield

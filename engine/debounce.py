"""Debouncing for high-frequency operator input such as repeated grid clicks."""

import time
from typing import Callable, Dict, Hashable

from config.defaults import CLICK_DEBOUNCE_SECONDS


class DebouncedEvent:
    """Lets an event through at most once per interval for each key.

    One instance is created per operator session and handed to whatever
    consumes the clicks.
    """

    def __init__(self, interval_seconds: float = CLICK_DEBOUNCE_SECONDS,
                 clock: Callable[[], float] = time.monotonic):
        self.interval_seconds = interval_seconds
        self._clock = clock
        self._last_fired: Dict[Hashable, float] = {}

    def should_fire(self, key: Hashable = None) -> bool:
        now = self._clock()
        last = self._last_fired.get(key)
        if last is not None and now - last < self.interval_seconds:
            return False
        self._last_fired[key] = now
        return True

    def reset(self):
        self._last_fired.clear()

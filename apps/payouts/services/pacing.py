from __future__ import annotations

import time
from typing import Callable, Optional


class Pacer:
    def wait(self) -> float:
        raise NotImplementedError


class FixedIntervalPacer(Pacer):
    """
    Keeps successive calls at least ``interval`` seconds apart (start to start).

    The first call returns immediately. ``wait`` returns the number of seconds
    actually slept.
    """

    def __init__(
        self,
        interval: float,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if interval < 0:
            raise ValueError("interval must be non-negative")
        self.interval = float(interval)
        self._clock = clock
        self._sleep = sleep
        self._last: Optional[float] = None

    def wait(self) -> float:
        now = self._clock()
        slept = 0.0
        if self._last is not None:
            remaining = self._last + self.interval - now
            if remaining > 0:
                self._sleep(remaining)
                slept = remaining
                now = self._clock()
        self._last = now
        return slept

# opmode_host/core/clock.py
"""
Time sources for OpModes.

Everything that waits goes through a clock so the same OpMode code runs
against wall time on a robot and against simulated time in tests.
"""
from __future__ import annotations

import heapq
import itertools
import threading
import time
from typing import Callable, List, Optional, Tuple


class MonotonicClock:
    """Wall-clock time from ``time.monotonic()``."""

    def now(self) -> float:
        return time.monotonic()

    def sleep(self, seconds: float, wake: Optional[threading.Event] = None) -> None:
        """Block for ``seconds``; returns early if ``wake`` gets set."""
        if seconds <= 0:
            return
        if wake is not None:
            wake.wait(seconds)
        else:
            time.sleep(seconds)


class SimulatedClock:
    """
    Deterministic clock that only advances when slept on.

    ``call_at`` schedules a callback for a simulated instant; callbacks fire
    in time order as ``sleep``/``advance`` move past them, which lets tests
    press "Stop" at an exact point of a run.
    """

    def __init__(self, start: float = 0.0) -> None:
        self._now = float(start)
        self._lock = threading.Lock()
        self._seq = itertools.count()
        self._pending: List[Tuple[float, int, Callable[[], None]]] = []

    def now(self) -> float:
        with self._lock:
            return self._now

    def call_at(self, when: float, callback: Callable[[], None]) -> None:
        with self._lock:
            heapq.heappush(self._pending, (float(when), next(self._seq), callback))

    def call_later(self, delay: float, callback: Callable[[], None]) -> None:
        self.call_at(self.now() + delay, callback)

    def advance(self, seconds: float) -> None:
        if seconds < 0:
            raise ValueError("cannot move a clock backwards")
        target = self.now() + seconds

        while True:
            with self._lock:
                if not self._pending or self._pending[0][0] > target:
                    self._now = target
                    return
                when, _, cb = heapq.heappop(self._pending)
                self._now = max(self._now, when)
            cb()

    def sleep(self, seconds: float, wake: Optional[threading.Event] = None) -> None:
        # A stop set by a scheduled callback is seen by the caller's next check.
        if seconds > 0:
            self.advance(seconds)


class ElapsedTime:
    """Stopwatch on a clock, started at construction."""

    def __init__(self, clock) -> None:
        self._clock = clock
        self._start = clock.now()

    def reset(self) -> None:
        self._start = self._clock.now()

    @property
    def start_time(self) -> float:
        return self._start

    def seconds(self) -> float:
        return self._clock.now() - self._start

    def milliseconds(self) -> float:
        return self.seconds() * 1000.0

    def __repr__(self) -> str:
        return f"ElapsedTime({self.seconds():.3f}s)"

# opmode_host/core/cancellation.py
"""
Cooperative cancellation for OpModes.

A ``CancellationToken`` is shared by the lifecycle host and the running
OpMode. It is cancelled when "Stop" is pressed or when the autonomous time
limit runs out. Waits report cancellation as a ``WaitResult`` that callers
check; ``wait_until_or_raise`` turns it into ``StopRequested`` for code that
would rather unwind the whole call chain in one go.
"""
from __future__ import annotations

import threading
from enum import Enum
from typing import Optional

from .clock import MonotonicClock


class StopRequested(Exception):
    """Stop was pressed or the time limit expired; the robot should halt now."""


class WaitResult(Enum):
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @property
    def cancelled(self) -> bool:
        return self is WaitResult.CANCELLED

    def raise_if_cancelled(self) -> "WaitResult":
        if self is WaitResult.CANCELLED:
            raise StopRequested()
        return self


class CancellationToken:
    def __init__(
        self,
        clock=None,
        poll_interval_s: float = 0.01,
        stop_event: Optional[threading.Event] = None,
    ) -> None:
        if poll_interval_s <= 0:
            raise ValueError("poll_interval_s must be positive")
        self.clock = clock or MonotonicClock()
        self.poll_interval_s = float(poll_interval_s)
        self._stop = stop_event or threading.Event()
        self._deadline: Optional[float] = None

    # ------------------------------------------------------------------ state

    def cancel(self) -> None:
        self._stop.set()

    def set_deadline(self, deadline: Optional[float]) -> None:
        """Cancel automatically once the clock reaches ``deadline``."""
        self._deadline = deadline

    @property
    def deadline(self) -> Optional[float]:
        return self._deadline

    @property
    def stop_event(self) -> threading.Event:
        return self._stop

    def is_cancelled(self) -> bool:
        if self._stop.is_set():
            return True
        return self._deadline is not None and self.clock.now() >= self._deadline

    def raise_if_cancelled(self) -> None:
        if self.is_cancelled():
            raise StopRequested()

    # ------------------------------------------------------------------ waits

    def sleep_until(self, deadline: float) -> WaitResult:
        """
        Block until the clock reaches ``deadline`` or the token is cancelled.

        Each step is at most one poll interval (and never past the time
        limit), so cancellation is seen within one interval of being raised.
        """
        while True:
            if self.is_cancelled():
                return WaitResult.CANCELLED

            now = self.clock.now()
            remaining = deadline - now
            if remaining <= 0:
                return WaitResult.COMPLETED

            step = min(remaining, self.poll_interval_s)
            if self._deadline is not None:
                step = min(step, max(self._deadline - now, 0.0))
            self.clock.sleep(step, wake=self._stop)

    def sleep(self, seconds: float) -> WaitResult:
        return self.sleep_until(self.clock.now() + seconds)

    def wait_until_or_raise(self, deadline: float) -> None:
        self.sleep_until(deadline).raise_if_cancelled()

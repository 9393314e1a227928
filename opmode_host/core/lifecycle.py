# opmode_host/core/lifecycle.py
"""
OpMode lifecycle: INIT -> RUNNING -> STOPPED.

``LifecycleHost`` plays the part of the driver station: it owns the
start/stop buttons and the autonomous timer. OpModes only ever ask it
questions ("am I active?", "was stop pressed?") or block in
``wait_for_start()``.
"""
from __future__ import annotations

import logging
import sys
import threading
from enum import Enum
from typing import TYPE_CHECKING, List, Optional

from .cancellation import CancellationToken, WaitResult
from .event_bus import EventBus

if TYPE_CHECKING:
    from .runtime import OpModeRuntime

log = logging.getLogger(__name__)

TOPIC_STATE = "opmode.state"


class OpModeState(Enum):
    IDLE = "idle"
    INIT = "init"
    RUNNING = "running"
    STOPPED = "stopped"


class LifecycleHost:
    def __init__(
        self,
        token: CancellationToken,
        bus: Optional[EventBus] = None,
        auto_start: bool = True,
        time_limit_s: Optional[float] = None,
    ) -> None:
        self.token = token
        self.clock = token.clock
        self.bus = bus
        self.auto_start = auto_start
        self.time_limit_s = time_limit_s
        self.opmode_name = ""
        self._started = threading.Event()
        self._state = OpModeState.IDLE

    @property
    def state(self) -> OpModeState:
        return self._state

    def _set_state(self, state: OpModeState) -> None:
        if state is self._state:
            return
        self._state = state
        log.info("%s -> %s", self.opmode_name or "opmode", state.name)
        if self.bus is not None:
            self.bus.publish(TOPIC_STATE, {"opmode": self.opmode_name, "state": state.name})

    def enter_init(self, opmode_name: str) -> None:
        self.opmode_name = opmode_name
        self._set_state(OpModeState.INIT)

    def mark_stopped(self) -> None:
        self._set_state(OpModeState.STOPPED)

    # ---------------------------------------------------------------- buttons

    def request_start(self) -> None:
        if self._started.is_set() or self.token.is_cancelled():
            return
        if self.time_limit_s is not None:
            self.token.set_deadline(self.clock.now() + self.time_limit_s)
        self._started.set()
        self._set_state(OpModeState.RUNNING)

    def request_stop(self) -> None:
        if not self.token.stop_event.is_set():
            log.info("stop requested for %s", self.opmode_name or "opmode")
        self.token.cancel()

    # ------------------------------------------------------------- predicates

    def is_started(self) -> bool:
        return self._started.is_set()

    def is_stop_requested(self) -> bool:
        return self.token.is_cancelled()

    def is_active(self) -> bool:
        return self.is_started() and not self.is_stop_requested()

    def wait_for_start(self) -> None:
        """Block until start is pressed. Also returns if stop is pressed first."""
        if self.auto_start:
            self.request_start()
        while not self.is_started() and not self.is_stop_requested():
            self.clock.sleep(self.token.poll_interval_s, wake=self.token.stop_event)


class OpMode:
    """Base for every OpMode: gives access to the robot's runtime."""

    def __init__(self, runtime: "OpModeRuntime") -> None:
        self.runtime = runtime
        self.settings = runtime.settings
        self.hardware_map = runtime.hardware_map
        self.telemetry = runtime.telemetry
        self.clock = runtime.clock
        self.host = runtime.host
        self.log = logging.getLogger(f"opmode_host.opmodes.{type(self).__name__}")
        self._logged_faults: List[BaseException] = []

    def log_fault(self, msg: str = "Unexpected exception") -> None:
        """Log the exception being handled, with its traceback. Call from an except block."""
        self.log.exception(msg)
        exc = sys.exc_info()[1]
        if exc is not None:
            self._logged_faults.append(exc)

    def has_logged(self, exc: BaseException) -> bool:
        return any(exc is e for e in self._logged_faults)


class LinearOpMode(OpMode):
    """An OpMode written as one straight-line script in ``run_opmode()``."""

    def run_opmode(self) -> None:
        raise NotImplementedError

    def wait_for_start(self) -> None:
        self.host.wait_for_start()

    def op_mode_is_active(self) -> bool:
        return self.host.is_active()

    def is_stop_requested(self) -> bool:
        return self.host.is_stop_requested()

    def sleep(self, seconds: float) -> WaitResult:
        return self.host.token.sleep(seconds)


class IterativeOpMode(OpMode):
    """An OpMode driven by the host: ``loop()`` runs once per tick until stopped."""

    def init(self) -> None:
        pass

    def init_loop(self) -> None:
        pass

    def start(self) -> None:
        pass

    def loop(self) -> None:
        raise NotImplementedError

    def stop(self) -> None:
        pass

# opmode_host/core/runner.py

from __future__ import annotations

import logging
from typing import Optional, Type

from .cancellation import StopRequested
from .lifecycle import IterativeOpMode, LinearOpMode, OpMode
from .registry import OpModeKind, opmode_info
from .runtime import OpModeRuntime

log = logging.getLogger(__name__)


class OpModeRunner:
    """
    Runs one OpMode through its lifecycle on a runtime.

    Autonomous OpModes get the autonomous time limit from start; teleop
    OpModes run until stop (or ``duration_s``, if given). After a normal
    finish or a stop every motor is set to zero. An unexpected exception is
    logged and re-raised with the actuators left alone: there is no safe
    guess about what a broken OpMode was doing.
    """

    def __init__(self, runtime: OpModeRuntime) -> None:
        self.runtime = runtime

    def run(self, opmode_cls: Type[OpMode], duration_s: Optional[float] = None) -> OpMode:
        rt = self.runtime
        host = rt.host
        info = opmode_info(opmode_cls)

        limit = rt.settings.lifecycle.autonomous_time_limit_s if info.kind is OpModeKind.AUTONOMOUS else None
        if duration_s is not None:
            limit = duration_s if limit is None else min(limit, duration_s)
        host.time_limit_s = limit

        opmode = opmode_cls(rt)
        host.enter_init(info.name)

        try:
            if isinstance(opmode, LinearOpMode):
                opmode.run_opmode()
            elif isinstance(opmode, IterativeOpMode):
                self._run_iterative(opmode)
            else:
                raise TypeError(f"{opmode_cls.__name__} is neither a LinearOpMode nor an IterativeOpMode")
        except StopRequested:
            log.info("%s: stop request reached the runner", info.name)
        except KeyboardInterrupt:
            log.warning("%s: interrupted, stopping", info.name)
            host.request_stop()
        except Exception as e:
            if opmode.has_logged(e):
                log.error("%s: unexpected exception %s, re-raising", info.name, type(e).__name__)
            else:
                log.exception("%s: unexpected exception", info.name)
            host.mark_stopped()
            raise

        rt.hardware_map.stop_all_motors()
        host.mark_stopped()
        return opmode

    def _run_iterative(self, opmode: IterativeOpMode) -> None:
        host = self.runtime.host
        token = host.token
        interval = self.runtime.settings.lifecycle.loop_interval_s

        opmode.init()

        if host.auto_start:
            host.request_start()
        while not host.is_started() and not host.is_stop_requested():
            opmode.init_loop()
            token.sleep(interval)

        if host.is_started():
            opmode.start()
            next_tick = host.clock.now()
            while host.is_active():
                opmode.loop()
                next_tick += interval
                token.sleep_until(next_tick)

        opmode.stop()

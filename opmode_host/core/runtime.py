# opmode_host/core/runtime.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .cancellation import CancellationToken
from .clock import MonotonicClock
from .event_bus import EventBus
from .lifecycle import LifecycleHost
from .settings import HostSettings

from ..hardware.hardware_map import HardwareMap, build_hardware_map
from ..logger.logger import OpModeLogBundle
from ..telemetry.sink import Telemetry


@dataclass
class OpModeRuntime:
    """
    Everything one OpMode run needs, wired once and passed by reference:
      - settings from the robot profile
      - one EventBus shared by telemetry, lifecycle and recorders
      - the clock + cancellation token every wait goes through
      - the hardware map (motors, sensors)
    """
    settings: HostSettings
    bus: EventBus
    clock: Any
    token: CancellationToken
    host: LifecycleHost
    hardware_map: HardwareMap
    telemetry: Telemetry
    logs: Optional[OpModeLogBundle] = None


def build_runtime(
    settings: Optional[HostSettings] = None,
    profile: str = "default",
    clock: Any = None,
    hardware_map: Optional[HardwareMap] = None,
    bus: Optional[EventBus] = None,
    logs: Optional[OpModeLogBundle] = None,
) -> OpModeRuntime:
    """
    Build a runtime for one run.

    Settings come from ``profile`` unless given. The hardware map is built
    from the profile unless one is passed in (tests pass scripted devices).
    """
    settings = settings or HostSettings.load(profile)
    clock = clock or MonotonicClock()
    bus = bus or EventBus()

    token = CancellationToken(clock=clock, poll_interval_s=settings.lifecycle.poll_interval_s)
    host = LifecycleHost(token, bus=bus, auto_start=settings.lifecycle.auto_start)

    if hardware_map is None:
        hardware_map = build_hardware_map(settings.hardware, settings.sim, clock=clock)

    return OpModeRuntime(
        settings=settings,
        bus=bus,
        clock=clock,
        token=token,
        host=host,
        hardware_map=hardware_map,
        telemetry=Telemetry(bus, clock=clock),
        logs=logs,
    )

# opmode_host/runners/run_opmode.py
"""
Run one of the example OpModes against the configured (simulated) hardware.

Usage:
    opmode-host --list
    opmode-host ColorSensorTelemetry --duration 2 --show-telemetry
    opmode-host AutonomousElapsedTimeBoxPattern --sim-time
    opmode-host AutonomousStopImmediately --record
"""
from __future__ import annotations

import argparse
import os
import sys
import threading
from dataclasses import replace
from typing import List, Optional

import opmode_host.opmodes  # noqa: F401  (registers the example OpModes)
from opmode_host.core.clock import MonotonicClock, SimulatedClock
from opmode_host.core.registry import OpModeKind, default_registry
from opmode_host.core.runner import OpModeRunner
from opmode_host.core.runtime import build_runtime
from opmode_host.core.settings import HostSettings
from opmode_host.logger.logger import OpModeLogBundle
from opmode_host.telemetry.recorder import TelemetryRecorder
from opmode_host.telemetry.sink import TOPIC_FRAME, TelemetryFrame


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="opmode-host", description="Run an example OpMode")
    p.add_argument("opmode", nargs="?", help="OpMode name (see --list)")
    p.add_argument("--list", action="store_true", help="List available OpModes and exit")
    p.add_argument("--profile", default=os.getenv("OPMODE_PROFILE", "default"),
                   help="Robot profile name (config/robot_profile_<name>.yaml)")
    p.add_argument("--config", default=None, help="Path to a robot profile YAML (overrides --profile)")
    p.add_argument("--duration", type=float, default=None, help="Stop after this many seconds")
    p.add_argument("--sim-time", action="store_true", help="Use simulated time (runs as fast as possible)")
    p.add_argument("--show-telemetry", action="store_true", help="Print telemetry frames")
    p.add_argument("--record", action="store_true", help="Write telemetry + state events to JSONL")
    p.add_argument("--log-dir", default=None, help="Override the profile's log directory")
    p.add_argument("--console-log", action="store_true", help="Also log to the console")
    p.add_argument("--red", type=int, default=None, help="Simulated color sensor red")
    p.add_argument("--green", type=int, default=None, help="Simulated color sensor green")
    p.add_argument("--blue", type=int, default=None, help="Simulated color sensor blue")
    p.add_argument("--alpha", type=int, default=None, help="Simulated color sensor alpha")
    return p


def _print_frame(frame: TelemetryFrame) -> None:
    print(f"--- telemetry #{frame.seq} t={frame.ts:.2f}s")
    for line in frame.lines():
        print(f"    {line}")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if args.list:
        for info in default_registry.available():
            print(f"{info.kind.value:<11} {info.name:<34} {info.description}")
        return 0

    if not args.opmode:
        print("error: an OpMode name is required (see --list)", file=sys.stderr)
        return 2

    try:
        info = default_registry.get(args.opmode)
    except KeyError as e:
        print(f"error: {e.args[0]}", file=sys.stderr)
        return 2

    if args.sim_time and info.kind is OpModeKind.TELEOP and args.duration is None:
        print("error: teleop OpModes under --sim-time need --duration", file=sys.stderr)
        return 2

    settings = HostSettings.from_file(args.config) if args.config else HostSettings.load(args.profile)
    for channel in ("red", "green", "blue", "alpha"):
        value = getattr(args, channel)
        if value is not None:
            setattr(settings.sim, channel, value)

    log_cfg = replace(
        settings.logging,
        log_dir=args.log_dir or settings.logging.log_dir,
        console=args.console_log or settings.logging.console,
    )
    try:
        logs = OpModeLogBundle(info.name, log_cfg)
    except ValueError as e:
        print(f"error: logging: {e}", file=sys.stderr)
        return 2

    clock = SimulatedClock() if args.sim_time else MonotonicClock()
    runtime = build_runtime(settings=settings, clock=clock, logs=logs)

    if args.show_telemetry:
        runtime.bus.subscribe(TOPIC_FRAME, _print_frame)

    recorder = TelemetryRecorder(runtime.bus, logs.events) if args.record else None

    if not settings.lifecycle.auto_start:
        if args.sim_time:
            print("error: --sim-time needs lifecycle.auto_start", file=sys.stderr)
            logs.close()
            return 2

        def _wait_for_enter() -> None:
            try:
                input("Press Enter to start...")
            except EOFError:
                runtime.host.request_stop()
                return
            runtime.host.request_start()

        threading.Thread(target=_wait_for_enter, daemon=True).start()

    print(f"Running {info.name} ({info.kind.value}); Ctrl+C to stop")
    try:
        OpModeRunner(runtime).run(info.cls, duration_s=args.duration)
    finally:
        if recorder is not None:
            recorder.detach()
        logs.close()

    print("Stopped. Final motor powers:")
    for m in runtime.hardware_map.motors:
        print(f"    {m.name}: {m.power:+.2f}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

#!/usr/bin/env python3
"""
Example 04: Stop Immediately

Demonstrates:
- StopRequested unwinding a deep chain of timed waits
- The 30 s autonomous timer cancelling an OpMode that runs too long
- Pressing "Stop" early (--stop-at)

Usage:
    python 04_stop_immediately.py
    python 04_stop_immediately.py --stop-at 7.3
"""
import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from opmode_host.core.clock import SimulatedClock
from opmode_host.core.runner import OpModeRunner
from opmode_host.core.runtime import build_runtime
from opmode_host.opmodes import AutonomousStopImmediately


def main():
    p = argparse.ArgumentParser()
    p.add_argument("--stop-at", type=float, default=None, help="Press Stop at this (simulated) time")
    args = p.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(name)s: %(message)s")

    clock = SimulatedClock()
    runtime = build_runtime(clock=clock)
    if args.stop_at is not None:
        clock.call_at(args.stop_at, runtime.host.request_stop)

    opmode = OpModeRunner(runtime).run(AutonomousStopImmediately)

    print()
    print(f"Stopped at t={clock.now():.2f}s after {len(opmode.driver.completed)} legs")
    print("Motor powers:", {m.name: m.power for m in runtime.hardware_map.motors})


if __name__ == "__main__":
    main()

#!/usr/bin/env python3
"""
Example 03: Elapsed-Time Box Pattern

Demonstrates:
- A linear autonomous OpMode built from timed moves
- Motor power history recorded by the simulated motors
- Tuning the box from the robot profile

Usage:
    python 03_box_pattern.py            # simulated time (instant)
    python 03_box_pattern.py --realtime # wall-clock time (12 s)
"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from opmode_host.core.clock import MonotonicClock, SimulatedClock
from opmode_host.core.runner import OpModeRunner
from opmode_host.core.runtime import build_runtime
from opmode_host.core.settings import HostSettings
from opmode_host.opmodes import AutonomousElapsedTimeBoxPattern


def main():
    realtime = "--realtime" in sys.argv[1:]
    clock = MonotonicClock() if realtime else SimulatedClock()

    settings = HostSettings.load("default")
    runtime = build_runtime(settings=settings, clock=clock)
    t0 = clock.now()

    opmode = OpModeRunner(runtime).run(AutonomousElapsedTimeBoxPattern)

    print("=" * 60)
    print("Elapsed-Time Box Pattern")
    print("=" * 60)
    for move in opmode.driver.completed:
        print(f"   {move.kind.value:<10} {move.duration_s:.1f}s @ {move.power:+.1f}")

    print("\nmFL power changes:")
    for ts, raw in runtime.hardware_map.dc_motor("mFL").history:
        print(f"   t={ts - t0:6.2f}s  {raw:+.2f}")


if __name__ == "__main__":
    main()

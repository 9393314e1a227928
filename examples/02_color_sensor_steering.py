#!/usr/bin/env python3
"""
Example 02: Color Sensor Steering

Demonstrates:
- A teleop (iterative) OpMode reacting to a sensor every loop tick
- Red turns right, blue turns left, equal or dim stops

Usage:
    python 02_color_sensor_steering.py
"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from opmode_host.core.clock import SimulatedClock
from opmode_host.core.runner import OpModeRunner
from opmode_host.core.runtime import build_runtime
from opmode_host.hardware.color_sensor import ColorSample
from opmode_host.opmodes import ColorSensorSteering

SCENE = [
    ("floor (dim)", ColorSample(3, 3, 2)),
    ("blue tape", ColorSample(15, 30, 90)),
    ("red tape", ColorSample(95, 20, 12)),
    ("purple (equal)", ColorSample(60, 10, 60)),
]


def main():
    clock = SimulatedClock()
    runtime = build_runtime(clock=clock)
    hw = runtime.hardware_map
    sensor = hw.color_sensor("color")

    print("=" * 60)
    print("Color Sensor Steering")
    print("=" * 60)

    def show(name):
        p = {m.name: m.power for m in hw.motors}
        print(f"   {name:<16} mFL={p['mFL']:+.1f} mFR={p['mFR']:+.1f} "
              f"mBL={p['mBL']:+.1f} mBR={p['mBR']:+.1f}")

    for i, (name, sample) in enumerate(SCENE):
        t = i * 0.5
        clock.call_at(t, lambda s=sample: sensor.set_sample(s))
        clock.call_at(t + 0.25, lambda n=name: show(n))

    OpModeRunner(runtime).run(ColorSensorSteering, duration_s=0.5 * len(SCENE))
    print("\nStopped; all motors at 0.")


if __name__ == "__main__":
    main()

#!/usr/bin/env python3
"""
Example 01: Color Sensor Telemetry

Demonstrates:
- Building a runtime from the default robot profile
- Feeding the simulated color sensor different "objects"
- Subscribing to telemetry frames on the EventBus

Usage:
    python 01_color_sensor_telemetry.py
"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from opmode_host.core.clock import SimulatedClock
from opmode_host.core.runner import OpModeRunner
from opmode_host.core.runtime import build_runtime
from opmode_host.hardware.color_sensor import ColorSample
from opmode_host.opmodes import ColorSensorTelemetry
from opmode_host.telemetry.sink import TOPIC_FRAME

OBJECTS = [
    ("nothing", ColorSample(0, 0, 0, 2)),
    ("red ball", ColorSample(180, 30, 25, 240)),
    ("blue ball", ColorSample(20, 40, 170, 230)),
    ("white line", ColorSample(250, 250, 250, 255)),
]


def main():
    clock = SimulatedClock()
    runtime = build_runtime(clock=clock)
    sensor = runtime.hardware_map.color_sensor("color")

    # Last frame seen while each object was in front of the sensor
    shown = {}

    def on_frame(frame):
        shown[min(int(frame.ts / 0.2), len(OBJECTS) - 1)] = frame

    runtime.bus.subscribe(TOPIC_FRAME, on_frame)

    for i, (_, sample) in enumerate(OBJECTS):
        clock.call_at(i * 0.2, lambda s=sample: sensor.set_sample(s))

    OpModeRunner(runtime).run(ColorSensorTelemetry, duration_s=0.2 * len(OBJECTS))

    print("=" * 60)
    print("Color Sensor Telemetry")
    print("=" * 60)
    for i, (name, _) in enumerate(OBJECTS):
        frame = shown[i]
        print(f"\n{name}:")
        for line in frame.lines():
            print(f"   {line}")


if __name__ == "__main__":
    main()

# opmode_host/opmodes/__init__.py
"""
Example OpModes. Importing this package registers them:

    color_sensor_steering.py   - teleop: steer toward red / blue
    color_sensor_telemetry.py  - teleop: show color sensor values
    box_pattern.py             - autonomous: elapsed-time box with right turns
    stop_immediately.py        - autonomous: StopRequested for instant stops
"""

from .color_sensor_steering import ColorSensorSteering, steer
from .color_sensor_telemetry import ColorSensorTelemetry
from .box_pattern import AutonomousElapsedTimeBoxPattern, box_pattern
from .stop_immediately import AutonomousStopImmediately
from .timed_moves import Move, MoveKind, TimedSequenceDriver

__all__ = [
    "AutonomousElapsedTimeBoxPattern",
    "AutonomousStopImmediately",
    "ColorSensorSteering",
    "ColorSensorTelemetry",
    "Move",
    "MoveKind",
    "TimedSequenceDriver",
    "box_pattern",
    "steer",
]

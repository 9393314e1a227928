# examples/__init__.py
"""
Runnable walkthroughs of the example OpModes on simulated hardware.

Examples:
    01_color_sensor_telemetry.py  - Show color sensor readings as telemetry
    02_color_sensor_steering.py   - Steer toward red / blue
    03_box_pattern.py             - Elapsed-time box with right turns
    04_stop_immediately.py        - StopRequested for an instant, safe stop

Run examples:
    cd examples
    python 01_color_sensor_telemetry.py

The same OpModes can be run from the command line with ``opmode-host``.
"""

# opmode_host/__init__.py
"""
Example OpModes for a four-motor competition robot, plus the small host
they run on: lifecycle, hardware map, telemetry and cooperative stop.
"""

__version__ = "0.1.0"

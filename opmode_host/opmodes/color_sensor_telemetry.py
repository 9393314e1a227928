# opmode_host/opmodes/color_sensor_telemetry.py
"""
Show the raw color sensor outputs on telemetry, e.g. to see what a sensor
reports for different game elements.

Required hardware:
  1. A color sensor configured as "color".
"""
from opmode_host.core.lifecycle import IterativeOpMode
from opmode_host.core.registry import teleop


@teleop
class ColorSensorTelemetry(IterativeOpMode):
    """Display alpha, red, green, blue and packed ARGB from the color sensor."""

    def init(self) -> None:
        self.color_sensor = self.hardware_map.color_sensor(self.settings.hardware.color_sensor)

    def loop(self) -> None:
        sample = self.color_sensor.read()
        self.telemetry.add_data("1. alpha", sample.alpha)
        self.telemetry.add_data("2. red", sample.red)
        self.telemetry.add_data("3. green", sample.green)
        self.telemetry.add_data("4. blue", sample.blue)
        self.telemetry.add_data("5. argb", sample.argb)
        self.telemetry.update()

# opmode_host/opmodes/color_sensor_steering.py
"""
Steer with a color sensor: seeing red turns right, seeing blue turns left.
Equal amounts of red and blue, or nothing at all, stops the robot.

Required hardware:
  1. A color sensor configured as "color".
  2. Four drive motors "mFL", "mFR", "mBL", "mBR" (F = front, B = back,
     L = left, R = right).

Teleop so that it does not time out.
"""
from __future__ import annotations

from opmode_host.core.lifecycle import IterativeOpMode
from opmode_host.core.registry import teleop
from opmode_host.core.settings import SteeringSettings
from opmode_host.hardware.drivetrain import FourMotorDrive, PowerPattern


def steer(red: int, blue: int, settings: SteeringSettings) -> PowerPattern:
    if red == blue or (red < settings.noise_floor and blue < settings.noise_floor):
        return PowerPattern.stop()
    if blue > red:
        return PowerPattern.pivot_left(settings.turn_power)
    return PowerPattern.pivot_right(settings.turn_power)


@teleop
class ColorSensorSteering(IterativeOpMode):
    """Turn toward blue (left) or red (right) as seen by the color sensor."""

    def init(self) -> None:
        hw = self.settings.hardware
        self.color_sensor = self.hardware_map.color_sensor(hw.color_sensor)
        self.drive = FourMotorDrive.bind(self.hardware_map, hw.motors)
        self.log.info("initialized: sensor=%s", hw.color_sensor)

    def loop(self) -> None:
        sample = self.color_sensor.read()
        pattern = steer(sample.red, sample.blue, self.settings.steering)
        if pattern != self.drive.pattern:
            self.log.debug("red=%d blue=%d -> %s", sample.red, sample.blue, pattern.as_tuple())
        self.drive.apply(pattern)

    def stop(self) -> None:
        self.drive.stop()

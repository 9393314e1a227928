# opmode_host/hardware/drivetrain.py
"""
Four-motor drivetrain convention: front/back x left/right, named mFL, mFR,
mBL, mBR. Right-side motors are mounted mirrored and run REVERSE, so equal
positive power on all four drives straight ahead.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from ..core.settings import MotorSettings, default_drive_motors
from .hardware_map import HardwareMap
from .motor import DcMotor, Direction

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class PowerPattern:
    front_left: float
    front_right: float
    back_left: float
    back_right: float

    @classmethod
    def stop(cls) -> "PowerPattern":
        return cls(0.0, 0.0, 0.0, 0.0)

    @classmethod
    def straight(cls, power: float) -> "PowerPattern":
        return cls(power, power, power, power)

    @classmethod
    def spin_right(cls, power: float) -> "PowerPattern":
        """Left wheels forwards, right wheels backwards."""
        return cls(power, -power, power, -power)

    @classmethod
    def spin_left(cls, power: float) -> "PowerPattern":
        return cls(-power, power, -power, power)

    @classmethod
    def pivot_left(cls, power: float) -> "PowerPattern":
        """Only the right side drives."""
        return cls(0.0, power, 0.0, power)

    @classmethod
    def pivot_right(cls, power: float) -> "PowerPattern":
        return cls(power, 0.0, power, 0.0)

    @property
    def is_stopped(self) -> bool:
        return all(p == 0.0 for p in self.as_tuple())

    def as_tuple(self) -> tuple:
        return (self.front_left, self.front_right, self.back_left, self.back_right)


class FourMotorDrive:
    def __init__(self, front_left: DcMotor, front_right: DcMotor, back_left: DcMotor, back_right: DcMotor) -> None:
        self.front_left = front_left
        self.front_right = front_right
        self.back_left = back_left
        self.back_right = back_right
        self._pattern = PowerPattern.stop()

    @classmethod
    def bind(cls, hardware_map: HardwareMap, motors: Optional[Iterable[MotorSettings]] = None) -> "FourMotorDrive":
        """
        Look up the four drive motors and set each direction once.

        ``motors`` lists FL, FR, BL, BR in that order.
        """
        motors = list(motors) if motors is not None else default_drive_motors()
        if len(motors) != 4:
            raise ValueError(f"A four-motor drive needs 4 motors, got {len(motors)}")

        handles = []
        for m in motors:
            handle = hardware_map.dc_motor(m.name)
            handle.set_direction(Direction.parse(m.direction))
            handles.append(handle)

        log.debug("bound drive: %s", ", ".join(f"{m.name}={m.direction}" for m in motors))
        return cls(*handles)

    @property
    def pattern(self) -> PowerPattern:
        return self._pattern

    def apply(self, pattern: PowerPattern) -> None:
        self.front_left.set_power(pattern.front_left)
        self.front_right.set_power(pattern.front_right)
        self.back_left.set_power(pattern.back_left)
        self.back_right.set_power(pattern.back_right)
        self._pattern = pattern

    def stop(self) -> None:
        self.apply(PowerPattern.stop())

    def powers(self) -> PowerPattern:
        return PowerPattern(
            self.front_left.power,
            self.front_right.power,
            self.back_left.power,
            self.back_right.power,
        )

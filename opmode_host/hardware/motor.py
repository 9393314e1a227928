# opmode_host/hardware/motor.py
from __future__ import annotations

import math
from enum import Enum
from typing import List, Optional, Tuple

import numpy as np


class Direction(Enum):
    FORWARD = 1
    REVERSE = -1

    @classmethod
    def parse(cls, value) -> "Direction":
        if isinstance(value, Direction):
            return value
        try:
            return cls[str(value).strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown motor direction: {value!r}") from None


class DcMotor:
    """
    A DC motor channel.

    ``power`` is the logical power the OpMode asked for (-1.0..+1.0).
    The direction flag is applied on the way to the hardware, so a REVERSE
    motor mounted mirrored still moves the robot forwards on positive power.
    """

    def __init__(self, name: str, direction: Direction = Direction.FORWARD) -> None:
        self.name = name
        self._direction = direction
        self._power = 0.0

    @property
    def direction(self) -> Direction:
        return self._direction

    def set_direction(self, direction) -> None:
        self._direction = Direction.parse(direction)

    @property
    def power(self) -> float:
        return self._power

    def set_power(self, power: float) -> None:
        power = float(power)
        if math.isnan(power):
            raise ValueError(f"{self.name}: power must be a number, got NaN")
        self._power = float(np.clip(power, -1.0, 1.0))
        self._apply(self._power * self._direction.value)

    def _apply(self, raw_power: float) -> None:
        """Push a direction-corrected power to the device."""
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r}, {self._direction.name}, power={self._power:+.2f})"


class SimDcMotor(DcMotor):
    """In-memory motor; records every (time, raw power) write."""

    def __init__(self, name: str, direction: Direction = Direction.FORWARD, clock=None) -> None:
        super().__init__(name, direction)
        self._clock = clock
        self.raw_power = 0.0
        self.history: List[Tuple[Optional[float], float]] = []

    def _apply(self, raw_power: float) -> None:
        self.raw_power = raw_power
        ts = self._clock.now() if self._clock is not None else None
        self.history.append((ts, raw_power))

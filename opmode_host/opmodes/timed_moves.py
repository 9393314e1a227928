# opmode_host/opmodes/timed_moves.py
"""
Elapsed-time moves for a four-motor drive.

Each move sets the drive powers, waits on the cancellation token until its
duration has elapsed, then stops the drive before the next move begins.
Durations are fixed; there is no feedback or correction.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List

from opmode_host.core.cancellation import CancellationToken, WaitResult
from opmode_host.core.clock import ElapsedTime
from opmode_host.hardware.drivetrain import FourMotorDrive, PowerPattern

log = logging.getLogger(__name__)


class MoveKind(Enum):
    DRIVE = "drive"
    TURN_RIGHT = "turn_right"
    TURN_LEFT = "turn_left"


@dataclass(frozen=True)
class Move:
    kind: MoveKind
    duration_s: float
    power: float

    def __post_init__(self) -> None:
        if self.duration_s < 0:
            raise ValueError("duration_s must be >= 0")

    @classmethod
    def drive(cls, duration_s: float, power: float) -> "Move":
        """Straight ahead (or back, for negative power)."""
        return cls(MoveKind.DRIVE, duration_s, power)

    @classmethod
    def turn_right(cls, duration_s: float, power: float) -> "Move":
        return cls(MoveKind.TURN_RIGHT, duration_s, power)

    @classmethod
    def turn_left(cls, duration_s: float, power: float) -> "Move":
        return cls(MoveKind.TURN_LEFT, duration_s, power)

    def pattern(self) -> PowerPattern:
        if self.kind is MoveKind.DRIVE:
            return PowerPattern.straight(self.power)
        if self.kind is MoveKind.TURN_RIGHT:
            return PowerPattern.spin_right(self.power)
        return PowerPattern.spin_left(self.power)


class TimedSequenceDriver:
    def __init__(self, drive: FourMotorDrive, token: CancellationToken) -> None:
        self.drive = drive
        self.token = token
        self.completed: List[Move] = []

    def execute(self, move: Move) -> WaitResult:
        """Run one move; the drive is stopped again when this returns."""
        if self.token.is_cancelled():
            return WaitResult.CANCELLED

        log.info("%s %.2fs @ %+.2f", move.kind.value, move.duration_s, move.power)

        timer = ElapsedTime(self.token.clock)
        self.drive.apply(move.pattern())
        result = self.token.sleep_until(timer.start_time + move.duration_s)
        self.drive.stop()

        if result.cancelled:
            log.info("%s cancelled after %.3fs", move.kind.value, timer.seconds())
        else:
            self.completed.append(move)
        return result

    def execute_or_raise(self, move: Move) -> None:
        """Like ``execute`` but raises ``StopRequested`` when cancelled."""
        self.execute(move).raise_if_cancelled()

    def run(self, moves: Iterable[Move]) -> WaitResult:
        """Run moves in order; stops at the first cancelled one."""
        for move in moves:
            if self.execute(move).cancelled:
                return WaitResult.CANCELLED
        return WaitResult.COMPLETED

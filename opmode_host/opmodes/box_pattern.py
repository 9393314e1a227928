# opmode_host/opmodes/box_pattern.py
"""
Drive a box with right turns, using elapsed time for every move.

turn_time_s and drive_time_s need tuning for a particular robot's speed and
agility. With direct-drive NeveRest 40 motors on mecanum wheels the defaults
make a nearly perfect box within about 10 feet.

Required hardware:
  1. Four drive motors "mFL", "mFR", "mBL", "mBR".
"""
from __future__ import annotations

from typing import List

from opmode_host.core.lifecycle import LinearOpMode
from opmode_host.core.registry import autonomous
from opmode_host.core.settings import BoxPatternSettings
from opmode_host.hardware.drivetrain import FourMotorDrive
from .timed_moves import Move, TimedSequenceDriver


def box_pattern(settings: BoxPatternSettings) -> List[Move]:
    """``sides`` x (drive straight, turn right ~90 degrees)."""
    moves: List[Move] = []
    for _ in range(settings.sides):
        moves.append(Move.drive(settings.drive_time_s, settings.drive_power))
        moves.append(Move.turn_right(settings.turn_time_s, settings.turn_power))
    return moves


@autonomous
class AutonomousElapsedTimeBoxPattern(LinearOpMode):
    """Drive a box pattern with right turns using elapsed-time moves."""

    def run_opmode(self) -> None:
        self.drive = FourMotorDrive.bind(self.hardware_map, self.settings.hardware.motors)
        self.driver = TimedSequenceDriver(self.drive, self.host.token)

        self.wait_for_start()

        result = self.driver.run(box_pattern(self.settings.box_pattern))
        self.log.info("box pattern %s after %d moves", result.value, len(self.driver.completed))

        self.drive.stop()

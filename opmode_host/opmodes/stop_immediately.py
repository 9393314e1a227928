# opmode_host/opmodes/stop_immediately.py
"""
Drive back and forth until time runs out, to show how ``StopRequested`` gives
an immediate, safe stop when "Stop" is pressed or the autonomous timer expires.

All of the work sits inside one try block. Any wait (timer, encoder, ...)
goes through the cancellation token, which raises ``StopRequested`` the
moment the OpMode should stop. Control lands in the handler below, which
stops the robot and returns, so the autonomous steps never have to keep
checking whether to carry on.

Required hardware:
  1. Four drive motors "mFL", "mFR", "mBL", "mBR".
"""
from __future__ import annotations

from opmode_host.core.cancellation import StopRequested
from opmode_host.core.lifecycle import LinearOpMode
from opmode_host.core.registry import autonomous
from opmode_host.hardware.drivetrain import FourMotorDrive
from .timed_moves import Move, TimedSequenceDriver


@autonomous
class AutonomousStopImmediately(LinearOpMode):
    """Shuttle forwards and backwards, relying on StopRequested to halt."""

    def run_opmode(self) -> None:
        try:
            self.do_initialization()

            self.wait_for_start()
            # wait_for_start() also returns when Stop is pressed.
            if not self.op_mode_is_active():
                return

            self.do_autonomous()

            # Not reached normally: do_autonomous() outlasts the time limit.
            self.do_stop_everything()
        except StopRequested:
            self.log.info("StopRequested caught, stopping")
            self.do_stop_everything()
            return
        except Exception:
            # Stopping the robot without knowing what broke could make it worse.
            self.log_fault("Unexpected exception")
            raise

    def should_keep_running(self) -> bool:
        """Raise StopRequested if the OpMode is no longer active."""
        if not self.op_mode_is_active():
            raise StopRequested()
        return True

    def do_initialization(self) -> None:
        self.log.info("do_initialization()")
        self.drive = FourMotorDrive.bind(self.hardware_map, self.settings.hardware.motors)
        self.driver = TimedSequenceDriver(self.drive, self.host.token)

    def do_stop_everything(self) -> None:
        """Anything needed to leave the robot safe: here, just the drive."""
        self.log.info("do_stop_everything()")
        self.do_stop_driving()

    def do_stop_driving(self) -> None:
        self.log.info("do_stop_driving()")
        self.drive.stop()

    def do_straight_drive(self, drive_power: float, drive_time_s: float) -> None:
        self.log.info("do_straight_drive(%.1f, %.1f)", drive_power, drive_time_s)
        self.driver.execute_or_raise(Move.drive(drive_time_s, drive_power))

    def do_autonomous(self) -> None:
        cfg = self.settings.stop_immediately
        self.log.info("do_autonomous()")

        for i in range(1, cfg.loops + 1):
            self.should_keep_running()
            self.log.info("do_autonomous(): loop %d", i)
            self.do_straight_drive(cfg.drive_power, cfg.leg_time_s)
            self.do_straight_drive(-cfg.drive_power, cfg.leg_time_s)

        self.log.info("do_autonomous(): completed before the time limit")

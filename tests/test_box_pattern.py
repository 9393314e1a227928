import pytest

from helpers import make_hardware_map, nonzero_writes, powers
from opmode_host.core.cancellation import CancellationToken, WaitResult
from opmode_host.core.settings import BoxPatternSettings
from opmode_host.hardware.drivetrain import FourMotorDrive
from opmode_host.opmodes.box_pattern import AutonomousElapsedTimeBoxPattern, box_pattern
from opmode_host.opmodes.timed_moves import Move, MoveKind, TimedSequenceDriver

POLL = 0.01


@pytest.fixture
def drive(clock):
    return FourMotorDrive.bind(make_hardware_map(clock))


@pytest.fixture
def token(clock):
    return CancellationToken(clock=clock, poll_interval_s=POLL)


# -----------------------------------------------------------------------------
# Move list
# -----------------------------------------------------------------------------

def test_box_is_four_drive_turn_pairs():
    moves = box_pattern(BoxPatternSettings())

    assert len(moves) == 8
    assert moves[0::2] == [Move.drive(2.0, 0.5)] * 4
    assert moves[1::2] == [Move.turn_right(1.0, 0.3)] * 4


def test_move_patterns():
    assert Move.drive(1.0, -0.2).pattern().as_tuple() == (-0.2, -0.2, -0.2, -0.2)
    assert Move.turn_right(1.0, 0.3).pattern().as_tuple() == (0.3, -0.3, 0.3, -0.3)
    assert Move.turn_left(1.0, 0.3).pattern().as_tuple() == (-0.3, 0.3, -0.3, 0.3)


def test_negative_duration_rejected():
    with pytest.raises(ValueError):
        Move(MoveKind.DRIVE, -1.0, 0.5)


# -----------------------------------------------------------------------------
# TimedSequenceDriver
# -----------------------------------------------------------------------------

class TestTimedSequenceDriver:

    @pytest.mark.parametrize("duration", [1.0, 0.125, 2.345])
    def test_move_stops_within_one_poll_of_its_duration(self, drive, token, clock, duration):
        driver = TimedSequenceDriver(drive, token)

        result = driver.execute(Move.drive(duration, 0.5))

        assert result is WaitResult.COMPLETED
        (t_on, p_on), (t_off, p_off) = drive.front_left.history
        assert p_on == 0.5 and p_off == 0.0
        assert duration - 1e-9 <= t_off - t_on <= duration + POLL
        assert drive.powers().is_stopped

    def test_every_move_ends_with_a_stop(self, drive, token):
        driver = TimedSequenceDriver(drive, token)

        assert driver.run([Move.drive(0.5, 0.5), Move.turn_right(0.3, 0.3)]) is WaitResult.COMPLETED

        assert [p for _, p in drive.front_left.history] == [0.5, 0.0, 0.3, 0.0]
        # right side runs REVERSE: raw power is sign-inverted
        assert [p for _, p in drive.front_right.history] == [-0.5, 0.0, 0.3, 0.0]

    def test_cancel_mid_move_stops_sequence(self, drive, token, clock):
        driver = TimedSequenceDriver(drive, token)
        clock.call_at(1.25, token.cancel)

        result = driver.run([Move.drive(1.0, 0.5), Move.drive(1.0, -0.5), Move.drive(1.0, 0.5)])

        assert result is WaitResult.CANCELLED
        assert driver.completed == [Move.drive(1.0, 0.5)]
        assert clock.now() <= 1.25 + POLL
        assert drive.powers().is_stopped
        # third move never started
        assert len(nonzero_writes(drive.front_left)) == 2

    def test_already_cancelled_never_moves(self, drive, token):
        token.cancel()
        driver = TimedSequenceDriver(drive, token)

        assert driver.execute(Move.drive(1.0, 0.5)) is WaitResult.CANCELLED
        assert drive.front_left.history == []


# -----------------------------------------------------------------------------
# AutonomousElapsedTimeBoxPattern
# -----------------------------------------------------------------------------

class TestBoxPatternOpMode:

    def test_full_box(self, runtime, runner, clock):
        opmode = runner.run(AutonomousElapsedTimeBoxPattern)

        assert len(opmode.driver.completed) == 8
        assert clock.now() == pytest.approx(12.0, abs=POLL)
        assert set(powers(runtime.hardware_map).values()) == {0.0}

        fl = runtime.hardware_map.dc_motor("mFL")
        drive_legs = [p for _, p in fl.history if p == 0.5]
        turn_legs = [p for _, p in fl.history if p == 0.3]
        assert len(drive_legs) == 4 and len(turn_legs) == 4

    def test_stop_during_turn(self, runtime, runner, clock):
        clock.call_at(2.5, runtime.host.request_stop)

        opmode = runner.run(AutonomousElapsedTimeBoxPattern)

        assert opmode.driver.completed == [Move.drive(2.0, 0.5)]
        assert clock.now() <= 2.5 + POLL
        last_ts, last_power = runtime.hardware_map.dc_motor("mBR").history[-1]
        assert last_power == 0.0 and last_ts <= 2.5 + POLL

    def test_waits_for_start_button(self, settings, runtime, runner, clock):
        runtime.host.auto_start = False
        clock.call_at(3.0, runtime.host.request_start)

        runner.run(AutonomousElapsedTimeBoxPattern)

        first_ts, _ = nonzero_writes(runtime.hardware_map.dc_motor("mFL"))[0]
        assert first_ts == pytest.approx(3.0, abs=POLL)
        assert clock.now() == pytest.approx(15.0, abs=POLL)

    def test_stop_before_start_never_moves(self, runtime, runner, clock):
        runtime.host.auto_start = False
        clock.call_at(1.0, runtime.host.request_stop)

        runner.run(AutonomousElapsedTimeBoxPattern)

        for m in runtime.hardware_map.motors:
            assert nonzero_writes(m) == []

    def test_box_size_from_profile(self, settings, runtime, runner, clock):
        settings.box_pattern.drive_time_s = 0.5
        settings.box_pattern.turn_time_s = 0.25
        settings.box_pattern.sides = 2

        opmode = runner.run(AutonomousElapsedTimeBoxPattern)

        assert len(opmode.driver.completed) == 4
        assert clock.now() == pytest.approx(1.5, abs=POLL)

import pytest

from opmode_host.core.clock import ElapsedTime, SimulatedClock


def test_simulated_clock_only_moves_when_slept():
    clock = SimulatedClock(start=5.0)
    assert clock.now() == 5.0
    clock.sleep(0.25)
    assert clock.now() == 5.25
    clock.sleep(0)
    assert clock.now() == 5.25


def test_callbacks_fire_in_time_order_at_their_instant():
    clock = SimulatedClock()
    fired = []
    clock.call_at(0.3, lambda: fired.append(("b", clock.now())))
    clock.call_at(0.1, lambda: fired.append(("a", clock.now())))
    clock.call_later(2.0, lambda: fired.append(("late", clock.now())))

    clock.advance(1.0)

    assert fired == [("a", 0.1), ("b", 0.3)]
    assert clock.now() == 1.0

    clock.advance(1.0)
    assert fired[-1] == ("late", 2.0)


def test_callback_can_schedule_more_callbacks():
    clock = SimulatedClock()
    fired = []

    def first():
        fired.append("first")
        clock.call_later(0.1, lambda: fired.append("second"))

    clock.call_at(0.5, first)
    clock.advance(1.0)
    assert fired == ["first", "second"]


def test_cannot_go_backwards():
    with pytest.raises(ValueError):
        SimulatedClock().advance(-0.1)


def test_elapsed_time():
    clock = SimulatedClock()
    clock.advance(3.0)
    timer = ElapsedTime(clock)
    assert timer.start_time == 3.0

    clock.advance(1.5)
    assert timer.seconds() == pytest.approx(1.5)
    assert timer.milliseconds() == pytest.approx(1500.0)

    timer.reset()
    assert timer.seconds() == 0.0

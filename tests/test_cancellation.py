import threading
import time

import pytest

from opmode_host.core.cancellation import CancellationToken, StopRequested, WaitResult
from opmode_host.core.clock import MonotonicClock, SimulatedClock


@pytest.fixture
def token(clock):
    return CancellationToken(clock=clock, poll_interval_s=0.05)


class TestSleepUntil:

    def test_completes_exactly_on_deadline(self, token, clock):
        assert token.sleep_until(1.3) is WaitResult.COMPLETED
        assert clock.now() == pytest.approx(1.3)

    def test_deadline_in_the_past_returns_immediately(self, token, clock):
        clock.advance(2.0)
        assert token.sleep_until(1.0) is WaitResult.COMPLETED
        assert clock.now() == 2.0

    def test_cancel_is_seen_within_one_poll(self, token, clock):
        clock.call_at(0.42, token.cancel)

        assert token.sleep_until(10.0) is WaitResult.CANCELLED
        assert 0.42 <= clock.now() <= 0.42 + token.poll_interval_s

    def test_time_limit_cancels_on_the_dot(self, token, clock):
        token.set_deadline(0.333)

        assert token.sleep(5.0) is WaitResult.CANCELLED
        assert clock.now() == pytest.approx(0.333)
        assert token.is_cancelled()

    def test_cancelled_token_does_not_wait(self, token, clock):
        token.cancel()
        assert token.sleep(1.0) is WaitResult.CANCELLED
        assert clock.now() == 0.0


class TestRaisingForm:

    def test_wait_until_or_raise(self, token, clock):
        clock.call_at(0.1, token.cancel)
        with pytest.raises(StopRequested):
            token.wait_until_or_raise(1.0)

    def test_completed_result_does_not_raise(self, token):
        assert token.sleep(0.2).raise_if_cancelled() is WaitResult.COMPLETED
        token.raise_if_cancelled()

    def test_unwinds_nested_calls(self, token, clock):
        reached = []

        def leg(n):
            token.wait_until_or_raise(clock.now() + 0.5)
            reached.append(n)

        def routine():
            for n in range(10):
                leg(n)

        clock.call_at(1.7, token.cancel)
        with pytest.raises(StopRequested):
            routine()
        assert reached == [0, 1, 2]


def test_poll_interval_must_be_positive():
    with pytest.raises(ValueError):
        CancellationToken(clock=SimulatedClock(), poll_interval_s=0)


@pytest.mark.realtime
def test_real_clock_wakes_on_stop_from_another_thread():
    token = CancellationToken(clock=MonotonicClock(), poll_interval_s=0.5)
    threading.Timer(0.05, token.cancel).start()

    t0 = time.monotonic()
    assert token.sleep(5.0) is WaitResult.CANCELLED
    # woken by the event, not by the next poll
    assert time.monotonic() - t0 < 0.4

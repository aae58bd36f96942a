# tests/unit/session/test_scheduler.py
# Unit tests for the polling & threaded tick schedulers

import threading

import pytest

from justlog.session.scheduler import PollingTickScheduler, ThreadTickScheduler, TickScheduler
from tests.test_support.fakes import ManualClock


# * Test host-loop driven scheduler
class TestPollingTickScheduler:

    @pytest.fixture
    def poller(self, clock):
        return PollingTickScheduler(clock=clock, interval=1.0)

    # * Test nothing fires before the first interval
    def test_not_due_yet(self, poller, clock):
        calls = []
        poller.start(lambda: calls.append(clock.now()))
        clock.advance(0.5)
        assert poller.poll() is False
        assert calls == []
        assert poller.seconds_until_next() == 0.5

    # * Test one tick per elapsed interval
    def test_fires_each_interval(self, poller, clock):
        calls = []
        poller.start(lambda: calls.append(clock.now()))
        for _ in range(3):
            clock.advance(1.0)
            assert poller.poll() is True
        assert len(calls) == 3

    # * Test missed intervals collapse into one tick
    def test_missed_ticks_coalesced(self, poller, clock):
        calls = []
        poller.start(lambda: calls.append(1))
        clock.advance(5.5)
        assert poller.poll() is True
        assert poller.poll() is False
        assert len(calls) == 1
        assert poller.seconds_until_next() == pytest.approx(0.5)

    # * Test stop prevents further ticks & is idempotent
    def test_stop(self, poller, clock):
        calls = []
        poller.start(lambda: calls.append(1))
        poller.stop()
        poller.stop()
        clock.advance(2.0)
        assert poller.poll() is False
        assert not poller.is_running
        assert poller.seconds_until_next() is None

    # * Test restarting replaces the callback
    def test_restart_replaces_callback(self, poller, clock):
        first, second = [], []
        poller.start(lambda: first.append(1))
        poller.start(lambda: second.append(1))
        clock.advance(1.0)
        poller.poll()
        assert first == []
        assert second == [1]

    # * Test failing callback does not break the scheduler
    def test_callback_error_contained(self, poller, clock):
        def broken():
            raise RuntimeError("tick failed")

        poller.start(broken)
        clock.advance(1.0)
        assert poller.poll() is True
        assert poller.is_running

    # * Test non-positive intervals are rejected
    @pytest.mark.parametrize("interval", [0, -1.0])
    def test_invalid_interval(self, interval):
        with pytest.raises(ValueError):
            PollingTickScheduler(clock=ManualClock(), interval=interval)

    def test_satisfies_protocol(self, poller):
        assert isinstance(poller, TickScheduler)


# * Test threading.Timer backed scheduler
class TestThreadTickScheduler:

    # * Test callback fires repeatedly on the timer thread
    def test_ticks_repeatedly(self):
        scheduler = ThreadTickScheduler(interval=0.01)
        done = threading.Event()
        calls = []

        def on_tick():
            calls.append(1)
            if len(calls) >= 3:
                done.set()

        scheduler.start(on_tick)
        try:
            assert done.wait(timeout=5.0)
        finally:
            scheduler.stop()
        assert len(calls) >= 3

    # * Test stop cancels pending ticks
    def test_stop_cancels(self):
        scheduler = ThreadTickScheduler(interval=0.05)
        calls = []
        scheduler.start(lambda: calls.append(1))
        scheduler.stop()
        assert not scheduler.is_running
        threading.Event().wait(0.2)
        assert calls == []

    def test_invalid_interval(self):
        with pytest.raises(ValueError):
            ThreadTickScheduler(interval=0)

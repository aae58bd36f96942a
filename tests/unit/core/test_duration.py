# tests/unit/core/test_duration.py
# Unit tests for elapsed-time math & duration formatting

import pytest

from justlog.core.duration import elapsed_seconds, format_countdown, format_duration


# * Test elapsed_seconds active & paused arithmetic
class TestElapsedSeconds:

    # * Test active elapsed excludes paused total
    def test_active_subtracts_paused_total(self):
        assert elapsed_seconds(now=150.0, start_time=100.0, cumulative_paused=30.0) == 20.0

    # * Test paused elapsed freezes at the pause instant
    def test_paused_freezes_at_last_pause(self):
        result = elapsed_seconds(
            now=500.0, start_time=100.0, cumulative_paused=5.0, last_pause=140.0, is_active=False
        )
        assert result == 35.0

    # * Test paused w/o a pause instant falls back to now
    def test_paused_without_instant_uses_now(self):
        result = elapsed_seconds(now=160.0, start_time=100.0, cumulative_paused=0.0, is_active=False)
        assert result == 60.0

    # * Test last_pause ignored while active
    def test_last_pause_ignored_when_active(self):
        result = elapsed_seconds(
            now=200.0, start_time=100.0, cumulative_paused=0.0, last_pause=110.0, is_active=True
        )
        assert result == 100.0

    # * Test future start time clamps to zero
    def test_future_start_clamps_to_zero(self):
        assert elapsed_seconds(now=100.0, start_time=200.0, cumulative_paused=0.0) == 0.0

    # * Test paused total larger than wall time clamps to zero
    def test_oversized_paused_total_clamps_to_zero(self):
        assert elapsed_seconds(now=110.0, start_time=100.0, cumulative_paused=50.0) == 0.0


# * Test format_duration boundaries
class TestFormatDuration:

    @pytest.mark.parametrize(
        "seconds,expected",
        [
            (0, "0s"),
            (59, "59s"),
            (60, "1m 0s"),
            (61, "1m 1s"),
            (3599, "59m 59s"),
            (3600, "1h 0m 0s"),
            (3661, "1h 1m 1s"),
            (36000 + 125, "10h 2m 5s"),
        ],
    )
    def test_boundaries(self, seconds, expected):
        assert format_duration(seconds) == expected

    # * Test fractional seconds truncate rather than round
    def test_truncates_fractions(self):
        assert format_duration(59.99) == "59s"
        assert format_duration(20.4) == "20s"

    # * Test negative input formats as zero
    def test_negative_is_zero(self):
        assert format_duration(-5) == "0s"


# * Test rest countdown formatting
class TestFormatCountdown:

    def test_under_a_minute(self):
        assert format_countdown(45) == "45s"

    def test_minutes_pad_seconds(self):
        assert format_countdown(90) == "1:30"
        assert format_countdown(125) == "2:05"

    def test_negative_is_zero(self):
        assert format_countdown(-1) == "0s"

# justlog/core/duration.py
# Elapsed active-time math & display formatting for workout sessions (pure, no clock access)

from __future__ import annotations

SECONDS_PER_MINUTE = 60
SECONDS_PER_HOUR = 3600


# * Elapsed active seconds excluding paused time
# while paused the duration freezes at last_pause; w/o a recorded pause instant it falls back to now
def elapsed_seconds(
    now: float,
    start_time: float,
    cumulative_paused: float,
    last_pause: float | None = None,
    is_active: bool = True,
) -> float:
    if is_active or last_pause is None:
        reference = now
    else:
        reference = last_pause

    # clock anomalies (start_time in the future) never yield negative time
    return max(0.0, reference - start_time - cumulative_paused)


# * Format seconds as "1h 2m 3s", "2m 3s" or "3s"
def format_duration(seconds: float) -> str:
    total = max(0, int(seconds))

    if total >= SECONDS_PER_HOUR:
        hours = total // SECONDS_PER_HOUR
        minutes = (total % SECONDS_PER_HOUR) // SECONDS_PER_MINUTE
        secs = total % SECONDS_PER_MINUTE
        return f"{hours}h {minutes}m {secs}s"
    if total >= SECONDS_PER_MINUTE:
        minutes = total // SECONDS_PER_MINUTE
        secs = total % SECONDS_PER_MINUTE
        return f"{minutes}m {secs}s"
    return f"{total}s"


# * Format a rest countdown as "m:ss" or "Ns" under a minute
def format_countdown(seconds: float) -> str:
    total = max(0, int(seconds))
    minutes, secs = divmod(total, SECONDS_PER_MINUTE)
    if minutes > 0:
        return f"{minutes}:{secs:02d}"
    return f"{secs}s"

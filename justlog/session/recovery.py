# justlog/session/recovery.py
# Startup recovery: rebuild the live session from the persisted record, reconciled against the wall clock
#
# * Raw timing keys take precedence over the encoded snapshot
# * Any unreadable or undecodable record degrades to "no session" & the store is erased

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..core.clock import Clock
from ..core.debug import debug_error
from ..core.duration import elapsed_seconds, format_duration
from ..core.exceptions import SnapshotDecodeError, StoreReadError, StoreWriteError
from ..core.models import SessionSnapshot, SessionState, TimingState
from ..core.verbose import vlog_recovery
from .persistence import (
    KEY_CURRENT_EXERCISE,
    KEY_IS_ACTIVE,
    KEY_LAST_PAUSE,
    KEY_SESSION,
    KEY_START_TIME,
    KEY_TOTAL_PAUSED,
    SessionPersistence,
)


# * Session state reconstructed from disk
@dataclass(frozen=True)
class RecoveredSession:
    snapshot: SessionSnapshot
    timing: TimingState
    elapsed: float

    @property
    def is_active(self) -> bool:
        return self.snapshot.is_active

    @property
    def state(self) -> SessionState:
        return self.snapshot.state


# finite numeric raw value or fallback; bools are not numbers here
def _raw_number(record: Mapping[str, Any], key: str, fallback: Optional[float]) -> Optional[float]:
    value = record.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return fallback
    if not math.isfinite(value):
        return fallback
    return float(value)


def _raw_bool(record: Mapping[str, Any], key: str, fallback: bool) -> bool:
    value = record.get(key)
    return value if isinstance(value, bool) else fallback


# * Reconcile a raw record into snapshot + timing state as of `now`; raises SnapshotDecodeError
def reconcile_record(record: Mapping[str, Any], now: float) -> RecoveredSession:
    if KEY_SESSION not in record:
        raise SnapshotDecodeError("Record has no encoded session", field=KEY_SESSION)

    encoded = record[KEY_SESSION]
    raw_start = _raw_number(record, KEY_START_TIME, None)
    if raw_start is not None and isinstance(encoded, Mapping):
        # the encoded session may omit timing internals
        encoded = {**encoded, "start_time": raw_start}

    decoded = SessionSnapshot.from_dict(encoded)
    if not decoded.routine_name.strip():
        raise SnapshotDecodeError("Recorded session has a blank routine name", field="routine_name")

    is_active = _raw_bool(record, KEY_IS_ACTIVE, decoded.is_active)
    start_time = decoded.start_time
    paused_total = max(0.0, _raw_number(record, KEY_TOTAL_PAUSED, 0.0) or 0.0)
    last_pause = _raw_number(record, KEY_LAST_PAUSE, None)

    if is_active:
        # a pause instant left behind by an active record is stale
        last_pause = None
    elif last_pause is None:
        last_pause = decoded.paused_at if decoded.paused_at is not None else now

    current_exercise = decoded.current_exercise
    if current_exercise is None:
        cached = record.get(KEY_CURRENT_EXERCISE)
        if isinstance(cached, str):
            current_exercise = cached

    snapshot = decoded.with_changes(
        start_time=start_time,
        is_active=is_active,
        paused_at=None if is_active else last_pause,
        current_exercise=current_exercise,
    )
    timing = TimingState(cumulative_paused=paused_total, last_pause=last_pause)
    elapsed = elapsed_seconds(now, start_time, paused_total, last_pause, is_active)
    return RecoveredSession(snapshot=snapshot, timing=timing, elapsed=elapsed)


# erase a bad record; a failing erase is reported & otherwise ignored
def _discard_record(persistence: SessionPersistence) -> None:
    try:
        persistence.erase()
    except StoreWriteError as e:
        debug_error(e, "Could not erase unreadable session record")


# * Load & reconcile the persisted session; None when absent or undecodable
def recover_session(persistence: SessionPersistence, clock: Clock) -> Optional[RecoveredSession]:
    try:
        record = persistence.load()
    except StoreReadError as e:
        vlog_recovery("Session record unreadable, discarding", str(e))
        _discard_record(persistence)
        return None

    if record is None:
        vlog_recovery("No saved session found")
        return None

    try:
        recovered = reconcile_record(record, clock.now())
    except SnapshotDecodeError as e:
        vlog_recovery("Session record undecodable, discarding", str(e))
        _discard_record(persistence)
        return None

    vlog_recovery(
        f"Restored '{recovered.snapshot.routine_name}' ({recovered.state.value})",
        f"exercises: {len(recovered.snapshot.exercises)}, "
        f"elapsed: {format_duration(recovered.elapsed)}",
    )
    return recovered

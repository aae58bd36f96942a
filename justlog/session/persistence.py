# justlog/session/persistence.py
# Encodes the live session into the six-key persisted record & back into raw values

from __future__ import annotations

from typing import Any, Optional

from ..core.models import SessionSnapshot, TimingState
from ..core.verbose import vlog_store_clear, vlog_store_write
from ..justlog_io.kv_store import KeyValueStore


# * Persisted record keys
KEY_SESSION = "session"
KEY_START_TIME = "start_time"
KEY_TOTAL_PAUSED = "total_paused_duration"
KEY_LAST_PAUSE = "last_pause_time"
KEY_IS_ACTIVE = "is_active"
KEY_CURRENT_EXERCISE = "current_exercise"

RECORD_KEYS = (
    KEY_SESSION,
    KEY_START_TIME,
    KEY_TOTAL_PAUSED,
    KEY_LAST_PAUSE,
    KEY_IS_ACTIVE,
    KEY_CURRENT_EXERCISE,
)


# * Build the flat record for a snapshot & its timing state
def encode_record(snapshot: SessionSnapshot, timing: TimingState) -> dict[str, Any]:
    return {
        KEY_SESSION: snapshot.to_dict(),
        KEY_START_TIME: snapshot.start_time,
        KEY_TOTAL_PAUSED: timing.cumulative_paused,
        # only present while paused
        KEY_LAST_PAUSE: timing.last_pause,
        KEY_IS_ACTIVE: snapshot.is_active,
        KEY_CURRENT_EXERCISE: snapshot.current_exercise,
    }


# * Session record persistence over a KeyValueStore
class SessionPersistence:

    def __init__(self, store: KeyValueStore):
        self._store = store

    @property
    def store(self) -> KeyValueStore:
        return self._store

    # write all keys together; raises StoreWriteError
    def save(self, snapshot: SessionSnapshot, timing: TimingState) -> None:
        record = encode_record(snapshot, timing)
        self._store.write_all(record)
        vlog_store_write([k for k, v in record.items() if v is not None], self._store.describe())

    # raw record or None when nothing is stored; raises StoreReadError
    def load(self) -> Optional[dict[str, Any]]:
        record = self._store.read_all()
        if not record:
            return None
        return record

    # erase all keys together; raises StoreWriteError
    def erase(self) -> None:
        self._store.clear()
        vlog_store_clear(self._store.describe())

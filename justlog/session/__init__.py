# justlog/session/__init__.py
# Workout session tracker: state machine, persistence, recovery, tick scheduling & rest timer

from .manager import (
    WorkoutSessionManager,
    create_session_manager,
    DEFAULT_EXERCISE_LABEL,
    DEFAULT_ROUTINE_LABEL,
)
from .persistence import SessionPersistence, RECORD_KEYS, encode_record
from .recovery import RecoveredSession, recover_session, reconcile_record
from .scheduler import TickScheduler, ThreadTickScheduler, PollingTickScheduler
from .rest_timer import RestTimer, RestTimerState, RestPhase

__all__ = [
    "WorkoutSessionManager",
    "create_session_manager",
    "DEFAULT_EXERCISE_LABEL",
    "DEFAULT_ROUTINE_LABEL",
    "SessionPersistence",
    "RECORD_KEYS",
    "encode_record",
    "RecoveredSession",
    "recover_session",
    "reconcile_record",
    "TickScheduler",
    "ThreadTickScheduler",
    "PollingTickScheduler",
    "RestTimer",
    "RestTimerState",
    "RestPhase",
]

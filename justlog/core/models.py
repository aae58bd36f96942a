# justlog/core/models.py
# Immutable workout & session value types w/ dict encoding for local persistence

from __future__ import annotations

import math
import uuid
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Mapping, Optional, Sequence

from .exceptions import SnapshotDecodeError


# sentinel for "no default" in field decoding
_MISSING = object()


# * Decode one field from a mapping w/ type checking; raise SnapshotDecodeError on mismatch
def _field(
    data: Mapping[str, Any],
    key: str,
    kind: type | tuple[type, ...],
    default: Any = _MISSING,
    optional: bool = False,
) -> Any:
    if key not in data:
        if default is _MISSING:
            raise SnapshotDecodeError(f"Missing required field '{key}'", field=key)
        return default

    value = data[key]
    if value is None and optional:
        return None

    # bool is an int subclass; numeric fields must not silently accept true/false
    kinds = kind if isinstance(kind, tuple) else (kind,)
    if isinstance(value, bool) and bool not in kinds:
        raise SnapshotDecodeError(
            f"Field '{key}' has type bool, expected {_type_names(kinds)}", field=key
        )
    if not isinstance(value, kinds):
        raise SnapshotDecodeError(
            f"Field '{key}' has type {type(value).__name__}, expected {_type_names(kinds)}",
            field=key,
        )
    if isinstance(value, float) and not math.isfinite(value):
        raise SnapshotDecodeError(f"Field '{key}' must be a finite number, got {value}", field=key)
    return value


def _type_names(kinds: tuple[type, ...]) -> str:
    return "|".join(k.__name__ for k in kinds)


# * Require a mapping at the top level of a decoded value
def _as_mapping(data: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise SnapshotDecodeError(
            f"{what} must be an object, got {type(data).__name__}", field=what
        )
    return data


_NUMBER = (int, float)


# * Catalog exercise as carried inside a session (opaque to the session core)
@dataclass(frozen=True)
class Exercise:
    name: str
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    muscle_group: str = ""
    primary_muscles: tuple[str, ...] = ()
    equipment: str = ""
    default_reps: int = 15
    default_sets: int = 3
    is_bodyweight: bool = False
    uses_weight: bool = True
    tracks_distance: bool = False
    is_time_based: bool = False
    description: str = ""
    is_superset: bool = False
    is_dropset: bool = False

    def __post_init__(self) -> None:
        # muscle group derives from the first primary muscle when not given
        if not self.muscle_group and self.primary_muscles:
            object.__setattr__(self, "muscle_group", self.primary_muscles[0])

    def is_valid(self) -> bool:
        return bool(self.name.strip())

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "muscle_group": self.muscle_group,
            "primary_muscles": list(self.primary_muscles),
            "equipment": self.equipment,
            "default_reps": self.default_reps,
            "default_sets": self.default_sets,
            "is_bodyweight": self.is_bodyweight,
            "uses_weight": self.uses_weight,
            "tracks_distance": self.tracks_distance,
            "is_time_based": self.is_time_based,
            "description": self.description,
            "is_superset": self.is_superset,
            "is_dropset": self.is_dropset,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "Exercise":
        d = _as_mapping(data, "exercise")
        muscles = _field(d, "primary_muscles", list, default=[])
        if not all(isinstance(m, str) for m in muscles):
            raise SnapshotDecodeError(
                "Field 'primary_muscles' must contain strings", field="primary_muscles"
            )
        return cls(
            id=_field(d, "id", str),
            name=_field(d, "name", str),
            muscle_group=_field(d, "muscle_group", str, default=""),
            primary_muscles=tuple(muscles),
            equipment=_field(d, "equipment", str, default=""),
            default_reps=_field(d, "default_reps", int, default=15),
            default_sets=_field(d, "default_sets", int, default=3),
            is_bodyweight=_field(d, "is_bodyweight", bool, default=False),
            uses_weight=_field(d, "uses_weight", bool, default=True),
            tracks_distance=_field(d, "tracks_distance", bool, default=False),
            is_time_based=_field(d, "is_time_based", bool, default=False),
            description=_field(d, "description", str, default=""),
            is_superset=_field(d, "is_superset", bool, default=False),
            is_dropset=_field(d, "is_dropset", bool, default=False),
        )


# * One logged set; previous_* values come from the last session, best_* from this one
@dataclass(frozen=True)
class ExerciseSet:
    set_number: int = 0
    weight: float = 0.0
    reps: int = 0
    distance: float = 0.0
    time: int = 0
    is_completed: bool = False
    previous_reps: Optional[int] = None
    previous_weight: Optional[float] = None
    previous_distance: Optional[float] = None
    previous_time: Optional[int] = None
    best_reps: Optional[int] = None
    best_weight: Optional[float] = None
    best_distance: Optional[float] = None
    best_time: Optional[int] = None

    def has_previous(self) -> bool:
        return (
            (self.previous_weight is not None and self.previous_reps is not None)
            or self.previous_distance is not None
            or self.previous_time is not None
        )

    # display string for the previous performance column
    def previous_display(self) -> str:
        if self.previous_weight is not None and self.previous_reps is not None:
            return f"{self.previous_weight:g} x {self.previous_reps}"
        if self.previous_distance is not None:
            return f"{self.previous_distance:g} mi"
        if self.previous_time is not None:
            minutes, secs = divmod(self.previous_time, 60)
            if minutes > 0:
                return f"{minutes}:{secs:02d}"
            return f"{secs} s"
        return "-"

    def to_dict(self) -> dict[str, Any]:
        return {
            "set_number": self.set_number,
            "weight": self.weight,
            "reps": self.reps,
            "distance": self.distance,
            "time": self.time,
            "is_completed": self.is_completed,
            "previous_reps": self.previous_reps,
            "previous_weight": self.previous_weight,
            "previous_distance": self.previous_distance,
            "previous_time": self.previous_time,
            "best_reps": self.best_reps,
            "best_weight": self.best_weight,
            "best_distance": self.best_distance,
            "best_time": self.best_time,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "ExerciseSet":
        d = _as_mapping(data, "set")
        return cls(
            set_number=_field(d, "set_number", int, default=0),
            weight=float(_field(d, "weight", _NUMBER, default=0.0)),
            reps=_field(d, "reps", int, default=0),
            distance=float(_field(d, "distance", _NUMBER, default=0.0)),
            time=_field(d, "time", int, default=0),
            is_completed=_field(d, "is_completed", bool, default=False),
            previous_reps=_field(d, "previous_reps", int, default=None, optional=True),
            previous_weight=_field(d, "previous_weight", _NUMBER, default=None, optional=True),
            previous_distance=_field(d, "previous_distance", _NUMBER, default=None, optional=True),
            previous_time=_field(d, "previous_time", int, default=None, optional=True),
            best_reps=_field(d, "best_reps", int, default=None, optional=True),
            best_weight=_field(d, "best_weight", _NUMBER, default=None, optional=True),
            best_distance=_field(d, "best_distance", _NUMBER, default=None, optional=True),
            best_time=_field(d, "best_time", int, default=None, optional=True),
        )


# * Exercise w/ its planned/logged sets inside a routine or session
@dataclass(frozen=True)
class WorkoutExercise:
    exercise: Exercise
    sets: tuple[ExerciseSet, ...] = ()
    notes: str = ""
    is_superset: bool = False
    superset_group: Optional[int] = None
    is_dropset: bool = False

    @property
    def name(self) -> str:
        return self.exercise.name

    def to_dict(self) -> dict[str, Any]:
        return {
            "exercise": self.exercise.to_dict(),
            "sets": [s.to_dict() for s in self.sets],
            "notes": self.notes,
            "is_superset": self.is_superset,
            "superset_group": self.superset_group,
            "is_dropset": self.is_dropset,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "WorkoutExercise":
        d = _as_mapping(data, "workout_exercise")
        return cls(
            exercise=Exercise.from_dict(_field(d, "exercise", dict)),
            sets=tuple(ExerciseSet.from_dict(s) for s in _field(d, "sets", list, default=[])),
            notes=_field(d, "notes", str, default=""),
            is_superset=_field(d, "is_superset", bool, default=False),
            superset_group=_field(d, "superset_group", int, default=None, optional=True),
            is_dropset=_field(d, "is_dropset", bool, default=False),
        )

    # * Build a bare entry from an exercise name (CLI & quick-start use)
    @classmethod
    def named(cls, name: str, sets: int = 0) -> "WorkoutExercise":
        return cls(
            exercise=Exercise(name=name),
            sets=tuple(ExerciseSet(set_number=i + 1) for i in range(sets)),
        )


# * Lifecycle state of the workout session tracker
class SessionState(Enum):
    NO_SESSION = "no_session"
    ACTIVE = "active"
    PAUSED = "paused"


# * Immutable record of an in-progress workout; replaced wholesale on every transition
@dataclass(frozen=True)
class SessionSnapshot:
    routine_name: str
    start_time: float
    routine_id: Optional[str] = None
    exercises: tuple[WorkoutExercise, ...] = ()
    is_active: bool = True
    current_exercise: Optional[str] = None
    paused_at: Optional[float] = None
    completed_sets: int = 0

    @property
    def state(self) -> SessionState:
        return SessionState.ACTIVE if self.is_active else SessionState.PAUSED

    def with_changes(self, **changes: Any) -> "SessionSnapshot":
        if "exercises" in changes:
            changes["exercises"] = tuple(changes["exercises"])
        return replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        return {
            "routine_id": self.routine_id,
            "routine_name": self.routine_name,
            "exercises": [e.to_dict() for e in self.exercises],
            "start_time": self.start_time,
            "is_active": self.is_active,
            "current_exercise": self.current_exercise,
            "paused_at": self.paused_at,
            "completed_sets": self.completed_sets,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "SessionSnapshot":
        d = _as_mapping(data, "session")
        completed = _field(d, "completed_sets", int, default=0)
        if completed < 0:
            raise SnapshotDecodeError(
                f"Field 'completed_sets' must be >= 0, got {completed}",
                field="completed_sets",
            )
        paused_at = _field(d, "paused_at", _NUMBER, default=None, optional=True)
        return cls(
            routine_id=_field(d, "routine_id", str, default=None, optional=True),
            routine_name=_field(d, "routine_name", str),
            exercises=tuple(
                WorkoutExercise.from_dict(e) for e in _field(d, "exercises", list, default=[])
            ),
            start_time=float(_field(d, "start_time", _NUMBER)),
            is_active=_field(d, "is_active", bool, default=True),
            current_exercise=_field(d, "current_exercise", str, default=None, optional=True),
            paused_at=float(paused_at) if paused_at is not None else None,
            completed_sets=completed,
        )


# * Paused-time accumulator persisted alongside (not inside) the snapshot
@dataclass(frozen=True)
class TimingState:
    cumulative_paused: float = 0.0
    last_pause: Optional[float] = None


# * Value published to observers on every mutation & every tick
@dataclass(frozen=True)
class SessionUpdate:
    duration: str
    current_exercise: str
    is_active: bool
    snapshot: Optional[SessionSnapshot]

    @property
    def state(self) -> SessionState:
        if self.snapshot is None:
            return SessionState.NO_SESSION
        return self.snapshot.state


# * Summary returned by finish() for an external history writer to commit
@dataclass(frozen=True)
class FinishedWorkout:
    snapshot: SessionSnapshot
    active_seconds: float
    finished_at: float

    @property
    def duration(self) -> str:
        from .duration import format_duration

        return format_duration(self.active_seconds)

    def to_dict(self) -> dict[str, Any]:
        return {
            "session": self.snapshot.to_dict(),
            "active_seconds": self.active_seconds,
            "finished_at": self.finished_at,
        }


# * First exercise name from an exercise list, or None when empty
def first_exercise_name(exercises: Sequence[WorkoutExercise]) -> Optional[str]:
    return exercises[0].name if exercises else None

"""Domain models for exercise logging."""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, datetime


@dataclass(frozen=True)
class ExerciseSet:
    """One logged strength set group or cardio session."""

    exercise_key: str
    sets: int = 0
    reps: int = 0
    weight_lbs: float = 0.0
    description: str = ""
    exercise_subtype: str | None = None
    duration_minutes: float | None = None
    distance_miles: float | None = None
    exercise_metadata: Mapping[str, float] | None = None
    logged_date: date | None = None
    created_at: datetime | None = None

    def metadata_value(self, key: str) -> float | None:
        """Return a metadata value, if present."""
        if not self.exercise_metadata:
            return None
        return self.exercise_metadata.get(key)


@dataclass(frozen=True)
class WeightEntryGroup:
    """Exercise keys logged together in a single entry."""

    entry_id: str
    logged_date: date
    exercise_keys: frozenset[str]
    source_routine_id: str | None = None


@dataclass(frozen=True)
class SavedRoutine:
    """A saved routine that can be re-logged."""

    id: str
    name: str
    exercise_sets: tuple[ExerciseSet, ...]
    use_count: int = 0
    last_used_at: datetime | None = None

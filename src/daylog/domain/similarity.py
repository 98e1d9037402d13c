"""Domain models for similarity and duplicate detection."""

from dataclasses import dataclass
from datetime import datetime
from typing import Literal

from daylog.domain.exercise import ExerciseSet, SavedRoutine
from daylog.domain.food import FoodEntry, FoodItem, SavedMeal

PatternConfidence = Literal["high", "medium", "low"]


@dataclass(frozen=True)
class PriorText:
    """A previously saved text to match against."""

    text: str
    signature: str | None = None
    last_used_at: datetime | None = None
    ref: str | None = None


@dataclass(frozen=True)
class SimilarityMatch:
    """Best prior text above the similarity threshold."""

    entry: PriorText
    score: float


@dataclass(frozen=True)
class SimilarEntryMatch:
    """Past food entry matched by a history reference."""

    entry: FoodEntry
    score: float
    match_type: Literal["input", "items"]


@dataclass(frozen=True)
class HistoryReference:
    """Result of scanning input for references to past entries."""

    has_reference: bool
    confidence: PatternConfidence
    matched_patterns: tuple[str, ...]


@dataclass(frozen=True)
class FoodSaveSuggestion:
    """Suggestion to save repeated food items as a meal."""

    match_count: int
    signature_hash: str
    items: tuple[FoodItem, ...]


@dataclass(frozen=True)
class WeightSaveSuggestion:
    """Suggestion to save repeated exercises as a routine."""

    match_count: int
    signature_hash: str
    exercises: tuple[ExerciseSet, ...]


@dataclass(frozen=True)
class ExerciseDiff:
    """Differences between a new exercise and its saved counterpart."""

    exercise_key: str
    description: str
    sets: int | None = None
    reps: int | None = None
    weight_lbs: float | None = None


@dataclass(frozen=True)
class MatchingRoutine:
    """Saved routine that matches newly logged exercises."""

    routine: SavedRoutine
    similarity: float
    diffs: tuple[ExerciseDiff, ...]

    @property
    def name(self) -> str:
        """Name of the matched routine."""
        return self.routine.name


@dataclass(frozen=True)
class MatchingMeal:
    """Saved meal that matches newly logged food items."""

    meal: SavedMeal
    similarity: float

    @property
    def name(self) -> str:
        """Name of the matched meal."""
        return self.meal.name

"""Pydantic models for API request payloads."""

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from daylog.domain.calorie_burn import BodyComposition, CalorieBurnSettings
from daylog.domain.exercise import ExerciseSet
from daylog.domain.food import FoodEntry, FoodItem
from daylog.domain.similarity import PriorText


class FoodItemPayload(BaseModel):
    """Food item payload."""

    description: str
    calories: float = 0
    protein: float = 0
    carbs: float = 0
    fiber: float = 0
    sugar: float = 0
    fat: float = 0
    saturated_fat: float = 0
    sodium: float = 0
    cholesterol: float = 0
    uid: str | None = None

    def to_domain(self) -> FoodItem:
        return FoodItem(**self.model_dump())


class FoodEntryPayload(BaseModel):
    """Logged food entry payload."""

    id: str
    eaten_date: date
    food_items: list[FoodItemPayload]
    raw_input: str | None = None
    source_meal_id: str | None = None
    created_at: datetime | None = None

    def to_domain(self) -> FoodEntry:
        return FoodEntry(
            id=self.id,
            eaten_date=self.eaten_date,
            food_items=tuple(item.to_domain() for item in self.food_items),
            raw_input=self.raw_input,
            source_meal_id=self.source_meal_id,
            created_at=self.created_at,
        )


class ExercisePayload(BaseModel):
    """Logged exercise payload.

    Counts are not range-checked here; the estimator rejects negative values.
    """

    model_config = ConfigDict(allow_inf_nan=False)

    exercise_key: str
    sets: int = 0
    reps: int = 0
    weight_lbs: float = 0
    description: str = ""
    exercise_subtype: str | None = None
    duration_minutes: float | None = None
    distance_miles: float | None = None
    exercise_metadata: dict[str, float | None] | None = None
    logged_date: date | None = None
    created_at: datetime | None = None

    def to_domain(self) -> ExerciseSet:
        metadata = None
        if self.exercise_metadata is not None:
            metadata = {
                key: value
                for key, value in self.exercise_metadata.items()
                if value is not None
            }
        return ExerciseSet(
            **self.model_dump(exclude={"exercise_metadata"}),
            exercise_metadata=metadata,
        )


class PriorTextPayload(BaseModel):
    """Previously saved text for matching."""

    text: str
    signature: str | None = None
    last_used_at: datetime | None = None
    ref: str | None = None

    def to_domain(self) -> PriorText:
        return PriorText(**self.model_dump())


class CalorieBurnSettingsPayload(BaseModel):
    """Per-request biometrics overriding the configured defaults."""

    model_config = ConfigDict(allow_inf_nan=False)

    calorie_burn_enabled: bool = True
    body_weight_lbs: float | None = None
    height_inches: float | None = None
    age: int | None = None
    body_composition: BodyComposition | None = None
    default_intensity: float | None = None

    def to_domain(self) -> CalorieBurnSettings:
        return CalorieBurnSettings(**self.model_dump())


class MatchRequest(BaseModel):
    candidate: str
    prior_entries: list[PriorTextPayload] = Field(default_factory=list)


class HistoryMatchRequest(BaseModel):
    input_text: str
    recent_entries: list[FoodEntryPayload] = Field(default_factory=list)


class EstimateRequest(BaseModel):
    exercise: ExercisePayload
    settings: CalorieBurnSettingsPayload | None = None


class EstimateTotalRequest(BaseModel):
    exercises: list[ExercisePayload]
    settings: CalorieBurnSettingsPayload | None = None


class ChartRequest(BaseModel):
    """Chart definition plus the raw entries it is evaluated over."""

    dsl: dict[str, Any]
    food_entries: list[FoodEntryPayload] = Field(default_factory=list)
    exercise_sets: list[ExercisePayload] = Field(default_factory=list)
    period: int | None = Field(default=None, gt=0)
    end_date: date | None = None

"""Shared test fixtures."""

from datetime import date, datetime

import pytest

from daylog.config import Settings
from daylog.containers import AppContainer, build_container
from daylog.domain.exercise import ExerciseSet
from daylog.domain.food import FoodEntry, FoodItem


def make_entry(
    entry_id: str,
    eaten_date: date,
    *items: FoodItem,
    raw_input: str | None = None,
    source_meal_id: str | None = None,
    created_at: datetime | None = None,
) -> FoodEntry:
    """Build a food entry from items."""
    return FoodEntry(
        id=entry_id,
        eaten_date=eaten_date,
        food_items=tuple(items),
        raw_input=raw_input,
        source_meal_id=source_meal_id,
        created_at=created_at,
    )


def make_set(exercise_key: str, logged_date: date | None = None, **kwargs) -> ExerciseSet:
    """Build an exercise row."""
    return ExerciseSet(exercise_key=exercise_key, logged_date=logged_date, **kwargs)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        similarity_threshold=0.6,
        repeat_min_matches=2,
        chart_label_density="half",
        body_weight_lbs=150,
    )


@pytest.fixture
def container(settings: Settings) -> AppContainer:
    return build_container(settings)

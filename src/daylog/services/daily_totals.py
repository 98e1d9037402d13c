"""Aggregation of logged entries into chart-ready daily totals."""

from collections import defaultdict
from collections.abc import Iterable
from datetime import date

from daylog.domain.calorie_burn import CalorieBurnSettings, ExactBurn
from daylog.domain.charts import (
    ChartFilter,
    DailyTotals,
    ExerciseDayTotals,
    ExerciseItemTotals,
    FoodDayTotals,
    FoodItemTotals,
)
from daylog.domain.exercise import ExerciseSet
from daylog.domain.exercises import exercise_category, get_exercise_display_name
from daylog.domain.food import FoodEntry
from daylog.services.calorie_burn import estimate_calorie_burn

_FOOD_FIELDS = (
    "calories",
    "protein",
    "carbs",
    "fat",
    "fiber",
    "sugar",
    "saturated_fat",
    "sodium",
    "cholesterol",
)


def _entry_food_totals(entry: FoodEntry) -> FoodDayTotals:
    sums = dict.fromkeys(_FOOD_FIELDS, 0.0)
    for item in entry.food_items:
        for name in _FOOD_FIELDS:
            sums[name] += getattr(item, name) or 0
    return FoodDayTotals(**sums, entries=1)


def _add_food(a: FoodDayTotals, b: FoodDayTotals) -> FoodDayTotals:
    sums = {name: getattr(a, name) + getattr(b, name) for name in _FOOD_FIELDS}
    return FoodDayTotals(**sums, entries=a.entries + b.entries)


def build_food_totals(
    entries: Iterable[FoodEntry], by_hour: bool = False, by_item: bool = False
) -> DailyTotals:
    """Sum food entries per eaten date.

    Each entry counts once towards ``entries``. Hourly buckets keep per-entry
    totals keyed by the hour the entry was created.
    """
    food: dict[date, FoodDayTotals] = {}
    hourly: dict[int, list[FoodDayTotals]] = defaultdict(list)
    items: dict[str, FoodItemTotals] = {}

    for entry in entries:
        entry_totals = _entry_food_totals(entry)
        existing = food.get(entry.eaten_date)
        food[entry.eaten_date] = (
            entry_totals if existing is None else _add_food(existing, entry_totals)
        )
        if by_hour and entry.created_at is not None:
            hourly[entry.created_at.hour].append(entry_totals)
        if by_item:
            for item in entry.food_items:
                label = item.description.strip()
                previous = items.get(label, FoodItemTotals(0, 0.0, 0.0))
                items[label] = FoodItemTotals(
                    count=previous.count + 1,
                    total_calories=previous.total_calories + (item.calories or 0),
                    total_protein=previous.total_protein + (item.protein or 0),
                )

    return DailyTotals(
        food=dict(sorted(food.items())),
        food_by_hour=dict(hourly) if by_hour else None,
        food_by_item=items if by_item else None,
    )


def _calories_burned(
    exercise: ExerciseSet, settings: CalorieBurnSettings | None
) -> float:
    reported = exercise.metadata_value("calories_burned")
    if reported is not None and reported > 0:
        return reported
    if settings is None:
        return 0.0
    result = estimate_calorie_burn(exercise, settings)
    if result is None:
        return 0.0
    if isinstance(result, ExactBurn):
        return float(result.value)
    return (result.low + result.high) / 2


def _matches_filter(exercise: ExerciseSet, chart_filter: ChartFilter | None) -> bool:
    if chart_filter is None:
        return True
    if chart_filter.exercise_key and exercise.exercise_key != chart_filter.exercise_key:
        return False
    if (
        chart_filter.exercise_subtype
        and exercise.exercise_subtype != chart_filter.exercise_subtype
    ):
        return False
    if (
        chart_filter.category
        and exercise_category(exercise.exercise_key) != chart_filter.category
    ):
        return False
    return True


class _ExerciseAccumulator:
    def __init__(self) -> None:
        self.sets = 0.0
        self.duration_minutes = 0.0
        self.distance_miles = 0.0
        self.calories_burned = 0.0
        self.keys: set[str] = set()
        self.entries = 0

    def add(self, exercise: ExerciseSet, calories_burned: float) -> None:
        self.sets += 1
        self.duration_minutes += exercise.duration_minutes or 0
        self.distance_miles += exercise.distance_miles or 0
        self.calories_burned += calories_burned
        self.keys.add(exercise.exercise_key)
        self.entries += 1

    def freeze(self) -> ExerciseDayTotals:
        return ExerciseDayTotals(
            sets=self.sets,
            duration_minutes=self.duration_minutes,
            distance_miles=self.distance_miles,
            calories_burned=self.calories_burned,
            unique_exercises=len(self.keys),
            entries=self.entries,
        )


def build_exercise_totals(
    exercises: Iterable[ExerciseSet],
    by_hour: bool = False,
    by_item: bool = False,
    by_category: bool = False,
    settings: CalorieBurnSettings | None = None,
    chart_filter: ChartFilter | None = None,
) -> DailyTotals:
    """Sum exercise rows per logged date.

    Every row counts as one set. Calories burned come from reported metadata
    or, when ``settings`` is given, from the midpoint of the estimate.
    Rows without a ``logged_date`` are skipped.
    """
    days: dict[date, _ExerciseAccumulator] = defaultdict(_ExerciseAccumulator)
    categories: dict[str, _ExerciseAccumulator] = defaultdict(_ExerciseAccumulator)
    hourly: dict[int, list[ExerciseDayTotals]] = defaultdict(list)
    items: dict[str, ExerciseItemTotals] = {}

    for exercise in exercises:
        if exercise.logged_date is None or not _matches_filter(exercise, chart_filter):
            continue
        burned = _calories_burned(exercise, settings)
        days[exercise.logged_date].add(exercise, burned)
        if by_category:
            categories[exercise_category(exercise.exercise_key)].add(exercise, burned)
        if by_hour and exercise.created_at is not None:
            hourly[exercise.created_at.hour].append(
                ExerciseDayTotals(
                    sets=1,
                    duration_minutes=exercise.duration_minutes or 0,
                    distance_miles=exercise.distance_miles or 0,
                    calories_burned=burned,
                    unique_exercises=1,
                    entries=1,
                )
            )
        if by_item:
            previous = items.get(exercise.exercise_key)
            items[exercise.exercise_key] = ExerciseItemTotals(
                description=(
                    previous.description
                    if previous is not None
                    else get_exercise_display_name(exercise.exercise_key)
                ),
                count=(previous.count if previous else 0) + 1,
                total_sets=(previous.total_sets if previous else 0) + 1,
                total_duration_minutes=(
                    (previous.total_duration_minutes if previous else 0)
                    + (exercise.duration_minutes or 0)
                ),
                total_calories_burned=(
                    (previous.total_calories_burned if previous else 0) + burned
                ),
            )

    return DailyTotals(
        exercise={day: days[day].freeze() for day in sorted(days)},
        exercise_by_hour=dict(hourly) if by_hour else None,
        exercise_by_item=items if by_item else None,
        exercise_by_category=(
            {name: totals.freeze() for name, totals in categories.items()}
            if by_category
            else None
        ),
    )


def merge_totals(food: DailyTotals, exercise: DailyTotals) -> DailyTotals:
    """Combine separately built food and exercise totals."""
    return DailyTotals(
        food=food.food,
        exercise=exercise.exercise,
        food_by_hour=food.food_by_hour,
        exercise_by_hour=exercise.exercise_by_hour,
        food_by_item=food.food_by_item,
        exercise_by_item=exercise.exercise_by_item,
        exercise_by_category=exercise.exercise_by_category,
    )

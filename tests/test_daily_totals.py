"""Tests for daily totals building."""

from datetime import date, datetime

import pytest

from daylog.domain.calorie_burn import CalorieBurnSettings
from daylog.domain.charts import ChartFilter
from daylog.domain.food import FoodItem
from daylog.services.daily_totals import (
    build_exercise_totals,
    build_food_totals,
    merge_totals,
)
from tests.conftest import make_entry, make_set

DAY = date(2024, 3, 4)


def test_build_food_totals_sums_entries_per_day() -> None:
    entries = [
        make_entry(
            "1",
            DAY,
            FoodItem("Eggs", 140, protein=12, fat=10),
            FoodItem("Toast", 90, carbs=15, fiber=2),
            created_at=datetime(2024, 3, 4, 8, 15),
        ),
        make_entry(
            "2",
            DAY,
            FoodItem("Salad", 350, protein=20, sodium=400),
            created_at=datetime(2024, 3, 4, 12, 30),
        ),
        make_entry("3", date(2024, 3, 5), FoodItem("Soup", 200)),
    ]
    totals = build_food_totals(entries, by_hour=True, by_item=True)

    day = totals.food[DAY]
    assert day.calories == 580
    assert day.protein == 32
    assert day.sodium == 400
    assert day.entries == 2
    assert list(totals.food) == [DAY, date(2024, 3, 5)]

    assert totals.food_by_hour is not None
    assert sorted(totals.food_by_hour) == [8, 12]
    assert totals.food_by_hour[8][0].calories == 230
    assert totals.food_by_item is not None
    assert totals.food_by_item["Eggs"].count == 1
    assert totals.food_by_item["Salad"].total_protein == 20


def test_build_food_totals_skips_optional_breakdowns() -> None:
    totals = build_food_totals([make_entry("1", DAY, FoodItem("Eggs", 140))])
    assert totals.food_by_hour is None
    assert totals.food_by_item is None
    assert totals.exercise == {}


def test_build_exercise_totals_counts_rows_as_sets() -> None:
    rows = [
        make_set("bench_press", DAY, sets=3, reps=10, weight_lbs=135),
        make_set("bench_press", DAY, sets=3, reps=8, weight_lbs=145),
        make_set(
            "walk_run",
            DAY,
            duration_minutes=30,
            distance_miles=3,
            exercise_metadata={"calories_burned": 320},
        ),
        make_set("squat", None, sets=5),
    ]
    totals = build_exercise_totals(rows, by_item=True, by_category=True)

    day = totals.exercise[DAY]
    assert day.sets == 3
    assert day.unique_exercises == 2
    assert day.duration_minutes == 30
    assert day.distance_miles == 3
    assert day.calories_burned == 320
    assert len(totals.exercise) == 1

    assert totals.exercise_by_item is not None
    assert totals.exercise_by_item["bench_press"].description == "Bench press"
    assert totals.exercise_by_item["bench_press"].count == 2
    assert totals.exercise_by_category is not None
    assert totals.exercise_by_category["Cardio"].duration_minutes == 30
    assert totals.exercise_by_category["Strength"].sets == 2


def test_build_exercise_totals_estimates_with_settings() -> None:
    rows = [make_set("bench_press", DAY, sets=3, reps=10, weight_lbs=135)]
    totals = build_exercise_totals(
        rows, settings=CalorieBurnSettings(body_weight_lbs=150)
    )
    assert totals.exercise[DAY].calories_burned == pytest.approx(10)


def test_build_exercise_totals_applies_filter() -> None:
    rows = [
        make_set("bench_press", DAY, sets=3),
        make_set("walk_run", DAY, exercise_subtype="running", duration_minutes=20),
        make_set("walk_run", DAY, exercise_subtype="walking", duration_minutes=40),
    ]
    cardio = build_exercise_totals(rows, chart_filter=ChartFilter(category="Cardio"))
    assert cardio.exercise[DAY].sets == 2

    running = build_exercise_totals(
        rows,
        chart_filter=ChartFilter(exerciseKey="walk_run", exerciseSubtype="running"),
    )
    assert running.exercise[DAY].duration_minutes == 20


def test_build_exercise_totals_by_hour() -> None:
    rows = [
        make_set("squat", DAY, sets=3, created_at=datetime(2024, 3, 4, 18, 5)),
        make_set("lunge", DAY, sets=3, created_at=datetime(2024, 3, 4, 18, 40)),
    ]
    totals = build_exercise_totals(rows, by_hour=True)
    assert totals.exercise_by_hour is not None
    assert len(totals.exercise_by_hour[18]) == 2


def test_merge_totals() -> None:
    food = build_food_totals([make_entry("1", DAY, FoodItem("Eggs", 140))])
    exercise = build_exercise_totals([make_set("squat", DAY, sets=3)])
    merged = merge_totals(food, exercise)
    assert merged.food[DAY].calories == 140
    assert merged.exercise[DAY].sets == 1

"""Tests for repeated entry detection and saved item lookup."""

from datetime import UTC, date, datetime

import pytest

from daylog.domain.exercise import ExerciseSet, SavedRoutine, WeightEntryGroup
from daylog.domain.food import FoodItem, SavedMeal
from daylog.services.repeated_entries import (
    SuggestionDismissals,
    detect_repeated_food_entry,
    detect_repeated_weight_entry,
    find_matching_saved_meal,
    find_matching_saved_routine,
    hash_exercise_keys,
    hash_signature,
)
from tests.conftest import make_entry


def test_hash_signature_known_values() -> None:
    assert hash_signature("") == "45h"
    assert hash_signature("a") == "3t3a"


def test_hash_exercise_keys_ignores_order_and_duplicates() -> None:
    assert hash_exercise_keys(["squat", "bench_press"]) == hash_exercise_keys(
        ["bench_press", "squat", "squat"]
    )


def test_hash_signature_handles_long_text() -> None:
    digest = hash_signature("blueberries honey oatmeal walnuts " * 20)
    assert digest
    assert digest.isalnum()


def test_detect_repeated_food_entry_suggests_after_two_matches() -> None:
    oatmeal = FoodItem("Oatmeal with blueberries", 300)
    recent = [
        make_entry("1", date(2024, 3, 1), FoodItem("oatmeal blueberries", 280)),
        make_entry("2", date(2024, 3, 2), FoodItem("Oatmeal w/ blueberries", 320)),
    ]
    suggestion = detect_repeated_food_entry([oatmeal], recent)
    assert suggestion is not None
    assert suggestion.match_count == 3
    assert suggestion.items == (oatmeal,)
    assert suggestion.signature_hash == hash_signature("blueberries oatmeal")


def test_detect_repeated_food_entry_ignores_saved_meal_entries() -> None:
    oatmeal = FoodItem("Oatmeal with blueberries", 300)
    recent = [
        make_entry("1", date(2024, 3, 1), FoodItem("oatmeal blueberries", 300)),
        make_entry(
            "2",
            date(2024, 3, 2),
            FoodItem("oatmeal blueberries", 300),
            source_meal_id="meal-1",
        ),
    ]
    assert detect_repeated_food_entry([oatmeal], recent) is None


def test_detect_repeated_food_entry_requires_similar_calories() -> None:
    oatmeal = FoodItem("Oatmeal with blueberries", 300)
    recent = [
        make_entry("1", date(2024, 3, 1), FoodItem("oatmeal blueberries", 600)),
        make_entry("2", date(2024, 3, 2), FoodItem("oatmeal blueberries", 600)),
    ]
    assert detect_repeated_food_entry([oatmeal], recent) is None


def test_detect_repeated_weight_entry() -> None:
    new = [ExerciseSet("bench_press", 3, 10, 135), ExerciseSet("squat", 3, 5, 225)]
    recent = [
        WeightEntryGroup("a", date(2024, 3, 1), frozenset({"bench_press", "squat"})),
        WeightEntryGroup("b", date(2024, 3, 3), frozenset({"squat", "bench_press"})),
        WeightEntryGroup(
            "c",
            date(2024, 3, 5),
            frozenset({"bench_press", "squat"}),
            source_routine_id="routine-1",
        ),
    ]
    suggestion = detect_repeated_weight_entry(new, recent)
    assert suggestion is not None
    assert suggestion.match_count == 3
    assert suggestion.signature_hash == hash_exercise_keys(["squat", "bench_press"])


def test_detect_repeated_weight_entry_needs_overlap() -> None:
    new = [ExerciseSet("bench_press"), ExerciseSet("squat")]
    recent = [
        WeightEntryGroup("a", date(2024, 3, 1), frozenset({"bench_press", "deadlift"})),
        WeightEntryGroup("b", date(2024, 3, 3), frozenset({"squat", "lunge"})),
    ]
    assert detect_repeated_weight_entry(new, recent) is None


def test_find_matching_saved_routine_reports_diffs() -> None:
    routine = SavedRoutine(
        id="r1",
        name="Push day",
        exercise_sets=(
            ExerciseSet("bench_press", 3, 10, 135, description="Bench press"),
            ExerciseSet("squat", 3, 5, 225, description="Squat"),
        ),
    )
    new = [
        ExerciseSet("bench_press", 3, 10, 145, description="Bench press"),
        ExerciseSet("squat", 3, 5, 225, description="Squat"),
    ]
    found = find_matching_saved_routine(new, [routine])
    assert found is not None
    assert found.name == "Push day"
    assert found.similarity == 1.0
    assert len(found.diffs) == 1
    diff = found.diffs[0]
    assert diff.exercise_key == "bench_press"
    assert diff.weight_lbs == 10
    assert diff.sets is None
    assert diff.reps is None


def test_find_matching_saved_routine_prefers_recently_used_on_tie() -> None:
    sets = (ExerciseSet("deadlift"),)
    older = SavedRoutine("r1", "Old", sets, last_used_at=datetime(2024, 1, 1, tzinfo=UTC))
    newer = SavedRoutine("r2", "New", sets, last_used_at=datetime(2024, 2, 1, tzinfo=UTC))
    found = find_matching_saved_routine([ExerciseSet("deadlift")], [older, newer])
    assert found is not None
    assert found.routine.id == "r2"


def test_find_matching_saved_routine_below_threshold() -> None:
    routine = SavedRoutine("r1", "Legs", (ExerciseSet("squat"), ExerciseSet("lunge")))
    assert find_matching_saved_routine([ExerciseSet("squat")], [routine]) is None


def test_find_matching_saved_meal() -> None:
    meals = [
        SavedMeal("m1", "Breakfast", (FoodItem("Eggs", 140), FoodItem("Toast", 90))),
        SavedMeal("m2", "Lunch", (FoodItem("Turkey sandwich", 450),)),
    ]
    found = find_matching_saved_meal(
        [FoodItem("toast", 80), FoodItem("eggs", 150)], meals
    )
    assert found is not None
    assert found.name == "Breakfast"
    assert found.similarity == pytest.approx(1.0)


def test_find_matching_saved_meal_uses_stored_signature() -> None:
    meal = SavedMeal("m1", "Usual", (), items_signature="coffee oat milk")
    found = find_matching_saved_meal([FoodItem("Coffee with oat milk", 60)], [meal])
    assert found is not None
    assert found.meal.id == "m1"


def test_suggestion_dismissals() -> None:
    dismissals = SuggestionDismissals()
    dismissals.dismiss("abc")
    assert dismissals.is_dismissed("abc")
    assert not dismissals.is_dismissed("def")
    assert not dismissals.should_show_opt_out()
    dismissals.dismiss("def")
    dismissals.dismiss("ghi")
    assert dismissals.dismissal_count == 3
    assert dismissals.should_show_opt_out()

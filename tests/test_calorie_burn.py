"""Tests for calorie burn estimation."""

import pytest

from daylog.domain.calorie_burn import (
    CalorieBurnSettings,
    ExactBurn,
    MetRange,
    RangeBurn,
)
from daylog.domain.exercise import ExerciseSet
from daylog.services.calorie_burn import (
    CalorieBurnService,
    apply_incline_bonus,
    compute_absolute_bmr,
    estimate,
    estimate_calorie_burn,
    estimate_total_calorie_burn,
    format_calorie_burn_settings_summary,
    format_calorie_burn_value,
    format_profile_stats_summary,
    get_bmr_scaling_factor,
    get_composition_multiplier,
    get_met_range,
    narrow_met_by_effort,
)

WEIGHTED = CalorieBurnSettings(body_weight_lbs=150)
UNKNOWN = CalorieBurnSettings()


def test_reported_calories_are_exact() -> None:
    exercise = ExerciseSet(
        "walk_run", duration_minutes=30, exercise_metadata={"calories_burned": 250.4}
    )
    assert estimate_calorie_burn(exercise, UNKNOWN) == ExactBurn(value=250)


def test_estimate_alias() -> None:
    assert estimate is estimate_calorie_burn


@pytest.mark.parametrize(
    "exercise",
    [
        ExerciseSet("bench_press"),
        ExerciseSet("walk_run"),
        ExerciseSet("walk_run", duration_minutes=0, distance_miles=0),
        ExerciseSet("rowing", sets=3, reps=10),
    ],
)
def test_zero_effort_is_empty(exercise: ExerciseSet) -> None:
    result = estimate_calorie_burn(exercise, WEIGHTED)
    assert result == RangeBurn(low=0, high=0)
    assert format_calorie_burn_value(result) == ""


def test_get_met_range() -> None:
    assert get_met_range("walk_run", "running") == MetRange(8.0, 12.0)
    assert get_met_range("walk_run") == MetRange(2.0, 12.0)
    assert get_met_range("rowing", "anything") == MetRange(4.0, 8.0)
    assert get_met_range("mystery_machine") == MetRange(3.0, 6.0)


def test_narrow_met_by_effort() -> None:
    wide = MetRange(2.0, 12.0)
    assert narrow_met_by_effort(wide, 10) == MetRange(11.0, 12.0)
    assert narrow_met_by_effort(wide, 1) == MetRange(2.0, 3.0)
    assert narrow_met_by_effort(wide, 0) == narrow_met_by_effort(wide, 1)


def test_apply_incline_bonus() -> None:
    assert apply_incline_bonus(MetRange(2.0, 3.0), 10) == MetRange(3.5, 4.5)


def test_cardio_with_known_weight() -> None:
    exercise = ExerciseSet("walk_run", exercise_subtype="running", duration_minutes=30)
    assert estimate_calorie_burn(exercise, WEIGHTED) == RangeBurn(low=272, high=408)


def test_cardio_without_weight_uses_population_range() -> None:
    exercise = ExerciseSet("rowing", duration_minutes=60)
    assert estimate_calorie_burn(exercise, UNKNOWN) == RangeBurn(low=236, high=689)


def test_strength_duration_from_sets() -> None:
    exercise = ExerciseSet("bench_press", sets=3, reps=10, weight_lbs=135)
    assert estimate_calorie_burn(exercise, WEIGHTED) == RangeBurn(low=7, high=13)


def test_heavier_body_weight_never_lowers_result() -> None:
    exercise = ExerciseSet("cycling", exercise_subtype="outdoor", duration_minutes=45)
    previous = None
    for body_weight in (100, 130, 160, 190, 220, 250):
        result = estimate_calorie_burn(
            exercise, CalorieBurnSettings(body_weight_lbs=body_weight)
        )
        assert isinstance(result, RangeBurn)
        if previous is not None:
            assert result.low >= previous.low
            assert result.high >= previous.high
        previous = result


def test_lifted_weight_never_lowers_result() -> None:
    light = estimate_calorie_burn(
        ExerciseSet("squat", sets=4, reps=8, weight_lbs=95), WEIGHTED
    )
    heavy = estimate_calorie_burn(
        ExerciseSet("squat", sets=4, reps=8, weight_lbs=275), WEIGHTED
    )
    assert isinstance(light, RangeBurn)
    assert isinstance(heavy, RangeBurn)
    assert heavy.low >= light.low
    assert heavy.high >= light.high


def test_effort_narrows_estimate() -> None:
    exercise = ExerciseSet(
        "walk_run", duration_minutes=30, exercise_metadata={"effort": 10}
    )
    wide = estimate_calorie_burn(ExerciseSet("walk_run", duration_minutes=30), WEIGHTED)
    narrow = estimate_calorie_burn(exercise, WEIGHTED)
    assert isinstance(wide, RangeBurn)
    assert isinstance(narrow, RangeBurn)
    assert narrow.high - narrow.low < wide.high - wide.low


def test_default_intensity_applies_without_effort() -> None:
    exercise = ExerciseSet("walk_run", duration_minutes=30)
    settings = CalorieBurnSettings(body_weight_lbs=150, default_intensity=1)
    with_effort = ExerciseSet(
        "walk_run", duration_minutes=30, exercise_metadata={"effort": 1}
    )
    assert estimate_calorie_burn(exercise, settings) == estimate_calorie_burn(
        with_effort, WEIGHTED
    )


@pytest.mark.parametrize(
    "exercise",
    [
        ExerciseSet("bench_press", sets=-1),
        ExerciseSet("walk_run", duration_minutes=-5),
        ExerciseSet("walk_run", duration_minutes=20, exercise_metadata={"effort": "x"}),
    ],
)
def test_invalid_input_returns_none(exercise: ExerciseSet) -> None:
    assert estimate_calorie_burn(exercise, WEIGHTED) is None


@pytest.mark.parametrize(
    "settings",
    [
        CalorieBurnSettings(height_inches=float("nan")),
        CalorieBurnSettings(body_weight_lbs=float("inf")),
        CalorieBurnSettings(body_weight_lbs=150, default_intensity=float("nan")),
    ],
)
def test_non_finite_settings_return_none(settings: CalorieBurnSettings) -> None:
    exercise = ExerciseSet("cycling", duration_minutes=30)
    assert estimate_calorie_burn(exercise, settings) is None


def test_overflowing_estimate_returns_none() -> None:
    exercise = ExerciseSet("cycling", duration_minutes=1e308)
    assert estimate_calorie_burn(exercise, WEIGHTED) is None
    assert estimate_total_calorie_burn([exercise], WEIGHTED) == RangeBurn(0, 0)


def test_composition_multiplier() -> None:
    assert get_composition_multiplier("female") == 0.95
    assert get_composition_multiplier("male") == 1.05
    assert get_composition_multiplier(None) == 1.0


def test_bmr_scaling_factor() -> None:
    assert get_bmr_scaling_factor(CalorieBurnSettings(body_weight_lbs=150)) == 1.0
    reference = CalorieBurnSettings(body_weight_lbs=150, height_inches=170 / 2.54, age=30)
    assert get_bmr_scaling_factor(reference) == pytest.approx(1.0)
    older = CalorieBurnSettings(body_weight_lbs=150, age=60)
    assert get_bmr_scaling_factor(older) < 1.0


def test_compute_absolute_bmr() -> None:
    assert compute_absolute_bmr(UNKNOWN) is None
    settings = CalorieBurnSettings(
        body_weight_lbs=180, height_inches=70, age=30, body_composition="male"
    )
    assert compute_absolute_bmr(settings) == pytest.approx(1772.7156, abs=0.01)


def test_estimate_total_exact_when_only_exact_and_zero() -> None:
    exercises = [
        ExerciseSet("walk_run", exercise_metadata={"calories_burned": 200}),
        ExerciseSet("bench_press"),
    ]
    assert estimate_total_calorie_burn(exercises, WEIGHTED) == ExactBurn(value=200)


def test_estimate_total_mixed_is_range() -> None:
    exercises = [
        ExerciseSet("walk_run", exercise_metadata={"calories_burned": 200}),
        ExerciseSet("bench_press", sets=3, reps=10, weight_lbs=135),
    ]
    assert estimate_total_calorie_burn(exercises, WEIGHTED) == RangeBurn(
        low=207, high=213
    )


def test_estimate_total_empty() -> None:
    assert estimate_total_calorie_burn([], WEIGHTED) == RangeBurn(low=0, high=0)


def test_format_calorie_burn_value() -> None:
    assert format_calorie_burn_value(ExactBurn(value=200)) == "~200"
    assert format_calorie_burn_value(RangeBurn(low=5, high=5)) == "~5"
    assert format_calorie_burn_value(RangeBurn(low=100, high=150)) == "~100-150"


def test_format_profile_stats_summary() -> None:
    settings = CalorieBurnSettings(body_weight_lbs=150, height_inches=61, age=48)
    assert format_profile_stats_summary(settings) == "150 lbs, 5'1\", 48 years old"
    assert format_profile_stats_summary(settings, height_unit="cm") == (
        "150 lbs, 155 cm, 48 years old"
    )
    assert format_profile_stats_summary(UNKNOWN) is None


def test_format_calorie_burn_settings_summary() -> None:
    settings = CalorieBurnSettings(body_weight_lbs=150, default_intensity=5)
    assert format_calorie_burn_settings_summary(settings) == "150 lbs, moderate"
    assert format_calorie_burn_settings_summary(UNKNOWN) == "Configured"
    disabled = CalorieBurnSettings(calorie_burn_enabled=False)
    assert format_calorie_burn_settings_summary(disabled) == ""


def test_service_uses_default_settings() -> None:
    service = CalorieBurnService(default_settings=WEIGHTED)
    exercise = ExerciseSet("walk_run", exercise_subtype="running", duration_minutes=30)
    assert service.estimate(exercise) == RangeBurn(low=272, high=408)
    assert service.estimate(exercise, UNKNOWN) != service.estimate(exercise)

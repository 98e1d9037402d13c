"""Calorie burn estimation for logged exercise.

MET values follow the 2024 Compendium of Physical Activities.

    calories = MET x weight_kg x duration_hours x composition x bmr_scale

Without a configured body weight the estimate spans a population weight range
instead of failing.
"""

import logging
import math
from collections.abc import Iterable
from dataclasses import dataclass

from daylog.domain.calorie_burn import (
    BodyComposition,
    CalorieBurnResult,
    CalorieBurnSettings,
    ExactBurn,
    MetRange,
    RangeBurn,
)
from daylog.domain.exercise import ExerciseSet
from daylog.domain.exercises import is_cardio_exercise

_logger = logging.getLogger(__name__)

LBS_TO_KG = 0.453592
INCHES_TO_CM = 2.54

_DEFAULT_SUBTYPE = "_default"

MET_TABLE: dict[str, MetRange | dict[str, MetRange]] = {
    # Cardio
    "walk_run": {
        "walking": MetRange(2.0, 3.5),
        "running": MetRange(8.0, 12.0),
        "hiking": MetRange(5.0, 8.0),
        _DEFAULT_SUBTYPE: MetRange(2.0, 12.0),
    },
    "cycling": {
        "indoor": MetRange(4.0, 8.5),
        "outdoor": MetRange(4.0, 10.0),
        _DEFAULT_SUBTYPE: MetRange(4.0, 10.0),
    },
    "swimming": {
        "pool": MetRange(6.0, 10.0),
        "open_water": MetRange(6.0, 10.0),
        _DEFAULT_SUBTYPE: MetRange(6.0, 10.0),
    },
    "rowing": MetRange(4.0, 8.0),
    "elliptical": MetRange(5.0, 8.0),
    "stair_climber": MetRange(6.0, 9.0),
    "jump_rope": MetRange(8.0, 12.0),
    # Strength
    "bench_press": MetRange(3.5, 5.0),
    "incline_bench_press": MetRange(3.5, 5.0),
    "decline_bench_press": MetRange(3.5, 5.0),
    "dumbbell_press": MetRange(3.5, 5.0),
    "chest_fly": MetRange(3.0, 4.5),
    "shoulder_press": MetRange(3.5, 5.0),
    "lateral_raise": MetRange(3.0, 4.0),
    "front_raise": MetRange(3.0, 4.0),
    "tricep_pushdown": MetRange(3.0, 4.5),
    "tricep_extension": MetRange(3.0, 4.5),
    "dips": MetRange(3.5, 5.5),
    "lat_pulldown": MetRange(3.5, 5.0),
    "pull_up": MetRange(3.5, 5.5),
    "seated_row": MetRange(3.5, 5.0),
    "bent_over_row": MetRange(3.5, 5.0),
    "dumbbell_row": MetRange(3.5, 5.0),
    "t_bar_row": MetRange(3.5, 5.0),
    "face_pull": MetRange(3.0, 4.0),
    "rear_delt_fly": MetRange(3.0, 4.0),
    "bicep_curl": MetRange(3.0, 4.5),
    "hammer_curl": MetRange(3.0, 4.5),
    "preacher_curl": MetRange(3.0, 4.5),
    "cable_curl": MetRange(3.0, 4.5),
    "squat": MetRange(5.0, 6.0),
    "front_squat": MetRange(5.0, 6.0),
    "goblet_squat": MetRange(4.5, 5.5),
    "leg_press": MetRange(4.5, 5.5),
    "hack_squat": MetRange(4.5, 5.5),
    "leg_extension": MetRange(3.0, 4.5),
    "leg_curl": MetRange(3.0, 4.5),
    "seated_leg_curl": MetRange(3.0, 4.5),
    "romanian_deadlift": MetRange(5.0, 6.0),
    "hip_thrust": MetRange(4.0, 5.5),
    "calf_raise": MetRange(3.0, 4.0),
    "seated_calf_raise": MetRange(3.0, 4.0),
    "lunge": MetRange(4.5, 6.0),
    "bulgarian_split_squat": MetRange(4.5, 6.0),
    "step_up": MetRange(4.5, 6.0),
    "deadlift": MetRange(5.0, 6.0),
    "sumo_deadlift": MetRange(5.0, 6.0),
    "trap_bar_deadlift": MetRange(5.0, 6.0),
    "clean": MetRange(5.0, 7.0),
    "snatch": MetRange(5.0, 7.0),
    "kettlebell_swing": MetRange(5.0, 7.0),
    "cable_crunch": MetRange(3.0, 4.0),
    "hanging_leg_raise": MetRange(3.0, 4.5),
    "ab_wheel": MetRange(3.5, 5.0),
    "plank": MetRange(3.0, 4.0),
    "russian_twist": MetRange(3.0, 4.0),
    "sit_up": MetRange(3.0, 4.0),
    "crunch": MetRange(3.0, 4.0),
    "functional_strength": MetRange(3.5, 6.0),
}

GENERIC_STRENGTH = MetRange(3.0, 6.0)
GENERIC_CARDIO = MetRange(4.0, 8.0)

# Population body weight range used when none is configured.
DEFAULT_WEIGHT_LOW_LBS = 130
DEFAULT_WEIGHT_HIGH_LBS = 190

# Seconds per set, including rest.
SECONDS_PER_SET_LOW = 35
SECONDS_PER_SET_HIGH = 45

REFERENCE_HEIGHT_CM = 170
REFERENCE_AGE = 30
_FALLBACK_WEIGHT_LBS = 160

INCLINE_MET_PER_5_PCT = 0.75


def get_met_range(exercise_key: str, subtype: str | None = None) -> MetRange:
    """Return the MET range for an exercise and optional subtype."""
    entry = MET_TABLE.get(exercise_key)
    if entry is None:
        return GENERIC_CARDIO if is_cardio_exercise(exercise_key) else GENERIC_STRENGTH
    if isinstance(entry, MetRange):
        return entry
    if subtype and subtype in entry:
        return entry[subtype]
    return entry.get(_DEFAULT_SUBTYPE, GENERIC_STRENGTH)


def narrow_met_by_effort(met: MetRange, effort: float) -> MetRange:
    """Narrow a MET range to +/-10% of its width around the effort point."""
    clamped = max(1.0, min(10.0, effort))
    position = (clamped - 1) / 9
    point = met.low + position * (met.high - met.low)
    margin = (met.high - met.low) * 0.1
    return MetRange(
        low=max(met.low, point - margin), high=min(met.high, point + margin)
    )


def apply_incline_bonus(met: MetRange, incline_pct: float) -> MetRange:
    """Add roughly 0.75 MET per 5% incline."""
    bonus = (incline_pct / 5) * INCLINE_MET_PER_5_PCT
    return MetRange(low=met.low + bonus, high=met.high + bonus)


def estimate_strength_duration(sets: int) -> tuple[float, float]:
    """Return the (low, high) duration in hours for a number of sets."""
    return (sets * SECONDS_PER_SET_LOW / 3600, sets * SECONDS_PER_SET_HIGH / 3600)


def get_composition_multiplier(composition: BodyComposition | None) -> float:
    if composition == "female":
        return 0.95
    if composition == "male":
        return 1.05
    return 1.0


def cm_to_inches(cm: float) -> float:
    return cm / INCHES_TO_CM


def inches_to_cm(inches: float) -> float:
    return inches * INCHES_TO_CM


def _mifflin_st_jeor(
    weight_kg: float, height_cm: float, age: float, composition: BodyComposition | None
) -> float:
    male = 10 * weight_kg + 6.25 * height_cm - 5 * age - 5
    female = 10 * weight_kg + 6.25 * height_cm - 5 * age - 161
    if composition == "male":
        return male
    if composition == "female":
        return female
    return (male + female) / 2


def compute_absolute_bmr(settings: CalorieBurnSettings) -> float | None:
    """Return BMR in kcal/day, or None when body weight is unknown."""
    if settings.body_weight_lbs is None or settings.body_weight_lbs <= 0:
        return None
    height_cm = (
        inches_to_cm(settings.height_inches)
        if settings.height_inches is not None
        else REFERENCE_HEIGHT_CM
    )
    age = settings.age if settings.age is not None else REFERENCE_AGE
    return _mifflin_st_jeor(
        settings.body_weight_lbs * LBS_TO_KG, height_cm, age, settings.body_composition
    )


def get_bmr_scaling_factor(settings: CalorieBurnSettings) -> float:
    """Ratio of the user's BMR to a 170 cm, 30 year old of the same weight."""
    if settings.height_inches is None and settings.age is None:
        return 1.0
    weight_kg = (settings.body_weight_lbs or _FALLBACK_WEIGHT_LBS) * LBS_TO_KG
    height_cm = (
        inches_to_cm(settings.height_inches)
        if settings.height_inches is not None
        else REFERENCE_HEIGHT_CM
    )
    age = settings.age if settings.age is not None else REFERENCE_AGE
    user_bmr = _mifflin_st_jeor(weight_kg, height_cm, age, settings.body_composition)
    reference_bmr = _mifflin_st_jeor(
        weight_kg, REFERENCE_HEIGHT_CM, REFERENCE_AGE, settings.body_composition
    )
    if reference_bmr <= 0 or user_bmr <= 0:
        return 1.0
    return user_bmr / reference_bmr


def _is_valid_number(value: object) -> bool:
    return (
        isinstance(value, int | float)
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def _validate(exercise: ExerciseSet) -> bool:
    for name in ("sets", "reps", "weight_lbs"):
        value = getattr(exercise, name)
        if not _is_valid_number(value) or value < 0:
            return False
    for name in ("duration_minutes", "distance_miles"):
        value = getattr(exercise, name)
        if value is not None and (not _is_valid_number(value) or value < 0):
            return False
    for value in (exercise.exercise_metadata or {}).values():
        if value is not None and not _is_valid_number(value):
            return False
    return True


def _validate_settings(settings: CalorieBurnSettings) -> bool:
    for name in ("body_weight_lbs", "height_inches", "age", "default_intensity"):
        value = getattr(settings, name)
        if value is not None and not _is_valid_number(value):
            return False
    return True


def estimate_calorie_burn(
    exercise: ExerciseSet, settings: CalorieBurnSettings
) -> CalorieBurnResult | None:
    """Estimate calories burned for one exercise.

    Returns ``ExactBurn`` for user-reported calories, ``RangeBurn`` otherwise,
    ``RangeBurn(0, 0)`` for zero-effort input and ``None`` for malformed input.
    """
    if not _validate(exercise) or not _validate_settings(settings):
        _logger.warning(
            "Rejected malformed exercise input for %s", exercise.exercise_key
        )
        return None

    reported = exercise.metadata_value("calories_burned")
    if reported is not None and reported > 0:
        return ExactBurn(value=round(reported))

    met = get_met_range(exercise.exercise_key, exercise.exercise_subtype)

    effort = exercise.metadata_value("effort")
    if effort is None:
        effort = settings.default_intensity
    if effort is not None:
        met = narrow_met_by_effort(met, effort)

    incline = exercise.metadata_value("incline_pct")
    if incline is not None and incline > 0:
        met = apply_incline_bonus(met, incline)

    if exercise.duration_minutes is not None and exercise.duration_minutes > 0:
        duration_low = duration_high = exercise.duration_minutes / 60
    elif not is_cardio_exercise(exercise.exercise_key) and exercise.sets > 0:
        duration_low, duration_high = estimate_strength_duration(exercise.sets)
    else:
        return RangeBurn(low=0, high=0)

    if settings.body_weight_lbs is not None and settings.body_weight_lbs > 0:
        weight_low = weight_high = settings.body_weight_lbs * LBS_TO_KG
    else:
        weight_low = DEFAULT_WEIGHT_LOW_LBS * LBS_TO_KG
        weight_high = DEFAULT_WEIGHT_HIGH_LBS * LBS_TO_KG

    scale = get_composition_multiplier(
        settings.body_composition
    ) * get_bmr_scaling_factor(settings)

    low = met.low * weight_low * duration_low * scale
    high = met.high * weight_high * duration_high * scale
    if not (math.isfinite(low) and math.isfinite(high)):
        _logger.warning("Calorie burn for %s is out of range", exercise.exercise_key)
        return None
    return RangeBurn(low=round(low), high=round(high))


estimate = estimate_calorie_burn


def estimate_total_calorie_burn(
    exercises: Iterable[ExerciseSet], settings: CalorieBurnSettings
) -> CalorieBurnResult:
    """Sum estimates; exact only when every non-zero estimate is exact."""
    total_low = 0
    total_high = 0
    has_exact = False
    all_exact = True
    for exercise in exercises:
        result = estimate_calorie_burn(exercise, settings)
        if result is None:
            continue
        if isinstance(result, ExactBurn):
            total_low += result.value
            total_high += result.value
            has_exact = True
        else:
            total_low += result.low
            total_high += result.high
            if not result.is_zero:
                all_exact = False

    if has_exact and all_exact:
        return ExactBurn(value=total_low)
    return RangeBurn(low=total_low, high=total_high)


def format_calorie_burn_value(result: CalorieBurnResult) -> str:
    """Format a result for display; zero ranges render as an empty string."""
    if isinstance(result, ExactBurn):
        return f"~{result.value}"
    if result.is_zero:
        return ""
    if result.low == result.high:
        return f"~{result.low}"
    return f"~{result.low}-{result.high}"


def format_inches_as_feet_inches(total_inches: float) -> str:
    feet = int(total_inches // 12)
    inches = round(total_inches % 12)
    return f"{feet}'{inches}\""


def format_profile_stats_summary(
    settings: CalorieBurnSettings, height_unit: str = "ft"
) -> str | None:
    """Summarize configured biometrics, e.g. ``150 lbs, 5'1", 48 years old``."""
    parts: list[str] = []
    if settings.body_weight_lbs is not None:
        parts.append(f"{settings.body_weight_lbs:g} lbs")
    if settings.height_inches is not None:
        if height_unit == "cm":
            parts.append(f"{round(inches_to_cm(settings.height_inches))} cm")
        else:
            parts.append(format_inches_as_feet_inches(settings.height_inches))
    if settings.age is not None:
        parts.append(f"{settings.age} years old")
    if settings.body_composition is not None:
        parts.append(settings.body_composition)
    return ", ".join(parts) if parts else None


def format_calorie_burn_settings_summary(settings: CalorieBurnSettings) -> str:
    if not settings.calorie_burn_enabled:
        return ""
    parts: list[str] = []
    if settings.body_weight_lbs:
        parts.append(f"{settings.body_weight_lbs:g} lbs")
    if settings.default_intensity:
        if settings.default_intensity <= 3:  # noqa: PLR2004
            parts.append("light")
        elif settings.default_intensity <= 6:  # noqa: PLR2004
            parts.append("moderate")
        else:
            parts.append("intense")
    if settings.body_composition:
        parts.append(settings.body_composition)
    return ", ".join(parts) if parts else "Configured"


@dataclass
class CalorieBurnService:
    """Applies configured user biometrics to calorie burn estimates."""

    default_settings: CalorieBurnSettings

    def estimate(
        self, exercise: ExerciseSet, settings: CalorieBurnSettings | None = None
    ) -> CalorieBurnResult | None:
        """Estimate one exercise with the given or default settings."""
        return estimate_calorie_burn(exercise, settings or self.default_settings)

    def estimate_total(
        self,
        exercises: Iterable[ExerciseSet],
        settings: CalorieBurnSettings | None = None,
    ) -> CalorieBurnResult:
        """Estimate the combined burn of several exercises."""
        return estimate_total_calorie_burn(exercises, settings or self.default_settings)

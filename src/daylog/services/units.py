"""Weight unit conversion and exercise display formatting."""

from typing import Literal

from daylog.domain.exercise import ExerciseSet

WeightUnit = Literal["lbs", "kg"]

LBS_TO_KG = 0.453592
KG_TO_LBS = 2.20462


def convert_weight(value: float, from_unit: WeightUnit, to_unit: WeightUnit) -> float:
    if from_unit == to_unit:
        return value
    return value * LBS_TO_KG if from_unit == "lbs" else value * KG_TO_LBS


def format_weight(lbs: float, unit: WeightUnit, decimals: int = 1) -> str:
    """Format a stored pound value in the display unit."""
    value = lbs * LBS_TO_KG if unit == "kg" else lbs
    return f"{value:.{decimals}f}"


def format_weight_with_unit(lbs: float, unit: WeightUnit, decimals: int = 1) -> str:
    return f"{format_weight(lbs, unit, decimals)} {unit}"


def parse_weight_to_lbs(value: float, unit: WeightUnit) -> float:
    """Convert user input to pounds for storage."""
    return value * KG_TO_LBS if unit == "kg" else value


def format_duration_mm_ss(minutes: float) -> str:
    """Format decimal minutes as ``m:ss``, or ``h:mm:ss`` from one hour up."""
    total_seconds = round(minutes * 60)
    hours, remainder = divmod(total_seconds, 3600)
    mins, secs = divmod(remainder, 60)
    if hours:
        return f"{hours}:{mins:02d}:{secs:02d}"
    return f"{mins}:{secs:02d}"


def generate_routine_name(exercise: ExerciseSet) -> str:
    """Name a routine after its first exercise.

    Cardio: "Rowing (15:30)", "Running (2.5 mi)" or "Running (15:30, 2.5 mi)".
    Strength: "Lat Pulldown (3x10 @ 65 lbs)".
    """
    duration = exercise.duration_minutes or 0
    distance = exercise.distance_miles or 0
    if exercise.weight_lbs == 0 and (duration > 0 or distance > 0):
        if duration > 0 and distance > 0:
            return (
                f"{exercise.description} "
                f"({format_duration_mm_ss(duration)}, {distance:.1f} mi)"
            )
        if distance > 0:
            return f"{exercise.description} ({distance:.1f} mi)"
        return f"{exercise.description} ({format_duration_mm_ss(duration)})"
    return (
        f"{exercise.description} "
        f"({exercise.sets}x{exercise.reps} @ {exercise.weight_lbs:g} lbs)"
    )

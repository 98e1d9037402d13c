"""Exercise catalog: muscle groups, display names and cardio flags."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ExerciseMuscles:
    """Muscle groups worked by an exercise."""

    primary: str
    secondary: tuple[str, ...] = ()
    is_cardio: bool = False


EXERCISE_MUSCLE_GROUPS: dict[str, ExerciseMuscles] = {
    # Upper body - push
    "bench_press": ExerciseMuscles("Chest", ("Triceps",)),
    "incline_bench_press": ExerciseMuscles("Chest", ("Triceps", "Shoulders")),
    "decline_bench_press": ExerciseMuscles("Chest", ("Triceps",)),
    "dumbbell_press": ExerciseMuscles("Chest", ("Triceps", "Shoulders")),
    "chest_fly": ExerciseMuscles("Chest", ("Shoulders",)),
    "shoulder_press": ExerciseMuscles("Shoulders", ("Triceps",)),
    "lateral_raise": ExerciseMuscles("Shoulders"),
    "front_raise": ExerciseMuscles("Shoulders"),
    "tricep_pushdown": ExerciseMuscles("Triceps"),
    "tricep_extension": ExerciseMuscles("Triceps"),
    "dips": ExerciseMuscles("Chest", ("Triceps", "Shoulders")),
    # Upper body - pull
    "lat_pulldown": ExerciseMuscles("Back", ("Biceps",)),
    "pull_up": ExerciseMuscles("Back", ("Biceps",)),
    "seated_row": ExerciseMuscles("Back", ("Biceps",)),
    "bent_over_row": ExerciseMuscles("Back", ("Biceps",)),
    "dumbbell_row": ExerciseMuscles("Back", ("Biceps",)),
    "t_bar_row": ExerciseMuscles("Back", ("Biceps",)),
    "face_pull": ExerciseMuscles("Shoulders", ("Upper Back",)),
    "rear_delt_fly": ExerciseMuscles("Shoulders", ("Upper Back",)),
    "bicep_curl": ExerciseMuscles("Biceps"),
    "hammer_curl": ExerciseMuscles("Biceps", ("Forearms",)),
    "preacher_curl": ExerciseMuscles("Biceps"),
    "cable_curl": ExerciseMuscles("Biceps"),
    "diverging_low_row": ExerciseMuscles("Back", ("Biceps",)),
    "shrugs": ExerciseMuscles("Upper Back"),
    # Lower body
    "squat": ExerciseMuscles("Quads", ("Glutes", "Hips", "Abs")),
    "front_squat": ExerciseMuscles("Quads", ("Glutes", "Abs")),
    "goblet_squat": ExerciseMuscles("Quads", ("Glutes", "Abs")),
    "leg_press": ExerciseMuscles("Quads", ("Glutes", "Hips")),
    "hack_squat": ExerciseMuscles("Quads", ("Glutes",)),
    "leg_extension": ExerciseMuscles("Quads"),
    "leg_curl": ExerciseMuscles("Hamstrings"),
    "seated_leg_curl": ExerciseMuscles("Hamstrings"),
    "romanian_deadlift": ExerciseMuscles("Hamstrings", ("Glutes", "Lower Back")),
    "hip_thrust": ExerciseMuscles("Glutes", ("Hamstrings",)),
    "calf_raise": ExerciseMuscles("Calves"),
    "seated_calf_raise": ExerciseMuscles("Calves"),
    "lunge": ExerciseMuscles("Quads", ("Glutes", "Hips")),
    "bulgarian_split_squat": ExerciseMuscles("Quads", ("Glutes",)),
    "step_up": ExerciseMuscles("Quads", ("Glutes",)),
    # Compound / full body
    "deadlift": ExerciseMuscles(
        "Glutes", ("Hamstrings", "Quads", "Hips", "Lower Back")
    ),
    "sumo_deadlift": ExerciseMuscles("Glutes", ("Hamstrings", "Quads", "Hips")),
    "trap_bar_deadlift": ExerciseMuscles(
        "Glutes", ("Hamstrings", "Quads", "Lower Back")
    ),
    "clean": ExerciseMuscles(
        "Quads", ("Hamstrings", "Glutes", "Shoulders", "Upper Back")
    ),
    "snatch": ExerciseMuscles(
        "Quads", ("Hamstrings", "Glutes", "Shoulders", "Upper Back")
    ),
    "kettlebell_swing": ExerciseMuscles(
        "Glutes", ("Hamstrings", "Abs", "Lower Back")
    ),
    # Core
    "cable_crunch": ExerciseMuscles("Abs"),
    "hanging_leg_raise": ExerciseMuscles("Abs", ("Hips",)),
    "ab_wheel": ExerciseMuscles("Abs"),
    "plank": ExerciseMuscles("Abs", ("Shoulders", "Glutes")),
    "russian_twist": ExerciseMuscles("Abs"),
    "sit_up": ExerciseMuscles("Abs", ("Hips",)),
    "crunch": ExerciseMuscles("Abs"),
    # Machines
    "chest_press_machine": ExerciseMuscles("Chest", ("Triceps",)),
    "shoulder_press_machine": ExerciseMuscles("Shoulders", ("Triceps",)),
    "pec_deck": ExerciseMuscles("Chest"),
    "cable_crossover": ExerciseMuscles("Chest"),
    "smith_machine_squat": ExerciseMuscles("Quads", ("Glutes",)),
    "smith_machine_bench": ExerciseMuscles("Chest", ("Triceps",)),
    "hip_abduction": ExerciseMuscles("Hips"),
    "hip_adduction": ExerciseMuscles("Hips"),
    "glute_kickback": ExerciseMuscles("Glutes"),
    "assisted_dip_machine": ExerciseMuscles("Chest", ("Triceps",)),
    "assisted_pullup_machine": ExerciseMuscles("Back", ("Biceps",)),
    # Cardio
    "walk_run": ExerciseMuscles("Cardio", is_cardio=True),
    "cycling": ExerciseMuscles("Cardio", is_cardio=True),
    "elliptical": ExerciseMuscles("Cardio", is_cardio=True),
    "rowing": ExerciseMuscles("Cardio", is_cardio=True),
    "stair_climber": ExerciseMuscles("Cardio", is_cardio=True),
    "swimming": ExerciseMuscles("Cardio", is_cardio=True),
    "jump_rope": ExerciseMuscles("Cardio", is_cardio=True),
    "functional_strength": ExerciseMuscles("Full Body"),
}

EXERCISE_DISPLAY_NAMES: dict[str, str] = {
    "pull_up": "Pull-up",
    "bent_over_row": "Bent-over row",
    "t_bar_row": "T-bar row",
    "step_up": "Step-up",
    "sit_up": "Sit-up",
    "chest_press_machine": "Chest press (machine)",
    "shoulder_press_machine": "Shoulder press (machine)",
    "smith_machine_squat": "Squat (Smith machine)",
    "smith_machine_bench": "Bench press (Smith machine)",
    "assisted_dip_machine": "Assisted dips (machine)",
    "assisted_pullup_machine": "Assisted pull-up (machine)",
    "walk_run": "Walk/run",
}

EXERCISE_SUBTYPE_DISPLAY: dict[str, str] = {
    "walking": "Walking",
    "running": "Running",
    "hiking": "Hiking",
    "indoor": "Indoor",
    "outdoor": "Outdoor",
    "pool": "Pool",
    "open_water": "Open Water",
}

_DISTANCE_TRACKED = frozenset({"walk_run", "cycling"})


def is_cardio_exercise(exercise_key: str) -> bool:
    """Return True when the exercise is duration-based cardio."""
    muscles = EXERCISE_MUSCLE_GROUPS.get(exercise_key)
    return muscles is not None and muscles.is_cardio


def has_distance_tracking(exercise_key: str) -> bool:
    """Return True when the exercise tracks distance."""
    return exercise_key in _DISTANCE_TRACKED


def get_exercise_display_name(exercise_key: str) -> str:
    """Return a sentence-case display name for an exercise key."""
    if exercise_key in EXERCISE_DISPLAY_NAMES:
        return EXERCISE_DISPLAY_NAMES[exercise_key]
    if exercise_key in EXERCISE_MUSCLE_GROUPS:
        return exercise_key.replace("_", " ").capitalize()
    return exercise_key.replace("_", " ")


def get_subtype_display_name(subtype: str | None) -> str | None:
    """Return a display label for an exercise subtype."""
    if not subtype:
        return None
    return EXERCISE_SUBTYPE_DISPLAY.get(subtype) or subtype[:1].upper() + subtype[1:]


def get_muscle_group(exercise_key: str) -> str | None:
    """Return the primary muscle group."""
    muscles = EXERCISE_MUSCLE_GROUPS.get(exercise_key)
    return muscles.primary if muscles else None


def get_muscle_group_display(exercise_key: str) -> str | None:
    """Return primary and secondary muscles, comma separated."""
    muscles = EXERCISE_MUSCLE_GROUPS.get(exercise_key)
    if muscles is None:
        return None
    return ", ".join((muscles.primary, *muscles.secondary))


def exercise_category(exercise_key: str) -> str:
    """Return the chart category for an exercise."""
    return "Cardio" if is_cardio_exercise(exercise_key) else "Strength"

"""Detection of repeated entries worth saving as meals or routines."""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime

from daylog.domain.exercise import ExerciseSet, SavedRoutine, WeightEntryGroup
from daylog.domain.food import FoodEntry, FoodItem, SavedMeal
from daylog.domain.similarity import (
    ExerciseDiff,
    FoodSaveSuggestion,
    MatchingMeal,
    MatchingRoutine,
    WeightSaveSuggestion,
)
from daylog.services.text_similarity import (
    create_items_signature,
    jaccard_similarity,
    preprocess_text,
)

FOOD_TEXT_SIMILARITY = 0.4
FOOD_CALORIE_TOLERANCE = 0.4
EXERCISE_KEY_SIMILARITY = 0.7
SAVED_MATCH_SIMILARITY = 0.7
SHOW_OPT_OUT_THRESHOLD = 3

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value >= 0x80000000 else value


def _to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_BASE36[remainder])
    return "".join(reversed(digits))


def _djb2(text: str) -> str:
    # Operates on UTF-16 code units so hashes stay stable across clients.
    encoded = text.encode("utf-16-le")
    value = 5381
    for index in range(0, len(encoded), 2):
        unit = int.from_bytes(encoded[index : index + 2], "little")
        value = _to_int32(_to_int32(value) << 5) + value + unit
    return _to_base36(abs(value))


def hash_signature(signature: str) -> str:
    """Hash a preprocessed text signature."""
    return _djb2(signature)


def hash_exercise_keys(keys: Iterable[str]) -> str:
    """Hash a set of exercise keys independent of order."""
    return _djb2("|".join(sorted(set(keys))))


def _key_set_similarity(
    a: set[str] | frozenset[str], b: set[str] | frozenset[str]
) -> float:
    union = a | b
    if not union:
        return 0.0
    return len(a & b) / len(union)


def detect_repeated_food_entry(
    new_items: Sequence[FoodItem],
    recent_entries: Sequence[FoodEntry],
    min_matches: int = 2,
) -> FoodSaveSuggestion | None:
    """Suggest saving food items that were logged manually ``min_matches`` times.

    A past entry matches when its signature Jaccard is at least 0.4 and its
    calories are within 40% of the new items. Entries logged from a saved
    meal are ignored.
    """
    if not new_items or not recent_entries:
        return None

    new_signature = create_items_signature(new_items)
    new_calories = sum(item.calories or 0 for item in new_items)

    matches = 0
    for entry in recent_entries:
        if entry.source_meal_id:
            continue
        history_signature = create_items_signature(entry.food_items)
        if jaccard_similarity(new_signature, history_signature) < FOOD_TEXT_SIMILARITY:
            continue
        history_calories = entry.total_calories
        calorie_diff = abs(new_calories - history_calories) / max(history_calories, 1)
        if calorie_diff <= FOOD_CALORIE_TOLERANCE:
            matches += 1

    if matches >= min_matches:
        return FoodSaveSuggestion(
            match_count=matches + 1,
            signature_hash=hash_signature(new_signature),
            items=tuple(new_items),
        )
    return None


def detect_repeated_weight_entry(
    new_exercises: Sequence[ExerciseSet],
    recent_entries: Sequence[WeightEntryGroup],
    min_matches: int = 2,
) -> WeightSaveSuggestion | None:
    """Suggest saving exercises whose key set was logged ``min_matches`` times.

    Only exercise keys are compared so that progression in sets, reps or
    weight still counts as the same routine.
    """
    if not new_exercises or not recent_entries:
        return None

    new_keys = {exercise.exercise_key for exercise in new_exercises}
    matches = sum(
        1
        for entry in recent_entries
        if not entry.source_routine_id
        and _key_set_similarity(new_keys, entry.exercise_keys)
        >= EXERCISE_KEY_SIMILARITY
    )

    if matches >= min_matches:
        return WeightSaveSuggestion(
            match_count=matches + 1,
            signature_hash=hash_exercise_keys(new_keys),
            exercises=tuple(new_exercises),
        )
    return None


def _last_used(value: datetime | None) -> datetime:
    if value is None:
        return datetime.min.replace(tzinfo=UTC)
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def _exercise_diffs(
    new_exercises: Sequence[ExerciseSet], saved: Sequence[ExerciseSet]
) -> tuple[ExerciseDiff, ...]:
    saved_by_key = {exercise.exercise_key: exercise for exercise in saved}
    diffs = []
    for exercise in new_exercises:
        previous = saved_by_key.get(exercise.exercise_key)
        if previous is None:
            continue
        sets = exercise.sets - previous.sets
        reps = exercise.reps - previous.reps
        weight = exercise.weight_lbs - previous.weight_lbs
        if sets or reps or weight:
            diffs.append(
                ExerciseDiff(
                    exercise_key=exercise.exercise_key,
                    description=exercise.description or previous.description,
                    sets=sets or None,
                    reps=reps or None,
                    weight_lbs=weight or None,
                )
            )
    return tuple(diffs)


def find_matching_saved_routine(
    new_exercises: Sequence[ExerciseSet],
    routines: Sequence[SavedRoutine],
    threshold: float = SAVED_MATCH_SIMILARITY,
) -> MatchingRoutine | None:
    """Find the saved routine whose exercise keys best match the new ones."""
    if not new_exercises or not routines:
        return None

    new_keys = {exercise.exercise_key for exercise in new_exercises}
    best: tuple[float, SavedRoutine] | None = None
    for routine in routines:
        routine_keys = {exercise.exercise_key for exercise in routine.exercise_sets}
        similarity = _key_set_similarity(new_keys, routine_keys)
        if similarity < threshold:
            continue
        if (
            best is None
            or similarity > best[0]
            or (
                similarity == best[0]
                and _last_used(routine.last_used_at) > _last_used(best[1].last_used_at)
            )
        ):
            best = (similarity, routine)

    if best is None:
        return None
    similarity, routine = best
    return MatchingRoutine(
        routine=routine,
        similarity=similarity,
        diffs=_exercise_diffs(new_exercises, routine.exercise_sets),
    )


def find_matching_saved_meal(
    new_items: Sequence[FoodItem],
    meals: Sequence[SavedMeal],
    threshold: float = SAVED_MATCH_SIMILARITY,
) -> MatchingMeal | None:
    """Find the saved meal whose signature best matches the new items."""
    if not new_items or not meals:
        return None

    new_signature = create_items_signature(new_items)
    if not new_signature:
        return None

    best: MatchingMeal | None = None
    for meal in meals:
        signature = (
            preprocess_text(meal.items_signature)
            if meal.items_signature is not None
            else create_items_signature(meal.food_items)
        )
        similarity = jaccard_similarity(new_signature, signature)
        if similarity < threshold:
            continue
        if (
            best is None
            or similarity > best.similarity
            or (
                similarity == best.similarity
                and _last_used(meal.last_used_at) > _last_used(best.meal.last_used_at)
            )
        ):
            best = MatchingMeal(meal=meal, similarity=similarity)
    return best


@dataclass
class SuggestionDismissals:
    """Tracks save suggestions the user has dismissed."""

    dismissed: set[str] = field(default_factory=set)
    dismissal_count: int = 0

    def is_dismissed(self, signature_hash: str) -> bool:
        """Return True when the pattern was dismissed before."""
        return signature_hash in self.dismissed

    def dismiss(self, signature_hash: str) -> None:
        """Permanently dismiss a pattern and count the dismissal."""
        self.dismissed.add(signature_hash)
        self.dismissal_count += 1

    def should_show_opt_out(self) -> bool:
        """Offer the opt-out link once the user has dismissed enough prompts."""
        return self.dismissal_count >= SHOW_OPT_OUT_THRESHOLD

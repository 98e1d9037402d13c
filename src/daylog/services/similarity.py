"""Similarity service tying matching heuristics to configuration."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from daylog.domain.exercise import ExerciseSet, SavedRoutine, WeightEntryGroup
from daylog.domain.food import FoodEntry, FoodItem, SavedMeal
from daylog.domain.similarity import (
    FoodSaveSuggestion,
    MatchingMeal,
    MatchingRoutine,
    PriorText,
    SimilarEntryMatch,
    SimilarityMatch,
    WeightSaveSuggestion,
)
from daylog.services.history_patterns import (
    MIN_SIMILARITY_REQUIRED,
    detect_history_reference,
)
from daylog.services.repeated_entries import (
    SuggestionDismissals,
    detect_repeated_food_entry,
    detect_repeated_weight_entry,
    find_matching_saved_meal,
    find_matching_saved_routine,
)
from daylog.services.text_similarity import DEFAULT_THRESHOLD, find_similar_entry, match

_logger = logging.getLogger(__name__)


@dataclass
class SimilarityService:
    """Service for near-duplicate and history-reference matching."""

    threshold: float = DEFAULT_THRESHOLD
    repeat_min_matches: int = 2
    dismissals: SuggestionDismissals = field(default_factory=SuggestionDismissals)

    def match(
        self, candidate_text: str, prior_entries: Sequence[PriorText]
    ) -> SimilarityMatch | None:
        """Return the best prior text at or above the configured threshold."""
        return match(candidate_text, prior_entries, self.threshold)

    def find_history_match(
        self, input_text: str, recent_entries: Sequence[FoodEntry]
    ) -> SimilarEntryMatch | None:
        """Resolve inputs like "same as yesterday" against recent entries."""
        reference = detect_history_reference(input_text)
        if not reference.has_reference:
            return None
        min_similarity = MIN_SIMILARITY_REQUIRED[reference.confidence]
        found = find_similar_entry(input_text, recent_entries, min_similarity)
        _logger.info(
            "History reference (%s, patterns=%s) matched=%s",
            reference.confidence,
            ",".join(reference.matched_patterns),
            found is not None,
        )
        return found

    def suggest_food_save(
        self, new_items: Sequence[FoodItem], recent_entries: Sequence[FoodEntry]
    ) -> FoodSaveSuggestion | None:
        """Suggest saving repeated food unless the pattern was dismissed."""
        suggestion = detect_repeated_food_entry(
            new_items, recent_entries, self.repeat_min_matches
        )
        if suggestion is None or self.dismissals.is_dismissed(
            suggestion.signature_hash
        ):
            return None
        return suggestion

    def suggest_routine_save(
        self,
        new_exercises: Sequence[ExerciseSet],
        recent_entries: Sequence[WeightEntryGroup],
    ) -> WeightSaveSuggestion | None:
        """Suggest saving a repeated routine unless the pattern was dismissed."""
        suggestion = detect_repeated_weight_entry(
            new_exercises, recent_entries, self.repeat_min_matches
        )
        if suggestion is None or self.dismissals.is_dismissed(
            suggestion.signature_hash
        ):
            return None
        return suggestion

    def dismiss_suggestion(self, signature_hash: str) -> None:
        self.dismissals.dismiss(signature_hash)
        _logger.info("Dismissed save suggestion %s", signature_hash)

    def find_saved_routine(
        self, new_exercises: Sequence[ExerciseSet], routines: Sequence[SavedRoutine]
    ) -> MatchingRoutine | None:
        return find_matching_saved_routine(new_exercises, routines)

    def find_saved_meal(
        self, new_items: Sequence[FoodItem], meals: Sequence[SavedMeal]
    ) -> MatchingMeal | None:
        return find_matching_saved_meal(new_items, meals)

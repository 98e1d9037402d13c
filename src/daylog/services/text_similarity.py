"""Text normalization and similarity scoring for food descriptions."""

import re
from collections.abc import Iterable, Sequence
from datetime import UTC, date, datetime

from daylog.domain.food import FoodEntry, FoodItem
from daylog.domain.similarity import PriorText, SimilarEntryMatch, SimilarityMatch

DEFAULT_THRESHOLD = 0.6
RECENCY_TOLERANCE = 0.05
CONTAINMENT_WEIGHT = 0.7
JACCARD_WEIGHT = 0.3

STOP_WORDS = frozenset(
    {
        "a", "an", "the", "with", "of", "from", "and", "at", "in", "on", "for",
        "to", "my", "some", "like", "about", "around", "i",
    }
)  # fmt: skip

# Words that signal a history reference but never name a food.
HISTORY_REFERENCE_WORDS = frozenset(
    {
        # time references
        "yesterday", "yesterdays", "today", "monday", "tuesday", "wednesday",
        "thursday", "friday", "saturday", "sunday", "earlier", "recently",
        "recent", "before", "last", "week", "night", "morning", "evening",
        "afternoon", "time", "day", "days", "ago", "while",
        # portion and repetition
        "another", "more", "same", "again", "repeat", "leftover", "leftovers",
        "remaining", "finished", "rest", "half", "other", "those", "that",
        "thing", "one", "ones",
        # meals
        "breakfast", "lunch", "dinner", "brunch", "meal", "snack",
        # eating verbs
        "had", "have", "ate", "eaten", "eating", "eat",
        "made", "make", "cooked", "ordered", "got", "grabbed", "picked",
    }
)  # fmt: skip

MULTI_WORD_ABBREVIATIONS = {
    "fl oz": "fluid ounce",
    "fl. oz": "fluid ounce",
    "fl. oz.": "fluid ounce",
}

SINGLE_WORD_ABBREVIATIONS = {
    "pb": "peanut butter",
    "w": "with",
    "tb": "tablespoon",
    "tbsp": "tablespoon",
    "tsp": "teaspoon",
    "c": "cup",
    "ml": "milliliter",
    "l": "liter",
    "ltr": "liter",
    "pt": "pint",
    "qt": "quart",
    "gal": "gallon",
    "g": "gram",
    "kg": "kilogram",
    "mg": "milligram",
    "oz": "ounce",
    "lb": "pound",
    "lbs": "pounds",
    "choc": "chocolate",
    "veg": "vegetable",
    "veggies": "vegetables",
}

_MULTI_WORD_PATTERNS = [
    (re.compile(re.escape(abbr), re.IGNORECASE), full)
    for abbr, full in MULTI_WORD_ABBREVIATIONS.items()
]
_SINGLE_WORD_PATTERN = re.compile(
    r"\b(" + "|".join(re.escape(abbr) for abbr in SINGLE_WORD_ABBREVIATIONS) + r")\b"
)
_PUNCTUATION = re.compile(r"[^\w\s]")
_DIGITS = re.compile(r"\d+")


def _expand_and_strip(text: str) -> list[str]:
    result = text.lower()
    for pattern, full in _MULTI_WORD_PATTERNS:
        result = pattern.sub(full, result)
    result = _PUNCTUATION.sub(" ", result)
    result = _SINGLE_WORD_PATTERN.sub(
        lambda found: SINGLE_WORD_ABBREVIATIONS[found.group(1)], result
    )
    result = _DIGITS.sub("", result)
    return result.split()


def preprocess_text(text: str) -> str:
    """Normalize text into a sorted, stop-word-free token signature."""
    words = [word for word in _expand_and_strip(text) if word not in STOP_WORDS]
    return " ".join(sorted(words))


def create_items_signature(items: Iterable[FoodItem]) -> str:
    """Return the signature of a group of food items."""
    return preprocess_text(" ".join(item.description for item in items))


def jaccard_similarity(a: str, b: str) -> float:
    """Token-set Jaccard similarity of two preprocessed strings."""
    set_a = set(a.split())
    set_b = set(b.split())
    if not set_a and not set_b:
        return 1.0
    if not set_a or not set_b:
        return 0.0
    return len(set_a & set_b) / len(set_a | set_b)


def match(
    candidate_text: str,
    prior_entries: Sequence[PriorText],
    threshold: float | None = None,
) -> SimilarityMatch | None:
    """Return the best prior entry whose similarity reaches ``threshold``.

    Higher scores win. Equal scores prefer the most recently used entry.
    Input that normalizes to no tokens never matches. Without a threshold
    the ``Settings.similarity_threshold`` default of 0.6 applies.
    """
    if threshold is None:
        threshold = DEFAULT_THRESHOLD
    candidate = preprocess_text(candidate_text or "")
    if not candidate:
        return None

    best: SimilarityMatch | None = None
    for entry in prior_entries:
        signature = (
            entry.signature
            if entry.signature is not None
            else preprocess_text(entry.text)
        )
        if not signature:
            continue
        score = jaccard_similarity(candidate, signature)
        if score < threshold:
            continue
        if best is None or score > best.score:
            best = SimilarityMatch(entry=entry, score=score)
        elif score == best.score and _recency(entry.last_used_at) > _recency(
            best.entry.last_used_at
        ):
            best = SimilarityMatch(entry=entry, score=score)
    return best


def _recency(value: datetime | None) -> datetime:
    if value is None:
        return datetime.min.replace(tzinfo=UTC)
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def extract_candidate_food_words(text: str) -> list[str]:
    """Strip stop words and history references, keeping likely food words.

    "another tilapia like from yesterday" -> ["tilapia"]
    """
    return [
        word
        for word in _expand_and_strip(text)
        if word not in STOP_WORDS and word not in HISTORY_REFERENCE_WORDS
    ]


def levenshtein_distance(a: str, b: str) -> int:
    """Minimum number of single-character edits between two strings."""
    if not a:
        return len(b)
    if not b:
        return len(a)
    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        current = [i]
        for j, char_b in enumerate(b, start=1):
            cost = 0 if char_a == char_b else 1
            current.append(
                min(previous[j] + 1, current[j - 1] + 1, previous[j - 1] + cost)
            )
        previous = current
    return previous[-1]


def is_fuzzy_match(word: str, other: str) -> bool:
    """Allow 1 edit for short words (<=5 chars) and 2 for longer ones."""
    if word == other:
        return True
    max_distance = 1 if min(len(word), len(other)) <= 5 else 2  # noqa: PLR2004
    return levenshtein_distance(word, other) <= max_distance


def _fuzzy_contains(word: str, targets: set[str]) -> bool:
    return any(is_fuzzy_match(word, target) for target in targets)


def hybrid_similarity_score(candidate_words: Sequence[str], target_text: str) -> float:
    """Weighted blend of fuzzy containment (70%) and fuzzy Jaccard (30%)."""
    if not candidate_words:
        return 0.0
    target_words = {
        word
        for word in _PUNCTUATION.sub(" ", target_text.lower()).split()
        if word not in STOP_WORDS
    }
    input_set = set(candidate_words)

    matched = sum(1 for word in candidate_words if _fuzzy_contains(word, target_words))
    containment = matched / len(candidate_words)

    intersection = sum(1 for word in input_set if _fuzzy_contains(word, target_words))
    union_size = len(input_set) + len(target_words) - intersection
    jaccard = intersection / union_size if union_size > 0 else 0.0

    return containment * CONTAINMENT_WEIGHT + jaccard * JACCARD_WEIGHT


def _is_better_match(
    score: float, eaten: date, best_score: float, best_eaten: date
) -> bool:
    diff = score - best_score
    if diff > RECENCY_TOLERANCE:
        return True
    if diff < -RECENCY_TOLERANCE:
        return False
    return eaten > best_eaten


def find_similar_entry(
    input_text: str,
    recent_entries: Sequence[FoodEntry],
    min_similarity: float,
) -> SimilarEntryMatch | None:
    """Find the past entry a history-referencing input most likely means.

    Both the combined item descriptions and the raw input of each entry are
    scored. Scores within 0.05 of each other prefer the more recent entry.
    """
    candidate_words = extract_candidate_food_words(input_text)
    if not candidate_words:
        return None

    best: SimilarEntryMatch | None = None
    for entry in recent_entries:
        scored: list[tuple[float, str]] = [
            (hybrid_similarity_score(candidate_words, entry.items_description), "items")
        ]
        # Scanned entries store barcodes as raw input.
        if entry.raw_input and not entry.raw_input.startswith("Scanned:"):
            scored.append(
                (hybrid_similarity_score(candidate_words, entry.raw_input), "input")
            )
        for score, match_type in scored:
            if score < min_similarity:
                continue
            if best is None or _is_better_match(
                score, entry.eaten_date, best.score, best.entry.eaten_date
            ):
                best = SimilarEntryMatch(
                    entry=entry, score=score, match_type=match_type
                )
    return best

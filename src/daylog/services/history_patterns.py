"""Detection of natural-language references to past food entries.

Matching runs before any AI analysis so that "same as yesterday" or "the
other half of the pizza" can be resolved against recent history. Patterns are
grouped by confidence; the first group with any hit decides the result.
"""

import re

from daylog.domain.similarity import HistoryReference, PatternConfidence

_DAYS = "monday|tuesday|wednesday|thursday|friday|saturday|sunday"
_MONTHS = (
    "january|february|march|april|may|june|july|august|september|october"
    "|november|december"
)
_MONTH_ABBREVIATIONS = "jan|feb|mar|apr|may|jun|jul|aug|sep|oct|nov|dec"
_MEALS = "breakfast|lunch|dinner|brunch"


def _pattern(expression: str) -> re.Pattern[str]:
    return re.compile(expression, re.IGNORECASE)


HIGH_CONFIDENCE_PATTERNS: dict[str, re.Pattern[str]] = {
    # "from Monday", "on Tuesday", "last Friday"
    "dayOfWeek": _pattern(rf"\b(from|on)?\s*({_DAYS})\b"),
    "yesterday": _pattern(r"\b(yesterday|yesterday's)\b"),
    # "Feb 1", "January 15th"
    "monthDay": _pattern(rf"\b({_MONTH_ABBREVIATIONS})\w*\s+\d{{1,2}}(st|nd|rd|th)?\b"),
    # "from 2/1", "on 1/15"
    "numericDate": _pattern(r"\b(from|on)\s*\d{1,2}/\d{1,2}\b"),
    "dayBefore": _pattern(r"\bday before yesterday\b"),
    "otherHalf": _pattern(r"\bother half\b"),
    "restOf": _pattern(r"\brest of\b"),
    "leftover": _pattern(r"\b(leftover|leftovers)\b"),
    "remaining": _pattern(r"\bremaining\b"),
    "finished": _pattern(r"\bfinished\b"),
}

MEDIUM_CONFIDENCE_PATTERNS: dict[str, re.Pattern[str]] = {
    "otherDay": _pattern(r"\bthe other day\b"),
    "earlier": _pattern(r"\bearlier\b"),
    "recently": _pattern(r"\b(recently|recent)\b"),
    "lastTime": _pattern(r"\blast time\b"),
    "lastWeek": _pattern(r"\blast week\b"),
    "fewDaysAgo": _pattern(r"\b(a\s+)?(few days ago|couple days ago)\b"),
    "aWhileAgo": _pattern(r"\ba while ago\b"),
    "hadBefore": _pattern(r"\b(had|ate|from)\s+before\b"),
    # "in January", "back in December"
    "inMonth": _pattern(rf"\b(in|back in|during)\s+({_MONTHS})\b"),
    "lotOfIn": _pattern(rf"\b(a lot|lots)\s+(of\s+)?in\s+({_MONTHS})\b"),
    "sameThing": _pattern(r"\b(same thing|same as|the\s+same)\b"),
    "again": _pattern(r"\b(that|it)\s+again\b"),
    "another": _pattern(r"\banother\s+(one|of)\b"),
    "repeat": _pattern(r"\brepeat\b"),
    "moreOf": _pattern(r"\bmore of\s+(the|that|those)\b"),
}

LOW_CONFIDENCE_PATTERNS: dict[str, re.Pattern[str]] = {
    "fromMeal": _pattern(rf"\bfrom\s+({_MEALS})\b"),
    "thisMorning": _pattern(r"\bthis\s+morning\b"),
    "earlierToday": _pattern(r"\bearlier\s+today\b"),
    "lastNight": _pattern(r"\b(last night|from\s+last\s+night)\b"),
}

# Weaker evidence of a history reference demands a closer text match.
MIN_SIMILARITY_REQUIRED: dict[PatternConfidence, float] = {
    "high": 0.35,
    "medium": 0.45,
    "low": 0.55,
}

_PATTERN_GROUPS: tuple[tuple[PatternConfidence, dict[str, re.Pattern[str]]], ...] = (
    ("high", HIGH_CONFIDENCE_PATTERNS),
    ("medium", MEDIUM_CONFIDENCE_PATTERNS),
    ("low", LOW_CONFIDENCE_PATTERNS),
)


def detect_history_reference(text: str) -> HistoryReference:
    """Return whether the text refers to past entries, and how confidently."""
    for confidence, patterns in _PATTERN_GROUPS:
        matched = tuple(
            name for name, pattern in patterns.items() if pattern.search(text)
        )
        if matched:
            return HistoryReference(
                has_reference=True, confidence=confidence, matched_patterns=matched
            )
    return HistoryReference(has_reference=False, confidence="low", matched_patterns=())

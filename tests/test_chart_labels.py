"""Tests for chart label thinning."""

import pytest

from daylog.services.chart_labels import (
    build_label_mask,
    get_exercise_label_interval,
    get_full_width_label_interval,
    get_label_interval,
    label_interval,
)


@pytest.mark.parametrize(
    ("length", "expected"),
    [(1, 1), (7, 1), (8, 2), (14, 2), (21, 3), (30, 4), (50, 5), (70, 7), (90, 10)],
)
def test_half_width_interval(length: int, expected: int) -> None:
    assert get_label_interval(length) == expected


@pytest.mark.parametrize(
    ("length", "expected"),
    [(14, 1), (15, 2), (28, 2), (42, 3), (70, 4), (90, 5), (91, 7)],
)
def test_full_width_interval(length: int, expected: int) -> None:
    assert get_full_width_label_interval(length) == expected


@pytest.mark.parametrize(
    ("length", "expected"),
    [(12, 1), (20, 2), (35, 4), (50, 6), (70, 10), (90, 15), (120, 20)],
)
def test_exercise_interval(length: int, expected: int) -> None:
    assert get_exercise_label_interval(length) == expected


def test_label_interval_dispatches_by_density() -> None:
    assert label_interval(30, "half") == 4
    assert label_interval(30, "full") == 3
    assert label_interval(30, "exercise") == 4


def test_build_label_mask_counts_from_newest() -> None:
    assert build_label_mask(10, 3) == [
        True, False, False, True, False, False, True, False, False, True,
    ]  # fmt: skip


def test_build_label_mask_always_labels_last_point() -> None:
    for length in range(1, 40):
        mask = build_label_mask(length, get_label_interval(length))
        assert mask[-1]


def test_build_label_mask_empty() -> None:
    assert build_label_mask(0, 1) == []

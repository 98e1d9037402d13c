"""X-axis label thinning for trend charts.

Intervals count from the right so the most recent point is always labeled.
"""

from collections.abc import Callable
from typing import Literal

LabelDensity = Literal["half", "full", "exercise"]


def get_label_interval(length: int) -> int:
    """Interval for half-width charts."""
    if length <= 7:  # noqa: PLR2004
        return 1
    if length <= 14:  # noqa: PLR2004
        return 2
    if length <= 21:  # noqa: PLR2004
        return 3
    if length <= 35:  # noqa: PLR2004
        return 4
    if length <= 50:  # noqa: PLR2004
        return 5
    if length <= 70:  # noqa: PLR2004
        return 7
    return 10


def get_full_width_label_interval(length: int) -> int:
    """Interval for full-width charts, which have room for more labels."""
    if length <= 14:  # noqa: PLR2004
        return 1
    if length <= 28:  # noqa: PLR2004
        return 2
    if length <= 42:  # noqa: PLR2004
        return 3
    if length <= 70:  # noqa: PLR2004
        return 4
    if length <= 90:  # noqa: PLR2004
        return 5
    return 7


def get_exercise_label_interval(length: int) -> int:
    """Interval for exercise charts, which plot many weight/date combinations."""
    if length <= 12:  # noqa: PLR2004
        return 1
    if length <= 20:  # noqa: PLR2004
        return 2
    if length <= 35:  # noqa: PLR2004
        return 4
    if length <= 50:  # noqa: PLR2004
        return 6
    if length <= 70:  # noqa: PLR2004
        return 10
    if length <= 90:  # noqa: PLR2004
        return 15
    return 20


INTERVAL_FUNCTIONS: dict[LabelDensity, Callable[[int], int]] = {
    "half": get_label_interval,
    "full": get_full_width_label_interval,
    "exercise": get_exercise_label_interval,
}


def label_interval(length: int, density: LabelDensity = "half") -> int:
    return INTERVAL_FUNCTIONS[density](length)


def build_label_mask(length: int, interval: int) -> list[bool]:
    """Mark every ``interval``-th point, counting back from the newest."""
    step = max(1, interval)
    return [(length - 1 - index) % step == 0 for index in range(length)]

"""Domain models for calorie burn estimation."""

from dataclasses import dataclass
from typing import Literal

BodyComposition = Literal["female", "male"]


@dataclass(frozen=True)
class CalorieBurnSettings:
    """User biometrics used to scale estimates."""

    calorie_burn_enabled: bool = True
    body_weight_lbs: float | None = None
    height_inches: float | None = None
    age: int | None = None
    body_composition: BodyComposition | None = None
    default_intensity: float | None = None


@dataclass(frozen=True)
class MetRange:
    """Low/high MET values for an activity."""

    low: float
    high: float


@dataclass(frozen=True)
class ExactBurn:
    """User-reported calorie burn."""

    value: int
    type: Literal["exact"] = "exact"


@dataclass(frozen=True)
class RangeBurn:
    """Estimated calorie burn range."""

    low: int
    high: int
    type: Literal["range"] = "range"

    @property
    def is_zero(self) -> bool:
        """True for zero-effort results."""
        return self.low == 0 and self.high == 0


CalorieBurnResult = ExactBurn | RangeBurn

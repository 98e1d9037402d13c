"""Domain models for chart evaluation."""

from dataclasses import dataclass, field
from datetime import date
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

FOOD_METRICS = frozenset(
    {
        "calories",
        "protein",
        "carbs",
        "fat",
        "fiber",
        "sugar",
        "saturated_fat",
        "sodium",
        "cholesterol",
        "entries",
    }
)
EXERCISE_METRICS = frozenset(
    {
        "sets",
        "duration_minutes",
        "distance_miles",
        "calories_burned",
        "unique_exercises",
        "entries",
    }
)
DERIVED_METRICS = frozenset(
    {
        "protein_pct",
        "carbs_pct",
        "fat_pct",
        "net_carbs",
        "cal_per_meal",
        "protein_per_meal",
    }
)

# Metric keys used by charts saved before the metric rename.
METRIC_COMPAT = {
    "cal": "calories",
    "sat_fat": "saturated_fat",
    "chol": "cholesterol",
    "duration": "duration_minutes",
    "distance": "distance_miles",
    "cal_burned": "calories_burned",
}

ChartSource = Literal["food", "exercise"]
GroupBy = Literal[
    "date", "dayOfWeek", "hourOfDay", "weekdayVsWeekend", "week", "item", "category"
]
Aggregation = Literal["sum", "average", "count", "max", "min"]


@dataclass(frozen=True)
class FoodDayTotals:
    """Summed nutrition for one day (or one entry)."""

    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0
    fiber: float = 0.0
    sugar: float = 0.0
    saturated_fat: float = 0.0
    sodium: float = 0.0
    cholesterol: float = 0.0
    entries: int = 0


@dataclass(frozen=True)
class ExerciseDayTotals:
    """Summed exercise effort for one day (or one set)."""

    sets: float = 0.0
    duration_minutes: float = 0.0
    distance_miles: float = 0.0
    calories_burned: float = 0.0
    unique_exercises: int = 0
    entries: int = 0


@dataclass(frozen=True)
class FoodItemTotals:
    """Per-description food totals."""

    count: int
    total_calories: float
    total_protein: float


@dataclass(frozen=True)
class ExerciseItemTotals:
    """Per-exercise-key totals."""

    description: str
    count: int
    total_sets: float
    total_duration_minutes: float
    total_calories_burned: float


@dataclass(frozen=True)
class DailyTotals:
    """Date-keyed aggregates consumed by the chart evaluator."""

    food: dict[date, FoodDayTotals] = field(default_factory=dict)
    exercise: dict[date, ExerciseDayTotals] = field(default_factory=dict)
    food_by_hour: dict[int, list[FoodDayTotals]] | None = None
    exercise_by_hour: dict[int, list[ExerciseDayTotals]] | None = None
    food_by_item: dict[str, FoodItemTotals] | None = None
    exercise_by_item: dict[str, ExerciseItemTotals] | None = None
    exercise_by_category: dict[str, ExerciseDayTotals] | None = None


class ChartFilter(BaseModel):
    """Optional filters applied before grouping."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True, frozen=True)

    day_of_week: list[Annotated[int, Field(ge=0, le=6)]] | None = Field(
        default=None, alias="dayOfWeek"
    )
    exercise_key: str | None = Field(default=None, alias="exerciseKey")
    exercise_subtype: str | None = Field(default=None, alias="exerciseSubtype")
    category: Literal["Cardio", "Strength"] | None = None


class ChartCompare(BaseModel):
    """Secondary metric for comparison charts."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    metric: str
    source: ChartSource | None = None

    @field_validator("metric", mode="before")
    @classmethod
    def _normalize_metric(cls, value: object) -> object:
        if isinstance(value, str):
            return METRIC_COMPAT.get(value, value)
        return value


class ChartDSL(BaseModel):
    """Declarative description of an aggregate chart."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True, frozen=True)

    chart_type: Literal["bar", "line", "area"] = Field(alias="chartType")
    title: str = ""
    source: ChartSource
    metric: str
    derived_metric: str | None = Field(default=None, alias="derivedMetric")
    group_by: GroupBy = Field(alias="groupBy")
    aggregation: Aggregation = "sum"
    filter: ChartFilter | None = None
    compare: ChartCompare | None = None
    sort: Literal["label", "value_asc", "value_desc"] | None = None
    limit: int | None = Field(default=None, ge=0)

    @field_validator("metric", mode="before")
    @classmethod
    def _normalize_metric(cls, value: object) -> object:
        if isinstance(value, str):
            return METRIC_COMPAT.get(value, value)
        return value

    @model_validator(mode="after")
    def _check_metrics(self) -> "ChartDSL":
        known = FOOD_METRICS if self.source == "food" else EXERCISE_METRICS
        if self.metric not in known:
            raise ValueError(f"unknown {self.source} metric: {self.metric}")
        if self.derived_metric is not None:
            if self.derived_metric not in DERIVED_METRICS:
                raise ValueError(f"unknown derived metric: {self.derived_metric}")
            if self.source != "food":
                raise ValueError("derived metrics require the food source")
        if self.compare is not None:
            compare_source = self.compare.source or self.source
            compare_known = (
                FOOD_METRICS if compare_source == "food" else EXERCISE_METRICS
            )
            if self.compare.metric not in compare_known:
                raise ValueError(
                    f"unknown {compare_source} compare metric: {self.compare.metric}"
                )
        return self


@dataclass(frozen=True)
class ChartPoint:
    """A single plot-ready point."""

    x: str
    label: str
    value: float
    raw_date: date | None = None
    details: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class ChartSeries:
    """Evaluated chart data with label thinning applied."""

    points: list[ChartPoint]
    label_mask: list[bool]
    chart_type: Literal["bar", "line"]
    title: str
    x_label: str
    y_label: str
    color: str
    source: ChartSource


@dataclass(frozen=True)
class ChartError:
    """Fail-closed evaluation error."""

    code: str
    message: str
    field: str | None = None


ChartResult = ChartSeries | ChartError

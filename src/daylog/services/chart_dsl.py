"""Evaluation of declarative chart definitions against daily totals.

The evaluator never raises on bad input. Invalid definitions come back as a
``ChartError`` value so callers can render a fallback.
"""

import logging
import math
from collections import defaultdict
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any

from pydantic import ValidationError

from daylog.domain.charts import (
    Aggregation,
    ChartDSL,
    ChartError,
    ChartPoint,
    ChartResult,
    ChartSeries,
    DailyTotals,
    ExerciseDayTotals,
    FoodDayTotals,
)
from daylog.services.chart_labels import LabelDensity, build_label_mask, label_interval

_logger = logging.getLogger(__name__)

DAY_NAMES = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")
# Sunday-based indices, ordered Monday first.
DAY_ORDER = (1, 2, 3, 4, 5, 6, 0)
HOUR_LABELS = (
    "12am", "1am", "2am", "3am", "4am", "5am", "6am", "7am",
    "8am", "9am", "10am", "11am", "12pm", "1pm", "2pm", "3pm",
    "4pm", "5pm", "6pm", "7pm", "8pm", "9pm", "10pm", "11pm",
)  # fmt: skip
MAX_ITEM_LABEL = 25
TRUNCATED_ITEM_LABEL = 22

DEFAULT_COLOR = "#2563EB"
EXERCISE_COLOR = "#7C3AED"
METRIC_COLORS = {
    "calories": "#2563EB",
    "protein": "#115E83",
    "carbs": "#00B4D8",
    "fat": "#90E0EF",
    "sets": EXERCISE_COLOR,
    "duration_minutes": EXERCISE_COLOR,
    "distance_miles": EXERCISE_COLOR,
    "calories_burned": EXERCISE_COLOR,
}

FOOD_DETAIL_FIELDS = ("calories", "protein", "carbs", "fat", "fiber", "entries")
EXERCISE_DETAIL_FIELDS = (
    "sets",
    "duration_minutes",
    "distance_miles",
    "calories_burned",
    "entries",
)

Totals = FoodDayTotals | ExerciseDayTotals


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _macro_calories(totals: FoodDayTotals) -> float:
    return totals.protein * 4 + totals.carbs * 4 + totals.fat * 9


def _protein_pct(totals: FoodDayTotals) -> int:
    total = _macro_calories(totals)
    return round_half_up(totals.protein * 4 / total * 100) if total > 0 else 0


def _carbs_pct(totals: FoodDayTotals) -> int:
    total = _macro_calories(totals)
    return round_half_up(totals.carbs * 4 / total * 100) if total > 0 else 0


def _fat_pct(totals: FoodDayTotals) -> int:
    total = _macro_calories(totals)
    return round_half_up(totals.fat * 9 / total * 100) if total > 0 else 0


def _net_carbs(totals: FoodDayTotals) -> int:
    return round_half_up(totals.carbs - totals.fiber)


def _cal_per_meal(totals: FoodDayTotals) -> int:
    return round_half_up(totals.calories / totals.entries) if totals.entries > 0 else 0


def _protein_per_meal(totals: FoodDayTotals) -> int:
    return round_half_up(totals.protein / totals.entries) if totals.entries > 0 else 0


DERIVED_FORMULAS: dict[str, Callable[[FoodDayTotals], int]] = {
    "protein_pct": _protein_pct,
    "carbs_pct": _carbs_pct,
    "fat_pct": _fat_pct,
    "net_carbs": _net_carbs,
    "cal_per_meal": _cal_per_meal,
    "protein_per_meal": _protein_per_meal,
}


def aggregate(values: list[float], method: Aggregation) -> float:
    """Aggregate bucket values; an empty bucket yields 0."""
    if not values:
        return 0
    if method == "sum":
        return sum(values)
    if method == "average":
        return sum(values) / len(values)
    if method == "max":
        return max(values)
    if method == "min":
        return min(values)
    return len(values)


def _format_detail(value: float) -> str:
    if value >= 1000:  # noqa: PLR2004
        return f"{round_half_up(value):,}"
    return str(round_half_up(value))


def build_details(
    pairs: list[tuple[str, float | None]], exclude: str | None = None
) -> dict[str, str]:
    """Compact secondary values, dropping zeros and the plotted metric."""
    return {
        label: _format_detail(value)
        for label, value in pairs
        if label != exclude and value
    }


def _day_of_week(day: date) -> int:
    # 0=Sun ... 6=Sat
    return (day.weekday() + 1) % 7


def _week_key(day: date) -> str:
    year, week, _ = day.isocalendar()
    return f"{year}-W{week:02d}"


def _truncate_label(label: str) -> str:
    if len(label) > MAX_ITEM_LABEL:
        return label[:TRUNCATED_ITEM_LABEL] + "…"
    return label


def _date_label(day: date) -> str:
    return f"{day.strftime('%b')} {day.day}"


def parse_dsl(dsl: ChartDSL | Mapping[str, Any]) -> ChartDSL | ChartError:
    """Validate a chart definition, returning an error value on failure."""
    if isinstance(dsl, ChartDSL):
        return dsl
    if not isinstance(dsl, Mapping):
        return ChartError(
            code="invalid_dsl", message="chart definition must be an object"
        )
    try:
        return ChartDSL.model_validate(dict(dsl))
    except ValidationError as exc:
        first = exc.errors()[0]
        location = ".".join(str(part) for part in first.get("loc", ()))
        return ChartError(
            code="invalid_dsl", message=first["msg"], field=location or None
        )


@dataclass(frozen=True)
class _Bucket:
    x: str
    label: str
    values: list[float]
    raw_date: date | None = None
    details: dict[str, str] | None = None


class _Evaluation:
    def __init__(
        self,
        dsl: ChartDSL,
        totals: DailyTotals,
        period: int | None,
        end_date: date | None,
    ) -> None:
        self.dsl = dsl
        self.totals = totals
        self.source_map: Mapping[date, Totals] = (
            totals.food if dsl.source == "food" else totals.exercise
        )
        self.window = self._window(period, end_date)
        allowed = dsl.filter.day_of_week if dsl.filter else None
        self.allowed_days = set(allowed) if allowed is not None else None

    def _window(self, period: int | None, end_date: date | None) -> list[date]:
        data_dates = sorted(self.source_map)
        if period is not None:
            end = end_date or (data_dates[-1] if data_dates else date.today())
            start = end - timedelta(days=period - 1)
        else:
            if end_date is not None:
                data_dates = [day for day in data_dates if day <= end_date]
            if not data_dates:
                return []
            start, end = data_dates[0], data_dates[-1]
        days = (end - start).days + 1
        return [start + timedelta(days=offset) for offset in range(days)]

    def _visible(self, day: date) -> bool:
        return self.allowed_days is None or _day_of_week(day) in self.allowed_days

    def value_of(self, totals: Totals) -> float:
        if self.dsl.derived_metric is not None:
            if not isinstance(totals, FoodDayTotals):
                return 0
            return DERIVED_FORMULAS[self.dsl.derived_metric](totals)
        return getattr(totals, self.dsl.metric, 0) or 0

    def day_value(self, day: date) -> float | None:
        totals = self.source_map.get(day)
        if totals is None:
            return None
        return self.value_of(totals)

    def data_days(self) -> list[tuple[date, float]]:
        result = []
        for day in self.window:
            if not self._visible(day):
                continue
            value = self.day_value(day)
            if value is not None:
                result.append((day, value))
        return result

    def _compare_value(self, day: date) -> tuple[str, float | None] | None:
        compare = self.dsl.compare
        if compare is None:
            return None
        source = compare.source or self.dsl.source
        totals = (self.totals.food if source == "food" else self.totals.exercise).get(
            day
        )
        value = getattr(totals, compare.metric, None) if totals is not None else None
        return (compare.metric, value)

    def date_buckets(self) -> list[_Bucket]:
        buckets = []
        exclude = self.dsl.derived_metric or self.dsl.metric
        fields = (
            FOOD_DETAIL_FIELDS if self.dsl.source == "food" else EXERCISE_DETAIL_FIELDS
        )
        for day in self.window:
            if not self._visible(day):
                continue
            totals = self.source_map.get(day)
            pairs = [
                (name, getattr(totals, name) if totals is not None else None)
                for name in fields
            ]
            compared = self._compare_value(day)
            if compared is not None and compared[0] not in fields:
                pairs.append(compared)
            value = self.day_value(day)
            buckets.append(
                _Bucket(
                    x=day.isoformat(),
                    label=_date_label(day),
                    values=[value if value is not None else 0],
                    raw_date=day,
                    details=build_details(pairs, exclude),
                )
            )
        return buckets

    def week_buckets(self) -> list[_Bucket]:
        weeks: dict[str, list[float]] = defaultdict(list)
        last_day: dict[str, date] = {}
        for day, value in self.data_days():
            key = _week_key(day)
            weeks[key].append(value)
            last_day[key] = max(day, last_day.get(key, day))
        return [
            _Bucket(
                x=key,
                label=key,
                values=weeks[key],
                raw_date=last_day[key],
                details={"days": str(len(weeks[key]))},
            )
            for key in sorted(weeks)
        ]

    def day_of_week_buckets(self) -> list[_Bucket]:
        by_day: dict[int, list[float]] = defaultdict(list)
        for day, value in self.data_days():
            by_day[_day_of_week(day)].append(value)
        return [
            _Bucket(
                x=DAY_NAMES[index],
                label=DAY_NAMES[index],
                values=by_day[index],
                details={"days": str(len(by_day[index]))},
            )
            for index in DAY_ORDER
            if by_day.get(index)
        ]

    def weekday_weekend_buckets(self) -> list[_Bucket]:
        weekday: list[float] = []
        weekend: list[float] = []
        for day, value in self.data_days():
            (weekend if _day_of_week(day) in {0, 6} else weekday).append(value)
        return [
            _Bucket(
                x=label, label=label, values=values, details={"days": str(len(values))}
            )
            for label, values in (("Weekdays", weekday), ("Weekends", weekend))
            if values
        ]

    def hour_buckets(self) -> list[_Bucket]:
        hourly: Mapping[int, list[Any]] | None = (
            self.totals.food_by_hour
            if self.dsl.source == "food"
            else self.totals.exercise_by_hour
        )
        if not hourly:
            return []
        buckets = []
        for hour in range(24):
            entries = hourly.get(hour)
            if not entries:
                continue
            buckets.append(
                _Bucket(
                    x=HOUR_LABELS[hour],
                    label=HOUR_LABELS[hour],
                    values=[self.value_of(entry) for entry in entries],
                    details={"entries": str(len(entries))},
                )
            )
        return buckets

    def item_points(self) -> list[ChartPoint]:
        metric = self.dsl.metric
        counting = self.dsl.aggregation == "count"
        points = []
        if self.dsl.source == "food" and self.totals.food_by_item:
            food_values = {
                "entries": "count",
                "calories": "total_calories",
                "protein": "total_protein",
            }
            for label, item in self.totals.food_by_item.items():
                attribute = food_values.get(metric, "count")
                value = item.count if counting else getattr(item, attribute)
                text = _truncate_label(label)
                points.append(
                    ChartPoint(
                        x=text,
                        label=text,
                        value=round_half_up(value),
                        details=build_details(
                            [
                                ("entries", item.count),
                                ("calories", item.total_calories),
                                ("protein", item.total_protein),
                            ],
                            metric if metric in food_values else None,
                        ),
                    )
                )
        elif self.dsl.source == "exercise" and self.totals.exercise_by_item:
            exercise_values = {
                "sets": "total_sets",
                "duration_minutes": "total_duration_minutes",
                "calories_burned": "total_calories_burned",
            }
            for item in self.totals.exercise_by_item.values():
                attribute = exercise_values.get(metric, "count")
                value = item.count if counting else getattr(item, attribute)
                text = _truncate_label(item.description)
                points.append(
                    ChartPoint(
                        x=text,
                        label=text,
                        value=round_half_up(value),
                        details=build_details(
                            [
                                ("entries", item.count),
                                ("sets", item.total_sets),
                                ("duration_minutes", item.total_duration_minutes),
                                ("calories_burned", item.total_calories_burned),
                            ],
                            metric if metric in exercise_values else None,
                        ),
                    )
                )
        return points

    def category_points(self) -> list[ChartPoint]:
        if self.dsl.source != "exercise" or not self.totals.exercise_by_category:
            return []
        metric = self.dsl.metric if self.dsl.metric != "entries" else "sets"
        points = []
        for label, totals in self.totals.exercise_by_category.items():
            points.append(
                ChartPoint(
                    x=label,
                    label=label,
                    value=round_half_up(getattr(totals, metric, totals.sets)),
                    details=build_details(
                        [
                            (name, getattr(totals, name))
                            for name in EXERCISE_DETAIL_FIELDS
                        ],
                        self.dsl.metric,
                    ),
                )
            )
        return points

    def points(self) -> list[ChartPoint]:
        group_by = self.dsl.group_by
        if group_by == "item":
            return self.item_points()
        if group_by == "category":
            return self.category_points()
        builders: dict[str, Callable[[], list[_Bucket]]] = {
            "date": self.date_buckets,
            "week": self.week_buckets,
            "dayOfWeek": self.day_of_week_buckets,
            "weekdayVsWeekend": self.weekday_weekend_buckets,
            "hourOfDay": self.hour_buckets,
        }
        aggregation: Aggregation = "sum" if group_by == "date" else self.dsl.aggregation
        return [
            ChartPoint(
                x=bucket.x,
                label=bucket.label,
                value=round_half_up(aggregate(bucket.values, aggregation)),
                raw_date=bucket.raw_date,
                details=bucket.details or {},
            )
            for bucket in builders[group_by]()
        ]


def _sorted(points: list[ChartPoint], sort: str | None) -> list[ChartPoint]:
    if sort == "value_asc":
        return sorted(points, key=lambda point: point.value)
    if sort == "value_desc":
        return sorted(points, key=lambda point: point.value, reverse=True)
    if sort == "label":
        return sorted(points, key=lambda point: point.label)
    return points


def period_out_of_range_error() -> ChartError:
    return ChartError(
        code="invalid_period",
        message="period runs past the supported date range",
        field="period",
    )


def evaluate(
    dsl: ChartDSL | Mapping[str, Any],
    daily_totals: DailyTotals,
    period: int | None = None,
    end_date: date | None = None,
    density: LabelDensity = "half",
) -> ChartResult:
    """Evaluate a chart definition into a plot-ready series.

    Date charts are gap-filled: every day of the window appears, with 0 for
    days without data. With ``period`` the window is the ``period`` days
    ending at ``end_date`` (default: the latest data date, or today).
    Categorical charts only use days with data inside the same window.
    """
    parsed = parse_dsl(dsl)
    if isinstance(parsed, ChartError):
        _logger.info("Rejected chart definition: %s", parsed.message)
        return parsed
    if period is not None and period <= 0:
        return ChartError(
            code="invalid_period", message="period must be positive", field="period"
        )

    try:
        evaluation = _Evaluation(parsed, daily_totals, period, end_date)
    except OverflowError:
        _logger.info("Chart period %s runs past the supported date range", period)
        return period_out_of_range_error()
    points = evaluation.points()

    time_series = parsed.group_by in {"date", "week"}
    if not time_series:
        points = _sorted(points, parsed.sort)
    if parsed.limit:
        points = points[: parsed.limit]

    if time_series:
        mask = build_label_mask(len(points), label_interval(len(points), density))
    else:
        mask = [True] * len(points)

    return ChartSeries(
        points=points,
        label_mask=mask,
        chart_type="line" if parsed.chart_type == "area" else parsed.chart_type,
        title=parsed.title,
        x_label="Date" if parsed.group_by == "date" else parsed.group_by,
        y_label=parsed.derived_metric or parsed.metric,
        color=METRIC_COLORS.get(parsed.metric, DEFAULT_COLOR),
        source=parsed.source,
    )

"""Chart service for evaluating chart definitions."""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any

from daylog.domain.calorie_burn import CalorieBurnSettings
from daylog.domain.charts import ChartDSL, ChartError, ChartResult, DailyTotals
from daylog.domain.exercise import ExerciseSet
from daylog.domain.food import FoodEntry
from daylog.services.chart_dsl import evaluate, parse_dsl, period_out_of_range_error
from daylog.services.chart_labels import LabelDensity
from daylog.services.daily_totals import build_exercise_totals, build_food_totals

_logger = logging.getLogger(__name__)


@dataclass
class ChartService:
    """Builds daily totals and evaluates chart definitions over them."""

    density: LabelDensity = "half"
    calorie_burn_settings: CalorieBurnSettings | None = None

    def evaluate(
        self,
        dsl: ChartDSL | Mapping[str, Any],
        daily_totals: DailyTotals,
        period: int | None = None,
        end_date: date | None = None,
    ) -> ChartResult:
        """Evaluate a chart definition against prepared daily totals."""
        return evaluate(
            dsl, daily_totals, period=period, end_date=end_date, density=self.density
        )

    def evaluate_entries(
        self,
        dsl: ChartDSL | Mapping[str, Any],
        food_entries: Iterable[FoodEntry] = (),
        exercise_sets: Iterable[ExerciseSet] = (),
        period: int | None = None,
        end_date: date | None = None,
    ) -> ChartResult:
        """Aggregate raw entries for the chart's window and evaluate it."""
        parsed = parse_dsl(dsl)
        if isinstance(parsed, ChartError):
            _logger.info("Rejected chart definition: %s", parsed.message)
            return parsed

        food_entries = list(food_entries)
        exercise_sets = [
            exercise for exercise in exercise_sets if exercise.logged_date is not None
        ]
        if period is not None and period > 0:
            dates = (
                [entry.eaten_date for entry in food_entries]
                if parsed.source == "food"
                else [exercise.logged_date for exercise in exercise_sets]
            )
            end = end_date or (max(dates) if dates else date.today())
            try:
                start = end - timedelta(days=period - 1)
            except OverflowError:
                _logger.info("Chart period %s is out of range", period)
                return period_out_of_range_error()
            food_entries = [
                entry for entry in food_entries if start <= entry.eaten_date <= end
            ]
            exercise_sets = [
                exercise
                for exercise in exercise_sets
                if start <= exercise.logged_date <= end
            ]

        if parsed.source == "food":
            totals = build_food_totals(
                food_entries,
                by_hour=parsed.group_by == "hourOfDay",
                by_item=parsed.group_by == "item",
            )
        else:
            totals = build_exercise_totals(
                exercise_sets,
                by_hour=parsed.group_by == "hourOfDay",
                by_item=parsed.group_by == "item",
                by_category=parsed.group_by == "category",
                settings=self.calorie_burn_settings,
                chart_filter=parsed.filter,
            )
        return evaluate(
            parsed, totals, period=period, end_date=end_date, density=self.density
        )

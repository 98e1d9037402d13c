"""Dependency container wiring for the application."""

from dataclasses import dataclass

from daylog.config import Settings
from daylog.services.calorie_burn import CalorieBurnService
from daylog.services.charts import ChartService
from daylog.services.similarity import SimilarityService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    similarity_service: SimilarityService
    calorie_burn_service: CalorieBurnService
    chart_service: ChartService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    calorie_burn_settings = resolved_settings.calorie_burn_settings()
    return AppContainer(
        settings=resolved_settings,
        similarity_service=SimilarityService(
            threshold=resolved_settings.similarity_threshold,
            repeat_min_matches=resolved_settings.repeat_min_matches,
        ),
        calorie_burn_service=CalorieBurnService(default_settings=calorie_burn_settings),
        chart_service=ChartService(
            density=resolved_settings.chart_label_density,
            calorie_burn_settings=calorie_burn_settings,
        ),
    )

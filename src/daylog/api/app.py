"""FastAPI application factory."""

import logging

from fastapi import FastAPI

from daylog.api.calorie_burn import router as calorie_burn_router
from daylog.api.charts import router as charts_router
from daylog.api.similarity import router as similarity_router
from daylog.app_logging import configure_logging
from daylog.containers import AppContainer


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)
    logger.info("Starting daylog API (%s)", container.settings.environment)

    app = FastAPI()
    app.state.container = container

    app.include_router(similarity_router)
    app.include_router(calorie_burn_router)
    app.include_router(charts_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app

"""Chart evaluation endpoints."""

from __future__ import annotations

from dataclasses import asdict
from typing import TYPE_CHECKING

from fastapi import APIRouter, HTTPException, Request, status

from daylog.api.models import ChartRequest  # noqa: TC001
from daylog.domain.charts import ChartError

if TYPE_CHECKING:
    from daylog.containers import AppContainer

router = APIRouter(prefix="/charts", tags=["charts"])


@router.post("/evaluate")
async def evaluate_chart(payload: ChartRequest, request: Request) -> dict[str, object]:
    """Evaluate a chart definition over the supplied entries."""
    container: AppContainer = request.app.state.container
    result = container.chart_service.evaluate_entries(
        payload.dsl,
        food_entries=[entry.to_domain() for entry in payload.food_entries],
        exercise_sets=[exercise.to_domain() for exercise in payload.exercise_sets],
        period=payload.period,
        end_date=payload.end_date,
    )
    if isinstance(result, ChartError):
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=asdict(result)
        )
    return asdict(result)

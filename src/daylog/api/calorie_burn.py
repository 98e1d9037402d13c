"""Calorie burn estimation endpoints."""

from __future__ import annotations

from dataclasses import asdict
from typing import TYPE_CHECKING

from fastapi import APIRouter, HTTPException, Request, status

from daylog.api.models import EstimateRequest, EstimateTotalRequest  # noqa: TC001
from daylog.services.calorie_burn import format_calorie_burn_value

if TYPE_CHECKING:
    from daylog.containers import AppContainer

router = APIRouter(prefix="/calorie-burn", tags=["calorie-burn"])


@router.post("/estimate")
async def estimate(payload: EstimateRequest, request: Request) -> dict[str, object]:
    """Estimate calories burned for a single exercise."""
    container: AppContainer = request.app.state.container
    settings = payload.settings.to_domain() if payload.settings else None
    result = container.calorie_burn_service.estimate(
        payload.exercise.to_domain(), settings
    )
    if result is None:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Invalid exercise input",
        )
    return {**asdict(result), "display": format_calorie_burn_value(result)}


@router.post("/total")
async def estimate_total(
    payload: EstimateTotalRequest, request: Request
) -> dict[str, object]:
    """Estimate the combined calories burned for several exercises."""
    container: AppContainer = request.app.state.container
    settings = payload.settings.to_domain() if payload.settings else None
    result = container.calorie_burn_service.estimate_total(
        [exercise.to_domain() for exercise in payload.exercises], settings
    )
    return {**asdict(result), "display": format_calorie_burn_value(result)}

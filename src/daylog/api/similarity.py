"""Similarity matching endpoints."""

from __future__ import annotations

from dataclasses import asdict
from typing import TYPE_CHECKING

from fastapi import APIRouter, Request

from daylog.api.models import HistoryMatchRequest, MatchRequest  # noqa: TC001

if TYPE_CHECKING:
    from daylog.containers import AppContainer

router = APIRouter(prefix="/similarity", tags=["similarity"])


@router.post("/match")
async def match_text(payload: MatchRequest, request: Request) -> dict[str, object]:
    """Return the closest previously saved text, if any."""
    container: AppContainer = request.app.state.container
    found = container.similarity_service.match(
        payload.candidate, [entry.to_domain() for entry in payload.prior_entries]
    )
    return {"match": asdict(found) if found is not None else None}


@router.post("/history")
async def match_history(
    payload: HistoryMatchRequest, request: Request
) -> dict[str, object]:
    """Resolve a history-referencing input against recent entries."""
    container: AppContainer = request.app.state.container
    found = container.similarity_service.find_history_match(
        payload.input_text, [entry.to_domain() for entry in payload.recent_entries]
    )
    if found is None:
        return {"match": None}
    return {
        "match": {
            "entry_id": found.entry.id,
            "score": found.score,
            "match_type": found.match_type,
        }
    }

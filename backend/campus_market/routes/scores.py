"""
Campus Market Backend: Scoreboard Route
=========================================

What:  GET /api/scores returns the points ranking, highest first.
"""

from typing import List

from fastapi import APIRouter, Query

from campus_market.schemas.common import ErrorResponse
from campus_market.schemas.score import ScoreEntry
from campus_market.services.score_service import score_service

router = APIRouter(prefix="/api", tags=["Scores"])


@router.get(
    "/scores",
    response_model=List[ScoreEntry],
    response_model_exclude_none=True,
    responses={500: {"description": "Score export missing or malformed", "model": ErrorResponse}},
    summary="Ranked scoreboard",
    description=(
        "Customer rows from the score export, sorted by points (highest first). "
        "Each entry carries the customer number and the points text as exported; "
        "pass numeric=true to also get the parsed value used for sorting."
    ),
)
async def list_scores(
    numeric: bool = Query(default=False, description="Include the normalized numeric value"),
) -> List[ScoreEntry]:
    return await score_service.get_ranking(include_value=numeric)

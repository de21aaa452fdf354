"""
Campus Market Backend: Scoreboard Schemas
===========================================

What:  Response model for one ranked scoreboard row.
"""

from typing import Optional

from pydantic import BaseModel, Field


class ScoreEntry(BaseModel):
    """
    What:  One customer's position on the scoreboard.
    Who:   Returned (as a list, best first) by GET /api/scores.

    `score` is the points text exactly as it appears in the export
    (e.g. "1.116,50 ₺"); `value` is the parsed number used for sorting and is
    only included when the client asks for it with `?numeric=true`.
    """
    id: str = Field(description="Customer number from the export")
    score: str = Field(description="Points text as exported")
    value: Optional[float] = Field(
        default=None,
        description="Normalized numeric points (only with ?numeric=true)",
    )

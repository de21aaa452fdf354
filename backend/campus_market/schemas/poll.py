"""
Campus Market Backend: Poll Schemas
=====================================

What:  Request and response models for polls and voting.
"""

from typing import Any, List, Optional

from pydantic import Field

from campus_market.schemas.common import CamelModel


class PollCreate(CamelModel):
    """Body of POST /api/polls: {question, options: [str, ...]} with at least 2 options."""
    question: Optional[str] = Field(default=None, description="Poll question (required)")
    options: Optional[List[str]] = Field(default=None, description="Option texts, at least 2")


class PollOption(CamelModel):
    text: str
    votes: int = Field(default=0, ge=0)


class PollResponse(CamelModel):
    id: int
    question: str
    options: List[PollOption]
    created_at: str


class VoteRequest(CamelModel):
    """
    Body of POST /api/polls/vote: {pollId, optionIndex}.

    Typed as Any so PollService can answer non-integer values with its own
    "Invalid vote data." message.
    """
    poll_id: Any = Field(default=None, description="Poll identifier")
    option_index: Any = Field(default=None, description="Zero-based option index")


class VoteResponse(CamelModel):
    success: bool = True
    poll: PollResponse

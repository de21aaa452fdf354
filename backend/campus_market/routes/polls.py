"""
Campus Market Backend: Poll Route Handlers
============================================

What:  List, create and delete polls, and vote on them.

Voting:
    POST /api/polls/vote {"pollId": 1746523800123, "optionIndex": 1}
    → {"success": true, "poll": {...updated poll...}}

    Unknown poll → 404; option index out of range or non-integer values → 400.
"""

from typing import List

from fastapi import APIRouter

from campus_market.schemas.common import ErrorResponse, SuccessResponse
from campus_market.schemas.poll import PollCreate, PollResponse, VoteRequest, VoteResponse
from campus_market.services.poll_service import poll_service
from campus_market.services.resources import poll_store

router = APIRouter(prefix="/api", tags=["Polls"])


@router.get("/polls", response_model=List[PollResponse], summary="List polls, newest first")
async def list_polls():
    return await poll_store.load()


@router.post(
    "/polls",
    response_model=PollResponse,
    responses={400: {"description": "Question missing or fewer than 2 options", "model": ErrorResponse}},
    summary="Create a poll",
)
async def create_poll(payload: PollCreate):
    return await poll_store.append(payload.model_dump(by_alias=True))


@router.post(
    "/polls/vote",
    response_model=VoteResponse,
    responses={
        400: {"description": "Invalid vote data or option index", "model": ErrorResponse},
        404: {"description": "Poll not found", "model": ErrorResponse},
    },
    summary="Vote for one option of a poll",
)
async def vote(payload: VoteRequest):
    poll = await poll_service.vote(payload.poll_id, payload.option_index)
    return {"success": True, "poll": poll}


@router.delete("/polls/{poll_id}", response_model=SuccessResponse, summary="Delete a poll")
async def delete_poll(poll_id: int) -> SuccessResponse:
    await poll_store.delete_by_id(poll_id)
    return SuccessResponse()

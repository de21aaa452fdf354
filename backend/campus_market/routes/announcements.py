"""
Campus Market Backend: Announcement Route Handlers
====================================================

What:  List, create and delete announcements.
How:   Thin wrappers over the announcement ResourceStore; records are stored
       newest first in announcements.json.
"""

from typing import List

from fastapi import APIRouter

from campus_market.schemas.announcement import AnnouncementCreate, AnnouncementResponse
from campus_market.schemas.common import ErrorResponse, SuccessResponse
from campus_market.services.resources import announcement_store

router = APIRouter(prefix="/api", tags=["Announcements"])


@router.get(
    "/announcements",
    response_model=List[AnnouncementResponse],
    summary="List announcements, newest first",
)
async def list_announcements():
    return await announcement_store.load()


@router.post(
    "/announcements",
    response_model=AnnouncementResponse,
    responses={400: {"description": "Title or body missing", "model": ErrorResponse}},
    summary="Create an announcement",
)
async def create_announcement(payload: AnnouncementCreate):
    return await announcement_store.append(payload.model_dump(by_alias=True))


@router.delete(
    "/announcements/{announcement_id}",
    response_model=SuccessResponse,
    summary="Delete an announcement",
    description="Succeeds even when no announcement has the given id.",
)
async def delete_announcement(announcement_id: int) -> SuccessResponse:
    await announcement_store.delete_by_id(announcement_id)
    return SuccessResponse()

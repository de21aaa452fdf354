"""
Campus Market Backend: Business Hours Route Handlers
=====================================================

What:  Read and replace the business-hours document (hours.json).
How:   GET materializes the default schedule on first access. POST replaces
       the whole document; fields not sent are not merged from the old one.
"""

from fastapi import APIRouter

from campus_market.schemas.common import ErrorResponse
from campus_market.schemas.hours import BusinessHoursResponse, BusinessHoursUpdate
from campus_market.services.resources import hours_store

router = APIRouter(prefix="/api", tags=["Hours"])


@router.get("/hours", response_model=BusinessHoursResponse, summary="Current business hours")
async def get_hours():
    return await hours_store.load()


@router.post(
    "/hours",
    response_model=BusinessHoursResponse,
    responses={400: {"description": "Weekly hours missing or malformed", "model": ErrorResponse}},
    summary="Replace business hours",
)
async def update_hours(payload: BusinessHoursUpdate):
    return await hours_store.replace(payload.model_dump(by_alias=True))

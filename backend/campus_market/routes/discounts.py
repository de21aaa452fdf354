"""
Campus Market Backend: Discounted Product Route Handlers
==========================================================

What:  List, create and delete discounted products (discounts.json).
"""

from typing import List

from fastapi import APIRouter

from campus_market.schemas.announcement import DiscountCreate, DiscountResponse
from campus_market.schemas.common import ErrorResponse, SuccessResponse
from campus_market.services.resources import discount_store

router = APIRouter(prefix="/api", tags=["Discounts"])


@router.get("/discounts", response_model=List[DiscountResponse], summary="List discounted products")
async def list_discounts():
    return await discount_store.load()


@router.post(
    "/discounts",
    response_model=DiscountResponse,
    responses={400: {"description": "Name or price missing", "model": ErrorResponse}},
    summary="Add a discounted product",
)
async def create_discount(payload: DiscountCreate):
    return await discount_store.append(payload.model_dump(by_alias=True))


@router.delete("/discounts/{discount_id}", response_model=SuccessResponse, summary="Remove a discounted product")
async def delete_discount(discount_id: int) -> SuccessResponse:
    await discount_store.delete_by_id(discount_id)
    return SuccessResponse()

"""
Campus Market Backend: Announcement and Discount Schemas
==========================================================

What:  Request and response models for announcements and discounted products.

Create models declare every field optional on purpose: a missing title or
price must produce the store's RequestInvalidError message (400), not
FastAPI's generic 422 field report.
"""

from typing import Optional

from pydantic import Field

from campus_market.schemas.common import CamelModel


class AnnouncementCreate(CamelModel):
    """Body of POST /api/announcements: {title, body, image?}."""
    title: Optional[str] = Field(default=None, description="Headline (required)")
    body: Optional[str] = Field(default=None, description="Announcement text (required)")
    image: Optional[str] = Field(default=None, description="Image URL from /api/upload")


class AnnouncementResponse(CamelModel):
    id: int = Field(description="Creation time in epoch milliseconds, unique per collection")
    title: str
    body: str
    image: Optional[str] = None
    created_at: str = Field(description="Creation instant (UTC ISO 8601)")


class DiscountCreate(CamelModel):
    """Body of POST /api/discounts: {name, description?, price, image?}."""
    name: Optional[str] = Field(default=None, description="Product name (required)")
    description: Optional[str] = Field(default=None)
    price: Optional[str] = Field(default=None, description="Display price, e.g. '49,90 ₺' (required)")
    image: Optional[str] = Field(default=None, description="Image URL from /api/upload")


class DiscountResponse(CamelModel):
    id: int
    name: str
    description: str = ""
    price: str
    image: Optional[str] = None
    created_at: str

"""
Campus Market Backend: Business Hours Schemas
===============================================

What:  The singleton business-hours document.

Shape:
    {
        "weekly": {
            "Monday": {"opensAt": "09:00", "closesAt": "21:00"},
            ...
            "Sunday": {"opensAt": null, "closesAt": null}      ← closed
        },
        "specialDays": [ {"date": "2025-05-19", "opensAt": null, ...}, ... ]
    }

specialDays entries are free-form override objects owned by the frontend;
they are stored and returned as sent.
"""

from typing import Any, Dict, List, Optional

from pydantic import Field

from campus_market.schemas.common import CamelModel

# "HH:MM", 24-hour clock
TIME_PATTERN = r"^([01][0-9]|2[0-3]):[0-5][0-9]$"


class DayHours(CamelModel):
    opens_at: Optional[str] = Field(default=None, pattern=TIME_PATTERN)
    closes_at: Optional[str] = Field(default=None, pattern=TIME_PATTERN)


class BusinessHoursUpdate(CamelModel):
    """Body of POST /api/hours: {weekly, specialDays?}; replaces the stored document."""
    weekly: Optional[Dict[str, DayHours]] = Field(default=None, description="Hours per weekday (required)")
    special_days: Optional[List[Dict[str, Any]]] = Field(default=None)


class BusinessHoursResponse(CamelModel):
    weekly: Dict[str, DayHours]
    special_days: List[Dict[str, Any]] = Field(default_factory=list)

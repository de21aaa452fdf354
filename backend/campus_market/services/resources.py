"""
Campus Market Backend: Resource Kinds
=======================================

What:  The four JSON-backed resources and their store singletons.
How:   Each ResourceKind names its document, its default value, the fields a
       create/replace request must carry, and how the stored body is built
       from the request fields. All persistence goes through ResourceStore.

Documents (under settings.data_dir):
    announcements.json   [Announcement, ...]        newest first
    discounts.json       [DiscountedProduct, ...]   newest first
    polls.json           [Poll, ...]                newest first
    hours.json           {"weekly": {...}, "specialDays": [...]}
"""

from typing import Any, Dict

from campus_market.exceptions import RequestInvalidError
from campus_market.services.resource_store import ResourceKind, ResourceStore

MIN_POLL_OPTIONS = 2

WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


def default_business_hours() -> Dict[str, Any]:
    """Weekdays 09:00-21:00, Saturday 10:00-20:00, Sunday closed."""
    weekly = {day: {"opensAt": "09:00", "closesAt": "21:00"} for day in WEEKDAYS[:5]}
    weekly["Saturday"] = {"opensAt": "10:00", "closesAt": "20:00"}
    weekly["Sunday"] = {"opensAt": None, "closesAt": None}
    return {"weekly": weekly, "specialDays": []}


# ── Record builders ───────────────────────────────────────────────────────

def _build_announcement(fields: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "title": fields["title"],
        "body": fields["body"],
        "image": fields.get("image") or None,
    }


def _build_discount(fields: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "name": fields["name"],
        "description": fields.get("description") or "",
        "price": fields["price"],
        "image": fields.get("image") or None,
    }


def _validate_poll(fields: Dict[str, Any]) -> None:
    options = fields.get("options")
    if not isinstance(options, list) or len(options) < MIN_POLL_OPTIONS:
        raise RequestInvalidError(
            message=POLL.required_message,
            details=f"options must be a list of at least {MIN_POLL_OPTIONS} entries",
        )


def _build_poll(fields: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "question": fields["question"],
        "options": [{"text": text, "votes": 0} for text in fields["options"]],
    }


def _build_hours(fields: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "weekly": fields["weekly"],
        "specialDays": fields.get("specialDays") or [],
    }


# ── Kinds ─────────────────────────────────────────────────────────────────

ANNOUNCEMENT = ResourceKind(
    name="announcement",
    filename="announcements.json",
    required=("title", "body"),
    required_message="Title and body are required.",
    build=_build_announcement,
)

DISCOUNT = ResourceKind(
    name="discounted product",
    filename="discounts.json",
    required=("name", "price"),
    required_message="Name and price are required.",
    build=_build_discount,
)

POLL = ResourceKind(
    name="poll",
    filename="polls.json",
    required=("question", "options"),
    required_message=f"A question and at least {MIN_POLL_OPTIONS} options are required.",
    validate=_validate_poll,
    build=_build_poll,
)

HOURS = ResourceKind(
    name="business hours",
    filename="hours.json",
    default_factory=default_business_hours,
    required=("weekly",),
    required_message="Weekly hours are required.",
    build=_build_hours,
)


announcement_store = ResourceStore(ANNOUNCEMENT)
discount_store = ResourceStore(DISCOUNT)
poll_store = ResourceStore(POLL)
hours_store = ResourceStore(HOURS)

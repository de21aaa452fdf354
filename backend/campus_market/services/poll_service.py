"""
Campus Market Backend: Poll Voting
====================================

What:  Records one vote on one option of a poll.
How:   Single read-modify-write cycle on the poll collection through
       ResourceStore.update(): find the poll, check the option index,
       increment that option's "votes" by exactly 1, write the collection back.
Who:   Called by POST /api/polls/vote.

Failure order (nothing is written in any failure case):
    pollId / optionIndex not integers → RequestInvalidError (400)
    no poll with that id              → NotFoundError (404)
    option index outside 0..n-1       → RequestInvalidError (400)
"""

import logging
from typing import Any, Dict, List, Optional

from campus_market.exceptions import NotFoundError, RequestInvalidError
from campus_market.services.resource_store import ResourceStore
from campus_market.services.resources import poll_store

logger = logging.getLogger(__name__)


def _is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class PollService:
    """Voting on stored polls."""

    def __init__(self, store: Optional[ResourceStore] = None):
        self.store = store or poll_store

    async def vote(self, poll_id: Any, option_index: Any) -> Dict[str, Any]:
        """
        Increment the vote count of one option.

        Args:
            poll_id:      Poll identifier
            option_index: Zero-based index into the poll's options

        Returns:
            The updated poll record.
        """
        if not _is_integer(poll_id) or not _is_integer(option_index):
            raise RequestInvalidError(
                message="Invalid vote data.",
                details="pollId and optionIndex must be integers",
            )

        def apply_vote(polls: List[Dict[str, Any]]) -> Dict[str, Any]:
            poll = next((p for p in polls if p.get("id") == poll_id), None)
            if poll is None:
                raise NotFoundError(resource="poll")

            options = poll.get("options") or []
            if not 0 <= option_index < len(options):
                raise RequestInvalidError(
                    message="Option not found.",
                    details=f"optionIndex must be between 0 and {len(options) - 1}",
                )

            option = options[option_index]
            option["votes"] = int(option.get("votes", 0)) + 1
            return poll

        poll = await self.store.update(apply_vote)
        logger.info("Vote recorded: poll=%s option=%d", poll_id, option_index)
        return poll


poll_service = PollService()

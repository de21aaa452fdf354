"""
Campus Market Backend: Scoreboard Ranking
===========================================

What:  Builds the points scoreboard from the spreadsheet export.
How:   Reads the exported rows, keeps those whose identifier column is a
       plain customer number, sorts by normalized points (highest first).
Who:   Called by GET /api/scores.

Source format:
    The export is a JSON array of row objects keyed by the sheet's column
    headers. Header rows, blank rows and footer totals are mixed in with the
    customer rows; they are recognized by a non-numeric identifier.

    [
        {"21 nisan 06 mayıs harcama ve puan": "Müşteri No", "__EMPTY": "Puan"},
        {"21 nisan 06 mayıs harcama ve puan": "1024", "__EMPTY": "1.116,50 ₺"},
        ...
    ]
"""

import json
import logging
import re
from pathlib import Path
from typing import Any, Iterable, List, Optional

import aiofiles

from campus_market.config import settings
from campus_market.exceptions import DataUnavailableError
from campus_market.schemas.score import ScoreEntry
from campus_market.services.normalizer import normalize_score

logger = logging.getLogger(__name__)

_CUSTOMER_NUMBER = re.compile(r"[0-9]+")


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    # whole floats render as integers ("500", not "500.0")
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def rank_scores(
    records: Iterable[Any],
    id_field: str,
    score_field: str,
) -> List[ScoreEntry]:
    """
    Filter, normalize and sort raw score rows.

    Args:
        records:     Row mappings from the export (non-mappings are skipped)
        id_field:    Column holding the customer number
        score_field: Column holding the points text

    Returns:
        ScoreEntry list sorted by normalized points, descending. Rows with
        equal points keep their export order.
    """
    entries = []
    for row in records:
        if not isinstance(row, dict):
            continue
        identifier = _as_text(row.get(id_field))
        if not _CUSTOMER_NUMBER.fullmatch(identifier):
            continue

        raw_score = _as_text(row.get(score_field) or "")
        entries.append(
            ScoreEntry(id=identifier, score=raw_score, value=normalize_score(raw_score))
        )

    # sorted() is stable with reverse=True, so ties keep input order
    return sorted(entries, key=lambda entry: entry.value, reverse=True)


class ScoreService:
    """Loads the score export and ranks it."""

    def __init__(self, source_path: Optional[str] = None):
        self._source_path = source_path

    @property
    def source_path(self) -> Path:
        if self._source_path:
            return Path(self._source_path)
        return settings.scores_file

    async def _read_records(self) -> list:
        path = self.source_path
        try:
            async with aiofiles.open(path, "r", encoding="utf-8") as f:
                raw = await f.read()
            records = json.loads(raw)
        except (OSError, ValueError) as e:
            # ValueError covers JSONDecodeError and UnicodeDecodeError
            logger.error("Score export %s unreadable: %s", path, str(e))
            raise DataUnavailableError(details=str(e))

        if not isinstance(records, list):
            raise DataUnavailableError(
                details=f"expected a list of rows, got {type(records).__name__}"
            )
        return records

    async def get_ranking(self, include_value: bool = False) -> List[ScoreEntry]:
        """
        Return the ranked scoreboard.

        Raises:
            DataUnavailableError: export missing, malformed, or not a list (→ 500)
        """
        records = await self._read_records()
        ranking = rank_scores(
            records,
            id_field=settings.scores_id_column,
            score_field=settings.scores_value_column,
        )
        logger.debug("Ranked %d of %d score rows", len(ranking), len(records))

        if not include_value:
            for entry in ranking:
                entry.value = None
        return ranking


score_service = ScoreService()

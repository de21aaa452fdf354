"""
Campus Market Backend: Generic JSON Resource Store
====================================================

What:  One store implementation shared by every resource kind
       (announcements, discounts, polls, business hours).
How:   Each kind is described by a ResourceKind (file name, default value,
       required fields, record builder). A ResourceStore instance owns one
       JSON document and performs whole-document read-modify-write cycles.
Who:   Instantiated once per kind in services/resources.py; used by routes
       and by the poll voting service.

Lifecycle of a document:
    1. First access: file missing → default value written (`[]` or hours)
    2. load():   read + json.loads, malformed content → StorageCorruptError
    3. mutate:   append / delete_by_id / replace / update in memory
    4. save():   pretty-printed JSON (indent=2, UTF-8) written back in full

Concurrency:
    With settings.serialize_writes (the default) every mutation runs under a
    per-store asyncio.Lock, so two concurrent votes on the same poll both
    land. With the flag off, mutations are unguarded and the last writer
    wins.
"""

import asyncio
import contextlib
import json
import logging
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

import aiofiles

from campus_market.config import settings
from campus_market.exceptions import (
    FileStorageError,
    RequestInvalidError,
    StorageCorruptError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResourceKind:
    """
    Static description of one JSON-backed resource.

    Attributes:
        name:             Human label used in logs and error messages
        filename:         Document name under settings.data_dir
        default_factory:  Value materialized when the document is missing
        required:         Fields that must be present and not an empty string
        required_message: RequestInvalidError message when one is missing
        validate:         Extra checks on the incoming fields (may raise)
        build:            Maps validated input fields to the stored body
    """
    name: str
    filename: str
    default_factory: Callable[[], Any] = list
    required: Tuple[str, ...] = ()
    required_message: str = "Required fields are missing."
    validate: Optional[Callable[[Dict[str, Any]], None]] = None
    build: Callable[[Dict[str, Any]], Dict[str, Any]] = dict


def utc_timestamp() -> str:
    """Current UTC instant as ISO-8601 with milliseconds, e.g. 2025-05-06T09:30:00.123Z."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def next_identifier(items: List[Dict[str, Any]]) -> int:
    """
    Epoch milliseconds, bumped past the largest existing id.

    Ids stay unique and strictly increasing within a collection even when
    several records are appended inside the same millisecond.
    """
    now_ms = int(time.time() * 1000)
    existing = [item.get("id") for item in items if isinstance(item, dict)]
    latest = max((i for i in existing if isinstance(i, int)), default=0)
    return max(now_ms, latest + 1)


class ResourceStore:
    """
    JSON-document persistence for a single resource kind.

    The document location is resolved on every call from `data_dir`
    (constructor override, used in tests) or settings.data_dir.
    """

    def __init__(self, kind: ResourceKind, data_dir: Optional[str] = None):
        self.kind = kind
        self._data_dir = data_dir
        self._lock = asyncio.Lock()

    @property
    def path(self) -> Path:
        base = Path(self._data_dir) if self._data_dir else settings.data_path
        return base / self.kind.filename

    def _guard(self):
        if settings.serialize_writes:
            return self._lock
        return contextlib.nullcontext()

    # ── Document I/O ──────────────────────────────────────────────────────

    async def _write(self, path: Path, document: Any) -> None:
        payload = json.dumps(document, ensure_ascii=False, indent=2)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(path, "w", encoding="utf-8") as f:
                await f.write(payload)
        except OSError as e:
            logger.error("Failed to write %s: %s", path, str(e))
            raise FileStorageError(
                message=f"Could not save {self.kind.name} data.",
                details=str(e),
            )

    async def load(self) -> Any:
        """
        Read the whole document, materializing the default first if absent.

        Raises:
            StorageCorruptError: file exists but is not valid JSON, has the wrong
                                 shape, or holds non-object rows (→ 500)
        """
        path = self.path
        if not path.exists():
            logger.info("Initializing %s store at %s", self.kind.name, path)
            await self._write(path, self.kind.default_factory())

        try:
            async with aiofiles.open(path, "r", encoding="utf-8") as f:
                raw = await f.read()
            document = json.loads(raw)
        except ValueError as e:
            logger.error("Corrupt %s store %s: %s", self.kind.name, path, str(e))
            raise StorageCorruptError(
                message=f"Could not read {self.kind.name} data.",
                details=str(e),
            )
        except OSError as e:
            raise StorageCorruptError(
                message=f"Could not read {self.kind.name} data.",
                details=str(e),
            )

        expected = type(self.kind.default_factory())
        if not isinstance(document, expected):
            raise StorageCorruptError(
                message=f"Could not read {self.kind.name} data.",
                details=f"expected a JSON {expected.__name__}, found {type(document).__name__}",
            )
        if isinstance(document, list):
            for position, row in enumerate(document):
                if not isinstance(row, dict):
                    raise StorageCorruptError(
                        message=f"Could not read {self.kind.name} data.",
                        details=f"entry {position} is a JSON {type(row).__name__}, not an object",
                    )
        return document

    async def save(self, document: Any) -> None:
        await self._write(self.path, document)

    # ── Validation ────────────────────────────────────────────────────────

    def _validated(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        missing = [name for name in self.kind.required if fields.get(name) in (None, "")]
        if missing:
            raise RequestInvalidError(
                message=self.kind.required_message,
                details=f"missing: {', '.join(missing)}",
            )
        if self.kind.validate is not None:
            self.kind.validate(fields)
        return self.kind.build(fields)

    # ── Operations ────────────────────────────────────────────────────────

    async def update(self, mutator: Callable[[Any], Any]) -> Any:
        """
        Run one read-modify-write cycle.

        `mutator` receives the loaded document, changes it in place and
        returns the value handed back to the caller. If it raises, nothing
        is written.
        """
        async with self._guard():
            document = await self.load()
            result = mutator(document)
            await self.save(document)
            return result

    async def append(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        """
        Validate, stamp and insert a new record at the front of the collection.

        Returns:
            The stored record: {"id": ..., <kind fields>, "createdAt": ...}

        Raises:
            RequestInvalidError: a required field is missing (nothing written)
        """
        body = self._validated(fields)

        def insert(items: List[Dict[str, Any]]) -> Dict[str, Any]:
            record = {"id": next_identifier(items), **body, "createdAt": utc_timestamp()}
            items.insert(0, record)
            return record

        record = await self.update(insert)
        logger.info("Added %s %s", self.kind.name, record["id"])
        return record

    async def delete_by_id(self, item_id: int) -> None:
        """
        Remove the record with the given id.

        The collection is written back whether or not anything matched, so
        deleting an unknown id succeeds and leaves the data unchanged.
        """
        def remove(items: List[Dict[str, Any]]) -> int:
            kept = [item for item in items if item.get("id") != item_id]
            removed = len(items) - len(kept)
            items[:] = kept
            return removed

        removed = await self.update(remove)
        logger.info("Deleted %s %s (%d removed)", self.kind.name, item_id, removed)

    async def replace(self, fields: Dict[str, Any]) -> Any:
        """
        Overwrite a singleton document wholesale (no merge).

        Raises:
            RequestInvalidError: a required field is missing (nothing written)
        """
        document = self._validated(fields)
        async with self._guard():
            await self.save(document)
        logger.info("Replaced %s document", self.kind.name)
        return document

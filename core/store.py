"""Read-only record stores feeding the projection engine."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any, Iterable, Mapping, Protocol

from core.models import RecordCategory
from core.records import RecordSet

__all__ = ["RecordStore", "InMemoryRecordStore", "JsonRecordStore", "fetch_record_set"]


class RecordStore(Protocol):
    async def get_all(self, category: RecordCategory) -> list[Mapping[str, Any]]:
        ...


class InMemoryRecordStore:
    """Record store backed by a mapping of category to raw records."""

    def __init__(self, records: Mapping[RecordCategory | str, Iterable[Mapping[str, Any]]] | None = None):
        self._records: dict[RecordCategory, list[Mapping[str, Any]]] = {
            RecordCategory(key): list(value) for key, value in (records or {}).items()
        }

    async def get_all(self, category: RecordCategory) -> list[Mapping[str, Any]]:
        return list(self._records.get(RecordCategory(category), []))


class JsonRecordStore:
    """Record store reading a ``{category: [records]}`` JSON document.

    Concurrent reads share a single parse of the file, so one
    :func:`fetch_record_set` sees one snapshot. The file is read again on the
    next fetch, so edits made outside the dashboard are picked up by the next
    recomputation.
    """

    def __init__(self, json_path: str | Path):
        self.path = Path(json_path)
        self._pending: asyncio.Future[dict[str, Any]] | None = None

    def _load(self) -> dict[str, Any]:
        if not self.path.exists():
            raise FileNotFoundError(f"Record file not found: {self.path}")
        with self.path.open(encoding="utf-8") as handle:
            data = json.load(handle)
        if not isinstance(data, dict):
            raise ValueError(f"Record file {self.path} must contain a JSON object keyed by category.")
        return data

    def _release(self, future: asyncio.Future) -> None:
        if self._pending is future:
            self._pending = None

    async def get_all(self, category: RecordCategory) -> list[Mapping[str, Any]]:
        if self._pending is None:
            self._pending = asyncio.ensure_future(asyncio.to_thread(self._load))
            self._pending.add_done_callback(self._release)
        data = await asyncio.shield(self._pending)
        return list(data.get(RecordCategory(category).value, []))


async def fetch_record_set(store: RecordStore) -> RecordSet:
    """Fetch every category concurrently and join them into one record set."""

    categories = list(RecordCategory)
    results = await asyncio.gather(*(store.get_all(category) for category in categories))
    return RecordSet.from_mapping(dict(zip(categories, results)))

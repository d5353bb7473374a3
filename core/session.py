"""Projection session that installs only the latest recomputation."""

from __future__ import annotations

import itertools
from typing import Optional

from config.logging import get_logger
from core.models import ProjectionContext
from core.projection import ProjectionResult, compute_projection
from core.store import RecordStore, fetch_record_set

__all__ = ["ProjectionSession"]

logger = get_logger(__name__)


class ProjectionSession:
    """Holds the current projection and guards it against stale results.

    Every :meth:`refresh` takes a new request epoch before awaiting the record
    store. Refreshes can overlap while records are being fetched, so a result
    is installed only if no newer refresh started in the meantime.
    """

    def __init__(self) -> None:
        self._epochs = itertools.count(1)
        self._latest_epoch = 0
        self._installed_epoch = 0
        self._result: Optional[ProjectionResult] = None

    @property
    def result(self) -> Optional[ProjectionResult]:
        return self._result

    @property
    def latest_epoch(self) -> int:
        return self._latest_epoch

    @property
    def installed_epoch(self) -> int:
        return self._installed_epoch

    def begin(self) -> int:
        """Reserve the next request epoch."""

        self._latest_epoch = next(self._epochs)
        return self._latest_epoch

    def install(self, epoch: int, result: ProjectionResult) -> bool:
        """Swap in ``result`` if ``epoch`` is still the latest request."""

        if epoch != self._latest_epoch:
            logger.info("Discarding stale projection for epoch %d (latest is %d)", epoch, self._latest_epoch)
            return False
        self._result = result
        self._installed_epoch = epoch
        return True

    async def refresh(self, store: RecordStore, context: ProjectionContext) -> Optional[ProjectionResult]:
        """Fetch records, recompute and install; returns ``None`` if superseded."""

        epoch = self.begin()
        records = await fetch_record_set(store)
        if epoch != self._latest_epoch:
            logger.info("Skipping superseded projection for epoch %d", epoch)
            return None
        result = compute_projection(records, context)
        return result if self.install(epoch, result) else None

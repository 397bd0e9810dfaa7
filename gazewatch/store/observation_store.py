"""In-memory observation store with async-safe access.

Design notes:
    - An asyncio.Lock guards all mutations so concurrent HTTP handlers never
      corrupt state.
    - Records keep their timestamp as text, exactly as written.  New records
      are stamped in the canonical naive form by an injectable clock.
    - Reads hand out copies.  The engine computes on a snapshot and never
      sees the store itself.
    - The store does NOT decide what observations mean.  Labelling and all
      temporal arithmetic belong to the engine.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from gazewatch.domain.observation import Observation
from gazewatch.foundation.clock import canonical_now
from gazewatch.foundation.timestamps import format_canonical, normalize

logger = logging.getLogger(__name__)


class ObservationRecord(BaseModel):
    """One stored classification response."""

    id: int
    timestamp: str = Field(..., description="Timestamp text as stored")
    question: str = ""
    response: str
    image_size: Optional[int] = Field(None, serialization_alias="imageSize")
    processing_time: Optional[int] = Field(None, serialization_alias="processingTime")

    model_config = {"frozen": True}

    def to_observation(self) -> Observation:
        """Raises InvalidTimestampError if the stored text is unparseable."""
        return Observation.from_raw(self.timestamp, self.response)


class ObservationStore:
    """Async-safe, append-only store of classification responses.

    Args:
        clock: Source of "now" used to stamp records saved without an
            explicit timestamp.
    """

    def __init__(self, clock: Callable[[], datetime] = canonical_now) -> None:
        self._clock = clock
        self._lock = asyncio.Lock()
        self._records: list[ObservationRecord] = []
        self._next_id = 1

    # ── Mutation ─────────────────────────────────────────────────────────

    async def save(
        self,
        response: str,
        question: str = "",
        image_size: int | None = None,
        processing_time: int | None = None,
        timestamp: str | None = None,
    ) -> ObservationRecord:
        """Append a response and return the stored record."""
        async with self._lock:
            record = ObservationRecord(
                id=self._next_id,
                timestamp=timestamp if timestamp is not None else format_canonical(self._clock()),
                question=question,
                response=response,
                image_size=image_size,
                processing_time=processing_time,
            )
            self._records.append(record)
            self._next_id += 1
            logger.debug("Saved record %d (%r at %s)", record.id, record.response, record.timestamp)
            return record

    async def clear(self) -> int:
        """Delete every record.  Returns the number removed."""
        async with self._lock:
            removed = len(self._records)
            self._records = []
            if removed:
                logger.info("Cleared %d record(s)", removed)
            return removed

    # ── Queries ──────────────────────────────────────────────────────────

    async def count(self) -> int:
        async with self._lock:
            return len(self._records)

    async def page(self, limit: int = 50, offset: int = 0) -> list[ObservationRecord]:
        """Newest-first slice of raw records, for log views."""
        records = await self._sorted_records(newest_first=True)
        return records[offset:offset + limit]

    async def newest_first(self) -> list[Observation]:
        """All observations, descending by instant."""
        return [r.to_observation() for r in await self._sorted_records(newest_first=True)]

    async def oldest_first(self) -> list[Observation]:
        """All observations, ascending by instant."""
        return [r.to_observation() for r in await self._sorted_records(newest_first=False)]

    # ── Internals ────────────────────────────────────────────────────────

    async def _sorted_records(self, newest_first: bool) -> list[ObservationRecord]:
        async with self._lock:
            snapshot = list(self._records)
        # Ties keep insertion order, newest insertion first when descending
        ordered = sorted(
            enumerate(snapshot),
            key=lambda pair: (normalize(pair[1].timestamp), pair[0]),
            reverse=newest_first,
        )
        return [record for _, record in ordered]

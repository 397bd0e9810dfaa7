"""REST endpoints for usage statistics.

Paths:
    GET /api/phone-stats                   live continuous-run counter
    GET /api/chart-data?period=today       hourly chart for today
    GET /api/chart-data?period=week|month  daily chart ending today

Each request reads a fresh snapshot from the ObservationStore and runs the
stateless UsageEngine over it.  The reference instant comes from an
injectable clock so responses are reproducible in tests.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any

from fastapi import APIRouter, HTTPException

from gazewatch.core.engine import UsageEngine
from gazewatch.domain.enums import ChartPeriod, InvalidPeriodError
from gazewatch.foundation.clock import canonical_now
from gazewatch.foundation.timestamps import InvalidTimestampError
from gazewatch.store.observation_store import ObservationStore

logger = logging.getLogger(__name__)


def create_stats_router(
    store: ObservationStore,
    engine: UsageEngine,
    clock: Callable[[], datetime] = canonical_now,
) -> APIRouter:
    """Factory that wires the statistics endpoints to store + engine."""

    router = APIRouter(prefix="/api", tags=["statistics"])

    @router.get("/phone-stats")
    async def phone_stats() -> dict[str, Any]:
        try:
            observations = await store.newest_first()
        except InvalidTimestampError as exc:
            logger.error("Live stats aborted: %s", exc)
            raise HTTPException(status_code=500, detail=str(exc)) from exc

        stats = engine.live_stats(observations)
        logger.info(
            "Phone stats: looking=%ds not_looking=%ds",
            stats.current_continuous_looking_time,
            stats.current_continuous_not_looking_time,
        )
        return stats.model_dump(by_alias=True, mode="json")

    @router.get("/chart-data")
    async def chart_data(period: str = "today") -> dict[str, Any]:
        # Reject unknown selectors before touching the store
        try:
            selected = ChartPeriod.parse(period)
        except InvalidPeriodError as exc:
            logger.warning("Rejected chart request: %s", exc)
            raise HTTPException(status_code=400, detail=str(exc)) from exc

        try:
            observations = await store.oldest_first()
        except InvalidTimestampError as exc:
            logger.error("Chart %s aborted: %s", selected.value, exc)
            raise HTTPException(status_code=500, detail=str(exc)) from exc

        payload = engine.chart(selected, observations, now=clock())
        return payload.model_dump(by_alias=True, mode="json")

    return router

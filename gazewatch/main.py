"""gazewatch: phone-gaze observation log, live counter and usage charts.

This is the application entry point.  It wires the ObservationStore,
UsageEngine, dashboard ConnectionManager and the HTTP / WebSocket
endpoints together.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI

from gazewatch.api.responses import create_responses_router
from gazewatch.api.stats import create_stats_router
from gazewatch.api.ws_updates import create_updates_router
from gazewatch.config import settings
from gazewatch.core.engine import EngineConfig, UsageEngine
from gazewatch.foundation.clock import canonical_now
from gazewatch.services.connection_manager import ConnectionManager
from gazewatch.store.observation_store import ObservationStore

# ── Logging ──────────────────────────────────────────────────────────────────

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)

# ── Engine ───────────────────────────────────────────────────────────────────

engine = UsageEngine(
    EngineConfig(
        gap_threshold_seconds=settings.gap_threshold_seconds,
        min_period_seconds=settings.min_period_seconds,
        hour_bucket_cap_minutes=settings.hour_bucket_cap_minutes,
        day_bucket_cap_hours=settings.day_bucket_cap_hours,
        week_days=settings.week_days,
        month_days=settings.month_days,
    )
)

# ── State ────────────────────────────────────────────────────────────────────

store = ObservationStore(clock=canonical_now)
dashboards = ConnectionManager()

# ── App ──────────────────────────────────────────────────────────────────────

app = FastAPI(
    title=settings.app_name,
    description="Phone-gaze observation log, live counter and usage charts",
    version="0.1.0",
    debug=settings.debug,
)

# ── Routes ───────────────────────────────────────────────────────────────────

app.include_router(create_responses_router(store, dashboards, settings.responses_page_limit))
app.include_router(create_stats_router(store, engine, clock=canonical_now))
app.include_router(create_updates_router(dashboards))


# ── Health ───────────────────────────────────────────────────────────────────

@app.get("/api/health")
async def health() -> dict:
    return {
        "status": "OK",
        "timestamp": canonical_now().isoformat(),
        "records": await store.count(),
        "dashboard_clients": dashboards.active_count,
    }

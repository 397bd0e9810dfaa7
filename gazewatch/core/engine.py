"""UsageEngine: deterministic live counter and usage-chart computation.

Design principles:
    1. Pure functions: accepts an observation snapshot and a reference
       instant, returns an immutable value object.
    2. No side effects, no state retained between calls, no I/O.
    3. The clock is a parameter.  Nothing here reads the wall clock, so the
       same snapshot and the same ``now`` always give the same result.
    4. All thresholds and caps are explicit and configurable.

Pipelines:
    live stats   newest-first observations → continuous_run → LiveStats
    chart        oldest-first observations → window filter → segment
                 → aggregate → build_chart → ChartPayload
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime

from gazewatch.core.aggregator import (
    DAY_BUCKET_CAP_HOURS,
    HOUR_BUCKET_CAP_MINUTES,
    DailyWindow,
    Granularity,
    HourlyWindow,
    aggregate,
)
from gazewatch.core.chart_builder import build_chart
from gazewatch.core.continuous_run import GAP_THRESHOLD_SECONDS, continuous_run
from gazewatch.core.segmenter import MIN_PERIOD_SECONDS, segment
from gazewatch.domain.chart import ChartPayload, LiveStats
from gazewatch.domain.enums import ChartPeriod, Label
from gazewatch.domain.observation import Observation
from gazewatch.foundation.timestamps import normalize

logger = logging.getLogger(__name__)

NO_DATA_MESSAGE = "No data available"


@dataclass(frozen=True)
class EngineConfig:
    """Thresholds, caps and window sizes used by the engine."""

    gap_threshold_seconds: float = GAP_THRESHOLD_SECONDS
    min_period_seconds: float = MIN_PERIOD_SECONDS
    hour_bucket_cap_minutes: int = HOUR_BUCKET_CAP_MINUTES
    day_bucket_cap_hours: float = DAY_BUCKET_CAP_HOURS
    week_days: int = 7
    month_days: int = 31


class UsageEngine:
    """Stateless computation over observation snapshots."""

    def __init__(self, config: EngineConfig | None = None) -> None:
        self._config = config or EngineConfig()

    @property
    def config(self) -> EngineConfig:
        return self._config

    # ── Live counter ─────────────────────────────────────────────────────

    def live_stats(self, observations_newest_first: Sequence[Observation]) -> LiveStats:
        """Continuous-run counter anchored to the most recent observation."""
        if not observations_newest_first:
            return LiveStats(message=NO_DATA_MESSAGE)

        run = continuous_run(
            observations_newest_first,
            gap_threshold=self._config.gap_threshold_seconds,
        )
        seconds = int(math.floor(run.duration_seconds + 0.5))
        latest = observations_newest_first[0]

        stats = LiveStats(
            current_continuous_looking_time=seconds if run.label is Label.LOOKING else 0,
            current_continuous_not_looking_time=seconds if run.label is Label.NOT_LOOKING else 0,
            last_label=latest.label,
            last_timestamp=latest.timestamp.isoformat(),
            continuous_seconds=seconds,
            has_data=True,
        )
        logger.debug("Live stats: label=%s continuous=%ds", latest.label.value, seconds)
        return stats

    # ── Charts ───────────────────────────────────────────────────────────

    def window_for(self, period: ChartPeriod, now: datetime) -> Granularity:
        """Calendar window of *period* that contains the reference instant *now*."""
        c = self._config
        if period is ChartPeriod.TODAY:
            return HourlyWindow.for_day(now, cap_minutes=c.hour_bucket_cap_minutes)
        days = c.week_days if period is ChartPeriod.WEEK else c.month_days
        return DailyWindow.ending_on(now, days, cap_hours=c.day_bucket_cap_hours)

    def chart(
        self,
        period: ChartPeriod,
        observations_oldest_first: Sequence[Observation],
        now: datetime,
    ) -> ChartPayload:
        """Usage chart for *period*, evaluated at the reference instant *now*.

        Only observations inside the window are considered; their count is
        reported as ``total_records``.
        """
        window = self.window_for(period, normalize(now))
        in_window = [
            o for o in observations_oldest_first
            if window.start <= o.timestamp < window.end
        ]

        periods = segment(
            in_window,
            gap_threshold=self._config.gap_threshold_seconds,
            min_duration=self._config.min_period_seconds,
        )
        buckets = aggregate(periods, window)
        payload = build_chart(period, len(in_window), buckets)

        logger.debug(
            "Chart %s: %d record(s) → %d period(s) → %d bucket(s)",
            period.value, len(in_window), len(periods), len(buckets),
        )
        return payload

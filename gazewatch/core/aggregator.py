"""Bucket aggregator: maps periods onto fixed calendar slots for charting.

Two granularities:

    HourlyWindow  24 hour-of-day buckets for one canonical calendar day.
                  A period is split across every hour it overlaps, by
                  interval intersection.  Amounts are minutes.

    DailyWindow   N day buckets ending on the reference day (7 for a week,
                  31 for a month).  A period is credited wholly to the day
                  it starts on, even if it runs past midnight.  Amounts are
                  hours.

The split/no-split asymmetry is the established display behaviour and is
kept as is.

Rounding policy:
    Contributions are accumulated unrounded in seconds.  Each bucket is
    rounded once on output (minutes to an integer, hours to two decimals,
    both half-up) and only then clamped to the bucket cap.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Union

from gazewatch.domain.chart import Bucket
from gazewatch.domain.enums import Label
from gazewatch.domain.period import Period
from gazewatch.foundation.timestamps import delta, normalize

SECONDS_PER_DAY = 86400
HOURS_PER_DAY = 24
HOUR_BUCKET_CAP_MINUTES = 60
DAY_BUCKET_CAP_HOURS = 10.0


def start_of_day(instant: datetime) -> datetime:
    """Midnight of the canonical calendar day containing *instant*."""
    return normalize(instant).replace(hour=0, minute=0, second=0, microsecond=0)


def _round_half_up(value: float, digits: int = 0) -> float:
    scale = 10 ** digits
    return math.floor(value * scale + 0.5) / scale


@dataclass(frozen=True)
class HourlyWindow:
    """One calendar day split into 24 hour buckets."""

    day_start: datetime
    cap_minutes: int = HOUR_BUCKET_CAP_MINUTES

    @classmethod
    def for_day(cls, now: datetime, cap_minutes: int = HOUR_BUCKET_CAP_MINUTES) -> HourlyWindow:
        return cls(day_start=start_of_day(now), cap_minutes=cap_minutes)

    @property
    def start(self) -> datetime:
        return self.day_start

    @property
    def end(self) -> datetime:
        return self.day_start + timedelta(days=1)

    @property
    def bucket_count(self) -> int:
        return HOURS_PER_DAY


@dataclass(frozen=True)
class DailyWindow:
    """*bucket_count* consecutive calendar days starting at *window_start*."""

    window_start: datetime
    bucket_count: int
    cap_hours: float = DAY_BUCKET_CAP_HOURS

    @classmethod
    def ending_on(
        cls,
        now: datetime,
        days: int,
        cap_hours: float = DAY_BUCKET_CAP_HOURS,
    ) -> DailyWindow:
        """The window of *days* days whose last bucket is the day containing *now*."""
        if days < 1:
            raise ValueError(f"days must be positive, got {days}")
        first_day = start_of_day(now) - timedelta(days=days - 1)
        return cls(window_start=first_day, bucket_count=days, cap_hours=cap_hours)

    @property
    def start(self) -> datetime:
        return self.window_start

    @property
    def end(self) -> datetime:
        return self.window_start + timedelta(days=self.bucket_count)


Granularity = Union[HourlyWindow, DailyWindow]


def aggregate(periods: Sequence[Period], granularity: Granularity) -> list[Bucket]:
    """Distribute *periods* over the buckets of *granularity*."""
    if isinstance(granularity, HourlyWindow):
        return _aggregate_hourly(periods, granularity)
    if isinstance(granularity, DailyWindow):
        return _aggregate_daily(periods, granularity)
    raise TypeError(f"Unsupported granularity: {type(granularity).__name__}")


# ── Hourly ───────────────────────────────────────────────────────────────────


def _aggregate_hourly(periods: Sequence[Period], window: HourlyWindow) -> list[Bucket]:
    seconds = {label: [0.0] * HOURS_PER_DAY for label in Label}
    hour = timedelta(hours=1)

    for period in periods:
        if not (window.start <= period.start < window.end):
            continue
        first_hour = int(delta(period.start, window.start) // 3600)
        for h in range(first_hour, HOURS_PER_DAY):
            bucket_start = window.start + h * hour
            if bucket_start >= period.end:
                break
            overlap = delta(min(period.end, bucket_start + hour), max(period.start, bucket_start))
            if overlap > 0:
                seconds[period.label][h] += overlap

    def minutes(total_seconds: float) -> int:
        return min(int(_round_half_up(total_seconds / 60.0)), window.cap_minutes)

    return [
        Bucket(
            key=f"{h:02d}:00",
            start=window.start + h * hour,
            looking=minutes(seconds[Label.LOOKING][h]),
            not_looking=minutes(seconds[Label.NOT_LOOKING][h]),
        )
        for h in range(HOURS_PER_DAY)
    ]


# ── Daily ────────────────────────────────────────────────────────────────────


def _aggregate_daily(periods: Sequence[Period], window: DailyWindow) -> list[Bucket]:
    seconds = {label: [0.0] * window.bucket_count for label in Label}

    for period in periods:
        day_index = math.floor(delta(period.start, window.start) / SECONDS_PER_DAY)
        if 0 <= day_index < window.bucket_count:
            seconds[period.label][day_index] += period.duration_seconds

    def hours(total_seconds: float) -> float:
        return min(_round_half_up(total_seconds / 3600.0, 2), window.cap_hours)

    buckets: list[Bucket] = []
    for i in range(window.bucket_count):
        day = window.start + timedelta(days=i)
        buckets.append(Bucket(
            key=day.strftime("%m-%d"),
            start=day,
            looking=hours(seconds[Label.LOOKING][i]),
            not_looking=hours(seconds[Label.NOT_LOOKING][i]),
        ))
    return buckets

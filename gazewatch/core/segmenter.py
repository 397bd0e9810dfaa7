"""Period segmenter: splits the observation history into same-label periods.

A period opens at an observation and is extended by every following
observation with the same label.  It closes when the label changes (at the
previous observation), when the gap to the next observation exceeds the
threshold (at the current observation), or at the end of the input.
Periods shorter than the minimum duration are dropped, never merged, so
silence longer than the threshold produces no period at all.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime

from gazewatch.core.continuous_run import GAP_THRESHOLD_SECONDS
from gazewatch.domain.enums import Label
from gazewatch.domain.observation import Observation
from gazewatch.domain.period import Period
from gazewatch.foundation.timestamps import delta

logger = logging.getLogger(__name__)

MIN_PERIOD_SECONDS = 1.0


class _OpenPeriod:
    """Mutable accumulator for the period currently being extended."""

    __slots__ = ("start", "end", "label")

    def __init__(self, start: datetime, label: Label) -> None:
        self.start = start
        self.end = start
        self.label = label

    def close(self, min_duration: float) -> Period | None:
        """Period ending at the last observation seen, or None if too short."""
        duration = delta(self.end, self.start)
        if duration < min_duration:
            return None
        return Period(start=self.start, end=self.end, label=self.label, duration_seconds=duration)


def segment(
    observations_oldest_first: Sequence[Observation],
    gap_threshold: float = GAP_THRESHOLD_SECONDS,
    min_duration: float = MIN_PERIOD_SECONDS,
) -> list[Period]:
    """Partition ascending observations into maximal same-label periods."""
    periods: list[Period] = []
    current: _OpenPeriod | None = None
    obs = observations_oldest_first

    def emit(closing: _OpenPeriod) -> None:
        period = closing.close(min_duration)
        if period is not None:
            periods.append(period)

    for i, observation in enumerate(obs):
        if current is None or observation.label != current.label:
            # current.end is the previous observation here
            if current is not None:
                emit(current)
            current = _OpenPeriod(observation.timestamp, observation.label)
        else:
            current.end = observation.timestamp

        if i + 1 < len(obs) and delta(obs[i + 1].timestamp, observation.timestamp) > gap_threshold:
            emit(current)
            current = None

    if current is not None:
        emit(current)

    logger.debug("Segmented %d observation(s) into %d period(s)", len(obs), len(periods))
    return periods

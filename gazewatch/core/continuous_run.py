"""Continuous-run calculator: the live "current state" counter.

Walks backwards from the newest observation until the run breaks, either
because consecutive observations are too far apart or because the label
changes.  A gap break ends the run at the observation *before* the gap; a
label break ends it at the first observation with the other label, so the
transition interval is counted as part of the current run.
"""

from __future__ import annotations

from collections.abc import Sequence

from gazewatch.domain.observation import Observation
from gazewatch.domain.period import ContinuousRunResult
from gazewatch.foundation.timestamps import delta

GAP_THRESHOLD_SECONDS = 20.0


def continuous_run(
    observations_newest_first: Sequence[Observation],
    gap_threshold: float = GAP_THRESHOLD_SECONDS,
) -> ContinuousRunResult:
    """Duration of the uninterrupted run ending at the most recent observation.

    Args:
        observations_newest_first: Observations ordered by descending timestamp.
        gap_threshold: Largest allowed gap (seconds) between neighbours.
    """
    n = len(observations_newest_first)
    if n == 0:
        return ContinuousRunResult()

    obs = observations_newest_first
    boundary = n - 1
    for i in range(1, n):
        if delta(obs[i - 1].timestamp, obs[i].timestamp) > gap_threshold:
            boundary = i - 1
            break
        if obs[i].label != obs[i - 1].label:
            boundary = i
            break

    duration = delta(obs[0].timestamp, obs[boundary].timestamp) if boundary > 0 else 0.0
    return ContinuousRunResult(label=obs[0].label, duration_seconds=duration)

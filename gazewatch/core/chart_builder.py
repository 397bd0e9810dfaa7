"""Chart data assembler: packages bucket series for a rendering collaborator."""

from __future__ import annotations

from collections.abc import Sequence

from gazewatch.domain.chart import Amount, Bucket, ChartPayload, ChartSeries, ChartStatistics
from gazewatch.domain.enums import ChartPeriod, Label

# Renderers stack "not-looking" underneath "looking"
SERIES_ORDER = (Label.NOT_LOOKING, Label.LOOKING)


def _total(values: Sequence[Amount]) -> Amount:
    total = sum(values)
    # Day buckets carry two-decimal hours; keep float noise out of the total
    return round(total, 2) if isinstance(total, float) else total


def build_chart(
    period: ChartPeriod,
    raw_observation_count: int,
    buckets: Sequence[Bucket],
) -> ChartPayload:
    """Assemble the chart payload.

    ``total_records`` is the raw observation count, not the number of
    derived periods or buckets.  The per-label totals are sums of the
    already rounded and clamped bucket values.
    """
    series = [
        ChartSeries(label=label, values=[b.amount(label) for b in buckets])
        for label in SERIES_ORDER
    ]
    by_label = {s.label: s.values for s in series}

    return ChartPayload(
        type=period,
        labels=[b.key for b in buckets],
        series=series,
        statistics=ChartStatistics(
            total_looking_time=_total(by_label[Label.LOOKING]),
            total_not_looking_time=_total(by_label[Label.NOT_LOOKING]),
            total_records=raw_observation_count,
        ),
    )

"""Response value objects for the live counter and the usage charts.

Field names are snake_case in Python; the camelCase names the dashboard
expects are attached as serialization aliases, so callers dump with
``model_dump(by_alias=True)``.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Union

from pydantic import BaseModel, Field

from gazewatch.domain.enums import ChartPeriod, Label

Amount = Union[int, float]


class Bucket(BaseModel):
    """One calendar slot with a rounded, clamped amount per label.

    Hour buckets hold minutes, day buckets hold hours.
    """

    key: str = Field(..., description="Display label: 'HH:00' or 'MM-DD'")
    start: datetime
    looking: Amount = 0
    not_looking: Amount = 0

    model_config = {"frozen": True}

    def amount(self, label: Label) -> Amount:
        return self.looking if label is Label.LOOKING else self.not_looking


class ChartSeries(BaseModel):
    label: Label
    values: list[Amount]

    model_config = {"frozen": True}


class ChartStatistics(BaseModel):
    total_looking_time: Amount = Field(0, serialization_alias="totalLookingTime")
    total_not_looking_time: Amount = Field(0, serialization_alias="totalNotLookingTime")
    total_records: int = Field(0, ge=0, serialization_alias="totalRecords")

    model_config = {"frozen": True}


class ChartPayload(BaseModel):
    """Everything a renderer needs to draw one usage chart."""

    type: ChartPeriod
    labels: list[str]
    series: list[ChartSeries]
    statistics: ChartStatistics

    model_config = {"frozen": True}


class LiveStats(BaseModel):
    """The "how long has the current state held" counter.

    Exactly one of the two continuous counters is nonzero at a time.
    """

    current_continuous_looking_time: int = Field(0, ge=0, serialization_alias="currentContinuousLookingTime")
    current_continuous_not_looking_time: int = Field(0, ge=0, serialization_alias="currentContinuousNotLookingTime")
    last_label: Optional[Label] = Field(None, serialization_alias="lastLabel")
    last_timestamp: Optional[str] = Field(None, serialization_alias="lastTimestamp")
    continuous_seconds: int = Field(0, ge=0, serialization_alias="continuousSeconds")
    has_data: bool = Field(False, serialization_alias="hasData")
    message: Optional[str] = None

    model_config = {"frozen": True}

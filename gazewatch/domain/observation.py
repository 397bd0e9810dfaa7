"""Observation: one classified camera frame at one instant.

An Observation is a *claim*, not a fact: it is what the upstream vision
call said about the frame.  It is immutable and always carries a
canonical-offset timestamp, so arithmetic downstream never mixes naive and
aware values.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from gazewatch.domain.enums import Label
from gazewatch.foundation.timestamps import normalize


class Observation(BaseModel):
    """A timestamped binary label, validated at the boundary."""

    timestamp: datetime = Field(..., description="Instant of the frame at the canonical offset")
    label: Label = Field(..., description="Looking / not-looking classification")

    model_config = {"frozen": True}

    @field_validator("timestamp")
    @classmethod
    def timestamp_must_be_canonical(cls, v: datetime) -> datetime:
        return normalize(v)

    @classmethod
    def from_raw(cls, timestamp: str | datetime, response: str) -> Observation:
        """Build an Observation from stored text.

        The timestamp is normalized before model validation so that an
        unparseable value surfaces as ``InvalidTimestampError`` rather than
        a generic pydantic ValidationError.
        """
        return cls(timestamp=normalize(timestamp), label=Label.from_response(response))

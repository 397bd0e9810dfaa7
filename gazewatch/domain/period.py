"""Derived temporal views over an observation sequence.

Pure data structures.  They are rebuilt from the current observation
snapshot on every query and never persisted.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from gazewatch.domain.enums import Label


class Period(BaseModel):
    """A maximal, gap-free, same-label interval."""

    start: datetime
    end: datetime
    label: Label
    duration_seconds: float = Field(..., ge=0.0, description="end − start")

    model_config = {"frozen": True}


class ContinuousRunResult(BaseModel):
    """How long the label of the most recent observation has held without a break.

    ``label`` is None only when there were no observations at all.
    """

    label: Optional[Label] = None
    duration_seconds: float = Field(0.0, ge=0.0)

    model_config = {"frozen": True}

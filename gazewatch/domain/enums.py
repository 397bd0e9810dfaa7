"""Controlled enumerations for the gazewatch domain.

Every categorical field in the domain MUST reference an enum defined here.
Free-form strings are only accepted at the boundary and mapped immediately.
"""

from __future__ import annotations

from enum import Enum


class Label(str, Enum):
    """Binary classification of a single observation."""

    LOOKING = "looking"
    NOT_LOOKING = "not-looking"

    @classmethod
    def from_response(cls, text: str) -> Label:
        """Only ``"yes"`` (case-insensitive, trimmed) means the subject is looking."""
        return cls.LOOKING if text.strip().lower() == "yes" else cls.NOT_LOOKING


class InvalidPeriodError(ValueError):
    """Raised when a chart period selector is not one of today/week/month."""

    def __init__(self, raw: str) -> None:
        self.raw = raw
        super().__init__(
            f"Unknown period {raw!r}; expected one of: "
            + ", ".join(p.value for p in ChartPeriod)
        )


class ChartPeriod(str, Enum):
    """Calendar window selected for a chart query."""

    TODAY = "today"
    WEEK = "week"
    MONTH = "month"

    @classmethod
    def parse(cls, raw: str) -> ChartPeriod:
        try:
            return cls(raw)
        except ValueError:
            raise InvalidPeriodError(raw) from None

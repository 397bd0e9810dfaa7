"""Temporal normalizer: one tagged parser for every timestamp shape we accept.

Stored observations carry timestamp text in a handful of encodings.  Rather
than sniffing for spaces, ``T`` separators and suffixes all over the code,
``parse_timestamp`` classifies the text into one of a closed set of shapes
and ``to_canonical`` turns any of them into a timezone-aware datetime at the
canonical offset.  Everything downstream only ever sees that one type.

Accepted shapes:
    NAIVE_LOCAL  2026-01-01 12:00:00[.123]       canonical wall clock, no shift
    ISO_LOCAL    2026-01-01T12:00:00[.123]       canonical wall clock, no shift
    ISO_OFFSET   2026-01-01T12:00:00[.123]+08:00 converted from the stated offset
    ISO_UTC      2026-01-01T04:00:00[.123]Z      converted from UTC
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum

from gazewatch.foundation.clock import CANONICAL_TZ


class InvalidTimestampError(ValueError):
    """Raised when timestamp text matches none of the accepted shapes."""

    def __init__(self, raw: object, reason: str = "unrecognised timestamp shape") -> None:
        self.raw = raw
        self.reason = reason
        super().__init__(f"Invalid timestamp {raw!r}: {reason}")


class TimestampShape(str, Enum):
    """The closed set of encodings the normalizer understands."""

    NAIVE_LOCAL = "naive_local"
    ISO_LOCAL = "iso_local"
    ISO_OFFSET = "iso_offset"
    ISO_UTC = "iso_utc"


@dataclass(frozen=True)
class ParsedTimestamp:
    """Wall-clock fields plus the offset they were written at (None = canonical)."""

    shape: TimestampShape
    wall_clock: datetime
    offset: timedelta | None


_TIMESTAMP_RE = re.compile(
    r"^(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})"
    r"(?P<sep>[ T])"
    r"(?P<hour>\d{2}):(?P<minute>\d{2}):(?P<second>\d{2})"
    r"(?:\.(?P<fraction>\d{1,6}))?"
    r"(?P<zone>Z|[+-]\d{2}:?\d{2})?$"
)


def parse_timestamp(raw: str) -> ParsedTimestamp:
    """Classify *raw* into a ``ParsedTimestamp``.

    Raises:
        InvalidTimestampError: If the text is not one of the accepted shapes
            or names a calendar date that does not exist.
    """
    if not isinstance(raw, str):
        raise InvalidTimestampError(raw, "expected text")

    match = _TIMESTAMP_RE.match(raw.strip())
    if match is None:
        raise InvalidTimestampError(raw)

    fraction = match.group("fraction") or ""
    try:
        wall_clock = datetime(
            int(match.group("year")),
            int(match.group("month")),
            int(match.group("day")),
            int(match.group("hour")),
            int(match.group("minute")),
            int(match.group("second")),
            int(fraction.ljust(6, "0")) if fraction else 0,
        )
    except ValueError as exc:
        raise InvalidTimestampError(raw, str(exc)) from exc

    zone = match.group("zone")
    if zone is None:
        shape = TimestampShape.NAIVE_LOCAL if match.group("sep") == " " else TimestampShape.ISO_LOCAL
        return ParsedTimestamp(shape=shape, wall_clock=wall_clock, offset=None)

    if match.group("sep") != "T":
        raise InvalidTimestampError(raw, "offset suffix requires the ISO 'T' separator")

    if zone == "Z":
        return ParsedTimestamp(TimestampShape.ISO_UTC, wall_clock, timedelta(0))

    sign = -1 if zone[0] == "-" else 1
    digits = zone[1:].replace(":", "")
    hours, minutes = int(digits[:2]), int(digits[2:])
    if hours > 23 or minutes > 59:
        raise InvalidTimestampError(raw, "offset out of range")
    offset = sign * timedelta(hours=hours, minutes=minutes)
    return ParsedTimestamp(TimestampShape.ISO_OFFSET, wall_clock, offset)


def to_canonical(parsed: ParsedTimestamp) -> datetime:
    """The one conversion from any parsed shape to a canonical-offset instant."""
    if parsed.offset is None:
        return parsed.wall_clock.replace(tzinfo=CANONICAL_TZ)
    written_at = parsed.wall_clock.replace(tzinfo=timezone(parsed.offset))
    return written_at.astimezone(CANONICAL_TZ)


def normalize(raw: str | datetime) -> datetime:
    """Return *raw* as an aware datetime at the canonical offset.

    Datetime objects are accepted as well: aware values are converted, naive
    values are taken to already be canonical wall-clock time.
    """
    if isinstance(raw, datetime):
        if raw.tzinfo is None:
            return raw.replace(tzinfo=CANONICAL_TZ)
        return raw.astimezone(CANONICAL_TZ)
    return to_canonical(parse_timestamp(raw))


def delta(a: datetime, b: datetime) -> float:
    """Seconds from *b* to *a* (``a − b``)."""
    return (a - b).total_seconds()


def format_canonical(instant: datetime) -> str:
    """Render the storage form ``YYYY-MM-DD HH:MM:SS.mmm`` at the canonical offset."""
    local = normalize(instant)
    return local.strftime("%Y-%m-%d %H:%M:%S.") + f"{local.microsecond // 1000:03d}"

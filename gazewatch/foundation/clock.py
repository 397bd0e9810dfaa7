"""Canonical-offset clock utilities.

Every instant in gazewatch is expressed at one fixed offset, UTC+8.  This
module is the single source of "now" so tests can monkey-patch it trivially.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

CANONICAL_OFFSET = timedelta(hours=8)
CANONICAL_TZ = timezone(CANONICAL_OFFSET)


def canonical_now() -> datetime:
    """Return real UTC time shifted to the canonical offset, never system local time."""
    return datetime.now(timezone.utc).astimezone(CANONICAL_TZ)

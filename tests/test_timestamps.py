"""Tests for the temporal normalizer and the canonical clock."""

from datetime import datetime, timedelta, timezone
from unittest.mock import patch

import pytest

from gazewatch.foundation.clock import CANONICAL_OFFSET, CANONICAL_TZ, canonical_now
from gazewatch.foundation.timestamps import (
    InvalidTimestampError,
    TimestampShape,
    delta,
    format_canonical,
    normalize,
    parse_timestamp,
    to_canonical,
)


class TestParseTimestamp:
    def test_naive_local_with_millis(self) -> None:
        parsed = parse_timestamp("2026-03-04 09:15:30.250")
        assert parsed.shape == TimestampShape.NAIVE_LOCAL
        assert parsed.wall_clock == datetime(2026, 3, 4, 9, 15, 30, 250000)
        assert parsed.offset is None

    def test_naive_local_without_fraction(self) -> None:
        parsed = parse_timestamp("2026-03-04 09:15:30")
        assert parsed.shape == TimestampShape.NAIVE_LOCAL
        assert parsed.wall_clock.microsecond == 0

    def test_iso_without_offset(self) -> None:
        parsed = parse_timestamp("2026-03-04T09:15:30")
        assert parsed.shape == TimestampShape.ISO_LOCAL
        assert parsed.offset is None

    def test_iso_with_z(self) -> None:
        parsed = parse_timestamp("2026-03-04T01:15:30.000Z")
        assert parsed.shape == TimestampShape.ISO_UTC
        assert parsed.offset == timedelta(0)

    def test_iso_with_offset(self) -> None:
        parsed = parse_timestamp("2026-03-04T09:15:30+08:00")
        assert parsed.shape == TimestampShape.ISO_OFFSET
        assert parsed.offset == timedelta(hours=8)

    def test_iso_with_negative_compact_offset(self) -> None:
        parsed = parse_timestamp("2026-03-04T09:15:30-0530")
        assert parsed.offset == -timedelta(hours=5, minutes=30)

    def test_surrounding_whitespace_ignored(self) -> None:
        assert parse_timestamp("  2026-03-04 09:15:30 ").shape == TimestampShape.NAIVE_LOCAL

    @pytest.mark.parametrize(
        "raw",
        [
            "",
            "yesterday",
            "2026-03-04",
            "2026/03/04 09:15:30",
            "2026-03-04 09:15",
            "2026-03-04 09:15:30+08:00",
            "2026-13-04 09:15:30",
            "2026-02-30T09:15:30Z",
            "2026-03-04T09:15:30+25:00",
        ],
    )
    def test_unrecognised_shapes_rejected(self, raw: str) -> None:
        with pytest.raises(InvalidTimestampError):
            parse_timestamp(raw)

    def test_non_text_rejected(self) -> None:
        with pytest.raises(InvalidTimestampError):
            parse_timestamp(1700000000)  # type: ignore[arg-type]

    def test_invalid_timestamp_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            parse_timestamp("not a time")


class TestNormalize:
    def test_naive_local_is_not_shifted(self) -> None:
        instant = normalize("2026-03-04 09:15:30")
        assert instant == datetime(2026, 3, 4, 9, 15, 30, tzinfo=CANONICAL_TZ)
        assert instant.utcoffset() == CANONICAL_OFFSET

    def test_utc_is_shifted_by_eight_hours(self) -> None:
        instant = normalize("2026-03-04T01:15:30Z")
        assert instant.hour == 9
        assert instant.utcoffset() == CANONICAL_OFFSET

    def test_z_crossing_midnight_moves_the_date(self) -> None:
        instant = normalize("2026-03-04T20:00:00Z")
        assert (instant.day, instant.hour) == (5, 4)

    def test_canonical_offset_text_unchanged(self) -> None:
        assert normalize("2026-03-04T09:15:30+08:00").hour == 9

    def test_all_encodings_of_the_same_instant_agree(self) -> None:
        forms = [
            "2026-03-04 09:15:30",
            "2026-03-04T09:15:30",
            "2026-03-04T09:15:30+08:00",
            "2026-03-04T01:15:30Z",
            "2026-03-04T03:15:30+02:00",
        ]
        instants = {normalize(f) for f in forms}
        assert len(instants) == 1

    def test_naive_datetime_taken_as_canonical(self) -> None:
        instant = normalize(datetime(2026, 3, 4, 9, 0, 0))
        assert instant.tzinfo is not None
        assert instant.hour == 9

    def test_aware_datetime_converted(self) -> None:
        instant = normalize(datetime(2026, 3, 4, 1, 0, 0, tzinfo=timezone.utc))
        assert instant.hour == 9
        assert instant.utcoffset() == CANONICAL_OFFSET

    def test_to_canonical_single_conversion(self) -> None:
        assert to_canonical(parse_timestamp("2026-03-04T01:15:30Z")) == normalize(
            "2026-03-04 09:15:30"
        )


class TestDelta:
    def test_delta_is_a_minus_b(self) -> None:
        a = normalize("2026-03-04 09:00:30")
        b = normalize("2026-03-04 09:00:00")
        assert delta(a, b) == 30.0
        assert delta(b, a) == -30.0

    def test_delta_across_encodings(self) -> None:
        a = normalize("2026-03-04T01:00:10Z")
        b = normalize("2026-03-04 09:00:00.500")
        assert delta(a, b) == pytest.approx(9.5)


class TestCanonicalClock:
    def test_now_is_at_canonical_offset(self) -> None:
        assert canonical_now().utcoffset() == CANONICAL_OFFSET

    def test_now_tracks_real_utc(self) -> None:
        before = datetime.now(timezone.utc)
        now = canonical_now()
        after = datetime.now(timezone.utc)
        assert before <= now <= after

    def test_format_canonical_storage_form(self) -> None:
        instant = datetime(2026, 3, 4, 1, 2, 3, 456789, tzinfo=timezone.utc)
        assert format_canonical(instant) == "2026-03-04 09:02:03.456"

    def test_format_round_trips_through_normalize(self) -> None:
        fixed = datetime(2026, 3, 4, 9, 2, 3, 456000, tzinfo=CANONICAL_TZ)
        with patch("gazewatch.foundation.clock.datetime") as fake:
            fake.now.return_value = fixed
            text = format_canonical(canonical_now())
        assert normalize(text) == fixed

"""Tests for datetime helpers."""

from datetime import datetime, timedelta, timezone

import pytest

from castpress.utils.datetime import format_rfc822, now_utc, parse_release_date, to_utc
from castpress.utils.errors import ReleaseDateError


class TestNowUtc:
    def test_is_aware_utc(self) -> None:
        assert now_utc().tzinfo == timezone.utc


class TestToUtc:
    def test_naive_assumed_utc(self) -> None:
        assert to_utc(datetime(2024, 1, 1)) == datetime(2024, 1, 1, tzinfo=timezone.utc)

    def test_offset_converted(self) -> None:
        value = datetime(2024, 1, 1, 2, tzinfo=timezone(timedelta(hours=2)))

        assert to_utc(value) == datetime(2024, 1, 1, tzinfo=timezone.utc)
        assert to_utc(value).tzinfo == timezone.utc


class TestFormatRfc822:
    def test_format(self) -> None:
        value = datetime(2024, 5, 1, 9, 30, 5, tzinfo=timezone.utc)

        assert format_rfc822(value) == "Wed, 01 May 2024 09:30:05 +0000"

    def test_offset_rendered_in_utc(self) -> None:
        value = datetime(2024, 5, 1, 11, 30, tzinfo=timezone(timedelta(hours=2)))

        assert format_rfc822(value) == "Wed, 01 May 2024 09:30:00 +0000"


class TestParseReleaseDate:
    """Tests for parse_release_date."""

    @pytest.mark.parametrize(
        "value",
        [
            "2024-05-01T09:30:00",
            "2024-05-01T09:30:00Z",
            "2024-05-01T11:30:00+02:00",
            " 2024-05-01T09:30:00+00:00 ",
        ],
    )
    def test_valid_datetimes(self, value: str) -> None:
        assert parse_release_date(value) == datetime(2024, 5, 1, 9, 30, tzinfo=timezone.utc)

    def test_date_only(self) -> None:
        assert parse_release_date("2024-05-01") == datetime(2024, 5, 1, tzinfo=timezone.utc)

    @pytest.mark.parametrize("value", ["", "yesterday", "2024-13-01", "01/05/2024"])
    def test_invalid(self, value: str) -> None:
        with pytest.raises(ReleaseDateError, match="Invalid release date"):
            parse_release_date(value)

"""
Tests for slug generation and date/time normalization
"""

import pytest

from eventbook.core.errors import ErrorCode, InvalidFormatError
from eventbook.services.slug import slugify
from eventbook.services.temporal import normalize_date, normalize_time


class TestSlugify:

    def test_strips_punctuation_and_joins_words(self):
        assert slugify("  Hello, World!! 2024  ") == "hello-world-2024"

    def test_all_punctuation_yields_empty_slug(self):
        assert slugify("!!!") == ""

    def test_collapses_whitespace_and_hyphen_runs(self):
        assert slugify("Data   Science -- Meetup") == "data-science-meetup"

    def test_no_leading_or_trailing_hyphens(self):
        assert slugify("- Launch Party! -") == "launch-party"
        assert slugify("Launch !") == "launch"

    def test_drops_non_ascii_letters(self):
        assert slugify("Café Olé") == "caf-ol"

    def test_canonical_slug_is_unchanged(self):
        assert slugify("hello-world-2024") == "hello-world-2024"


class TestNormalizeTime:

    @pytest.mark.parametrize("value, expected", [
        ("09:05:30", "09:05"),
        ("09:05", "09:05"),
        (" 23:59 ", "23:59"),
        ("00:00:00", "00:00"),
    ])
    def test_accepts_24_hour_times(self, value, expected):
        assert normalize_time(value) == expected

    @pytest.mark.parametrize("value", ["9:5", "24:00", "12:60", "12:30:60", "7pm", "", "12:30:1"])
    def test_rejects_malformed_times(self, value):
        with pytest.raises(InvalidFormatError) as exc_info:
            normalize_time(value)
        assert exc_info.value.code is ErrorCode.INVALID_FORMAT
        assert exc_info.value.field == "time"

    def test_canonical_time_is_unchanged(self):
        assert normalize_time(normalize_time("18:45:10")) == "18:45"


class TestNormalizeDate:

    def test_day_rolls_over_when_converted_to_utc(self):
        assert normalize_date("2024-03-01T23:00:00-05:00") == "2024-03-02"

    def test_plain_iso_date(self):
        assert normalize_date("2024-03-01") == "2024-03-01"

    def test_free_form_date(self):
        assert normalize_date("March 5, 2024") == "2024-03-05"

    def test_time_of_day_is_discarded(self):
        assert normalize_date("2024-12-31T10:15:00Z") == "2024-12-31"

    @pytest.mark.parametrize("value", ["not-a-date", "", "   "])
    def test_rejects_unparseable_dates(self, value):
        with pytest.raises(InvalidFormatError) as exc_info:
            normalize_date(value)
        assert exc_info.value.field == "date"

    def test_canonical_date_is_unchanged(self):
        assert normalize_date("2024-02-29") == "2024-02-29"

    @pytest.mark.parametrize("value", ["now", "today", " NOW ", "Today"])
    def test_rejects_clock_keywords(self, value):
        with pytest.raises(InvalidFormatError) as exc_info:
            normalize_date(value)
        assert exc_info.value.field == "date"

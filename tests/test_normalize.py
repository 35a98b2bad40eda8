import pytest

from app.normalize import (DaySpan, detect_month_from_text, normalize_cabin_name,
                           parse_day_span)


class TestNormalizeCabinName:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("12. Deluxe CABIN", "Deluxe cabin"),
            ("3- twin SHARE", "Twin share"),
            ("4) Master suite", "Master suite"),
            ("  Ocean View  ", "Ocean view"),
            ("10.-) Family", "Family"),
            ("NO.", "No."),
        ],
    )
    def test_prefix_and_casing(self, raw, expected):
        assert normalize_cabin_name(raw) == expected

    @pytest.mark.parametrize("raw", ["", None, "12", "7.  ", "   "])
    def test_empty_remainder_is_none(self, raw):
        assert normalize_cabin_name(raw) is None


class TestParseDaySpan:
    def test_range(self):
        assert parse_day_span("5-10") == DaySpan(5, 10)

    def test_range_with_spaces(self):
        assert parse_day_span("28 - 2") == DaySpan(28, 2)

    def test_single_day(self):
        assert parse_day_span("7") == DaySpan(7, 7)

    @pytest.mark.parametrize("raw", ["abc", "", "   ", None, "5-", "123", "1-2-3", "Mar 5"])
    def test_rejects_other_shapes(self, raw):
        assert parse_day_span(raw) is None


class TestDaySpanCovers:
    def test_inclusive_range(self):
        span = DaySpan(10, 15)
        assert span.covers(10)
        assert span.covers(15)
        assert not span.covers(9)
        assert not span.covers(16)

    def test_wrapped_span_matches_start_only(self):
        span = DaySpan(28, 2)
        assert span.covers(28)
        assert not span.covers(2)
        assert not span.covers(30)


class TestDetectMonth:
    @pytest.mark.parametrize(
        "text, month",
        [
            ("MARET", 3),
            ("feb 2026", 2),
            ("Mei", 5),
            ("MAY", 5),
            ("Agustus", 8),
            ("OKTOBER", 10),
            ("Desember", 12),
            ("SEPTEMBER", 9),
            ("November", 11),
        ],
    )
    def test_tokens(self, text, month):
        assert detect_month_from_text(text) == month

    @pytest.mark.parametrize("text", ["January", "JANUARI", "", None, "10-15"])
    def test_undetected(self, text):
        assert detect_month_from_text(text) is None

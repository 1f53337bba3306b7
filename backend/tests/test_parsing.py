import pytest
from datetime import datetime, timedelta, timezone

from utils.parsing import parse_timestamp, parse_score, clamp, format_span
from utils.validation import InputValidator


class TestParseTimestamp:
    """Tests for parse_timestamp function."""
    
    def test_iso_with_z_suffix(self):
        result = parse_timestamp("2024-03-01T20:00:00Z")
        assert result == datetime(2024, 3, 1, 20, 0, tzinfo=timezone.utc)
    
    def test_iso_with_offset_converted_to_utc(self):
        result = parse_timestamp("2024-03-02T01:30:00+05:30")
        assert result == datetime(2024, 3, 1, 20, 0, tzinfo=timezone.utc)
        assert result.utcoffset() == timedelta(0)
    
    def test_naive_datetime_taken_as_utc(self):
        result = parse_timestamp(datetime(2024, 3, 1, 20, 0))
        assert result.tzinfo is not None
        assert result == datetime(2024, 3, 1, 20, 0, tzinfo=timezone.utc)
    
    def test_epoch_seconds(self):
        assert parse_timestamp(0) == datetime(1970, 1, 1, tzinfo=timezone.utc)
        assert parse_timestamp("86400") == datetime(1970, 1, 2, tzinfo=timezone.utc)
    
    def test_missing_timestamp(self):
        with pytest.raises(ValueError):
            parse_timestamp(None)
    
    def test_empty_string(self):
        with pytest.raises(ValueError):
            parse_timestamp("   ")
    
    def test_unparseable_string(self):
        with pytest.raises(ValueError):
            parse_timestamp("yesterday evening")
    
    def test_boolean_rejected(self):
        with pytest.raises(ValueError):
            parse_timestamp(True)


class TestParseScore:
    def test_float(self):
        assert parse_score(0.75) == 0.75
    
    def test_numeric_string(self):
        assert parse_score(" 0.6 ") == 0.6
    
    def test_percentage_string(self):
        assert parse_score("85%") == pytest.approx(0.85)
    
    def test_out_of_range_kept(self):
        assert parse_score(1.4) == 1.4
    
    def test_invalid(self):
        assert parse_score("very sure") is None
        assert parse_score(None) is None
        assert parse_score(True) is None
    
    def test_nan_rejected(self):
        assert parse_score(float("nan")) is None
        assert parse_score("inf") is None


class TestClamp:
    def test_clamp(self):
        assert clamp(-0.2) == 0.0
        assert clamp(1.7) == 1.0
        assert clamp(0.4) == 0.4


class TestFormatSpan:
    def test_less_than_an_hour(self):
        assert format_span(timedelta(minutes=59)) == "less than an hour"
    
    def test_hours_only(self):
        assert format_span(timedelta(hours=5, minutes=40)) == "5 hours"
    
    def test_single_day_and_hour(self):
        assert format_span(timedelta(days=1, hours=1)) == "1 day 1 hour"
    
    def test_days_and_hours(self):
        assert format_span(timedelta(days=2, hours=13)) == "2 days 13 hours"
    
    def test_whole_days(self):
        assert format_span(timedelta(days=3)) == "3 days"


class TestInputValidator:
    def test_sanitize_text_collapses_whitespace(self):
        assert InputValidator.sanitize_text("  Five \n dead\x00 ") == "Five dead"
    
    def test_sanitize_required_rejects_blank(self):
        with pytest.raises(ValueError):
            InputValidator.sanitize_required(" \t ", "source")
    
    @pytest.mark.parametrize("tag,expected", [
        ("Major News", "major_news"),
        ("fact-check-org", "fact_check_org"),
        ("FactCheckOrg", "fact_check_org"),
        ("PARTIALLY_TRUE", "partially_true"),
        ("SocialMedia", "social_media"),
    ])
    def test_normalize_tag(self, tag, expected):
        assert InputValidator.normalize_tag(tag) == expected

"""Tests for LeadFilters query parsing."""

from datetime import datetime, timezone

import pytest

from models.contact_models import LeadFilters
from scripts.lib.errors import InvalidFilterError


class TestFromQuery:
    def test_empty_query_has_no_filters(self):
        filters = LeadFilters.from_query()
        assert filters.start_date is None
        assert filters.end_date is None
        assert filters.subject is None
        assert filters.status is None
        assert filters.describe() == []

    def test_plain_dates_cover_whole_days(self):
        filters = LeadFilters.from_query("2025-06-01", "2025-06-15")
        assert filters.start_date == datetime(2025, 6, 1, tzinfo=timezone.utc)
        assert filters.end_date.date().isoformat() == "2025-06-15"
        assert (filters.end_date.hour, filters.end_date.minute) == (23, 59)

    def test_iso_timestamp_with_z(self):
        filters = LeadFilters.from_query(start_date="2025-06-01T10:30:00Z")
        assert filters.start_date == datetime(2025, 6, 1, 10, 30, tzinfo=timezone.utc)

    def test_naive_timestamp_is_utc(self):
        filters = LeadFilters.from_query(end_date="2025-06-01T10:30:00")
        assert filters.end_date.tzinfo == timezone.utc

    def test_blank_values_ignored(self):
        filters = LeadFilters.from_query("  ", "", "   ", "")
        assert filters == LeadFilters()

    def test_subject_and_status_normalised(self):
        filters = LeadFilters.from_query(subject="  admission ", status="Replied")
        assert filters.subject == "admission"
        assert filters.status == "replied"

    def test_invalid_date(self):
        with pytest.raises(InvalidFilterError) as exc:
            LeadFilters.from_query(start_date="not-a-date")
        assert exc.value.details["field"] == "startDate"

    def test_start_after_end(self):
        with pytest.raises(InvalidFilterError):
            LeadFilters.from_query("2025-06-20", "2025-06-01")

    def test_same_day_range_is_valid(self):
        filters = LeadFilters.from_query("2025-06-01", "2025-06-01")
        assert filters.start_date < filters.end_date

    def test_unknown_status(self):
        with pytest.raises(InvalidFilterError) as exc:
            LeadFilters.from_query(status="spam")
        assert "Must be one of" in exc.value.message


class TestDescribe:
    def test_all_lines(self):
        filters = LeadFilters.from_query("2025-06-01", "2025-06-15", "fee", "new")
        assert filters.describe() == [
            "Date Range: 2025-06-01 to 2025-06-15",
            "Subject Filter: fee",
            "Status Filter: NEW",
        ]

    @pytest.mark.parametrize("start,end,label", [
        ("2025-06-01", None, "From 2025-06-01"),
        (None, "2025-06-15", "Until 2025-06-15"),
        (None, None, None),
    ])
    def test_open_ranges(self, start, end, label):
        assert LeadFilters.from_query(start, end).date_range_label() == label

    def test_to_api_keys(self):
        payload = LeadFilters.from_query(start_date="2025-06-01", status="read").to_api()
        assert payload == {
            "startDate": "2025-06-01T00:00:00+00:00",
            "endDate": None,
            "subject": None,
            "status": "read",
        }

"""Unit tests for time report aggregation and formatting."""
import logging
from datetime import date, datetime

import pytest

from processor.models import Event
from report.time_report import ReportAccumulator, build_report, format_report


def make_event(title, start, end):
    """Build an Event from two datetimes."""
    return Event(
        title=title,
        start=start,
        end=end,
        hours=(end - start).total_seconds() / 3600,
        raw_text=f"{title}\n(test)"
    )


@pytest.fixture
def sample_events():
    """Create events out of chronological order."""
    return [
        make_event("Later", datetime(2014, 7, 5, 9, 0), datetime(2014, 7, 5, 12, 0)),
        make_event("Earlier", datetime(2014, 7, 3, 10, 0), datetime(2014, 7, 3, 14, 0)),
        make_event("Same day", datetime(2014, 7, 3, 15, 0), datetime(2014, 7, 3, 16, 30)),
    ]


class TestReportAccumulator:
    """Test cases for ReportAccumulator."""

    def test_initial_sentinels(self):
        """Test that the bounds start out of range."""
        accumulator = ReportAccumulator()

        assert accumulator.first_date == date.max
        assert accumulator.last_date == date.min
        assert accumulator.total_hours == 0.0

    def test_first_event_replaces_sentinels(self):
        """Test that one event sets both bounds."""
        accumulator = ReportAccumulator()
        accumulator.add(
            make_event("A", datetime(2014, 7, 3, 22, 0), datetime(2014, 7, 4, 2, 0))
        )

        assert accumulator.first_date == date(2014, 7, 3)
        assert accumulator.last_date == date(2014, 7, 4)
        assert accumulator.days == {date(2014, 7, 3), date(2014, 7, 4)}
        assert accumulator.total_hours == 4.0

    def test_negative_duration_is_counted_and_logged(self, caplog):
        """Test that an event ending before it starts lowers the total."""
        accumulator = ReportAccumulator()

        with caplog.at_level(logging.WARNING, logger="report.time_report"):
            accumulator.add(
                make_event("Typo", datetime(2014, 7, 3, 14, 0), datetime(2014, 7, 3, 10, 0))
            )

        assert accumulator.total_hours == -4.0
        assert "ends before it starts" in caplog.text


class TestBuildReport:
    """Test cases for build_report."""

    def test_totals_and_bounds(self, sample_events):
        """Test aggregation over several events."""
        result = build_report(sample_events)

        assert result.total_hours == 8.5
        assert result.first_date == date(2014, 7, 3)
        assert result.last_date == date(2014, 7, 5)

    def test_same_date_counted_once(self, sample_events):
        """Test that two events on one date give one distinct day."""
        result = build_report(sample_events)

        assert result.unique_days == 2

    def test_events_sorted_and_label_from_first(self, sample_events):
        """Test chronological order and label."""
        result = build_report(sample_events)

        assert [event.title for event in result.events] == ["Earlier", "Same day", "Later"]
        assert result.label == "Earlier"

    def test_total_independent_of_order(self, sample_events):
        """Test that input order does not change the total."""
        forward = build_report(sample_events)
        backward = build_report(list(reversed(sample_events)))

        assert forward.total_hours == backward.total_hours
        assert forward.unique_days == backward.unique_days

    def test_ties_keep_input_order(self):
        """Test that events starting together stay in block order."""
        start = datetime(2014, 7, 3, 10, 0)
        events = [
            make_event("First", start, datetime(2014, 7, 3, 11, 0)),
            make_event("Second", start, datetime(2014, 7, 3, 12, 0)),
        ]

        result = build_report(events)

        assert [event.title for event in result.events] == ["First", "Second"]

    def test_no_events(self):
        """Test an empty report."""
        result = build_report([])

        assert result.label == "Unknown"
        assert result.events == []
        assert result.total_hours == 0.0
        assert result.first_date is None
        assert result.last_date is None
        assert result.unique_days == 0


class TestFormatReport:
    """Test cases for format_report."""

    def test_lines(self, sample_events):
        """Test the console layout."""
        lines = format_report(build_report(sample_events))

        assert lines == [
            "03 Jul 2014 10:00: 4.00 hours done",
            "03 Jul 2014 15:00: 1.50 hours done",
            "05 Jul 2014 09:00: 3.00 hours done",
            "",
            "Earlier time report between 3 Jul 2014 to 5 Jul 2014 (2 days)",
            "Total hours: 8.50",
            "Total days : 1.21 (7 hours per day)",
        ]

    def test_custom_hours_per_day(self, sample_events):
        """Test the working-day length option."""
        lines = format_report(build_report(sample_events), hours_per_day=8.5)

        assert lines[-1] == "Total days : 1.00 (8.5 hours per day)"

    def test_empty_report(self):
        """Test formatting with no events."""
        lines = format_report(build_report([]))

        assert lines == [
            "",
            "Unknown time report between - to - (0 days)",
            "Total hours: 0.00",
            "Total days : 0.00 (7 hours per day)",
        ]

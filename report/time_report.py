"""Time report aggregation and console formatting."""
import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, List, Optional, Set

from processor.models import Event, ParseResult

logger = logging.getLogger(__name__)

DEFAULT_HOURS_PER_DAY = 7.0
UNKNOWN_LABEL = 'Unknown'


@dataclass
class ReportAccumulator:
    """Running totals folded over parsed events."""
    total_hours: float = 0.0
    first_date: date = date.max
    last_date: date = date.min
    days: Set[date] = field(default_factory=set)

    def add(self, event: Event) -> None:
        """
        Fold one event into the totals.

        Args:
            event: Parsed event
        """
        if event.hours < 0:
            logger.warning(
                f"Event '{event.title}' ends before it starts "
                f"({event.hours:.2f} hours), counted as is"
            )

        start_date = event.start.date()
        end_date = event.end.date()

        self.total_hours += event.hours
        self.first_date = min(self.first_date, start_date)
        self.last_date = max(self.last_date, end_date)
        self.days.update((start_date, end_date))


def build_report(events: Iterable[Event]) -> ParseResult:
    """
    Aggregate events into a time report.

    Args:
        events: Parsed events in block order

    Returns:
        ParseResult with events sorted by start time
    """
    events = list(events)
    if not events:
        return ParseResult(label=UNKNOWN_LABEL)

    accumulator = ReportAccumulator()
    for event in events:
        accumulator.add(event)

    # sorted() is stable, ties keep block order
    ordered = sorted(events, key=lambda event: event.start)

    return ParseResult(
        label=ordered[0].title,
        events=ordered,
        total_hours=accumulator.total_hours,
        first_date=accumulator.first_date,
        last_date=accumulator.last_date,
        unique_days=len(accumulator.days)
    )


def _format_date(value: Optional[date]) -> str:
    if value is None:
        return '-'
    return f"{value.day} {value.strftime('%b %Y')}"


def format_report(
    result: ParseResult,
    hours_per_day: float = DEFAULT_HOURS_PER_DAY
) -> List[str]:
    """
    Render a report as console lines.

    Args:
        result: Aggregated report
        hours_per_day: Length of a working day used for the days estimate

    Returns:
        Lines to print, per-event lines first, then the summary
    """
    lines = [
        f"{event.start.strftime('%d %b %Y %H:%M')}: {event.hours:.2f} hours done"
        for event in result.events
    ]

    lines.append('')
    lines.append(
        f"{result.label} time report between {_format_date(result.first_date)} "
        f"to {_format_date(result.last_date)} ({result.unique_days} days)"
    )
    lines.append(f"Total hours: {result.total_hours:.2f}")
    lines.append(
        f"Total days : {result.total_hours / hours_per_day:.2f} "
        f"({hours_per_day:g} hours per day)"
    )
    return lines

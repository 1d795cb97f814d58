"""Data models for calendar event parsing."""
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import List, Optional


@dataclass(frozen=True)
class DateRange:
    """Normalized start/end strings extracted from a schedule line."""
    start: str
    end: str


@dataclass(frozen=True)
class Event:
    """Parsed calendar event."""
    title: str
    start: datetime
    end: datetime
    hours: float
    raw_text: str


@dataclass
class ParseResult:
    """Aggregated time report over all parsed events."""
    label: str
    events: List[Event] = field(default_factory=list)
    total_hours: float = 0.0
    first_date: Optional[date] = None
    last_date: Optional[date] = None
    unique_days: int = 0

"""Event processor for extracting date ranges from calendar clipboard blocks."""
import logging
import re
from datetime import datetime
from typing import List, Optional

from dateutil import parser as date_parser

from processor.models import DateRange, Event

logger = logging.getLogger(__name__)

ENGLISH_MARKER_RE = re.compile(r'^Scheduled:\s*')
FRENCH_MARKER_RE = re.compile(r'^Dates\s*:\s*')

# "28 avr. 2025 à 11:00-12:30" once the timezone suffix is gone
FRENCH_RANGE_RE = re.compile(
    r'^(?P<date>.+?)\s+[àa]\s+'
    r'(?P<start>\d{1,2}:\d{2})\s*[-–]\s*(?P<end>\d{1,2}:\d{2})$'
)
TIMEZONE_SUFFIX_RE = re.compile(r',?\s*UTC(?:\s*[+-]\s*\d{1,2}(?::?\d{2})?)?\s*$')
TIME_OF_DAY_RE = re.compile(r'\s+\d{1,2}:\d{2}(?::\d{2})?(?:\s*[AaPp][Mm])?')
BARE_TIME_RE = re.compile(
    r'^(?P<hour>\d{1,2})(?::(?P<minute>\d{0,2}))?(?::(?P<second>\d{2}))?'
    r'\s*(?P<meridiem>[AaPp][Mm])?$'
)

FRENCH_MONTHS = {
    'janv.': 'Jan', 'janv': 'Jan', 'janvier': 'Jan',
    'févr.': 'Feb', 'févr': 'Feb', 'fevr.': 'Feb', 'fevr': 'Feb',
    'février': 'Feb', 'fevrier': 'Feb',
    'mars': 'Mar',
    'avr.': 'Apr', 'avr': 'Apr', 'avril': 'Apr',
    'mai': 'May',
    'juin': 'Jun',
    'juil.': 'Jul', 'juil': 'Jul', 'juillet': 'Jul',
    'août': 'Aug', 'aout': 'Aug',
    'sept.': 'Sep', 'sept': 'Sep', 'sep.': 'Sep', 'septembre': 'Sep',
    'oct.': 'Oct', 'oct': 'Oct', 'octobre': 'Oct',
    'nov.': 'Nov', 'nov': 'Nov', 'novembre': 'Nov',
    'déc.': 'Dec', 'déc': 'Dec', 'dec.': 'Dec', 'décembre': 'Dec',
    'decembre': 'Dec',
}


def normalize_french_month(date_str: str) -> str:
    """
    Replace French month names with English abbreviations.

    Args:
        date_str: Date such as "28 avr. 2025"

    Returns:
        Date with its month translated, e.g. "28 Apr 2025"
    """
    return ' '.join(
        FRENCH_MONTHS.get(token.lower(), token) for token in date_str.split()
    )


class EventProcessor:
    """Processor for turning clipboard event blocks into timed events."""

    UNTITLED = 'Untitled'
    FILL_DEFAULTS = (datetime(2000, 1, 1), datetime(2001, 2, 2))

    def process_blocks(self, blocks: List[str]) -> List[Event]:
        """
        Parse every block, skipping the ones without a usable date range.

        Args:
            blocks: Event blocks split from the clipboard text

        Returns:
            Parsed Event objects in block order
        """
        events = []

        for block in blocks:
            event = self.parse_event(block)
            if event:
                events.append(event)

        logger.info(
            f"Parsed {len(events)} events out of {len(blocks)} blocks"
        )
        return events

    def parse_event(self, block_text: str) -> Optional[Event]:
        """
        Parse a single event block.

        Args:
            block_text: Title line followed by detail lines

        Returns:
            Event object or None if no date range could be read
        """
        title = None
        date_range = None

        for line in block_text.strip().split('\n'):
            line = line.strip()
            if not line:
                continue

            if ENGLISH_MARKER_RE.match(line):
                if date_range is None:
                    date_range = self._parse_english_format(
                        ENGLISH_MARKER_RE.sub('', line, count=1)
                    )
            elif FRENCH_MARKER_RE.match(line):
                if date_range is None:
                    date_range = self._parse_french_format(
                        FRENCH_MARKER_RE.sub('', line, count=1)
                    )
            elif title is None:
                title = line

        if date_range is None:
            logger.debug(f"Could not parse date range from: {block_text!r}")
            return None

        logger.debug(f"Parsed date range: {date_range}")

        start = self._parse_datetime(date_range.start)
        end = self._parse_datetime(date_range.end)
        if start is None or end is None:
            logger.debug(f"Invalid dates: {date_range}")
            return None

        hours = (end - start).total_seconds() / 3600

        return Event(
            title=title or self.UNTITLED,
            start=start,
            end=end,
            hours=hours,
            raw_text=block_text
        )

    def _parse_english_format(self, range_text: str) -> Optional[DateRange]:
        """
        Parse an English range such as "03 Jul 2014 10:00 to 14:00".

        A bare end time shares the start's date.
        """
        parts = range_text.split(' to ')
        if len(parts) != 2:
            return None

        start, end = (part.strip() for part in parts)
        if not start or not end:
            return None

        bare_time = BARE_TIME_RE.match(end)
        if bare_time:
            end = f"{self._without_time(start)} {self._normalize_time(bare_time)}"

        return DateRange(start=start, end=end)

    def _parse_french_format(self, range_text: str) -> Optional[DateRange]:
        """
        Parse a French range such as "28 avr. 2025 à 11:00-12:30, UTC+2".

        The UTC offset is dropped, times stay naive.
        """
        clean_range = TIMEZONE_SUFFIX_RE.sub('', range_text).strip()

        match = FRENCH_RANGE_RE.match(clean_range)
        if not match:
            return None

        date_part = normalize_french_month(match.group('date'))

        return DateRange(
            start=f"{date_part} {match.group('start')}",
            end=f"{date_part} {match.group('end')}"
        )

    def _without_time(self, date_str: str) -> str:
        return TIME_OF_DAY_RE.sub('', date_str, count=1).strip()

    def _normalize_time(self, match: re.Match) -> str:
        """
        Rebuild a bare time as HH:MM[:SS][ AM|PM].

        Args:
            match: BARE_TIME_RE match for values such as "14:", "8:30" or "2:00 PM"

        Returns:
            Time string with zero-padded hours and minutes
        """
        time_str = f"{int(match.group('hour')):02d}:{(match.group('minute') or '').zfill(2)}"
        if match.group('second'):
            time_str += f":{match.group('second')}"
        if match.group('meridiem'):
            time_str += f" {match.group('meridiem').upper()}"
        return time_str

    def _parse_datetime(self, value: str) -> Optional[datetime]:
        """
        Parse a normalized date-time string.

        Args:
            value: String such as "03 Jul 2014 10:00"

        Returns:
            Naive datetime or None if parsing fails
        """
        try:
            parsed = [
                date_parser.parse(value, default=default, dayfirst=True, ignoretz=True)
                for default in self.FILL_DEFAULTS
            ]
        except (ValueError, OverflowError) as e:
            logger.debug(f"Failed to parse date '{value}': {e}")
            return None

        # dateutil fills missing parts from the default
        if parsed[0] != parsed[1]:
            logger.debug(f"Incomplete date '{value}'")
            return None
        return parsed[0]

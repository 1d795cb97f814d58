"""Exceptions raised by the calendar time report."""


class CalendarReportError(Exception):
    """Base error for failures that abort a report run."""


class ClipboardReadError(CalendarReportError):
    """The clipboard file is missing or unreadable."""


class ConfigError(CalendarReportError):
    """A configuration value from the environment or CLI is invalid."""

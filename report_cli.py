"""Command line entry point for the calendar time report."""
import argparse
import json
import logging
import os
import sys
from dataclasses import dataclass
from typing import List, Optional

from processor.errors import CalendarReportError, ConfigError
from processor.event_processor import EventProcessor
from reader.clipboard_reader import ClipboardReader
from report.time_report import DEFAULT_HOURS_PER_DAY, build_report, format_report

LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR']
LOG_FORMATS = ['text', 'json']


class JsonFormatter(logging.Formatter):
    """Custom JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data = {
            'timestamp': self.formatTime(record),
            'level': record.levelname,
            'message': record.getMessage(),
            'logger': record.name
        }

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False)


def setup_logging(log_level: str = 'WARNING', log_format: str = 'text') -> None:
    """
    Configure logging on stderr.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_format: "text" for plain lines, "json" for structured records
    """
    root_logger = logging.getLogger()

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    if log_format == 'json':
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(
            logging.Formatter('%(levelname)s %(name)s: %(message)s')
        )
    root_logger.addHandler(handler)

    root_logger.setLevel(getattr(logging, log_level.upper(), logging.WARNING))


@dataclass
class ReportConfig:
    """Resolved settings for one report run."""
    file_path: str = ClipboardReader.DEFAULT_PATH
    verbose: bool = False
    log_level: str = 'WARNING'
    log_format: str = 'text'
    hours_per_day: float = DEFAULT_HOURS_PER_DAY


def _parse_hours_per_day(value: str) -> float:
    try:
        hours = float(value)
    except ValueError:
        raise ConfigError(f"Hours per day must be a number, got '{value}'")
    if hours <= 0:
        raise ConfigError(f"Hours per day must be positive, got '{value}'")
    return hours


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='calendar-report',
        description='Count hours spent in calendar events pasted from a search result list.'
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='log unparsed blocks and intermediate date ranges'
    )
    parser.add_argument(
        '-f', '--file',
        dest='file_path',
        metavar='PATH',
        help='clipboard text file (default: $CALENDAR_REPORT_FILE or ./data.txt)'
    )
    parser.add_argument(
        '--hours-per-day',
        metavar='HOURS',
        help='length of a working day for the days estimate (default: 7)'
    )
    parser.add_argument(
        '--log-level',
        choices=LOG_LEVELS,
        help='set the logging level (default: WARNING)'
    )
    parser.add_argument(
        '--log-format',
        choices=LOG_FORMATS,
        help='log record format (default: text)'
    )
    return parser


def load_config(args: argparse.Namespace) -> ReportConfig:
    """
    Merge environment variables with command line arguments.

    Command line arguments win over the environment.

    Args:
        args: Parsed command line arguments

    Returns:
        ReportConfig for this run

    Raises:
        ConfigError: If a value is invalid
    """
    file_path = args.file_path or os.environ.get(
        'CALENDAR_REPORT_FILE', ClipboardReader.DEFAULT_PATH
    )
    log_level = (args.log_level or os.environ.get('LOG_LEVEL', 'WARNING')).upper()
    log_format = (args.log_format or os.environ.get('LOG_FORMAT', 'text')).lower()
    hours_per_day = _parse_hours_per_day(
        args.hours_per_day or os.environ.get('HOURS_PER_DAY', str(DEFAULT_HOURS_PER_DAY))
    )

    if log_level not in LOG_LEVELS:
        raise ConfigError(f"Unknown log level '{log_level}'")
    if log_format not in LOG_FORMATS:
        raise ConfigError(f"Unknown log format '{log_format}'")

    if args.verbose:
        log_level = 'DEBUG'

    return ReportConfig(
        file_path=file_path,
        verbose=args.verbose,
        log_level=log_level,
        log_format=log_format,
        hours_per_day=hours_per_day
    )


def run(config: ReportConfig) -> List[str]:
    """
    Read, parse and aggregate the clipboard file.

    Args:
        config: Settings for this run

    Returns:
        Report lines ready to print

    Raises:
        ClipboardReadError: If the input file cannot be read
    """
    logger = logging.getLogger(__name__)

    reader = ClipboardReader()
    processor = EventProcessor()

    blocks = reader.read_blocks(config.file_path)
    events = processor.process_blocks(blocks)
    result = build_report(events)

    logger.info(
        f"Report for '{result.label}': {len(result.events)} events, "
        f"{result.total_hours:.2f} hours over {result.unique_days} days"
    )
    return format_report(result, hours_per_day=config.hours_per_day)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the report and print it to stdout.

    Args:
        argv: Command line arguments, sys.argv[1:] when None

    Returns:
        Process exit status
    """
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args)
        setup_logging(config.log_level, config.log_format)
        lines = run(config)
    except CalendarReportError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print('\n')
    print('\n'.join(lines))
    return 0


if __name__ == '__main__':
    sys.exit(main())

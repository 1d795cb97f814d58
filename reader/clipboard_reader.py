"""Reader for calendar search results pasted into a text file."""
import logging
import re
from pathlib import Path
from typing import List, Union

from processor.errors import ClipboardReadError

logger = logging.getLogger(__name__)

BLANK_LINES_RE = re.compile(r'\n[^\S\n]*\n\s*')


class ClipboardReader:
    """Reader that turns a clipboard dump into event blocks."""

    DEFAULT_PATH = './data.txt'

    def __init__(self, encoding: str = 'utf-8'):
        """
        Initialize the clipboard reader.

        Args:
            encoding: Text encoding of the input file (default: utf-8)
        """
        self.encoding = encoding

    def read_blocks(self, path: Union[str, Path] = DEFAULT_PATH) -> List[str]:
        """
        Read a clipboard dump and split it into event blocks.

        Args:
            path: Path to the text file

        Returns:
            List of non-empty event blocks

        Raises:
            ClipboardReadError: If the file cannot be read
        """
        text = self.read_text(path)
        blocks = self.split_blocks(text)
        logger.debug(f"Found {len(blocks)} event blocks in {path}")
        return blocks

    def read_text(self, path: Union[str, Path]) -> str:
        try:
            return Path(path).read_text(encoding=self.encoding)
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Failed to read clipboard file {path}: {e}")
            raise ClipboardReadError(f"Cannot read {path}: {e}") from e

    def split_blocks(self, text: str) -> List[str]:
        """
        Split text on blank lines.

        Args:
            text: Whole clipboard text

        Returns:
            Stripped blocks, empty ones dropped
        """
        text = text.replace('\r\n', '\n').replace('\r', '\n')
        blocks = BLANK_LINES_RE.split(text)
        return [block.strip() for block in blocks if block.strip()]

"""
Thin wrapper around the output stream and the ANSI sequences the renderer
needs: cursor up, clear line and clear to end of screen.
"""

import logging
import os
import sys
from typing import TextIO

log = logging.getLogger(__name__)

FALLBACK_WIDTH = 80

CSI = "\033["
CLEAR_LINE = f"{CSI}K"
CLEAR_TO_END_OF_SCREEN = f"{CSI}J"


def cursor_up(n: int) -> str:
    """Returns the sequence moving the cursor up `n` rows ("" for n <= 0)."""
    return f"{CSI}{n}A" if n > 0 else ""


class Terminal:
    """
    Writes text and escape sequences to a stream, best effort.

    Only the first write failure is logged, at debug level. Failures never
    break the operations being displayed.
    """

    def __init__(
        self, stream: TextIO | None = None, fallback_width: int = FALLBACK_WIDTH
    ):
        self._stream = stream
        self.fallback_width = fallback_width
        self._write_failed = False

    @property
    def stream(self) -> TextIO:
        # Resolved on each use; sys.stdout may be swapped after construction.
        return self._stream if self._stream is not None else sys.stdout

    def query_width(self) -> int:
        """Returns the current column count, or the fallback width."""
        try:
            columns = os.get_terminal_size(self.stream.fileno()).columns
        except (AttributeError, ValueError, OSError):
            return self.fallback_width
        return columns if columns > 0 else self.fallback_width

    def write(self, text: str) -> None:
        if not text:
            return
        try:
            self.stream.write(text)
        except (OSError, ValueError) as e:
            if not self._write_failed:
                self._write_failed = True
                log.debug(f"Terminal write failed: {e}")

    def write_line(self, text: str) -> None:
        self.write(f"{text}\n")

    def flush(self) -> None:
        try:
            self.stream.flush()
        except (OSError, ValueError) as e:
            log.debug(f"Terminal flush failed: {e}")

    def move_cursor_up(self, n: int) -> None:
        self.write(cursor_up(n))

    def clear_line(self) -> None:
        self.write(CLEAR_LINE)

    def clear_to_end_of_screen(self) -> None:
        self.write(CLEAR_TO_END_OF_SCREEN)

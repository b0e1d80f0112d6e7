"""
A logging handler that prints records through a ProgressManager.
"""

import logging
from typing import TYPE_CHECKING

from rich.errors import MarkupError
from rich.text import Text

if TYPE_CHECKING:
    from .manager import ProgressManager


class ProgressLogHandler(logging.Handler):
    """
    Sends formatted records to `ProgressManager.log`.

    Messages in this project carry Rich markup (e.g. "[green]✓ Done[/green]");
    the bars are plain text, so the markup is stripped before printing.
    """

    def __init__(
        self,
        manager: "ProgressManager",
        level: int = logging.NOTSET,
        strip_markup: bool = True,
    ):
        super().__init__(level)
        self.manager = manager
        self.strip_markup = strip_markup
        self.setFormatter(logging.Formatter("%(message)s"))

    def handle(self, record: logging.LogRecord) -> bool:
        # No handler lock: `log` may block on a full queue, and the render
        # thread must still be able to emit while a producer waits.
        rv = self.filter(record)
        if isinstance(rv, logging.LogRecord):
            record = rv
        if rv:
            self.emit(record)
        return bool(rv)

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
            if self.strip_markup:
                message = _plain(message)
            self.manager.log(message)
        except Exception:
            self.handleError(record)


def _plain(message: str) -> str:
    try:
        return Text.from_markup(message).plain
    except MarkupError:
        return message

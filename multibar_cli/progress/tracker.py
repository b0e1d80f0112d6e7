"""
A named byte counter that many threads can advance at once.
"""

import threading

from .layout import pad_to_width, render_bar, truncate_by_width

NAME_COLUMN_WIDTH = 35
MIN_BAR_WIDTH = 10

# " [" + "] " + "100%"
_BAR_DECORATION_WIDTH = 2 + 2 + 4


class ProgressTracker:
    """
    Tracks progress of a single operation towards `total` bytes.

    `add` may be called from any thread. Readers see `current` without taking
    the lock; the value only ever grows, so a slightly stale read is harmless.
    """

    def __init__(self, total: int, name: str, order: int = 0):
        self.total = total
        self.name = name
        self.order = order
        self._current = 0
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        return (
            f"ProgressTracker(name={self.name!r}, order={self.order}, "
            f"current={self._current}, total={self.total})"
        )

    @property
    def current(self) -> int:
        return self._current

    def add(self, n: int) -> None:
        """Advances the counter by `n` bytes. `n` must not be negative."""
        with self._lock:
            self._current += n

    @property
    def percent(self) -> float:
        """Observed progress in percent; 0 when the total is unknown."""
        if self.total <= 0:
            return 0.0
        return self._current / self.total * 100

    @property
    def is_complete(self) -> bool:
        return self._current >= self.total

    def render(
        self,
        terminal_width: int,
        name_width: int = NAME_COLUMN_WIDTH,
        min_bar_width: int = MIN_BAR_WIDTH,
    ) -> str:
        """
        Formats the tracker as one terminal line.

        Layout: `<name><padding> [<bar>] <percent>%`, where the name column is
        `name_width` cells and the bar takes whatever is left of the terminal
        width (never less than `min_bar_width`).
        """
        current = self._current
        percent = current / self.total * 100 if self.total > 0 else 0.0

        bar_width = terminal_width - (name_width + _BAR_DECORATION_WIDTH) - 1
        bar_width = max(bar_width, min_bar_width)

        name = pad_to_width(truncate_by_width(self.name, name_width), name_width)

        bar = render_bar(percent, bar_width, complete=current >= self.total)
        return f"{name} [{bar}] {percent:3.0f}%"

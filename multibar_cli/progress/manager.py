"""
Renders any number of concurrently updated progress bars in one terminal
region, interleaved with ordinary log lines.

While at least one tracker is registered, a single background thread owns the
terminal: it repaints the bars every tick and prints queued log messages above
them. Producer threads only advance their own trackers and enqueue messages.
"""

import logging
import queue
import threading
import time
from contextlib import contextmanager
from typing import Iterator

from multibar_cli.models.config import DisplayConfig

from .log_handler import ProgressLogHandler
from .terminal import Terminal
from .tracker import ProgressTracker

# Queued by `stop` so a loop waiting for log messages wakes up at once.
_WAKE = object()


class ProgressManager:
    """
    Owns the set of live trackers and the render loop that displays them.

    The loop starts with the first registered tracker and stops by itself once
    the last one is finished or removed. `start` and `stop` are idempotent and
    never block; use `close` (or the context manager) to also wait for the
    loop to clean up the terminal.
    """

    def __init__(
        self, config: DisplayConfig | None = None, terminal: Terminal | None = None
    ):
        self.config = config or DisplayConfig()
        self.terminal = terminal or Terminal(fallback_width=self.config.fallback_width)

        self._trackers: list[ProgressTracker] = []
        # Reentrant: a failed terminal write may log from inside a direct write.
        self._lock = threading.RLock()
        # Notified whenever a render loop takes a message or is told to stop.
        self._drained = threading.Condition(self._lock)
        self._local = threading.local()
        self._running = False
        self._stop_event: threading.Event | None = None
        self._logs: queue.Queue[str] | None = None
        self._thread: threading.Thread | None = None

    def __len__(self) -> int:
        with self._lock:
            return len(self._trackers)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    @property
    def is_running(self) -> bool:
        return self._running

    # --- Lifecycle ---

    def start(self) -> None:
        """Spawns the render loop unless it is already running."""
        with self._lock:
            self._start_locked()

    def stop(self) -> None:
        """Signals the render loop to erase the bars and exit."""
        with self._lock:
            self._stop_locked()

    def join(self, timeout: float | None = None) -> bool:
        """
        Waits for the most recent render loop to exit.

        Returns:
            True if no render loop is alive afterwards.
        """
        with self._lock:
            thread = self._thread
        if thread is None or thread is threading.current_thread():
            return True
        thread.join(timeout)
        return not thread.is_alive()

    def close(self) -> None:
        """Stops the render loop and waits until the terminal is cleaned up."""
        self.stop()
        self.join()

    def _start_locked(self) -> None:
        if self._running:
            return
        previous = self._thread
        self._running = True
        self._stop_event = threading.Event()
        self._logs = queue.Queue(maxsize=self.config.log_queue_capacity)
        self._thread = threading.Thread(
            target=self._run,
            args=(previous, self._stop_event, self._logs),
            name="progress-render",
            daemon=True,
        )
        self._thread.start()

    def _stop_locked(self) -> None:
        if not self._running:
            return
        self._running = False
        self._stop_event.set()
        try:
            self._logs.put_nowait(_WAKE)
        except queue.Full:
            pass
        self._drained.notify_all()

    # --- Tracker registration ---

    def add(self, tracker: ProgressTracker) -> None:
        """Registers a tracker and makes sure the render loop is running."""
        with self._lock:
            self._trackers.append(tracker)
            self._start_locked()

    def remove(self, tracker: ProgressTracker) -> bool:
        """Unregisters a tracker without printing anything for it."""
        with self._lock:
            removed = self._unregister(tracker)
            if not self._trackers:
                self._stop_locked()
        return removed

    def finish(self, tracker: ProgressTracker) -> bool:
        """
        Unregisters a tracker and prints its final state as a permanent line.

        Returns:
            True if the tracker was registered.
        """
        with self._lock:
            removed = self._unregister(tracker)

        if removed:
            self.log(self._render(tracker, self.terminal.query_width()))

        with self._lock:
            if not self._trackers:
                self._stop_locked()
        return removed

    def _unregister(self, tracker: ProgressTracker) -> bool:
        for index, registered in enumerate(self._trackers):
            if registered is tracker:
                del self._trackers[index]
                return True
        return False

    # --- Logging ---

    def log(self, message: str) -> None:
        """
        Prints `message` above the bars.

        While the render loop runs the message is queued; when the queue is
        full the caller waits for the loop to catch up. Without a running loop
        the message is written immediately.

        A message is queued only while the loop is running, under the same
        lock `stop` takes, so the loop always drains it before exiting.
        """
        on_render_thread = getattr(self._local, "rendering", False)
        while True:
            with self._drained:
                while self._running:
                    try:
                        self._logs.put_nowait(message)
                        return
                    except queue.Full:
                        if on_render_thread:
                            # A render loop cannot wait for itself to drain.
                            return
                        self._drained.wait()

                stopping = self._thread
                if on_render_thread or stopping is None or not stopping.is_alive():
                    # No loop can start while the lock is held.
                    self.terminal.write_line(message)
                    self.terminal.flush()
                    return

            # A stopping loop may still be erasing its bars.
            stopping.join()

    @contextmanager
    def capture_logging(
        self, logger_name: str = "multibar_cli"
    ) -> Iterator[ProgressLogHandler]:
        """
        Routes records of `logger_name` through `log` for the duration of the
        block, so that log output never tears the bars.
        """
        target = logging.getLogger(logger_name)
        handler = ProgressLogHandler(self)
        saved_handlers, saved_propagate = target.handlers[:], target.propagate
        target.handlers = [handler]
        target.propagate = False
        try:
            yield handler
        finally:
            target.handlers = saved_handlers
            target.propagate = saved_propagate

    # --- Rendering ---

    def snapshot(self) -> list[ProgressTracker]:
        """Returns the registered trackers in display order."""
        with self._lock:
            trackers = list(self._trackers)
        return sorted(trackers, key=lambda tracker: tracker.order)

    def render_lines(self, width: int | None = None) -> list[str]:
        if width is None:
            width = self.terminal.query_width()
        return [self._render(tracker, width) for tracker in self.snapshot()]

    def _render(self, tracker: ProgressTracker, width: int) -> str:
        return tracker.render(
            width,
            name_width=self.config.name_column_width,
            min_bar_width=self.config.min_bar_width,
        )

    def _run(
        self,
        previous: threading.Thread | None,
        stop_event: threading.Event,
        logs: "queue.Queue[str]",
    ) -> None:
        if previous is not None:
            previous.join()
        self._local.rendering = True

        interval = self.config.tick_interval
        last_lines = 0
        next_tick = time.monotonic() + interval

        while True:
            if stop_event.is_set():
                while True:
                    try:
                        message = logs.get_nowait()
                    except queue.Empty:
                        break
                    if message is not _WAKE:
                        last_lines = self._print_log(message, last_lines)
                self._erase(last_lines)
                self.terminal.flush()
                return

            timeout = next_tick - time.monotonic()
            if timeout > 0:
                try:
                    message = logs.get(timeout=timeout)
                except queue.Empty:
                    pass
                else:
                    with self._drained:
                        self._drained.notify_all()
                    if message is not _WAKE:
                        last_lines = self._print_log(message, last_lines)
                    continue

            if stop_event.is_set():
                continue
            next_tick = time.monotonic() + interval
            last_lines = self._redraw(last_lines)

    def _erase(self, last_lines: int) -> None:
        if last_lines > 0:
            self.terminal.move_cursor_up(last_lines)
            self.terminal.clear_to_end_of_screen()

    def _print_log(self, message: str, last_lines: int) -> int:
        self._erase(last_lines)
        self.terminal.write_line(message)
        lines = self._draw(0)
        self.terminal.flush()
        return lines

    def _redraw(self, last_lines: int) -> int:
        self.terminal.move_cursor_up(last_lines)
        lines = self._draw(last_lines)
        self.terminal.flush()
        return lines

    def _draw(self, last_lines: int) -> int:
        """Paints every tracker below the cursor and returns the row count."""
        lines = self.render_lines()
        for line in lines:
            self.terminal.write(line)
            self.terminal.clear_line()
            self.terminal.write("\n")

        extra = last_lines - len(lines)
        if extra > 0:
            for _ in range(extra):
                self.terminal.clear_line()
                self.terminal.write("\n")
            self.terminal.move_cursor_up(extra)
        return len(lines)

"""
File-like adapters that advance a ProgressTracker as bytes are written.
"""

from typing import Any

from .tracker import ProgressTracker


class ProgressWriter:
    """
    Wraps a binary sink so that every successful write advances a tracker.

    If the sink raises, the exception propagates unchanged and the tracker is
    not advanced for that write. Progress from earlier writes is kept.
    """

    def __init__(self, writer: Any, tracker: ProgressTracker):
        self.writer = writer
        self.tracker = tracker

    def write(self, data: bytes) -> int:
        written = self.writer.write(data)
        if written is None:
            written = len(data)
        self.tracker.add(written)
        return written

    def flush(self) -> None:
        if hasattr(self.writer, "flush"):
            self.writer.flush()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.flush()
        return False


class AsyncProgressWriter:
    """The same contract as ProgressWriter for async sinks (e.g. aiofiles)."""

    def __init__(self, writer: Any, tracker: ProgressTracker):
        self.writer = writer
        self.tracker = tracker

    async def write(self, data: bytes) -> int:
        written = await self.writer.write(data)
        if written is None:
            written = len(data)
        self.tracker.add(written)
        return written

    async def flush(self) -> None:
        if hasattr(self.writer, "flush"):
            await self.writer.flush()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.flush()
        return False

import asyncio
import io

import pytest

from multibar_cli.progress import AsyncProgressWriter, ProgressTracker, ProgressWriter


class ShortSink:
    """Accepts at most two bytes per write."""

    def write(self, data: bytes) -> int:
        return min(2, len(data))


class FlakySink:
    def __init__(self, fail_after: int):
        self.calls = 0
        self.fail_after = fail_after

    def write(self, data: bytes) -> int:
        self.calls += 1
        if self.calls > self.fail_after:
            raise OSError("disk full")
        return len(data)


def test_successful_writes_advance_tracker():
    sink = io.BytesIO()
    tracker = ProgressTracker(total=10, name="a.bin")
    writer = ProgressWriter(sink, tracker)

    assert writer.write(b"hello") == 5
    writer.write(b"world")

    assert sink.getvalue() == b"helloworld"
    assert tracker.current == 10


def test_only_written_bytes_are_counted():
    tracker = ProgressTracker(total=10, name="a.bin")
    ProgressWriter(ShortSink(), tracker).write(b"abcdef")
    assert tracker.current == 2


def test_sink_failure_propagates_and_keeps_prior_progress():
    tracker = ProgressTracker(total=10, name="a.bin")
    writer = ProgressWriter(FlakySink(fail_after=1), tracker)

    writer.write(b"abcd")
    with pytest.raises(OSError, match="disk full"):
        writer.write(b"efgh")

    assert tracker.current == 4


def test_writer_flushes_on_exit():
    tracker = ProgressTracker(total=3, name="a.bin")
    sink = io.BufferedWriter(io.BytesIO())
    with ProgressWriter(sink, tracker) as writer:
        writer.write(b"abc")
    assert tracker.current == 3


class AsyncSink:
    def __init__(self):
        self.data = b""
        self.flushed = False

    async def write(self, data: bytes) -> int:
        self.data += data
        return len(data)

    async def flush(self) -> None:
        self.flushed = True


class FailingAsyncSink:
    async def write(self, data: bytes) -> int:
        raise OSError("connection reset")


def test_async_writer_advances_tracker():
    sink = AsyncSink()
    tracker = ProgressTracker(total=6, name="a.bin")

    async def scenario():
        async with AsyncProgressWriter(sink, tracker) as writer:
            await writer.write(b"abc")
            await writer.write(b"def")

    asyncio.run(scenario())
    assert sink.data == b"abcdef"
    assert sink.flushed
    assert tracker.current == 6


def test_async_writer_failure_does_not_advance():
    tracker = ProgressTracker(total=6, name="a.bin")

    async def scenario():
        await AsyncProgressWriter(FailingAsyncSink(), tracker).write(b"abc")

    with pytest.raises(OSError, match="connection reset"):
        asyncio.run(scenario())
    assert tracker.current == 0

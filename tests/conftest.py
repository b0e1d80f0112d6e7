import io
import time

import pytest

from multibar_cli.models.config import DisplayConfig
from multibar_cli.progress import ProgressManager, Terminal


class FakeTerminal(Terminal):
    """Captures output in memory and reports a fixed width."""

    def __init__(self, width: int = 100):
        super().__init__(stream=io.StringIO())
        self.width = width
        self.lines: list[str] = []

    def query_width(self) -> int:
        return self.width

    def write_line(self, text: str) -> None:
        self.lines.append(text)
        super().write_line(text)

    @property
    def output(self) -> str:
        return self.stream.getvalue()


def wait_for(predicate, timeout: float = 2.0) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.005)
    return predicate()


@pytest.fixture
def terminal():
    return FakeTerminal()


@pytest.fixture
def manager(terminal):
    manager = ProgressManager(DisplayConfig(tick_interval=0.01), terminal=terminal)
    yield manager
    manager.close()

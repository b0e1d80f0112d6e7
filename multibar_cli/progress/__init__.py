"""
Progress Display Layer.

This package renders concurrent progress bars in a shared terminal region:
trackers count bytes, writers feed them, and the manager draws them.
"""

from .layout import display_width, render_bar, truncate_by_width
from .log_handler import ProgressLogHandler
from .manager import ProgressManager
from .terminal import Terminal
from .tracker import ProgressTracker
from .writer import AsyncProgressWriter, ProgressWriter

__all__ = [
    "AsyncProgressWriter",
    "ProgressLogHandler",
    "ProgressManager",
    "ProgressTracker",
    "ProgressWriter",
    "Terminal",
    "display_width",
    "render_bar",
    "truncate_by_width",
]

"""
Data Models Layer.

This package contains the Pydantic models for configuration and the
dataclass used to collect session statistics.
"""

from .config import DisplayConfig, DownloadConfig
from .stats import DownloadStats

__all__ = ["DisplayConfig", "DownloadConfig", "DownloadStats"]

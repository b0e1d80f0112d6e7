"""
Media Processing Layer.

This package is responsible for fetching files and reporting their
progress to the display.
"""

from .downloader import Downloader

__all__ = ["Downloader"]

"""
Dataclass for tracking download session statistics.
"""

import threading
from dataclasses import dataclass, field


@dataclass
class DownloadStats:
    """Counts finished, failed and transferred bytes for a session."""

    files_downloaded: int = 0
    files_failed: int = 0
    total_size_downloaded: int = 0
    failed_urls: list[str] = field(default_factory=list)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def record_success(self, size: int) -> None:
        with self._lock:
            self.files_downloaded += 1
            self.total_size_downloaded += size

    def record_failure(self, url: str) -> None:
        with self._lock:
            self.files_failed += 1
            self.failed_urls.append(url)

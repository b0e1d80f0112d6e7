"""
Downloads files over HTTP, reporting byte progress to the shared progress
display through a counting writer.
"""

import asyncio
import logging
import os

import aiofiles
import aiohttp

from multibar_cli.exceptions import DownloadError
from multibar_cli.models.stats import DownloadStats
from multibar_cli.progress import AsyncProgressWriter, ProgressManager, ProgressTracker
from multibar_cli.utils.formatting import filename_from_url, format_size

log = logging.getLogger(__name__)

CHUNK_SIZE = 131072  # 128 KB


class Downloader:
    """A file downloader with retry logic that feeds a ProgressManager."""

    def __init__(
        self,
        manager: ProgressManager,
        max_attempts: int = 3,
        base_delay: float = 1.5,
        chunk_size: int = CHUNK_SIZE,
    ):
        self.manager = manager
        self.max_attempts = max_attempts
        self.base_delay = base_delay
        self.chunk_size = chunk_size

    async def download_file(
        self,
        session: aiohttp.ClientSession,
        url: str,
        destination_path: str,
        order: int = 0,
    ) -> int:
        """
        Downloads `url` to `destination_path` with a live progress bar.

        Each attempt gets a fresh tracker so a retry starts again from 0%.
        On success the final bar is printed permanently; failed attempts are
        removed from the display silently.

        Returns:
            The number of bytes written.

        Raises:
            DownloadError: If every attempt failed.
        """
        name = os.path.basename(destination_path)
        last_exception: Exception | None = None

        for attempt in range(1, self.max_attempts + 1):
            tracker: ProgressTracker | None = None
            try:
                async with session.get(url, allow_redirects=True) as response:
                    response.raise_for_status()
                    total = response.content_length or 0
                    tracker = ProgressTracker(total, name, order)
                    self.manager.add(tracker)

                    async with aiofiles.open(destination_path, "wb") as f:
                        writer = AsyncProgressWriter(f, tracker)
                        async for chunk in response.content.iter_chunked(
                            self.chunk_size
                        ):
                            await writer.write(chunk)

                # finish may wait on the render loop; keep it off the event loop.
                await asyncio.to_thread(self.manager.finish, tracker)
                return tracker.current
            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                last_exception = e
                if tracker is not None:
                    self.manager.remove(tracker)
                log.debug(
                    f"Download attempt {attempt}/{self.max_attempts} for "
                    f"'{name}' failed: {e}. Retrying..."
                )
                if attempt < self.max_attempts:
                    await asyncio.sleep(self.base_delay * (2 ** (attempt - 1)))
            except BaseException:
                if tracker is not None:
                    self.manager.remove(tracker)
                raise

        raise DownloadError(
            f"Failed to download '{url}' after {self.max_attempts} attempts: "
            f"{last_exception}"
        ) from last_exception

    async def download_all(
        self,
        urls: list[str],
        output_dir: str,
        max_workers: int = 4,
        stats: DownloadStats | None = None,
    ) -> DownloadStats:
        """
        Downloads every URL into `output_dir`, at most `max_workers` at a time.

        Failures are logged and counted; they never abort the other downloads.
        """
        stats = stats or DownloadStats()
        semaphore = asyncio.Semaphore(max_workers)
        os.makedirs(output_dir, exist_ok=True)

        async def _worker(session: aiohttp.ClientSession, order: int, url: str):
            destination = os.path.join(output_dir, filename_from_url(url))
            async with semaphore:
                try:
                    size = await self.download_file(session, url, destination, order)
                except (DownloadError, OSError) as e:
                    log.error(f"[red]✗ {e}[/red]")
                    stats.record_failure(url)
                    return
            stats.record_success(size)
            log.info(
                f"[green]✓ Saved '{os.path.basename(destination)}' "
                f"({format_size(size)})[/green]"
            )

        timeout = aiohttp.ClientTimeout(total=None, sock_connect=15, sock_read=90)
        async with aiohttp.ClientSession(timeout=timeout) as session:
            await asyncio.gather(
                *(_worker(session, order, url) for order, url in enumerate(urls))
            )
        return stats

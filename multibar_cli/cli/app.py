"""
Defines the command-line interface for the application using Typer.
"""

import asyncio
import logging
import os
import random
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler

from multibar_cli import __version__
from multibar_cli.media.downloader import Downloader
from multibar_cli.models.stats import DownloadStats
from multibar_cli.progress import ProgressManager, ProgressTracker, ProgressWriter
from multibar_cli.storage.config_manager import ConfigManager

from .formatters import print_config, print_summary_panel

console = Console()

logging.basicConfig(
    level="INFO",
    format="%(message)s",
    datefmt="[%X]",
    handlers=[
        RichHandler(
            console=console,
            rich_tracebacks=True,
            show_path=False,
            show_level=False,
            markup=True,
        )
    ],
)
log = logging.getLogger("multibar_cli")

app = typer.Typer(
    name="multibar-cli",
    help="Concurrent downloads with live, interleaved terminal progress bars.",
    rich_markup_mode="rich",
    pretty_exceptions_show_locals=False,
    add_completion=False,
)


def get_config_dir() -> Path:
    if os.name == "nt":
        base_dir = Path(os.getenv("APPDATA", "~\\AppData\\Roaming"))
    else:
        base_dir = Path(os.getenv("XDG_CONFIG_HOME", "~/.config"))
    return base_dir.expanduser() / "multibar-cli"


CONFIG_FILE = get_config_dir() / "config.ini"

DEMO_TITLES = [
    "Intro.flac",
    "晴天 - 周杰伦.flac",
    "A Very Long Track Title That Will Not Fit In The Column.mp3",
    "夜に駆ける - YOASOBI.mp3",
    "Outro (Live).flac",
]


def _config_file(ctx: typer.Context) -> Path:
    return ctx.obj.get("config_file", CONFIG_FILE) if ctx.obj else CONFIG_FILE


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase logging verbosity (-vv for debug).",
    ),
    version: bool = typer.Option(
        False, "--version", help="Show version and exit.", is_eager=True
    ),
    config_file: Path = typer.Option(
        CONFIG_FILE, "--config", help="Path to the configuration file."
    ),
    show_config: bool = typer.Option(
        False, "--show-config", help="Display the effective configuration."
    ),
):
    """multibar-cli"""
    if version:
        console.print(f"[bold]multibar-cli[/bold] version [cyan]{__version__}[/cyan]")
        raise typer.Exit()

    log_level = "INFO"
    if verbose >= 2:
        log_level = "DEBUG"
    logging.getLogger("multibar_cli").setLevel(log_level)

    ctx.obj = {"config_file": config_file}

    if show_config:
        config = ConfigManager(config_file).load_config()
        print_config(config_file, config, console)
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


@app.command()
def init(
    ctx: typer.Context,
    force: bool = typer.Option(
        False, "--force", "-f", help="Overwrite an existing configuration file."
    ),
):
    """Write a configuration file with every setting at its default."""
    config_file = _config_file(ctx)
    if (
        config_file.exists()
        and not force
        and not typer.confirm("Configuration file already exists. Overwrite it?")
    ):
        raise typer.Abort()

    ConfigManager(config_file).save_default_config()
    console.print(
        f"[bold green]✓ Configuration saved to '{config_file}'[/bold green]"
    )


@app.command(name="download")
def download_command(
    ctx: typer.Context,
    urls: list[str] = typer.Argument(  # noqa: B008
        ..., help="One or more URLs to download."
    ),
    output_dir: str | None = typer.Option(
        None, "-o", "--output", help="Directory to save files into."
    ),
    workers: int | None = typer.Option(
        None, "-w", "--workers", help="Number of simultaneous downloads."
    ),
):
    """Download files concurrently with live progress bars."""
    cli_options = {
        key: value
        for key, value in {
            "source_urls": urls,
            "output_dir": output_dir,
            "max_workers": workers,
        }.items()
        if value is not None
    }
    config = ConfigManager(_config_file(ctx)).load_config(cli_options)

    manager = ProgressManager(config.display)
    downloader = Downloader(manager, max_attempts=config.max_attempts)

    console.print(
        f"[bold cyan]Starting download of {len(config.source_urls)} file(s)..."
        "[/bold cyan]"
    )
    start_time = time.monotonic()
    with manager.capture_logging("multibar_cli"), manager:
        stats = asyncio.run(
            downloader.download_all(
                config.source_urls, config.output_dir, config.max_workers
            )
        )
    duration = time.monotonic() - start_time

    print_summary_panel(stats, duration, console)
    if stats.files_failed:
        raise typer.Exit(code=1)


@app.command()
def demo(
    ctx: typer.Context,
    count: int = typer.Option(5, "--count", "-n", help="Number of simulated files."),
    size: int = typer.Option(
        4 * 1024 * 1024, "--size", help="Approximate size of each file in bytes."
    ),
    delay: float = typer.Option(
        0.02, "--delay", help="Pause between chunk writes, in seconds."
    ),
):
    """Simulate concurrent downloads to preview the progress display."""
    config = ConfigManager(_config_file(ctx)).load_config()
    manager = ProgressManager(config.display)
    stats = DownloadStats()

    def _simulate(order: int) -> None:
        title = DEMO_TITLES[order % len(DEMO_TITLES)]
        total = max(1, int(size * random.uniform(0.5, 1.5)))
        chunk = max(1, total // 50)
        tracker = ProgressTracker(total, f"{order + 1:02d}. {title}", order)
        manager.add(tracker)

        with open(os.devnull, "wb") as sink, ProgressWriter(sink, tracker) as writer:
            remaining = total
            while remaining > 0:
                remaining -= writer.write(b"\0" * min(chunk, remaining))
                if delay:
                    time.sleep(delay * random.uniform(0.5, 1.5))

        manager.finish(tracker)
        stats.record_success(total)
        log.info(f"[green]✓ Finished {title}[/green]")

    start_time = time.monotonic()
    with manager.capture_logging("multibar_cli"), manager:
        with ThreadPoolExecutor(max_workers=max(1, config.max_workers)) as pool:
            for future in [pool.submit(_simulate, i) for i in range(count)]:
                future.result()
    duration = time.monotonic() - start_time

    print_summary_panel(stats, duration, console)

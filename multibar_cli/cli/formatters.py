"""
Functions for formatting and displaying data in the console using Rich.
"""

from pathlib import Path

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from multibar_cli.models.config import DownloadConfig
from multibar_cli.models.stats import DownloadStats
from multibar_cli.utils.formatting import format_duration, format_size


def format_error_with_suggestions(
    error: Exception, context: dict | None = None
) -> Panel:
    """Formats an error with actionable suggestions into a Rich Panel."""
    error_type = type(error).__name__
    error_msg = str(error)

    suggestions_map = {
        "ConfigurationError": [
            "• Check the values in your configuration file.",
            "• Run `multibar-cli init --force` to write a fresh default config.",
        ],
        "DownloadError": [
            "• A network connection issue occurred.",
            "• The server might be temporarily unavailable.",
            "• Try reducing the number of `--workers`.",
        ],
    }

    suggestions = suggestions_map.get(
        error_type, ["• Run the command with -vv for detailed logs."]
    )

    error_text = Text()
    error_text.append(f"{error_type}: ", style="bold red")
    error_text.append(error_msg)

    content = Table.grid(padding=(1, 0))
    content.add_row(error_text)
    content.add_row()
    content.add_row(Text("Suggestions", style="bold yellow"))
    content.add_row(Text("\n".join(suggestions)))

    if context:
        content.add_row()
        content.add_row(Text(f"Context: {context}", style="dim"))

    return Panel(
        content,
        title="[bold red]An Error Occurred[/bold red]",
        border_style="red",
        expand=False,
    )


def print_config(config_path: Path, config: DownloadConfig, console: Console):
    """Displays the effective configuration."""
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column(style="bold cyan")
    table.add_column()

    table.add_row("Output Directory:", f"[dim]{config.output_dir}[/dim]")
    table.add_row("Max Workers:", str(config.max_workers))
    table.add_row("Max Attempts:", str(config.max_attempts))
    table.add_row("", "")
    table.add_row("Name Column:", f"{config.display.name_column_width} cells")
    table.add_row("Redraw Interval:", f"{config.display.tick_interval * 1000:.0f} ms")
    table.add_row("Log Queue:", str(config.display.log_queue_capacity))
    table.add_row("Min Bar Width:", str(config.display.min_bar_width))
    table.add_row("Fallback Width:", str(config.display.fallback_width))

    source = str(config_path) if config_path.is_file() else "built-in defaults"
    console.print(
        Panel(
            table,
            title=f"Configuration ([dim]{source}[/dim])",
            border_style="cyan",
            expand=False,
        )
    )


def print_summary_panel(stats: DownloadStats, duration_s: float, console: Console):
    """Displays a final summary of the download session."""
    stats_table = Table(show_header=False, box=None, padding=(0, 2))
    stats_table.add_column(style="bold cyan", justify="right", width=16)
    stats_table.add_column(style="white", justify="left")

    stats_table.add_row(
        "✓ Downloaded:", f"[bold green]{stats.files_downloaded}[/bold green]"
    )
    if stats.files_failed > 0:
        stats_table.add_row("✗ Failed:", f"[bold red]{stats.files_failed}[/bold red]")

    stats_table.add_row("", "")  # Spacer
    stats_table.add_row(
        "Total Size:", f"[cyan]{format_size(stats.total_size_downloaded)}[/cyan]"
    )
    avg_speed = stats.total_size_downloaded / duration_s if duration_s > 0 else 0
    stats_table.add_row(
        "Avg. Speed:", f"[magenta]{format_size(int(avg_speed))}/s[/magenta]"
    )
    stats_table.add_row("Time Elapsed:", f"[blue]{format_duration(duration_s)}[/blue]")

    border_color = "green" if stats.files_failed == 0 else "yellow"
    console.print()
    console.print(
        Panel(
            stats_table,
            title="[bold]Download Complete![/bold]",
            border_style=border_color,
            box=box.DOUBLE,
            expand=False,
            padding=(1, 2),
        )
    )

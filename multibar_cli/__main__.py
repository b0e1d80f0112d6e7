"""
Entry point for `multibar-cli` and `python -m multibar_cli`.

Errors escaping the Typer app end up here and are shown as a panel, so that
users never see a raw traceback unless they ask for debug output.
"""

import logging
import os
import sys

import typer
from rich.console import Console

from multibar_cli.cli.app import app
from multibar_cli.cli.formatters import format_error_with_suggestions
from multibar_cli.exceptions import MultibarError

EXIT_OK = 0
EXIT_FAILURE = 1


def _use_utf8_streams() -> None:
    # Bar glyphs and CJK names need UTF-8 on legacy Windows consoles.
    for stream in (sys.stdout, sys.stderr):
        reconfigure = getattr(stream, "reconfigure", None)
        if reconfigure is not None:
            reconfigure(encoding="utf-8")


def _exit_with_panel(console: Console, error: Exception, context=None) -> None:
    console.print()
    console.print(format_error_with_suggestions(error, context))
    sys.exit(EXIT_FAILURE)


def main() -> None:
    if os.name == "nt":
        _use_utf8_streams()

    console = Console(stderr=True)
    try:
        app()
    except (typer.Exit, typer.Abort):
        pass
    except KeyboardInterrupt:
        # The progress display has already erased its bars on the way out.
        console.print("[yellow]Interrupted, partial files may remain.[/yellow]")
        sys.exit(EXIT_OK)
    except MultibarError as e:
        _exit_with_panel(console, e)
    except Exception as e:
        logging.getLogger("multibar_cli").debug("Full traceback:", exc_info=True)
        _exit_with_panel(console, e, {"type": "Unexpected"})


if __name__ == "__main__":
    main()

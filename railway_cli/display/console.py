"""Terminal output helpers: warnings, errors, update banner and prompt styles."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Optional, TextIO

from rich.console import Console
from rich.text import Text

from railway_cli.constants import APP_NAME, CLI_VERSION


@dataclass(frozen=True)
class RenderConfig:
    """Styles (rich style strings) for the interactive prompt layer."""

    help_message: str = "bold bright_magenta"
    answer: str = "bold bright_cyan"
    prompt_prefix: str = "?"
    prompt_prefix_style: str = "bold bright_cyan"
    canceled_indicator: str = "<cancelled>"
    canceled_indicator_style: str = "red"


DEFAULT_RENDER_CONFIG = RenderConfig()


def _stderr_console(stream: Optional[TextIO] = None) -> Console:
    return Console(file=stream or sys.stderr, highlight=False)


def warn(message: str, *, stream: Optional[TextIO] = None) -> None:
    """Print a yellow warning on stderr."""
    _stderr_console(stream).print(Text(message, style="yellow"))


def error(message: str, *, stream: Optional[TextIO] = None) -> None:
    """Print ``Error: <message>`` in red on stderr."""
    console = _stderr_console(stream)
    console.print(Text.assemble(("Error: ", "bold red"), (message, "red")))


def print_update_banner(latest: str, *, stream: Optional[TextIO] = None) -> None:
    """Tell the user that *latest* is available."""
    console = _stderr_console(stream)
    console.print(
        Text.assemble(
            ("New version available: ", "green"),
            (f"v{latest}", "bold green"),
            (f" (current v{CLI_VERSION}). ", "green"),
            (f"Upgrade your {APP_NAME} install to get the latest features.", "green"),
        )
    )

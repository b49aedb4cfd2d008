"""
CLI utility helpers - consoles and the report sink.
"""

from __future__ import annotations

from rich.console import Console

from folio.core.console import FOLIO_THEME, ConsoleSink
from folio.core.settings import get_settings

console = Console(theme=FOLIO_THEME, highlight=False)
err_console = Console(theme=FOLIO_THEME, highlight=False, stderr=True)


def get_cli_sink() -> ConsoleSink:
    """Console sink honoring ``FOLIO_COLOR``."""
    force_terminal = get_settings().force_terminal
    if force_terminal is None:
        return ConsoleSink(console, err_console)
    return ConsoleSink(force_terminal=force_terminal)

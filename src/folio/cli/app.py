"""
Root Typer application for the folio CLI.
"""

from __future__ import annotations

import typer
from rich.markup import escape
from typer import Typer

from folio.cli.utils import err_console
from folio.core.errors import ConfigError
from folio.core.logging import configure_logging
from folio.core.settings import get_settings

app = Typer(
    name="folio",
    help="folio - result aggregation and failure reports for site builds.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    if value:
        from folio import __version__

        typer.echo(f"folio {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """folio CLI - inspect and display build results."""
    try:
        settings = get_settings()
    except ConfigError as e:
        err_console.print(f"[bold red]Error[/bold red]: {escape(e.message)}")
        raise typer.Exit(code=2) from e
    configure_logging(level=settings.log_level, json_format=settings.json_logs)


# ── Sub-command registration ─────────────────────────────────────────────

from folio.cli.report import report  # noqa: E402

app.command("report")(report)


if __name__ == "__main__":
    app()

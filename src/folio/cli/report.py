"""
CLI: ``folio report`` - display a serialized build result.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import typer

from folio.cli.utils import console, get_cli_sink
from folio.core.console import show
from folio.core.errors import ResultDecodeError
from folio.core.logging import get_logger
from folio.core.result import Err, LocatedMessage, Ok, Result, result_from_dict, succeeded, try_result

logger = get_logger(__name__)

EXIT_FAILED = 1
EXIT_UNREADABLE = 2


def load_result(path: Path) -> Result[Result[Any]]:
    """
    Read and decode a result file.

    The outer result reports whether the file could be read and decoded
    (failures are located at ``path``); the inner one is the stored result.
    """
    raw = try_result(lambda: path.read_text(encoding="utf-8"), file=str(path))
    if isinstance(raw, Err):
        return raw

    try:
        payload = json.loads(raw.value)
    except json.JSONDecodeError as e:
        return Err(LocatedMessage(f"invalid JSON: {e.msg}", str(path), e.lineno))

    try:
        return Ok(result_from_dict(payload))
    except ResultDecodeError as e:
        return Err(LocatedMessage(e.message, str(path)))


def report(
    file: Path = typer.Argument(..., help="JSON file holding a serialized result."),
    depth: int = typer.Option(0, "--depth", "-d", min=0, help="Indentation level of the first line."),
    json_out: bool = typer.Option(False, "--json", help="Print the decoded result as JSON."),
) -> None:
    """Show a build result; exit 1 if it failed, 2 if it cannot be read."""
    sink = get_cli_sink()

    outcome = load_result(file)
    if isinstance(outcome, Err):
        logger.warning("report_unreadable", file=str(file))
        show(outcome, sink=sink)
        raise typer.Exit(code=EXIT_UNREADABLE)

    loaded = outcome.value
    if json_out:
        console.print_json(json.dumps(loaded.to_dict(), default=str))
    else:
        show(loaded, depth, sink=sink)

    if not succeeded(loaded):
        raise typer.Exit(code=EXIT_FAILED)

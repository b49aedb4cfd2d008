"""
Output sinks and the ``show`` entry point.

``show`` is the only place the core touches the outside world: it renders a
result and hands the block to an ``OutputSink`` on the channel that matches
the result's severity. The default sink writes through rich consoles
(informational lines to stdout, failures to stderr) and styles each line by
its kind; styling is dropped automatically when the stream is not a terminal.

Architecture:
    ::

        show(result, depth)
            │  render_lines() → RenderedMessage(severity, lines)
            ▼
        OutputSink.write(severity, message)
            ├── ConsoleSink  → rich Console (stdout | stderr), themed
            └── BufferSink   → list of (severity, text) for tests/embedding

Theme:
    folio.header  bold red   aggregate headers
    folio.error   red        leaf failures
    folio.bullet  red        the ``-`` marker
    folio.info    cyan       "No error detected"

Examples:
    >>> from folio.core.result import Err
    >>> sink = BufferSink()
    >>> show(Err("bad input"), sink=sink)
    >>> sink.records
    [(<Severity.ERROR: 'error'>, 'bad input')]
"""

from __future__ import annotations

import threading
from typing import Any

from rich.console import Console
from rich.text import Text
from rich.theme import Theme

from folio.core.logging import get_logger
from folio.core.protocols import ErrorCodeResolver, OutputSink
from folio.core.render import BULLET, INDENT_UNIT, LineKind, MessageLine, RenderedMessage, Severity, render_lines
from folio.core.result import Result
from folio.core.settings import get_settings

logger = get_logger(__name__)

FOLIO_THEME = Theme(
    {
        "folio.header": "bold red",
        "folio.error": "red",
        "folio.bullet": "red",
        "folio.info": "cyan",
    }
)

_LINE_STYLES = {
    LineKind.HEADER: "folio.header",
    LineKind.LEAF: "folio.error",
    LineKind.INFO: "folio.info",
}


def styled_line(line: MessageLine) -> Text:
    """Build a rich ``Text`` for one rendered line."""
    text = Text()
    if line.depth > 0:
        text.append(INDENT_UNIT * (line.depth - 1))
        text.append(BULLET, style="folio.bullet")
        text.append(" ")
    text.append(line.text, style=_LINE_STYLES[line.kind])
    return text


class ConsoleSink:
    """Writes rendered messages to rich consoles, one per severity."""

    def __init__(
        self,
        info_console: Console | None = None,
        error_console: Console | None = None,
        *,
        force_terminal: bool | None = None,
    ):
        self.info_console = info_console or Console(theme=FOLIO_THEME, force_terminal=force_terminal, highlight=False)
        self.error_console = error_console or Console(
            theme=FOLIO_THEME, force_terminal=force_terminal, highlight=False, stderr=True
        )

    def console_for(self, severity: Severity) -> Console:
        if severity is Severity.ERROR:
            return self.error_console
        return self.info_console

    def write(self, severity: Severity, message: RenderedMessage) -> None:
        block = Text("\n").join(styled_line(line) for line in message.lines)
        self.console_for(severity).print(block, soft_wrap=True)


class BufferSink:
    """Collects ``(severity, text)`` pairs instead of printing them."""

    def __init__(self) -> None:
        self.records: list[tuple[Severity, str]] = []
        self._lock = threading.Lock()

    def write(self, severity: Severity, message: RenderedMessage) -> None:
        with self._lock:
            self.records.append((severity, str(message)))

    def text(self, severity: Severity | None = None) -> str:
        """All recorded blocks (optionally one channel), newline separated."""
        return "\n".join(text for sev, text in self.records if severity is None or sev is severity)

    def clear(self) -> None:
        with self._lock:
            self.records.clear()


_default_sink: OutputSink | None = None


def get_sink() -> OutputSink:
    """Process-wide default sink, built from settings on first use."""
    global _default_sink
    if _default_sink is None:
        _default_sink = ConsoleSink(force_terminal=get_settings().force_terminal)
    return _default_sink


def set_sink(sink: OutputSink | None) -> None:
    """Replace the default sink (None restores the console sink lazily)."""
    global _default_sink
    _default_sink = sink


def show(
    result: Result[Any],
    depth: int = 0,
    *,
    sink: OutputSink | None = None,
    resolver: ErrorCodeResolver | None = None,
) -> None:
    """Render ``result`` and write it to the sink channel for its severity."""
    message = render_lines(result, depth, resolver=resolver)
    logger.debug("result_shown", severity=message.severity.value, lines=len(message.lines))
    (sink or get_sink()).write(message.severity, message)


__all__ = [
    "FOLIO_THEME",
    "styled_line",
    "ConsoleSink",
    "BufferSink",
    "get_sink",
    "set_sink",
    "show",
]

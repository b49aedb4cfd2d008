"""
Human-readable rendering of results.

Turns any ``Result`` (success or a failure tree of any depth) into indented
lines tagged with a kind and severity. The renderer does not style anything
itself: ``MessageLine.kind`` tells a sink whether a line is an aggregate
header, a leaf failure or an informational line, and the sink applies colors.

Layout:
    ::

        stage B:                 depth 0, HEADER
        - stage A:               depth 1, HEADER
          - bad input            depth 2, LEAF

    Depth 0 has no prefix. Depth d > 0 is ``(d - 1)`` two-space indents, a
    ``-`` bullet and a space.

Examples:
    >>> from folio.core.result import Err, Message, Ok, aggregate
    >>> inner = aggregate([Ok(), Err(Message("bad input")), Ok()], "stage A")
    >>> print(render(aggregate([inner], "stage B")))
    stage B:
    - stage A:
      - bad input
    >>> render(Ok(), depth=2)
    '  - No error detected'

Tags:
    rendering, error-report, cli-output, folio-core

Doc-Types:
    - API Reference
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from typing import Any

from folio.core.protocols import ErrorCodeResolver
from folio.core.result import Aggregate, Err, LocatedMessage, Message, Ok, Result, label_text, succeeded


INDENT_UNIT = "  "
BULLET = "-"
OK_MESSAGE = "No error detected"
UNKNOWN_ERROR_MESSAGE = "unknown platform error"


class Severity(str, Enum):
    """Output channel for a rendered message."""

    INFO = "info"
    ERROR = "error"


class LineKind(str, Enum):
    """What a rendered line represents; sinks style lines by kind."""

    INFO = "info"
    HEADER = "header"
    LEAF = "leaf"

    @property
    def severity(self) -> Severity:
        if self is LineKind.INFO:
            return Severity.INFO
        return Severity.ERROR


def indent_prefix(depth: int) -> str:
    """Leading indentation and bullet for a line at ``depth``."""
    if depth == 0:
        return ""
    return INDENT_UNIT * (depth - 1) + BULLET + " "


@dataclass(frozen=True, slots=True)
class MessageLine:
    depth: int
    text: str
    kind: LineKind

    @property
    def prefix(self) -> str:
        return indent_prefix(self.depth)

    def plain(self) -> str:
        return self.prefix + self.text


@dataclass(frozen=True, slots=True)
class RenderedMessage:
    """A block of rendered lines plus the channel it belongs on."""

    severity: Severity
    lines: tuple[MessageLine, ...]

    def __str__(self) -> str:
        return "\n".join(line.plain() for line in self.lines)


def os_error_message(code: int) -> str:
    """Default resolver: the operating system's text for an errno."""
    try:
        text = os.strerror(code)
    except (ValueError, OverflowError):
        return UNKNOWN_ERROR_MESSAGE
    # glibc and macOS echo unrecognized codes back ("Unknown error 99999").
    if not text or text.startswith("Unknown error"):
        return UNKNOWN_ERROR_MESSAGE
    return text


def severity_of(result: Result[Any]) -> Severity:
    return Severity.INFO if succeeded(result) else Severity.ERROR


def _located_text(detail: LocatedMessage, resolver: ErrorCodeResolver) -> str:
    message = resolver(detail.message) if detail.is_code else detail.message
    if detail.line == 0:
        return f"{detail.file}: {message}"
    return f"{detail.file}:{detail.line}: {message}"


def render_lines(
    result: Result[Any],
    depth: int = 0,
    *,
    resolver: ErrorCodeResolver | None = None,
) -> RenderedMessage:
    """
    Render ``result`` into tagged lines starting at indentation ``depth``.

    Aggregates are walked with an explicit stack so arbitrarily deep trees
    render without recursion. Children appear right after their header, in
    their stored order, one level deeper.

    Args:
        result: Any Ok or Err
        depth: Indentation level of the first line (non-negative)
        resolver: Error code resolver (defaults to ``os_error_message``)

    Returns:
        RenderedMessage with the result's severity and its lines
    """
    if depth < 0:
        raise ValueError(f"depth must be non-negative, got {depth}")
    resolve = resolver or os_error_message

    lines: list[MessageLine] = []
    stack: list[tuple[Result[Any], int]] = [(result, depth)]
    while stack:
        current, level = stack.pop()
        match current:
            case Ok():
                lines.append(MessageLine(level, OK_MESSAGE, LineKind.INFO))
            case Err(Message(text)):
                lines.append(MessageLine(level, text, LineKind.LEAF))
            case Err(LocatedMessage() as detail):
                lines.append(MessageLine(level, _located_text(detail, resolve), LineKind.LEAF))
            case Err(Aggregate(label, errors)):
                lines.append(MessageLine(level, f"{label_text(label)}:", LineKind.HEADER))
                stack.extend((child, level + 1) for child in reversed(errors))
            case _:
                raise TypeError(f"Expected Ok or Err, got {type(current).__name__}")

    return RenderedMessage(severity_of(result), tuple(lines))


def render(
    result: Result[Any],
    depth: int = 0,
    *,
    resolver: ErrorCodeResolver | None = None,
) -> str:
    """Plain-text rendering of ``result``; see :func:`render_lines`."""
    return str(render_lines(result, depth, resolver=resolver))


__all__ = [
    "INDENT_UNIT",
    "BULLET",
    "OK_MESSAGE",
    "UNKNOWN_ERROR_MESSAGE",
    "Severity",
    "LineKind",
    "MessageLine",
    "RenderedMessage",
    "indent_prefix",
    "os_error_message",
    "severity_of",
    "render_lines",
    "render",
]

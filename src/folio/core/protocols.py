"""
Structural protocols for the collaborators the core talks to.

The result algebra and renderer are pure. The two things they depend on from
the outside world are isolated here so tests can substitute deterministic
fakes:

    protocols.py
    ├── ErrorCodeResolver   - platform error code → human-readable text
    └── OutputSink          - severity-routed writer for rendered messages

Guardrails:
    ❌ DON'T: Write to sys.stdout/sys.stderr from rendering code
    ✅ DO: Pass an OutputSink to ``show`` (``BufferSink`` in tests)

    ❌ DON'T: Call os.strerror directly in rendering code
    ✅ DO: Accept an ErrorCodeResolver and default to ``os_error_message``
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from folio.core.render import RenderedMessage, Severity


@runtime_checkable
class ErrorCodeResolver(Protocol):
    """Resolves a platform error code (``errno``) to a message."""

    def __call__(self, code: int) -> str: ...


@runtime_checkable
class OutputSink(Protocol):
    """
    Two-channel output for rendered messages.

    Implementations route ``Severity.INFO`` to an informational stream and
    ``Severity.ERROR`` to an error stream. ``message`` is written as a single
    block; ``str(message)`` is its plain text and ``message.lines`` carries
    per-line kinds for styling.
    """

    def write(self, severity: Severity, message: RenderedMessage) -> None: ...


__all__ = ["ErrorCodeResolver", "OutputSink"]

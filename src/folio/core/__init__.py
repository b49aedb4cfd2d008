"""
Folio core primitives.

Re-exports the public surface of the result algebra, the renderer and the
output sinks so callers can ``from folio.core import aggregate, show``.
"""

from folio.core.batch import check_batch, run_batch
from folio.core.console import BufferSink, ConsoleSink, get_sink, set_sink, show
from folio.core.errors import (
    ConfigError,
    ErrorCategory,
    FolioError,
    ResultDecodeError,
    ResultError,
    SourceError,
    TemplateNotFoundError,
)
from folio.core.protocols import ErrorCodeResolver, OutputSink
from folio.core.render import (
    LineKind,
    MessageLine,
    RenderedMessage,
    Severity,
    os_error_message,
    render,
    render_lines,
    severity_of,
)
from folio.core.result import (
    Aggregate,
    Err,
    ErrorDetail,
    LocatedMessage,
    Message,
    Ok,
    Result,
    aggregate,
    aggregate_values,
    error,
    from_optional,
    located,
    partition_results,
    result_from_dict,
    succeeded,
    try_result,
)

__all__ = [
    # Result algebra
    "Ok",
    "Err",
    "Result",
    "ErrorDetail",
    "Message",
    "LocatedMessage",
    "Aggregate",
    "aggregate",
    "aggregate_values",
    "succeeded",
    "error",
    "located",
    "try_result",
    "from_optional",
    "partition_results",
    "result_from_dict",
    # Rendering
    "Severity",
    "LineKind",
    "MessageLine",
    "RenderedMessage",
    "render",
    "render_lines",
    "severity_of",
    "os_error_message",
    # Output
    "OutputSink",
    "ErrorCodeResolver",
    "ConsoleSink",
    "BufferSink",
    "get_sink",
    "set_sink",
    "show",
    # Batches
    "run_batch",
    "check_batch",
    # Errors
    "FolioError",
    "ErrorCategory",
    "ResultError",
    "ResultDecodeError",
    "ConfigError",
    "SourceError",
    "TemplateNotFoundError",
]

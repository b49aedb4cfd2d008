"""
Structured exception types for folio.

Failures that travel through a build are *values* (see ``folio.core.result``).
Exceptions in this module cover the remaining cases: a caller forcing a value
out of a failed result, a serialized result that cannot be decoded, and
invalid configuration. Site code also raises them for malformed post headers
and unknown template names before turning them into failures.

Manifesto:
    - **Values first:** Expected build failures are ``Err`` values, not raises
    - **One base class:** Everything raised by folio extends ``FolioError``
    - **Rich context:** Errors carry a category and free-form context
    - **Error chaining:** The original exception is kept as ``cause``

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────┐
        │                        FolioError                            │
        │              (message, category, context, cause)            │
        ├─────────────┬───────────────────┬─────────────┬─────────────┤
        │ ResultError │ ResultDecodeError │ ConfigError │ SourceError │
        │ (unwrap)    │ (from_dict)       │ (settings)  │ (headers)   │
        ├─────────────┴───────────────────┴─────────────┴─────────────┤
        │ TemplateNotFoundError (template lookup)                     │
        └─────────────────────────────────────────────────────────────┘

Examples:
    >>> err = FolioError("boom", category=ErrorCategory.INTERNAL)
    >>> err.to_dict()["category"]
    'INTERNAL'

Tags:
    exception, error-hierarchy, error-context, folio-core

Doc-Types:
    - API Reference
    - Error Handling Guide
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """
    High-level classification of a raised folio error.

    Attributes:
        RESULT: A failed result was unwrapped
        DECODE: A serialized result could not be decoded
        CONFIG: Missing or invalid settings
        SOURCE: A source document has a malformed header
        TEMPLATE: A template could not be found
        INTERNAL: Bugs, unexpected state
    """

    RESULT = "RESULT"
    DECODE = "DECODE"
    CONFIG = "CONFIG"
    SOURCE = "SOURCE"
    TEMPLATE = "TEMPLATE"
    INTERNAL = "INTERNAL"


class FolioError(Exception):
    """
    Base exception for all folio errors.

    Subclasses set ``default_category`` so callers rarely pass one explicitly.

    Examples:
        >>> error = FolioError("Fetch failed").with_context(file="posts/a.md")
        >>> error.context
        {'file': 'posts/a.md'}

        >>> try:
        ...     raise OSError("disk gone")
        ... except OSError as e:
        ...     error = FolioError("Write failed", cause=e)
        >>> error.cause
        OSError('disk gone')
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = dict(context or {})
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> FolioError:
        """Add context to this error (fluent API)."""
        self.context.update(kwargs)
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result: dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        if self.context:
            result["context"] = dict(self.context)
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


class ResultError(FolioError):
    """
    Raised when a value is forced out of a failed result.

    ``detail`` is the ``ErrorDetail`` the ``Err`` carried; the message is its
    plain-text rendering so tracebacks show the whole failure tree.
    """

    default_category = ErrorCategory.RESULT

    def __init__(self, message: str, *, detail: Any, **kwargs: Any):
        super().__init__(message, **kwargs)
        self.detail = detail


class ResultDecodeError(FolioError):
    """A serialized result payload does not describe a valid result."""

    default_category = ErrorCategory.DECODE

    def __init__(self, message: str, *, payload: Any = None, **kwargs: Any):
        super().__init__(message, **kwargs)
        self.payload = payload


class ConfigError(FolioError):
    """Invalid configuration value."""

    default_category = ErrorCategory.CONFIG

    def __init__(self, key: str, value: Any, message: str | None = None):
        super().__init__(
            message or f"Invalid value for {key}: {value!r}",
            context={"key": key},
        )
        self.key = key
        self.value = value


class SourceError(FolioError):
    """A source document cannot be turned into a page (bad header values)."""

    default_category = ErrorCategory.SOURCE

    def __init__(self, message: str, *, file: str, **kwargs: Any):
        super().__init__(message, **kwargs)
        self.file = file
        self.context.setdefault("file", file)


class TemplateNotFoundError(FolioError):
    """No template is registered under the requested name."""

    default_category = ErrorCategory.TEMPLATE

    def __init__(self, name: str):
        super().__init__(f'the template "{name}" is not available', context={"template": name})
        self.name = name


__all__ = [
    "ErrorCategory",
    "FolioError",
    "ResultError",
    "ResultDecodeError",
    "ConfigError",
    "SourceError",
    "TemplateNotFoundError",
]

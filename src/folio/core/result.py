"""
Result algebra for build stages.

Every stage of a site build (reading a document, rendering a template,
writing a page) returns a ``Result``: ``Ok`` on success, optionally carrying a
value, or ``Err`` carrying an ``ErrorDetail`` that describes what went wrong.
Stages that coordinate many independent items fold the per-item results with
``aggregate`` / ``aggregate_values``, which keep every failure and nest them
one level under a caller-supplied label.

Manifesto:
    - **Fail slow across a batch:** N independent failures become one nested
      failure instead of an exception on the first one
    - **Nothing is dropped:** Every failed child survives aggregation, in order
    - **One failure path:** ``aggregate`` and ``aggregate_values`` share the
      same failure construction, so callers cannot lose detail by picking one
    - **Immutable values:** Frozen dataclasses and tuple children

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────┐
        │                     Result[T]                                │
        ├─────────────────┬─────────────────┬─────────────────────────┤
        │     Ok[T]       │     Err[T]      │   ErrorDetail           │
        │  value: T|None  │  error: Detail  │  • Message(text)        │
        │                 │                 │  • LocatedMessage(m,f,l)│
        │                 │                 │  • Aggregate(label, [E])│
        └─────────────────┴─────────────────┴─────────────────────────┘

        aggregate([Ok(), Err(a), Ok(), Err(b)], "posts")
            └──> Err(Aggregate("posts", (Err(a), Err(b)), total=4))

        aggregate([Err(Aggregate("posts", ...))], "build")
            └──> Err(Aggregate("build", (Err(Aggregate("posts", ...)),)))

Examples:
    >>> aggregate([Ok(), Ok()], "writing files")
    Ok(None)
    >>> aggregate_values([Ok(1), Ok(2)], "loading posts")
    Ok([1, 2])
    >>> result = aggregate([Ok(), Err(Message("bad input"))], "stage A")
    >>> result.error.label, len(result.error.errors)
    ('stage A', 1)

    Pattern matching:

    >>> match aggregate_values([Ok("a")], "x"):
    ...     case Ok(values):
    ...         print(values)
    ...     case Err(detail):
    ...         print("failed")
    ['a']

Guardrails:
    ❌ DON'T: Raise from a stage just to report a per-item failure
    ✅ DO: Return Err and let the coordinating stage aggregate

    ❌ DON'T: Flatten aggregates by hand
    ✅ DO: Aggregate again with a new label; nesting is the report structure

Tags:
    result-pattern, error-aggregation, batch-processing, folio-core

Doc-Types:
    - API Reference
    - Error Handling Guide
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

from folio.core.errors import ResultDecodeError, ResultError


T = TypeVar("T")
U = TypeVar("U")


# =============================================================================
# ERROR DETAILS
# =============================================================================


@dataclass(frozen=True, slots=True)
class Message:
    """A flat, human-readable failure description."""

    text: str

    def to_dict(self) -> dict[str, Any]:
        return {"type": "message", "text": self.text}


@dataclass(frozen=True, slots=True)
class LocatedMessage:
    """
    A failure attributable to a place in a source file.

    ``message`` is either free text or an integer platform error code
    (``errno``) that is resolved to text when the failure is rendered.
    ``line == 0`` means the file is known but the line is not.

    Examples:
        >>> LocatedMessage("unexpected token", "posts/hello.md", 12)
        LocatedMessage(message='unexpected token', file='posts/hello.md', line=12)

        >>> import errno
        >>> LocatedMessage(errno.ENOENT, "posts/missing.md").is_code
        True
    """

    message: str | int
    file: str
    line: int = 0

    def __post_init__(self) -> None:
        if self.line < 0:
            raise ValueError(f"line must be non-negative, got {self.line}")

    @property
    def is_code(self) -> bool:
        """True when ``message`` is a platform error code, not text."""
        return isinstance(self.message, int) and not isinstance(self.message, bool)

    @classmethod
    def from_os_error(cls, exc: OSError, file: str | None = None) -> LocatedMessage:
        """Build a located failure from an ``OSError``, keeping its errno."""
        path = file or exc.filename or "<unknown>"
        message: str | int = exc.errno if exc.errno else (exc.strerror or str(exc))
        return cls(message, str(path))

    def to_dict(self) -> dict[str, Any]:
        return {"type": "located", "message": self.message, "file": self.file, "line": self.line}


@dataclass(frozen=True, slots=True)
class Aggregate:
    """
    A labeled batch of failed child results.

    ``errors`` only ever holds ``Err`` values, in the order the batch produced
    them. ``total`` is the size of the batch that was aggregated, so the
    number of successful siblings stays recoverable after they are dropped.
    """

    label: Any
    errors: tuple[Err[Any], ...]
    total: int | None = None

    def __post_init__(self) -> None:
        errors = tuple(self.errors)
        if not errors:
            raise ValueError("an aggregate needs at least one failed result")
        for child in errors:
            if not isinstance(child, Err):
                raise ValueError(f"aggregate children must be Err, got {child!r}")
        if self.total is not None and self.total < len(errors):
            raise ValueError(f"total ({self.total}) is smaller than the number of failures ({len(errors)})")
        object.__setattr__(self, "errors", errors)

    @property
    def succeeded(self) -> int | None:
        """How many siblings succeeded, when the batch size is known."""
        if self.total is None:
            return None
        return self.total - len(self.errors)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "type": "aggregate",
            "label": label_text(self.label),
            "errors": [child.to_dict() for child in self.errors],
        }
        if self.total is not None:
            payload["total"] = self.total
        return payload


ErrorDetail = Message | LocatedMessage | Aggregate


def label_text(label: Any) -> str:
    """Display form of an aggregate label (enum members show their value)."""
    if isinstance(label, Enum):
        return str(label.value)
    return str(label)


# =============================================================================
# RESULT
# =============================================================================


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """
    Successful result, optionally carrying a value.

    ``Ok()`` is the bare success marker used by stages that only report
    pass/fail; ``Ok(value)`` wraps a payload.

    Examples:
        >>> Ok(10).map(lambda x: x * 2).unwrap()
        20
        >>> Ok().is_ok()
        True
    """

    value: T = None  # type: ignore[assignment]

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        """Get the value. Safe for Ok."""
        return self.value

    def unwrap_or(self, default: T) -> T:
        return self.value

    def unwrap_or_else(self, f: Callable[[ErrorDetail], T]) -> T:
        return self.value

    def map(self, f: Callable[[T], U]) -> Result[U]:
        """Transform the value."""
        return Ok(f(self.value))

    def flat_map(self, f: Callable[[T], Result[U]]) -> Result[U]:
        """Chain to another Result-returning function."""
        return f(self.value)

    def and_then(self, f: Callable[[T], Result[U]]) -> Result[U]:
        """Alias for flat_map."""
        return f(self.value)

    def map_err(self, f: Callable[[ErrorDetail], ErrorDetail]) -> Result[T]:
        return self

    def or_else(self, f: Callable[[ErrorDetail], Result[T]]) -> Result[T]:
        return self

    def inspect(self, f: Callable[[T], None]) -> Result[T]:
        """Call f with the value for side effects, return self."""
        f(self.value)
        return self

    def inspect_err(self, f: Callable[[ErrorDetail], None]) -> Result[T]:
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {"ok": True, "value": self.value}

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[T]):
    """
    Failed result carrying an ``ErrorDetail``.

    A plain string is accepted as a shortcut for ``Message(text)``.
    Transformations short-circuit: ``map`` and ``flat_map`` hand back an Err
    with the same detail.

    Examples:
        >>> Err("bad input").error
        Message(text='bad input')
        >>> Err("x").map(lambda v: v * 2).unwrap_or(0)
        0
    """

    error: ErrorDetail

    def __post_init__(self) -> None:
        if isinstance(self.error, str):
            object.__setattr__(self, "error", Message(self.error))
        elif not isinstance(self.error, (Message, LocatedMessage, Aggregate)):
            raise TypeError(f"Err expects an ErrorDetail, got {type(self.error).__name__}")

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> T:
        """Raise ``ResultError`` with the rendered failure tree."""
        from folio.core.render import render

        raise ResultError(render(self), detail=self.error)

    def unwrap_or(self, default: T) -> T:
        return default

    def unwrap_or_else(self, f: Callable[[ErrorDetail], T]) -> T:
        return f(self.error)

    def map(self, f: Callable[[T], U]) -> Result[U]:
        return Err(self.error)

    def flat_map(self, f: Callable[[T], Result[U]]) -> Result[U]:
        return Err(self.error)

    def and_then(self, f: Callable[[T], Result[U]]) -> Result[U]:
        return Err(self.error)

    def map_err(self, f: Callable[[ErrorDetail], ErrorDetail]) -> Result[T]:
        """Transform the error detail."""
        return Err(f(self.error))

    def or_else(self, f: Callable[[ErrorDetail], Result[T]]) -> Result[T]:
        """Call f with the detail to try recovery."""
        return f(self.error)

    def inspect(self, f: Callable[[T], None]) -> Result[T]:
        return self

    def inspect_err(self, f: Callable[[ErrorDetail], None]) -> Result[T]:
        """Call f with the detail for side effects, return self."""
        f(self.error)
        return self

    def to_dict(self) -> dict[str, Any]:
        return {"ok": False, "error": self.error.to_dict()}

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result = Ok[T] | Err[T]


def succeeded(result: Result[Any]) -> bool:
    """The single success test for results."""
    match result:
        case Ok():
            return True
        case Err():
            return False
        case _:
            raise TypeError(f"Expected Ok or Err, got {type(result).__name__}")


# =============================================================================
# AGGREGATION
# =============================================================================


def _aggregate_failures(results: Sequence[Result[Any]], label: Any) -> Err[Any] | None:
    failures = [result for result in results if not succeeded(result)]
    if not failures:
        return None
    return Err(Aggregate(label, tuple(failures), total=len(results)))


def aggregate(results: Iterable[Result[Any]], label: Any) -> Result[None]:
    """
    Fold a batch of results into one pass/fail result.

    Returns ``Ok()`` when nothing failed (including an empty batch). Otherwise
    returns ``Err(Aggregate(label, failures))`` where ``failures`` are the
    failed inputs in their original order, not flattened.

    Args:
        results: Results of independent operations
        label: Identifies the aggregating stage, e.g. ``"building posts"``

    Returns:
        Ok() or an aggregated Err
    """
    results = list(results)
    failed = _aggregate_failures(results, label)
    if failed is not None:
        return failed
    return Ok()


def aggregate_values(results: Iterable[Result[T]], label: Any) -> Result[list[T]]:
    """
    Fold a batch of value-carrying results into a result of their values.

    On success the values come back in input order. The failure path is the
    same as :func:`aggregate`.
    """
    results = list(results)
    failed = _aggregate_failures(results, label)
    if failed is not None:
        return failed
    return Ok([result.value for result in results])


# =============================================================================
# CONSTRUCTORS AND UTILITIES
# =============================================================================


def error(text: str) -> Err[Any]:
    """Shortcut for ``Err(Message(text))``."""
    return Err(Message(text))


def located(message: str | int, file: str, line: int = 0) -> Err[Any]:
    """Shortcut for ``Err(LocatedMessage(message, file, line))``."""
    return Err(LocatedMessage(message, file, line))


def try_result(f: Callable[[], T], *, file: str | None = None) -> Result[T]:
    """
    Run ``f`` and wrap its return value or exception in a Result.

    ``OSError`` becomes a ``LocatedMessage`` (keeping the errno so it is
    resolved at render time); anything else becomes a ``Message``.

    Examples:
        >>> try_result(lambda: 1 + 1)
        Ok(2)
        >>> try_result(lambda: int("x")).is_err()
        True
    """
    try:
        return Ok(f())
    except OSError as e:
        if file is None and e.filename is None:
            return Err(Message(str(e) or type(e).__name__))
        return Err(LocatedMessage.from_os_error(e, file))
    except Exception as e:
        text = str(e) or type(e).__name__
        if file is not None:
            return Err(LocatedMessage(text, file))
        return Err(Message(text))


def from_optional(value: T | None, text: str) -> Result[T]:
    """``Ok(value)`` unless value is None, then ``Err(Message(text))``."""
    if value is None:
        return Err(Message(text))
    return Ok(value)


def partition_results(results: Iterable[Result[T]]) -> tuple[list[T], list[ErrorDetail]]:
    """Split results into successful values and failure details."""
    values: list[T] = []
    errors: list[ErrorDetail] = []
    for result in results:
        match result:
            case Ok(value):
                values.append(value)
            case Err(detail):
                errors.append(detail)
    return values, errors


# =============================================================================
# SERIALIZATION
# =============================================================================


def _detail_from_dict(payload: Any) -> ErrorDetail:
    if not isinstance(payload, Mapping):
        raise ResultDecodeError("error detail must be an object", payload=payload)

    kind = payload.get("type")
    try:
        if kind == "message":
            return Message(str(payload["text"]))
        if kind == "located":
            message = payload["message"]
            if not isinstance(message, (str, int)) or isinstance(message, bool):
                raise ResultDecodeError("located message must be text or an error code", payload=payload)
            return LocatedMessage(message, str(payload["file"]), int(payload.get("line", 0)))
        if kind == "aggregate":
            children = payload["errors"]
            if not isinstance(children, list):
                raise ResultDecodeError("aggregate errors must be a list", payload=payload)
            errors = []
            for child in children:
                decoded = result_from_dict(child)
                if not isinstance(decoded, Err):
                    raise ResultDecodeError("aggregate children must be failures", payload=child)
                errors.append(decoded)
            total = payload.get("total")
            return Aggregate(payload["label"], tuple(errors), int(total) if total is not None else None)
    except KeyError as e:
        raise ResultDecodeError(f"missing field {e.args[0]!r} in {kind} detail", payload=payload, cause=e) from e
    except (TypeError, ValueError) as e:
        raise ResultDecodeError(f"invalid {kind} detail: {e}", payload=payload, cause=e) from e

    raise ResultDecodeError(f"unknown error detail type: {kind!r}", payload=payload)


def result_from_dict(payload: Any) -> Result[Any]:
    """
    Rebuild a result from the shape produced by ``to_dict()``.

    Raises:
        ResultDecodeError: if the payload is not a serialized result
    """
    if not isinstance(payload, Mapping) or "ok" not in payload:
        raise ResultDecodeError("result payload must be an object with an 'ok' field", payload=payload)
    if payload["ok"] is True:
        return Ok(payload.get("value"))
    if payload["ok"] is False:
        if "error" not in payload:
            raise ResultDecodeError("failed result payload has no 'error' field", payload=payload)
        return Err(_detail_from_dict(payload["error"]))
    raise ResultDecodeError("'ok' must be a boolean", payload=payload)


__all__ = [
    "Message",
    "LocatedMessage",
    "Aggregate",
    "ErrorDetail",
    "Ok",
    "Err",
    "Result",
    "succeeded",
    "aggregate",
    "aggregate_values",
    "error",
    "located",
    "try_result",
    "from_optional",
    "partition_results",
    "result_from_dict",
    "label_text",
]

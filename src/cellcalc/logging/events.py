"""Unified event schema and module-level emit helpers.

All timestamps use UTC ISO-8601 with ``Z`` suffix.  The ``emit()``
family of functions is safe to call from any context -- failures are
swallowed and printed to stderr.
"""

from __future__ import annotations

import sys
import time
import traceback
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from cellcalc.formulas.errors import (
    ArityMismatchError,
    DivisionByZeroError,
    EmptyExpressionError,
    FormulaError,
    InvalidCellReferenceError,
    MalformedParenthesesError,
    UnexpectedTokenError,
    UnknownFunctionError,
    UnsupportedOperatorError,
)


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class EventLevel(str, Enum):
    info = "info"
    warning = "warning"
    error = "error"


class EventType(str, Enum):
    formula_parsed = "formula_parsed"
    formula_evaluated = "formula_evaluated"
    formula_failed = "formula_failed"


# ---------------------------------------------------------------------------
# Error codes
# ---------------------------------------------------------------------------

MALFORMED_PARENTHESES = "malformed_parentheses"
EMPTY_EXPRESSION = "empty_expression"
UNEXPECTED_TOKEN = "unexpected_token"
UNKNOWN_FUNCTION = "unknown_function"
ARITY_MISMATCH = "arity_mismatch"
INVALID_CELL_REFERENCE = "invalid_cell_reference"
DIVISION_BY_ZERO = "division_by_zero"
UNSUPPORTED_OPERATOR = "unsupported_operator"
FORMULA_ERROR = "formula_error"

# Most specific first.
_ERROR_CODES: list[tuple[type[FormulaError], str]] = [
    (MalformedParenthesesError, MALFORMED_PARENTHESES),
    (EmptyExpressionError, EMPTY_EXPRESSION),
    (UnexpectedTokenError, UNEXPECTED_TOKEN),
    (UnknownFunctionError, UNKNOWN_FUNCTION),
    (ArityMismatchError, ARITY_MISMATCH),
    (InvalidCellReferenceError, INVALID_CELL_REFERENCE),
    (DivisionByZeroError, DIVISION_BY_ZERO),
    (UnsupportedOperatorError, UNSUPPORTED_OPERATOR),
]


def error_code_for(exc: BaseException) -> str:
    """Map a formula error to its stable error code."""
    for cls, code in _ERROR_CODES:
        if isinstance(exc, cls):
            return code
    return FORMULA_ERROR


# ---------------------------------------------------------------------------
# Context redaction
# ---------------------------------------------------------------------------

_MAX_VALUE_LEN = 256


def redact_context(context: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of *context* with long string values truncated.

    Formula text is user input and may be arbitrarily long; anything over
    256 characters is cut and marked ``...[truncated]``.
    """
    out: dict[str, Any] = {}
    for k, v in context.items():
        if isinstance(v, dict):
            out[k] = redact_context(v)
        elif isinstance(v, str) and len(v) > _MAX_VALUE_LEN:
            out[k] = v[:_MAX_VALUE_LEN] + "...[truncated]"
        else:
            out[k] = v
    return out


# ---------------------------------------------------------------------------
# Event model
# ---------------------------------------------------------------------------


def _utc_now() -> str:
    """Return current UTC timestamp in ISO-8601 with Z suffix."""
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ")


class CalcEvent(BaseModel):
    """A single structured log event."""

    schema_version: int = 1
    ts: str = Field(default_factory=_utc_now)
    level: EventLevel
    event_type: EventType
    context: dict[str, Any] = Field(default_factory=dict)
    message: str = ""
    error_code: str | None = None


# ---------------------------------------------------------------------------
# Module-level sink reference
# ---------------------------------------------------------------------------

# Set by ``configure_sink``; ``None`` means events are discarded.
_sink: Any = None  # EventSink | None


def configure_sink(log_dir: Path | str | None, *, fsync: bool = False) -> None:
    """Point the module-level event sink at *log_dir*.

    Passing ``None`` disables event logging again.
    """
    global _sink
    from cellcalc.logging.sink import EventSink

    _sink = EventSink(Path(log_dir), fsync=fsync) if log_dir is not None else None


def configure_from_config(config: dict[str, Any], base_dir: Path) -> None:
    """Configure the sink from a loaded ``cellcalc.yaml`` config dict."""
    if not config.get("logging_enabled", True):
        configure_sink(None)
        return
    log_dir = Path(config.get("log_dir", "logs"))
    if not log_dir.is_absolute():
        log_dir = base_dir / log_dir
    configure_sink(log_dir, fsync=bool(config.get("logging_fsync", False)))


def _get_sink() -> Any:
    """Return the module-level sink, or None."""
    return _sink


# ---------------------------------------------------------------------------
# Rate-limited stderr warnings
# ---------------------------------------------------------------------------

_last_stderr_ts: float = 0.0
_STDERR_INTERVAL_SECS = 60.0


def _stderr_warning(msg: str) -> None:
    """Print a warning to stderr, rate-limited to one per 60 seconds."""
    global _last_stderr_ts
    now = time.monotonic()
    if now - _last_stderr_ts < _STDERR_INTERVAL_SECS:
        return
    _last_stderr_ts = now
    try:
        print(f"[cellcalc] {msg}", file=sys.stderr)
    except Exception:
        pass


# ---------------------------------------------------------------------------
# Safe emit helpers
# ---------------------------------------------------------------------------


def emit(event: CalcEvent) -> None:
    """Write an event to the configured sink.

    **Never raises.**  On failure, prints a rate-limited warning to stderr.
    """
    try:
        sink = _get_sink()
        if sink is None:
            return
        event = event.model_copy(update={"context": redact_context(event.context)})
        sink.write(event)
    except Exception:
        _stderr_warning(f"logging failed: {traceback.format_exc()}")


def emit_info(
    event_type: EventType,
    message: str,
    context: dict[str, Any] | None = None,
) -> None:
    """Convenience: emit an info-level event."""
    emit(
        CalcEvent(
            level=EventLevel.info,
            event_type=event_type,
            message=message,
            context=context or {},
        )
    )


def emit_warning(
    event_type: EventType,
    message: str,
    context: dict[str, Any] | None = None,
) -> None:
    """Convenience: emit a warning-level event."""
    emit(
        CalcEvent(
            level=EventLevel.warning,
            event_type=event_type,
            message=message,
            context=context or {},
        )
    )


def emit_error(
    event_type: EventType,
    message: str,
    context: dict[str, Any] | None = None,
    *,
    error_code: str | None = None,
) -> None:
    """Convenience: emit an error-level event."""
    emit(
        CalcEvent(
            level=EventLevel.error,
            event_type=event_type,
            message=message,
            context=context or {},
            error_code=error_code,
        )
    )

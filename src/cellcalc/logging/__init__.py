"""Structured event logging for cellcalc.

Provides a unified event schema, filesystem NDJSON sink, and safe
emit helpers that never raise uncaught exceptions.
"""

from cellcalc.logging.events import (
    CalcEvent,
    EventLevel,
    EventType,
    configure_from_config,
    configure_sink,
    emit,
    emit_error,
    emit_info,
    emit_warning,
    error_code_for,
    redact_context,
)
from cellcalc.logging.sink import EventSink

__all__ = [
    "CalcEvent",
    "EventLevel",
    "EventSink",
    "EventType",
    "configure_from_config",
    "configure_sink",
    "emit",
    "emit_error",
    "emit_info",
    "emit_warning",
    "error_code_for",
    "redact_context",
]

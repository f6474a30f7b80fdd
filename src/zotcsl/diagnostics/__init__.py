"""Advisory diagnostics and JSONL run logging."""

from zotcsl.diagnostics.collector import DiagnosticCollector, emit
from zotcsl.diagnostics.logger import DiagnosticLogger, generate_run_id
from zotcsl.diagnostics.models import (
    INVALID_CREATOR,
    INVALID_CREATOR_TYPE,
    ORPHAN_OVERLAY,
    UNKNOWN_FIELD,
    UNKNOWN_TYPE,
    UNPARSEABLE_DATE,
    Diagnostic,
    LogEvent,
)

__all__ = [
    "INVALID_CREATOR",
    "INVALID_CREATOR_TYPE",
    "ORPHAN_OVERLAY",
    "UNKNOWN_FIELD",
    "UNKNOWN_TYPE",
    "UNPARSEABLE_DATE",
    "Diagnostic",
    "DiagnosticCollector",
    "DiagnosticLogger",
    "LogEvent",
    "emit",
    "generate_run_id",
]

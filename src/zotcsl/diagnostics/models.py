"""Diagnostic and log event data models."""

from dataclasses import dataclass
from dataclasses import field as dataclass_field
from typing import Any

__all__ = [
    "INVALID_CREATOR",
    "INVALID_CREATOR_TYPE",
    "ORPHAN_OVERLAY",
    "UNKNOWN_FIELD",
    "UNKNOWN_TYPE",
    "UNPARSEABLE_DATE",
    "Diagnostic",
    "LogEvent",
]

# Diagnostic codes
INVALID_CREATOR = "InvalidCreator"
INVALID_CREATOR_TYPE = "InvalidCreatorType"
ORPHAN_OVERLAY = "OrphanOverlay"
UNKNOWN_FIELD = "UnknownField"
UNKNOWN_TYPE = "UnknownType"
UNPARSEABLE_DATE = "UnparseableDate"


@dataclass(frozen=True)
class Diagnostic:
    """Advisory report of a non-fatal conversion anomaly.

    Attributes
    ----------
    code : str
        One of the diagnostic codes above.
    message : str
        Human-readable description.
    level : str
        Log level ("DEBUG", "INFO", "WARN").
    field : str | None
        Item field or CSL variable concerned.
    data : dict[str, Any]
        Extra context.
    """

    code: str
    message: str
    level: str = "WARN"
    field: str | None = None
    data: dict[str, Any] = dataclass_field(default_factory=dict)


@dataclass
class LogEvent:
    """Structured log event.

    Attributes
    ----------
    ts : str
        ISO8601 timestamp with microseconds (UTC).
    run_id : str
        Unique run identifier.
    level : str
        Log level ("DEBUG", "INFO", "WARN", "ERROR").
    event : str
        Event type identifier.
    data : dict[str, Any]
        Event-specific data payload.
    record : str | None
        Record identifier if event is record-specific.
    """

    ts: str
    run_id: str
    level: str
    event: str
    data: dict[str, Any]
    record: str | None = None

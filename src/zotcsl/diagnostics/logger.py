"""Structured JSONL logger for conversion runs.

Provides append-only structured event logging to JSONL files with
a persistent file handle for efficient I/O.
"""

import json
import secrets
from collections.abc import Iterable
from dataclasses import asdict
from pathlib import Path
from typing import Any

from zotcsl.diagnostics.models import Diagnostic, LogEvent
from zotcsl.utils import get_iso_timestamp

__all__ = ["DiagnosticLogger", "generate_run_id"]


def generate_run_id() -> str:
    """Generate unique run identifier.

    Returns
    -------
    str
        Run ID in format: ISO8601_timestamp__random_suffix.
    """
    return f"{get_iso_timestamp()}__{secrets.token_hex(4)}"


class DiagnosticLogger:
    """JSONL event logger with persistent file handle.

    Writes structured log events to a JSONL file (one JSON object per line).
    Events are append-only and flushed after each write.

    Attributes
    ----------
    run_id : str
        Unique run identifier.
    log_path : Path
        Path to JSONL log file.
    """

    def __init__(self, run_id: str, log_path: Path) -> None:
        """Initialize logger and open file handle.

        Parameters
        ----------
        run_id : str
            Unique run identifier.
        log_path : Path
            Path to JSONL log file.
        """
        self.run_id = run_id
        self.log_path = log_path

        self.log_path.parent.mkdir(parents=True, exist_ok=True)
        self._file = self.log_path.open("a", encoding="utf-8")

    def __enter__(self) -> "DiagnosticLogger":
        """Enter context manager."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Exit context manager and close file."""
        self.close()

    def close(self) -> None:
        """Flush and close the log file handle."""
        if not self._file.closed:
            self._file.flush()
            self._file.close()

    def event(
        self,
        event_type: str,
        data: dict[str, Any] | None = None,
        level: str = "INFO",
        record: str | None = None,
    ) -> None:
        """Write structured event to log.

        Parameters
        ----------
        event_type : str
            Event type identifier (e.g., "record_converted").
        data : dict[str, Any] | None, optional
            Event-specific data payload.
        level : str, optional
            Log level ("DEBUG", "INFO", "WARN", "ERROR").
        record : str | None, optional
            Record identifier if event is record-specific.
        """
        log_event = LogEvent(
            ts=get_iso_timestamp(),
            run_id=self.run_id,
            level=level,
            event=event_type,
            data=data or {},
            record=record,
        )
        json.dump(asdict(log_event), self._file, ensure_ascii=False, separators=(",", ":"))
        self._file.write("\n")
        self._file.flush()

    def run_started(self, command: str, parameters: dict[str, Any]) -> None:
        """Log run_started event."""
        self.event("run_started", data={"command": command, "parameters": parameters})

    def run_finished(self, status: str, records_processed: int, records_failed: int = 0) -> None:
        """Log run_finished event.

        Parameters
        ----------
        status : str
            Run status ("success", "failed", "partial").
        records_processed : int
            Records converted successfully.
        records_failed : int, optional
            Records that raised a conversion error.
        """
        self.event(
            "run_finished",
            data={
                "status": status,
                "records_processed": records_processed,
                "records_failed": records_failed,
            },
        )

    def diagnostics(self, items: Iterable[Diagnostic], record: str | None = None) -> None:
        """Log one ``diagnostic`` event per collected diagnostic."""
        for diagnostic in items:
            data: dict[str, Any] = {"code": diagnostic.code, "message": diagnostic.message}
            if diagnostic.field is not None:
                data["field"] = diagnostic.field
            if diagnostic.data:
                data["context"] = diagnostic.data
            self.event("diagnostic", data=data, level=diagnostic.level, record=record)

    def error(self, exception_class: str, message: str, record: str | None = None) -> None:
        """Log error event.

        Parameters
        ----------
        exception_class : str
            Exception class name.
        message : str
            Error message.
        record : str | None, optional
            Record identifier if error is record-specific.
        """
        self.event(
            "error",
            data={"exception_class": exception_class, "message": message},
            level="ERROR",
            record=record,
        )

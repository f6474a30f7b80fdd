"""In-memory diagnostic sink passed to converters."""

from collections.abc import Iterator
from typing import Any

from zotcsl.diagnostics.models import Diagnostic

__all__ = ["DiagnosticCollector", "emit"]


class DiagnosticCollector:
    """Append-only list of diagnostics for one or more conversions."""

    def __init__(self) -> None:
        self._items: list[Diagnostic] = []

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def add(self, diagnostic: Diagnostic) -> None:
        """Append a diagnostic."""
        self._items.append(diagnostic)

    def codes(self) -> list[str]:
        """Return diagnostic codes in emission order."""
        return [d.code for d in self._items]

    def clear(self) -> None:
        """Drop all collected diagnostics."""
        self._items.clear()


def emit(
    sink: DiagnosticCollector | None,
    code: str,
    message: str,
    *,
    field: str | None = None,
    level: str = "WARN",
    **data: Any,
) -> None:
    """Record a diagnostic if a sink was supplied.

    Parameters
    ----------
    sink : DiagnosticCollector | None
        Destination; diagnostics are dropped when None.
    code : str
        Diagnostic code.
    message : str
        Human-readable description.
    field : str | None, optional
        Field or variable concerned.
    level : str, optional
        Log level, by default "WARN".
    **data : Any
        Extra context.
    """
    if sink is None:
        return
    sink.add(Diagnostic(code=code, message=message, level=level, field=field, data=data))

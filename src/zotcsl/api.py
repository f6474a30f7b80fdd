"""Public API for batch conversion of JSON files.

This module provides the high-level helpers used by the CLI:
- Reading item or CSL-JSON records from JSON / JSONL files
- Converting record batches with per-record error isolation
- Writing converted records back to JSON / JSONL
"""

import json
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from zotcsl.config import ConversionConfig, ConversionOptions
from zotcsl.convert import item_from_csl_json, item_to_csl_json
from zotcsl.diagnostics import Diagnostic, DiagnosticCollector, DiagnosticLogger
from zotcsl.errors import ConversionError
from zotcsl.mappings import CslMaps, default_maps
from zotcsl.validation import RecordValidationError, validate_csl_item, validate_item_json

__all__ = [
    "BatchResult",
    "InputError",
    "convert_from_csl",
    "convert_to_csl",
    "read_records",
    "write_records",
]


class InputError(Exception):
    """Raised when an input file cannot be read as records."""

    def __init__(
        self,
        message: str,
        file: str | None = None,
    ) -> None:
        """Initialize input error.

        Parameters
        ----------
        message : str
            Error message.
        file : str | None, optional
            File where error occurred.
        """
        super().__init__(message)
        self.file = file


@dataclass
class BatchResult:
    """Outcome of converting a batch of records.

    Attributes
    ----------
    records : list[dict[str, Any]]
        Converted records, in input order, failures excluded.
    failures : list[tuple[str, str]]
        (record identifier, error message) per failed record.
    diagnostics : dict[str, list[Diagnostic]]
        Record identifier -> diagnostics emitted while converting it.
    """

    records: list[dict[str, Any]] = field(default_factory=list)
    failures: list[tuple[str, str]] = field(default_factory=list)
    diagnostics: dict[str, list[Diagnostic]] = field(default_factory=dict)

    @property
    def status(self) -> str:
        """Return "success", "partial" or "failed"."""
        if not self.failures:
            return "success"
        return "partial" if self.records else "failed"


def read_records(path: str | Path) -> list[dict[str, Any]]:
    """Read records from a JSON or JSONL file.

    A ``.jsonl`` file holds one record per line; any other file holds
    one JSON record or a JSON list of records.

    Parameters
    ----------
    path : str | Path
        Input file.

    Returns
    -------
    list[dict[str, Any]]
        Records.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    InputError
        If the content is not valid JSON or holds non-object records.
    """
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    text = file_path.read_text(encoding="utf-8")
    try:
        if file_path.suffix.lower() == ".jsonl":
            data: Any = [json.loads(line) for line in text.splitlines() if line.strip()]
        else:
            data = json.loads(text)
    except json.JSONDecodeError as e:
        raise InputError(f"Invalid JSON in {file_path.name}: {e}", file=str(file_path)) from e

    records = data if isinstance(data, list) else [data]
    for index, record in enumerate(records):
        if not isinstance(record, dict):
            raise InputError(
                f"Record {index} in {file_path.name} is not a JSON object",
                file=str(file_path),
            )
    return records


def write_records(
    records: list[dict[str, Any]],
    path: str | Path,
    *,
    sort_keys: bool = False,
) -> None:
    """Write records as a JSON list, or one per line for ``.jsonl`` paths.

    Parameters
    ----------
    records : list[dict[str, Any]]
        Records to write.
    path : str | Path
        Output file path. Parent directories are created.
    sort_keys : bool, optional
        Sort object keys for deterministic output, by default False.
    """
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with output_path.open("w", encoding="utf-8") as f:
        if output_path.suffix.lower() == ".jsonl":
            for record in records:
                json.dump(record, f, ensure_ascii=False, sort_keys=sort_keys)
                f.write("\n")
        else:
            json.dump(records, f, ensure_ascii=False, sort_keys=sort_keys, indent=2)
            f.write("\n")


def _record_id(record: dict[str, Any], index: int) -> str:
    record_id = record.get("id", record.get("itemID"))
    return str(record_id) if record_id is not None else f"#{index}"


def _convert_batch(
    records: Iterable[dict[str, Any]],
    convert: Callable[[dict[str, Any], DiagnosticCollector], dict[str, Any]],
    validate: Callable[[Any], None],
    logger: DiagnosticLogger | None,
) -> BatchResult:
    result = BatchResult()
    for index, record in enumerate(records):
        record_id = _record_id(record, index)
        collector = DiagnosticCollector()
        try:
            validate(record)
            converted = convert(record, collector)
        except (ConversionError, RecordValidationError) as e:
            result.failures.append((record_id, str(e)))
            if logger is not None:
                logger.error(type(e).__name__, str(e), record=record_id)
            continue

        result.records.append(converted)
        if len(collector):
            result.diagnostics[record_id] = list(collector)
        if logger is not None:
            logger.diagnostics(collector, record=record_id)
            logger.event("record_converted", record=record_id)
    return result


def convert_to_csl(
    records: Iterable[dict[str, Any]],
    options: ConversionOptions | None = None,
    *,
    config: ConversionConfig | None = None,
    maps: CslMaps | None = None,
    logger: DiagnosticLogger | None = None,
) -> BatchResult:
    """Convert item JSON records to CSL-JSON.

    Records that fail validation or conversion are reported in
    ``BatchResult.failures`` and skipped; the rest are converted.

    Examples
    --------
    >>> result = convert_to_csl([{"itemType": "book", "title": "Middlemarch"}])
    >>> result.records
    [{'type': 'book', 'title': 'Middlemarch'}]
    """
    maps = maps or default_maps()
    return _convert_batch(
        records,
        lambda record, sink: item_to_csl_json(
            record, options, config=config, maps=maps, diagnostics=sink
        ),
        validate_item_json,
        logger,
    )


def convert_from_csl(
    records: Iterable[dict[str, Any]],
    options: ConversionOptions | None = None,
    *,
    config: ConversionConfig | None = None,
    maps: CslMaps | None = None,
    logger: DiagnosticLogger | None = None,
) -> BatchResult:
    """Convert CSL-JSON records to item JSON.

    Records that fail validation or conversion are reported in
    ``BatchResult.failures`` and skipped; the rest are converted.
    """
    maps = maps or default_maps()
    return _convert_batch(
        records,
        lambda record, sink: item_from_csl_json(
            record, options, config=config, maps=maps, diagnostics=sink
        ).to_dict(),
        validate_csl_item,
        logger,
    )

"""Tests for the public API module."""

import json
from pathlib import Path

import pytest

from zotcsl import (
    BatchResult,
    ConversionOptions,
    InputError,
    convert_from_csl,
    convert_to_csl,
    read_records,
    write_records,
)
from zotcsl.diagnostics import UNKNOWN_FIELD, DiagnosticLogger


def _read_events(path: Path) -> list[dict]:
    """Read all JSONL events from file."""
    with path.open() as f:
        return [json.loads(line) for line in f if line.strip()]


# ---------------------------------------------------------------------------
# read_records / write_records
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_read_single_record(tmp_path: Path) -> None:
    """Test a file holding one object yields a one-record list."""
    path = tmp_path / "item.json"
    path.write_text(json.dumps({"itemType": "book"}))

    assert read_records(path) == [{"itemType": "book"}]


@pytest.mark.unit
def test_read_jsonl_skips_blank_lines(tmp_path: Path) -> None:
    """Test JSONL files hold one record per line."""
    path = tmp_path / "items.jsonl"
    path.write_text('{"id": 1}\n\n{"id": 2}\n')

    assert read_records(path) == [{"id": 1}, {"id": 2}]


@pytest.mark.unit
def test_read_missing_file(tmp_path: Path) -> None:
    """Test missing files raise FileNotFoundError."""
    with pytest.raises(FileNotFoundError):
        read_records(tmp_path / "nope.json")


@pytest.mark.unit
@pytest.mark.parametrize(
    ("name", "content", "match"),
    [
        ("bad.json", "{not json", "Invalid JSON"),
        ("bad.jsonl", '{"id": 1}\n[oops\n', "Invalid JSON"),
        ("list.json", '[{"id": 1}, 2]', "Record 1"),
    ],
)
def test_read_invalid_input(tmp_path: Path, name: str, content: str, match: str) -> None:
    """Test unreadable content raises InputError naming the file."""
    path = tmp_path / name
    path.write_text(content)

    with pytest.raises(InputError, match=match) as excinfo:
        read_records(path)

    assert excinfo.value.file == str(path)


@pytest.mark.unit
def test_write_json_and_jsonl(tmp_path: Path) -> None:
    """Test the output format follows the file suffix."""
    records = [{"title": "短編集", "type": "book"}, {"type": "article"}]
    json_path = tmp_path / "out" / "records.json"
    jsonl_path = tmp_path / "out" / "records.jsonl"

    write_records(records, json_path, sort_keys=True)
    write_records(records, jsonl_path)

    assert json.loads(json_path.read_text(encoding="utf-8")) == records
    assert "短編集" in json_path.read_text(encoding="utf-8")
    assert len(jsonl_path.read_text(encoding="utf-8").splitlines()) == 2
    assert read_records(jsonl_path) == records


# ---------------------------------------------------------------------------
# Batch conversion
# ---------------------------------------------------------------------------


@pytest.mark.unit
@pytest.mark.parametrize(
    ("records", "failures", "expected"),
    [
        ([{}], [], "success"),
        ([{}], [("a", "x")], "partial"),
        ([], [("a", "x")], "failed"),
        ([], [], "success"),
    ],
)
def test_batch_status(records: list, failures: list, expected: str) -> None:
    """Test status derives from converted and failed counts."""
    assert BatchResult(records=records, failures=failures).status == expected


@pytest.mark.unit
def test_convert_to_csl_isolates_failures() -> None:
    """Test failing records are reported and the rest converted."""
    result = convert_to_csl(
        [
            {"itemType": "book", "id": "ok", "title": "T"},
            {"itemType": "attachment", "id": "att"},
            {"title": "no type"},
        ]
    )

    assert result.records == [{"id": "ok", "type": "book", "title": "T"}]
    assert [record_id for record_id, _ in result.failures] == ["att", "#2"]
    assert result.status == "partial"


@pytest.mark.unit
def test_convert_from_csl_collects_diagnostics() -> None:
    """Test diagnostics are grouped by record identifier."""
    result = convert_from_csl([{"id": "c1", "type": "book", "title": "T", "foo": "bar"}])

    assert result.records[0]["itemType"] == "book"
    assert result.records[0]["title"] == "T"
    assert [d.code for d in result.diagnostics["c1"]] == [UNKNOWN_FIELD]


@pytest.mark.unit
def test_convert_from_csl_strict_failure() -> None:
    """Test strict mode turns unknown types into failures."""
    result = convert_from_csl(
        [{"id": "h", "type": "hologram"}], ConversionOptions(strict=True)
    )

    assert result.records == []
    assert result.status == "failed"
    assert result.failures[0][0] == "h"


@pytest.mark.unit
def test_convert_from_csl_validation_failure() -> None:
    """Test schema violations are reported as failures."""
    result = convert_from_csl([{"type": "book", "author": "Eliot"}])

    assert result.status == "failed"
    assert result.failures[0][0] == "#0"


@pytest.mark.unit
def test_batch_logging(tmp_path: Path) -> None:
    """Test per-record events reach the run log."""
    log_path = tmp_path / "run.jsonl"
    with DiagnosticLogger("test_run", log_path) as logger:
        convert_from_csl(
            [{"id": "ok", "type": "book", "foo": 1}, {"id": "bad", "title": "T"}],
            logger=logger,
        )

    events = _read_events(log_path)

    assert [(e["event"], e["record"]) for e in events] == [
        ("diagnostic", "ok"),
        ("record_converted", "ok"),
        ("error", "bad"),
    ]
    assert events[2]["data"]["exception_class"] == "MissingTypeError"

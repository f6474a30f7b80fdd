"""JSON Schema validation of input records."""

import json
from functools import lru_cache
from pathlib import Path
from typing import Any

from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError, best_match

__all__ = [
    "SCHEMAS_DIR",
    "RecordValidationError",
    "validate_csl_item",
    "validate_item_json",
]

SCHEMAS_DIR = Path(__file__).parent / "schemas"


class RecordValidationError(ValueError):
    """Raised when a record does not match its JSON Schema."""

    def __init__(self, message: str, path: str = "", errors: list[str] | None = None) -> None:
        """Initialize validation error.

        Parameters
        ----------
        message : str
            Message of the most relevant schema error.
        path : str
            JSON path of that error (e.g. '$.issued.date-parts').
        errors : list[str] | None, optional
            Messages of all schema errors.
        """
        super().__init__(f"{path}: {message}" if path else message)
        self.path = path
        self.errors = errors or [message]


@lru_cache(maxsize=None)
def _validator(schema_name: str) -> Draft202012Validator:
    with (SCHEMAS_DIR / schema_name).open(encoding="utf-8") as f:
        schema = json.load(f)
    Draft202012Validator.check_schema(schema)
    return Draft202012Validator(schema)


def _validate(record: Any, schema_name: str) -> None:
    validator = _validator(schema_name)
    errors = list(validator.iter_errors(record))
    if not errors:
        return
    error: ValidationError = best_match(errors)
    raise RecordValidationError(
        error.message,
        path=error.json_path,
        errors=[e.message for e in errors],
    )


def validate_csl_item(record: Any) -> None:
    """Validate a CSL-JSON record.

    A missing ``type`` is left to the converter, which raises
    ``MissingTypeError``.

    Raises
    ------
    RecordValidationError
        If the record is not an object or has malformed name or date
        variables.
    """
    _validate(record, "csl_item.schema.json")


def validate_item_json(record: Any) -> None:
    """Validate item JSON.

    Raises
    ------
    RecordValidationError
        If the record is not an object with an ``itemType`` or has
        malformed creators or overlays.
    """
    _validate(record, "item.schema.json")

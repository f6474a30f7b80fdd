"""Item field and creator-type registry.

The converters only consume the registry through the ``FieldRegistry``
protocol. ``ItemSchema`` is the concrete implementation, loaded from a
Zotero-style schema JSON file (item types with ordered fields, optional
``baseField`` aliases, and ordered creator types with one primary type).
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Protocol

__all__ = [
    "DEFAULT_SCHEMA_PATH",
    "FieldRegistry",
    "ItemSchema",
    "SchemaError",
    "default_schema",
    "load_schema",
]

DEFAULT_SCHEMA_PATH = Path(__file__).parent / "schema.json"


class SchemaError(ValueError):
    """Raised when a schema file is malformed."""


class FieldRegistry(Protocol):
    """Read-only view of item types, fields, and creator types."""

    def item_types(self) -> tuple[str, ...]: ...

    def item_type_exists(self, item_type: str) -> bool: ...

    def field_exists(self, name: str) -> bool: ...

    def is_base_field(self, name: str) -> bool: ...

    def is_date_field(self, name: str) -> bool: ...

    def is_extended_field(self, name: str) -> bool: ...

    def resolve_typed_field(self, item_type: str, base_field: str) -> str | None: ...

    def base_field_for(self, item_type: str, field: str) -> str | None: ...

    def is_valid_for_type(self, field: str, item_type: str) -> bool: ...

    def item_type_fields(self, item_type: str) -> tuple[str, ...]: ...

    def creator_type_exists(self, creator_type: str) -> bool: ...

    def primary_creator_type(self, item_type: str) -> str | None: ...

    def is_valid_creator_type(self, creator_type: str, item_type: str) -> bool: ...


class ItemSchema:
    """Registry built from a parsed schema document.

    Attributes
    ----------
    version : int
        Schema version declared by the document.
    """

    __slots__ = (
        "version",
        "_fields_by_type",
        "_base_by_type",
        "_typed_by_type",
        "_creator_types_by_type",
        "_primary_by_type",
        "_all_fields",
        "_base_fields",
        "_all_creator_types",
        "_date_fields",
        "_extended_fields",
    )

    def __init__(self, data: dict[str, Any]) -> None:
        """Index a schema document.

        Parameters
        ----------
        data : dict[str, Any]
            Parsed schema JSON with ``itemTypes``, ``dateFields`` and
            ``extendedFields`` keys.

        Raises
        ------
        SchemaError
            If an item type entry is missing required keys.
        """
        self.version = int(data.get("version", 1))
        self._fields_by_type: dict[str, tuple[str, ...]] = {}
        self._base_by_type: dict[str, dict[str, str]] = {}
        self._typed_by_type: dict[str, dict[str, str]] = {}
        self._creator_types_by_type: dict[str, tuple[str, ...]] = {}
        self._primary_by_type: dict[str, str | None] = {}

        all_fields: set[str] = set()
        base_fields: set[str] = set()
        all_creator_types: set[str] = set()

        for entry in data.get("itemTypes", []):
            try:
                item_type = entry["itemType"]
                field_entries = entry["fields"]
                creator_entries = entry["creatorTypes"]
            except KeyError as e:
                raise SchemaError(f"Item type entry missing key {e}: {entry!r}") from e

            fields: list[str] = []
            base_map: dict[str, str] = {}
            typed_map: dict[str, str] = {}
            for field_entry in field_entries:
                name = field_entry["field"]
                fields.append(name)
                all_fields.add(name)
                base = field_entry.get("baseField")
                if base:
                    base_map[name] = base
                    typed_map[base] = name
                    base_fields.add(base)

            creator_types: list[str] = []
            primary = None
            for creator_entry in creator_entries:
                name = creator_entry["creatorType"]
                creator_types.append(name)
                all_creator_types.add(name)
                if creator_entry.get("primary"):
                    primary = name

            if primary is None and creator_types:
                primary = creator_types[0]

            self._fields_by_type[item_type] = tuple(fields)
            self._base_by_type[item_type] = base_map
            self._typed_by_type[item_type] = typed_map
            self._creator_types_by_type[item_type] = tuple(creator_types)
            self._primary_by_type[item_type] = primary

        self._all_fields = frozenset(all_fields | base_fields)
        self._base_fields = frozenset(base_fields)
        self._all_creator_types = frozenset(all_creator_types)
        self._date_fields = frozenset(data.get("dateFields", []))
        self._extended_fields = frozenset(data.get("extendedFields", []))

    def item_types(self) -> tuple[str, ...]:
        """Return all item types in schema order."""
        return tuple(self._fields_by_type)

    def item_type_exists(self, item_type: str) -> bool:
        """Check whether an item type is defined."""
        return item_type in self._fields_by_type

    def field_exists(self, name: str) -> bool:
        """Check whether a field (including base-only fields) is defined."""
        return name in self._all_fields

    def is_base_field(self, name: str) -> bool:
        """Check whether a field has type-specific aliases."""
        return name in self._base_fields

    def is_date_field(self, name: str) -> bool:
        """Check whether a field holds a date."""
        if name in self._date_fields:
            return True
        return any(
            base_map.get(name) in self._date_fields for base_map in self._base_by_type.values()
        )

    def is_extended_field(self, name: str) -> bool:
        """Check whether a field is outside the portable base schema."""
        return name in self._extended_fields

    def resolve_typed_field(self, item_type: str, base_field: str) -> str | None:
        """Return the item type's field for a base field.

        Parameters
        ----------
        item_type : str
            Internal item type.
        base_field : str
            Base field name (e.g. 'publisher').

        Returns
        -------
        str | None
            Type-specific alias (e.g. 'university' for a thesis), the base
            field itself when the type carries it directly, or None.
        """
        typed = self._typed_by_type.get(item_type, {}).get(base_field)
        if typed:
            return typed
        if base_field in self._fields_by_type.get(item_type, ()):
            return base_field
        return None

    def base_field_for(self, item_type: str, field: str) -> str | None:
        """Return the base field behind a type-specific alias, if any."""
        return self._base_by_type.get(item_type, {}).get(field)

    def is_valid_for_type(self, field: str, item_type: str) -> bool:
        """Check whether a field belongs to an item type."""
        return field in self._fields_by_type.get(item_type, ())

    def item_type_fields(self, item_type: str) -> tuple[str, ...]:
        """Return the ordered fields of an item type."""
        return self._fields_by_type.get(item_type, ())

    def creator_type_exists(self, creator_type: str) -> bool:
        """Check whether a creator type is defined for any item type."""
        return creator_type in self._all_creator_types

    def primary_creator_type(self, item_type: str) -> str | None:
        """Return the primary creator type of an item type."""
        return self._primary_by_type.get(item_type)

    def is_valid_creator_type(self, creator_type: str, item_type: str) -> bool:
        """Check whether a creator type is allowed on an item type."""
        return creator_type in self._creator_types_by_type.get(item_type, ())


def load_schema(path: str | Path | None = None) -> ItemSchema:
    """Load a schema file.

    Parameters
    ----------
    path : str | Path | None, optional
        Schema JSON path. Defaults to the bundled schema.

    Returns
    -------
    ItemSchema
        Indexed registry.

    Raises
    ------
    FileNotFoundError
        If the schema file does not exist.
    SchemaError
        If the schema file is malformed.
    """
    schema_path = Path(path) if path is not None else DEFAULT_SCHEMA_PATH
    with schema_path.open(encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise SchemaError(f"Invalid schema JSON in {schema_path.name}: {e}") from e
    return ItemSchema(data)


@lru_cache(maxsize=1)
def default_schema() -> ItemSchema:
    """Return the bundled schema, loaded once per process."""
    return load_schema()

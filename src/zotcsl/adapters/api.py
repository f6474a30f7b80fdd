"""Item JSON -> web API record adapter."""

import secrets
from datetime import UTC, datetime
from typing import Any

from zotcsl.diagnostics import (
    INVALID_CREATOR,
    INVALID_CREATOR_TYPE,
    UNKNOWN_FIELD,
    UNKNOWN_TYPE,
    DiagnosticCollector,
    emit,
)
from zotcsl.models import CreatorName, Item
from zotcsl.registry import FieldRegistry

__all__ = ["FALLBACK_API_ITEM_TYPE", "generate_object_key", "item_to_api_json"]

FALLBACK_API_ITEM_TYPE = "webpage"

OBJECT_KEY_CHARS = "23456789ABCDEFGHIJKLMNPQRSTUVWXYZ"
OBJECT_KEY_LENGTH = 8

# Translator output keys that never reach the API
_SKIPPED_KEYS = frozenset({"complete", "itemID", "id", "attachments", "seeAlso", "multi"})


def generate_object_key() -> str:
    """Generate a random 8-character object key."""
    return "".join(secrets.choice(OBJECT_KEY_CHARS) for _ in range(OBJECT_KEY_LENGTH))


def _api_creators(
    creators: list[dict[str, Any]],
    registry: FieldRegistry,
    diagnostics: DiagnosticCollector | None,
) -> list[dict[str, Any]]:
    result = []
    for index, creator in enumerate(creators):
        parts = CreatorName.from_dict(creator)
        if not parts.has_name():
            emit(diagnostics, INVALID_CREATOR, f"Dropping empty creator {index}", index=index)
            continue

        if parts.name or not parts.first_name:
            new_creator: dict[str, Any] = {"name": parts.name or parts.last_name}
        else:
            new_creator = {"firstName": parts.first_name, "lastName": parts.last_name or ""}

        creator_type = creator.get("creatorType")
        if creator_type and registry.creator_type_exists(creator_type):
            new_creator["creatorType"] = creator_type
        else:
            if creator_type:
                emit(
                    diagnostics,
                    INVALID_CREATOR_TYPE,
                    f"Invalid creator type '{creator_type}'; falling back to author",
                    index=index,
                )
            new_creator["creatorType"] = "author"
        result.append(new_creator)
    return result


def _api_tags(tags: list[Any]) -> list[dict[str, Any]]:
    result = []
    for tag in tags:
        if isinstance(tag, dict):
            tag = tag.get("tag") or tag.get("name")
            if not tag:
                continue
        elif tag == "":
            continue
        result.append({"tag": str(tag), "type": 1})
    return result


def _api_notes(notes: list[Any], parent_key: str) -> list[dict[str, Any]]:
    result = []
    for note in notes:
        if isinstance(note, dict):
            note = note.get("note")
            if not note:
                continue
        result.append({"itemType": "note", "parentItem": parent_key, "note": str(note)})
    return result


def item_to_api_json(
    item: Item | dict[str, Any],
    registry: FieldRegistry,
    diagnostics: DiagnosticCollector | None = None,
) -> list[dict[str, Any]]:
    """Convert translator item JSON to web API records.

    Parameters
    ----------
    item : Item | dict[str, Any]
        Item or translator item JSON.
    registry : FieldRegistry
        Registry used to validate fields and creator types.
    diagnostics : DiagnosticCollector | None, optional
        Sink for dropped data.

    Returns
    -------
    list[dict[str, Any]]
        The item record (new key, version 0) followed by one record per
        child note.
    """
    data = item.to_dict() if isinstance(item, Item) else item

    item_type = data.get("itemType")
    if not item_type or not registry.item_type_exists(item_type):
        emit(
            diagnostics,
            UNKNOWN_TYPE,
            f"Invalid item type '{item_type}'; using '{FALLBACK_API_ITEM_TYPE}'",
            field="itemType",
        )
        item_type = FALLBACK_API_ITEM_TYPE

    new_item: dict[str, Any] = {"key": generate_object_key(), "version": 0}
    records = [new_item]

    for field, value in data.items():
        if field in _SKIPPED_KEYS:
            continue

        if field == "itemType":
            new_item["itemType"] = item_type
        elif field == "creators":
            new_item["creators"] = _api_creators(value or [], registry, diagnostics)
        elif field == "tags":
            new_item["tags"] = _api_tags(value or [])
        elif field == "notes":
            records.extend(_api_notes(value or [], new_item["key"]))
        elif field == "note" and item_type == "note":
            new_item["note"] = str(value)
        elif registry.field_exists(field):
            if not isinstance(value, str):
                if value or value == 0:
                    value = str(value)
                else:
                    continue

            typed = registry.resolve_typed_field(item_type, field)
            if registry.is_base_field(field) and typed and typed != field:
                # Explicit type-specific values win over base values
                if not new_item.get(typed):
                    new_item[typed] = value
                continue

            if registry.is_valid_for_type(field, item_type):
                if field == "accessDate" and value == "CURRENT_TIMESTAMP":
                    value = datetime.now(UTC).strftime("%Y-%m-%dT%H:%M:%SZ")
                new_item[field] = value
            else:
                emit(
                    diagnostics,
                    UNKNOWN_FIELD,
                    f"Field '{field}' is not valid for '{item_type}'",
                    level="INFO",
                    field=field,
                )
        else:
            emit(diagnostics, UNKNOWN_FIELD, f"Discarded unknown field '{field}'", field=field)

    return records

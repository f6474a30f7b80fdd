"""Item JSON -> legacy export format adapter, and first-creator lookup."""

import copy
import secrets
from typing import Any

from zotcsl.models import Item
from zotcsl.registry import FieldRegistry

__all__ = ["get_first_creator", "item_to_legacy_export_format", "random_string"]

RANDOM_STRING_CHARS = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"


def random_string(length: int = 6) -> str:
    """Generate a random alphanumeric string."""
    return "".join(secrets.choice(RANDOM_STRING_CHARS) for _ in range(length))


def item_to_legacy_export_format(
    item: Item | dict[str, Any], registry: FieldRegistry
) -> dict[str, Any]:
    """Convert item JSON to the record shape older export code expects.

    Type-specific fields are also copied to their base field, and every
    field is listed under ``uniqueFields``. ``versionNumber`` becomes
    ``version``, single-field creators use ``lastName`` with
    ``fieldMode = 1``, and random ``itemID``/``key`` values are assigned.

    Parameters
    ----------
    item : Item | dict[str, Any]
        Item or item JSON. Not modified.
    registry : FieldRegistry
        Registry providing base fields.

    Returns
    -------
    dict[str, Any]
        New legacy record.
    """
    record = copy.deepcopy(item.to_dict() if isinstance(item, Item) else item)
    item_type = record.get("itemType", "")

    unique_fields: dict[str, Any] = {}
    for field, value in list(record.items()):
        if not registry.is_valid_for_type(field, item_type):
            continue
        base = registry.base_field_for(item_type, field)
        if base:
            record[base] = value
            unique_fields[base] = value
        else:
            unique_fields[field] = value
    record["uniqueFields"] = unique_fields

    record["itemID"] = random_string(6)
    record["key"] = random_string(6)

    # Older code reads the program version from "version"
    record.pop("version", None)
    if record.get("versionNumber"):
        record["version"] = unique_fields["version"] = record.pop("versionNumber")

    creators = record.get("creators") or []
    for creator in creators:
        if creator.get("name"):
            creator["fieldMode"] = 1
            creator["lastName"] = creator.pop("name")
    record["creators"] = creators

    record["sourceItemKey"] = record.get("parentItem")

    tags = record.get("tags") or []
    for tag in tags:
        if isinstance(tag, dict) and not tag.get("type"):
            tag["type"] = 0
    record["tags"] = tags

    record["seeAlso"] = []

    if record.get("contentType"):
        record["mimeType"] = unique_fields["mimeType"] = record["contentType"]
    if record.get("note"):
        unique_fields["note"] = record["note"]

    return record


def get_first_creator(
    item: Item | dict[str, Any], registry: FieldRegistry
) -> dict[str, Any] | None:
    """Return the best single first creator of item JSON.

    Parameters
    ----------
    item : Item | dict[str, Any]
        Item or item JSON with ``itemType`` and ``creators``.
    registry : FieldRegistry
        Registry providing the primary creator type.

    Returns
    -------
    dict[str, Any] | None
        First creator of the primary type (or ``author``), else the first
        editor, else None. Creator order is otherwise ignored.
    """
    data = item.to_dict() if isinstance(item, Item) else item
    primary = registry.primary_creator_type(data.get("itemType", ""))
    creators = data.get("creators") or []

    for creator in creators:
        if creator.get("creatorType") in (primary, "author"):
            return creator
    for creator in creators:
        if creator.get("creatorType") == "editor":
            return creator
    return None

"""Internal item data models.

An item is a typed bag of fields plus an ordered creator list and a
per-field language overlay. Dates are stored as strings in fields and
only parsed when converted.
"""

from dataclasses import dataclass, field
from typing import Any

__all__ = [
    "Creator",
    "CreatorName",
    "Item",
    "MultiOverlay",
]

# Top-level item JSON keys that are not item fields
_RESERVED_KEYS = frozenset(
    {"itemType", "creators", "multi", "id", "itemID", "seeAlso", "note", "tags", "notes"}
)


@dataclass
class MultiOverlay:
    """Per-field language overlay.

    Attributes
    ----------
    main : dict[str, str]
        Field name -> preferred language tag of the field's plain value.
    keys : dict[str, dict[str, str]]
        Field name -> language tag -> alternate value.
    """

    main: dict[str, str] = field(default_factory=dict)
    keys: dict[str, dict[str, str]] = field(default_factory=dict)

    def is_empty(self) -> bool:
        """Check whether the overlay carries no entries."""
        return not self.main and not self.keys

    def fields(self) -> set[str]:
        """Return all field names referenced by the overlay."""
        return set(self.main) | set(self.keys)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the JSON shape (``main`` / ``_keys``)."""
        return {
            "main": dict(self.main),
            "_keys": {name: dict(variants) for name, variants in self.keys.items()},
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "MultiOverlay":
        """Build from the JSON shape, tolerating missing parts."""
        if not data:
            return cls()
        return cls(
            main={k: v for k, v in (data.get("main") or {}).items() if v},
            keys={k: dict(v) for k, v in (data.get("_keys") or {}).items() if v},
        )


@dataclass
class CreatorName:
    """Name parts of a creator or of one of its language variants.

    Attributes
    ----------
    last_name : str | None
        Family name (two-field form).
    first_name : str | None
        Given name (two-field form).
    name : str | None
        Single-field literal name, exclusive with the two-field form.
    """

    last_name: str | None = None
    first_name: str | None = None
    name: str | None = None

    def has_name(self) -> bool:
        """Check whether any name part is set."""
        return bool(self.last_name or self.first_name or self.name)

    def to_dict(self) -> dict[str, str]:
        """Convert to item JSON name keys."""
        if self.name:
            return {"name": self.name}
        data: dict[str, str] = {}
        if self.last_name is not None:
            data["lastName"] = self.last_name
        if self.first_name is not None:
            data["firstName"] = self.first_name
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CreatorName":
        """Build from item JSON name keys.

        A legacy ``fieldMode = 1`` creator stores its literal name in
        ``lastName``.
        """
        if data.get("name"):
            return cls(name=data["name"])
        if data.get("fieldMode") == 1 and data.get("lastName"):
            return cls(name=data["lastName"])
        return cls(last_name=data.get("lastName"), first_name=data.get("firstName"))


@dataclass
class Creator(CreatorName):
    """A creator of an item.

    Attributes
    ----------
    creator_type : str
        Role tag (e.g. 'author', 'editor').
    multi_main : str | None
        Language tag of the plain name.
    multi_keys : dict[str, CreatorName]
        Language tag -> alternate name.
    """

    creator_type: str = "author"
    multi_main: str | None = None
    multi_keys: dict[str, CreatorName] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to item JSON."""
        data: dict[str, Any] = {"creatorType": self.creator_type}
        data.update(super().to_dict())
        if self.multi_main or self.multi_keys:
            multi: dict[str, Any] = {
                "_key": {lang: variant.to_dict() for lang, variant in self.multi_keys.items()}
            }
            if self.multi_main:
                multi["main"] = self.multi_main
            data["multi"] = multi
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Creator":
        """Build from item JSON."""
        base = CreatorName.from_dict(data)
        multi = data.get("multi") or {}
        return cls(
            last_name=base.last_name,
            first_name=base.first_name,
            name=base.name,
            creator_type=data.get("creatorType") or "author",
            multi_main=multi.get("main") or None,
            multi_keys={
                lang: CreatorName.from_dict(variant)
                for lang, variant in (multi.get("_key") or {}).items()
            },
        )


@dataclass
class Item:
    """Internal bibliographic item.

    Attributes
    ----------
    item_type : str
        Item type tag from the registry vocabulary.
    fields : dict[str, Any]
        Field name -> value. Date fields hold strings.
    creators : list[Creator]
        Ordered creators.
    multi : MultiOverlay
        Per-field language overlay.
    item_id : str | int | None
        Caller-supplied identifier, copied to the CSL ``id``.
    see_also : list[str]
        Related item URIs.
    note : str | None
        Note HTML for ``note`` items.
    tags : list[Any]
        Tags as supplied (strings or tag objects).
    notes : list[Any]
        Child notes as supplied (strings or note objects).
    """

    item_type: str
    fields: dict[str, Any] = field(default_factory=dict)
    creators: list[Creator] = field(default_factory=list)
    multi: MultiOverlay = field(default_factory=MultiOverlay)
    item_id: str | int | None = None
    see_also: list[str] = field(default_factory=list)
    note: str | None = None
    tags: list[Any] = field(default_factory=list)
    notes: list[Any] = field(default_factory=list)

    def orphan_multi_fields(self) -> set[str]:
        """Return overlay fields without a plain value on the item."""
        return {name for name in self.multi.fields() if not self.fields.get(name)}

    def to_dict(self) -> dict[str, Any]:
        """Convert to item JSON."""
        data: dict[str, Any] = {"itemType": self.item_type}
        if self.item_id is not None:
            data["id"] = self.item_id
        data.update(self.fields)
        data["creators"] = [creator.to_dict() for creator in self.creators]
        if not self.multi.is_empty():
            data["multi"] = self.multi.to_dict()
        if self.see_also:
            data["seeAlso"] = list(self.see_also)
        if self.note is not None:
            data["note"] = self.note
        if self.tags:
            data["tags"] = list(self.tags)
        if self.notes:
            data["notes"] = list(self.notes)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Item":
        """Build from item JSON.

        Parameters
        ----------
        data : dict[str, Any]
            Item JSON with an ``itemType`` key.

        Returns
        -------
        Item
            Parsed item.

        Raises
        ------
        KeyError
            If ``itemType`` is missing.
        """
        item_id = data.get("id", data.get("itemID"))
        return cls(
            item_type=data["itemType"],
            fields={k: v for k, v in data.items() if k not in _RESERVED_KEYS},
            creators=[Creator.from_dict(c) for c in data.get("creators") or []],
            multi=MultiOverlay.from_dict(data.get("multi")),
            item_id=item_id,
            see_also=list(data.get("seeAlso") or []),
            note=data.get("note"),
            tags=list(data.get("tags") or []),
            notes=list(data.get("notes") or []),
        )

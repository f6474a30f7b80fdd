"""Portable transform: carry non-CSL item data inside the extra field.

Extended fields (e.g. ``jurisdiction``) and language overlays have no
stable CSL slot. ``encode_item`` moves them into a header at the start of
``extra``::

    mlzsync1:0042{"extrafields":{"jurisdiction":"us"}}
    original extra text

The four (or more) digits give the length of the JSON payload.
``decode_item`` restores the data and removes the header. Both return new
items and leave their input untouched.
"""

import copy
import json
import re
from dataclasses import replace
from typing import Any

from zotcsl.models import CreatorName, Item, MultiOverlay
from zotcsl.registry import FieldRegistry
from zotcsl.utils import lpad

__all__ = ["MLZ_PREFIX", "decode_item", "encode_item", "split_extra_header"]

MLZ_PREFIX = "mlzsync1:"

_HEADER_RE = re.compile(r"^mlzsync1:(\d{4,})(?=\{)")


def split_extra_header(extra: str) -> tuple[dict[str, Any] | None, str]:
    """Split a portable header off an extra value.

    Parameters
    ----------
    extra : str
        Extra field value.

    Returns
    -------
    tuple[dict[str, Any] | None, str]
        (decoded payload or None, remaining extra text)
    """
    m = _HEADER_RE.match(extra)
    if not m:
        return None, extra

    start = m.end()
    end = start + int(m.group(1))
    try:
        payload = json.loads(extra[start:end])
    except json.JSONDecodeError:
        return None, extra
    if not isinstance(payload, dict):
        return None, extra

    rest = extra[end:]
    if rest.startswith("\n"):
        rest = rest[1:]
    return payload, rest


def _name_key(creator: CreatorName) -> tuple[str, str]:
    # A family-only name comes back from CSL as a literal
    if creator.name:
        return creator.name, ""
    return creator.last_name or "", creator.first_name or ""


def _same_name(a: CreatorName, b: CreatorName) -> bool:
    return _name_key(a) == _name_key(b)


def encode_item(item: Item, registry: FieldRegistry) -> Item:
    """Move extended fields and language overlays into ``extra``.

    Parameters
    ----------
    item : Item
        Item to encode.
    registry : FieldRegistry
        Registry naming the extended fields.

    Returns
    -------
    Item
        New item without extended fields or overlays; unchanged content if
        there is nothing to carry.
    """
    _, extra = split_extra_header(str(item.fields.get("extra") or ""))

    extended = {
        name: value
        for name, value in item.fields.items()
        if registry.is_extended_field(name) and value
    }
    fields = {name: value for name, value in item.fields.items() if name not in extended}

    payload: dict[str, Any] = {}
    if extended:
        payload["extrafields"] = extended
    if not item.multi.is_empty():
        payload["multifields"] = item.multi.to_dict()

    # Creator overlays are keyed by name: import regroups creators by role
    creators = []
    multicreators: list[dict[str, Any]] = []
    for creator in item.creators:
        if creator.multi_main or creator.multi_keys:
            multicreators.append(
                {"name": CreatorName.to_dict(creator), "multi": creator.to_dict()["multi"]}
            )
            creator = replace(creator, multi_main=None, multi_keys={})
        else:
            creator = copy.deepcopy(creator)
        creators.append(creator)
    if multicreators:
        payload["multicreators"] = multicreators

    if payload:
        blob = json.dumps(payload, ensure_ascii=False, separators=(",", ":"), sort_keys=True)
        header = f"{MLZ_PREFIX}{lpad(len(blob), '0', 4)}{blob}"
        extra = f"{header}\n{extra}" if extra else header

    if extra:
        fields["extra"] = extra
    else:
        fields.pop("extra", None)

    return replace(item, fields=fields, creators=creators, multi=MultiOverlay())


def decode_item(item: Item) -> Item:
    """Restore data carried in an ``extra`` header.

    Parameters
    ----------
    item : Item
        Item whose ``extra`` may start with a portable header.

    Returns
    -------
    Item
        New item with extended fields, field overlays and creator overlays
        restored and the header removed.
    """
    payload, extra = split_extra_header(str(item.fields.get("extra") or ""))
    if payload is None:
        return copy.deepcopy(item)

    fields = dict(item.fields)
    fields.update(payload.get("extrafields") or {})
    if extra:
        fields["extra"] = extra
    else:
        fields.pop("extra", None)

    multi = copy.deepcopy(item.multi)
    restored = MultiOverlay.from_dict(payload.get("multifields"))
    multi.main.update(restored.main)
    for name, variants in restored.keys.items():
        multi.keys.setdefault(name, {}).update(variants)

    creators = copy.deepcopy(item.creators)
    unmatched = list(creators)
    for entry in payload.get("multicreators") or []:
        wanted = CreatorName.from_dict(entry.get("name") or {})
        creator = next((c for c in unmatched if _same_name(c, wanted)), None)
        if creator is None:
            continue
        unmatched.remove(creator)
        creator_multi = entry.get("multi") or {}
        creator.multi_main = creator_multi.get("main") or None
        creator.multi_keys = {
            lang: CreatorName.from_dict(variant)
            for lang, variant in (creator_multi.get("_key") or {}).items()
        }

    return replace(item, fields=fields, creators=creators, multi=multi)

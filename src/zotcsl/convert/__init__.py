"""Item <-> CSL-JSON converters."""

from zotcsl.convert.export import item_to_csl_json
from zotcsl.convert.extra import extra_to_csl
from zotcsl.convert.forced import apply_forced_fields
from zotcsl.convert.importer import item_from_csl_json
from zotcsl.convert.notes import note_to_title
from zotcsl.convert.recode import decode_item, encode_item

__all__ = [
    "apply_forced_fields",
    "decode_item",
    "encode_item",
    "extra_to_csl",
    "item_from_csl_json",
    "item_to_csl_json",
    "note_to_title",
]

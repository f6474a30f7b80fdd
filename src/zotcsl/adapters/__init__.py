"""One-way adapters from item JSON to other record shapes."""

from zotcsl.adapters.api import generate_object_key, item_to_api_json
from zotcsl.adapters.legacy import get_first_creator, item_to_legacy_export_format

__all__ = [
    "generate_object_key",
    "get_first_creator",
    "item_to_api_json",
    "item_to_legacy_export_format",
]

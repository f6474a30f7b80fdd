"""Shared data types for zotcsl.

CSL-JSON records are plain dicts; only the internal item side is modelled.
"""

from zotcsl.models.items import Creator, CreatorName, Item, MultiOverlay

__all__ = [
    "Creator",
    "CreatorName",
    "Item",
    "MultiOverlay",
]

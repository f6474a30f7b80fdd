"""Field, name, date, and type correspondence tables."""

from zotcsl.mappings.maps import CslMaps, default_maps

__all__ = ["CslMaps", "default_maps"]

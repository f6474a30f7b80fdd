"""Immutable correspondence maps bound to a field registry.

``CslMaps`` bundles the static tables with the lookups derived from a
registry. It is built once and passed to every conversion call; a changed
registry (e.g. a different schema file) needs a fresh ``CslMaps.build``.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from functools import lru_cache
from types import MappingProxyType

from zotcsl.mappings.tables import (
    CSL_DATE_MAPPINGS,
    CSL_FORCE_FIELD_CONTENT,
    CSL_FORCE_REMAP,
    CSL_IMPORT_ONLY_VARIABLES,
    CSL_NAME_MAPPINGS,
    CSL_TEXT_MAPPINGS,
    CSL_TYPE_MAPPINGS,
)
from zotcsl.registry import FieldRegistry, default_schema

__all__ = ["CslMaps", "default_maps"]


@dataclass(frozen=True)
class CslMaps:
    """Read-only correspondence tables for one registry.

    Attributes
    ----------
    registry : FieldRegistry
        Field and creator-type registry the tables are resolved against.
    text : Mapping[str, tuple[str, ...]]
        CSL text variable -> item fields.
    dates : Mapping[str, tuple[str, ...]]
        CSL date variable -> item date fields.
    names : Mapping[str, str]
        Creator type -> CSL name variable.
    types : Mapping[str, str]
        Item type -> CSL type.
    types_reverse : Mapping[str, tuple[str, ...]]
        CSL type -> item types, in registration order.
    fields_reverse : Mapping[str, str]
        Item field (base fields and their type aliases) -> CSL variable.
    force_content : Mapping[str, tuple[tuple[str, str], ...]]
        Item type -> forced (variable, value) operations.
    force_remap : Mapping[str, tuple[tuple[str, str], ...]]
        Item type -> forced (variable, new variable) renames.
    """

    registry: FieldRegistry
    text: Mapping[str, tuple[str, ...]]
    dates: Mapping[str, tuple[str, ...]]
    names: Mapping[str, str]
    types: Mapping[str, str]
    types_reverse: Mapping[str, tuple[str, ...]]
    fields_reverse: Mapping[str, str]
    force_content: Mapping[str, tuple[tuple[str, str], ...]]
    force_remap: Mapping[str, tuple[tuple[str, str], ...]]

    @classmethod
    def build(cls, registry: FieldRegistry) -> "CslMaps":
        """Build maps for a registry.

        Parameters
        ----------
        registry : FieldRegistry
            Registry to resolve type-specific field aliases against.

        Returns
        -------
        CslMaps
            Frozen maps.
        """
        types = {
            item_type: csl_type
            for item_type, csl_type in CSL_TYPE_MAPPINGS.items()
            if registry.item_type_exists(item_type)
        }

        types_reverse: dict[str, list[str]] = {}
        for item_type, csl_type in types.items():
            types_reverse.setdefault(csl_type, []).append(item_type)

        fields_reverse: dict[str, str] = {}
        for mappings in (CSL_TEXT_MAPPINGS, CSL_DATE_MAPPINGS):
            for variable, fields in mappings.items():
                if variable in CSL_IMPORT_ONLY_VARIABLES:
                    continue
                for field in fields:
                    fields_reverse.setdefault(field, variable)

        # Type-specific aliases inherit the variable of their base field
        for item_type in registry.item_types():
            for field in registry.item_type_fields(item_type):
                base = registry.base_field_for(item_type, field)
                if base and base in fields_reverse:
                    fields_reverse.setdefault(field, fields_reverse[base])

        return cls(
            registry=registry,
            text=MappingProxyType(dict(CSL_TEXT_MAPPINGS)),
            dates=MappingProxyType(dict(CSL_DATE_MAPPINGS)),
            names=MappingProxyType(dict(CSL_NAME_MAPPINGS)),
            types=MappingProxyType(types),
            types_reverse=MappingProxyType({k: tuple(v) for k, v in types_reverse.items()}),
            fields_reverse=MappingProxyType(fields_reverse),
            force_content=MappingProxyType(dict(CSL_FORCE_FIELD_CONTENT)),
            force_remap=MappingProxyType(dict(CSL_FORCE_REMAP)),
        )

    def csl_type_for(self, item_type: str) -> str | None:
        """Return the CSL type of an item type."""
        return self.types.get(item_type)

    def export_text_variables(self) -> list[str]:
        """Return text variables written on export, in table order."""
        return [v for v in self.text if v not in CSL_IMPORT_ONLY_VARIABLES]

    def name_variables(self) -> set[str]:
        """Return all CSL name variables."""
        return set(self.names.values())


@lru_cache(maxsize=1)
def default_maps() -> CslMaps:
    """Return maps for the bundled schema, built once per process."""
    return CslMaps.build(default_schema())

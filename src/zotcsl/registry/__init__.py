"""Item type, field, and creator-type registry."""

from zotcsl.registry.schema import (
    DEFAULT_SCHEMA_PATH,
    FieldRegistry,
    ItemSchema,
    SchemaError,
    default_schema,
    load_schema,
)

__all__ = [
    "DEFAULT_SCHEMA_PATH",
    "FieldRegistry",
    "ItemSchema",
    "SchemaError",
    "default_schema",
    "load_schema",
]

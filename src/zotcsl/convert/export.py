"""Item -> CSL-JSON conversion."""

import re
from dataclasses import replace
from typing import Any

from zotcsl.config import ConversionConfig, ConversionOptions
from zotcsl.convert.extra import extra_to_csl
from zotcsl.convert.forced import apply_forced_fields
from zotcsl.convert.notes import note_to_title
from zotcsl.convert.recode import encode_item
from zotcsl.dates import is_multipart, item_date_to_csl, multipart_to_sql
from zotcsl.diagnostics import (
    INVALID_CREATOR,
    ORPHAN_OVERLAY,
    UNKNOWN_FIELD,
    UNPARSEABLE_DATE,
    DiagnosticCollector,
    emit,
)
from zotcsl.errors import UnmappableTypeError
from zotcsl.mappings import CslMaps, default_maps
from zotcsl.mappings.tables import (
    ITEM_METADATA_KEYS,
    LEGACY_FIELD_ALIASES,
    NO_CREATOR_TYPES,
)
from zotcsl.models import Creator, Item
from zotcsl.names import creator_to_csl_name

__all__ = ["item_to_csl_json"]

# First ISBN-10 or ISBN-13 in a field that may hold several
ISBN_RE = re.compile(r"^(?:97[89]-?)?(?:\d-?){9}[\dx](?!-)\b", re.IGNORECASE)
# Jurisdiction codes are stored as a 3-digit length prefix, the code, then
# a display label
JURISDICTION_OFFSET_RE = re.compile(r"^(\d{3})")


def _field_value(item: Item, field: str, maps: CslMaps) -> tuple[str | None, Any]:
    """Find the stored value for a mapped field.

    Returns
    -------
    tuple[str | None, Any]
        (field the value was read from, value)
    """
    value = item.fields.get(field)
    if value:
        return field, value

    legacy = LEGACY_FIELD_ALIASES.get(field)
    if legacy and isinstance(item.fields.get(legacy), str) and item.fields[legacy]:
        return legacy, item.fields[legacy]

    typed = maps.registry.resolve_typed_field(item.item_type, field)
    if typed and typed != field and item.fields.get(typed):
        return typed, item.fields[typed]

    return None, None


def _post_process(field: str, value: str, maps: CslMaps) -> str:
    if field == "ISBN":
        m = ISBN_RE.match(value)
        if m:
            value = m.group(0)
    elif field == "jurisdiction":
        m = JURISDICTION_OFFSET_RE.match(value)
        if m:
            offset = int(m.group(1))
            value = value[3 : offset + 3]
    elif field == "extra":
        value = extra_to_csl(value, maps)

    # Strip enclosing quotes
    if value.startswith('"') and value.find('"', 1) == len(value) - 1:
        value = value[1:-1]
    return value


def _dates_to_sql(item: Item, maps: CslMaps, month_first: bool) -> Item:
    """Reduce multipart date fields to their SQL part."""
    fields = dict(item.fields)
    for name, value in item.fields.items():
        if maps.registry.is_date_field(name) and isinstance(value, str) and is_multipart(value):
            fields[name] = multipart_to_sql(value, month_first)
    return replace(item, fields=fields)


def _report_unknown_fields(
    item: Item, maps: CslMaps, diagnostics: DiagnosticCollector | None
) -> None:
    for name in item.fields:
        if name in ITEM_METADATA_KEYS or name in LEGACY_FIELD_ALIASES.values():
            continue
        if not maps.registry.field_exists(name):
            emit(diagnostics, UNKNOWN_FIELD, f"Unknown item field '{name}'", field=name)


def _report_orphan_overlays(item: Item, diagnostics: DiagnosticCollector | None) -> None:
    for name in sorted(item.orphan_multi_fields()):
        emit(
            diagnostics,
            ORPHAN_OVERLAY,
            f"Overlay for '{name}' has no field value and is not exported",
            field=name,
            level="INFO",
        )


def _export_text(
    item: Item,
    csl_item: dict[str, Any],
    multi: dict[str, dict[str, Any]],
    maps: CslMaps,
    portable: bool,
) -> None:
    for variable in maps.export_text_variables():
        for field in maps.text[variable]:
            source, value = _field_value(item, field, maps)
            if not value:
                continue
            if isinstance(value, (int, float)) and not isinstance(value, bool):
                value = str(value)
            if not isinstance(value, str):
                continue

            csl_item[variable] = _post_process(field, value, maps)

            if not portable and source is not None:
                if item.multi.main.get(source):
                    multi["main"][variable] = item.multi.main[source]
                if item.multi.keys.get(source):
                    multi["_keys"][variable] = dict(item.multi.keys[source])
            break


def _creator_name(creator: Creator, portable: bool) -> dict[str, Any]:
    name = creator_to_csl_name(creator)
    if portable:
        return name

    if creator.multi_main or creator.multi_keys:
        name_multi: dict[str, Any] = {
            "_key": {lang: creator_to_csl_name(v) for lang, v in creator.multi_keys.items()}
        }
        if creator.multi_main:
            name_multi["main"] = creator.multi_main
        name["multi"] = name_multi
    return name


def _export_creators(
    item: Item,
    csl_item: dict[str, Any],
    maps: CslMaps,
    portable: bool,
    diagnostics: DiagnosticCollector | None,
) -> None:
    if item.item_type in NO_CREATOR_TYPES:
        return

    primary = maps.registry.primary_creator_type(item.item_type)
    for index, creator in enumerate(item.creators):
        if creator.creator_type == primary:
            variable = "author"
        else:
            variable = maps.names.get(creator.creator_type)
        if not variable:
            continue

        if item.item_type == "videoRecording":
            variable = "director"

        name = _creator_name(creator, portable)
        if not name.get("family") and not name.get("given") and not name.get("literal"):
            emit(
                diagnostics,
                INVALID_CREATOR,
                f"Creator {index} has no name",
                field=variable,
                index=index,
            )
            continue

        csl_item.setdefault(variable, []).append(name)


def _export_dates(
    item: Item,
    csl_item: dict[str, Any],
    maps: CslMaps,
    config: ConversionConfig,
    diagnostics: DiagnosticCollector | None,
) -> None:
    for variable, fields in maps.dates.items():
        value = None
        for field in fields:
            _, value = _field_value(item, field, maps)
            if value:
                break
        if not value:
            continue

        csl_date = item_date_to_csl(
            str(value),
            accessed="accessDate" in fields,
            month_first=config.month_first,
            use_citeproc=config.use_citeproc_date_parser,
            timezone=config.timezone,
        )
        if "literal" in csl_date:
            emit(
                diagnostics,
                UNPARSEABLE_DATE,
                f"No year found in '{value}'; passing it as a literal",
                level="INFO",
                field=variable,
            )
        csl_item[variable] = csl_date


def item_to_csl_json(
    item: Item | dict[str, Any],
    options: ConversionOptions | None = None,
    *,
    config: ConversionConfig | None = None,
    maps: CslMaps | None = None,
    diagnostics: DiagnosticCollector | None = None,
) -> dict[str, Any]:
    """Convert an item to a CSL-JSON record.

    Parameters
    ----------
    item : Item | dict[str, Any]
        Item, or item JSON.
    options : ConversionOptions | None, optional
        Portable mode and relation copying.
    config : ConversionConfig | None, optional
        Locale, date parser and timezone settings.
    maps : CslMaps | None, optional
        Correspondence maps; defaults to the bundled ones.
    diagnostics : DiagnosticCollector | None, optional
        Sink for non-fatal anomalies.

    Returns
    -------
    dict[str, Any]
        CSL-JSON record.

    Raises
    ------
    UnmappableTypeError
        If the item type has no CSL type.

    Examples
    --------
    >>> item_to_csl_json({"itemType": "book", "title": "Middlemarch"})
    {'type': 'book', 'title': 'Middlemarch'}
    """
    options = options or ConversionOptions()
    config = config or ConversionConfig()
    maps = maps or default_maps()

    if isinstance(item, dict):
        item = Item.from_dict(item)

    csl_type = maps.csl_type_for(item.item_type)
    if not csl_type:
        raise UnmappableTypeError(
            f'Unexpected item type "{item.item_type}"', item_type=item.item_type
        )

    _report_unknown_fields(item, maps, diagnostics)
    if not options.portable:
        _report_orphan_overlays(item, diagnostics)

    if options.portable:
        item = encode_item(_dates_to_sql(item, maps, config.month_first), maps.registry)

    csl_item: dict[str, Any] = {}
    if item.item_id is not None:
        csl_item["id"] = item.item_id
    csl_item["type"] = csl_type

    multi: dict[str, dict[str, Any]] = {"main": {}, "_keys": {}}
    _export_text(item, csl_item, multi, maps, options.portable)
    _export_creators(item, csl_item, maps, options.portable, diagnostics)
    _export_dates(item, csl_item, maps, config, diagnostics)

    apply_forced_fields(csl_item, item.item_type, maps)

    if item.item_type == "note" and item.note:
        csl_item["title"] = note_to_title(item.note)

    if options.include_relations:
        csl_item["seeAlso"] = list(item.see_also)

    if not options.portable and (multi["main"] or multi["_keys"]):
        csl_item["multi"] = multi

    return csl_item

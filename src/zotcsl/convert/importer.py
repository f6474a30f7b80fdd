"""CSL-JSON -> item conversion."""

from typing import Any

from zotcsl.config import ConversionConfig, ConversionOptions
from zotcsl.convert.recode import decode_item
from zotcsl.dates import csl_date_to_field
from zotcsl.diagnostics import (
    INVALID_CREATOR,
    INVALID_CREATOR_TYPE,
    UNKNOWN_FIELD,
    UNPARSEABLE_DATE,
    DiagnosticCollector,
    emit,
)
from zotcsl.inference import infer_item_type
from zotcsl.mappings import CslMaps, default_maps
from zotcsl.mappings.tables import NO_DEFAULT_JURISDICTION_TYPES
from zotcsl.models import Item
from zotcsl.names import csl_name_to_creator

__all__ = ["DEFAULT_JURISDICTION", "item_from_csl_json"]

DEFAULT_JURISDICTION = "us"

# CSL keys that are not bibliographic variables
_STRUCTURAL_KEYS = frozenset({"id", "type", "multi", "seeAlso", "system_id"})


def _resolve_field(maps: CslMaps, item_type: str, fields: tuple[str, ...]) -> str | None:
    """Return the first field (or its type alias) valid for the item type."""
    for field in fields:
        target = maps.registry.resolve_typed_field(item_type, field) or field
        if maps.registry.is_valid_for_type(target, item_type):
            return target
    return None


def _report_unknown_variables(
    csl_item: dict[str, Any], maps: CslMaps, diagnostics: DiagnosticCollector | None
) -> None:
    known = set(maps.text) | set(maps.dates) | maps.name_variables() | _STRUCTURAL_KEYS
    for variable in csl_item:
        if variable not in known:
            emit(diagnostics, UNKNOWN_FIELD, f"Unknown CSL variable '{variable}'", field=variable)


def _import_text(csl_item: dict[str, Any], item: Item, maps: CslMaps) -> None:
    multi = csl_item.get("multi") or {}
    multi_main = multi.get("main") or {}
    multi_keys = multi.get("_keys") or {}

    for variable, fields in maps.text.items():
        value = csl_item.get(variable)
        if isinstance(value, bool) or not isinstance(value, (str, int, float)):
            continue
        target = _resolve_field(maps, item.item_type, fields)
        if target is None:
            continue

        item.fields[target] = str(value)
        if multi_main.get(variable):
            item.multi.main[target] = multi_main[variable]
        if multi_keys.get(variable):
            item.multi.keys.setdefault(target, {}).update(multi_keys[variable])


def _import_jurisdiction(
    csl_item: dict[str, Any], item: Item, maps: CslMaps, config: ConversionConfig
) -> None:
    if item.item_type in NO_DEFAULT_JURISDICTION_TYPES:
        return
    if not maps.registry.is_valid_for_type("jurisdiction", item.item_type):
        return
    item.fields["jurisdiction"] = (
        csl_item.get("jurisdiction")
        or config.jurisdiction_default
        or config.jurisdiction_fallback
        or DEFAULT_JURISDICTION
    )


def _import_creators(
    csl_item: dict[str, Any],
    item: Item,
    maps: CslMaps,
    repair: bool,
    diagnostics: DiagnosticCollector | None,
) -> None:
    registry = maps.registry
    done: set[str] = set()

    for creator_type, variable in maps.names.items():
        if variable in done or variable not in csl_item:
            continue
        done.add(variable)

        names = csl_item[variable]
        if not isinstance(names, list):
            continue

        target_type: str | None = creator_type
        if not registry.is_valid_creator_type(creator_type, item.item_type):
            target_type = registry.primary_creator_type(item.item_type)
            if target_type is None:
                emit(
                    diagnostics,
                    INVALID_CREATOR_TYPE,
                    f"Item type '{item.item_type}' takes no creators; dropping '{variable}'",
                    field=variable,
                )
                continue
            emit(
                diagnostics,
                INVALID_CREATOR_TYPE,
                f"'{creator_type}' is not valid for '{item.item_type}'; using '{target_type}'",
                level="INFO",
                field=variable,
            )

        for index, name in enumerate(names):
            creator = None
            if isinstance(name, dict):
                creator = csl_name_to_creator(name, target_type, repair=repair)
            if creator is None:
                emit(
                    diagnostics,
                    INVALID_CREATOR,
                    f"Dropping nameless entry {index} of '{variable}'",
                    field=variable,
                    index=index,
                )
                continue
            item.creators.append(creator)


def _import_dates(
    csl_item: dict[str, Any],
    item: Item,
    maps: CslMaps,
    config: ConversionConfig,
    diagnostics: DiagnosticCollector | None,
) -> None:
    for variable, fields in maps.dates.items():
        csl_date = csl_item.get(variable)
        if not isinstance(csl_date, (dict, str)) or not csl_date:
            continue
        target = _resolve_field(maps, item.item_type, fields)
        if target is None:
            continue

        value = csl_date_to_field(
            csl_date,
            accessed=variable == "accessed",
            month_first=config.month_first,
            diagnostics=diagnostics,
            field=variable,
        )
        if value is None:
            if isinstance(csl_date, str):
                raw = csl_date
            else:
                raw = csl_date.get("literal") or csl_date.get("raw")
            if not raw:
                continue
            value = str(raw)
            emit(
                diagnostics,
                UNPARSEABLE_DATE,
                f"No year found in '{value}'; storing it as-is",
                level="INFO",
                field=variable,
            )
        item.fields[target] = value


def item_from_csl_json(
    csl_item: dict[str, Any],
    options: ConversionOptions | None = None,
    *,
    config: ConversionConfig | None = None,
    maps: CslMaps | None = None,
    diagnostics: DiagnosticCollector | None = None,
) -> Item:
    """Convert a CSL-JSON record to an item.

    Parameters
    ----------
    csl_item : dict[str, Any]
        CSL-JSON record.
    options : ConversionOptions | None, optional
        Portable mode, relation copying, strict inference and creator repair.
    config : ConversionConfig | None, optional
        Locale and jurisdiction defaults.
    maps : CslMaps | None, optional
        Correspondence maps; defaults to the bundled ones.
    diagnostics : DiagnosticCollector | None, optional
        Sink for non-fatal anomalies.

    Returns
    -------
    Item
        New item.

    Raises
    ------
    MissingTypeError
        If the record has no ``type``.
    UnknownTypeError
        In strict mode, if no item type can be inferred.
    """
    options = options or ConversionOptions()
    config = config or ConversionConfig()
    maps = maps or default_maps()

    item_type = infer_item_type(
        csl_item, strict=options.strict, maps=maps, diagnostics=diagnostics
    )
    item = Item(item_type=item_type, item_id=csl_item.get("id"))

    _report_unknown_variables(csl_item, maps, diagnostics)
    _import_text(csl_item, item, maps)
    _import_jurisdiction(csl_item, item, maps, config)
    _import_creators(csl_item, item, maps, options.repair or options.portable, diagnostics)
    _import_dates(csl_item, item, maps, config, diagnostics)

    if options.include_relations and csl_item.get("seeAlso"):
        item.see_also = list(csl_item["seeAlso"])

    if options.portable:
        item = decode_item(item)

    return item

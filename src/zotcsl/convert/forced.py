"""Forced CSL content and variable renames for specific item types."""

from typing import Any

from zotcsl.mappings import CslMaps, default_maps

__all__ = ["apply_forced_fields"]


def apply_forced_fields(
    csl_item: dict[str, Any],
    item_type: str,
    maps: CslMaps | None = None,
) -> dict[str, Any]:
    """Apply forced values, then forced renames, to a CSL record in place.

    Forced values override anything computed earlier. A rename only runs
    when its source variable is present, so applying the pass twice gives
    the same record.

    Parameters
    ----------
    csl_item : dict[str, Any]
        CSL record being built.
    item_type : str
        Item type the record was converted from.
    maps : CslMaps | None, optional
        Correspondence maps; defaults to the bundled ones.

    Returns
    -------
    dict[str, Any]
        The same record.
    """
    maps = maps or default_maps()

    for variable, value in maps.force_content.get(item_type, ()):
        csl_item[variable] = value

    for variable, new_variable in maps.force_remap.get(item_type, ()):
        if variable in csl_item:
            csl_item[new_variable] = csl_item.pop(variable)

    return csl_item

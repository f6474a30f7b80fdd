"""Item type inference for CSL records.

A CSL type alone is ambiguous (``personal_communication`` covers letters,
emails and instant messages). Inference runs an ordered rule cascade over
the CSL type and auxiliary variables whose presence is incompatible with
the alternative item types, so no data is lost on import.

Architecture
------------
* ``PRIMARY_RULES``: first match wins.
* ``OVERRIDE_RULES``: evaluated after the primary cascade; a match
  replaces the primary result.
* Fallback: first item type registered for the CSL type, then
  ``document``.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from zotcsl.diagnostics import UNKNOWN_TYPE, DiagnosticCollector, emit
from zotcsl.errors import MissingTypeError, UnknownTypeError
from zotcsl.mappings import CslMaps, default_maps

__all__ = [
    "FALLBACK_ITEM_TYPE",
    "OVERRIDE_RULES",
    "PRIMARY_RULES",
    "TypeRule",
    "infer_item_type",
    "valid_csl_fields",
]

FALLBACK_ITEM_TYPE = "document"

CslPredicate = Callable[[dict[str, Any]], bool]


@dataclass(frozen=True)
class TypeRule:
    """One disambiguation rule.

    Attributes
    ----------
    name : str
        Rule identifier, reported in diagnostics and tests.
    predicate : CslPredicate
        Test over the CSL record.
    item_type : str
        Item type chosen when the predicate holds.
    """

    name: str
    predicate: CslPredicate
    item_type: str

    def matches(self, csl_item: dict[str, Any]) -> bool:
        """Check the rule against a CSL record."""
        return self.predicate(csl_item)


# ============================================================================
# Predicate builders
# ============================================================================


def _type_is(csl_type: str) -> CslPredicate:
    return lambda csl: csl.get("type") == csl_type


def _genre_is(csl_type: str, genre: str) -> CslPredicate:
    return lambda csl: csl.get("type") == csl_type and csl.get("genre") == genre


def _has_any(csl_type: str, *variables: str) -> CslPredicate:
    return lambda csl: csl.get("type") == csl_type and any(csl.get(v) for v in variables)


# Variables a film cannot hold
VIDEO_RECORDING_VARIABLES = (
    "collection-title",
    "publisher-place",
    "event-place",
    "volume",
    "number-of-volumes",
    "ISBN",
)

# Variables that mark an archived television broadcast
ARCHIVED_BROADCAST_VARIABLES = (
    "archive",
    "archive_location",
    "container-title",
    "event-place",
    "publisher",
    "publisher-place",
    "source",
)


# ============================================================================
# Rules
# ============================================================================

PRIMARY_RULES: tuple[TypeRule, ...] = (
    TypeRule("book-version", _has_any("book", "version"), "computerProgram"),
    TypeRule("book", _type_is("book"), "book"),
    TypeRule(
        "motion-picture-video",
        _has_any("motion_picture", *VIDEO_RECORDING_VARIABLES),
        "videoRecording",
    ),
    TypeRule("motion-picture", _type_is("motion_picture"), "film"),
    TypeRule("communication-email", _genre_is("personal_communication", "email"), "email"),
    TypeRule(
        "communication-instant-message",
        _genre_is("personal_communication", "instant message"),
        "instantMessage",
    ),
    TypeRule("communication", _type_is("personal_communication"), "letter"),
    TypeRule("broadcast-radio", _genre_is("broadcast", "radio broadcast"), "radioBroadcast"),
    TypeRule("broadcast-podcast", _genre_is("broadcast", "podcast"), "podcast"),
    TypeRule("broadcast", _type_is("broadcast"), "tvBroadcast"),
    TypeRule("bill-hearing", _has_any("bill", "publisher", "number-of-volumes"), "hearing"),
    TypeRule("song-number", _has_any("song", "number"), "podcast"),
)

# A match here replaces the primary result, including a genre-based
# radioBroadcast or podcast.
OVERRIDE_RULES: tuple[TypeRule, ...] = (
    TypeRule(
        "broadcast-archived",
        _has_any("broadcast", *ARCHIVED_BROADCAST_VARIABLES),
        "tvBroadcast",
    ),
)


def _first_match(rules: tuple[TypeRule, ...], csl_item: dict[str, Any]) -> TypeRule | None:
    for rule in rules:
        if rule.matches(csl_item):
            return rule
    return None


def infer_item_type(
    csl_item: dict[str, Any],
    *,
    strict: bool = False,
    maps: CslMaps | None = None,
    diagnostics: DiagnosticCollector | None = None,
) -> str:
    """Pick the item type for a CSL record.

    Parameters
    ----------
    csl_item : dict[str, Any]
        CSL record.
    strict : bool, optional
        Raise instead of falling back to ``document``.
    maps : CslMaps | None, optional
        Correspondence maps; defaults to the bundled ones.
    diagnostics : DiagnosticCollector | None, optional
        Sink for the ``UnknownType`` fallback diagnostic.

    Returns
    -------
    str
        Item type.

    Raises
    ------
    MissingTypeError
        If the record has no ``type``.
    UnknownTypeError
        If ``strict`` is set and the CSL type is unknown.

    Examples
    --------
    >>> infer_item_type({"type": "personal_communication", "genre": "email"})
    'email'
    >>> infer_item_type({"type": "book", "version": "2.0"})
    'computerProgram'
    """
    csl_type = csl_item.get("type")
    if not csl_type:
        raise MissingTypeError("No 'type' provided in CSL-JSON")

    maps = maps or default_maps()

    item_type = None
    rule = _first_match(PRIMARY_RULES, csl_item)
    if rule is not None:
        item_type = rule.item_type

    override = _first_match(OVERRIDE_RULES, csl_item)
    if override is not None:
        item_type = override.item_type

    if item_type is not None and maps.registry.item_type_exists(item_type):
        return item_type

    candidates = maps.types_reverse.get(csl_type)
    if candidates:
        return candidates[0]

    if strict:
        raise UnknownTypeError(f"Unknown CSL type '{csl_type}'", csl_type=csl_type)

    emit(
        diagnostics,
        UNKNOWN_TYPE,
        f"Unknown CSL type '{csl_type}' -- using '{FALLBACK_ITEM_TYPE}'",
        field="type",
        csl_type=csl_type,
    )
    return FALLBACK_ITEM_TYPE


def valid_csl_fields(csl_item: dict[str, Any], maps: CslMaps | None = None) -> set[str]:
    """Return CSL text and date variables the inferred item type can hold.

    Parameters
    ----------
    csl_item : dict[str, Any]
        CSL record.
    maps : CslMaps | None, optional
        Correspondence maps; defaults to the bundled ones.

    Returns
    -------
    set[str]
        Variables with at least one counterpart field valid for the type.
        Both ``shortTitle`` and ``title-short`` are reported.
    """
    maps = maps or default_maps()
    item_type = infer_item_type(csl_item, maps=maps)

    valid: set[str] = set()
    for field in maps.registry.item_type_fields(item_type):
        names = {field, maps.registry.base_field_for(item_type, field)}
        for mappings in (maps.text, maps.dates):
            for variable, fields in mappings.items():
                if names.intersection(fields):
                    valid.add(variable)
    return valid

"""Conversion between item creators and CSL name objects."""

from typing import Any

from zotcsl.models import Creator, CreatorName
from zotcsl.names.particles import parse_particles, strip_name_quotes

__all__ = [
    "creator_to_csl_name",
    "csl_name_to_creator",
    "csl_name_to_creator_name",
    "join_particles",
]

# A particle ending in one of these attaches without a space
_JOINING_CHARS = frozenset(" -'\u02bb\u2019")


def creator_to_csl_name(creator: CreatorName) -> dict[str, Any]:
    """Convert a creator (or creator language variant) to a CSL name.

    Parameters
    ----------
    creator : CreatorName
        Creator name parts.

    Returns
    -------
    dict[str, Any]
        ``family``/``given`` with parsed particles, ``literal``, or an empty
        dict for a nameless creator.
    """
    name: dict[str, Any] = {}
    if creator.last_name or creator.first_name:
        name["family"] = creator.last_name or ""
        name["given"] = creator.first_name or ""
        if name["family"] and name["given"]:
            unquoted = strip_name_quotes(name["family"])
            if unquoted is not None:
                name["family"] = unquoted
            else:
                parse_particles(name)
        elif creator.last_name:
            name = {"literal": creator.last_name}
    elif creator.name:
        name["literal"] = creator.name
    return name


def _attach(left: str, right: str) -> str:
    if not left or not right:
        return left or right
    if left[-1] in _JOINING_CHARS:
        return left + right
    return f"{left} {right}"


def join_particles(name: dict[str, Any]) -> tuple[str, str]:
    """Fold particles and suffix of a CSL name back into family and given.

    Parameters
    ----------
    name : dict[str, Any]
        CSL name with ``family``/``given`` and any particle keys.

    Returns
    -------
    tuple[str, str]
        (family, given) as they were before ``parse_particles``.

    Examples
    --------
    >>> join_particles({"family": "Cruz", "given": "Juan", "non-dropping-particle": "de la"})
    ('de la Cruz', 'Juan')
    """
    family = _attach(str(name.get("non-dropping-particle") or ""), str(name.get("family") or ""))
    given = str(name.get("given") or "")

    dropping = str(name.get("dropping-particle") or "")
    if dropping and name.get("comma-dropping-particle"):
        given = f"{given}{name['comma-dropping-particle']} {dropping}"
    elif dropping:
        given = _attach(given, dropping)

    suffix = str(name.get("suffix") or "")
    if suffix:
        separator = ",! " if name.get("comma-suffix") else ", "
        given = f"{given}{separator}{suffix}" if given else suffix

    return family, given


def csl_name_to_creator_name(name: dict[str, Any]) -> CreatorName | None:
    """Convert a CSL name to creator name parts.

    Returns
    -------
    CreatorName | None
        Two-field or single-field name, or None when the CSL name has
        neither family/given nor literal.
    """
    if name.get("family") or name.get("given"):
        family, given = join_particles(name)
        return CreatorName(last_name=family, first_name=given)
    if name.get("literal"):
        return CreatorName(name=name["literal"])
    return None


def csl_name_to_creator(
    name: dict[str, Any],
    creator_type: str,
    repair: bool = False,
) -> Creator | None:
    """Convert a CSL name, with its language variants, to a creator.

    Parameters
    ----------
    name : dict[str, Any]
        CSL name object, optionally with ``multi`` (``main``, ``_key``).
    creator_type : str
        Creator type to assign.
    repair : bool, optional
        Promote a given-name-only name to the family name.

    Returns
    -------
    Creator | None
        Creator, or None for an invalid (nameless) name.
    """
    parts = csl_name_to_creator_name(name)
    if parts is None:
        return None

    if repair and not parts.name and not parts.last_name and parts.first_name:
        parts = CreatorName(last_name=parts.first_name, first_name="")

    creator = Creator(
        last_name=parts.last_name,
        first_name=parts.first_name,
        name=parts.name,
        creator_type=creator_type,
    )

    multi = name.get("multi") or {}
    if multi.get("main"):
        creator.multi_main = multi["main"]
    for lang, variant in (multi.get("_key") or {}).items():
        variant_parts = csl_name_to_creator_name(variant)
        if variant_parts is not None:
            creator.multi_keys[lang] = variant_parts

    return creator

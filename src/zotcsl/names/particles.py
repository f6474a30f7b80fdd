"""Name particle and suffix parsing for CSL name objects.

Splits lowercase particles ("de", "van der") off family and given names
and moves suffixes ("Jr.") out of the given name, filling the CSL keys
``non-dropping-particle``, ``dropping-particle``, ``suffix`` and
``comma-suffix``. The rules mirror citeproc-js so citation output does
not change when names are pre-parsed.
"""

import re
from typing import Any

__all__ = ["parse_particles", "split_particles", "strip_name_quotes"]

# A leading word plus its separator. Given names are matched reversed, so
# the separator comes first in the reversed text.
PARTICLE_GIVEN_RE = re.compile(r"^([^ ]+(?:\u02bb |\u2019 | |' ) *)(.+)$")
PARTICLE_FAMILY_RE = re.compile(r"^([^ ]+(?:-|\u02bb|\u2019| |') *)(.+)$")

_FIRST_CHAR_RE = re.compile(r"^[-'\u02bb\u2019\s]*(.).*\Z")
_SUFFIX_SEPARATOR_RE = re.compile(r"(\s*,!*\s*)")
_WHITESPACE_RE = re.compile(r"\s*")

_APOSTROPHES = ("'", "\u2019")


def _reverse(value: str) -> str:
    return value[::-1]


def split_particles(value: str, given: bool = False) -> tuple[bool, str, list[str]]:
    """Split a run of lowercase particles off a name part.

    Parameters
    ----------
    value : str
        Family name, or given name when ``given`` is True.
    given : bool, optional
        Strip trailing particles of a given name instead of leading
        particles of a family name.

    Returns
    -------
    tuple[bool, str, list[str]]
        (last candidate was a particle, remaining name, particles in
        reading order)
    """
    original = value
    particles: list[str] = []
    has_particle = False

    if given:
        value = _reverse(value)
        pattern = PARTICLE_GIVEN_RE
    else:
        pattern = PARTICLE_FAMILY_RE

    m = pattern.match(value)
    while m:
        candidate = _reverse(m.group(1)) if given else m.group(1)
        first = _FIRST_CHAR_RE.match(candidate)
        first_char = first.group(1) if first else candidate
        has_particle = first_char.upper() != first_char
        if not has_particle:
            break
        if given:
            particles.append(original[-len(candidate) :])
            original = original[: -len(candidate)]
        else:
            particles.append(original[: len(candidate)])
            original = original[len(candidate) :]
        value = m.group(2)
        m = pattern.match(value)

    if given:
        value = _reverse(value)
        particles.reverse()
        for i in range(1, len(particles)):
            if particles[i].startswith(" "):
                particles[i - 1] += " "
        particles = [p[1:] if p.startswith(" ") else p for p in particles]
        value = original[: len(value)]
    else:
        value = original[-len(value) :] if value else original

    return has_particle, value, particles


def _trim_last(value: str) -> str:
    """Trim a particle run, keeping a trailing apostrophe-space."""
    last_char = value[-1:]
    value = value.strip()
    if last_char == " " and value[-1:] in _APOSTROPHES:
        value += " "
    return value


def _parse_suffix(name: dict[str, Any]) -> None:
    if name.get("suffix") or not name.get("given"):
        return

    given = name["given"]
    m = _SUFFIX_SEPARATOR_RE.search(given)
    if not m:
        return

    idx = m.start(1)
    separator = m.group(1)
    possible_suffix = given[idx + len(separator) :]
    possible_comma = _WHITESPACE_RE.sub("", separator)

    if possible_suffix.replace(".", "") == "et al" and not name.get("dropping-particle"):
        # Explicit "et al." authorship markers stay with the name
        name["dropping-particle"] = possible_suffix
        name["comma-dropping-particle"] = ","
    else:
        if len(possible_comma) == 2:
            name["comma-suffix"] = True
        name["suffix"] = possible_suffix
    name["given"] = given[:idx]


def strip_name_quotes(family: str) -> str | None:
    """Return a double-quoted family name without its quotes, else None."""
    if len(family) > 1 and family.startswith('"') and family.endswith('"'):
        return family[1:-1]
    return None


def parse_particles(name: dict[str, Any]) -> dict[str, Any]:
    """Parse particles and suffix out of a CSL name, in place.

    Parameters
    ----------
    name : dict[str, Any]
        CSL name object with ``family`` and/or ``given``.

    Returns
    -------
    dict[str, Any]
        The same object, with ``family``/``given`` trimmed and any of
        ``non-dropping-particle``, ``dropping-particle``,
        ``comma-dropping-particle``, ``suffix``, ``comma-suffix`` added.

    Examples
    --------
    >>> parse_particles({"family": "van der Berg", "given": "Jan"})["non-dropping-particle"]
    'van der'
    """
    family = name.get("family") or ""
    unquoted = strip_name_quotes(family)
    if unquoted is not None:
        # Quoted family names are literal
        name["family"] = unquoted
        return name

    if family:
        _, remaining, particles = split_particles(family)
        name["family"] = remaining
        non_dropping = _trim_last("".join(particles))
        if non_dropping:
            name["non-dropping-particle"] = non_dropping

    _parse_suffix(name)

    given = name.get("given") or ""
    if given:
        _, remaining, particles = split_particles(given, given=True)
        name["given"] = remaining
        dropping = "".join(particles).strip()
        if dropping:
            name["dropping-particle"] = dropping

    return name

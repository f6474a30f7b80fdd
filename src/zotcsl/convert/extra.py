"""Re-keying of "Field Name: value" lines in the extra field."""

import re

from zotcsl.mappings import CslMaps, default_maps
from zotcsl.mappings.tables import (
    EXTRA_CSL_FIELDS,
    EXTRA_RENAMED_FIELDS,
    EXTRA_UPPERCASE_FIELDS,
)

__all__ = ["extra_to_csl"]

_EXTRA_LINE_RE = re.compile(r"^([A-Za-z \-]+)(:\s*.+)", re.MULTILINE)
_LABEL_WORD_RE = re.compile(r" ([A-Z])")


def _label_to_field(label: str) -> str:
    """Turn a field label ("Publication Title") into a field name."""
    name = _LABEL_WORD_RE.sub(r"\1", label, count=1)
    if len(name) > 1 and name[1] == name[1].lower():
        name = name[0].lower() + name[1:]
    return name


def extra_to_csl(extra: str, maps: CslMaps | None = None) -> str:
    """Rewrite extra-field lines to CSL variable names.

    Parameters
    ----------
    extra : str
        Free text with optional ``Key: value`` lines.
    maps : CslMaps | None, optional
        Maps providing the field -> variable table for written-out field
        labels; defaults to the bundled ones.

    Returns
    -------
    str
        Text with recognized keys replaced. Unrecognized lines are
        unchanged.

    Examples
    --------
    >>> extra_to_csl("Original Date: 1850\\nPMID: 12345")
    'original-date: 1850\\nPMID: 12345'
    """
    maps = maps or default_maps()

    def rekey(m: re.Match[str]) -> str:
        label, value = m.group(1), m.group(2)
        key = label.lower().replace(" ", "-")
        if key in EXTRA_CSL_FIELDS:
            return key + value
        if key in EXTRA_UPPERCASE_FIELDS:
            return key.upper() + value
        if key in EXTRA_RENAMED_FIELDS:
            return EXTRA_RENAMED_FIELDS[key] + value

        variable = maps.fields_reverse.get(_label_to_field(label))
        if variable:
            return variable + value
        return m.group(0)

    return _EXTRA_LINE_RE.sub(rekey, extra)

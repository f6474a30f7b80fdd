"""Call number ordering for Dewey, Library of Congress and plain numbers."""

import re

__all__ = ["compare_call_numbers"]

_ONLY_DIGITS_RE = re.compile(r"\d+")
_DEWEY_RE = re.compile(r"(\d{3})(?:\.(\d+))?(?:/([a-z]{3}))?")
_LC_CLASSIFICATION_RE = re.compile(r"[a-zA-Z]{1,3}\d+(?:$|(?=\s*[.\d]))")
_LC_SEPARATORS_RE = re.compile(r"[\s.]+")


def _compare_parts(a: list[str], b: list[str]) -> int:
    """Compare part lists element-wise; a longer list sorts after its prefix."""
    for part_a, part_b in zip(a, b, strict=False):
        if part_a < part_b:
            return -1
        if part_a > part_b:
            return 1
    return (len(a) > len(b)) - (len(a) < len(b))


def compare_call_numbers(a: str, b: str) -> int:
    """Compare two call numbers for sorting.

    Plain numbers compare numerically. Two Dewey Decimal numbers compare
    by class, decimal and cutter. Two Library of Congress numbers compare by
    classification first, then by the remaining space- or dot-separated
    parts. Anything else falls back to plain string comparison.

    Parameters
    ----------
    a : str
        First call number.
    b : str
        Second call number.

    Returns
    -------
    int
        Negative if ``a`` sorts first, 0 if equal, positive if ``b`` sorts first.

    Examples
    --------
    >>> compare_call_numbers("9", "10") < 0
    True
    >>> compare_call_numbers("500.12", "500.2") < 0
    True
    """
    if _ONLY_DIGITS_RE.fullmatch(a) and _ONLY_DIGITS_RE.fullmatch(b):
        return int(a) - int(b)

    dewey_a = _DEWEY_RE.fullmatch(re.sub(r"\s", "", a.lower()))
    dewey_b = _DEWEY_RE.fullmatch(re.sub(r"\s", "", b.lower()))
    if dewey_a and dewey_b:
        return _compare_parts(
            [part or "" for part in dewey_a.groups()],
            [part or "" for part in dewey_b.groups()],
        )

    lc_a = _LC_CLASSIFICATION_RE.match(a)
    lc_b = _LC_CLASSIFICATION_RE.match(b)
    if lc_a and lc_b:
        class_a = _LC_SEPARATORS_RE.sub("", lc_a.group()).casefold()
        class_b = _LC_SEPARATORS_RE.sub("", lc_b.group()).casefold()
        if class_a != class_b:
            return -1 if class_a < class_b else 1
        rest_a = _LC_SEPARATORS_RE.sub(" ", a[lc_a.end() :])
        rest_b = _LC_SEPARATORS_RE.sub(" ", b[lc_b.end() :])
        return _compare_parts(rest_a.split(" "), rest_b.split(" "))

    return (a > b) - (a < b)

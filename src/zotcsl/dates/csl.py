"""Conversion between item date strings and CSL date objects."""

import re
from typing import Any

from zotcsl.dates.multipart import (
    MultipartDate,
    access_date_to_local,
    format_date,
    multipart_to_str,
    str_to_date,
)
from zotcsl.diagnostics import UNPARSEABLE_DATE, DiagnosticCollector, emit
from zotcsl.utils import lpad

__all__ = [
    "MONTH_FIRST_REGIONS",
    "SEASON_NAMES",
    "csl_date_to_field",
    "csl_to_multipart",
    "date_to_csl",
    "item_date_to_csl",
    "locale_region",
    "month_first_for_locale",
    "parse_date_to_array",
]

# Regions that write month before day: United States, Micronesia, Palau,
# Philippines
MONTH_FIRST_REGIONS = frozenset({"US", "FM", "PW", "PH"})

SEASON_NAMES = ("Spring", "Summer", "Autumn", "Winter")

# date-parts months 21-24 encode seasons
CSL_SEASON_MONTHS = {21: "Spring", 22: "Summer", 23: "Autumn", 24: "Winter"}

_LOCALE_SPLIT_RE = re.compile(r"[-_]")
_RANGE_SPLIT_RE = re.compile(r"\s*[–—]\s*|\s+-\s+")
_CIRCA_RE = re.compile(r"^(?:circa|ca\.|c\.)\s*", re.IGNORECASE)


def locale_region(locale: str | None) -> str | None:
    """Return the upper-cased two-letter region subtag of a locale."""
    if not locale:
        return None
    for subtag in _LOCALE_SPLIT_RE.split(locale)[1:]:
        if len(subtag) == 2 and subtag.isalpha():
            return subtag.upper()
    return None


def month_first_for_locale(locale: str | None) -> bool:
    """Decide numeric date order for a locale.

    Parameters
    ----------
    locale : str | None
        BCP 47 locale. None is treated as a US locale.

    Returns
    -------
    bool
        True for month/day order, False for day/month order.
    """
    if locale is None:
        return True
    return locale_region(locale) in MONTH_FIRST_REGIONS


def _date_parts(date: MultipartDate) -> list[int]:
    parts = [date.year] if date.year is not None else []
    if parts and date.month is not None:
        parts.append(date.month + 1)
        if date.day:
            parts.append(date.day)
    return parts


def date_to_csl(value: str, month_first: bool = True) -> dict[str, Any]:
    """Convert an item date string to a CSL date object.

    Parameters
    ----------
    value : str
        Free-text, SQL or multipart date.
    month_first : bool, optional
        Order used for ambiguous numeric dates.

    Returns
    -------
    dict[str, Any]
        ``{"date-parts": [[y, m, d]]}`` with trailing parts trimmed, plus
        ``season`` when there is leftover text but no month, or
        ``{"literal": value}`` when no year is found.

    Examples
    --------
    >>> date_to_csl("2020-03-05")
    {'date-parts': [[2020, 3, 5]]}
    >>> date_to_csl("circa 1800s")
    {'literal': 'circa 1800s'}
    """
    date = str_to_date(value, month_first)
    if date.year is None:
        return {"literal": value}
    csl: dict[str, Any] = {"date-parts": [_date_parts(date)]}
    if date.part and date.month is None:
        csl["season"] = date.part
    return csl


def parse_date_to_array(text: str, month_first: bool = True) -> dict[str, Any]:
    """Parse free text into a CSL date object, citeproc style.

    Unlike ``date_to_csl`` this recognizes ranges ("1990 - 1995",
    "March 2020–April 2020") and a leading circa marker.

    Parameters
    ----------
    text : str
        Date text.
    month_first : bool, optional
        Order used for ambiguous numeric dates.

    Returns
    -------
    dict[str, Any]
        CSL date object with ``date-parts`` (one or two entries),
        optional ``season`` and ``circa``, or ``literal``.
    """
    text = text.strip()
    body = _CIRCA_RE.sub("", text)
    circa = body != text

    halves = _RANGE_SPLIT_RE.split(body, maxsplit=1)
    dates = [str_to_date(half, month_first) for half in halves]
    if any(date.year is None for date in dates):
        if len(dates) == 1:
            return {"literal": text}
        dates = [str_to_date(body, month_first)]
        if dates[0].year is None:
            return {"literal": text}

    csl: dict[str, Any] = {"date-parts": [_date_parts(date) for date in dates]}
    first = dates[0]
    if first.part and first.month is None:
        csl["season"] = first.part
    if circa:
        csl["circa"] = 1
    return csl


def item_date_to_csl(
    value: str,
    *,
    accessed: bool = False,
    month_first: bool = True,
    use_citeproc: bool = False,
    timezone: str | None = None,
) -> dict[str, Any]:
    """Convert an item date field value for export.

    Parameters
    ----------
    value : str
        Stored field value.
    accessed : bool, optional
        The value is a UTC access timestamp.
    month_first : bool, optional
        Order used for ambiguous numeric dates.
    use_citeproc : bool, optional
        Use ``parse_date_to_array`` instead of ``date_to_csl``.
    timezone : str | None, optional
        Zone for access dates; None uses the system zone.

    Returns
    -------
    dict[str, Any]
        CSL date object. Access timestamps become ``{"raw": "YYYY-MM-DD"}``
        in local time.
    """
    if accessed:
        local = access_date_to_local(value, timezone)
        if local is not None:
            return {"raw": local}
    if use_citeproc:
        # Access dates are always read month first
        return parse_date_to_array(multipart_to_str(value), month_first or accessed)
    return date_to_csl(value, month_first)


def _to_int(value: Any) -> int | None:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return None
    return number or None


def _season_name(value: Any) -> str | None:
    number = _to_int(value)
    if number is None:
        return str(value) if value else None
    if number in CSL_SEASON_MONTHS:
        return CSL_SEASON_MONTHS[number]
    if 1 <= number <= len(SEASON_NAMES):
        return SEASON_NAMES[number - 1]
    return None


def csl_to_multipart(
    csl_date: dict[str, Any] | str,
    month_first: bool = True,
    diagnostics: DiagnosticCollector | None = None,
    field: str | None = None,
) -> MultipartDate:
    """Read a CSL date object into a structured date.

    ``literal``/``raw`` text is parsed with ``parse_date_to_array``;
    otherwise the first ``date-parts`` entry is used. A plain string is
    treated as ``raw``. Months 21-24 are CSL season codes; any other month
    outside 1-12 is dropped with an ``UnparseableDate`` diagnostic.

    Returns
    -------
    MultipartDate
        Date with a 0-based month. ``part`` carries the season and
        ``raw`` the literal text, if any.
    """
    if isinstance(csl_date, str):
        csl_date = {"raw": csl_date}

    text = csl_date.get("literal") or csl_date.get("raw")
    if text:
        text = str(text)
        csl_date = parse_date_to_array(text, month_first)

    parts = csl_date.get("date-parts")
    first = parts[0] if isinstance(parts, list) and parts and isinstance(parts[0], list) else []
    year, month, day = (_to_int(first[i]) if len(first) > i else None for i in range(3))

    season = _season_name(csl_date.get("season"))
    if month is not None and not 1 <= month <= 12:
        if month in CSL_SEASON_MONTHS:
            season = season or CSL_SEASON_MONTHS[month]
        else:
            emit(
                diagnostics,
                UNPARSEABLE_DATE,
                f"Dropping month {month} outside 1-12",
                level="INFO",
                field=field,
                month=month,
            )
        month = day = None

    return MultipartDate(
        year=year,
        month=month - 1 if month else None,
        day=day if month else None,
        part=season,
        raw=text or "",
    )


def csl_date_to_field(
    csl_date: dict[str, Any] | str,
    *,
    accessed: bool = False,
    month_first: bool = True,
    diagnostics: DiagnosticCollector | None = None,
    field: str | None = None,
) -> str | None:
    """Render a CSL date object as an item date field value.

    Parameters
    ----------
    csl_date : dict[str, Any] | str
        CSL date object.
    accessed : bool, optional
        Render as a zero-padded ``YYYY[-MM[-DD]]`` access date.
    month_first : bool, optional
        Order used for ambiguous literal dates.
    diagnostics : DiagnosticCollector | None, optional
        Sink for dropped date parts.
    field : str | None, optional
        CSL variable reported in diagnostics.

    Returns
    -------
    str | None
        Field value, or None when no year could be read.

    Examples
    --------
    >>> csl_date_to_field({"date-parts": [[2020, 3, 5]]})
    'March 5, 2020'
    >>> csl_date_to_field({"date-parts": [[2020, 3, 5]]}, accessed=True)
    '2020-03-05'
    """
    date = csl_to_multipart(csl_date, month_first, diagnostics, field)
    if date.year is None:
        return None

    if accessed:
        value = lpad(date.year, "0", 4)
        if date.month is not None:
            value += "-" + lpad(date.month + 1, "0", 2)
            if date.day:
                value += "-" + lpad(date.day, "0", 2)
        return value

    value = format_date(date)
    if date.part:
        value = f"{date.part} {value}"
    return value

"""Multipart date parsing and SQL date helpers.

Item date fields hold free text. ``str_to_date`` extracts year, month,
day and leftover text ("part") from it; the multipart form prefixes the
original text with its SQL rendering (``"2020-03-05 March 5, 2020"``).
Months are 0-based throughout this module.
"""

import re
from dataclasses import dataclass
from datetime import UTC, datetime
from zoneinfo import ZoneInfo

from zotcsl.utils import lpad

__all__ = [
    "MONTH_NAMES",
    "MultipartDate",
    "access_date_to_local",
    "date_to_sql",
    "datetime_to_sql",
    "format_date",
    "is_iso_datetime",
    "is_multipart",
    "is_sql_date",
    "is_sql_datetime",
    "multipart_to_sql",
    "multipart_to_str",
    "sql_to_datetime",
    "str_to_date",
    "str_to_multipart",
]

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

_MULTIPART_RE = re.compile(r"^\d{4}-\d{2}-\d{2} ")
_SQL_DATE_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")
_SQL_DATETIME_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})[ T](\d{2}):(\d{2}):(\d{2})$")
_ISO_DATETIME_RE = re.compile(
    r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}(?::\d{2}(?:\.\d+)?)?(?:Z|[+-]\d{2}:?\d{2})$"
)

# Two or three numeric components sharing one separator
_NUMERIC_RE = re.compile(r"^(.*?)\b(\d{1,4})([-/.])(\d{1,4})(?:\3(\d{1,4}))?\b(.*)$")
_YEAR_RE = re.compile(
    r"\b(\d{1,4}) ?(B\.? ?C\.?(?: ?E\.?)?|C\.? ?E\.?|A\.? ?D\.?)(?![A-Za-z])|\b(\d{3,4})\b",
    re.IGNORECASE,
)
_MONTH_RE = re.compile(
    r"\b(?:(january|february|march|april|may|june|july|august|september|october|"
    r"november|december)|(jan|feb|mar|apr|jun|jul|aug|sept?|oct|nov|dec)\.?)(?![a-z])",
    re.IGNORECASE,
)
_DAY_RE = re.compile(r"\b(\d{1,2})(?:st|nd|rd|th)?\b", re.IGNORECASE)
_WHITESPACE_RE = re.compile(r"\s+")

_PART_STRIP = " \t,.;:-/"


@dataclass(frozen=True)
class MultipartDate:
    """Structured date extracted from free text.

    Attributes
    ----------
    year : int | None
        Year; negative for BC dates.
    month : int | None
        0-based month.
    day : int | None
        Day of month.
    part : str | None
        Leftover text (season, qualifiers) not consumed by the parser.
    raw : str
        Original text.
    """

    year: int | None = None
    month: int | None = None
    day: int | None = None
    part: str | None = None
    raw: str = ""


def is_multipart(value: str) -> bool:
    """Check whether a value is in multipart form."""
    return bool(_MULTIPART_RE.match(value))


def is_sql_date(value: str) -> bool:
    """Check for ``YYYY-MM-DD``."""
    return bool(_SQL_DATE_RE.match(value))


def is_sql_datetime(value: str) -> bool:
    """Check for ``YYYY-MM-DD HH:MM:SS``."""
    return bool(_SQL_DATETIME_RE.match(value))


def is_iso_datetime(value: str) -> bool:
    """Check for an ISO 8601 timestamp with an offset or ``Z``."""
    return bool(_ISO_DATETIME_RE.match(value))


def _clean_part(text: str) -> str | None:
    cleaned = _WHITESPACE_RE.sub(" ", text).strip(_PART_STRIP)
    return cleaned or None


def _cut(text: str, m: re.Match[str]) -> str:
    return f"{text[: m.start()]} {text[m.end() :]}"


def _expand_year(year: str) -> int:
    """Expand a two-digit year to the nearest plausible century."""
    value = int(year)
    if len(year) == 2:
        cutoff = datetime.now(UTC).year % 100 + 10
        value += 2000 if value <= cutoff else 1900
    return value


def _parse_sql(text: str) -> MultipartDate | None:
    m = _SQL_DATE_RE.match(text) or _SQL_DATETIME_RE.match(text)
    if not m:
        return None
    year, month, day = (int(g) for g in m.group(1, 2, 3))
    if month > 12 or day > 31:
        return None
    return MultipartDate(
        year=year or None,
        month=month - 1 if month else None,
        day=day or None,
        raw=text,
    )


def _parse_numeric(text: str, month_first: bool) -> MultipartDate | None:
    m = _NUMERIC_RE.match(text)
    if not m:
        return None
    before, a, _, b, c, after = m.groups()

    day: str | None
    if c is None:
        if len(a) == 4 and len(b) <= 2:
            year, month, day = a, b, None
        elif len(b) == 4 and len(a) <= 2:
            year, month, day = b, a, None
        else:
            return None
    elif len(a) >= 3 or int(a) > 31:
        if len(b) > 2 or len(c) > 2:
            return None
        year, month, day = a, b, c
    else:
        if len(b) > 2 or len(c) == 3:
            return None
        year = c
        month, day = (a, b) if month_first else (b, a)

    month_n = int(month)
    day_n = int(day) if day is not None else None
    if day_n is not None and month_n > 12 and 0 < day_n <= 12:
        month_n, day_n = day_n, month_n
    if not 1 <= month_n <= 12 or (day_n is not None and not 1 <= day_n <= 31):
        return None

    return MultipartDate(
        year=_expand_year(year),
        month=month_n - 1,
        day=day_n,
        part=_clean_part(f"{before} {after}"),
        raw=text,
    )


def _parse_text(text: str) -> MultipartDate:
    remaining = text
    year = None
    month = None
    day = None

    m = _YEAR_RE.search(remaining)
    if m:
        if m.group(3):
            year = int(m.group(3))
        else:
            year = int(m.group(1))
            if m.group(2).upper().startswith("B"):
                year = -year
        remaining = _cut(remaining, m)

    m = _MONTH_RE.search(remaining)
    if m:
        name = (m.group(1) or m.group(2)).lower()
        month = next(i for i, full in enumerate(MONTH_NAMES) if full.lower().startswith(name[:3]))
        remaining = _cut(remaining, m)

        for day_match in _DAY_RE.finditer(remaining):
            value = int(day_match.group(1))
            if 1 <= value <= 31:
                day = value
                remaining = _cut(remaining, day_match)
                break

    return MultipartDate(year=year, month=month, day=day, part=_clean_part(remaining), raw=text)


def str_to_date(text: str, month_first: bool = True) -> MultipartDate:
    """Parse free text into a structured date.

    Parameters
    ----------
    text : str
        Date text: SQL date or datetime, multipart string, numeric date
        with ``/``, ``.`` or ``-`` separators, or text with English month
        names.
    month_first : bool, optional
        Read ambiguous numeric dates as month/day/year (True) or
        day/month/year (False).

    Returns
    -------
    MultipartDate
        Parsed date. ``year`` is None when no year could be found.

    Examples
    --------
    >>> str_to_date("March 5, 2020")
    MultipartDate(year=2020, month=2, day=5, part=None, raw='March 5, 2020')
    >>> str_to_date("05/03/2020", month_first=False).month
    2
    """
    text = text.strip()
    if not text:
        return MultipartDate(raw=text)

    if is_multipart(text):
        parsed = _parse_sql(text[:10])
        if parsed is not None:
            # Seasons only survive in the text half
            part = str_to_date(text[11:], month_first).part if parsed.month is None else None
            return MultipartDate(
                year=parsed.year, month=parsed.month, day=parsed.day, part=part, raw=text
            )

    parsed = _parse_sql(text)
    if parsed is not None:
        return parsed

    parsed = _parse_numeric(text, month_first)
    if parsed is not None:
        return parsed

    return _parse_text(text)


def date_to_sql(date: MultipartDate) -> str:
    """Render a date as ``YYYY-MM-DD`` with zeros for absent parts."""
    year = lpad(date.year or 0, "0", 4)
    month = lpad(date.month + 1 if date.month is not None else 0, "0", 2)
    day = lpad(date.day or 0, "0", 2)
    return f"{year}-{month}-{day}"


def multipart_to_sql(value: str, month_first: bool = True) -> str:
    """Return the SQL part of a multipart value, parsing plain text."""
    if not value:
        return ""
    if is_multipart(value):
        return value[:10]
    return date_to_sql(str_to_date(value, month_first))


def multipart_to_str(value: str) -> str:
    """Return the original text of a multipart value."""
    if value and is_multipart(value):
        return value[11:]
    return value


def str_to_multipart(value: str, month_first: bool = True) -> str:
    """Prefix free text with its SQL rendering."""
    if not value:
        return ""
    return f"{date_to_sql(str_to_date(value, month_first))} {value}"


def sql_to_datetime(value: str, is_utc: bool = False) -> datetime | None:
    """Parse an SQL date or datetime.

    Parameters
    ----------
    value : str
        ``YYYY-MM-DD`` or ``YYYY-MM-DD HH:MM:SS``.
    is_utc : bool, optional
        Attach UTC to the result; otherwise it is naive.

    Returns
    -------
    datetime | None
        Parsed value, or None if the text is not an SQL date.
    """
    m = _SQL_DATETIME_RE.match(value) or _SQL_DATE_RE.match(value)
    if not m:
        return None
    try:
        dt = datetime(*(int(g) for g in m.groups()))
    except ValueError:
        return None
    return dt.replace(tzinfo=UTC) if is_utc else dt


def datetime_to_sql(dt: datetime, date_only: bool = False) -> str:
    """Render a datetime as SQL."""
    if date_only:
        return dt.strftime("%Y-%m-%d")
    return dt.strftime("%Y-%m-%d %H:%M:%S")


def access_date_to_local(value: str, timezone: str | None = None) -> str | None:
    """Convert a stored UTC access timestamp to a local SQL date.

    Parameters
    ----------
    value : str
        SQL date, SQL datetime (UTC) or ISO 8601 timestamp.
    timezone : str | None, optional
        IANA zone; None uses the system zone.

    Returns
    -------
    str | None
        ``YYYY-MM-DD`` in local time, or None if the value is not a
        timestamp.
    """
    value = value.strip()
    if is_sql_date(value):
        return value

    if is_iso_datetime(value):
        dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    else:
        dt = sql_to_datetime(value, is_utc=True)
    if dt is None:
        return None

    zone = ZoneInfo(timezone) if timezone else None
    return datetime_to_sql(dt.astimezone(zone), date_only=True)


def format_date(date: MultipartDate) -> str:
    """Render a date as English text ("March 5, 2020", "March 2020", "2020")."""
    if date.year is None:
        return ""
    if date.month is None:
        return str(date.year)
    month = MONTH_NAMES[date.month]
    if date.day:
        return f"{month} {date.day}, {date.year}"
    return f"{month} {date.year}"

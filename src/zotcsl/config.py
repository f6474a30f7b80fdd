"""Conversion configuration and per-call options."""

import re
from dataclasses import asdict, dataclass
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from zotcsl.dates import locale_region, month_first_for_locale

__all__ = ["ConversionConfig", "ConversionOptions"]

_LOCALE_RE = re.compile(r"^[A-Za-z]{2,3}(?:[-_][A-Za-z0-9]{2,8})*$")


@dataclass
class ConversionConfig:
    """Environment-level settings consulted during conversion.

    The locale is carried here and passed into every call rather than read
    from shared state, so concurrent conversions may use different locales.

    Attributes
    ----------
    locale : str | None
        BCP 47 locale (e.g. 'en-US'). Its region decides day/month order
        of ambiguous numeric dates. None behaves like a US locale.
    jurisdiction_default : str | None
        Jurisdiction assigned on import when the record has none.
    jurisdiction_fallback : str | None
        Used when no default is configured.
    use_citeproc_date_parser : bool
        Export dates through the citeproc-style date array parser instead
        of the multipart date parser.
    timezone : str | None
        IANA zone for rendering access dates. None uses the system zone.
    """

    locale: str | None = "en-US"
    jurisdiction_default: str | None = None
    jurisdiction_fallback: str | None = None
    use_citeproc_date_parser: bool = False
    timezone: str | None = None

    def __post_init__(self) -> None:
        """Validate locale and timezone."""
        if self.locale is not None and not _LOCALE_RE.match(self.locale):
            raise ValueError(f"Invalid locale: {self.locale!r}")

        if self.timezone is not None:
            try:
                ZoneInfo(self.timezone)
            except (ZoneInfoNotFoundError, ValueError) as e:
                raise ValueError(f"Unknown timezone: {self.timezone!r}") from e

    @property
    def region(self) -> str | None:
        """Region subtag of the locale, upper-cased, if any."""
        return locale_region(self.locale)

    @property
    def month_first(self) -> bool:
        """Whether ambiguous numeric dates read month before day."""
        return month_first_for_locale(self.locale)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


@dataclass(frozen=True)
class ConversionOptions:
    """Per-call conversion switches.

    Attributes
    ----------
    portable : bool
        Apply the reversible portable transform (extended fields and
        language overlays travel inside ``extra`` / ``note``).
    include_relations : bool
        Copy ``seeAlso`` relations.
    strict : bool
        Fail with ``UnknownTypeError`` instead of falling back to
        ``document`` when no item type can be inferred.
    repair : bool
        Promote given-name-only creators to family names on import.
        Always on in portable mode.
    """

    portable: bool = False
    include_relations: bool = False
    strict: bool = False
    repair: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

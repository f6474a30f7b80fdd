"""Fatal conversion errors.

Only structural impossibilities are raised. Per-field and per-creator
anomalies are reported as diagnostics instead (see ``zotcsl.diagnostics``).
"""

__all__ = [
    "ConversionError",
    "MissingTypeError",
    "UnknownTypeError",
    "UnmappableTypeError",
]


class ConversionError(Exception):
    """Base class for conversion failures."""

    def __init__(
        self,
        message: str,
        item_type: str | None = None,
        csl_type: str | None = None,
    ) -> None:
        """Initialize conversion error.

        Parameters
        ----------
        message : str
            Error message.
        item_type : str | None, optional
            Internal item type involved.
        csl_type : str | None, optional
            CSL type involved.
        """
        super().__init__(message)
        self.item_type = item_type
        self.csl_type = csl_type


class MissingTypeError(ConversionError):
    """Raised when a CSL record has no ``type``."""


class UnknownTypeError(ConversionError):
    """Raised in strict mode when no item type can be inferred."""


class UnmappableTypeError(ConversionError):
    """Raised when an item type has no CSL counterpart."""

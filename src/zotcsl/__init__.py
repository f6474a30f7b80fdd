"""Lossless-as-possible conversion between item JSON and CSL-JSON.

This package provides:
- Registry (zotcsl.registry) - item types, fields and creator types
- Mappings (zotcsl.mappings) - field, name, date and type correspondence
- Names (zotcsl.names) - name-particle parsing
- Dates (zotcsl.dates) - multipart and CSL date normalization
- Inference (zotcsl.inference) - CSL type -> item type rules
- Convert (zotcsl.convert) - item <-> CSL converters and portable transform
- Adapters (zotcsl.adapters) - web API and legacy export record shapes
- Call numbers (zotcsl.callnumbers) - Dewey, LC and numeric call number ordering
- Languages (zotcsl.languages) - language name -> ISO 639-1 code lookup
- Diagnostics (zotcsl.diagnostics) - advisory diagnostics and JSONL logging
- CLI (zotcsl.cli) - command-line interface
- Public API (zotcsl.api) - batch conversion of JSON files
"""

__version__ = "0.1.0"
__author__ = "Ennio Politi Lopes <enniolopes@gmail.com>"
__license__ = "MIT"

from zotcsl.api import (
    BatchResult,
    InputError,
    convert_from_csl,
    convert_to_csl,
    read_records,
    write_records,
)
from zotcsl.callnumbers import compare_call_numbers
from zotcsl.config import ConversionConfig, ConversionOptions
from zotcsl.convert import item_from_csl_json, item_to_csl_json
from zotcsl.diagnostics import Diagnostic, DiagnosticCollector
from zotcsl.errors import (
    ConversionError,
    MissingTypeError,
    UnknownTypeError,
    UnmappableTypeError,
)
from zotcsl.inference import infer_item_type
from zotcsl.languages import language_to_iso6391
from zotcsl.mappings import CslMaps, default_maps
from zotcsl.models import Creator, Item, MultiOverlay
from zotcsl.names import parse_particles

__all__ = [
    "__version__",
    "__author__",
    "__license__",
    "BatchResult",
    "ConversionConfig",
    "ConversionError",
    "ConversionOptions",
    "Creator",
    "CslMaps",
    "Diagnostic",
    "DiagnosticCollector",
    "InputError",
    "Item",
    "MissingTypeError",
    "MultiOverlay",
    "UnknownTypeError",
    "UnmappableTypeError",
    "compare_call_numbers",
    "convert_from_csl",
    "convert_to_csl",
    "default_maps",
    "infer_item_type",
    "item_from_csl_json",
    "item_to_csl_json",
    "language_to_iso6391",
    "parse_particles",
    "read_records",
    "write_records",
]

"""Pytest configuration and fixtures for test suite."""

import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

# Add src directory to path for imports
SRC_PATH = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(SRC_PATH))

from zotcsl.diagnostics import DiagnosticCollector  # noqa: E402
from zotcsl.mappings import CslMaps, default_maps  # noqa: E402
from zotcsl.models import Creator, Item  # noqa: E402


@pytest.fixture
def maps() -> CslMaps:
    """Maps for the bundled schema."""
    return default_maps()


@pytest.fixture
def collector() -> DiagnosticCollector:
    """Fresh diagnostic sink."""
    return DiagnosticCollector()


@pytest.fixture
def make_item() -> Callable[..., Item]:
    """Factory for test items with minimal boilerplate.

    Creators are given as (creatorType, lastName, firstName) tuples, or
    (creatorType, name) for single-field names.
    """

    def _factory(
        item_type: str = "book",
        *,
        creators: list[tuple[str, ...]] | None = None,
        item_id: str | int | None = None,
        **fields: Any,
    ) -> Item:
        built = []
        for entry in creators or []:
            if len(entry) == 2:
                built.append(Creator(name=entry[1], creator_type=entry[0]))
            else:
                built.append(
                    Creator(last_name=entry[1], first_name=entry[2], creator_type=entry[0])
                )
        return Item(item_type=item_type, fields=dict(fields), creators=built, item_id=item_id)

    return _factory

"""Tests for CSL-JSON -> item conversion."""

import pytest

from zotcsl.config import ConversionConfig, ConversionOptions
from zotcsl.convert import item_from_csl_json
from zotcsl.diagnostics import (
    INVALID_CREATOR,
    INVALID_CREATOR_TYPE,
    UNKNOWN_FIELD,
    UNPARSEABLE_DATE,
    DiagnosticCollector,
)
from zotcsl.errors import MissingTypeError, UnknownTypeError
from zotcsl.mappings import CslMaps
from zotcsl.models import Creator
from zotcsl.registry import ItemSchema

# ---------------------------------------------------------------------------
# Fields
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_journal_article_import() -> None:
    """Test a typical journal article."""
    csl_item = {
        "id": "curie1903",
        "type": "article-journal",
        "title": "Radioactive substances",
        "container-title": "Chemical News",
        "volume": 88,
        "page": "85-86",
        "DOI": "10.1000/xyz",
        "author": [{"family": "Curie", "given": "Marie"}],
        "issued": {"date-parts": [[1903, 6]]},
    }

    item = item_from_csl_json(csl_item)

    assert item.item_type == "journalArticle"
    assert item.item_id == "curie1903"
    assert item.fields == {
        "title": "Radioactive substances",
        "publicationTitle": "Chemical News",
        "volume": "88",
        "pages": "85-86",
        "DOI": "10.1000/xyz",
        "date": "June 1903",
    }
    assert item.creators == [Creator(last_name="Curie", first_name="Marie")]


@pytest.mark.unit
def test_variables_land_in_type_specific_fields() -> None:
    """Test base-field variables fill the type's alias."""
    item = item_from_csl_json(
        {
            "type": "legal_case",
            "title": "Brown v. Board of Education",
            "authority": "Supreme Court",
            "number": "1",
            "issued": {"date-parts": [[1954, 5, 17]]},
        }
    )

    assert item.item_type == "case"
    assert item.fields["caseName"] == "Brown v. Board of Education"
    assert item.fields["court"] == "Supreme Court"
    assert item.fields["docketNumber"] == "1"
    assert item.fields["dateDecided"] == "May 17, 1954"
    assert "title" not in item.fields


@pytest.mark.unit
def test_variables_invalid_for_type_are_dropped() -> None:
    """Test variables the inferred type cannot hold are not stored."""
    item = item_from_csl_json({"type": "book", "title": "T", "DOI": "10.1/x"})

    assert item.fields == {"title": "T"}


@pytest.mark.unit
def test_boolean_values_are_ignored() -> None:
    """Test only string and numeric values are imported."""
    item = item_from_csl_json({"type": "book", "title": True, "volume": 2.5})

    assert item.fields == {"volume": "2.5"}


@pytest.mark.unit
def test_unknown_variables_are_reported() -> None:
    """Test unrecognized CSL keys produce diagnostics."""
    collector = DiagnosticCollector()

    item_from_csl_json({"id": 1, "type": "book", "foo": "bar"}, diagnostics=collector)

    assert collector.codes() == [UNKNOWN_FIELD]
    assert next(iter(collector)).field == "foo"


@pytest.mark.unit
def test_language_overlay_import() -> None:
    """Test variable overlays move to the matching item field."""
    item = item_from_csl_json(
        {
            "type": "chapter",
            "container-title": "Collected Stories",
            "multi": {
                "main": {"container-title": "en"},
                "_keys": {"container-title": {"ja": "短編集"}},
            },
        }
    )

    assert item.multi.main == {"bookTitle": "en"}
    assert item.multi.keys == {"bookTitle": {"ja": "短編集"}}
    assert item.fields["bookTitle"] == "Collected Stories"


@pytest.mark.unit
def test_relations_only_when_requested() -> None:
    """Test seeAlso is copied only with include_relations."""
    csl_item = {"type": "book", "seeAlso": ["http://zotero.org/users/1/items/ABCD2345"]}

    assert item_from_csl_json(csl_item).see_also == []
    assert item_from_csl_json(csl_item, ConversionOptions(include_relations=True)).see_also == [
        "http://zotero.org/users/1/items/ABCD2345"
    ]


# ---------------------------------------------------------------------------
# Type errors
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_missing_type_raises() -> None:
    """Test records without a type fail."""
    with pytest.raises(MissingTypeError):
        item_from_csl_json({"title": "T"})


@pytest.mark.unit
def test_unknown_type_strict() -> None:
    """Test strict mode fails on unknown types and lenient mode falls back."""
    with pytest.raises(UnknownTypeError):
        item_from_csl_json({"type": "hologram"}, ConversionOptions(strict=True))

    assert item_from_csl_json({"type": "hologram", "title": "T"}).item_type == "document"


# ---------------------------------------------------------------------------
# Jurisdiction
# ---------------------------------------------------------------------------


@pytest.mark.unit
@pytest.mark.parametrize(
    ("csl_jurisdiction", "config", "expected"),
    [
        ("ca", ConversionConfig(), "ca"),
        (None, ConversionConfig(), "us"),
        (None, ConversionConfig(jurisdiction_default="gb"), "gb"),
        (None, ConversionConfig(jurisdiction_fallback="fr"), "fr"),
        (None, ConversionConfig(jurisdiction_default="gb", jurisdiction_fallback="fr"), "gb"),
    ],
)
def test_jurisdiction_defaults(
    csl_jurisdiction: str | None, config: ConversionConfig, expected: str
) -> None:
    """Test jurisdiction precedence for types that carry one."""
    csl_item: dict = {"type": "legislation", "title": "Clean Air Act"}
    if csl_jurisdiction:
        csl_item["jurisdiction"] = csl_jurisdiction

    item = item_from_csl_json(csl_item, config=config)

    assert item.fields["jurisdiction"] == expected


@pytest.mark.unit
@pytest.mark.parametrize("csl_type", ["article-journal", "report", "book"])
def test_jurisdiction_not_defaulted(csl_type: str) -> None:
    """Test excluded types and types without the field get no default."""
    item = item_from_csl_json({"type": csl_type, "title": "T"})

    assert "jurisdiction" not in item.fields


# ---------------------------------------------------------------------------
# Creators
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_particles_are_folded_back() -> None:
    """Test particle and suffix keys rejoin the name parts."""
    item = item_from_csl_json(
        {
            "type": "book",
            "author": [
                {"family": "Berg", "given": "Jan", "non-dropping-particle": "van der"},
                {"family": "King", "given": "Martin Luther", "suffix": "Jr."},
            ],
        }
    )

    assert [(c.last_name, c.first_name) for c in item.creators] == [
        ("van der Berg", "Jan"),
        ("King", "Martin Luther, Jr."),
    ]


@pytest.mark.unit
def test_creator_type_falls_back_to_primary() -> None:
    """Test name variables invalid for the type use the primary creator type."""
    collector = DiagnosticCollector()

    item = item_from_csl_json(
        {"type": "book", "composer": [{"family": "Bach", "given": "J. S."}]},
        diagnostics=collector,
    )

    assert [c.creator_type for c in item.creators] == ["author"]
    assert collector.codes() == [INVALID_CREATOR_TYPE]
    assert next(iter(collector)).level == "INFO"


@pytest.mark.unit
def test_creators_dropped_for_types_without_creators() -> None:
    """Test names are dropped when the type takes no creators."""
    document = {"itemType": "document", "fields": [{"field": "title"}], "creatorTypes": []}
    registry = ItemSchema({"itemTypes": [document]})
    collector = DiagnosticCollector()

    item = item_from_csl_json(
        {"type": "document", "title": "T", "author": [{"literal": "X"}]},
        maps=CslMaps.build(registry),
        diagnostics=collector,
    )

    assert item.creators == []
    assert collector.codes() == [INVALID_CREATOR_TYPE]
    assert next(iter(collector)).level == "WARN"


@pytest.mark.unit
def test_nameless_entries_are_dropped() -> None:
    """Test empty name objects are dropped with a diagnostic."""
    collector = DiagnosticCollector()

    item = item_from_csl_json(
        {"type": "book", "author": [{"family": "", "given": ""}, {"literal": "NASA"}, "bad"]},
        diagnostics=collector,
    )

    assert [c.name for c in item.creators] == ["NASA"]
    assert collector.codes() == [INVALID_CREATOR, INVALID_CREATOR]


@pytest.mark.unit
def test_repair_option() -> None:
    """Test given-only names become family names with repair."""
    csl_item = {"type": "book", "author": [{"given": "Madonna"}]}

    plain = item_from_csl_json(csl_item)
    repaired = item_from_csl_json(csl_item, ConversionOptions(repair=True))

    assert (plain.creators[0].last_name, plain.creators[0].first_name) == ("", "Madonna")
    assert (repaired.creators[0].last_name, repaired.creators[0].first_name) == ("Madonna", "")


@pytest.mark.unit
def test_name_variable_order_is_kept() -> None:
    """Test creators follow name variable order, then list order."""
    item = item_from_csl_json(
        {
            "type": "book",
            "translator": [{"literal": "T"}],
            "author": [{"literal": "A1"}, {"literal": "A2"}],
            "editor": [{"literal": "E"}],
        }
    )

    assert [(c.creator_type, c.name) for c in item.creators] == [
        ("author", "A1"),
        ("author", "A2"),
        ("editor", "E"),
        ("translator", "T"),
    ]


# ---------------------------------------------------------------------------
# Dates
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_access_date_import() -> None:
    """Test accessed dates become zero-padded SQL dates."""
    item = item_from_csl_json({"type": "webpage", "accessed": {"date-parts": [[2020, 3, 5]]}})

    assert item.fields["accessDate"] == "2020-03-05"


@pytest.mark.unit
def test_season_and_raw_dates() -> None:
    """Test season prefixes and raw date strings."""
    seasonal = item_from_csl_json(
        {"type": "book", "issued": {"date-parts": [[2020]], "season": "Spring"}}
    )
    raw = item_from_csl_json({"type": "book", "issued": {"raw": "2020-03-05"}})

    assert seasonal.fields["date"] == "Spring 2020"
    assert raw.fields["date"] == "March 5, 2020"


@pytest.mark.unit
def test_unparseable_date_is_stored_verbatim() -> None:
    """Test literal dates without a year are stored as-is."""
    collector = DiagnosticCollector()

    item = item_from_csl_json(
        {"type": "book", "issued": {"literal": "n.d."}}, diagnostics=collector
    )

    assert item.fields["date"] == "n.d."
    assert collector.codes() == [UNPARSEABLE_DATE]


@pytest.mark.unit
def test_season_month_import() -> None:
    """Test date-parts season months import as season names."""
    item = item_from_csl_json(
        {"type": "book", "title": "T", "issued": {"date-parts": [[2020, 21]]}}
    )

    assert item.fields["date"] == "Spring 2020"


@pytest.mark.unit
def test_impossible_month_does_not_abort_import() -> None:
    """Test an out-of-range month is dropped and the record still converts."""
    collector = DiagnosticCollector()

    item = item_from_csl_json(
        {"type": "book", "title": "T", "issued": {"date-parts": [[2020, 13, 1]]}},
        diagnostics=collector,
    )

    assert item.fields == {"title": "T", "date": "2020"}
    assert collector.codes() == [UNPARSEABLE_DATE]

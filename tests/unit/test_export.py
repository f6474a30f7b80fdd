"""Tests for item -> CSL-JSON conversion."""

from collections.abc import Callable

import pytest

from zotcsl.config import ConversionConfig, ConversionOptions
from zotcsl.convert import item_to_csl_json
from zotcsl.convert.recode import MLZ_PREFIX, split_extra_header
from zotcsl.diagnostics import (
    INVALID_CREATOR,
    ORPHAN_OVERLAY,
    UNKNOWN_FIELD,
    UNPARSEABLE_DATE,
    DiagnosticCollector,
)
from zotcsl.errors import UnmappableTypeError
from zotcsl.models import Creator, CreatorName, Item, MultiOverlay

# ---------------------------------------------------------------------------
# Text variables
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_book_export(make_item: Callable[..., Item]) -> None:
    """Test a complete book record."""
    item = make_item(
        "book",
        item_id="b1",
        creators=[("author", "Eliot", "George"), ("editor", "Ashton", "Rosemary")],
        title="Middlemarch",
        publisher="Penguin",
        place="London",
        date="2020-03-05",
        ISBN="978-3-16-148410-0 9780000000002",
    )

    csl = item_to_csl_json(item)

    assert csl == {
        "id": "b1",
        "type": "book",
        "title": "Middlemarch",
        "publisher": "Penguin",
        "publisher-place": "London",
        "event-place": "London",
        "ISBN": "978-3-16-148410-0",
        "author": [{"family": "Eliot", "given": "George"}],
        "editor": [{"family": "Ashton", "given": "Rosemary"}],
        "issued": {"date-parts": [[2020, 3, 5]]},
    }
    assert list(csl)[:2] == ["id", "type"]


@pytest.mark.unit
def test_item_json_input() -> None:
    """Test plain item JSON is accepted."""
    csl = item_to_csl_json({"itemType": "book", "title": "Middlemarch"})

    assert csl == {"type": "book", "title": "Middlemarch"}


@pytest.mark.unit
def test_type_specific_fields_export_through_base(make_item: Callable[..., Item]) -> None:
    """Test aliases such as caseName feed their base field's variable."""
    item = make_item(
        "case",
        caseName="Brown v. Board of Education",
        court="Supreme Court",
        dateDecided="1954-05-17",
        docketNumber="1",
    )

    csl = item_to_csl_json(item)

    assert csl["type"] == "legal_case"
    assert csl["title"] == "Brown v. Board of Education"
    assert csl["authority"] == "Supreme Court"
    assert csl["number"] == "1"
    assert csl["issued"] == {"date-parts": [[1954, 5, 17]]}


@pytest.mark.unit
def test_legacy_version_field(make_item: Callable[..., Item]) -> None:
    """Test a legacy 'version' value exports as the program version."""
    collector = DiagnosticCollector()
    item = make_item("computerProgram", title="zotcsl", version="2.0")

    csl = item_to_csl_json(item, diagnostics=collector)

    assert csl["version"] == "2.0"
    assert UNKNOWN_FIELD not in collector.codes()


@pytest.mark.unit
def test_extra_lines_are_rekeyed(make_item: Callable[..., Item]) -> None:
    """Test extra becomes note with CSL keys."""
    item = make_item("book", extra="Original Date: 1850\nPMID: 123\nfree text")

    assert item_to_csl_json(item)["note"] == "original-date: 1850\nPMID: 123\nfree text"


@pytest.mark.unit
def test_jurisdiction_code_is_extracted(make_item: Callable[..., Item]) -> None:
    """Test length-prefixed jurisdiction values export their code."""
    item = make_item("statute", nameOfAct="Clean Air Act", jurisdiction="002usUnited States")

    assert item_to_csl_json(item)["jurisdiction"] == "us"


@pytest.mark.unit
def test_enclosing_quotes_are_stripped(make_item: Callable[..., Item]) -> None:
    """Test a fully quoted value loses its quotes."""
    item = make_item("book", title='"Quoted Title"')

    assert item_to_csl_json(item)["title"] == "Quoted Title"


@pytest.mark.unit
def test_numbers_are_exported_as_strings(make_item: Callable[..., Item]) -> None:
    """Test numeric field values become strings."""
    item = make_item("book", title="T", volume=3, numPages=250)

    csl = item_to_csl_json(item)

    assert csl["volume"] == "3"
    assert csl["number-of-pages"] == "250"


@pytest.mark.unit
def test_unknown_fields_are_reported(make_item: Callable[..., Item]) -> None:
    """Test unknown item fields are reported but metadata keys are not."""
    collector = DiagnosticCollector()
    item = make_item("book", title="T", foo="bar", key="ABCD2345", dateAdded="2020-01-01")

    csl = item_to_csl_json(item, diagnostics=collector)

    assert "foo" not in csl
    assert [d.field for d in collector] == ["foo"]
    assert collector.codes() == [UNKNOWN_FIELD]


@pytest.mark.unit
def test_unmappable_type_raises(make_item: Callable[..., Item]) -> None:
    """Test item types without a CSL type are rejected."""
    with pytest.raises(UnmappableTypeError) as exc_info:
        item_to_csl_json(make_item("attachment", title="PDF"))

    assert exc_info.value.item_type == "attachment"


# ---------------------------------------------------------------------------
# Creators
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_primary_creator_exports_as_author(make_item: Callable[..., Item]) -> None:
    """Test the primary creator type maps to author."""
    item = make_item("computerProgram", title="T", creators=[("programmer", "Torvalds", "Linus")])

    assert item_to_csl_json(item)["author"] == [{"family": "Torvalds", "given": "Linus"}]


@pytest.mark.unit
def test_unmapped_creator_types_are_skipped(make_item: Callable[..., Item]) -> None:
    """Test creator types without a CSL variable are dropped."""
    item = make_item(
        "bookSection",
        creators=[("bookAuthor", "Woolf", "Virginia"), ("contributor", "Doe", "Jane")],
    )

    csl = item_to_csl_json(item)

    assert csl["container-author"] == [{"family": "Woolf", "given": "Virginia"}]
    assert "author" not in csl
    assert "contributor" not in csl


@pytest.mark.unit
def test_video_recording_creators_are_directors(make_item: Callable[..., Item]) -> None:
    """Test every mapped videoRecording creator exports as director."""
    item = make_item(
        "videoRecording",
        creators=[("director", "Varda", "Agnès"), ("castMember", "Marchand", "Corinne")],
    )

    csl = item_to_csl_json(item)

    assert csl["type"] == "motion_picture"
    assert [n["family"] for n in csl["director"]] == ["Varda", "Marchand"]
    assert "author" not in csl


@pytest.mark.unit
def test_nameless_creator_is_reported(make_item: Callable[..., Item]) -> None:
    """Test creators without a name are dropped with a diagnostic."""
    collector = DiagnosticCollector()
    item = make_item("book", creators=[("author", "", ""), ("author", "Eliot", "George")])

    csl = item_to_csl_json(item, diagnostics=collector)

    assert csl["author"] == [{"family": "Eliot", "given": "George"}]
    assert collector.codes() == [INVALID_CREATOR]


@pytest.mark.unit
def test_literal_and_particle_names(make_item: Callable[..., Item]) -> None:
    """Test single-field names and particles in exported names."""
    item = make_item(
        "book",
        creators=[("author", "World Health Organization"), ("author", "van Gogh", "Vincent")],
    )

    assert item_to_csl_json(item)["author"] == [
        {"literal": "World Health Organization"},
        {"family": "Gogh", "given": "Vincent", "non-dropping-particle": "van"},
    ]


# ---------------------------------------------------------------------------
# Dates
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_unparseable_date_is_literal(make_item: Callable[..., Item]) -> None:
    """Test dates without a year pass through as literals."""
    collector = DiagnosticCollector()
    item = make_item("book", date="n.d.")

    csl = item_to_csl_json(item, diagnostics=collector)

    assert csl["issued"] == {"literal": "n.d."}
    assert collector.codes() == [UNPARSEABLE_DATE]


@pytest.mark.unit
def test_access_date_renders_in_configured_zone(make_item: Callable[..., Item]) -> None:
    """Test access timestamps convert to the configured zone."""
    item = make_item("webpage", title="T", accessDate="2020-03-06 02:00:00")

    utc = item_to_csl_json(item, config=ConversionConfig(timezone="UTC"))
    new_york = item_to_csl_json(item, config=ConversionConfig(timezone="America/New_York"))

    assert utc["accessed"] == {"raw": "2020-03-06"}
    assert new_york["accessed"] == {"raw": "2020-03-05"}


@pytest.mark.unit
def test_locale_decides_numeric_dates(make_item: Callable[..., Item]) -> None:
    """Test day/month order follows the configured locale."""
    item = make_item("book", date="05/03/2020")

    us = item_to_csl_json(item, config=ConversionConfig(locale="en-US"))
    gb = item_to_csl_json(item, config=ConversionConfig(locale="en-GB"))

    assert us["issued"] == {"date-parts": [[2020, 5, 3]]}
    assert gb["issued"] == {"date-parts": [[2020, 3, 5]]}


@pytest.mark.unit
def test_citeproc_date_parser(make_item: Callable[..., Item]) -> None:
    """Test the citeproc parser reads date ranges."""
    item = make_item("book", date="1990 - 1995")

    csl = item_to_csl_json(item, config=ConversionConfig(use_citeproc_date_parser=True))

    assert csl["issued"] == {"date-parts": [[1990], [1995]]}


# ---------------------------------------------------------------------------
# Forced fields, notes, relations
# ---------------------------------------------------------------------------


@pytest.mark.unit
@pytest.mark.parametrize(
    ("item_type", "genre"),
    [
        ("email", "email"),
        ("instantMessage", "instant message"),
        ("podcast", "podcast"),
        ("radioBroadcast", "radio broadcast"),
        ("tvBroadcast", "television broadcast"),
    ],
)
def test_forced_genre(make_item: Callable[..., Item], item_type: str, genre: str) -> None:
    """Test item types whose genre is fixed."""
    assert item_to_csl_json(make_item(item_type, title="T"))["genre"] == genre


@pytest.mark.unit
def test_conference_name_moves_to_event_title(make_item: Callable[..., Item]) -> None:
    """Test conference papers export their event as event-title."""
    item = make_item("conferencePaper", title="T", conferenceName="PyCon")

    csl = item_to_csl_json(item)

    assert csl["event-title"] == "PyCon"
    assert "event" not in csl


@pytest.mark.unit
def test_note_title() -> None:
    """Test notes export as documents titled by their first line."""
    item = Item(item_type="note", note="<p>Reading list</p><p>Second</p>")

    assert item_to_csl_json(item) == {"type": "document", "title": "Reading list"}


@pytest.mark.unit
def test_relations_only_when_requested(make_item: Callable[..., Item]) -> None:
    """Test seeAlso is copied only with include_relations."""
    item = make_item("book", title="T")
    item.see_also = ["http://zotero.org/users/1/items/ABCD2345"]

    assert "seeAlso" not in item_to_csl_json(item)
    assert item_to_csl_json(item, ConversionOptions(include_relations=True))["seeAlso"] == [
        "http://zotero.org/users/1/items/ABCD2345"
    ]


# ---------------------------------------------------------------------------
# Language overlays and portable mode
# ---------------------------------------------------------------------------


def _multilingual_item() -> Item:
    return Item(
        item_type="journalArticle",
        fields={"title": "Norwegian Wood", "jurisdiction": "us", "extra": "PMID: 1"},
        creators=[
            Creator(
                last_name="Murakami",
                first_name="Haruki",
                multi_main="en",
                multi_keys={"ja": CreatorName(last_name="村上", first_name="春樹")},
            )
        ],
        multi=MultiOverlay(main={"title": "en"}, keys={"title": {"ja": "ノルウェイの森"}}),
    )


@pytest.mark.unit
def test_language_overlays_export_as_multi() -> None:
    """Test field and creator overlays export under multi."""
    csl = item_to_csl_json(_multilingual_item())

    assert csl["multi"] == {"main": {"title": "en"}, "_keys": {"title": {"ja": "ノルウェイの森"}}}
    assert csl["author"][0]["multi"] == {
        "main": "en",
        "_key": {"ja": {"family": "村上", "given": "春樹"}},
    }
    assert csl["jurisdiction"] == "us"


@pytest.mark.unit
def test_no_multi_without_overlays(make_item: Callable[..., Item]) -> None:
    """Test records without overlays carry no multi key."""
    assert "multi" not in item_to_csl_json(make_item("book", title="T"))


@pytest.mark.unit
def test_overlay_without_field_value_is_reported() -> None:
    """Test overlays on empty fields are reported and left out of multi."""
    collector = DiagnosticCollector()
    item = Item(
        item_type="book",
        fields={"title": "Norwegian Wood"},
        multi=MultiOverlay(
            main={"title": "en", "publisher": "ja"},
            keys={"place": {"ja": "東京"}},
        ),
    )

    csl = item_to_csl_json(item, diagnostics=collector)

    assert csl["multi"] == {"main": {"title": "en"}, "_keys": {}}
    assert collector.codes() == [ORPHAN_OVERLAY, ORPHAN_OVERLAY]
    assert [d.field for d in collector] == ["place", "publisher"]
    assert {d.level for d in collector} == {"INFO"}


@pytest.mark.unit
def test_portable_export_moves_data_into_note() -> None:
    """Test portable mode carries extended fields and overlays in note."""
    csl = item_to_csl_json(_multilingual_item(), ConversionOptions(portable=True))

    assert "multi" not in csl
    assert "jurisdiction" not in csl
    assert "multi" not in csl["author"][0]
    assert csl["note"].startswith(MLZ_PREFIX)

    payload, rest = split_extra_header(csl["note"])
    assert payload is not None
    assert payload["extrafields"] == {"jurisdiction": "us"}
    assert payload["multifields"]["_keys"] == {"title": {"ja": "ノルウェイの森"}}
    assert payload["multicreators"][0]["multi"]["main"] == "en"
    assert rest == "PMID: 1"


@pytest.mark.unit
def test_portable_export_does_not_modify_input() -> None:
    """Test the caller's item is left untouched."""
    item = _multilingual_item()

    item_to_csl_json(item, ConversionOptions(portable=True))

    assert item.fields["jurisdiction"] == "us"
    assert item.fields["extra"] == "PMID: 1"
    assert not item.multi.is_empty()
    assert item.creators[0].multi_main == "en"

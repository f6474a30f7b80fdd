"""Tests for creator <-> CSL name conversion."""

import pytest

from zotcsl.models import Creator, CreatorName
from zotcsl.names import (
    creator_to_csl_name,
    csl_name_to_creator,
    csl_name_to_creator_name,
    join_particles,
)


@pytest.mark.unit
def test_two_field_creator_is_parsed() -> None:
    """Test family/given output with particles parsed."""
    name = creator_to_csl_name(CreatorName(last_name="van der Berg", first_name="Jan"))

    assert name == {"family": "Berg", "given": "Jan", "non-dropping-particle": "van der"}


@pytest.mark.unit
def test_single_field_creator_is_literal() -> None:
    """Test single-field names become literals."""
    assert creator_to_csl_name(CreatorName(name="World Health Organization")) == {
        "literal": "World Health Organization"
    }


@pytest.mark.unit
def test_family_only_creator_is_literal() -> None:
    """Test a family name without given name becomes a literal."""
    assert creator_to_csl_name(CreatorName(last_name="Plato", first_name="")) == {
        "literal": "Plato"
    }


@pytest.mark.unit
def test_given_only_creator_keeps_empty_family() -> None:
    """Test a given-only name is not parsed."""
    assert creator_to_csl_name(CreatorName(first_name="Madonna")) == {
        "family": "",
        "given": "Madonna",
    }


@pytest.mark.unit
def test_quoted_family_is_unquoted_without_parsing() -> None:
    """Test quoted family names skip particle parsing."""
    name = creator_to_csl_name(CreatorName(last_name='"de Gruyter"', first_name="Walter"))

    assert name == {"family": "de Gruyter", "given": "Walter"}


@pytest.mark.unit
def test_nameless_creator_is_empty() -> None:
    """Test creators without any name part map to an empty object."""
    assert creator_to_csl_name(CreatorName()) == {}


@pytest.mark.unit
@pytest.mark.parametrize(
    ("name", "expected"),
    [
        (
            {"family": "Cruz", "given": "Juan", "non-dropping-particle": "de la"},
            ("de la Cruz", "Juan"),
        ),
        (
            {"family": "Alembert", "given": "Jean", "non-dropping-particle": "d'"},
            ("d'Alembert", "Jean"),
        ),
        (
            {"family": "Beethoven", "given": "Ludwig", "dropping-particle": "van"},
            ("Beethoven", "Ludwig van"),
        ),
        ({"family": "King", "given": "Martin", "suffix": "Jr."}, ("King", "Martin, Jr.")),
        (
            {"family": "Ford", "given": "Henry", "suffix": "Jr.", "comma-suffix": True},
            ("Ford", "Henry,! Jr."),
        ),
    ],
)
def test_join_particles(name: dict, expected: tuple[str, str]) -> None:
    """Test particles and suffixes fold back into family and given."""
    assert join_particles(name) == expected


@pytest.mark.unit
@pytest.mark.parametrize(
    ("last_name", "first_name"),
    [
        ("van der Berg", "Jan"),
        ("Beethoven", "Ludwig van"),
        ("King", "Martin Luther, Jr."),
        ("d'Alembert", "Jean"),
    ],
)
def test_parse_then_join_restores_name(last_name: str, first_name: str) -> None:
    """Test parsing and re-joining gives back the original parts."""
    name = creator_to_csl_name(CreatorName(last_name=last_name, first_name=first_name))
    parts = csl_name_to_creator_name(name)

    assert parts == CreatorName(last_name=last_name, first_name=first_name)


@pytest.mark.unit
def test_literal_name_to_creator_name() -> None:
    """Test CSL literals become single-field names."""
    assert csl_name_to_creator_name({"literal": "NASA"}) == CreatorName(name="NASA")


@pytest.mark.unit
def test_empty_name_to_creator_name() -> None:
    """Test names without any part are rejected."""
    assert csl_name_to_creator_name({"family": "", "given": ""}) is None
    assert csl_name_to_creator({}, "author") is None


@pytest.mark.unit
def test_repair_promotes_given_only_name() -> None:
    """Test repair mode turns a given-only name into a family name."""
    creator = csl_name_to_creator({"given": "Madonna"}, "author", repair=True)

    assert creator == Creator(last_name="Madonna", first_name="", creator_type="author")


@pytest.mark.unit
def test_given_only_name_without_repair() -> None:
    """Test given-only names are kept as-is without repair."""
    creator = csl_name_to_creator({"given": "Madonna"}, "author")

    assert creator is not None
    assert creator.last_name == ""
    assert creator.first_name == "Madonna"


@pytest.mark.unit
def test_creator_language_variants_are_restored() -> None:
    """Test name multi entries become creator overlays."""
    creator = csl_name_to_creator(
        {
            "family": "Murakami",
            "given": "Haruki",
            "multi": {"main": "en", "_key": {"ja": {"family": "村上", "given": "春樹"}}},
        },
        "author",
    )

    assert creator is not None
    assert creator.multi_main == "en"
    assert creator.multi_keys == {"ja": CreatorName(last_name="村上", first_name="春樹")}

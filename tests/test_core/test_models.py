"""
Tests for the data model.

Validates:
- LawReference never carries section numbers without a chapter
- LawSectionText backrefs are duplicate-free and keep insertion order
- MarkedUpText artifact layout
- SectionCounts tally invariants
"""
import pytest
from pydantic import ValidationError

from springbok_core.models import (
    FetchedLawSection,
    LawReference,
    LawSectionText,
    MarkedUpText,
    SectionCounts,
    SectionType,
    get_section_key,
)


class TestLawReference:

    def test_empty_reference(self):
        reference = LawReference()
        assert reference.chapter_number == ""
        assert reference.section_numbers == ()

    def test_sections_without_chapter_rejected(self):
        with pytest.raises(ValueError):
            LawReference(chapter_number="", section_numbers=("2",))

    def test_chapter_without_sections_allowed(self):
        assert LawReference(chapter_number="90").section_numbers == ()

    def test_list_is_stored_as_tuple(self):
        reference = LawReference(chapter_number="90", section_numbers=["10", "11"])
        assert reference.section_numbers == ("10", "11")

    def test_keys(self):
        reference = LawReference(chapter_number="90", section_numbers=("2", "60½"))
        assert reference.keys == ["90-2", "90-60½"]


def test_get_section_key():
    assert get_section_key("6A", "5") == "6A-5"


def test_fetched_law_section_key():
    assert FetchedLawSection("90", "2", "text").key == "90-2"


def test_law_section_text_dedupes_in_order():
    law_section = LawSectionText("90-2", "text", ("3", "1", "3", "2", "1"))
    assert law_section.referencing_bill_section_numbers == ("3", "1", "2")


def test_marked_up_text_artifact():
    marked = MarkedUpText("90-2", "Section 2. Penalties.", "The fine shall be fifty dollars.")
    assert marked.text == "*Section 2. Penalties.*\n\nThe fine shall be fifty dollars."


class TestSectionType:

    def test_amending_types(self):
        assert SectionType.AMENDING_BY_STRIKING.is_amending
        assert SectionType.AMENDING_BY_INSERTING.is_amending
        assert SectionType.AMENDING_BY_STRIKING_AND_INSERTING.is_amending

    def test_non_amending_types(self):
        assert not SectionType.REPEALING.is_amending
        assert not SectionType.OTHER.is_amending


class TestSectionCounts:

    def test_defaults_are_zero(self):
        counts = SectionCounts()
        assert counts.total == 0
        assert counts.amending == 0

    def test_from_types(self):
        counts = SectionCounts.from_types([
            SectionType.REPEALING,
            SectionType.AMENDING_BY_STRIKING_AND_INSERTING,
            SectionType.AMENDING_BY_STRIKING,
            SectionType.AMENDING_BY_STRIKING,
            SectionType.AMENDING_BY_INSERTING,
            SectionType.OTHER,
        ])
        assert counts.total == 6
        assert counts.amending == 4
        assert counts.amending_by_striking == 2
        assert counts.amending_by_inserting == 1
        assert counts.amending_by_striking_and_inserting == 1
        assert counts.repealing == 1
        assert counts.other == 1

    def test_amending_must_equal_sub_types(self):
        with pytest.raises(ValidationError):
            SectionCounts(total=2, amending=2, amending_by_striking=1)

    def test_total_must_equal_parts(self):
        with pytest.raises(ValidationError):
            SectionCounts(total=3, amending=1, amending_by_striking=1, repealing=1)

    def test_negative_rejected(self):
        with pytest.raises(ValidationError):
            SectionCounts(total=-1, other=-1)

    def test_serializes(self):
        counts = SectionCounts.from_types([SectionType.REPEALING])
        assert counts.model_dump()["repealing"] == 1

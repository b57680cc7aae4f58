"""
Cross-reference index between bill sections and law sections.

Collects every (chapter, section) pair a bill references so each law
section is fetched once, and remembers which bill sections reference each
law section ("backrefs") in the order they appear in the bill. That order
is the order the markup engine applies their edits.
"""
import logging
from dataclasses import dataclass, field
from typing import Iterable

from springbok_core.exceptions import UnresolvedBillSectionError
from springbok_core.models import BillSection, FetchedLawSection, LawSectionText

logger = logging.getLogger(__name__)


@dataclass
class CrossReferenceIndex:
    """
    Attributes:
        requests: Sorted, duplicate-free (chapter, section) pairs to fetch
        backrefs: "chapter-section" -> bill section numbers, in bill order
    """
    requests: list[tuple[str, str]] = field(default_factory=list)
    backrefs: dict[str, list[str]] = field(default_factory=dict)

    @classmethod
    def build(cls, bill: Iterable[BillSection]) -> "CrossReferenceIndex":
        required: list[tuple[str, str]] = []
        backrefs: dict[str, list[str]] = {}

        for bill_section in bill:
            law_reference = bill_section.law_reference
            if not law_reference.chapter_number:
                continue
            for section_number, key in zip(law_reference.section_numbers, law_reference.keys):
                numbers = backrefs.setdefault(key, [])
                if bill_section.section_number not in numbers:
                    numbers.append(bill_section.section_number)
                required.append((law_reference.chapter_number, section_number))

        requests = sorted(set(required))
        logger.info(
            "Bill references %d law sections (%d references before deduplication)",
            len(requests), len(required),
        )
        return cls(requests=requests, backrefs=backrefs)

    def law_section_texts(self, fetched: Iterable[FetchedLawSection]) -> list[LawSectionText]:
        """Join fetched law texts with the bill sections that reference them."""
        texts = []
        for law_section in fetched:
            numbers = self.backrefs.get(law_section.key)
            if numbers is None:
                logger.warning("Fetched %s but no bill section references it", law_section.key)
                numbers = []
            texts.append(LawSectionText(
                chapter_section_key=law_section.key,
                full_text=law_section.full_text,
                referencing_bill_section_numbers=tuple(numbers),
            ))
        return texts


def resolve_backrefs(law_section: LawSectionText, bill: list[BillSection]) -> list[BillSection]:
    """
    Look up the bill sections named by a law section's backrefs.

    Raises:
        UnresolvedBillSectionError: A backref names a section missing from the bill
    """
    resolved = []
    for section_number in law_section.referencing_bill_section_numbers:
        bill_section = next(
            (b for b in bill if b.section_number == section_number),
            None,
        )
        if bill_section is None:
            raise UnresolvedBillSectionError(law_section.chapter_section_key, section_number)
        resolved.append(bill_section)
    return resolved

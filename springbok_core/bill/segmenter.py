"""
Bill segmentation and classification.

Text fragments extracted from a bill page are grouped into bill sections:
a fragment matching the "SECTION <n>." header starts a new section, every
other fragment is appended to the current one. Each finished section gets
its law reference from springbok_core.bill.references.

classify() assigns one SectionType per bill section with a fixed priority:
repeal > strike+insert > strike only > insert only > other.
"""
import logging
from typing import Iterable, Optional

from springbok_core.bill.references import extract
from springbok_core.diagnostics import DiagnosticKind, DiagnosticReport, describe_section, report_to
from springbok_core.models import BillSection, SectionCounts, SectionType
from springbok_core.patterns import SectionRegexCatalog

logger = logging.getLogger(__name__)


def segment(
    fragments: Iterable[str],
    catalog: SectionRegexCatalog,
    report: Optional[DiagnosticReport] = None,
) -> list[BillSection]:
    """
    Split an ordered sequence of text fragments into bill sections.

    Args:
        fragments: Text nodes in document order
        catalog: Section regex catalog
        report: Collects parse failures (optional)

    Returns:
        Bill sections in document order. Text before the first header (or a
        bill without headers) becomes a section with an empty number.
    """
    report = report_to(report)
    bill: list[BillSection] = []
    section_text = ""

    for fragment in fragments:
        if catalog.bill_section_header.search(fragment):
            # Header closes the section collected so far
            if section_text:
                bill.append(_finalize(section_text, catalog, report))
            section_text = ""
        if section_text:
            section_text = f"{section_text}\n{fragment}"
        else:
            section_text = fragment

    if section_text:
        bill.append(_finalize(section_text, catalog, report))

    logger.info("Segmented bill into %d sections", len(bill))
    return bill


def _finalize(
    section_text: str,
    catalog: SectionRegexCatalog,
    report: DiagnosticReport,
) -> BillSection:
    header = catalog.bill_section_header.search(section_text)
    section_number = header.group(1) if header else ""
    if not header:
        preview = section_text.strip().splitlines()[0][:80] if section_text.strip() else ""
        report.add(
            DiagnosticKind.SEGMENTATION_PARSE_FAILURE,
            describe_section(section_number),
            f"No SECTION header found: {preview!r}",
        )
    law_reference = extract(section_text, catalog, report, section_number)
    return BillSection(
        section_number=section_number,
        raw_text=section_text,
        law_reference=law_reference,
    )


def classify(text: str, catalog: SectionRegexCatalog) -> SectionType:
    """Classify a bill section by the amendment idioms it contains."""
    if catalog.repealed.search(text):
        return SectionType.REPEALING

    is_striking = catalog.striking.search(text) is not None
    is_inserting = catalog.inserting.search(text) is not None
    if is_striking and is_inserting:
        return SectionType.AMENDING_BY_STRIKING_AND_INSERTING
    if is_striking:
        return SectionType.AMENDING_BY_STRIKING
    if is_inserting:
        return SectionType.AMENDING_BY_INSERTING
    return SectionType.OTHER


def count_section_types(
    bill: list[BillSection],
    catalog: SectionRegexCatalog,
    report: Optional[DiagnosticReport] = None,
) -> SectionCounts:
    report = report_to(report)
    section_types = []
    for bill_section in bill:
        section_type = classify(bill_section.raw_text, catalog)
        if section_type is SectionType.OTHER and catalog.amended.search(bill_section.raw_text):
            report.add(
                DiagnosticKind.UNRECOGNIZED_AMENDMENT,
                describe_section(bill_section.section_number),
                "Amends existing law without striking or inserting",
            )
        section_types.append(section_type)
    return SectionCounts.from_types(section_types)

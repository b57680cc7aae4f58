"""
Law reference extraction.

Parses the law chapter and section number(s) a bill section amends:

    "SECTION 1. Section 2 of chapter 90 of the General Laws ..."
        -> LawReference(chapter_number="90", section_numbers=("2",))
    "SECTION 3. Sections 10, 11 and 12 of chapter 90 ..."
        -> LawReference(chapter_number="90", section_numbers=("10", "11", "12"))

Fractional section numbers keep their Unicode suffix ("60½"); converting
them to a URL-safe form is left to the fetch collaborator.
"""
import logging
from typing import Optional

from springbok_core.diagnostics import (
    DiagnosticKind,
    DiagnosticReport,
    describe_section,
    report_to,
)
from springbok_core.models import LawReference
from springbok_core.patterns import SectionRegexCatalog

logger = logging.getLogger(__name__)


def extract(
    section_text: str,
    catalog: SectionRegexCatalog,
    report: Optional[DiagnosticReport] = None,
    section_number: str = "",
) -> LawReference:
    """
    Extract the law chapter and section numbers referenced by a bill section.

    Args:
        section_text: Full text of one bill section
        catalog: Section regex catalog
        report: Collects parse failures (optional)
        section_number: Bill section number, used only in reports

    Returns:
        LawReference; empty when no chapter is found, with no section
        numbers when the section clause cannot be parsed
    """
    report = report_to(report)
    subject = describe_section(section_number)

    chapter_match = catalog.law_chapter_reference.search(section_text)
    chapter_number = chapter_match.group(1) if chapter_match else ""
    if not chapter_number:
        report.add(DiagnosticKind.REFERENCE_PARSE_FAILURE, subject, "No law chapter found")
        return LawReference()

    section_numbers = _extract_section_numbers(section_text, catalog, report, subject)
    logger.debug("%s references chapter %s sections %s", subject, chapter_number, section_numbers)
    return LawReference(chapter_number=chapter_number, section_numbers=tuple(section_numbers))


def _extract_section_numbers(
    section_text: str,
    catalog: SectionRegexCatalog,
    report: DiagnosticReport,
    subject: str,
) -> list[str]:
    section_match = catalog.law_section_reference.search(section_text)
    if not section_match:
        report.add(DiagnosticKind.REFERENCE_PARSE_FAILURE, subject, "No law section found")
        return []

    form = section_match.group(1).strip().lower()
    if form == "section":
        number = section_match.group(2).rstrip()
        if not number:
            report.add(
                DiagnosticKind.REFERENCE_PARSE_FAILURE,
                subject,
                "Law section keyword is not followed by a number",
            )
            return []
        return [number]

    if form == "sections":
        numbers = split_section_list(section_text[section_match.end(1):], catalog)
        if not numbers:
            report.add(
                DiagnosticKind.REFERENCE_PARSE_FAILURE,
                subject,
                "Law section list is empty",
            )
        return numbers

    # "sectionss" and the like
    report.add(
        DiagnosticKind.REFERENCE_PARSE_FAILURE,
        subject,
        f"Unexpected law section keyword {section_match.group(1)!r}",
    )
    return []


def split_section_list(list_text: str, catalog: SectionRegexCatalog) -> list[str]:
    """
    Split the clause following "sections" into section numbers.

    The clause stops at the first terminator (. : ;) or at the words
    "of"/"chapter", so a chapter number later in the sentence is not
    mistaken for a section: " 10, 11 and 12 of chapter 90" -> ["10", "11", "12"].
    """
    end = catalog.section_list_end.search(list_text)
    clause = list_text[:end.start()] if end else list_text
    # Trailing sentinel so the last number still ends in whitespace
    return [
        match.group(0).rstrip().rstrip(",").rstrip()
        for match in catalog.section_list.finditer(clause + " ")
    ]

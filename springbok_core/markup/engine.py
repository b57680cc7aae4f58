"""
Markup Engine - annotates law text with the edits a bill makes to it.

For one law section, the body text is folded through every bill section
that references it, in backref order. Each step reads the current (possibly
already annotated) body and returns the next version, so edits from
several bill sections accumulate.

Each bill section is handled according to its SectionType and the first
object-of-amendment idiom in its text (words, lines, subsections, sections):

    REPEALING                   whole body struck, "REPEALED ..." marker
    STRIKING_AND_INSERTING
        words                   struck phrase replaced when it occurs once
        lines                   footnote
        subsections             "(x)" subsection struck, replacement inserted
        sections                whole body struck, replacement inserted
    STRIKING
        words                   struck phrase marked when it occurs once
        lines                   footnote
        sections                not implemented, body unchanged
    INSERTING
        words, lines            footnote
        sections                one inserted block per "Section <n>" header
    OTHER                       unrecognized, body unchanged

The footnote fallback appends the bill section's own text in italics. It
is used whenever the edit cannot be pinned to exactly one place in the law
text: a phrase found zero or several times, line numbers (the law text
carries none), or an insertion with no anchor.

Usage:
    engine = MarkupEngine(build_markup_catalog(), build_section_catalog())
    marked = engine.annotate(law_text, [bill_section], "90-2")
    if marked:
        print(marked.text)
"""
import logging
from typing import Iterable, Optional

from springbok_core.bill.segmenter import classify
from springbok_core.diagnostics import (
    DiagnosticKind,
    DiagnosticReport,
    describe_section,
    report_to,
)
from springbok_core.markup import formatting
from springbok_core.models import BillSection, MarkedUpText, SectionType
from springbok_core.patterns import (
    MarkupRegexCatalog,
    SectionRegexCatalog,
    build_markup_catalog,
    build_section_catalog,
)

logger = logging.getLogger(__name__)

WORDS = "words"
LINES = "lines"
SUBSECTIONS = "subsections"
SECTIONS = "sections"


class MarkupEngine:
    """
    Produce MarkedUpText for law sections.

    Stateless apart from the catalogs and the diagnostic report, so one
    engine can annotate every law section of a bill.
    """

    def __init__(
        self,
        markup_catalog: Optional[MarkupRegexCatalog] = None,
        section_catalog: Optional[SectionRegexCatalog] = None,
        report: Optional[DiagnosticReport] = None,
    ):
        self.markup_catalog = markup_catalog or build_markup_catalog()
        self.section_catalog = section_catalog or build_section_catalog()
        self.report = report_to(report)

    def split_title(self, law_text: str) -> Optional[tuple[str, str]]:
        """Split law text into its "Section N" title line and body."""
        match = self.markup_catalog.text_parse.search(law_text)
        if not match:
            return None
        return match.group(1).strip(), match.group(2).strip()

    def annotate(
        self,
        law_text: str,
        amending_bill_sections: Iterable[BillSection],
        chapter_section_key: str = "",
    ) -> Optional[MarkedUpText]:
        """
        Apply every amending bill section to a law section.

        Args:
            law_text: Full law section text, title line first
            amending_bill_sections: Bill sections in backref order
            chapter_section_key: Law key ("90-2"), used in the result and reports

        Returns:
            MarkedUpText, or None when the law text has no "Section" title line
        """
        parts = self.split_title(law_text)
        if parts is None:
            self.report.add(
                DiagnosticKind.MARKUP_PRECONDITION_FAILURE,
                chapter_section_key,
                "Could not split law section into title and body",
            )
            return None

        title, body = parts
        for bill_section in amending_bill_sections:
            body = self.apply(body, bill_section, chapter_section_key)

        return MarkedUpText(chapter_section_key=chapter_section_key, title=title, body=body)

    def apply(self, body: str, bill_section: BillSection, chapter_section_key: str = "") -> str:
        """One fold step: the body after a single bill section's edit."""
        text = bill_section.raw_text
        subject = f"{chapter_section_key} {describe_section(bill_section.section_number)}".strip()
        section_type = classify(text, self.section_catalog)
        logger.debug("%s classified as %s", subject, section_type.value)

        if section_type is SectionType.REPEALING:
            return self._repeal(body, bill_section)
        if section_type is SectionType.AMENDING_BY_STRIKING_AND_INSERTING:
            return self._strike_and_insert(body, bill_section, subject)
        if section_type is SectionType.AMENDING_BY_STRIKING:
            return self._strike(body, bill_section, subject)
        if section_type is SectionType.AMENDING_BY_INSERTING:
            return self._insert(body, bill_section, subject)

        self.report.add(
            DiagnosticKind.UNRECOGNIZED_AMENDMENT,
            subject,
            "No strike, insert or repeal idiom found",
        )
        return body

    def object_of_amendment(self, text: str) -> Optional[str]:
        """First matching object idiom, checked as words, lines, subsections, sections."""
        catalog = self.markup_catalog
        for name, pattern in (
            (WORDS, catalog.words),
            (LINES, catalog.lines),
            (SUBSECTIONS, catalog.subsections),
            (SECTIONS, catalog.sections),
        ):
            if pattern.search(text):
                return name
        return None

    # -------------------------------------------------------------------------
    # Repealing
    # -------------------------------------------------------------------------

    def _repeal(self, body: str, bill_section: BillSection) -> str:
        number = bill_section.section_number
        match = self.markup_catalog.repeal_specification.search(bill_section.raw_text)
        specification = match.group(1).strip().rstrip(".").strip() if match else ""
        return f"{formatting.strike(body, number)}\n\n{formatting.repeal_marker(specification, number)}"

    # -------------------------------------------------------------------------
    # Striking and inserting
    # -------------------------------------------------------------------------

    def _strike_and_insert(self, body: str, bill_section: BillSection, subject: str) -> str:
        object_idiom = self.object_of_amendment(bill_section.raw_text)
        if object_idiom == WORDS:
            return self._replace_words(body, bill_section, subject)
        if object_idiom == LINES:
            return self._append_footnote(
                body, bill_section, subject,
                DiagnosticKind.UNRESOLVABLE_LOCATION,
                "Line numbers cannot be located in the law text",
            )
        if object_idiom == SUBSECTIONS:
            return self._replace_subsection(body, bill_section, subject)
        if object_idiom == SECTIONS:
            return self._replace_section(body, bill_section, subject)
        return self._unrecognized(body, subject, "Strikes and inserts an unrecognized object")

    def _replace_words(self, body: str, bill_section: BillSection, subject: str) -> str:
        match = self.markup_catalog.replace_words.search(bill_section.raw_text)
        if not match:
            return self._append_footnote(
                body, bill_section, subject,
                DiagnosticKind.AMBIGUOUS_REPLACEMENT,
                "Could not find struck and inserted words",
            )

        struck = match.group("struck")
        inserted = match.group("quoted") if match.group("quoted") is not None else match.group("inserted")
        occurrences = body.count(struck) if struck else 0
        if occurrences != 1:
            return self._append_footnote(
                body, bill_section, subject,
                DiagnosticKind.AMBIGUOUS_REPLACEMENT,
                f"Struck words {struck!r} occur {occurrences} times",
            )

        number = bill_section.section_number
        replacement = (
            formatting.leading_buffer(struck)
            + formatting.strike(struck, number)
            + " "
            + formatting.insert(formatting.unquote(inserted), number)
        )
        return body.replace(struck, replacement, 1)

    def _replace_subsection(self, body: str, bill_section: BillSection, subject: str) -> str:
        match = self.markup_catalog.replace_subsection.search(bill_section.raw_text)
        if not match:
            return self._append_footnote(
                body, bill_section, subject,
                DiagnosticKind.UNRESOLVABLE_LOCATION,
                "Could not find subsection and replacement text",
            )

        letter = match.group("letter").strip()
        inserted = match.group("inserted").strip()
        span_match = self.markup_catalog.subsection_span(letter).search(body)
        if not span_match:
            return self._append_footnote(
                body, bill_section, subject,
                DiagnosticKind.UNRESOLVABLE_LOCATION,
                f"Subsection ({letter}) not found in law text",
            )

        number = bill_section.section_number
        subsection = f"{span_match.group(3).strip()} {span_match.group(4).strip()}"
        replacement = (
            formatting.strike(subsection, number)
            + formatting.LINE_CONTINUATION
            + formatting.insert(inserted, number)
        )
        return body[:span_match.start(3)] + replacement + body[span_match.end(4):]

    def _replace_section(self, body: str, bill_section: BillSection, subject: str) -> str:
        match = self.markup_catalog.replace_section.search(bill_section.raw_text)
        inserted = match.group("inserted").strip() if match else ""
        if not inserted:
            return self._append_footnote(
                body, bill_section, subject,
                DiagnosticKind.UNRESOLVABLE_LOCATION,
                "Could not find replacement section text",
            )
        number = bill_section.section_number
        return f"{formatting.strike(body, number)}\n\n{formatting.insert(inserted, number)}"

    # -------------------------------------------------------------------------
    # Striking only
    # -------------------------------------------------------------------------

    def _strike(self, body: str, bill_section: BillSection, subject: str) -> str:
        object_idiom = self.object_of_amendment(bill_section.raw_text)
        if object_idiom == WORDS:
            return self._strike_words(body, bill_section, subject)
        if object_idiom == LINES:
            return self._append_footnote(
                body, bill_section, subject,
                DiagnosticKind.UNRESOLVABLE_LOCATION,
                "Line numbers cannot be located in the law text",
            )
        if object_idiom == SECTIONS:
            self.report.add(DiagnosticKind.NOT_IMPLEMENTED, subject, "Striking sections")
            return body
        return self._unrecognized(body, subject, "Strikes an unrecognized object")

    def _strike_words(self, body: str, bill_section: BillSection, subject: str) -> str:
        match = self.markup_catalog.strike_words.search(bill_section.raw_text)
        struck = match.group("struck") if match else ""
        occurrences = body.count(struck) if struck else 0
        if occurrences != 1:
            return self._append_footnote(
                body, bill_section, subject,
                DiagnosticKind.AMBIGUOUS_REPLACEMENT,
                f"Struck words {struck!r} occur {occurrences} times",
            )
        replacement = formatting.leading_buffer(struck) + formatting.strike(struck, bill_section.section_number)
        return body.replace(struck, replacement, 1)

    # -------------------------------------------------------------------------
    # Inserting only
    # -------------------------------------------------------------------------

    def _insert(self, body: str, bill_section: BillSection, subject: str) -> str:
        object_idiom = self.object_of_amendment(bill_section.raw_text)
        if object_idiom in (WORDS, LINES):
            return self._append_footnote(
                body, bill_section, subject,
                DiagnosticKind.UNRESOLVABLE_LOCATION,
                f"No anchor for inserted {object_idiom}",
            )
        if object_idiom == SECTIONS:
            return self._insert_sections(body, bill_section, subject)
        return self._unrecognized(body, subject, "Inserts an unrecognized object")

    def _insert_sections(self, body: str, bill_section: BillSection, subject: str) -> str:
        match = self.markup_catalog.insert_section.search(bill_section.raw_text)
        inserted = match.group("inserted") if match else ""
        blocks = [
            block.strip()
            for block in self.markup_catalog.section_block.split(inserted)
            if block.strip()
        ]
        if not blocks:
            return self._append_footnote(
                body, bill_section, subject,
                DiagnosticKind.UNRESOLVABLE_LOCATION,
                "Could not find inserted section text",
            )
        number = bill_section.section_number
        return body + "".join(f"\n\n{formatting.insert(block, number)}" for block in blocks)

    # -------------------------------------------------------------------------
    # Fallbacks
    # -------------------------------------------------------------------------

    def _append_footnote(
        self,
        body: str,
        bill_section: BillSection,
        subject: str,
        kind: DiagnosticKind,
        reason: str,
    ) -> str:
        self.report.add(kind, subject, f"{reason}; bill text appended as footnote")
        return f"{body}\n\n{formatting.footnote(bill_section.raw_text)}"

    def _unrecognized(self, body: str, subject: str, reason: str) -> str:
        self.report.add(DiagnosticKind.UNRECOGNIZED_AMENDMENT, subject, reason)
        return body

"""
Regex catalogs for bill and law text.

Two immutable catalogs are built once per pipeline invocation and passed
explicitly to the components that use them:

- SectionRegexCatalog: bill section headers, law chapter/section
  references, section lists and the amendment verb idioms. Used by the
  segmenter, the reference extractor and classification.
- MarkupRegexCatalog: title/body split of a law section, the
  object-of-amendment idioms (words, lines, subsections, sections) and the
  capture patterns that pull struck and inserted text out of a bill section.

Drafting idioms recognized (Massachusetts General Laws style):
1. "SECTION 4. Section 2 of chapter 90 of the General Laws is hereby amended ..."
2. "... by striking out the words “ten dollars” and inserting in place
   thereof the following words:- fifty dollars."
3. "... by striking out subsection (b) and inserting in place thereof the
   following subsection:- (b) ..."
4. "... by inserting after section 3 the following 2 sections:- Section 3A. ..."
5. "Section 5 of chapter 6A of the General Laws is hereby repealed."

Usage:
    catalog = build_section_catalog()
    if catalog.bill_section_header.search("SECTION 12. Chapter 90 ..."):
        ...
"""
import re
from dataclasses import dataclass
from typing import Pattern

# Unicode vulgar fractions used as section suffixes ("60½", "7⅛")
VULGAR_FRACTIONS = "¼-¾⅐-⅞"

# "SECTION 1." opening a bill section; the label may be alphanumeric ("12A")
BILL_SECTION_HEADER = r"^\s*SECTION\s*(\d*\w*)\s*\."

# Bill section prefix ("SECTION 3." / "SECTION 104A." / "Section 3 ") shared by the law reference patterns.
# Only terminating punctuation (. : -) stops the scan for "chapter"/"section".
_REFERENCE_PREFIX = r"^\s*(?i:section \d+\w*)\s*\.*[^\.:-]*?"

LAW_CHAPTER_REFERENCE = _REFERENCE_PREFIX + r"[cC]hapter\s*(\d*\w*)"
LAW_SECTION_REFERENCE = _REFERENCE_PREFIX + r"([sS]ection[s]*)\s*(\d*\w*)"
SECTION_LIST = r"(\d+\w*\s*[" + VULGAR_FRACTIONS + r"]*)[,\s]"

# End of the list clause following "sections": "sections 10, 11 and 12 of chapter 90"
SECTION_LIST_END = r"[.:;]|\b(?:of|chapter)\b"

# Quotes as they appear in bill text, straight or curly
_OPEN_QUOTE = "[“\"]"
_CLOSE_QUOTE = "[”\"]"


@dataclass(frozen=True)
class SectionRegexCatalog:
    """
    Matchers for bill segmentation, law references and classification.

    Attributes:
        bill_section_header: "SECTION <label>." at the start of a fragment; group 1 = label
        law_chapter_reference: chapter a bill section amends; group 1 = chapter
        law_section_reference: group 1 = "section"/"sections", group 2 = first number
        section_list: one entry of a comma-delimited section list
        section_list_end: where the list clause after "sections" stops
        amended, striking, inserting, repealed: amendment verb idioms
    """
    bill_section_header: Pattern
    law_chapter_reference: Pattern
    law_section_reference: Pattern
    section_list: Pattern
    section_list_end: Pattern
    amended: Pattern
    striking: Pattern
    inserting: Pattern
    repealed: Pattern


def build_section_catalog(strict: bool = True) -> SectionRegexCatalog:
    """
    Compile the section catalog.

    Args:
        strict: Match only upper-case "SECTION" headers. The looser variant
            also accepts "Section"/"section" at the start of a fragment.
    """
    header_flags = 0 if strict else re.IGNORECASE
    return SectionRegexCatalog(
        bill_section_header=re.compile(BILL_SECTION_HEADER, header_flags),
        law_chapter_reference=re.compile(LAW_CHAPTER_REFERENCE),
        law_section_reference=re.compile(LAW_SECTION_REFERENCE),
        section_list=re.compile(SECTION_LIST),
        section_list_end=re.compile(SECTION_LIST_END, re.IGNORECASE),
        amended=re.compile(r"amended"),
        striking=re.compile(r"strik"),
        inserting=re.compile(r"insert"),
        repealed=re.compile(r"repealed"),
    )


@dataclass(frozen=True)
class MarkupRegexCatalog:
    """
    Matchers used by the markup engine.

    Attributes:
        text_parse: Law section title line (group 1) and body (group 2)
        words, lines, subsections, sections: Object-of-amendment idioms,
            checked in that order
        repeal_specification: Text following "repealed" (group 1)
        replace_words: Struck phrase ("struck") and inserted phrase
            ("quoted" or "inserted")
        strike_words: Struck phrase ("struck")
        replace_subsection: Subsection letter ("letter") and replacement ("inserted")
        replace_section: Replacement text following "sections:" ("inserted")
        insert_section: Inserted text following "sections:" ("inserted")
        section_block: Split point before each "Section <n>" sub-header
    """
    text_parse: Pattern
    words: Pattern
    lines: Pattern
    subsections: Pattern
    sections: Pattern
    repeal_specification: Pattern
    replace_words: Pattern
    strike_words: Pattern
    replace_subsection: Pattern
    replace_section: Pattern
    insert_section: Pattern
    section_block: Pattern

    @staticmethod
    def subsection_span(letter: str) -> Pattern:
        """
        Locate subsection "(<letter>)" inside law text.

        Group 3 is the "(<letter>)" header and group 4 its content, which runs
        up to the next "(x)" subsection header or "[...]" marker on a new
        line, or to the end of the text.
        """
        return re.compile(
            r"(?i)(\n|^)(section \d+.\s*)?(\(" + re.escape(letter) + r"\))([\s\S]*?)"
            r"(?:\n(\[.*\]|\([^\d\W]\))|\Z)"
        )


def build_markup_catalog() -> MarkupRegexCatalog:
    return MarkupRegexCatalog(
        text_parse=re.compile(r"((?i:section).*)[\n\s]*([\S\s]*)"),
        words=re.compile(r"\bwords?\b"),
        lines=re.compile(r"\blines?\b"),
        subsections=re.compile(r"(subsections?|subclauses?):"),
        sections=re.compile(r"sections?:"),
        repeal_specification=re.compile(r"repealed ?(.*)"),
        replace_words=re.compile(
            r"strik.*?" + _OPEN_QUOTE + r"(?P<struck>.*?)" + _CLOSE_QUOTE
            + r".*?insert[^“\":]*?"
            + r"(?:" + _OPEN_QUOTE + r"(?P<quoted>.*?)" + _CLOSE_QUOTE
            + r"|:-?\s*(?P<inserted>.*)\.)"
        ),
        strike_words=re.compile(
            r"strik.*?" + _OPEN_QUOTE + r"(?P<struck>.*?)" + _CLOSE_QUOTE
        ),
        replace_subsection=re.compile(
            r"strik.*?(?:subsection|subclause) \((?P<letter>.)\).*?insert.*?:-?(?P<inserted>[\s\S]*)"
        ),
        replace_section=re.compile(r"strik.*?section.*?insert.*?:-?(?P<inserted>[\s\S]*)"),
        insert_section=re.compile(r"insert.*?sections?:-?(?P<inserted>[\s\S]*)"),
        section_block=re.compile(r"(?=\bSection\s+\d)"),
    )

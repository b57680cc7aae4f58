from dataclasses import dataclass, field
from enum import Enum

from pydantic import BaseModel, Field, model_validator


# =============================================================================
# SECTION CLASSIFICATION
# =============================================================================

class SectionType(Enum):
    """How a bill section changes existing law, in classification priority order."""
    REPEALING = "repealing"
    AMENDING_BY_STRIKING_AND_INSERTING = "amending_by_striking_and_inserting"
    AMENDING_BY_STRIKING = "amending_by_striking"
    AMENDING_BY_INSERTING = "amending_by_inserting"
    OTHER = "other"

    @property
    def is_amending(self) -> bool:
        return self in (
            SectionType.AMENDING_BY_STRIKING_AND_INSERTING,
            SectionType.AMENDING_BY_STRIKING,
            SectionType.AMENDING_BY_INSERTING,
        )


def get_section_key(chapter: str, section: str) -> str:
    return f"{chapter}-{section}"


# =============================================================================
# CORE DATA MODELS
# =============================================================================

@dataclass(frozen=True)
class LawReference:
    """Law chapter and section(s) a bill section points at.

    A reference without a chapter never carries section numbers. Section
    numbers keep document order and any vulgar-fraction suffix ("60½")."""
    chapter_number: str = ""
    section_numbers: tuple = ()

    def __post_init__(self):
        object.__setattr__(self, "section_numbers", tuple(self.section_numbers))
        if not self.chapter_number and self.section_numbers:
            raise ValueError(
                f"Section numbers {self.section_numbers!r} given without a chapter"
            )

    @property
    def keys(self) -> list[str]:
        return [get_section_key(self.chapter_number, s) for s in self.section_numbers]


@dataclass(frozen=True)
class BillSection:
    """One numbered unit of bill text.

    section_number is empty when no "SECTION n." header was found."""
    section_number: str
    raw_text: str
    law_reference: LawReference = field(default_factory=LawReference)


@dataclass(frozen=True)
class LawSectionText:
    """Fetched law section text plus the bill sections that amend it.

    referencing_bill_section_numbers is duplicate-free and keeps the order
    in which the bill sections were recorded against the key."""
    chapter_section_key: str
    full_text: str
    referencing_bill_section_numbers: tuple = ()

    def __post_init__(self):
        object.__setattr__(
            self,
            "referencing_bill_section_numbers",
            tuple(dict.fromkeys(self.referencing_bill_section_numbers)),
        )


@dataclass(frozen=True)
class MarkedUpText:
    """Annotated AsciiDoc rendering of one law section."""
    chapter_section_key: str
    title: str
    body: str

    @property
    def text(self) -> str:
        return f"*{self.title}*\n\n{self.body}"


@dataclass(frozen=True)
class FetchedLawSection:
    """(chapter, section, full_text) triple returned by the fetch collaborator."""
    chapter_number: str
    section_number: str
    full_text: str

    @property
    def key(self) -> str:
        return get_section_key(self.chapter_number, self.section_number)


@dataclass
class SearchEntry:
    """Single row of a legislature bill search."""
    bill_number: str
    bill_url: str
    sponsor: str = ""
    summary: str = ""


@dataclass(frozen=True)
class RefinerEntry:
    """One option of a search refinement group ("193rd (2023 - 2024)")."""
    key: str
    label: str
    token: str


# =============================================================================
# AGGREGATES
# =============================================================================

class SectionCounts(BaseModel):
    """
    Tally of bill section types.

    Validated on construction:
    - amending == amending_by_striking + amending_by_inserting
      + amending_by_striking_and_inserting
    - total == amending + repealing + other
    """
    total: int = Field(0, ge=0)
    amending: int = Field(0, ge=0)
    amending_by_striking: int = Field(0, ge=0)
    amending_by_inserting: int = Field(0, ge=0)
    amending_by_striking_and_inserting: int = Field(0, ge=0)
    repealing: int = Field(0, ge=0)
    other: int = Field(0, ge=0)

    @model_validator(mode="after")
    def check_totals(self) -> "SectionCounts":
        sub_types = (
            self.amending_by_striking
            + self.amending_by_inserting
            + self.amending_by_striking_and_inserting
        )
        if self.amending != sub_types:
            raise ValueError(
                f"amending={self.amending} does not equal the sum of its sub-types ({sub_types})"
            )
        if self.total != self.amending + self.repealing + self.other:
            raise ValueError(
                f"total={self.total} does not equal amending + repealing + other"
            )
        return self

    @classmethod
    def from_types(cls, section_types: list[SectionType]) -> "SectionCounts":
        tally = {t: 0 for t in SectionType}
        for section_type in section_types:
            tally[section_type] += 1
        amending = sum(n for t, n in tally.items() if t.is_amending)
        return cls(
            total=len(section_types),
            amending=amending,
            amending_by_striking=tally[SectionType.AMENDING_BY_STRIKING],
            amending_by_inserting=tally[SectionType.AMENDING_BY_INSERTING],
            amending_by_striking_and_inserting=tally[SectionType.AMENDING_BY_STRIKING_AND_INSERTING],
            repealing=tally[SectionType.REPEALING],
            other=tally[SectionType.OTHER],
        )

"""
Side-channel reporting for conditions that do not stop the pipeline.

Segmentation, reference extraction and markup return partial results on
malformed text. Each condition they hit is recorded here as a Diagnostic
and logged, so a run over a whole bill can be reviewed afterwards.

Usage:
    report = DiagnosticReport()
    bill = segment(fragments, catalog, report)
    for diagnostic in report.of_kind(DiagnosticKind.SEGMENTATION_PARSE_FAILURE):
        print(diagnostic.subject, diagnostic.message)
"""
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


class DiagnosticKind(Enum):
    SEGMENTATION_PARSE_FAILURE = "segmentation_parse_failure"
    REFERENCE_PARSE_FAILURE = "reference_parse_failure"
    MARKUP_PRECONDITION_FAILURE = "markup_precondition_failure"
    AMBIGUOUS_REPLACEMENT = "ambiguous_replacement"
    UNRESOLVABLE_LOCATION = "unresolvable_location"
    NOT_IMPLEMENTED = "not_implemented"
    UNRECOGNIZED_AMENDMENT = "unrecognized_amendment"
    FETCH_FAILURE = "fetch_failure"


# Expected outcomes of the footnote fallback, logged below warning level
INFORMATIONAL_KINDS = frozenset({
    DiagnosticKind.AMBIGUOUS_REPLACEMENT,
    DiagnosticKind.UNRESOLVABLE_LOCATION,
})


@dataclass(frozen=True)
class Diagnostic:
    """
    One reported condition.

    Attributes:
        kind: Category of the condition
        subject: What it is about, a bill section number ("SECTION 4")
            or a law key ("90-2")
        message: Human-readable detail
    """
    kind: DiagnosticKind
    subject: str
    message: str

    def to_dict(self) -> Dict[str, str]:
        return {"kind": self.kind.value, "subject": self.subject, "message": self.message}


@dataclass
class DiagnosticReport:
    """Ordered collection of diagnostics for one pipeline invocation."""
    diagnostics: List[Diagnostic] = field(default_factory=list)

    def add(self, kind: DiagnosticKind, subject: str, message: str) -> Diagnostic:
        diagnostic = Diagnostic(kind=kind, subject=subject, message=message)
        self.diagnostics.append(diagnostic)
        level = logging.INFO if kind in INFORMATIONAL_KINDS else logging.WARNING
        logger.log(level, "%s [%s]: %s", kind.value, subject, message)
        return diagnostic

    def of_kind(self, kind: DiagnosticKind) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.kind == kind]

    def summary(self) -> Dict[str, int]:
        counts: Dict[str, int] = {}
        for d in self.diagnostics:
            counts[d.kind.value] = counts.get(d.kind.value, 0) + 1
        return counts

    def to_list(self) -> List[Dict[str, Any]]:
        return [d.to_dict() for d in self.diagnostics]

    def __len__(self) -> int:
        return len(self.diagnostics)


def report_to(report: Optional[DiagnosticReport]) -> DiagnosticReport:
    """Return report, or a throwaway one when the caller passed None."""
    return report if report is not None else DiagnosticReport()


def describe_section(section_number: str) -> str:
    return f"SECTION {section_number}" if section_number else "unnumbered section"

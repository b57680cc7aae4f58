"""
Tests for the diagnostic report.

Validates:
- Diagnostics collected in order and filtered by kind
- Informational kinds logged at INFO, the rest at WARNING
"""
import logging

from springbok_core.diagnostics import (
    DiagnosticKind,
    DiagnosticReport,
    describe_section,
    report_to,
)


def test_add_and_filter():
    report = DiagnosticReport()
    report.add(DiagnosticKind.FETCH_FAILURE, "90-2", "timeout")
    report.add(DiagnosticKind.NOT_IMPLEMENTED, "90-3 SECTION 4", "Striking sections")
    report.add(DiagnosticKind.FETCH_FAILURE, "90-4", "404")

    assert len(report) == 3
    assert [d.subject for d in report.of_kind(DiagnosticKind.FETCH_FAILURE)] == ["90-2", "90-4"]
    assert report.summary() == {"fetch_failure": 2, "not_implemented": 1}


def test_to_list():
    report = DiagnosticReport()
    report.add(DiagnosticKind.REFERENCE_PARSE_FAILURE, "SECTION 4", "No law chapter found")
    assert report.to_list() == [{
        "kind": "reference_parse_failure",
        "subject": "SECTION 4",
        "message": "No law chapter found",
    }]


def test_log_levels(caplog):
    report = DiagnosticReport()
    with caplog.at_level(logging.INFO, logger="springbok_core.diagnostics"):
        report.add(DiagnosticKind.AMBIGUOUS_REPLACEMENT, "90-2 SECTION 1", "occurs twice")
        report.add(DiagnosticKind.SEGMENTATION_PARSE_FAILURE, "unnumbered section", "no header")

    levels = [record.levelno for record in caplog.records]
    assert levels == [logging.INFO, logging.WARNING]


def test_report_to():
    report = DiagnosticReport()
    assert report_to(report) is report
    assert isinstance(report_to(None), DiagnosticReport)


def test_describe_section():
    assert describe_section("4") == "SECTION 4"
    assert describe_section("") == "unnumbered section"

"""
Tests for console display.
"""
from unittest.mock import patch

from springbok_core.diagnostics import DiagnosticKind, DiagnosticReport
from springbok_core.models import BillSection, LawReference, RefinerEntry, SectionCounts, SectionType
from springbok_core.reports import (
    display_bill_sections,
    display_diagnostics,
    display_refiners,
    display_section_counts,
)


@patch("springbok_core.reports.display.console")
def test_display_section_counts(mock_console):
    counts = SectionCounts.from_types([SectionType.REPEALING, SectionType.AMENDING_BY_STRIKING])
    display_section_counts(counts)

    table = mock_console.print.call_args.args[0]
    assert table.row_count == 7


@patch("springbok_core.reports.display.console")
def test_display_bill_sections(mock_console):
    display_bill_sections([
        BillSection("1", "SECTION 1.", LawReference("90", ("2",))),
        BillSection("", "Preamble."),
    ])
    assert mock_console.print.call_args.args[0].row_count == 2


@patch("springbok_core.reports.display.console")
def test_display_diagnostics(mock_console):
    report = DiagnosticReport()
    report.add(DiagnosticKind.FETCH_FAILURE, "90-2", "404")
    display_diagnostics(report)

    printed = [call.args[0] for call in mock_console.print.call_args_list]
    assert "1 issues reported" in printed[0]
    assert "fetch failure: 1" in printed[1]


@patch("springbok_core.reports.display.console")
def test_display_no_diagnostics(mock_console):
    display_diagnostics(DiagnosticReport())
    assert "No parse or markup issues" in mock_console.print.call_args.args[0]


@patch("springbok_core.reports.display.console")
def test_display_refiners(mock_console):
    display_refiners({
        "General Court": {
            "193rd": RefinerEntry("193rd", "193rd (2023 - 2024)", "tok193"),
            "192nd": RefinerEntry("192nd", "192nd (2021 - 2022)", "tok192"),
        },
        "Branch": {"House": RefinerEntry("House", "House (3)", "tokHouse")},
    })

    tables = [call.args[0] for call in mock_console.print.call_args_list]
    assert [table.title for table in tables] == ["General Court", "Branch"]
    assert [table.row_count for table in tables] == [2, 1]

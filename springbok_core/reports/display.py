from rich.console import Console
from rich.table import Table

from springbok_core.diagnostics import DiagnosticReport
from springbok_core.models import BillSection, RefinerEntry, SectionCounts

console = Console()


def display_section_counts(section_counts: SectionCounts) -> None:
    """
    Print the bill section type tally as a table.

    Rows follow the order of the tally: total, then amending with its three
    sub-types indented below it, then repealing and other.
    """
    table = Table(title="Bill Sections", show_lines=False)
    table.add_column("Type", style="cyan")
    table.add_column("Count", justify="right")

    table.add_row("[bold]Total sections[/bold]", str(section_counts.total))
    table.add_row("Amending sections", str(section_counts.amending))
    table.add_row(
        "  by striking and inserting",
        str(section_counts.amending_by_striking_and_inserting),
    )
    table.add_row("  by striking", str(section_counts.amending_by_striking))
    table.add_row("  by inserting", str(section_counts.amending_by_inserting))
    table.add_row("Repealing sections", str(section_counts.repealing))
    table.add_row("Other sections", str(section_counts.other))

    console.print(table)


def display_bill_sections(bill: list[BillSection]) -> None:
    table = Table(title="Law References", show_lines=False)
    table.add_column("Bill Section", style="cyan", width=12)
    table.add_column("Chapter", width=10)
    table.add_column("Sections")

    for bill_section in bill:
        law_reference = bill_section.law_reference
        table.add_row(
            bill_section.section_number or "[yellow]?[/yellow]",
            law_reference.chapter_number or "[dim]-[/dim]",
            ", ".join(law_reference.section_numbers) or "[dim]-[/dim]",
        )

    console.print(table)


def display_diagnostics(report: DiagnosticReport) -> None:
    if not len(report):
        console.print("[green]✓ No parse or markup issues reported[/green]")
        return

    console.print(f"[yellow]⚠ {len(report)} issues reported:[/yellow]")
    for kind, count in sorted(report.summary().items()):
        console.print(f"[dim]  {kind.replace('_', ' ')}: {count}[/dim]")


def display_refiners(refiners: dict[str, dict[str, RefinerEntry]]) -> None:
    """Print each search refinement group with the keys accepted for it."""
    for group_label, entries in refiners.items():
        table = Table(title=group_label, show_lines=False)
        table.add_column("Key", style="cyan")
        table.add_column("Label")
        for entry in entries.values():
            table.add_row(entry.key, entry.label)
        console.print(table)

#!/usr/bin/env python3
# run_markup.py
"""
CLI for the Springbok bill markup pipeline.

Usage:
    python run_markup.py --bill H.4072
    python run_markup.py --bill-text-file bill.txt --law-dir laws/
    python run_markup.py --search "motor vehicle" --general-court 193 --branch House
    python run_markup.py --list --sponsor-legislator Doe
    python run_markup.py --download-law 90-2 6A-5 --law-dir laws/

Output:
    - Console table of bill section types
    - output/<bill>.txt with the segmented bill text
    - output/modified-laws/<chapter>-<section>.adoc per amended law section
"""
import argparse
import logging
import os
import sys

from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from springbok_core.api import MALegislatureClient
from springbok_core.config import get_fetch_settings, load_config
from springbok_core.diagnostics import DiagnosticReport
from springbok_core.exceptions import SpringbokError, UnknownRefinerError
from springbok_core.orchestrator import (
    MarkupRun,
    build_markups,
    create_bill,
    download_law_sections,
    load_fragments,
    load_law_texts,
    run_markup,
    write_outputs,
)
from springbok_core.patterns import build_section_catalog
from springbok_core.reports import (
    display_bill_sections,
    display_diagnostics,
    display_refiners,
    display_section_counts,
)

load_dotenv()
console = Console()

# search_bills() keyword -> CLI option
REFINEMENT_OPTIONS = {
    "general_court": "--general-court",
    "branch": "--branch",
    "sponsor_legislator": "--sponsor-legislator",
    "sponsor_committee": "--sponsor-committee",
    "sponsor_other": "--sponsor-other",
    "document_type": "--document-type",
}


def search(term: str, config: dict, refinements: dict) -> None:
    with MALegislatureClient(get_fetch_settings(config)) as client:
        results = client.search_bills(term, **refinements)

    if not results:
        console.print("[yellow]No bills found.[/yellow]")
        return

    table = Table(title=f"Bills matching {term!r}" if term else "Bills", show_lines=True)
    table.add_column("Bill", style="cyan", width=10)
    table.add_column("Sponsor", width=25)
    table.add_column("Summary", max_width=70)
    for entry in results.values():
        summary = entry.summary
        if len(summary) > 70:
            summary = summary[:67] + "..."
        table.add_row(entry.bill_number, entry.sponsor, summary)
    console.print(table)


def run_offline(bill_text_file: str, law_dir: str | None, config: dict) -> MarkupRun:
    report = DiagnosticReport()
    catalog = build_section_catalog(strict=config.get("strict_headers", True))

    bill, counts = create_bill(load_fragments(bill_text_file), catalog, report)
    display_section_counts(counts)
    display_bill_sections(bill)

    fetched = load_law_texts(law_dir) if law_dir else []
    markups = build_markups(bill, fetched, catalog, report)

    bill_number = os.path.splitext(os.path.basename(bill_text_file))[0]
    run = MarkupRun(bill_number=bill_number, bill=bill, counts=counts, markups=markups, report=report)
    write_outputs(run, config)
    display_diagnostics(report)
    return run


def main():
    """Main CLI entry point for bill markup."""
    parser = argparse.ArgumentParser(
        description="Mark up Massachusetts General Laws with the edits a bill makes",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python run_markup.py --bill H.4072
    python run_markup.py --bill H.4072 --general-court 192 --render
    python run_markup.py --bill-text-file bill.txt --law-dir laws/
    python run_markup.py --search "motor vehicle"
        """
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--bill", help="Bill number to download (e.g., H.4072)")
    source.add_argument("--bill-text-file", help="Bill text fragments, one per line")
    source.add_argument("--search", help="Search the legislature for bills")
    source.add_argument("--list", action="store_true", help="List bills, narrowed by the refinement options")
    source.add_argument("--list-refiners", action="store_true", help="Show the values each refinement option accepts")
    source.add_argument("--download-law", nargs="+", metavar="KEY",
                        help="Save law sections (e.g., 90-2 6A-5) to --law-dir for offline runs")
    parser.add_argument("--law-dir", help="Law section texts named <chapter>-<section>.txt (with --bill-text-file)")
    parser.add_argument("--general-court", help="General Court number (default: from config; searches are unfiltered)")
    parser.add_argument("--branch", help="Search refinement: House, Senate or Joint")
    parser.add_argument("--sponsor-legislator", help="Search refinement: legislator's last name (e.g., Doe)")
    parser.add_argument("--sponsor-committee", help="Search refinement: committee key (e.g., Ways-and-Means)")
    parser.add_argument("--sponsor-other", help="Search refinement: other sponsor key (e.g., Governor)")
    parser.add_argument("--document-type", help="Search refinement: document type key (e.g., Bill)")
    parser.add_argument("--output-folder", help="Output folder (default: from config)")
    parser.add_argument("--config", default="config.yaml", help="Config file (default: config.yaml)")
    parser.add_argument("--render", action="store_true", help="Render .adoc files with asciidoctor")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log every reported condition")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        config = load_config(args.config)
    except SpringbokError as e:
        console.print(f"[red]Error loading config: {e}[/red]")
        sys.exit(1)

    if args.general_court:
        config["general_court"] = args.general_court
    if args.output_folder:
        config["output"]["folder"] = args.output_folder
    if args.render:
        config["output"]["render"] = True

    if args.bill_text_file and not os.path.exists(args.bill_text_file):
        console.print(f"[red]Error: Bill text file not found: {args.bill_text_file}[/red]")
        sys.exit(1)
    if args.download_law and not args.law_dir:
        console.print("[red]Error: --download-law needs --law-dir[/red]")
        sys.exit(1)
    if args.law_dir and not args.download_law and not os.path.isdir(args.law_dir):
        console.print(f"[red]Error: Law directory not found: {args.law_dir}[/red]")
        sys.exit(1)

    refinements = {name: getattr(args, name) for name in REFINEMENT_OPTIONS}

    try:
        if args.search is not None or args.list:
            search(args.search or "", config, refinements)
            return
        if args.list_refiners:
            with MALegislatureClient(get_fetch_settings(config)) as client:
                display_refiners(client.get_refiners())
            return
        if args.download_law:
            download_law_sections(args.download_law, config, args.law_dir)
            return
        if args.bill:
            run = run_markup(args.bill, config)
        else:
            run = run_offline(args.bill_text_file, args.law_dir, config)
    except UnknownRefinerError as e:
        console.print(f"[red]Error: {e}[/red]")
        console.print("[dim]Run with --list-refiners to see every accepted value[/dim]")
        sys.exit(1)
    except (SpringbokError, ValueError) as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)

    console.print("\n[green]✓ Markup Complete[/green]")
    console.print(f"Bill sections: {run.counts.total}")
    console.print(f"Law sections marked up: {len(run.marked_texts)}")


if __name__ == "__main__":
    main()

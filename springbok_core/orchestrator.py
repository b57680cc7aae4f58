"""
Pipeline orchestration.

    fragments -> segment -> count -> cross-reference index
              -> fetch law sections -> markup engine -> .adoc files

run_markup() is the networked run for one bill number. The offline pieces
(create_bill, build_markups) take fragments and law texts from any source,
which is how the CLI runs against files on disk.
"""
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Optional

from rich.console import Console

from springbok_core.api import MALegislatureClient, fetch_law_sections
from springbok_core.bill import CrossReferenceIndex, count_section_types, resolve_backrefs, segment
from springbok_core.config import get_fetch_settings
from springbok_core.diagnostics import DiagnosticKind, DiagnosticReport, report_to
from springbok_core.exceptions import LawTextMissingError
from springbok_core.markup import MarkupEngine
from springbok_core.models import (
    BillSection,
    FetchedLawSection,
    LawSectionText,
    MarkedUpText,
    SectionCounts,
    get_section_key,
)
from springbok_core.patterns import SectionRegexCatalog, build_markup_catalog, build_section_catalog
from springbok_core.reports import (
    display_diagnostics,
    display_section_counts,
    run_asciidoctor,
    write_asciidocs,
    write_bill,
)

console = Console()
logger = logging.getLogger(__name__)


@dataclass
class MarkupRun:
    """Everything one pipeline invocation produced."""
    bill_number: str
    bill: list[BillSection]
    counts: SectionCounts
    markups: dict[str, Optional[MarkedUpText]] = field(default_factory=dict)
    report: DiagnosticReport = field(default_factory=DiagnosticReport)

    @property
    def marked_texts(self) -> list[MarkedUpText]:
        return [m for m in self.markups.values() if m is not None]

    @property
    def diagnostics(self) -> list[dict[str, Any]]:
        return self.report.to_list()


def create_bill(
    fragments: Iterable[str],
    catalog: SectionRegexCatalog,
    report: Optional[DiagnosticReport] = None,
) -> tuple[list[BillSection], SectionCounts]:
    """Segment fragments into a bill and tally its section types."""
    report = report_to(report)
    bill = segment(fragments, catalog, report)
    counts = count_section_types(bill, catalog, report)
    return bill, counts


def mark_up_law_key(
    chapter_section_key: str,
    law_section_texts: dict[str, LawSectionText],
    bill: list[BillSection],
    engine: MarkupEngine,
) -> Optional[MarkedUpText]:
    """
    Annotate one law section with every bill section that references it.

    Raises:
        LawTextMissingError: No law text was fetched for chapter_section_key
        UnresolvedBillSectionError: A backref is not a section of this bill
    """
    law_section = law_section_texts.get(chapter_section_key)
    if law_section is None:
        raise LawTextMissingError(chapter_section_key)

    amending = resolve_backrefs(law_section, bill)
    return engine.annotate(law_section.full_text, amending, chapter_section_key)


def build_markups(
    bill: list[BillSection],
    fetched: Iterable[FetchedLawSection],
    section_catalog: SectionRegexCatalog,
    report: Optional[DiagnosticReport] = None,
) -> dict[str, Optional[MarkedUpText]]:
    """
    Mark up every law section the bill references.

    Keys follow the index's request order. A requested key with no fetched
    text is reported and left out; a key whose law text could not be split
    maps to None.
    """
    report = report_to(report)
    index = CrossReferenceIndex.build(bill)
    texts = {t.chapter_section_key: t for t in index.law_section_texts(fetched)}
    engine = MarkupEngine(build_markup_catalog(), section_catalog, report)

    already_failed = {d.subject for d in report.of_kind(DiagnosticKind.FETCH_FAILURE)}
    markups: dict[str, Optional[MarkedUpText]] = {}
    for chapter, section in index.requests:
        key = get_section_key(chapter, section)
        if key not in texts:
            if key not in already_failed:
                report.add(DiagnosticKind.FETCH_FAILURE, key, "No law text available; markup skipped")
            continue
        markups[key] = mark_up_law_key(key, texts, bill, engine)

    logger.info("Marked up %d of %d law sections", len(markups), len(index.requests))
    return markups


def write_outputs(run: MarkupRun, config: dict[str, Any]) -> list[Path]:
    output = config["output"]
    folder = output["folder"]
    law_folder = output["law_folder"]

    bill_filename = (run.bill_number or "bill").replace(".", "").replace(" ", "") + ".txt"
    write_bill(run.bill, bill_filename, folder)
    paths = write_asciidocs(run.marked_texts, folder, law_folder)
    console.print(f"[green]✓ Wrote {len(paths)} marked-up law sections to {Path(folder) / law_folder}[/green]")

    if output.get("render"):
        run_asciidoctor(folder, law_folder)
    return paths


def run_markup(
    bill_number: str,
    config: dict[str, Any],
    report: Optional[DiagnosticReport] = None,
    write: bool = True,
) -> MarkupRun:
    """
    Download a bill, mark up every law section it amends and write the results.

    Args:
        bill_number: Bill number as printed on the legislature site ("H.4072")
        config: Configuration from load_config()
        report: Collects diagnostics (optional)
        write: Write the bill text and .adoc files to the output folder

    Raises:
        LegislatureFetchError: The bill page or its text could not be fetched
    """
    report = report_to(report)
    settings = get_fetch_settings(config)
    section_catalog = build_section_catalog(strict=config.get("strict_headers", True))

    console.print(f"\n[cyan]Fetching bill {bill_number} ({config['general_court']}th General Court)...[/cyan]")
    with MALegislatureClient(settings) as client:
        fragments = client.get_bill_text_nodes(client.bill_url(config["general_court"], bill_number))

    bill, counts = create_bill(fragments, section_catalog, report)
    display_section_counts(counts)

    index = CrossReferenceIndex.build(bill)
    fetched = fetch_law_sections(index.requests, settings, report)
    markups = build_markups(bill, fetched, section_catalog, report)

    run = MarkupRun(bill_number=bill_number, bill=bill, counts=counts, markups=markups, report=report)
    if write:
        write_outputs(run, config)
    display_diagnostics(report)
    return run


# =============================================================================
# OFFLINE INPUTS
# =============================================================================

def load_fragments(path: str) -> list[str]:
    """Bill text fragments from a file, one per line."""
    with open(path, "r", encoding="utf-8") as f:
        return f.read().splitlines()


def load_law_texts(law_dir: str) -> list[FetchedLawSection]:
    """
    Law section texts from files named <chapter>-<section>.txt.

    Files whose name has no "-" are skipped with a warning.
    """
    fetched = []
    for path in sorted(Path(law_dir).glob("*.txt")):
        chapter, sep, section = path.stem.partition("-")
        if not sep or not chapter or not section:
            console.print(f"[yellow]⚠ Skipping {path.name}: expected <chapter>-<section>.txt[/yellow]")
            continue
        fetched.append(FetchedLawSection(
            chapter_number=chapter,
            section_number=section,
            full_text=path.read_text(encoding="utf-8"),
        ))
    return fetched


def download_law_sections(keys: Iterable[str], config: dict[str, Any], law_dir: str) -> list[Path]:
    """
    Save law sections as <chapter>-<section>.txt, the layout load_law_texts() reads.

    Args:
        keys: Law section keys ("90-2", "6A-5")

    Raises:
        ValueError: A key is not of the form <chapter>-<section>
        LegislatureFetchError: A law section could not be fetched
    """
    requests = []
    for key in keys:
        chapter, sep, section = key.partition("-")
        if not sep or not chapter or not section:
            raise ValueError(f"Law section key must be <chapter>-<section>, got {key!r}")
        requests.append((chapter, section))

    folder = Path(law_dir)
    folder.mkdir(parents=True, exist_ok=True)
    paths = []
    with MALegislatureClient(get_fetch_settings(config)) as client:
        for chapter, section in requests:
            path = folder / f"{get_section_key(chapter, section)}.txt"
            path.write_text(client.get_law_section_text(chapter, section), encoding="utf-8")
            logger.info("Saved %s", path)
            paths.append(path)
    console.print(f"[green]✓ Saved {len(paths)} law sections to {folder}[/green]")
    return paths

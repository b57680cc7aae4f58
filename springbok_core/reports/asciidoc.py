"""
AsciiDoc output for marked-up law sections.

Writes one <chapter>-<section>.adoc file per MarkedUpText and optionally
renders them to HTML with the asciidoctor command.
"""
import subprocess
from pathlib import Path
from typing import Iterable, Optional

from rich.console import Console

from springbok_core.models import BillSection, MarkedUpText

console = Console()


def write_bill(bill: Iterable[BillSection], output_filename: str, output_folder: str) -> Path:
    """Write the text of every bill section to a file, one section per line block."""
    folder = Path(output_folder)
    folder.mkdir(parents=True, exist_ok=True)
    path = folder / output_filename
    with open(path, "w", encoding="utf-8") as f:
        for bill_section in bill:
            f.write(f"{bill_section.raw_text}\n")
    return path


def write_asciidocs(
    marked_texts: Iterable[MarkedUpText],
    output_folder: str,
    law_folder: str = "modified-laws",
) -> list[Path]:
    folder = Path(output_folder) / law_folder
    folder.mkdir(parents=True, exist_ok=True)

    paths = []
    for marked in marked_texts:
        path = folder / f"{marked.chapter_section_key}.adoc"
        with open(path, "w", encoding="utf-8") as f:
            f.write(marked.text)
        paths.append(path)
    return paths


def get_adoc_paths(folder: str) -> list[Path]:
    return sorted(Path(folder).glob("*.adoc"))


def run_asciidoctor(output_folder: str, law_folder: str = "modified-laws") -> Optional[list[Path]]:
    """
    Render every .adoc file under output_folder/law_folder to HTML.

    Returns:
        Paths of the rendered HTML files, or None when asciidoctor is not installed
    """
    try:
        result = subprocess.run(
            ["which", "asciidoctor"],
            capture_output=True,
            text=True
        )
    except OSError as e:
        console.print(f"[yellow]⚠ Could not look up asciidoctor: {e}[/yellow]")
        return None

    if result.returncode != 0:
        console.print("[yellow]⚠ asciidoctor not found - skipping HTML rendering[/yellow]")
        console.print("[dim]  Install with: brew install asciidoctor (macOS) or gem install asciidoctor[/dim]")
        return None

    rendered = []
    for path in get_adoc_paths(str(Path(output_folder) / law_folder)):
        result = subprocess.run(
            ["asciidoctor", str(path)],
            capture_output=True,
            text=True
        )
        if result.returncode == 0:
            rendered.append(path.with_suffix(".html"))
        else:
            console.print(f"[yellow]⚠ asciidoctor failed for {path.name}: {result.stderr}[/yellow]")
    return rendered

# Springbok bill markup core library
# Main entry point: from springbok_core.orchestrator import run_markup

from .config import load_config, get_fetch_settings, FetchSettings
from .orchestrator import run_markup, create_bill, build_markups, MarkupRun

from .models import (
    SectionType,
    LawReference,
    BillSection,
    SectionCounts,
    LawSectionText,
    MarkedUpText,
    FetchedLawSection,
    get_section_key,
)

from .diagnostics import DiagnosticKind, DiagnosticReport
from .patterns import build_section_catalog, build_markup_catalog

__all__ = [
    # Main entry point
    "run_markup",
    "create_bill",
    "build_markups",
    "MarkupRun",
    "load_config",
    "get_fetch_settings",
    "FetchSettings",
    # Models
    "SectionType",
    "LawReference",
    "BillSection",
    "SectionCounts",
    "LawSectionText",
    "MarkedUpText",
    "FetchedLawSection",
    "get_section_key",
    # Diagnostics
    "DiagnosticKind",
    "DiagnosticReport",
    # Regex catalogs
    "build_section_catalog",
    "build_markup_catalog",
]

from .display import display_section_counts, display_bill_sections, display_diagnostics, display_refiners
from .asciidoc import write_bill, write_asciidocs, run_asciidoctor

__all__ = [
    "display_section_counts",
    "display_bill_sections",
    "display_diagnostics",
    "write_bill",
    "write_asciidocs",
    "run_asciidoctor",
]

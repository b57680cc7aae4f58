from .malegislature import (
    MALegislatureClient,
    format_law_section,
    parse_bill_text_nodes,
    parse_law_section_text,
    parse_refiners,
    parse_search_results,
)
from .fetcher import LawSectionFetcher, fetch_law_sections

__all__ = [
    "MALegislatureClient",
    "format_law_section",
    "parse_bill_text_nodes",
    "parse_law_section_text",
    "parse_refiners",
    "parse_search_results",
    "LawSectionFetcher",
    "fetch_law_sections",
]

import logging
import re
import time
from typing import Optional
from urllib.parse import urljoin

import httpx
from bs4 import BeautifulSoup
from rich.console import Console

from springbok_core.config import FetchSettings
from springbok_core.exceptions import LegislatureFetchError, UnknownRefinerError
from springbok_core.models import RefinerEntry, SearchEntry

console = Console()
logger = logging.getLogger(__name__)

USER_AGENT: str = "Springbok-Bill-Markup/1.0"
LAW_GOTO_PATH: str = "/GeneralLaws/GoTo"
SEARCH_PATH: str = "/Bills/Search"

# search_bills() argument -> (word in the refiner group title, query field)
SEARCH_REFINEMENTS: dict[str, tuple[str, str]] = {
    "general_court": ("General Court", "Refinements[lawsgeneralcourt]"),
    "branch": ("Branch", "Refinements[lawsbranchname]"),
    "sponsor_legislator": ("Legislator", "Refinements[lawsuserprimarysponsorname]"),
    "sponsor_committee": ("Committee", "Refinements[lawscommitteeprimarysponsorname]"),
    "sponsor_other": ("Other", "Refinements[lawsotherprimarysponsorname]"),
    "document_type": ("Document Type", "Refinements[lawsfilingtype]"),
}

# Groups keyed by the first word of each entry ("193rd", "House", "Doe")
FIRST_WORD_GROUPS = ("Court", "Branch", "Legislator")

# Law section URLs spell fractions out: "60½" -> "60 1~2"
FRACTION_TOKENS: dict[str, str] = {
    "¼": "1~4",
    "½": "1~2",
    "¾": "3~4",
    "⅐": "1~7",
    "⅑": "1~9",
    "⅒": "1~10",
    "⅓": "1~3",
    "⅔": "2~3",
    "⅕": "1~5",
    "⅖": "2~5",
    "⅗": "3~5",
    "⅘": "4~5",
    "⅙": "1~6",
    "⅚": "5~6",
    "⅛": "1~8",
    "⅜": "3~8",
    "⅝": "5~8",
    "⅞": "7~8",
}


def format_law_section(law_section: str) -> str:
    """
    Format a law section number for the GoTo URL.

    A trailing vulgar fraction is replaced by its ASCII token, separated by a
    space ("60½" -> "60 1~2"); other section numbers are returned unchanged.
    """
    if not law_section or law_section[-1] not in FRACTION_TOKENS:
        return law_section
    return f"{law_section[:-1].rstrip()} {FRACTION_TOKENS[law_section[-1]]}"


def law_section_params(chapter: str, section: str) -> dict[str, str]:
    return {"ChapterGoTo": chapter, "SectionGoTo": format_law_section(section)}


def bill_page_path(general_court: str, bill_number: str) -> str:
    # "H.4072" -> /Bills/193/H4072
    return f"/Bills/{general_court}/{bill_number.replace('.', '').replace(' ', '')}"


def parse_bill_text_link(html: str, base_url: str) -> Optional[str]:
    document = BeautifulSoup(html, "html.parser")
    link = document.select_one("div.modalBtnGroup a:nth-child(1)")
    if link is None or not link.get("href"):
        return None
    return urljoin(base_url + "/", link["href"].strip())


def parse_bill_text_nodes(html: str) -> Optional[list[str]]:
    """Non-blank text nodes of the bill text container, in document order."""
    document = BeautifulSoup(html, "html.parser")
    container = document.select_one("div.modal-body div")
    if container is None:
        return None
    # Whitespace-only nodes between tags are not bill text
    return [str(text_node) for text_node in container.strings if text_node.strip()]


def parse_law_section_text(html: str) -> Optional[str]:
    """Concatenated text of the element holding the law section heading (h2#skipTo)."""
    document = BeautifulSoup(html, "html.parser")
    heading = document.select_one("h2#skipTo")
    if heading is None or heading.parent is None:
        return None
    return "".join(heading.parent.strings)


def parse_search_results(html: str, base_url: str) -> dict[str, SearchEntry]:
    """Bill number -> SearchEntry, in result table order."""
    document = BeautifulSoup(html, "html.parser")
    table_body = document.select_one("tbody")
    results: dict[str, SearchEntry] = {}
    if table_body is None:
        return results

    for row in table_body.select("tr"):
        bill_number, bill_url = _cell_data(row, 2, base_url)
        if not bill_number:
            continue
        sponsor, _ = _cell_data(row, 3, base_url)
        summary, _ = _cell_data(row, 4, base_url)
        results[bill_number] = SearchEntry(
            bill_number=bill_number,
            bill_url=bill_url,
            sponsor=sponsor,
            summary=summary,
        )
    return results


def _cell_data(row, cell: int, base_url: str) -> tuple[str, str]:
    # Most cells wrap their text in a link
    link = row.select_one(f"td:nth-child({cell}) a")
    if link is not None:
        return link.get_text(strip=True), urljoin(base_url + "/", link.get("href", ""))
    cell_element = row.select_one(f"td:nth-child({cell})")
    if cell_element is None:
        return "", base_url
    return cell_element.get_text(strip=True), base_url


def refiner_key(group_label: str, refiner_label: str) -> str:
    """
    Short key for a refinement option, as typed on the command line.

    Court, branch and legislator options use their first word ("193rd",
    "House", "Doe"); other options drop their trailing result count and
    join the remaining words with "-" ("Ways and Means (12)" -> "Ways-and-Means").
    """
    words = refiner_label.split()
    if any(name in group_label for name in FIRST_WORD_GROUPS):
        return words[0].rstrip(",").replace("'", "-")

    key = "-".join(words[:-1] if len(words) > 1 else words).replace("/", "-")
    for char in "()',.":
        key = key.replace(char, "")
    return key


def parse_refiners(html: str) -> dict[str, dict[str, RefinerEntry]]:
    """Refiner group label -> option key -> RefinerEntry, in page order."""
    document = BeautifulSoup(html, "html.parser")
    container = document.select_one("div#refiners")
    refiners: dict[str, dict[str, RefinerEntry]] = {}
    if container is None:
        return refiners

    for group in container.select("fieldset"):
        title = group.select_one("h4.modal-title") or group.select_one("legend")
        if title is None:
            continue
        group_label = title.get_text(strip=True)
        # Long groups keep their options in a modal
        column = group.select_one("div.modal-body") or group

        entries: dict[str, RefinerEntry] = {}
        for label in column.select("label"):
            option = label.select_one("input")
            if option is None or not option.get("data-refinertoken"):
                continue
            refiner_label = " ".join(label.get_text(" ", strip=True).split())
            key = refiner_key(group_label, refiner_label)
            entries[key] = RefinerEntry(key=key, label=refiner_label, token=option["data-refinertoken"])
        refiners[group_label] = entries
    return refiners


def find_refiner(entries: dict[str, RefinerEntry], value: str) -> Optional[RefinerEntry]:
    """Match a key exactly, then ignoring case, then a General Court number without its ordinal ("193")."""
    if value in entries:
        return entries[value]
    for key, entry in entries.items():
        if key.lower() == value.lower():
            return entry
    for key, entry in entries.items():
        if re.sub(r"(st|nd|rd|th)$", "", key) == value:
            return entry
    return None


def build_search_params(
    search_term: str,
    refiners: dict[str, dict[str, RefinerEntry]],
    refinements: dict[str, Optional[str]],
) -> dict[str, str]:
    """
    Query parameters for a bill search.

    Raises:
        UnknownRefinerError: A refinement value is not offered by the search page
    """
    params = {"SearchTerms": search_term, "Page": "1"}
    for name, value in refinements.items():
        if value is None:
            continue
        _, field = SEARCH_REFINEMENTS[name]
        entries = refiner_group(refiners, name)
        entry = find_refiner(entries, value)
        if entry is None:
            raise UnknownRefinerError(name.replace("_", " "), value, list(entries))
        params[field] = entry.token
    return params


def refiner_group(refiners: dict[str, dict[str, RefinerEntry]], name: str) -> dict[str, RefinerEntry]:
    """Options of the group whose title names a search_bills() refinement."""
    title_word, _ = SEARCH_REFINEMENTS[name]
    for group_label, entries in refiners.items():
        if title_word in group_label:
            return entries
    return {}


class MALegislatureClient:
    """
    Blocking client for malegislature.gov pages.

    Usage:
        with MALegislatureClient(FetchSettings()) as client:
            nodes = client.get_bill_text_nodes(client.bill_url("193", "H.4072"))
    """

    def __init__(self, settings: FetchSettings, http: Optional[httpx.Client] = None):
        self.settings = settings
        self.http = http or httpx.Client(
            timeout=settings.timeout,
            follow_redirects=True,
            headers={"User-Agent": USER_AGENT},
        )

    def __enter__(self) -> "MALegislatureClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self.http.close()

    def bill_url(self, general_court: str, bill_number: str) -> str:
        return self.settings.base_url + bill_page_path(general_court, bill_number)

    def _get(self, url: str, params: Optional[dict[str, str]] = None) -> str:
        last_error: Exception | None = None
        for attempt in range(self.settings.max_retries):
            try:
                response = self.http.get(url, params=params)
                response.raise_for_status()
                return response.text
            except httpx.HTTPError as e:
                last_error = e
                logger.warning(
                    "Attempt %d/%d for %s failed: %s",
                    attempt + 1, self.settings.max_retries, url, e,
                )
                if attempt < self.settings.max_retries - 1:
                    time.sleep(self.settings.retry_delay)
        raise LegislatureFetchError(url, f"Request failed: {last_error}")

    def get_bill_text_nodes(self, bill_url: str) -> list[str]:
        """Text fragments of a bill, from its summary page URL."""
        logger.info("Value for bill URL: %s", bill_url)
        text_url = parse_bill_text_link(self._get(bill_url), self.settings.base_url)
        if text_url is None:
            raise LegislatureFetchError(bill_url, "No bill text link on bill page")

        logger.info("Value for text URL: %s", text_url)
        nodes = parse_bill_text_nodes(self._get(text_url))
        if nodes is None:
            raise LegislatureFetchError(text_url, "No bill text container on text page")
        return nodes

    def get_law_section_text(self, chapter: str, section: str) -> str:
        url = self.settings.base_url + LAW_GOTO_PATH
        text = parse_law_section_text(self._get(url, params=law_section_params(chapter, section)))
        if text is None:
            raise LegislatureFetchError(url, f"No law text for chapter {chapter} section {section}")
        return text

    def get_refiners(self) -> dict[str, dict[str, RefinerEntry]]:
        """Refinement groups offered by an unfiltered search page."""
        html = self._get(self.settings.base_url + SEARCH_PATH, params={"SearchTerms": "", "Page": "1"})
        return parse_refiners(html)

    def search_bills(
        self,
        search_term: str = "",
        general_court: Optional[str] = None,
        branch: Optional[str] = None,
        sponsor_legislator: Optional[str] = None,
        sponsor_committee: Optional[str] = None,
        sponsor_other: Optional[str] = None,
        document_type: Optional[str] = None,
    ) -> dict[str, SearchEntry]:
        """
        First page of bills matching a search term and optional refinements.

        Refinement values are option keys from get_refiners() ("193rd",
        "House", "Doe"); an empty search term lists every bill.

        Raises:
            UnknownRefinerError: A refinement value is not offered by the search page
            LegislatureFetchError: The search page could not be fetched
        """
        refinements = {
            "general_court": general_court,
            "branch": branch,
            "sponsor_legislator": sponsor_legislator,
            "sponsor_committee": sponsor_committee,
            "sponsor_other": sponsor_other,
            "document_type": document_type,
        }
        if any(value is not None for value in refinements.values()):
            params = build_search_params(search_term, self.get_refiners(), refinements)
        else:
            params = {"SearchTerms": search_term, "Page": "1"}

        console.print(f"[cyan]Searching bills for {search_term!r}...[/cyan]")
        html = self._get(self.settings.base_url + SEARCH_PATH, params=params)
        results = parse_search_results(html, self.settings.base_url)
        console.print(f"[green]✓ Found {len(results)} bills[/green]")
        return results

"""
Pytest fixtures and configuration.

- Fixtures use bill and law text in Massachusetts General Laws drafting style
- HTTP is replaced with httpx.MockTransport; nothing touches the network
- Each test builds its own DiagnosticReport so reported conditions can be asserted
"""
import copy
from typing import Any

import pytest

from springbok_core.config import DEFAULT_CONFIG, FetchSettings
from springbok_core.diagnostics import DiagnosticReport
from springbok_core.markup import MarkupEngine
from springbok_core.models import FetchedLawSection
from springbok_core.patterns import build_markup_catalog, build_section_catalog


# =============================================================================
# REGEX CATALOGS
# =============================================================================

@pytest.fixture
def section_catalog():
    """Strict section catalog, as built at pipeline start."""
    return build_section_catalog()


@pytest.fixture
def markup_catalog():
    return build_markup_catalog()


@pytest.fixture
def report() -> DiagnosticReport:
    return DiagnosticReport()


@pytest.fixture
def engine(markup_catalog, section_catalog, report) -> MarkupEngine:
    return MarkupEngine(markup_catalog, section_catalog, report)


# =============================================================================
# BILL TEXT FIXTURES
# =============================================================================

@pytest.fixture
def strike_insert_words_text() -> str:
    """Bill section replacing a phrase of chapter 90 section 2."""
    return (
        "SECTION 1. Section 2 of chapter 90 of the General Laws is hereby amended "
        "by striking out the words \"ten dollars\" and inserting in place thereof "
        "the following words:- fifty dollars."
    )


@pytest.fixture
def repeal_text() -> str:
    return "SECTION 2. Section 5 of chapter 6A of the General Laws is hereby repealed."


@pytest.fixture
def section_list_text() -> str:
    return "SECTION 3. Sections 10, 11 and 12 of chapter 90 of the General Laws are hereby repealed."


@pytest.fixture
def effective_date_text() -> str:
    return "SECTION 4. This act shall take effect upon its passage."


@pytest.fixture
def sample_fragments(
    strike_insert_words_text, repeal_text, section_list_text, effective_date_text
) -> list[str]:
    """Four-section bill: strike+insert, two repeals, effective date."""
    return [strike_insert_words_text, repeal_text, section_list_text, effective_date_text]


# =============================================================================
# LAW TEXT FIXTURES
# =============================================================================

@pytest.fixture
def penalties_law_text() -> str:
    """Chapter 90 section 2 as returned by the legislature site."""
    return "Section 2. Penalties.\nThe fine shall be ten dollars per violation."


@pytest.fixture
def definitions_law_text() -> str:
    return (
        "Section 5. Definitions.\n"
        "As used in this chapter the following words shall have the following meanings."
    )


@pytest.fixture
def licenses_law_text() -> str:
    """Law section with lettered subsections."""
    return (
        "Section 7. Licenses.\n"
        "(a) Every dealer shall register with the registrar.\n"
        "(b) The fee for registration shall be ten dollars.\n"
        "(c) Fees shall be paid annually."
    )


@pytest.fixture
def fetched_law_sections(penalties_law_text, definitions_law_text) -> list[FetchedLawSection]:
    """Law texts for 90-2 and 6A-5; the 90-10..12 list is never fetched."""
    return [
        FetchedLawSection(chapter_number="90", section_number="2", full_text=penalties_law_text),
        FetchedLawSection(chapter_number="6A", section_number="5", full_text=definitions_law_text),
    ]


# =============================================================================
# CONFIG FIXTURES
# =============================================================================

@pytest.fixture
def fetch_settings() -> FetchSettings:
    """No waiting between retries."""
    return FetchSettings(
        base_url="https://malegislature.gov",
        timeout=5.0,
        max_retries=2,
        retry_delay=0,
        max_concurrency=2,
    )


@pytest.fixture
def sample_config(tmp_path) -> dict[str, Any]:
    config = copy.deepcopy(DEFAULT_CONFIG)
    config["fetch"]["retry_delay"] = 0
    config["output"]["folder"] = str(tmp_path / "output")
    return config


# =============================================================================
# HTML FIXTURES
# =============================================================================

@pytest.fixture
def bill_page_html() -> str:
    return (
        "<html><body>"
        "<div class=\"modalBtnGroup\">"
        "<a href=\"/Bills/193/H4072/House/Text\">Text</a>"
        "<a href=\"/Bills/193/H4072.pdf\">PDF</a>"
        "</div>"
        "</body></html>"
    )


@pytest.fixture
def bill_text_html(strike_insert_words_text, repeal_text) -> str:
    return (
        "<html><body><div class=\"modal-body\"><div>"
        f"<p>{strike_insert_words_text}</p>"
        f"<p>{repeal_text}</p>"
        "</div></div></body></html>"
    )


@pytest.fixture
def law_page_html() -> str:
    return (
        "<html><body><section>"
        "<h2 id=\"skipTo\">Section 2. Penalties.</h2>\n"
        "<p>The fine shall be ten dollars per violation.</p>"
        "</section></body></html>"
    )


@pytest.fixture
def search_page_html() -> str:
    return (
        "<html><body><table><tbody>"
        "<tr>"
        "<td><input type=\"checkbox\"/></td>"
        "<td><a href=\"/Bills/193/H4072\">H.4072</a></td>"
        "<td><a href=\"/Legislators/Profile/JD1\">Jane Doe</a></td>"
        "<td>An Act relative to motor vehicle fines</td>"
        "</tr>"
        "<tr>"
        "<td><input type=\"checkbox\"/></td>"
        "<td><a href=\"/Bills/193/S2101\">S.2101</a></td>"
        "<td><a href=\"/Legislators/Profile/RR2\">Richard Roe</a></td>"
        "<td>An Act relative to dealer licenses</td>"
        "</tr>"
        "</tbody></table></body></html>"
    )


@pytest.fixture
def refiners_page_html() -> str:
    """Unfiltered search page; the legislator group keeps its options in a modal."""
    def option(token: str, label: str) -> str:
        return f"<label><input type=\"checkbox\" data-refinertoken=\"{token}\"/> {label}</label>"

    return (
        "<html><body><div id=\"refiners\">"
        "<fieldset><legend>General Court</legend>"
        + option("tok193", "193rd <span>(2023 - 2024)</span>")
        + option("tok192", "192nd <span>(2021 - 2022)</span>")
        + "</fieldset>"
        "<fieldset><legend>Branch</legend>"
        + option("tokHouse", "House <span>(30)</span>")
        + option("tokSenate", "Senate <span>(12)</span>")
        + "</fieldset>"
        "<fieldset><legend>Sponsor</legend>"
        "<div class=\"modal\"><h4 class=\"modal-title\">Sponsor - Legislator</h4>"
        "<div class=\"modal-body\">"
        + option("tokDoe", "Doe, Jane <span>(4)</span>")
        + option("tokOBrien", "O'Brien, Pat <span>(2)</span>")
        + "</div></div></fieldset>"
        "<fieldset><legend>Sponsor - Committee</legend>"
        + option("tokWays", "Ways and Means <span>(12)</span>")
        + "</fieldset>"
        "<fieldset><legend>Sponsor - Other</legend>"
        + option("tokGovernor", "Governor <span>(3)</span>")
        + "</fieldset>"
        "<fieldset><legend>Document Type</legend>"
        + option("tokBill", "Bill <span>(950)</span>")
        + option("tokOrder", "Order <span>(20)</span>")
        + "</fieldset>"
        "</div></body></html>"
    )

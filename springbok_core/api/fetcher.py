"""
Concurrent law section fetcher.

One task per distinct (chapter, section) request, bounded by a semaphore,
collected with asyncio.gather. Completion order does not matter: markup
order comes from the cross-reference index, not from the fetch.

A failed request is reported as FETCH_FAILURE and left out of the result;
the caller skips markup for that law key.

Usage:
    fetched = fetch_law_sections(index.requests, FetchSettings(), report)
"""
import asyncio
import logging
from typing import Iterable, Optional

import httpx
from rich.console import Console

from springbok_core.api.malegislature import (
    LAW_GOTO_PATH,
    USER_AGENT,
    law_section_params,
    parse_law_section_text,
)
from springbok_core.config import FetchSettings
from springbok_core.diagnostics import DiagnosticKind, DiagnosticReport, report_to
from springbok_core.exceptions import LegislatureFetchError
from springbok_core.models import FetchedLawSection, get_section_key

console = Console()
logger = logging.getLogger(__name__)


class LawSectionFetcher:
    """Fetch law section texts concurrently from the GoTo endpoint."""

    def __init__(self, settings: FetchSettings, report: Optional[DiagnosticReport] = None):
        self.settings = settings
        self.report = report_to(report)

    async def fetch_all(
        self,
        requests: Iterable[tuple[str, str]],
        client: Optional[httpx.AsyncClient] = None,
    ) -> list[FetchedLawSection]:
        requests = list(requests)
        if not requests:
            return []

        console.print(f"[cyan]Fetching {len(requests)} law sections...[/cyan]")
        semaphore = asyncio.Semaphore(self.settings.max_concurrency)

        if client is None:
            async with httpx.AsyncClient(
                timeout=self.settings.timeout,
                follow_redirects=True,
                headers={"User-Agent": USER_AGENT},
            ) as own_client:
                results = await self._gather(own_client, semaphore, requests)
        else:
            results = await self._gather(client, semaphore, requests)

        fetched = []
        for (chapter, section), result in zip(requests, results):
            if isinstance(result, FetchedLawSection):
                fetched.append(result)
            else:
                self.report.add(
                    DiagnosticKind.FETCH_FAILURE,
                    get_section_key(chapter, section),
                    str(result),
                )

        console.print(f"[green]✓ Fetched {len(fetched)}/{len(requests)} law sections[/green]")
        return fetched

    async def _gather(self, client, semaphore, requests):
        tasks = [
            self._fetch_one(client, semaphore, chapter, section)
            for chapter, section in requests
        ]
        # return_exceptions keeps one failed law section from cancelling the rest
        return await asyncio.gather(*tasks, return_exceptions=True)

    async def _fetch_one(
        self,
        client: httpx.AsyncClient,
        semaphore: asyncio.Semaphore,
        chapter: str,
        section: str,
    ) -> FetchedLawSection:
        url = self.settings.base_url + LAW_GOTO_PATH
        params = law_section_params(chapter, section)
        last_error: Exception | None = None

        async with semaphore:
            for attempt in range(self.settings.max_retries):
                try:
                    response = await client.get(url, params=params)
                    response.raise_for_status()
                    break
                except httpx.HTTPError as e:
                    last_error = e
                    logger.warning(
                        "Attempt %d/%d for chapter %s section %s failed: %s",
                        attempt + 1, self.settings.max_retries, chapter, section, e,
                    )
                    if attempt < self.settings.max_retries - 1:
                        await asyncio.sleep(self.settings.retry_delay)
            else:
                raise LegislatureFetchError(url, f"Request failed: {last_error}")

        text = parse_law_section_text(response.text)
        if text is None:
            raise LegislatureFetchError(str(response.url), "No law section text on page")

        logger.info("Got law section %s of chapter %s", section, chapter)
        return FetchedLawSection(chapter_number=chapter, section_number=section, full_text=text)


def fetch_law_sections(
    requests: Iterable[tuple[str, str]],
    settings: FetchSettings,
    report: Optional[DiagnosticReport] = None,
) -> list[FetchedLawSection]:
    """Blocking wrapper around LawSectionFetcher.fetch_all."""
    return asyncio.run(LawSectionFetcher(settings, report).fetch_all(requests))

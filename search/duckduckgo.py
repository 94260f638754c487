"""DuckDuckGo web search via the no-JavaScript HTML endpoint."""

from urllib.parse import parse_qs, urlsplit

import httpx
from bs4 import BeautifulSoup

from rag.contracts import SearchResult
from utils.logger import get_logger

from .base import SearchProvider

logger = get_logger(__name__)

DDG_HTML_URL = "https://html.duckduckgo.com/html/"
DEFAULT_TIMEOUT_S = 8.0
BROWSER_HEADERS = {
    "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36",
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
}


def decode_result_link(href: str | None) -> str:
    """Unwrap DuckDuckGo's ``/l/?uddg=<target>`` redirect links."""
    if not href:
        return ""
    if href.startswith("//"):
        href = "https:" + href

    parts = urlsplit(href)
    if parts.path.startswith("/l/"):
        target = parse_qs(parts.query).get("uddg")
        return target[0] if target else ""
    if parts.scheme in ("http", "https"):
        return href
    return ""


def parse_results_page(html: str) -> list[SearchResult]:
    soup = BeautifulSoup(html, "html.parser")
    results: list[SearchResult] = []

    for block in soup.select("div.result"):
        if "result--ad" in (block.get("class") or []):
            continue

        anchor = block.select_one("a.result__a")
        if anchor is None:
            continue

        snippet_el = block.select_one(".result__snippet")
        results.append(
            SearchResult(
                title=anchor.get_text(" ", strip=True),
                link=decode_result_link(anchor.get("href")),
                snippet=snippet_el.get_text(" ", strip=True) if snippet_el else "",
            )
        )

    return results


class DuckDuckGoSearchProvider(SearchProvider):
    """Keyless search provider; results are scraped from DuckDuckGo's HTML page."""

    name = "duckduckgo"

    def __init__(self, client: httpx.AsyncClient | None = None, timeout_s: float = DEFAULT_TIMEOUT_S):
        self.client = client
        self.timeout_s = timeout_s

    async def _fetch_page(self, client: httpx.AsyncClient, query: str) -> str:
        response = await client.get(
            DDG_HTML_URL,
            params={"q": query, "kp": "-1"},  # kp=-1: moderate safe search
            headers=BROWSER_HEADERS,
            timeout=self.timeout_s,
        )
        response.raise_for_status()
        return response.text

    async def _do_search(self, query: str, max_results: int) -> list[SearchResult]:
        if self.client is not None:
            html = await self._fetch_page(self.client, query)
        else:
            async with httpx.AsyncClient(follow_redirects=True) as client:
                html = await self._fetch_page(client, query)

        results = parse_results_page(html)
        if not results:
            logger.warning("[Search:duckduckgo] No results found or unexpected page format.")
        return results[:max_results]

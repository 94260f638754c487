"""Bounded-time page fetch + text extraction for RAG candidates."""

import asyncio
import re

import httpx

from utils.logger import get_logger

from .html_text import HtmlParser, SoupHtmlParser, extract_main_text
from .settings import RAGSettings

logger = get_logger(__name__)

_MULTI_WHITESPACE = re.compile(r"\s\s+")
_MULTI_NEWLINE = re.compile(r"\n+")


def normalize_whitespace(text: str) -> str:
    """Collapse whitespace runs to one space, newline runs to one newline, then trim."""
    text = _MULTI_WHITESPACE.sub(" ", text)
    text = _MULTI_NEWLINE.sub("\n", text)
    return text.strip()


class ContentFetcher:
    """
    Fetches one URL and reduces its HTML to plain text.

    ``fetch_and_extract_text`` never raises: timeouts, HTTP errors, non-HTML
    payloads and parser failures all come back as None. Which of those
    happened is only visible in the logs.
    """

    def __init__(
        self,
        settings: RAGSettings | None = None,
        client: httpx.AsyncClient | None = None,
        parser: HtmlParser | None = None,
    ):
        """
        Args:
            settings: Timeout and User-Agent source (defaults to RAGSettings())
            client: Shared async HTTP client; one is created (and owned) if omitted
            parser: HTML parser used for extraction (defaults to BeautifulSoup)
        """
        self.settings = settings or RAGSettings()
        self.parser = parser or SoupHtmlParser()
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(
            timeout=self.settings.fetch_timeout_s, follow_redirects=True
        )

    @property
    def headers(self) -> dict[str, str]:
        return {"User-Agent": self.settings.user_agent, "Accept": "text/html"}

    async def _download_html(self, url: str) -> str | None:
        async with self.client.stream("GET", url, headers=self.headers) as response:
            if not response.is_success:
                logger.warning(f"[RAG] Failed to fetch {url}: Status {response.status_code}")
                return None

            content_type = response.headers.get("content-type")
            if not content_type or "text/html" not in content_type.lower():
                logger.warning(f"[RAG] Skipped non-HTML content at {url}: {content_type}")
                return None

            await response.aread()
            return response.text

    async def fetch_and_extract_text(self, url: str) -> str | None:
        """
        Fetch ``url`` and return its normalized main-content text.

        Returns:
            Extracted text, or None on any failure
        """
        try:
            html = await asyncio.wait_for(
                self._download_html(url), timeout=self.settings.fetch_timeout_s
            )
            if html is None:
                return None

            document = self.parser.parse(html)
            text = normalize_whitespace(extract_main_text(document))

            logger.info(f"[RAG] Successfully extracted text from {url} (Length: {len(text)})")
            return text

        except (asyncio.TimeoutError, httpx.TimeoutException):
            logger.warning(
                f"[RAG] Fetch timed out for {url}",
                extra={"extra_fields": {"url": url, "timeout_s": self.settings.fetch_timeout_s}},
            )
            return None
        except Exception as e:
            logger.error(
                f"[RAG] Error fetching/extracting {url}: {e}",
                extra={"extra_fields": {"url": url, "error_type": type(e).__name__}},
            )
            return None

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()

    async def __aenter__(self) -> "ContentFetcher":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

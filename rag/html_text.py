"""HTML-to-text extraction behind a small parser interface."""

from typing import Protocol

from bs4 import BeautifulSoup

# Non-content elements dropped before text extraction
NON_CONTENT_SELECTORS = (
    "script, style, nav, footer, header, noscript, iframe, "
    "button, input, select, textarea, aside"
)

# Tried in order; the first one yielding text wins
CONTENT_SELECTORS = ("main", "article", "body")


class HtmlDocument(Protocol):
    def remove(self, selector: str) -> None: ...

    def text(self, selector: str | None = None) -> str: ...


class HtmlParser(Protocol):
    def parse(self, html: str) -> HtmlDocument: ...


class SoupDocument:
    """BeautifulSoup-backed document."""

    def __init__(self, soup: BeautifulSoup):
        self._soup = soup

    def remove(self, selector: str) -> None:
        for element in self._soup.select(selector):
            element.decompose()

    def text(self, selector: str | None = None) -> str:
        if selector is None:
            return self._soup.get_text()
        return "".join(element.get_text() for element in self._soup.select(selector))


class SoupHtmlParser:
    """Default parser using the stdlib-backed ``html.parser`` tree builder."""

    def __init__(self, features: str = "html.parser"):
        self.features = features

    def parse(self, html: str) -> SoupDocument:
        return SoupDocument(BeautifulSoup(html, self.features))


def extract_main_text(document: HtmlDocument) -> str:
    """Strip page chrome and return the text of the primary content container."""
    document.remove(NON_CONTENT_SELECTORS)
    for selector in CONTENT_SELECTORS:
        text = document.text(selector)
        if text and text.strip():
            return text
    return document.text()

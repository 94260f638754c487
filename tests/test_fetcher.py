"""ContentFetcher tests: all HTTP traffic goes through httpx.MockTransport."""

import asyncio

import httpx
import pytest

from rag.fetcher import ContentFetcher, normalize_whitespace
from rag.html_text import SoupHtmlParser, extract_main_text
from rag.settings import RAGSettings

pytestmark = pytest.mark.unit

PAGE = """
<html>
  <head><title>t</title><style>.x { color: red }</style></head>
  <body>
    <header>Site header</header>
    <nav>Home | About</nav>
    <main>
      <h1>Food safety</h1>
      <p>Wash   your hands
      before cooking.</p>
      <script>track()</script>
      <button>Subscribe</button>
    </main>
    <aside>Related links</aside>
    <footer>Copyright</footer>
  </body>
</html>
"""


def run_fetch(handler, url="https://who.int/page", settings=None, parser=None):
    async def _run():
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        fetcher = ContentFetcher(settings=settings or RAGSettings(), client=client, parser=parser)
        try:
            return await fetcher.fetch_and_extract_text(url)
        finally:
            await client.aclose()

    return asyncio.run(_run())


def test_extracts_main_content_only():
    text = run_fetch(lambda request: httpx.Response(200, html=PAGE))
    assert text is not None
    assert "Food safety" in text
    assert "Wash your hands" in text
    for chrome in ("Site header", "Home | About", "track()", "Subscribe", "Related links", "Copyright"):
        assert chrome not in text
    assert text == text.strip()


def test_sends_identifying_headers():
    seen = {}

    def handler(request):
        seen.update(request.headers)
        return httpx.Response(200, html=PAGE)

    settings = RAGSettings(user_agent="TestBot/0.1")
    run_fetch(handler, settings=settings)
    assert seen["user-agent"] == "TestBot/0.1"
    assert seen["accept"] == "text/html"


def test_falls_back_to_article_then_body():
    article_page = "<html><body><nav>menu</nav><article>Article text</article><p>tail</p></body></html>"
    assert run_fetch(lambda r: httpx.Response(200, html=article_page)) == "Article text"

    body_page = "<html><body><p>Only   body</p></body></html>"
    assert run_fetch(lambda r: httpx.Response(200, html=body_page)) == "Only body"


def test_non_success_status_returns_none():
    assert run_fetch(lambda r: httpx.Response(404, html="<p>not found</p>")) is None
    assert run_fetch(lambda r: httpx.Response(503, html="<p>down</p>")) is None


def test_non_html_content_type_returns_none():
    assert run_fetch(lambda r: httpx.Response(200, json={"a": 1})) is None
    assert run_fetch(
        lambda r: httpx.Response(200, content=b"%PDF-1.4", headers={"content-type": "application/pdf"})
    ) is None


def test_missing_content_type_returns_none():
    assert run_fetch(lambda r: httpx.Response(200, content=b"<html><body>x</body></html>")) is None


def test_network_error_returns_none():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    assert run_fetch(handler) is None


def test_timeout_returns_none():
    async def slow_handler(request):
        await asyncio.sleep(1)
        return httpx.Response(200, html=PAGE)

    assert run_fetch(slow_handler, settings=RAGSettings(fetch_timeout_s=0.05)) is None


def test_parser_failure_returns_none():
    class ExplodingParser:
        def parse(self, html):
            raise RuntimeError("bad markup")

    assert run_fetch(lambda r: httpx.Response(200, html=PAGE), parser=ExplodingParser()) is None


def test_injected_parser_is_used():
    class CannedDocument:
        def remove(self, selector):
            pass

        def text(self, selector=None):
            return "  canned   text  " if selector == "main" else ""

    class CannedParser:
        def parse(self, html):
            return CannedDocument()

    assert run_fetch(lambda r: httpx.Response(200, html="<p/>"), parser=CannedParser()) == "canned text"


def test_normalize_whitespace():
    assert normalize_whitespace("  hello   world \n\n foo ") == "hello world foo"
    assert normalize_whitespace("a\nb") == "a\nb"
    assert normalize_whitespace("\n\n") == ""


def test_extract_main_text_prefers_main_over_body():
    document = SoupHtmlParser().parse("<body><main>primary</main><div>other</div></body>")
    assert extract_main_text(document) == "primary"


def test_owned_client_is_closed():
    async def _run():
        fetcher = ContentFetcher()
        async with fetcher:
            pass
        return fetcher.client.is_closed

    assert asyncio.run(_run()) is True

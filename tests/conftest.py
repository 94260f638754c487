import pytest
from dotenv import load_dotenv

from rag.contracts import SearchResult
from rag.settings import RAGSettings

# Load environment variables from .env file for tests
load_dotenv()


class FakeFetcher:
    """Returns canned text per URL and records every fetch attempt."""

    def __init__(self, texts: dict[str, str | None] | None = None, default: str | None = None):
        self.texts = texts or {}
        self.default = default
        self.calls: list[str] = []

    async def fetch_and_extract_text(self, url: str) -> str | None:
        self.calls.append(url)
        return self.texts.get(url, self.default)


@pytest.fixture
def make_fetcher():
    return FakeFetcher


@pytest.fixture
def settings():
    return RAGSettings()


@pytest.fixture
def sample_results():
    return [
        SearchResult(title="Random blog", link="https://randomblog.com/bar", snippet="..."),
        SearchResult(title="WHO food safety", link="https://who.int/foo", snippet="..."),
        SearchResult(title="Another blog", link="https://www.another.net/post", snippet="..."),
    ]


@pytest.fixture
def api_env(monkeypatch):
    """Fixture to mock environment variables for API tests."""
    env_vars = {
        "API_KEYS": "dev-key-1,dev-key-2",
        "SEARCH_PROVIDER": "duckduckgo",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    monkeypatch.delenv("GOOGLE_GEMINI_API_KEY", raising=False)
    return env_vars

import asyncio

import pytest

from rag.assembler import ContextAssembler
from rag.contracts import SearchResult
from rag.service import NutritionResearchService
from rag.settings import RAGSettings
from search.base import SearchProvider

pytestmark = pytest.mark.unit


class FakeProvider(SearchProvider):
    name = "fake"

    def __init__(self, results):
        self.results = results
        self.queries = []

    async def _do_search(self, query, max_results):
        self.queries.append((query, max_results))
        return list(self.results)


def make_service(fetcher, provider):
    assembler = ContextAssembler(settings=RAGSettings(), fetcher=fetcher)
    return NutritionResearchService(assembler=assembler, search_provider=provider)


def test_search_then_rag(make_fetcher, sample_results):
    provider = FakeProvider(sample_results)
    service = make_service(make_fetcher(default="text"), provider)
    context = asyncio.run(service.build("raw milk"))

    assert provider.queries == [("raw milk", 5)]
    assert context.used
    assert context.search_result_count == 3
    assert context.citations[0].source == "WHO"
    assert context.error is None


def test_supplied_results_skip_search(make_fetcher):
    provider = FakeProvider([])
    service = make_service(make_fetcher(default="text"), provider)
    supplied = [SearchResult(title="EFSA", link="https://efsa.europa.eu/a")]
    context = asyncio.run(service.build("q", search_results=supplied))

    assert provider.queries == []
    assert [c.source for c in context.citations] == ["EU EFSA"]


def test_no_search_results(make_fetcher):
    fetcher = make_fetcher(default="text")
    context = asyncio.run(make_service(fetcher, FakeProvider([])).build("q"))

    assert not context.used
    assert context.rag.context == 'Information related to "q":'
    assert context.citations == []
    assert context.error == "no_search_results"
    assert fetcher.calls == []


def test_supplied_empty_results_match_no_grounding_shape(make_fetcher):
    provider = FakeProvider([])
    service = make_service(make_fetcher(default="text"), provider)
    context = asyncio.run(service.build("q", search_results=[]))

    assert provider.queries == []
    assert context.rag.context == 'Information related to "q":'
    assert context.error == "no_search_results"


def test_no_grounding_is_not_an_exception(make_fetcher, sample_results):
    service = make_service(make_fetcher(default=None), FakeProvider(sample_results))
    context = asyncio.run(service.build("q"))

    assert not context.used
    assert context.error == "no_grounding"
    assert context.rag.context == 'Information related to "q":'


def test_disabled_web_search(make_fetcher, sample_results):
    provider = FakeProvider(sample_results)
    context = asyncio.run(make_service(make_fetcher(default="x"), provider).build("q", enable_web_search=False))

    assert not context.used
    assert context.error == "disabled"
    assert provider.queries == []


def test_missing_provider(make_fetcher):
    service = make_service(make_fetcher(default="x"), None)
    context = asyncio.run(service.build("q"))
    assert context.error == "no_search_provider"


def test_pipeline_crash_is_reported(sample_results):
    class CrashingFetcher:
        async def fetch_and_extract_text(self, url):
            raise RuntimeError("unexpected")

    context = asyncio.run(make_service(CrashingFetcher(), FakeProvider(sample_results)).build("q"))
    assert not context.used
    assert context.error == "unexpected"


def test_factory_wires_service_from_env(monkeypatch):
    from rag import factory
    from search.duckduckgo import DuckDuckGoSearchProvider

    monkeypatch.setenv("SEARCH_PROVIDER", "duckduckgo")
    monkeypatch.setenv("RAG_MAX_CONTEXT_LENGTH", "1234")

    service = factory.create_research_service_from_env()
    assert isinstance(service.search_provider, DuckDuckGoSearchProvider)
    assert service.assembler.settings.max_context_length == 1234
    assert service.assembler.fetcher.settings is service.assembler.settings


def test_one_shot_perform_rag(monkeypatch, sample_results):
    from rag import factory

    async def fake_fetch(self, url):
        return f"text from {url}"

    monkeypatch.setattr(factory.ContentFetcher, "fetch_and_extract_text", fake_fetch)
    result = asyncio.run(factory.perform_rag("milk", sample_results, max_results_to_process=2))

    assert [c.source for c in result.citations] == ["WHO", "RANDOMBLOG"]
    assert "text from https://who.int/foo" in result.context

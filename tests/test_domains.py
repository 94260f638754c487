import pytest

from rag.contracts import SearchResult
from rag.domains import (
    DEFAULT_SOURCE_RULES,
    DomainClassifier,
    SourceRule,
    get_domain_name,
    get_source_name,
    is_prioritized,
    prioritize,
)

pytestmark = pytest.mark.unit


@pytest.mark.parametrize("domain", ["who.int", "example.com", "food.gov.uk", "a.b.c.example.org"])
def test_domain_name_strips_single_www(domain):
    assert get_domain_name("https://www." + domain + "/path") == domain


def test_domain_name_strips_only_one_www():
    assert get_domain_name("https://www.www.example.com/") == "www.example.com"


def test_domain_name_without_www_is_unchanged():
    assert get_domain_name("http://efsa.europa.eu/en/topics?x=1") == "efsa.europa.eu"


def test_domain_name_lowercases_host():
    assert get_domain_name("https://WWW.WHO.INT/News") == "who.int"


@pytest.mark.parametrize(
    "value",
    [
        "",
        "   ",
        "not a url",
        "who.int/foo",
        "http://",
        "://missing-scheme",
        "http://[::1",
        "mailto:a@b.com",
        "http://exa mple.com/x",
        "http://<script>/",
        "https://who.int\\x/..",
        "http://a^b.com/",
        "http://a|b.com/",
        "http://example.com:99999/",
    ],
)
def test_domain_name_malformed_returns_none(value):
    assert get_domain_name(value) is None


def test_domain_name_non_string_returns_none():
    assert get_domain_name(None) is None  # type: ignore[arg-type]


@pytest.mark.parametrize(
    "domain, label",
    [
        ("who.int", "WHO"),
        ("apps.who.int", "WHO"),
        ("food.gov.uk", "UK FSA"),
        ("ratings.food.gov.uk", "UK FSA"),
        ("efsa.europa.eu", "EU EFSA"),
        ("food.ec.europa.eu", "EU Commission/Portal"),
        ("ec.europa.eu", "EU Commission/Portal"),
        ("commission.europa.eu", "EU Commission/Portal"),
        ("europa.eu", "EU Commission/Portal"),
    ],
)
def test_source_name_for_authorities(domain, label):
    assert get_source_name(domain) == label


def test_source_name_falls_back_to_first_label():
    assert get_source_name("example.com") == "EXAMPLE"
    assert get_source_name("healthline.com") == "HEALTHLINE"
    assert get_source_name("localhost") == "LOCALHOST"


def test_source_name_returns_raw_domain_when_first_label_empty():
    assert get_source_name(".hidden") == ".hidden"


def test_source_name_earlier_rule_wins():
    rules = (SourceRule("example", "First"), SourceRule("example.com", "Second"))
    assert get_source_name("example.com", rules) == "First"
    assert get_source_name("example.com", tuple(reversed(rules))) == "Second"


def test_classification_is_pure():
    url = "https://www.efsa.europa.eu/en"
    assert get_domain_name(url) == get_domain_name(url)
    domain = get_domain_name(url)
    assert get_source_name(domain) == get_source_name(domain) == "EU EFSA"


def test_is_prioritized():
    assert is_prioritized("who.int")
    assert is_prioritized("data.europa.eu")
    assert not is_prioritized("randomblog.com")
    assert not is_prioritized(None)


def test_prioritize_is_stable_partition():
    results = [
        SearchResult(title="blog 1", link="https://blog1.com"),
        SearchResult(title="efsa", link="https://www.efsa.europa.eu/x"),
        SearchResult(title="broken", link="not a url"),
        SearchResult(title="blog 2", link="https://blog2.com"),
        SearchResult(title="who", link="https://who.int/y"),
    ]
    ordered = [r.title for r in prioritize(results)]
    assert ordered == ["efsa", "who", "blog 1", "broken", "blog 2"]


def test_prioritize_keeps_order_when_nothing_prioritized():
    results = [SearchResult(title=str(i), link=f"https://site{i}.com") for i in range(5)]
    assert prioritize(results) == results


def test_classifier_uses_its_own_rules():
    classifier = DomainClassifier([SourceRule("nutrition.gov", "USDA")])
    assert classifier.source_name("www2.nutrition.gov") == "USDA"
    # not in this table: falls back to the upper-cased first label
    assert classifier.source_name("who.int") == "WHO"
    assert not classifier.is_prioritized("who.int")
    assert DomainClassifier().rules == DEFAULT_SOURCE_RULES

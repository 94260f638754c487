"""
Domain classification for search candidates.

A URL is reduced to its host (minus one leading ``www.``) and matched
against an ordered table of authority rules. The same table drives both the
fetch priority of a candidate and the short label shown in citations.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from urllib.parse import urlsplit

import httpx

from .contracts import SearchResult

# Characters a URL parser must reject in a host name
FORBIDDEN_HOST_CHARS = frozenset(" \t\n\r<>\\^|%\"`{}")


@dataclass(frozen=True)
class SourceRule:
    """Maps every domain containing ``pattern`` to ``label``."""

    pattern: str
    label: str

    def matches(self, domain: str) -> bool:
        return self.pattern in domain


# Evaluated top to bottom; the first match wins.
DEFAULT_SOURCE_RULES: tuple[SourceRule, ...] = (
    # WHO
    SourceRule("who.int", "WHO"),
    # UK Food Standards Agency
    SourceRule("food.gov.uk", "UK FSA"),
    SourceRule("ratings.food.gov.uk", "UK FSA"),
    SourceRule("gov.uk/government/organisations/food-standards-agency", "UK FSA"),
    # EU food safety: EFSA before the broader europa.eu patterns
    SourceRule("efsa.europa.eu", "EU EFSA"),
    SourceRule("food.ec.europa.eu", "EU Commission/Portal"),
    SourceRule("ec.europa.eu", "EU Commission/Portal"),
    SourceRule("commission.europa.eu", "EU Commission/Portal"),
    SourceRule("europa.eu", "EU Commission/Portal"),
)


def get_domain_name(url: str) -> str | None:
    """
    Extract the normalized host of ``url``.

    Returns:
        Host without a leading ``www.`` (e.g. ``who.int``), or None when
        ``url`` is not an absolute URL with a valid host.
    """
    if not isinstance(url, str):
        return None
    url = url.strip()
    try:
        httpx.URL(url)
        parts = urlsplit(url)
        # .hostname raises on unbalanced IPv6 brackets, .port on a bad port
        host = parts.hostname
        parts.port
    except (httpx.InvalidURL, ValueError):
        return None

    if not parts.scheme or not host:
        return None
    if any(ch in FORBIDDEN_HOST_CHARS for ch in host):
        return None

    if host.startswith("www."):
        host = host[len("www."):]
    return host or None


def get_source_name(domain: str, rules: Sequence[SourceRule] = DEFAULT_SOURCE_RULES) -> str:
    """Human-readable label for ``domain``; falls back to its first DNS label upper-cased."""
    for rule in rules:
        if rule.matches(domain):
            return rule.label

    first_label = domain.split(".")[0]
    return first_label.upper() if first_label else domain


def is_prioritized(domain: str | None, rules: Sequence[SourceRule] = DEFAULT_SOURCE_RULES) -> bool:
    if not domain:
        return False
    return any(rule.matches(domain) for rule in rules)


def prioritize(
    results: Iterable[SearchResult], rules: Sequence[SourceRule] = DEFAULT_SOURCE_RULES
) -> list[SearchResult]:
    """
    Stable partition: prioritized domains first, original order kept within
    each tier. Unparseable links land in the non-prioritized tier.
    """
    preferred: list[SearchResult] = []
    rest: list[SearchResult] = []
    for result in results:
        if is_prioritized(get_domain_name(result.link), rules):
            preferred.append(result)
        else:
            rest.append(result)
    return preferred + rest


class DomainClassifier:
    """Binds one rule table to the classification helpers."""

    def __init__(self, rules: Sequence[SourceRule] = DEFAULT_SOURCE_RULES):
        self.rules = tuple(rules)

    def domain_of(self, url: str) -> str | None:
        return get_domain_name(url)

    def source_name(self, domain: str) -> str:
        return get_source_name(domain, self.rules)

    def is_prioritized(self, domain: str | None) -> bool:
        return is_prioritized(domain, self.rules)

    def prioritize(self, results: Iterable[SearchResult]) -> list[SearchResult]:
        return prioritize(results, self.rules)

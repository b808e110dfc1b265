"""Stateless predicates that classify page text and URLs."""

import re
from typing import Iterable, List, Optional

from .constants import (
    AGGREGATOR_TERMS,
    CINEMA_HOSTNAMES,
    OFFICIAL_SIGNAL_TERMS,
    PREFERRED_VENUE_TERMS,
    SEARCH_BLACKLIST,
)
from .normalize import hostname_of


def _compile(terms: Iterable[str]) -> "re.Pattern[str]":
    return re.compile("|".join(terms), re.IGNORECASE)


OFFICIAL_SIGNAL_RE = _compile(OFFICIAL_SIGNAL_TERMS)
AGGREGATOR_RE = _compile(AGGREGATOR_TERMS)
PREFERRED_VENUE_RE = _compile(PREFERRED_VENUE_TERMS)


def is_official_signal(text: str) -> bool:
    return bool(text) and OFFICIAL_SIGNAL_RE.search(text) is not None


def is_aggregator_signal(text: str) -> bool:
    return bool(text) and AGGREGATOR_RE.search(text) is not None


def is_preferred_venue(url: str) -> bool:
    return bool(url) and PREFERRED_VENUE_RE.search(url) is not None


def is_blacklisted_result(url: str, blacklist: Optional[List[str]] = None) -> bool:
    lowered = url.lower()
    return any(term in lowered for term in (blacklist or SEARCH_BLACKLIST))


def cinema_hostnames(urls: Iterable[str]) -> List[str]:
    """Distinct hostnames among urls that belong to a known cinema."""
    found: List[str] = []
    for url in urls:
        host = hostname_of(url)
        if host and host not in found and any(c in host for c in CINEMA_HOSTNAMES):
            found.append(host)
    return found

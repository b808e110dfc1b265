import re
from typing import Iterable, List, Optional
from urllib.parse import urlparse

from .constants import BOOKING_DOMAIN_PATTERNS

_QUOTES = re.compile(r"[’'‘`]")
_NON_ALNUM = re.compile(r"[^a-z0-9]+")
_BOOKING_RE = [re.compile(p, re.IGNORECASE) for p in BOOKING_DOMAIN_PATTERNS]


def normalize_text(s: str) -> str:
    return " ".join(s.strip().lower().split())


def clean_text(text: str) -> str:
    """Collapse tabs and runs of spaces/blank lines, keeping single newlines."""
    text = re.sub(r"[\t\r]", " ", text)
    text = re.sub(r"\s*\n\s*", "\n", text)
    text = re.sub(r"\n{3,}", "\n\n", text)
    text = re.sub(r" {2,}", " ", text)
    return text.strip()


def canonical_url(url: str) -> str:
    parsed = urlparse(url)
    path = parsed.path.rstrip("/")
    # Drop query and fragment to avoid source-specific tracking
    return f"{parsed.scheme}://{parsed.netloc.lower()}{path or '/'}" if parsed.scheme and parsed.netloc else path


def normalize_candidate_url(raw: Optional[str]) -> Optional[str]:
    """Canonicalize a candidate URL to scheme + host + path.

    Returns None for anything that is not an absolute http(s) URL.
    """
    if not raw or not isinstance(raw, str):
        return None
    raw = raw.strip()
    if raw.lower().startswith("www."):
        raw = "https://" + raw
    try:
        parsed = urlparse(raw)
        # Accessing .port validates the netloc
        parsed.port
    except ValueError:
        return None
    if parsed.scheme.lower() not in ("http", "https") or not parsed.hostname:
        return None
    if " " in parsed.netloc:
        return None
    return canonical_url(raw)


def hostname_of(url: str) -> str:
    try:
        return (urlparse(url).hostname or "").lower()
    except ValueError:
        return ""


def root_origin(url: str) -> str:
    parsed = urlparse(url)
    return f"{parsed.scheme}://{parsed.netloc.lower()}/"


def strip_city(name: str, city: str = "London") -> str:
    lowered = _QUOTES.sub("", name.lower())
    if city:
        lowered = re.sub(rf"\b{re.escape(city.lower())}\b", "", lowered)
    return lowered


def normalize_activity_for_hostname(name: str, city: str = "London") -> Optional[str]:
    """Reduce an activity name to the alphanumeric run expected in its hostname."""
    cleaned = _NON_ALNUM.sub("", strip_city(name, city))
    return cleaned if len(cleaned) >= 3 else None


def name_tokens(name: str, city: str = "London") -> List[str]:
    spaced = _NON_ALNUM.sub(" ", strip_city(name, city))
    return [t for t in spaced.split() if len(t) >= 3]


def description_tokens(description: Optional[str]) -> List[str]:
    if not description:
        return []
    spaced = _NON_ALNUM.sub(" ", _QUOTES.sub("", description.lower()))
    return [t for t in spaced.split() if len(t) >= 4]


def is_booking_domain(url: str) -> bool:
    host = hostname_of(url)
    if not host:
        return False
    return any(p.search(host) or p.search(url) for p in _BOOKING_RE)


def deduplicate_urls(urls: Iterable[str]) -> List[str]:
    """Deduplicate URLs while preserving order."""
    seen = set()
    result = []
    for url in urls:
        if url not in seen:
            seen.add(url)
            result.append(url)
    return result

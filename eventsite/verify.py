"""Two-step HTTP check plus content heuristics for one candidate URL."""

import asyncio
from typing import Optional

import requests

from .constants import FILM_MISMATCH_WORDS, FILM_TAGS
from .domains import is_aggregator_signal, is_official_signal
from .env import Settings
from .logger import get_logger
from .normalize import (
    description_tokens,
    hostname_of,
    name_tokens,
    normalize_activity_for_hostname,
)
from .schema import LONDON, LocationContext, SourceEvent, first_description, has_tag

# Checks that must all pass; kept as a count so partial acceptance can be tuned
REQUIRED_SIGNALS = 3

HEADERS = {
    "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-GB,en;q=0.8",
}

logger = get_logger()


def fetch_page_prefix(url: str, settings: Settings, event_id: str) -> Optional[str]:
    """HEAD then GET a candidate; return the lowercased page prefix or None."""
    head = requests.head(url, headers=HEADERS, allow_redirects=True, timeout=settings.head_timeout)
    content_type = head.headers.get("content-type", "").lower()
    if not head.ok or "text/html" not in content_type:
        logger.info(
            "Candidate failed HEAD/content-type check",
            event_id=event_id,
            url=url,
            status=head.status_code,
            content_type=content_type,
        )
        return None

    resp = requests.get(url, headers=HEADERS, timeout=settings.fetch_timeout)
    if not resp.ok:
        logger.info("Candidate fetch failed", event_id=event_id, url=url, status=resp.status_code)
        return None

    body = resp.content
    if len(body) < settings.min_html_bytes:
        logger.info("Candidate HTML too small", event_id=event_id, url=url, size=len(body))
        return None

    return body[: settings.html_prefix_bytes].decode("utf-8", errors="ignore").lower()


def matches_name(html: str, name: str, city: str = "London") -> bool:
    tokens = name_tokens(name, city)
    whole = " ".join(tokens)
    if len(whole) >= 3 and whole in html:
        return True
    return any(token in html for token in tokens)


def matches_description(html: str, description: Optional[str]) -> bool:
    return any(token in html for token in description_tokens(description))


def evaluate_page(html: str, event: SourceEvent, url: str, location: LocationContext = LONDON) -> bool:
    """Content heuristics on an already fetched, lowercased page prefix."""
    has_name = matches_name(html, event.name, location.city)
    has_description = matches_description(html, first_description(event))
    has_official = is_official_signal(html)
    no_aggregator = not is_aggregator_signal(html)

    passed = sum([has_description, has_official, no_aggregator])

    film_mismatch = has_tag(event, *FILM_TAGS) and any(w in html for w in FILM_MISMATCH_WORDS)
    if film_mismatch:
        logger.info("Film candidate rejected for theatre vocabulary", event_id=event.event_id, url=url)

    expected_host = normalize_activity_for_hostname(event.name, location.city)
    host = hostname_of(url)
    host_slim = "".join(ch for ch in host if ch.isalnum())
    if expected_host and expected_host not in host_slim:
        logger.debug(
            "Hostname lacks normalized activity name",
            event_id=event.event_id,
            url=url,
            hostname=host,
            expected=expected_host,
        )

    accepted = has_name and passed >= REQUIRED_SIGNALS and not film_mismatch
    logger.info(
        "Verification result",
        event_id=event.event_id,
        url=url,
        name=has_name,
        description=has_description,
        official_signal=has_official,
        no_aggregator=no_aggregator,
        accepted=accepted,
    )
    return accepted


async def verify_candidate_url(url: str, event: SourceEvent, location: LocationContext = LONDON, settings: Optional[Settings] = None) -> bool:
    """Accept or reject url as the event's official site. Never raises."""
    settings = settings or Settings.from_env()
    try:
        html = await asyncio.to_thread(fetch_page_prefix, url, settings, event.event_id)
    except requests.exceptions.Timeout:
        logger.record_error("Verify_Timeout")
        logger.info("Verification timed out", event_id=event.event_id, url=url)
        html = None
    except requests.exceptions.RequestException as e:
        logger.record_error("Verify_RequestException")
        logger.info("Verification request failed", event_id=event.event_id, url=url, error=str(e))
        html = None

    accepted = html is not None and evaluate_page(html, event, url, location)
    logger.record_verification(accepted)
    return accepted

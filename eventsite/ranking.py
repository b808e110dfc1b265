"""Concurrent light-scrape of search candidates and score ranking."""

import asyncio
import math
from dataclasses import dataclass
from typing import Awaitable, Callable, List, Optional, Tuple

from .domains import is_preferred_venue
from .env import Settings
from .logger import get_logger
from .normalize import is_booking_domain, normalize_candidate_url
from .schema import SourceEvent
from .scrapers.light import PageSnapshot

Scraper = Callable[[str], Awaitable[Optional[PageSnapshot]]]
Scorer = Callable[[PageSnapshot, SourceEvent], float]

logger = get_logger()


@dataclass(frozen=True)
class ScoredCandidate:
    snapshot: PageSnapshot
    score: float

    @property
    def url(self) -> str:
        return self.snapshot.url


async def scrape_all(urls: List[str], scraper: Scraper, event_id: str) -> List[PageSnapshot]:
    """Scrape every url concurrently; keep successful, non-booking, unique pages."""
    results = await asyncio.gather(*(scraper(u) for u in urls), return_exceptions=True)

    snapshots: List[PageSnapshot] = []
    seen = set()
    for url, result in zip(urls, results):
        if isinstance(result, BaseException):
            logger.warning("Light scrape raised", event_id=event_id, url=url, error=repr(result))
            continue
        if result is None:
            logger.debug("Light scrape returned nothing", event_id=event_id, url=url)
            continue
        key = normalize_candidate_url(result.url) or result.url
        if is_booking_domain(result.url) or key in seen:
            continue
        seen.add(key)
        snapshots.append(result)
    return snapshots


def score_snapshots(snapshots: List[PageSnapshot], event: SourceEvent, scorer: Scorer, bonus: float) -> List[ScoredCandidate]:
    scored = []
    for snapshot in snapshots:
        try:
            score = float(scorer(snapshot, event))
        except (TypeError, ValueError, ArithmeticError) as e:
            logger.warning("Scoring failed", event_id=event.event_id, url=snapshot.url, error=str(e))
            continue
        if is_preferred_venue(snapshot.url):
            score += bonus
        if not math.isfinite(score):
            logger.debug("Discarding non-finite score", event_id=event.event_id, url=snapshot.url)
            continue
        scored.append(ScoredCandidate(snapshot=snapshot, score=score))
    # sorted() is stable, so equal scores keep discovery order
    return sorted(scored, key=lambda c: c.score, reverse=True)


async def rank_candidates(
    urls: List[str],
    event: SourceEvent,
    scraper: Scraper,
    scorer: Scorer,
    settings: Optional[Settings] = None,
) -> Tuple[List[ScoredCandidate], Optional[ScoredCandidate]]:
    """Return every finite-scored candidate, best first, and the best one."""
    settings = settings or Settings.from_env()
    snapshots = await scrape_all(urls, scraper, event.event_id)
    ranked = score_snapshots(snapshots, event, scorer, settings.preferred_venue_bonus)
    for c in ranked:
        logger.debug("Scored candidate", event_id=event.event_id, url=c.url, score=c.score)
    return ranked, (ranked[0] if ranked else None)

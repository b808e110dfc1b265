"""
Official-website resolution for a single source event.

Stages run cheapest and most trusted first; the first stage that returns a
result settles the event and the result is cached for the process lifetime.
"""

import functools
from dataclasses import dataclass, field
from typing import Awaitable, Callable, List, Optional

from .cache import ResultCache
from .constants import FILM_TAGS
from .domains import cinema_hostnames, is_blacklisted_result
from .env import Settings
from .logger import get_logger
from .normalize import (
    deduplicate_urls,
    is_booking_domain,
    normalize_candidate_url,
    root_origin,
)
from .ranking import Scorer, Scraper, ScoredCandidate, rank_candidates
from .schema import LONDON, LocationContext, SourceEvent, has_tag, raw_link_urls
from .scoring import score_page
from .scrapers.light import light_scrape
from .search import build_fallback_query, build_query
from .serp_results import search_candidates
from .verify import verify_candidate_url

Verifier = Callable[[str, SourceEvent, LocationContext], Awaitable[bool]]
Searcher = Callable[[str, int, str], Awaitable[List[str]]]

logger = get_logger()


@dataclass(frozen=True)
class ResolutionResult:
    official_url: Optional[str]
    light_scrape_candidates: List[ScoredCandidate] = field(default_factory=list)
    stage: str = "none"


@dataclass
class _Run:
    event: SourceEvent
    location: LocationContext
    raw_candidates: List[str] = field(default_factory=list)


def candidate_urls(urls: List[str]) -> List[str]:
    """Normalize, drop booking domains and duplicates, keep input order."""
    normalized = (normalize_candidate_url(u) for u in urls)
    return deduplicate_urls(u for u in normalized if u and not is_booking_domain(u))


def search_result_urls(urls: List[str]) -> List[str]:
    """Blacklist-filtered, normalized, de-duplicated search results."""
    return candidate_urls([u for u in urls if not is_blacklisted_result(u)])


class OfficialUrlResolver:
    """Resolves and caches the official website for source events.

    Every collaborator can be injected; the defaults hit the network.
    """

    def __init__(
        self,
        cache: Optional[ResultCache] = None,
        settings: Optional[Settings] = None,
        verifier: Optional[Verifier] = None,
        searcher: Optional[Searcher] = None,
        scraper: Optional[Scraper] = None,
        scorer: Optional[Scorer] = None,
    ):
        self.cache = cache if cache is not None else ResultCache()
        self.settings = settings or Settings.from_env()
        self.verifier = verifier or functools.partial(verify_candidate_url, settings=self.settings)
        self.searcher = searcher or self._default_search
        self.scraper = scraper or functools.partial(light_scrape, settings=self.settings)
        # None means score_page bound to each run's location
        self.scorer = scorer
        self.stages = (
            self._trusted_website,
            self._verified_raw_link,
            self._dispersed_film,
            self._search_and_score,
        )

    async def _default_search(self, query: str, limit: int, event_id: str) -> List[str]:
        return await search_candidates(query, limit=limit, settings=self.settings, event_id=event_id)

    async def _verify(self, url: str, run: _Run) -> bool:
        try:
            return bool(await self.verifier(url, run.event, run.location))
        except Exception as e:
            logger.record_error("Verifier_" + type(e).__name__)
            logger.warning("Verifier raised; treating as rejection", event_id=run.event.event_id, url=url, error=repr(e))
            return False

    async def _search(self, query: str, limit: int, event_id: str) -> List[str]:
        try:
            found = await self.searcher(query, limit, event_id)
        except Exception as e:
            logger.record_error("Searcher_" + type(e).__name__)
            logger.warning("Searcher raised; treating as no results", event_id=event_id, error=repr(e))
            return []
        return [u for u in found or [] if isinstance(u, str)]

    async def resolve(self, event: SourceEvent, location: LocationContext = LONDON) -> ResolutionResult:
        cached = self.cache.get(event.event_id)
        if cached is not None:
            logger.debug("Cache hit", event_id=event.event_id)
            return cached

        run = _Run(event=event, location=location, raw_candidates=candidate_urls(raw_link_urls(event)))
        for stage in self.stages:
            result = await stage(run)
            if result is not None:
                break
        logger.record_outcome(result.stage)
        logger.info(
            "Resolved official URL",
            event_id=event.event_id,
            stage=result.stage,
            official_url=result.official_url,
        )
        return self.cache.put_if_absent(event.event_id, result)

    async def _trusted_website(self, run: _Run) -> Optional[ResolutionResult]:
        website = (run.event.website or "").strip()
        if not website:
            return None
        normalized = normalize_candidate_url(website)
        if not normalized:
            logger.info("Ignoring un-normalizable website field", event_id=run.event.event_id, website=website)
            return None
        if is_booking_domain(normalized):
            logger.info("Rejected website field on booking domain", event_id=run.event.event_id, website=normalized)
            return None
        logger.info("Using trusted website field", event_id=run.event.event_id, website=normalized)
        return ResolutionResult(official_url=root_origin(normalized), stage="website")

    async def _verified_raw_link(self, run: _Run) -> Optional[ResolutionResult]:
        # Sequential: the first link that verifies wins
        for url in run.raw_candidates:
            logger.debug("Verifying raw link", event_id=run.event.event_id, url=url)
            if await self._verify(url, run):
                return ResolutionResult(official_url=root_origin(url), stage="raw_link")
        return None

    async def _dispersed_film(self, run: _Run) -> Optional[ResolutionResult]:
        if not has_tag(run.event, *FILM_TAGS):
            return None
        cinemas = cinema_hostnames(run.raw_candidates)
        if len(cinemas) < 2:
            return None
        logger.info(
            "Film listed at multiple cinemas; no single official site",
            event_id=run.event.event_id,
            cinemas=cinemas,
        )
        return ResolutionResult(official_url=None, stage="dispersed_film")

    async def _search_and_score(self, run: _Run) -> ResolutionResult:
        event_id = run.event.event_id
        limit = self.settings.search_limit

        found = await self._search(build_query(run.event, run.location), limit, event_id)
        candidates = search_result_urls(found)
        if len(candidates) < self.settings.fallback_min_candidates:
            logger.info(
                "Primary search under-productive; trying fallback query",
                event_id=event_id,
                found=len(candidates),
            )
            found = found + await self._search(build_fallback_query(run.event, run.location), limit, event_id)
            candidates = search_result_urls(found)

        if not candidates:
            logger.info("No search candidates", event_id=event_id)
            return ResolutionResult(official_url=None, stage="no_candidates")

        scorer = self.scorer or functools.partial(score_page, location=run.location)
        ranked, top = await rank_candidates(candidates, run.event, self.scraper, scorer, self.settings)
        if top is None:
            logger.info("No candidate survived scraping and scoring", event_id=event_id)
            return ResolutionResult(official_url=None, light_scrape_candidates=ranked, stage="no_scored_candidates")

        if top.score > self.settings.score_threshold:
            return ResolutionResult(official_url=top.url, light_scrape_candidates=ranked, stage="search")

        logger.info(
            "Best candidate below threshold",
            event_id=event_id,
            url=top.url,
            score=top.score,
            threshold=self.settings.score_threshold,
        )
        return ResolutionResult(official_url=None, light_scrape_candidates=ranked, stage="below_threshold")


_default_cache: ResultCache = ResultCache()


async def resolve_official_url(
    event: SourceEvent,
    location: LocationContext = LONDON,
    cache: Optional[ResultCache] = None,
    **overrides,
) -> ResolutionResult:
    """Resolve one event with a fresh resolver over the given (or process-wide) cache.

    overrides are passed to OfficialUrlResolver (settings, verifier, searcher,
    scraper, scorer).
    """
    resolver = OfficialUrlResolver(cache=cache if cache is not None else _default_cache, **overrides)
    return await resolver.resolve(event, location)

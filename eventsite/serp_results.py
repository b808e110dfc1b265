import asyncio
from typing import List, Optional

import requests

from .domains import is_blacklisted_result
from .env import Settings
from .logger import get_logger

SERP_API_ENDPOINT = "https://serpapi.com/search.json"

logger = get_logger()


def fetch_serp_links(query: str, api_key: Optional[str] = None, num: int = 20, engine: str = "google", timeout: float = 12) -> List[str]:
    """
    Fetch search results via the SerpAPI JSON endpoint and return result links.

    Args:
        query: Search query string
        api_key: SerpAPI key (or read from SERPAPI_KEY env var)
        num: Number of results requested
        engine: SerpAPI engine selector
        timeout: Request timeout in seconds

    Returns:
        List of result URLs in search ranking order

    Raises:
        ValueError: If no API key is available
        requests.exceptions.RequestException: On transport or HTTP errors
    """
    key = api_key or Settings.from_env().serpapi_key
    if not key:
        raise ValueError("Missing SERPAPI_KEY. Set env var or pass api_key.")

    params = {
        "engine": engine,
        "q": query,
        "num": num,
        "api_key": key,
    }

    r = requests.get(SERP_API_ENDPOINT, params=params, timeout=timeout)
    r.raise_for_status()
    data = r.json()
    if not isinstance(data, dict):
        raise ValueError(f"Unexpected search payload: {type(data).__name__}")

    organic = data.get("organic_results") or []
    if not isinstance(organic, list):
        raise ValueError("Unexpected organic_results payload")

    results = []
    for item in organic:
        link = item.get("link") if isinstance(item, dict) else None
        if isinstance(link, str) and link:
            results.append(link)
    return results


def filter_blacklisted(urls: List[str], limit: int = 20) -> List[str]:
    """Drop known aggregator/irrelevant results and keep at most limit, in order."""
    filtered = []
    for u in urls:
        if is_blacklisted_result(u):
            continue
        filtered.append(u)
        if len(filtered) >= limit:
            break
    return filtered


async def search_candidates(query: str, limit: Optional[int] = None, settings: Optional[Settings] = None, event_id: Optional[str] = None) -> List[str]:
    """Search for candidate URLs. Never raises; failures degrade to []."""
    settings = settings or Settings.from_env()
    limit = limit or settings.search_limit

    if not settings.serpapi_key:
        logger.warning("SERPAPI_KEY missing; skipping search", event_id=event_id)
        return []

    logger.record_search()
    try:
        links = await asyncio.to_thread(
            fetch_serp_links,
            query,
            api_key=settings.serpapi_key,
            num=limit,
            engine=settings.search_engine,
            timeout=settings.fetch_timeout,
        )
    except requests.exceptions.HTTPError as e:
        status = e.response.status_code if e.response is not None else "HTTPError"
        logger.record_error(f"Search_HTTPError_{status}")
        logger.warning("Search request failed", event_id=event_id, status=status)
        return []
    except requests.exceptions.Timeout:
        logger.record_error("Search_Timeout")
        logger.warning("Search request timed out", event_id=event_id)
        return []
    except requests.exceptions.RequestException as e:
        logger.record_error("Search_RequestException")
        logger.warning("Search request error", event_id=event_id, error=str(e))
        return []
    except ValueError as e:
        logger.record_error("Search_MalformedResponse")
        logger.warning("Search response malformed", event_id=event_id, error=str(e))
        return []

    candidates = filter_blacklisted(links, limit)
    logger.debug(
        "Search results",
        event_id=event_id,
        query=query,
        raw=len(links),
        kept=len(candidates),
    )
    return candidates

"""Shared HTTP helpers for scrapers."""

from typing import Optional

import requests

from ..logger import get_logger

logger = get_logger()

DEFAULT_HEADERS = {
    "User-Agent": "Mozilla/5.0 (Macintosh; Intel Mac OS X 14_0) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/119.0.0.0 Safari/537.36",
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-GB,en;q=0.8",
}


def fetch_with_error_handling(url: str, timeout: float = 12) -> Optional[requests.Response]:
    """Fetch an HTML page with standardized error handling and logging.

    Args:
        url: The URL to fetch
        timeout: Request timeout in seconds

    Returns:
        Response object on success, None on any HTTP error, timeout,
        request failure or non-HTML content type
    """
    logger.record_scrape_attempt()
    try:
        resp = requests.get(url, headers=DEFAULT_HEADERS, timeout=timeout)
        resp.raise_for_status()
    except requests.exceptions.HTTPError as e:
        status = e.response.status_code if e.response is not None else "HTTPError"
        logger.record_scrape_failure(f"HTTPError_{status}")
        logger.warning("Scrape request failed", url=url, status=status)
        return None
    except requests.exceptions.Timeout:
        logger.record_scrape_failure("Timeout")
        logger.warning("Scrape request timed out", url=url)
        return None
    except requests.exceptions.RequestException as e:
        logger.record_scrape_failure("RequestException")
        logger.warning("Scrape request error", url=url, error=str(e))
        return None

    content_type = resp.headers.get("content-type", "").lower()
    if "html" not in content_type:
        logger.record_scrape_failure("NonHTML")
        logger.info("Skipping non-HTML content", url=url, content_type=content_type)
        return None

    logger.record_scrape_success()
    return resp

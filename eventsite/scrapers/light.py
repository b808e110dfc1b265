"""Single-page feature extraction used to score search candidates."""

import asyncio
from dataclasses import dataclass
from typing import Optional

from bs4 import BeautifulSoup

from ..env import Settings
from ..normalize import canonical_url, clean_text
from .common import fetch_with_error_handling

MAX_TEXT_CHARS = 20000


@dataclass(frozen=True)
class PageSnapshot:
    url: str
    title: str = ""
    text: str = ""
    description: str = ""


def parse(url: str, html: str) -> PageSnapshot:
    soup = BeautifulSoup(html, "html.parser")

    title = ""
    t = soup.find("title")
    if t and t.get_text(strip=True):
        title = t.get_text(strip=True)
    if not title:
        h1 = soup.find("h1")
        if h1 and h1.get_text(strip=True):
            title = h1.get_text(strip=True)

    # Meta description, falling back to Open Graph
    description = ""
    for attrs in ({"name": "description"}, {"property": "og:description"}):
        meta = soup.find("meta", attrs=attrs)
        if meta and meta.get("content"):
            description = meta["content"].strip()
            break

    for tag in soup(["script", "style", "noscript", "template"]):
        tag.decompose()
    text = clean_text(soup.get_text("\n"))[:MAX_TEXT_CHARS]

    return PageSnapshot(url=canonical_url(url), title=title, text=text, description=description)


def scrape(url: str, settings: Settings) -> Optional[PageSnapshot]:
    resp = fetch_with_error_handling(url, timeout=settings.scrape_timeout)
    if resp is None:
        return None
    return parse(resp.url or url, resp.text)


async def light_scrape(url: str, settings: Optional[Settings] = None) -> Optional[PageSnapshot]:
    """Fetch and extract one page in a worker thread. Returns None on any failure."""
    settings = settings or Settings.from_env()
    return await asyncio.to_thread(scrape, url, settings)

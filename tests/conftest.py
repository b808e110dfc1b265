"""
Pytest configuration and shared fixtures.
"""

import pytest
import requests
from typing import Any, Dict

from eventsite.env import Settings
from eventsite.schema import SourceEvent
from eventsite.scrapers.light import PageSnapshot


def _padding(size: int) -> str:
    return "<p>" + ("lorem ipsum dolor sit amet " * (size // 27 + 1)) + "</p>"


@pytest.fixture
def official_html() -> str:
    """Organizer-owned page, padded past the minimum size floor."""
    return f"""
    <html>
    <head><title>The Gruffalo Live | Official Site</title></head>
    <body>
        <h1>The Gruffalo</h1>
        <p>Join Mouse on a daring adventure through the deep dark wood.</p>
        <p>Book tickets for the whole family. Suitable for age 3+.</p>
        {_padding(6000)}
    </body>
    </html>
    """


@pytest.fixture
def aggregator_html() -> str:
    """Listing page that mentions a ticket reseller."""
    return f"""
    <html>
    <head><title>The Gruffalo tickets</title></head>
    <body>
        <h1>The Gruffalo</h1>
        <p>Mouse takes a stroll through the deep dark wood. Official listing.</p>
        <p>Buy now via Ticketmaster.</p>
        {_padding(6000)}
    </body>
    </html>
    """


@pytest.fixture
def event_dict() -> Dict[str, Any]:
    """DataThistle-style event payload."""
    return {
        "event_id": "evt-100",
        "name": "The Gruffalo London",
        "tags": ["Theatre", "Kids"],
        "descriptions": [
            {"type": "short", "description": "Mouse takes a stroll through the deep dark wood."},
        ],
        "links": [{"url": "https://www.gruffalo-live.com/london?utm_source=dt", "type": "info"}],
        "schedules": [
            {
                "place_id": "p1",
                "links": [{"url": "https://www.ticketmaster.co.uk/gruffalo", "type": "booking"}],
            }
        ],
        "images": [{"url": "https://example.com/g.jpg"}],
    }


@pytest.fixture
def event(event_dict) -> SourceEvent:
    return SourceEvent.from_dict(event_dict)


@pytest.fixture
def settings() -> Settings:
    """Settings with a fake search key and no file logging."""
    return Settings(serpapi_key="test-key")


@pytest.fixture
def snapshot() -> PageSnapshot:
    return PageSnapshot(
        url="https://www.thegruffalo.com/",
        title="The Gruffalo Live",
        text="The Gruffalo comes to London. Opening times daily. Tickets from £12. Suitable for age 3+.",
        description="Official site",
    )


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, status_code=200, text="", headers=None, url="", json_data=None):
        self.status_code = status_code
        self.text = text
        self.content = text.encode("utf-8")
        self.headers = headers if headers is not None else {"content-type": "text/html; charset=utf-8"}
        self.url = url
        self._json = json_data

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        return self._json

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code}", response=self)


@pytest.fixture
def fake_response():
    return FakeResponse

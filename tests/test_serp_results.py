"""
Tests for the SerpAPI search client and adapter.
"""

import asyncio

import pytest
import requests

from eventsite import serp_results
from eventsite.env import Settings
from eventsite.serp_results import fetch_serp_links, filter_blacklisted, search_candidates


class TestFetchSerpLinks:
    """Test the raw SerpAPI call."""

    def test_reads_organic_links(self, monkeypatch, fake_response):
        captured = {}

        def fake_get(url, params=None, timeout=None):
            captured["url"] = url
            captured["params"] = params
            return fake_response(json_data={
                "organic_results": [{"link": "https://a.com/"}, {"title": "no link"}, {"link": "https://b.com/x"}],
            })

        monkeypatch.setattr(serp_results.requests, "get", fake_get)

        links = fetch_serp_links("peter pan", api_key="k", num=20)
        assert links == ["https://a.com/", "https://b.com/x"]
        assert captured["url"] == serp_results.SERP_API_ENDPOINT
        assert captured["params"]["engine"] == "google"
        assert captured["params"]["num"] == 20

    def test_missing_key_raises(self, monkeypatch):
        monkeypatch.delenv("SERPAPI_KEY", raising=False)
        with pytest.raises(ValueError):
            fetch_serp_links("peter pan")

    def test_non_object_payload_raises_value_error(self, monkeypatch, fake_response):
        monkeypatch.setattr(serp_results.requests, "get", lambda *a, **k: fake_response(json_data=["unexpected"]))
        with pytest.raises(ValueError):
            fetch_serp_links("peter pan", api_key="k")

    def test_non_list_organic_results_raises_value_error(self, monkeypatch, fake_response):
        monkeypatch.setattr(
            serp_results.requests, "get", lambda *a, **k: fake_response(json_data={"organic_results": "oops"})
        )
        with pytest.raises(ValueError):
            fetch_serp_links("peter pan", api_key="k")

    def test_non_string_links_skipped(self, monkeypatch, fake_response):
        payload = {"organic_results": [{"link": 42}, "junk", {"link": "https://a.com/"}]}
        monkeypatch.setattr(serp_results.requests, "get", lambda *a, **k: fake_response(json_data=payload))
        assert fetch_serp_links("peter pan", api_key="k") == ["https://a.com/"]


class TestFilterBlacklisted:
    """Test blacklist filtering and truncation."""

    def test_filters_and_keeps_order(self):
        urls = [
            "https://www.ticketmaster.co.uk/x",
            "https://www.peterpan.co.uk/",
            "https://en.wikipedia.org/wiki/Peter_Pan",
            "https://www.barbican.org.uk/peter-pan",
        ]
        assert filter_blacklisted(urls) == ["https://www.peterpan.co.uk/", "https://www.barbican.org.uk/peter-pan"]

    def test_limit(self):
        urls = [f"https://site{i}.com/" for i in range(30)]
        assert len(filter_blacklisted(urls, limit=20)) == 20
        assert filter_blacklisted(urls, limit=2) == ["https://site0.com/", "https://site1.com/"]


class TestSearchCandidates:
    """Test that the adapter never raises."""

    def test_no_key_returns_empty(self, monkeypatch):
        def fail(*args, **kwargs):
            raise AssertionError("should not call the API")

        monkeypatch.setattr(serp_results, "fetch_serp_links", fail)
        assert asyncio.run(search_candidates("q", settings=Settings(serpapi_key=None))) == []

    def test_transport_error_returns_empty(self, monkeypatch, settings):
        def boom(*args, **kwargs):
            raise requests.exceptions.ConnectionError("dns failure")

        monkeypatch.setattr(serp_results.requests, "get", boom)
        assert asyncio.run(search_candidates("q", settings=settings)) == []

    def test_http_error_returns_empty(self, monkeypatch, settings, fake_response):
        monkeypatch.setattr(serp_results.requests, "get", lambda *a, **k: fake_response(status_code=401))
        assert asyncio.run(search_candidates("q", settings=settings)) == []

    def test_filters_results(self, monkeypatch, settings):
        monkeypatch.setattr(
            serp_results,
            "fetch_serp_links",
            lambda query, **kwargs: ["https://www.eventbrite.com/e/1", "https://www.peterpan.co.uk/"],
        )
        assert asyncio.run(search_candidates("q", limit=5, settings=settings)) == ["https://www.peterpan.co.uk/"]

    def test_malformed_payload_returns_empty(self, monkeypatch, settings, fake_response):
        monkeypatch.setattr(serp_results.requests, "get", lambda *a, **k: fake_response(json_data=["unexpected"]))
        assert asyncio.run(search_candidates("q", settings=settings)) == []

    def test_null_payload_returns_empty(self, monkeypatch, settings, fake_response):
        monkeypatch.setattr(serp_results.requests, "get", lambda *a, **k: fake_response(json_data=None))
        assert asyncio.run(search_candidates("q", settings=settings)) == []

    def test_uses_fetch_timeout(self, monkeypatch, fake_response):
        captured = {}

        def fake_get(url, params=None, timeout=None):
            captured["timeout"] = timeout
            return fake_response(json_data={"organic_results": []})

        monkeypatch.setattr(serp_results.requests, "get", fake_get)
        asyncio.run(search_candidates("q", settings=Settings(serpapi_key="k", fetch_timeout=7)))
        assert captured["timeout"] == 7

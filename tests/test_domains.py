"""
Tests for the domain and vocabulary classifiers.
"""

import pytest
from eventsite.domains import (
    cinema_hostnames,
    is_aggregator_signal,
    is_blacklisted_result,
    is_official_signal,
    is_preferred_venue,
)


class TestTextSignals:
    """Test official and aggregator vocabulary detection."""

    @pytest.mark.parametrize("text", [
        "Welcome to the OFFICIAL home of the show",
        "Opening Times: 10am to 5pm",
        "Recommended for age 5 and over",
        "© 2025 Merlin Entertainments",
    ])
    def test_official_vocabulary(self, text):
        assert is_official_signal(text)

    def test_plain_text_has_no_official_signal(self):
        assert not is_official_signal("a story about a mouse in a wood")

    @pytest.mark.parametrize("text", [
        "Tickets on Ticketmaster",
        "as featured on TimeOut.com",
        "Find seats on SeatPlan",
    ])
    def test_aggregator_vocabulary(self, text):
        assert is_aggregator_signal(text)

    def test_empty_text(self):
        assert not is_official_signal("")
        assert not is_aggregator_signal("")


class TestUrlPredicates:
    """Test URL-level classification."""

    def test_preferred_venue(self):
        assert is_preferred_venue("https://www.nationaltheatre.org.uk/productions/x")
        assert not is_preferred_venue("https://www.example.com/")

    def test_blacklisted_results(self):
        assert is_blacklisted_result("https://en.WIKIPEDIA.org/wiki/Peter_Pan")
        assert is_blacklisted_result("https://www.timeout.com/london/theatre")
        assert not is_blacklisted_result("https://www.peterpan.co.uk/")

    def test_custom_blacklist(self):
        assert is_blacklisted_result("https://example.com/", blacklist=["example"])

    def test_cinema_hostnames_are_distinct(self):
        urls = [
            "https://www.odeon.co.uk/films/dune",
            "https://www.odeon.co.uk/cinemas/leicester-square",
            "https://www.picturehouses.com/movie-details/dune",
            "https://www.dunemovie.com/",
        ]
        assert cinema_hostnames(urls) == ["www.odeon.co.uk", "www.picturehouses.com"]

"""
Tests for the page scoring heuristic.
"""

import math

from eventsite.schema import LocationContext, SourceEvent
from eventsite.scoring import score_page
from eventsite.scrapers.light import PageSnapshot


def make_event(name):
    return SourceEvent.from_dict({"event_id": "s1", "name": name})


class TestScorePage:
    """Test score components."""

    def test_official_page_scores_high(self, snapshot):
        score = score_page(snapshot, make_event("The Gruffalo"))
        # 2 name matches, hours, price, age, official signal, hostname match
        assert score == 200 + 120 + 50 + 60 + 100 + 250

    def test_aggregator_penalty(self):
        snap = PageSnapshot(url="https://www.ticketmaster.co.uk/x", text="The Gruffalo on Ticketmaster")
        # name match and "ticket" vocabulary, then the aggregator penalty
        assert score_page(snap, make_event("The Gruffalo")) == 100 + 50 - 300

    def test_empty_page_is_nan(self):
        snap = PageSnapshot(url="https://a.com/")
        assert math.isnan(score_page(snap, make_event("The Gruffalo")))

    def test_weak_booking_page_penalised(self):
        snap = PageSnapshot(url="https://a.com/", text="add to basket")
        assert score_page(snap, make_event("Zebra")) == -70

    def test_hostname_match_strips_location_city(self):
        snap = PageSnapshot(url="https://www.peterpan.co.uk/", text="page")
        event = make_event("Peter Pan Manchester")

        assert score_page(snap, event, LocationContext(city="Manchester")) == 250
        assert score_page(snap, event) == 0

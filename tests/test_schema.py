"""
Tests for source event validation and parsing.
"""

import pytest
from eventsite.errors import ResolutionError
from eventsite.schema import (
    SourceEvent,
    first_description,
    has_tag,
    raw_link_urls,
    validate_event,
)


class TestValidateEvent:
    """Test basic validation function."""

    def test_valid_event(self, event_dict):
        """Valid event should have no errors."""
        assert validate_event(event_dict) == []

    def test_missing_required_field(self):
        errors = validate_event({"event_id": "1"})
        assert any("name" in err.lower() for err in errors)

    def test_empty_name(self):
        errors = validate_event({"event_id": "1", "name": "   "})
        assert len(errors) > 0

    def test_integer_event_id_allowed(self):
        assert validate_event({"event_id": 42, "name": "Show"}) == []

    def test_links_must_be_list(self):
        errors = validate_event({"event_id": "1", "name": "Show", "links": "https://x.com"})
        assert any("links" in err for err in errors)

    def test_link_without_url(self):
        errors = validate_event({"event_id": "1", "name": "Show", "links": [{"type": "info"}]})
        assert any("Link 0" in err for err in errors)

    def test_not_a_mapping(self):
        assert validate_event(["nope"]) == ["Event must be a JSON object"]


class TestSourceEvent:
    """Test building events from payloads."""

    def test_from_dict(self, event_dict):
        event = SourceEvent.from_dict(event_dict)
        assert event.event_id == "evt-100"
        assert event.name == "The Gruffalo London"
        assert event.tags == ("Theatre", "Kids")
        assert len(event.schedules) == 1
        assert event.schedules[0].links[0].type == "booking"

    def test_from_dict_invalid(self):
        with pytest.raises(ResolutionError):
            SourceEvent.from_dict({"name": "No id"})

    def test_event_is_immutable(self, event):
        with pytest.raises(Exception):
            event.name = "Changed"

    def test_raw_link_urls_order(self, event):
        assert raw_link_urls(event) == [
            "https://www.gruffalo-live.com/london?utm_source=dt",
            "https://www.ticketmaster.co.uk/gruffalo",
        ]

    def test_has_tag_case_insensitive(self, event):
        assert has_tag(event, "theatre")
        assert not has_tag(event, "film")

    def test_first_description_skips_blank(self):
        event = SourceEvent.from_dict({
            "event_id": "1",
            "name": "Show",
            "descriptions": [{"description": "  "}, {"description": "Second"}],
        })
        assert first_description(event) == "Second"

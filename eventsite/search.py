import re
from typing import List

from .constants import (
    CONCERT_HINTS,
    CONCERT_TAGS,
    FILM_HINTS,
    FILM_TAGS,
    QUERY_ALWAYS_EXCLUDE,
    QUERY_FILM_EXCLUDE,
    QUERY_THEATRE_EXCLUDE,
    THEATRE_HINTS,
    THEATRE_TAGS,
)
from .normalize import clean_text
from .schema import LONDON, LocationContext, SourceEvent, first_description, has_tag

DESCRIPTION_PREFIX_CHARS = 50


def clean_query_name(name: str) -> str:
    """Strip punctuation, keeping letters, digits and single spaces."""
    return " ".join(re.sub(r"[^A-Za-z0-9\s]", "", name).split())


def type_hints(event: SourceEvent) -> List[str]:
    hints = []
    if has_tag(event, *FILM_TAGS):
        hints.append(FILM_HINTS)
    if has_tag(event, *THEATRE_TAGS):
        hints.append(THEATRE_HINTS)
    if has_tag(event, *CONCERT_TAGS):
        hints.append(CONCERT_HINTS)
    return hints


def exclusion_terms(event: SourceEvent) -> List[str]:
    terms = list(QUERY_ALWAYS_EXCLUDE)
    if has_tag(event, *FILM_TAGS):
        terms.extend(QUERY_FILM_EXCLUDE)
    if has_tag(event, *THEATRE_TAGS):
        terms.extend(QUERY_THEATRE_EXCLUDE)
    return [f"-{t}" for t in terms]


def build_query(event: SourceEvent, location: LocationContext = LONDON) -> str:
    """
    Returns the primary search query for an event's official site.

    Order: cleaned name, location and intent words, category hints,
    a short description prefix, then negative terms.
    """
    parts = [clean_query_name(event.name), location.city, "official", "website", "tickets"]
    parts.extend(type_hints(event))

    description = first_description(event)
    if description:
        prefix = " ".join(clean_text(description)[:DESCRIPTION_PREFIX_CHARS].split())
        if prefix:
            parts.append(prefix)

    parts.extend(exclusion_terms(event))
    return " ".join(p for p in parts if p)


def build_fallback_query(event: SourceEvent, location: LocationContext = LONDON) -> str:
    parts = [clean_query_name(event.name), location.city, "official site"]
    return " ".join(p for p in parts if p)

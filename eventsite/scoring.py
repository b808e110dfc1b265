import math
import re

from .domains import is_aggregator_signal, is_official_signal
from .normalize import hostname_of, normalize_activity_for_hostname, normalize_text
from .schema import LONDON, LocationContext, SourceEvent
from .scrapers.light import PageSnapshot

NAME_MATCH_POINTS = 100
HOSTNAME_MATCH_POINTS = 250

OPENING_HOURS_RE = re.compile(r"opening\s*(hours?|times?)|daily\s*hours|open\s*daily|mon.*sun|operating\s*hours")
PRICE_RE = re.compile(r"price|ticket|from £|adult|child|family ticket")
AGE_RE = re.compile(r"\bage\b|recommended age|suitable for|years old|minimum age")
BOOKING_RE = re.compile(r"book|buy tickets|checkout|basket")
WEEKDAY_RE = re.compile(r"monday|sunday|\b\d{1,2}(:\d{2})?\s*(am|pm)\b")


def score_page(snapshot: PageSnapshot, event: SourceEvent, location: LocationContext = LONDON) -> float:
    """
    Heuristic officialness score for a scraped page.

    Higher is more likely to be the organizer's own site. Returns NaN when
    there is nothing to judge (empty page or empty event name). The location's
    city is stripped from the name before matching it against the hostname.
    """
    text = normalize_text(" ".join([snapshot.title, snapshot.description, snapshot.text]))
    name = normalize_text(event.name)
    if not text or not name:
        return math.nan

    score = float(text.count(name) * NAME_MATCH_POINTS)
    if OPENING_HOURS_RE.search(text):
        score += 120
    if PRICE_RE.search(text):
        score += 50
    if AGE_RE.search(text):
        score += 60
    if BOOKING_RE.search(text) and score < 100:
        score -= 70
    if WEEKDAY_RE.search(text):
        score += 30
    if is_official_signal(text):
        score += 100
    if is_aggregator_signal(text):
        score -= 300

    expected_host = normalize_activity_for_hostname(event.name, location.city)
    host_slim = re.sub(r"[^a-z0-9]", "", hostname_of(snapshot.url))
    if expected_host and expected_host in host_slim:
        score += HOSTNAME_MATCH_POINTS
    return score

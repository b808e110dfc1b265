from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from .errors import ResolutionError

REQUIRED_STR_FIELDS = ["event_id", "name"]
OPTIONAL_STR_FIELDS = ["website"]
OPTIONAL_LIST_FIELDS = ["links", "schedules", "descriptions", "tags"]


@dataclass(frozen=True)
class LocationContext:
    city: str = "London"


LONDON = LocationContext()


@dataclass(frozen=True)
class SourceLink:
    url: str
    type: Optional[str] = None


@dataclass(frozen=True)
class SourceSchedule:
    place_id: Optional[str] = None
    links: Tuple[SourceLink, ...] = ()
    tags: Tuple[str, ...] = ()


@dataclass(frozen=True)
class SourceDescription:
    description: str
    type: Optional[str] = None


@dataclass(frozen=True)
class SourceEvent:
    event_id: str
    name: str
    website: Optional[str] = None
    links: Tuple[SourceLink, ...] = ()
    schedules: Tuple[SourceSchedule, ...] = ()
    descriptions: Tuple[SourceDescription, ...] = ()
    tags: Tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SourceEvent":
        """Build an event from a DataThistle-style mapping.

        Unknown keys are ignored. Raises ResolutionError when the mapping
        fails validate_event.
        """
        errors = validate_event(data)
        if errors:
            raise ResolutionError("Invalid event: " + "; ".join(errors))
        return cls(
            event_id=str(data["event_id"]).strip(),
            name=data["name"].strip(),
            website=data.get("website") or None,
            links=_links(data.get("links")),
            schedules=tuple(
                SourceSchedule(
                    place_id=s.get("place_id"),
                    links=_links(s.get("links")),
                    tags=tuple(s.get("tags") or ()),
                )
                for s in data.get("schedules") or []
                if isinstance(s, dict)
            ),
            descriptions=tuple(
                SourceDescription(description=d.get("description", ""), type=d.get("type"))
                for d in data.get("descriptions") or []
                if isinstance(d, dict)
            ),
            tags=tuple(t for t in data.get("tags") or [] if isinstance(t, str)),
        )


def _links(raw: Optional[List[Any]]) -> Tuple[SourceLink, ...]:
    return tuple(
        SourceLink(url=item["url"], type=item.get("type"))
        for item in raw or []
        if isinstance(item, dict) and isinstance(item.get("url"), str)
    )


def _is_non_empty_str(v: Any) -> bool:
    return isinstance(v, str) and v.strip() != ""


def validate_event(data: Dict[str, Any]) -> List[str]:
    """
    Returns a list of validation error messages. Empty list means valid.
    Only the fields the resolver reads are checked.
    """
    errors: List[str] = []

    if not isinstance(data, dict):
        return ["Event must be a JSON object"]

    for f in REQUIRED_STR_FIELDS:
        if f not in data:
            errors.append(f"Missing required field: {f}")
        elif f == "event_id" and isinstance(data[f], int):
            continue
        elif not _is_non_empty_str(data[f]):
            errors.append(f"Field '{f}' must be a non-empty string")

    for f in OPTIONAL_STR_FIELDS:
        if data.get(f) is not None and not isinstance(data[f], str):
            errors.append(f"Field '{f}' must be a string if provided")

    for f in OPTIONAL_LIST_FIELDS:
        if data.get(f) is not None and not isinstance(data[f], list):
            errors.append(f"Field '{f}' must be a list if provided")

    links = data.get("links")
    for i, link in enumerate(links if isinstance(links, list) else []):
        if not isinstance(link, dict) or not isinstance(link.get("url"), str):
            errors.append(f"Link {i} must be an object with a string 'url'")

    return errors


def has_tag(event: SourceEvent, *tags: str) -> bool:
    wanted = {t.lower() for t in tags}
    return any(t.strip().lower() in wanted for t in event.tags)


def first_description(event: SourceEvent) -> Optional[str]:
    for d in event.descriptions:
        if d.description and d.description.strip():
            return d.description
    return None


def raw_link_urls(event: SourceEvent) -> List[str]:
    """Event links followed by schedule links, in input order."""
    urls = [link.url for link in event.links]
    for schedule in event.schedules:
        urls.extend(link.url for link in schedule.links)
    return urls

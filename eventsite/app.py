import argparse
import asyncio
import json
from pathlib import Path
from typing import List

from .env import load_env, Settings
from . import __version__
from .cache import ResultCache
from .errors import ResolutionError
from .logger import get_logger
from .resolver import OfficialUrlResolver, ResolutionResult
from .schema import LocationContext, SourceEvent, validate_event
from .search import build_fallback_query, build_query


def _load_events(path: Path) -> List[dict]:
    if not path.exists():
        raise SystemExit(f"Input file not found: {path}")
    with path.open("r", encoding="utf-8") as f:
        data = json.load(f)
    return data if isinstance(data, list) else [data]


def result_to_dict(event: SourceEvent, result: ResolutionResult) -> dict:
    return {
        "event_id": event.event_id,
        "name": event.name,
        "official_url": result.official_url,
        "stage": result.stage,
        "candidates": [{"url": c.url, "score": c.score} for c in result.light_scrape_candidates],
    }


async def resolve_all(events: List[SourceEvent], location: LocationContext, settings: Settings) -> List[dict]:
    resolver = OfficialUrlResolver(cache=ResultCache(), settings=settings)
    out = []
    for event in events:
        result = await resolver.resolve(event, location)
        out.append(result_to_dict(event, result))
    return out


def cmd_resolve(args: argparse.Namespace) -> None:
    settings = Settings.from_env()
    if args.api_key:
        settings.serpapi_key = args.api_key

    events = []
    for i, raw in enumerate(_load_events(Path(args.input))):
        try:
            events.append(SourceEvent.from_dict(raw))
        except ResolutionError as e:
            print(f"Skipping event #{i}: {e}")

    for line in asyncio.run(resolve_all(events, LocationContext(city=args.city), settings)):
        print(json.dumps(line))

    get_logger().log_metrics_summary()


def cmd_query(args: argparse.Namespace) -> None:
    location = LocationContext(city=args.city)
    for raw in _load_events(Path(args.input)):
        event = SourceEvent.from_dict(raw)
        print(f"Event: {event.event_id} ({event.name})")
        print(f"  Primary:  {build_query(event, location)}")
        print(f"  Fallback: {build_fallback_query(event, location)}")


def cmd_validate(args: argparse.Namespace) -> None:
    ok = True
    for i, raw in enumerate(_load_events(Path(args.input))):
        errors = validate_event(raw)
        if errors:
            ok = False
            print(f"Event #{i} invalid:")
            for err in errors:
                print(f"  - {err}")
    if ok:
        print("Valid")


def configure_logging() -> None:
    """Apply EVENTSITE_LOG_* to the shared logger, which module imports create early."""
    settings = Settings.from_env()
    get_logger().configure(
        level=settings.log_level,
        log_dir=settings.log_dir,
        enable_file=settings.log_dir is not None,
    )


def main():
    # Load .env if present (SERPAPI_KEY, EVENTSITE_* settings)
    load_env()
    configure_logging()
    parser = argparse.ArgumentParser(prog="eventsite", description="Resolve official websites for listed events")
    parser.add_argument("--version", action="store_true", help="Show version")

    subparsers = parser.add_subparsers(dest="command")
    res = subparsers.add_parser("resolve", help="Resolve official URLs for events in a JSON file")
    res.add_argument("--input", required=True, help="Path to an event JSON object or array")
    res.add_argument("--city", default="London", help="Location context (default: London)")
    res.add_argument("--api-key", help="SerpAPI key (or set SERPAPI_KEY)")
    res.set_defaults(func=cmd_resolve)

    qry = subparsers.add_parser("query", help="Print the search queries built for each event")
    qry.add_argument("--input", required=True, help="Path to an event JSON object or array")
    qry.add_argument("--city", default="London", help="Location context (default: London)")
    qry.set_defaults(func=cmd_query)

    val = subparsers.add_parser("validate", help="Validate event JSON against the input schema")
    val.add_argument("--input", required=True, help="Path to an event JSON object or array")
    val.set_defaults(func=cmd_validate)

    args = parser.parse_args()

    if args.version:
        print(__version__)
        return

    if hasattr(args, "func"):
        args.func(args)
        return

    parser.print_help()


if __name__ == "__main__":
    main()

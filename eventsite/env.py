import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


def load_env() -> None:
    """Load .env from the current working directory if present."""
    env_path = Path.cwd() / ".env"
    if not env_path.exists():
        return
    load_dotenv(dotenv_path=env_path)


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass
class Settings:
    """Tunables for the resolver. Timeouts are in seconds, sizes in bytes."""

    serpapi_key: Optional[str] = None
    search_engine: str = "google"
    search_limit: int = 20
    head_timeout: float = 8.0
    fetch_timeout: float = 12.0
    scrape_timeout: float = 12.0
    min_html_bytes: int = 5000
    html_prefix_bytes: int = 15000
    score_threshold: float = 750.0
    preferred_venue_bonus: float = 400.0
    fallback_min_candidates: int = 3
    log_level: str = "INFO"
    log_dir: Optional[Path] = None

    @classmethod
    def from_env(cls) -> "Settings":
        log_dir = os.getenv("EVENTSITE_LOG_DIR")
        return cls(
            serpapi_key=os.getenv("SERPAPI_KEY") or None,
            search_engine=os.getenv("EVENTSITE_SEARCH_ENGINE", "google"),
            search_limit=_int_env("EVENTSITE_SEARCH_LIMIT", 20),
            score_threshold=_int_env("EVENTSITE_SCORE_THRESHOLD", 750),
            log_level=os.getenv("EVENTSITE_LOG_LEVEL", "INFO"),
            log_dir=Path(log_dir) if log_dir else None,
        )

"""
Structured logging for the official-URL resolver.

Provides centralized logging with console and file outputs, JSON context
on every line, and counters for monitoring verification, search and scrape
health across a batch of events.
"""

import logging
import sys
from pathlib import Path
from typing import Optional
from datetime import datetime
import json

from .env import Settings


class StructuredLogger:
    """
    Centralized logger with support for console and file outputs.
    Tracks metrics for monitoring resolver performance.
    """

    def __init__(
        self,
        name: str = "eventsite",
        level: str = "INFO",
        log_dir: Optional[Path] = None,
        enable_file: bool = True,
        enable_console: bool = True,
    ):
        """
        Initialize the structured logger.

        Args:
            name: Logger name
            level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_dir: Directory for log files (default: logs/)
            enable_file: Write logs to file
            enable_console: Output logs to console
        """
        self.logger = logging.getLogger(name)
        self.metrics = self._empty_metrics()
        self.configure(level, log_dir=log_dir, enable_file=enable_file, enable_console=enable_console)

    def configure(
        self,
        level: str = "INFO",
        log_dir: Optional[Path] = None,
        enable_file: bool = False,
        enable_console: bool = True,
    ):
        """Replace level and handlers in place. Metrics are kept."""
        self.logger.setLevel(getattr(logging, level.upper()))
        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            handler.close()

        if enable_console:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setLevel(getattr(logging, level.upper()))
            console_formatter = logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            console_handler.setFormatter(console_formatter)
            self.logger.addHandler(console_handler)

        if enable_file:
            if log_dir is None:
                log_dir = Path("logs")
            log_dir.mkdir(parents=True, exist_ok=True)

            log_file = log_dir / f"eventsite_{datetime.now().strftime('%Y%m%d')}.log"
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setLevel(logging.DEBUG)  # Always log everything to file
            file_formatter = logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            file_handler.setFormatter(file_formatter)
            self.logger.addHandler(file_handler)

    @staticmethod
    def _empty_metrics() -> dict:
        return {
            "searches": 0,
            "verifications_attempted": 0,
            "verifications_accepted": 0,
            "scrapes_attempted": 0,
            "scrapes_successful": 0,
            "scrapes_failed": 0,
            "errors_by_type": {},
            "outcomes_by_stage": {},
        }

    def debug(self, message: str, **kwargs):
        """Log debug message with optional context."""
        self._log(logging.DEBUG, message, kwargs)

    def info(self, message: str, **kwargs):
        """Log info message with optional context."""
        self._log(logging.INFO, message, kwargs)

    def warning(self, message: str, **kwargs):
        """Log warning message with optional context."""
        self._log(logging.WARNING, message, kwargs)

    def error(self, message: str, **kwargs):
        """Log error message with optional context."""
        self._log(logging.ERROR, message, kwargs)

    def _log(self, level: int, message: str, context: dict):
        if context:
            message = f"{message} | Context: {json.dumps(context, default=str)}"
        self.logger.log(level, message)

    # Metric tracking methods

    def record_search(self):
        self.metrics["searches"] += 1

    def record_verification(self, accepted: bool):
        self.metrics["verifications_attempted"] += 1
        if accepted:
            self.metrics["verifications_accepted"] += 1

    def record_scrape_attempt(self):
        self.metrics["scrapes_attempted"] += 1

    def record_scrape_success(self):
        self.metrics["scrapes_successful"] += 1

    def record_scrape_failure(self, error_type: str):
        self.metrics["scrapes_failed"] += 1
        self.record_error(error_type)

    def record_error(self, error_type: str):
        """Count a failure by its type tag (e.g. Timeout, HTTPError_404)."""
        errors = self.metrics["errors_by_type"]
        errors[error_type] = errors.get(error_type, 0) + 1

    def record_outcome(self, stage: str):
        """Count which resolver stage settled an event."""
        outcomes = self.metrics["outcomes_by_stage"]
        outcomes[stage] = outcomes.get(stage, 0) + 1

    def get_metrics(self) -> dict:
        """Return current metrics."""
        metrics_copy = dict(self.metrics)
        attempted = metrics_copy["verifications_attempted"]
        metrics_copy["verification_accept_rate"] = (
            round(metrics_copy["verifications_accepted"] / attempted, 3) if attempted else 0
        )
        return metrics_copy

    def log_metrics_summary(self):
        """Log a summary of current metrics."""
        metrics = self.get_metrics()

        scrapes = metrics["scrapes_attempted"]
        scrape_rate = 0
        if scrapes > 0:
            scrape_rate = round(metrics["scrapes_successful"] / scrapes * 100, 1)

        self.info("=== Resolution Session Metrics ===")
        self.info(f"Searches: {metrics['searches']}")
        self.info(
            f"Verifications: {metrics['verifications_accepted']}/{metrics['verifications_attempted']} accepted"
        )
        self.info(f"Scrapes: {metrics['scrapes_successful']}/{scrapes} ({scrape_rate}% success)")

        if metrics["outcomes_by_stage"]:
            self.info("Outcomes:")
            for stage, count in metrics["outcomes_by_stage"].items():
                self.info(f"  {stage}: {count}")

        if metrics["errors_by_type"]:
            self.info("Error Types:")
            for error_type, count in metrics["errors_by_type"].items():
                self.info(f"  {error_type}: {count}")


# Global logger instance
_global_logger: Optional[StructuredLogger] = None


def get_logger(
    name: str = "eventsite",
    level: Optional[str] = None,
    **kwargs
) -> StructuredLogger:
    """
    Get or create the global logger instance.

    Level and log directory default to Settings.from_env(); file output is
    only enabled when a log directory is configured.

    Returns:
        StructuredLogger instance
    """
    global _global_logger

    if _global_logger is None:
        settings = Settings.from_env()
        kwargs.setdefault("log_dir", settings.log_dir)
        kwargs.setdefault("enable_file", settings.log_dir is not None)
        _global_logger = StructuredLogger(name=name, level=level or settings.log_level, **kwargs)

    return _global_logger


def reset_logger():
    """Reset the global logger (useful for testing)."""
    global _global_logger
    _global_logger = None

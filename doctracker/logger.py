"""
Structured logging for the document tracker.

Provides centralized logging with console and file outputs, log levels,
and session metrics for the endpoint calls made while the dashboard runs.
"""

import logging
import sys
from pathlib import Path
from typing import Optional
from datetime import datetime
import json


class StructuredLogger:
    """
    Centralized logger with support for console and file outputs.
    Tracks fetch and reminder outcomes for the current session.
    """

    def __init__(
        self,
        name: str = "doctracker",
        level: str = "INFO",
        log_dir: Optional[Path] = None,
        enable_file: bool = True,
        enable_console: bool = True,
    ):
        """
        Initialize the structured logger.

        Args:
            name: Logger name
            level: Console log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_dir: Directory for log files (default: logs/)
            enable_file: Write logs to file
            enable_console: Output logs to stderr
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(logging.DEBUG)
        self.logger.handlers.clear()
        self.logger.propagate = False

        self.metrics = {
            "fetches_attempted": 0,
            "fetches_successful": 0,
            "fetches_failed": 0,
            "reminders_attempted": 0,
            "reminders_sent": 0,
            "reminders_failed": 0,
            "errors_by_type": {},
        }

        # stdout belongs to the dashboard table
        if enable_console:
            console_handler = logging.StreamHandler(sys.stderr)
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

            log_file = log_dir / f"doctracker_{datetime.now().strftime('%Y%m%d')}.log"
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setLevel(logging.DEBUG)
            file_formatter = logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            file_handler.setFormatter(file_formatter)
            self.logger.addHandler(file_handler)

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

    def record_fetch_attempt(self):
        self.metrics["fetches_attempted"] += 1

    def record_fetch_success(self):
        self.metrics["fetches_successful"] += 1

    def record_fetch_failure(self, error_type: str):
        self.metrics["fetches_failed"] += 1
        self._count_error(error_type)

    def record_reminder_attempt(self):
        self.metrics["reminders_attempted"] += 1

    def record_reminder_sent(self):
        self.metrics["reminders_sent"] += 1

    def record_reminder_failure(self, error_type: str):
        self.metrics["reminders_failed"] += 1
        self._count_error(error_type)

    def _count_error(self, error_type: str):
        errors = self.metrics["errors_by_type"]
        errors[error_type] = errors.get(error_type, 0) + 1

    def get_metrics(self) -> dict:
        """Return current metrics with derived success rates."""
        metrics_copy = dict(self.metrics)
        metrics_copy["errors_by_type"] = dict(self.metrics["errors_by_type"])
        for kind, attempted, succeeded in (
            ("fetch", "fetches_attempted", "fetches_successful"),
            ("reminder", "reminders_attempted", "reminders_sent"),
        ):
            if metrics_copy[attempted] > 0:
                metrics_copy[f"{kind}_success_rate"] = round(
                    metrics_copy[succeeded] / metrics_copy[attempted], 3
                )
        return metrics_copy

    def log_metrics_summary(self):
        """Log a summary of current metrics."""
        metrics = self.get_metrics()

        self.info("=== Dashboard Session Metrics ===")
        self.info(f"Fetches: {metrics['fetches_successful']}/{metrics['fetches_attempted']}")
        self.info(f"Reminders: {metrics['reminders_sent']}/{metrics['reminders_attempted']}")

        if metrics["errors_by_type"]:
            self.info("Error Types:")
            for error_type, count in metrics["errors_by_type"].items():
                self.info(f"  {error_type}: {count}")


# Global logger instance
_global_logger: Optional[StructuredLogger] = None


def get_logger(
    name: str = "doctracker",
    level: str = "INFO",
    **kwargs
) -> StructuredLogger:
    """
    Get or create the global logger instance.

    Args:
        name: Logger name
        level: Console log level
        **kwargs: Additional arguments passed to StructuredLogger

    Returns:
        StructuredLogger instance
    """
    global _global_logger

    if _global_logger is None:
        _global_logger = StructuredLogger(name=name, level=level, **kwargs)

    return _global_logger


def reset_logger():
    """Reset the global logger (useful for testing)."""
    global _global_logger
    _global_logger = None

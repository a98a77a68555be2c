"""
Design DNA Structured Logging
Centralized logging configuration using loguru.

Service modules log through loguru's ``logger`` directly; the API layer logs
through ``StructuredLogger`` so every line of a request carries its context.
"""
import sys
from typing import Any, Dict, Optional

from loguru import logger

from design_dna.config import config


class StructuredLogger:
    """Structured logger for the Design DNA service."""

    def __init__(self, context: Optional[Dict[str, Any]] = None):
        """Initialize structured logger; the root instance configures the sink."""
        self._context: Dict[str, Any] = dict(context or {})
        if context is None:
            self._configure_logger()

    def _configure_logger(self):
        """Configure loguru logger with structured format."""
        # Remove default handler
        logger.remove()

        logger.add(
            sys.stdout,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level} | {name} | {message} | {extra}",
            level=config.LOG_LEVEL,
            serialize=False  # Set to True for JSON output
        )

    def bind(self, **context: Any) -> "StructuredLogger":
        """Child logger whose lines all carry ``context`` (e.g. a request id)."""
        return StructuredLogger({**self._context, **context})

    def _log(self, level: str, message: str, extra: Optional[Dict[str, Any]]):
        fields = {**self._context, **(extra or {})}
        if fields:
            logger.bind(**fields).opt(depth=2).log(level, message)
        else:
            logger.opt(depth=2).log(level, message)

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None):
        """Log info message with optional extra data."""
        self._log("INFO", message, extra)

    def warning(self, message: str, extra: Optional[Dict[str, Any]] = None):
        """Log warning message with optional extra data."""
        self._log("WARNING", message, extra)

    def error(self, message: str, extra: Optional[Dict[str, Any]] = None):
        """Log error message with optional extra data."""
        self._log("ERROR", message, extra)

    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None):
        """Log debug message with optional extra data."""
        self._log("DEBUG", message, extra)


# Global logger instance
_logger: Optional[StructuredLogger] = None


def get_logger() -> StructuredLogger:
    """Get or create global logger instance."""
    global _logger
    if _logger is None:
        _logger = StructuredLogger()
    return _logger

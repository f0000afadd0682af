"""Structured logging utilities."""

import logging
import sys
from typing import Any, TextIO

# Workflow command per level; lower levels print as plain lines
_ACTIONS_COMMANDS = {
    logging.DEBUG: "debug",
    logging.WARNING: "warning",
    logging.ERROR: "error",
    logging.CRITICAL: "error",
}


def _context_suffix(record: logging.LogRecord) -> str:
    fields = getattr(record, "extra_fields", None)
    if not fields:
        return ""
    return " " + " ".join(f"{k}={v}" for k, v in fields.items())


class StructuredFormatter(logging.Formatter):
    """Formatter that appends ``key=value`` context fields to messages."""

    def format(self, record: logging.LogRecord) -> str:
        return f"{super().format(record)}{_context_suffix(record)}"


class ActionsFormatter(logging.Formatter):
    """Formatter that emits GitHub Actions workflow commands.

    Warnings and errors become ``::warning::`` and ``::error::`` annotations
    so they show up on the workflow run summary.
    """

    def __init__(self) -> None:
        super().__init__("%(message)s")

    def format(self, record: logging.LogRecord) -> str:
        message = f"{super().format(record)}{_context_suffix(record)}"
        command = _ACTIONS_COMMANDS.get(record.levelno)
        if command is None:
            return message
        # Workflow commands end at the first newline
        escaped = message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")
        return f"::{command}::{escaped}"


def configure_logging(
    level: str = "INFO",
    format_string: str | None = None,
    structured: bool = False,
    actions: bool = False,
    stream: TextIO | None = None,
) -> None:
    """Configure logging for dep-review.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_string: Custom format string
        structured: Use structured logging format
        actions: Emit GitHub Actions workflow commands (overrides the other formats)
        stream: Output stream, stderr by default
    """
    handler = logging.StreamHandler(stream or sys.stderr)

    if actions:
        handler.setFormatter(ActionsFormatter())
    else:
        if format_string is None:
            if structured:
                format_string = "%(asctime)s %(levelname)s %(name)s %(message)s"
            else:
                format_string = "%(levelname)s: %(message)s"
        handler.setFormatter(
            StructuredFormatter(format_string) if structured else logging.Formatter(format_string)
        )

    logger = logging.getLogger("dep_review")
    logger.setLevel(getattr(logging, level.upper()))
    logger.handlers = [handler]
    logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the dep_review namespace."""
    if not name.startswith("dep_review"):
        name = f"dep_review.{name}"
    return logging.getLogger(name)


class LoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that attaches its context to every record."""

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        kwargs["extra"] = {**kwargs.get("extra", {}), "extra_fields": self.extra}
        return msg, kwargs


def get_logger_with_context(name: str, **context: Any) -> LoggerAdapter:
    """Get a logger that tags every message with the given context fields.

    Args:
        name: Module name
        **context: Context fields to include in all log messages, e.g. ``repo="octo-org/octo-repo"``

    Returns:
        LoggerAdapter with context
    """
    return LoggerAdapter(get_logger(name), context)

"""
Structured logging configuration for replaycheck.

Supports JSON logs, plain text, and GitHub Actions workflow commands
(::warning:: / ::error::) so warnings surface as annotations in CI.
Every record carries a trace_id, which is the workflow ID while a replay
is running.

Environment Variables:
    REPLAYCHECK_LOG_LEVEL: Log level (DEBUG, INFO, WARNING, ERROR) - default: INFO
    REPLAYCHECK_LOG_FORMAT: Log format (json, text, github) - default: github
        under GitHub Actions, text otherwise

Usage:
    from replaycheck.logging_config import setup_logging, get_logger

    setup_logging()
    logger = get_logger(__name__, trace_id="order-workflow-42")
    logger.info("Replaying workflow")
"""

import logging
import os
import sys
from typing import IO, Optional

from pythonjsonlogger.json import JsonFormatter

LEVEL_MAP = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


class GitHubActionsFormatter(logging.Formatter):
    """
    Render records as GitHub Actions workflow commands.

    WARNING and above become ::warning:: / ::error:: annotations, DEBUG becomes
    ::debug:: (only shown with step debug logging), INFO is printed as-is.
    """

    COMMANDS = {
        logging.DEBUG: "debug",
        logging.WARNING: "warning",
        logging.ERROR: "error",
        logging.CRITICAL: "error",
    }

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        command = self.COMMANDS.get(record.levelno)
        if command is None:
            return message
        escaped = message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")
        return f"::{command}::{escaped}"


class TraceIDFilter(logging.Filter):
    """
    Logging filter that adds trace_id to all log records.

    Ensures all logs have a trace_id field, even if not set via LoggerAdapter.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "trace_id"):
            record.trace_id = "N/A"  # type: ignore
        return True


def default_log_format() -> str:
    if os.getenv("GITHUB_ACTIONS", "").lower() == "true":
        return "github"
    return "text"


def setup_logging(
    level: Optional[str] = None,
    log_format: Optional[str] = None,
    stream: Optional[IO[str]] = None,
) -> None:
    """
    Configure root logger.

    Explicit arguments win over REPLAYCHECK_LOG_LEVEL / REPLAYCHECK_LOG_FORMAT.
    Logs go to stdout unless another stream is given.
    """
    log_level = (level or os.getenv("REPLAYCHECK_LOG_LEVEL", "INFO")).upper()
    fmt = (log_format or os.getenv("REPLAYCHECK_LOG_FORMAT") or default_log_format()).lower()
    resolved = LEVEL_MAP.get(log_level, logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(resolved)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setLevel(resolved)
    # Filter on the handler so records propagated from child loggers get it too
    handler.addFilter(TraceIDFilter())

    if fmt == "json":
        formatter: logging.Formatter = JsonFormatter(
            "%(asctime)s %(name)s %(levelname)s %(message)s %(trace_id)s",
            rename_fields={
                "asctime": "timestamp",
                "name": "logger",
                "levelname": "level",
            },
        )
    elif fmt == "github":
        formatter = GitHubActionsFormatter("%(message)s")
    else:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s [trace_id=%(trace_id)s]",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    # Silence noisy libraries
    logging.getLogger("temporalio").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)


def get_logger(name: str, trace_id: Optional[str] = None) -> logging.LoggerAdapter:
    """
    Get a logger with optional trace_id for correlation.

    Args:
        name: Logger name (typically __name__)
        trace_id: Trace ID for correlating logs (typically the workflow ID)

    Returns:
        LoggerAdapter with trace_id in extra fields
    """
    logger = logging.getLogger(name)
    return logging.LoggerAdapter(logger, {"trace_id": trace_id or "N/A"})

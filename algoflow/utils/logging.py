"""
Structured Logging Configuration

Every record is rendered as

    [timestamp] LEVEL    [logger] {algorithm:session} message

The braces segment appears only for records that carry algorithm context,
which engine objects attach through AlgorithmLogAdapter rather than by
formatting ids into their messages.
"""
import logging
import sys
from typing import Any, MutableMapping, Optional, Tuple
from datetime import datetime, timezone

from algoflow.config import settings

CONTEXT_FIELDS = ("algorithm_id", "session_id")


class StructuredFormatter(logging.Formatter):
    """Single-line formatter; colours only when writing to a terminal."""

    COLORS = {
        'DEBUG': '\033[36m',     # Cyan
        'INFO': '\033[32m',      # Green
        'WARNING': '\033[33m',   # Yellow
        'ERROR': '\033[31m',     # Red
        'CRITICAL': '\033[35m',  # Magenta
    }
    RESET = '\033[0m'

    def __init__(self, colorize: bool = False):
        super().__init__()
        self.colorize = colorize

    @staticmethod
    def context_of(record: logging.LogRecord) -> str:
        values = [getattr(record, name, None) for name in CONTEXT_FIELDS]
        values = [str(v) for v in values if v]
        return f" {{{':'.join(values)}}}" if values else ""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created, timezone.utc).isoformat(timespec="milliseconds")
        line = (
            f"[{timestamp}] {record.levelname:8} [{record.name}]"
            f"{self.context_of(record)} {record.getMessage()}"
        )
        if self.colorize:
            line = f"{self.COLORS.get(record.levelname, '')}{line}{self.RESET}"

        if record.exc_info:
            line += f"\n{self.formatException(record.exc_info)}"
        return line


class AlgorithmLogAdapter(logging.LoggerAdapter):
    """
    Attaches algorithm (and optionally session) ids to every record.

    Context passed per call through ``extra`` wins over the bound values.
    """

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> Tuple[Any, MutableMapping[str, Any]]:
        kwargs["extra"] = {**self.extra, **kwargs.get("extra", {})}
        return msg, kwargs


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """
    Configure application-wide logging.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path; written without colour codes
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Replace only handlers we installed, leave test-runner capture alone
    for handler in list(root_logger.handlers):
        if getattr(handler, "_algoflow_handler", False):
            root_logger.removeHandler(handler)

    handlers = [logging.StreamHandler(sys.stdout)]
    handlers[0].setFormatter(StructuredFormatter(colorize=sys.stdout.isatty()))
    if log_file:
        handlers.append(logging.FileHandler(log_file))
        handlers[1].setFormatter(StructuredFormatter())

    for handler in handlers:
        handler._algoflow_handler = True
        root_logger.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Module logger (typically ``get_logger(__name__)``)."""
    return logging.getLogger(name)


def algorithm_logger(name: str, algorithm_id: str, session_id: Optional[str] = None) -> AlgorithmLogAdapter:
    """Logger whose records carry the algorithm id and, when known, the session id."""
    context = {"algorithm_id": algorithm_id}
    if session_id:
        context["session_id"] = session_id
    return AlgorithmLogAdapter(logging.getLogger(name), context)


setup_logging(settings.log_level, settings.log_file)

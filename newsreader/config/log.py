"""
Structured logging configuration using structlog.

JSON-formatted logs in production (or with LOG_FORMAT=json) and pretty
console logs in development.
"""

import logging
import sys

import structlog
from structlog.types import Processor

from newsreader.config import config


def setup_logging(level: str | None = None, json_output: bool | None = None) -> None:
    """
    Configure structured logging for the application.
    
    Args:
        level: Log level name. Defaults to LOG_LEVEL.
        json_output: Force JSON (True) or console (False) rendering.
            Defaults to JSON in production or when LOG_FORMAT is "json".
    
    Usage:
        setup_logging()
        logger = structlog.get_logger(__name__)
        logger.info("source_fetched", source="BBC World", items=30)
    """
    level = (level or config.LOG_LEVEL).upper()
    if json_output is None:
        json_output = config.is_production() or config.LOG_FORMAT == "json"
    
    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    
    if json_output:
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = shared_processors + [
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
        ]
    
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
    )
    
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level, logging.INFO),
        force=True,
    )
    
    # Quiet noisy libraries
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("werkzeug").setLevel(logging.WARNING)

"""
Configuration module.

Handles environment variables and logging setup.
"""

from newsreader.config.config import (
    APP_ENV,
    DEBUG,
    LOG_LEVEL,
    LOG_FORMAT,
    PREFERENCES_FILE,
    REQUEST_TIMEOUT,
    MAX_FETCH_WORKERS,
    USER_AGENT,
    TRENDING_LIMIT,
    MAX_TRENDING_TOPICS,
    SERVER_HOST,
    SERVER_PORT,
    BUILD_TIME,
    GIT_COMMIT,
    is_production,
    is_development,
    validate_config,
    print_config_summary,
)
from newsreader.config.log import setup_logging

__all__ = [
    "APP_ENV",
    "DEBUG",
    "LOG_LEVEL",
    "LOG_FORMAT",
    "PREFERENCES_FILE",
    "REQUEST_TIMEOUT",
    "MAX_FETCH_WORKERS",
    "USER_AGENT",
    "TRENDING_LIMIT",
    "MAX_TRENDING_TOPICS",
    "SERVER_HOST",
    "SERVER_PORT",
    "BUILD_TIME",
    "GIT_COMMIT",
    "is_production",
    "is_development",
    "validate_config",
    "print_config_summary",
    "setup_logging",
]

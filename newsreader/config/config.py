"""
Configuration module for News Reader.

Loads environment variables from .env file and exposes them as typed configuration values.
Uses python-dotenv for loading and provides safe defaults where appropriate.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Load .env file from project root
_project_root = Path(__file__).parent.parent.parent
_env_path = _project_root / ".env"
load_dotenv(_env_path)


# =============================================================================
# Application Environment
# =============================================================================

# Application environment: "development", "staging", or "production"
APP_ENV: str = os.getenv("APP_ENV", "development")

# Enable debug mode (Flask debug server, tracebacks in CLI output)
DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"


# =============================================================================
# Logging
# =============================================================================

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

# "console" for pretty development output, "json" for log aggregators.
# Production always renders JSON.
LOG_FORMAT: str = os.getenv("LOG_FORMAT", "console").lower()


# =============================================================================
# Preferences
# =============================================================================

# JSON document holding sources, filters, API keys and user tags.
# Created with defaults on first start if it does not exist.
PREFERENCES_FILE: str = os.getenv("PREFERENCES_FILE", "preferences.json")


# =============================================================================
# Data Fetching Configuration
# =============================================================================

# HTTP request timeout in seconds, applied to every outbound feed/API call
REQUEST_TIMEOUT: int = int(os.getenv("REQUEST_TIMEOUT", "10"))

# Upper bound on fetch units running at once in a single cycle
MAX_FETCH_WORKERS: int = int(os.getenv("MAX_FETCH_WORKERS", "32"))

# Most feeds reject requests without a browser-like agent
USER_AGENT: str = os.getenv("USER_AGENT", "Mozilla/5.0 (compatible; NewsReader/1.0)")

# Hard cap on entries returned by the trending-topic extractor
MAX_TRENDING_TOPICS: int = 10

# Default number of trending entries, between 1 and MAX_TRENDING_TOPICS
TRENDING_LIMIT: int = int(os.getenv("TRENDING_LIMIT", str(MAX_TRENDING_TOPICS)))


# =============================================================================
# Web Server
# =============================================================================

SERVER_HOST: str = os.getenv("SERVER_HOST", "127.0.0.1")
SERVER_PORT: int = int(os.getenv("SERVER_PORT", "8082"))


# =============================================================================
# Build Information (reported by /api/version)
# =============================================================================

BUILD_TIME: str = os.getenv("BUILD_TIME", "")
GIT_COMMIT: str = os.getenv("GIT_COMMIT", "development")


# =============================================================================
# Helper Functions
# =============================================================================

VALID_ENVIRONMENTS = ("development", "staging", "production")
VALID_LOG_FORMATS = ("console", "json")


def is_production() -> bool:
    """Check if running in production environment."""
    return APP_ENV == "production"


def is_development() -> bool:
    """Check if running in development environment."""
    return APP_ENV == "development"


def validate_config() -> list[str]:
    """
    Validate the loaded configuration.
    
    Returns:
        List of missing or invalid configuration keys (empty if all valid).
    """
    errors = []
    
    if APP_ENV not in VALID_ENVIRONMENTS:
        errors.append(f"APP_ENV must be one of {', '.join(VALID_ENVIRONMENTS)}, got {APP_ENV!r}")
    
    if LOG_FORMAT not in VALID_LOG_FORMATS:
        errors.append(f"LOG_FORMAT must be one of {', '.join(VALID_LOG_FORMATS)}, got {LOG_FORMAT!r}")
    
    if REQUEST_TIMEOUT < 1:
        errors.append("REQUEST_TIMEOUT must be at least 1 second")
    
    if MAX_FETCH_WORKERS < 1:
        errors.append("MAX_FETCH_WORKERS must be at least 1")
    
    if not (1 <= TRENDING_LIMIT <= MAX_TRENDING_TOPICS):
        errors.append(f"TRENDING_LIMIT must be between 1 and {MAX_TRENDING_TOPICS}, got {TRENDING_LIMIT}")
    
    if not (0 < SERVER_PORT < 65536):
        errors.append(f"SERVER_PORT must be between 1 and 65535, got {SERVER_PORT}")
    
    return errors


def print_config_summary() -> None:
    """Print a summary of current configuration (safe for logs, no secrets)."""
    print(f"  APP_ENV: {APP_ENV}")
    print(f"  DEBUG: {DEBUG}")
    print(f"  LOG_LEVEL: {LOG_LEVEL}")
    print(f"  LOG_FORMAT: {LOG_FORMAT}")
    print(f"  PREFERENCES_FILE: {PREFERENCES_FILE}")
    print(f"  REQUEST_TIMEOUT: {REQUEST_TIMEOUT}s")
    print(f"  MAX_FETCH_WORKERS: {MAX_FETCH_WORKERS}")
    print(f"  TRENDING_LIMIT: {TRENDING_LIMIT}")
    print(f"  SERVER: {SERVER_HOST}:{SERVER_PORT}")

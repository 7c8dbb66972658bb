"""
Base normalizer abstraction for News Reader.

A normalizer turns one source's raw response into canonical NewsItems.
There is one implementation per ContentType; the aggregator picks the
one matching each source's declared type.

Every failure that should cost a source its whole fetch is raised as a
FetchError. Normalizers never return partial data for a failed fetch.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import List, Optional
import time

import requests
import structlog

from newsreader.config import REQUEST_TIMEOUT, USER_AGENT
from newsreader.models.news_item import NewsItem, NewsSource

logger = structlog.get_logger(__name__)


# =============================================================================
# Source-Fetch Errors
# =============================================================================

class FetchError(Exception):
    """
    A single source could not be fetched.
    
    Covers network failures, timeouts and non-success responses directly;
    subclasses narrow down the remaining causes.
    """
    
    def __init__(self, source_name: str, message: str):
        super().__init__(f"{source_name}: {message}")
        self.source_name = source_name
        self.message = message


class FeedParseError(FetchError):
    """The response body could not be decoded or parsed."""


class MissingCredentialError(FetchError):
    """An API source has no credential configured."""


class UnsupportedContentTypeError(FetchError):
    """No normalizer is registered for the source's content type."""


# =============================================================================
# Normalizer Interface
# =============================================================================

class Normalizer(ABC):
    """
    Abstract base class for all content-type normalizers.
    
    Implementations must:
    - Raise FetchError (or a subclass) when the fetch fails as a whole
    - Skip individual entries that lack required fields
    - Return an empty list when a parsed response has no usable entries
    
    Attributes:
        timeout: Per-request timeout in seconds.
        user_agent: User-Agent header sent with every request.
    """
    
    def __init__(self, timeout: float = REQUEST_TIMEOUT, user_agent: str = USER_AGENT):
        self.timeout = timeout
        self.user_agent = user_agent
    
    @property
    @abstractmethod
    def content_type(self) -> str:
        """The ContentType value this normalizer handles."""
        pass
    
    @abstractmethod
    def fetch_items(self, source: NewsSource, api_key: str = "") -> List[NewsItem]:
        """
        Fetch a source and normalize its entries.
        
        Args:
            source: The source to fetch.
            api_key: Resolved credential, used only by authenticated sources.
            
        Returns:
            NewsItems in the order the source emitted them (may be empty).
            
        Raises:
            FetchError: If the source cannot be fetched or decoded.
        """
        pass
    
    def _get(self, source: NewsSource, headers: Optional[dict] = None) -> requests.Response:
        """
        GET the source URL with the configured timeout.
        
        Raises:
            FetchError: On network failure, timeout or a non-2xx status.
        """
        request_headers = {"User-Agent": self.user_agent}
        if headers:
            request_headers.update(headers)
        
        try:
            response = requests.get(source.url, headers=request_headers, timeout=self.timeout)
        except requests.RequestException as e:
            raise FetchError(source.name, f"request failed: {e}") from e
        
        if not 200 <= response.status_code < 300:
            raise FetchError(source.name, f"received status code {response.status_code}")
        
        return response
    
    def _warn_if_empty(self, source: NewsSource, items: List[NewsItem]) -> None:
        if not items:
            logger.warning("no_items_found", source=source.name, content_type=self.content_type)
    
    def __str__(self) -> str:
        return f"Normalizer({self.content_type})"
    
    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} content_type={self.content_type!r}>"


# =============================================================================
# Shared Helpers
# =============================================================================

def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def struct_time_to_datetime(value: Optional[time.struct_time]) -> Optional[datetime]:
    """Convert a feedparser *_parsed time tuple (UTC) to an aware datetime."""
    if not value:
        return None
    try:
        return datetime(*value[:6], tzinfo=timezone.utc)
    except (ValueError, TypeError):
        return None


def parse_iso_datetime(value: Optional[str]) -> Optional[datetime]:
    """
    Parse an ISO-8601 / RFC 3339 timestamp.
    
    Returns:
        Aware datetime (naive input is assumed UTC), or None if unparseable.
    """
    if not value or not isinstance(value, str):
        return None
    try:
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed

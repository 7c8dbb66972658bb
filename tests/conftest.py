"""
Pytest Configuration and Fixtures

This module provides shared fixtures for all tests:
- Item and source factories
- A scriptable fake normalizer (no network)
- An in-memory preferences store and a ready-made aggregator
"""

import logging
import threading
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, Union

import pytest
import structlog

from newsreader.models import NewsItem, NewsSource, UserPreferences
from newsreader.pipeline import NewsAggregator
from newsreader.sources import Normalizer
from newsreader.storage import InMemoryPreferencesStore


PUBLISHED = datetime(2025, 1, 6, 10, 0, 0, tzinfo=timezone.utc)


# =============================================================================
# Factories
# =============================================================================

def build_item(
    title: str = "Sample headline",
    description: str = "",
    source: str = "Test Feed",
    category: str = "General",
    content_type: str = "rss",
    link: Optional[str] = None,
    **kwargs,
) -> NewsItem:
    """Create a NewsItem with test defaults."""
    return NewsItem(
        title=title,
        link=link or f"https://example.com/{abs(hash(title)) % 100000}",
        source=source,
        published=kwargs.pop("published", PUBLISHED),
        description=description,
        category=category,
        content_type=content_type,
        **kwargs,
    )


@pytest.fixture
def make_item() -> Callable[..., NewsItem]:
    """Factory fixture for NewsItems."""
    return build_item


@pytest.fixture
def rss_source() -> NewsSource:
    return NewsSource(name="Test Feed", url="https://example.com/rss", category="General", content_type="rss")


# =============================================================================
# Fake Normalizer
# =============================================================================

Outcome = Union[List[NewsItem], Exception, Callable[[NewsSource], List[NewsItem]]]


class FakeNormalizer(Normalizer):
    """
    Normalizer driven by a per-source script instead of the network.
    
    Each source name maps to a list of items to return, an exception to
    raise, or a callable taking the source. Unscripted sources return [].
    """
    
    def __init__(self, content_type: str = "rss", script: Optional[Dict[str, Outcome]] = None):
        super().__init__(timeout=1)
        self._content_type = content_type
        self.script: Dict[str, Outcome] = dict(script or {})
        self.calls: List[str] = []
        self.api_keys: Dict[str, str] = {}
        self._lock = threading.Lock()
    
    @property
    def content_type(self) -> str:
        return self._content_type
    
    def fetch_items(self, source: NewsSource, api_key: str = "") -> List[NewsItem]:
        with self._lock:
            self.calls.append(source.name)
            self.api_keys[source.name] = api_key
        
        outcome = self.script.get(source.name, [])
        if isinstance(outcome, Exception):
            raise outcome
        if callable(outcome):
            return outcome(source)
        return list(outcome)


@pytest.fixture
def fake_normalizer() -> FakeNormalizer:
    return FakeNormalizer()


# =============================================================================
# Preferences / Aggregator
# =============================================================================

def make_preferences(*sources: NewsSource, **kwargs) -> UserPreferences:
    """UserPreferences with the given sources and no filters by default."""
    return UserPreferences(sources=list(sources), **kwargs)


@pytest.fixture
def two_sources() -> List[NewsSource]:
    return [
        NewsSource(name="Alpha", url="https://alpha.example.com/rss", category="World News"),
        NewsSource(name="Beta", url="https://beta.example.com/rss", category="Technology"),
    ]


@pytest.fixture
def memory_store(two_sources) -> InMemoryPreferencesStore:
    return InMemoryPreferencesStore(make_preferences(*two_sources))


@pytest.fixture
def aggregator(memory_store, fake_normalizer) -> NewsAggregator:
    """Aggregator over Alpha and Beta, both handled by fake_normalizer."""
    return NewsAggregator(memory_store, normalizers={"rss": fake_normalizer})


# =============================================================================
# Logging
# =============================================================================

@pytest.fixture
def restore_logging():
    """Undo setup_logging() so one test's configuration never leaks into the next."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    structlog.reset_defaults()
    root.handlers[:] = handlers
    root.setLevel(level)

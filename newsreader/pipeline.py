"""
News aggregation pipeline - core execution logic.

This module orchestrates one fetch cycle:

    enabled sources -> Normalizer -> id + Auto-Tagger -> NewsCache

Steps:
1. Snapshot the active preferences (sources, credentials, user tags)
2. Launch one fetch unit per enabled source on a thread pool
3. Each unit normalizes its source, assigns ids, tags every item and
   replaces that source's cache entry
4. Wait for every unit, then return the merged cache view

Design principles:
- Error isolation: a failing source is logged and keeps its previous cache
  entry; it never aborts or delays the others
- No retries: every cycle is a fresh attempt
- Disabled sources are never fetched and their entries are never touched
  by a cycle
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union
import hashlib
import threading
import time

import structlog

from newsreader.cache import NewsCache
from newsreader.config import MAX_FETCH_WORKERS, TRENDING_LIMIT
from newsreader.filters import filter_by_preferences
from newsreader.models.news_item import (
    NewsItem,
    NewsSource,
    NewsTag,
    Tag,
    TagCategory,
    TrendingTopic,
    generate_news_id,
)
from newsreader.models.preferences import PreferencesError, UserPreferences
from newsreader.models.tags import DEFAULT_TAGS
from newsreader.sources import FetchError, Normalizer, default_normalizers, get_normalizer
from newsreader.storage import JSONFilePreferencesStore, PreferencesStore
from newsreader.tagging import auto_tag
from newsreader.trending import get_trending_topics

logger = structlog.get_logger(__name__)


# =============================================================================
# Fetch Result Data Structures
# =============================================================================

@dataclass
class SourceResult:
    """Result of fetching from a single source."""
    source_name: str
    items_fetched: int
    success: bool
    error: Optional[str] = None
    duration_ms: float = 0.0


@dataclass
class FetchResult:
    """Complete result of one fetch cycle."""
    started_at: datetime
    finished_at: Optional[datetime] = None
    
    source_results: List[SourceResult] = field(default_factory=list)
    
    # Names of configured sources skipped because they are disabled
    skipped_sources: List[str] = field(default_factory=list)
    
    # Merged cache view after the cycle
    items: List[NewsItem] = field(default_factory=list)
    
    @property
    def sources_succeeded(self) -> int:
        """Number of sources that fetched successfully."""
        return sum(1 for r in self.source_results if r.success)
    
    @property
    def sources_failed(self) -> int:
        """Number of sources that failed."""
        return sum(1 for r in self.source_results if not r.success)
    
    @property
    def total_items_fetched(self) -> int:
        return sum(r.items_fetched for r in self.source_results)
    
    @property
    def duration_seconds(self) -> float:
        if self.finished_at:
            return (self.finished_at - self.started_at).total_seconds()
        return 0.0
    
    def to_summary(self) -> str:
        """Generate a human-readable summary."""
        lines = [
            "=" * 60,
            "FETCH CYCLE SUMMARY",
            "=" * 60,
            f"Started:  {self.started_at.strftime('%Y-%m-%d %H:%M:%S')}",
            f"Duration: {self.duration_seconds:.2f}s",
            "",
            "Sources:",
        ]
        
        for sr in self.source_results:
            status = "✓" if sr.success else "✗"
            lines.append(f"  {status} {sr.source_name}: {sr.items_fetched} items ({sr.duration_ms:.0f}ms)")
            if sr.error:
                lines.append(f"      Error: {sr.error}")
        
        for name in self.skipped_sources:
            lines.append(f"  - {name}: disabled")
        
        lines.extend([
            "",
            f"Succeeded: {self.sources_succeeded}",
            f"Failed:    {self.sources_failed}",
            f"Fetched:   {self.total_items_fetched} items",
            f"Cached:    {len(self.items)} items",
            "=" * 60,
        ])
        return "\n".join(lines)


# =============================================================================
# Aggregator Service
# =============================================================================

class NewsAggregator:
    """
    Owns the active preferences and the news cache for one process.
    
    Usage:
        aggregator = NewsAggregator(JSONFilePreferencesStore("preferences.json"))
        items = aggregator.fetch_news()
        visible = aggregator.filter_news(items)
        topics = aggregator.get_trending_topics(items)
    
    Preferences are guarded by a plain lock; the cache carries its own
    reader/writer lock.
    """
    
    def __init__(
        self,
        store: PreferencesStore,
        normalizers: Optional[Mapping[str, Normalizer]] = None,
        max_workers: int = MAX_FETCH_WORKERS,
        cache: Optional[NewsCache] = None,
    ):
        """
        Initialize the aggregator and load preferences from the store.
        
        Args:
            store: Preferences backend.
            normalizers: Content type -> normalizer. Defaults to one of each
                built-in normalizer.
            max_workers: Upper bound on concurrent fetch units.
            cache: Cache to write into. Defaults to a fresh, empty NewsCache.
            
        Raises:
            PreferencesError: If the stored preferences are malformed.
        """
        self.store = store
        self.normalizers: Dict[str, Normalizer] = (
            dict(normalizers) if normalizers is not None else default_normalizers()
        )
        self.max_workers = max(1, max_workers)
        self.cache = cache if cache is not None else NewsCache()
        self._lock = threading.Lock()
        self._preferences = store.load()
    
    # -------------------------------------------------------------------------
    # Fetching
    # -------------------------------------------------------------------------
    
    def run(self) -> FetchResult:
        """
        Execute one fetch cycle over every enabled source.
        
        Blocks until every fetch unit has finished.
        
        Returns:
            FetchResult with per-source outcomes and the merged items.
        """
        result = FetchResult(started_at=datetime.now(timezone.utc))
        preferences = self.get_preferences()
        sources = preferences.enabled_sources
        result.skipped_sources = [s.name for s in preferences.sources if not s.enabled]
        
        logger.info(
            "fetch_cycle_started",
            sources=len(sources),
            disabled=len(result.skipped_sources),
        )
        
        if sources:
            workers = min(len(sources), self.max_workers)
            with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="fetch") as executor:
                futures = [
                    executor.submit(
                        self._fetch_source,
                        source,
                        preferences.api_key_for(source),
                        preferences.tags,
                    )
                    for source in sources
                ]
                result.source_results = [future.result() for future in futures]
        
        result.items = self.get_all_news()
        result.finished_at = datetime.now(timezone.utc)
        
        logger.info(
            "fetch_cycle_finished",
            succeeded=result.sources_succeeded,
            failed=result.sources_failed,
            items=len(result.items),
            duration_s=round(result.duration_seconds, 3),
        )
        return result
    
    def fetch_news(self) -> List[NewsItem]:
        """Run a fetch cycle and return the merged items."""
        return self.run().items
    
    def _fetch_source(self, source: NewsSource, api_key: str, user_tags: Sequence[Tag]) -> SourceResult:
        """
        Fetch, identify and tag one source, then replace its cache entry.
        
        Never raises: any failure is logged and reported in the result, and
        the cache is left untouched for this source. Items fetched for a
        source that was disabled meanwhile are discarded.
        """
        start_time = time.monotonic()
        
        try:
            normalizer = get_normalizer(source, self.normalizers)
            raw_items = normalizer.fetch_items(source, api_key=api_key)
            items = [
                auto_tag(item, generate_news_id(item.title, item.link, item.source), user_tags)
                for item in raw_items
            ]
        except FetchError as e:
            logger.warning("source_fetch_failed", source=source.name, error=str(e))
            return SourceResult(
                source_name=source.name,
                items_fetched=0,
                success=False,
                error=str(e),
                duration_ms=_elapsed_ms(start_time),
            )
        except Exception as e:
            logger.exception("source_fetch_crashed", source=source.name)
            return SourceResult(
                source_name=source.name,
                items_fetched=0,
                success=False,
                error=f"{type(e).__name__}: {e}",
                duration_ms=_elapsed_ms(start_time),
            )
        
        # Same lock as the eviction in update_preferences.
        with self._lock:
            still_enabled = any(s.name == source.name for s in self._preferences.enabled_sources)
            if still_enabled:
                self.cache.put(source.name, items)
        duration_ms = _elapsed_ms(start_time)
        
        if not still_enabled:
            logger.info("source_fetch_discarded", source=source.name, items=len(items))
            return SourceResult(
                source_name=source.name,
                items_fetched=0,
                success=True,
                duration_ms=duration_ms,
            )
        
        logger.info("source_fetched", source=source.name, items=len(items), duration_ms=round(duration_ms))
        
        return SourceResult(
            source_name=source.name,
            items_fetched=len(items),
            success=True,
            duration_ms=duration_ms,
        )
    
    def get_all_news(self) -> List[NewsItem]:
        """
        Merged cache view without fetching.
        
        Sources appear in preference order, each with its items in the order
        its normalizer emitted them.
        """
        order = [source.name for source in self.get_preferences().sources]
        return self.cache.all_items(order=order)
    
    # -------------------------------------------------------------------------
    # Views
    # -------------------------------------------------------------------------
    
    def filter_news(
        self,
        items: Iterable[NewsItem],
        preferences: Optional[UserPreferences] = None,
    ) -> List[NewsItem]:
        """Apply the active (or given) preferences' filters."""
        return filter_by_preferences(items, preferences or self.get_preferences())
    
    def get_trending_topics(
        self,
        items: Optional[Iterable[NewsItem]] = None,
        limit: int = TRENDING_LIMIT,
    ) -> List[TrendingTopic]:
        """Trending topics over the given items, or over the cache."""
        if items is None:
            items = self.get_all_news()
        return get_trending_topics(items, limit=limit)
    
    # -------------------------------------------------------------------------
    # Preferences
    # -------------------------------------------------------------------------
    
    def get_preferences(self) -> UserPreferences:
        """A copy of the active preferences."""
        with self._lock:
            return self._preferences.copy()
    
    def update_preferences(self, preferences: Union[UserPreferences, dict]) -> UserPreferences:
        """
        Validate, persist and activate a new preferences document.
        
        Cache entries of sources that are no longer configured and enabled
        are evicted.
        
        Raises:
            PreferencesError: If the document is malformed or cannot be saved.
        """
        if not isinstance(preferences, UserPreferences):
            preferences = UserPreferences.from_dict(preferences)
        
        with self._lock:
            self.store.save(preferences)
            self._preferences = preferences.copy()
            evicted = self.cache.retain(source.name for source in preferences.enabled_sources)
        
        if evicted:
            logger.info("cache_entries_evicted", sources=evicted)
        
        return preferences.copy()
    
    # -------------------------------------------------------------------------
    # Tags
    # -------------------------------------------------------------------------
    
    def get_tags(self) -> Tuple[List[Tag], List[Tag]]:
        """Return (system tags, user tags)."""
        return list(DEFAULT_TAGS), self.get_preferences().tags
    
    def create_tag(self, name: str, color: str = "") -> Tag:
        """
        Create and persist a user tag.
        
        The id is the first 8 hex characters of SHA-256 over the name and the
        creation time.
        
        Raises:
            PreferencesError: If the name is blank or saving fails.
        """
        name = (name or "").strip()
        if not name:
            raise PreferencesError("Invalid tag", ["name is required"])
        
        stamp = datetime.now(timezone.utc).isoformat()
        tag_id = hashlib.sha256(f"{name}{stamp}".encode("utf-8")).hexdigest()[:8]
        tag = Tag(id=tag_id, name=name, color=color or "", category=TagCategory.USER.value)
        
        with self._lock:
            preferences = self._preferences.copy()
            preferences.tags.append(tag)
            self.store.save(preferences)
            self._preferences = preferences
        
        logger.info("tag_created", tag_id=tag.id, name=tag.name)
        return tag
    
    def update_news_tags(self, news_id: str, tags: Iterable[Tag]) -> List[NewsTag]:
        """
        Replace the manual tag associations of one news item.
        
        Returns:
            The new associations for news_id.
        """
        new_links = [NewsTag(news_id=news_id, tag_id=tag.id) for tag in tags]
        
        with self._lock:
            preferences = self._preferences.copy()
            preferences.news_tags = [
                link for link in preferences.news_tags if link.news_id != news_id
            ] + new_links
            self.store.save(preferences)
            self._preferences = preferences
        
        return new_links


# =============================================================================
# Convenience Functions
# =============================================================================

def _elapsed_ms(start_time: float) -> float:
    return (time.monotonic() - start_time) * 1000


def build_aggregator(preferences_file: Optional[str] = None, **kwargs) -> NewsAggregator:
    """
    Create an aggregator backed by a JSON preferences file.
    
    Args:
        preferences_file: Path to the preferences document
            (default: config.PREFERENCES_FILE). Created if missing.
        **kwargs: Passed through to NewsAggregator.
    
    Raises:
        PreferencesError: If the existing document is malformed.
    """
    return NewsAggregator(JSONFilePreferencesStore(preferences_file), **kwargs)


def run_fetch(preferences_file: Optional[str] = None, **kwargs) -> FetchResult:
    """
    Convenience function to run a single fetch cycle.
    
    Args:
        preferences_file: Path to the preferences document.
        **kwargs: Passed through to NewsAggregator.
        
    Returns:
        FetchResult with execution details.
    """
    return build_aggregator(preferences_file, **kwargs).run()

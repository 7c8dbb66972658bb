"""
Per-source news cache.

Maps source name -> the items from that source's latest successful fetch.
Writers replace one source's entry at a time; readers see either the old or
the new list for a source, never a mix.
"""

from contextlib import contextmanager
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple
import threading

from newsreader.models.news_item import NewsItem


class ReadWriteLock:
    """
    Multiple-reader / single-writer lock.
    
    Any number of readers may hold the lock while no writer does. A waiting
    writer blocks new readers, so a stream of reads cannot starve writes.
    """
    
    def __init__(self):
        self._condition = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0
    
    def acquire_read(self) -> None:
        with self._condition:
            while self._writer or self._writers_waiting:
                self._condition.wait()
            self._readers += 1
    
    def release_read(self) -> None:
        with self._condition:
            self._readers -= 1
            if self._readers == 0:
                self._condition.notify_all()
    
    def acquire_write(self) -> None:
        with self._condition:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._condition.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True
    
    def release_write(self) -> None:
        with self._condition:
            self._writer = False
            self._condition.notify_all()
    
    @contextmanager
    def read_locked(self) -> Iterator[None]:
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()
    
    @contextmanager
    def write_locked(self) -> Iterator[None]:
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()


class NewsCache:
    """
    Thread-safe mapping of source name to that source's latest items.
    
    Entries are stored as tuples, so a list handed out by a read can never
    change underneath its holder.
    """
    
    def __init__(self):
        self._lock = ReadWriteLock()
        self._entries: Dict[str, Tuple[NewsItem, ...]] = {}
    
    def put(self, source_name: str, items: Iterable[NewsItem]) -> None:
        """Replace the entry for one source."""
        entry = tuple(items)
        with self._lock.write_locked():
            self._entries[source_name] = entry
    
    def get(self, source_name: str) -> Optional[List[NewsItem]]:
        """Items for one source, or None if it has no entry."""
        with self._lock.read_locked():
            entry = self._entries.get(source_name)
        return list(entry) if entry is not None else None
    
    def remove(self, source_name: str) -> bool:
        with self._lock.write_locked():
            return self._entries.pop(source_name, None) is not None
    
    def retain(self, source_names: Iterable[str]) -> List[str]:
        """
        Drop every entry whose source is not in source_names.
        
        Returns:
            Names of the evicted sources.
        """
        keep = set(source_names)
        with self._lock.write_locked():
            evicted = [name for name in self._entries if name not in keep]
            for name in evicted:
                del self._entries[name]
        return evicted
    
    def clear(self) -> None:
        with self._lock.write_locked():
            self._entries.clear()
    
    def source_names(self) -> List[str]:
        with self._lock.read_locked():
            return list(self._entries)
    
    def all_items(self, order: Sequence[str] = ()) -> List[NewsItem]:
        """
        Merge every entry into one list.
        
        Args:
            order: Source names to emit first, in this order; remaining
                sources follow in insertion order.
        """
        with self._lock.read_locked():
            snapshot = dict(self._entries)
        
        names = [name for name in order if name in snapshot]
        names.extend(name for name in snapshot if name not in names)
        
        merged: List[NewsItem] = []
        for name in names:
            merged.extend(snapshot[name])
        return merged
    
    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._entries)
    
    def __contains__(self, source_name: str) -> bool:
        with self._lock.read_locked():
            return source_name in self._entries

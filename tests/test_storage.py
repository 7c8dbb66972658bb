"""
Tests for the preferences stores.
"""

import json

import pytest

from newsreader.models import NewsSource, UserPreferences
from newsreader.storage import (
    InMemoryPreferencesStore,
    JSONFilePreferencesStore,
    PreferencesError,
)


@pytest.fixture
def prefs_path(tmp_path):
    return tmp_path / "config" / "preferences.json"


class TestJSONFilePreferencesStore:
    """Tests for JSONFilePreferencesStore."""
    
    def test_missing_file_creates_defaults(self, prefs_path):
        store = JSONFilePreferencesStore(prefs_path)
        
        preferences = store.load()
        
        assert preferences == UserPreferences.default()
        assert prefs_path.exists()
        saved = json.loads(prefs_path.read_text())
        assert saved["contentTypes"] == []
        assert len(saved["sources"]) == len(preferences.sources)
    
    def test_save_then_load(self, prefs_path):
        store = JSONFilePreferencesStore(prefs_path)
        preferences = UserPreferences(
            sources=[NewsSource("Feed", "https://example.com/rss", "Technology")],
            interests=["rust"],
        )
        
        store.save(preferences)
        
        assert JSONFilePreferencesStore(prefs_path).load() == preferences
    
    def test_save_leaves_no_temp_file(self, prefs_path):
        store = JSONFilePreferencesStore(prefs_path)
        store.save(UserPreferences())
        
        assert [p.name for p in prefs_path.parent.iterdir()] == ["preferences.json"]
    
    def test_invalid_json_raises(self, prefs_path):
        prefs_path.parent.mkdir(parents=True)
        prefs_path.write_text("{not json")
        
        with pytest.raises(PreferencesError) as exc_info:
            JSONFilePreferencesStore(prefs_path).load()
        
        assert "not valid JSON" in str(exc_info.value)
    
    def test_invalid_document_raises(self, prefs_path):
        prefs_path.parent.mkdir(parents=True)
        prefs_path.write_text(json.dumps({"sources": "everything"}))
        
        with pytest.raises(PreferencesError) as exc_info:
            JSONFilePreferencesStore(prefs_path).load()
        
        assert "sources must be a list" in exc_info.value.errors
    
    def test_existing_file_is_not_overwritten(self, prefs_path):
        prefs_path.parent.mkdir(parents=True)
        prefs_path.write_text(json.dumps({"interests": ["space"]}))
        
        preferences = JSONFilePreferencesStore(prefs_path).load()
        
        assert preferences.interests == ["space"]
        assert preferences.sources == []
    
    def test_unwritable_path_raises(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("a file, not a directory")
        store = JSONFilePreferencesStore(blocker / "preferences.json")
        
        with pytest.raises(PreferencesError):
            store.save(UserPreferences())


class TestInMemoryPreferencesStore:
    """Tests for InMemoryPreferencesStore."""
    
    def test_defaults(self):
        assert InMemoryPreferencesStore().load() == UserPreferences.default()
    
    def test_load_returns_copies(self):
        store = InMemoryPreferencesStore(UserPreferences(interests=["a"]))
        store.load().interests.append("b")
        assert store.load().interests == ["a"]
    
    def test_save_counts(self):
        store = InMemoryPreferencesStore()
        store.save(UserPreferences(interests=["x"]))
        
        assert store.save_count == 1
        assert store.load().interests == ["x"]

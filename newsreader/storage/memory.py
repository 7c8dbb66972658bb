"""
In-memory preferences backend for tests and throwaway runs.
"""

from typing import Optional

from newsreader.models.preferences import UserPreferences
from newsreader.storage.base import PreferencesStore


class InMemoryPreferencesStore(PreferencesStore):
    """
    Keeps the preferences document in memory; lost when the process ends.
    
    Attributes:
        save_count: Number of save() calls, handy for assertions.
    """
    
    def __init__(self, preferences: Optional[UserPreferences] = None):
        self._preferences = (preferences or UserPreferences.default()).copy()
        self.save_count = 0
    
    @property
    def name(self) -> str:
        return "memory"
    
    def load(self) -> UserPreferences:
        return self._preferences.copy()
    
    def save(self, preferences: UserPreferences) -> None:
        self._preferences = preferences.copy()
        self.save_count += 1

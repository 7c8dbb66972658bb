"""
Storage module.

Loads and saves the user preferences document.
"""

from newsreader.models.preferences import PreferencesError
from newsreader.storage.base import PreferencesStore
from newsreader.storage.json_file import JSONFilePreferencesStore
from newsreader.storage.memory import InMemoryPreferencesStore

__all__ = [
    "PreferencesError",
    "PreferencesStore",
    "JSONFilePreferencesStore",
    "InMemoryPreferencesStore",
]

"""
JSON file preferences backend.

Stores the preferences document as indented JSON. A missing file is
created with default preferences on first load.
"""

from pathlib import Path
from typing import Optional, Union
import json

import structlog

from newsreader.config import PREFERENCES_FILE
from newsreader.models.preferences import PreferencesError, UserPreferences
from newsreader.storage.base import PreferencesStore

logger = structlog.get_logger(__name__)


class JSONFilePreferencesStore(PreferencesStore):
    """
    File-backed preferences store.
    
    Writes go to a sibling temp file that is then renamed over the target,
    so a crash mid-write never leaves a truncated document behind.
    """
    
    def __init__(self, path: Optional[Union[str, Path]] = None):
        """
        Initialize JSONFilePreferencesStore.
        
        Args:
            path: Preferences file path. Defaults to config.PREFERENCES_FILE.
        """
        self.path = Path(path or PREFERENCES_FILE)
    
    @property
    def name(self) -> str:
        return "json-file"
    
    def load(self) -> UserPreferences:
        if not self.path.exists():
            logger.info("preferences_created", path=str(self.path))
            preferences = UserPreferences.default()
            self.save(preferences)
            return preferences
        
        try:
            raw = self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise PreferencesError(f"Cannot read preferences file {self.path}", [str(e)]) from e
        
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise PreferencesError(f"Preferences file {self.path} is not valid JSON", [str(e)]) from e
        
        return UserPreferences.from_dict(data)
    
    def save(self, preferences: UserPreferences) -> None:
        payload = json.dumps(preferences.to_dict(), indent=2)
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(payload + "\n", encoding="utf-8")
            tmp_path.replace(self.path)
        except OSError as e:
            raise PreferencesError(f"Cannot write preferences file {self.path}", [str(e)]) from e
        
        logger.info("preferences_saved", path=str(self.path), sources=len(preferences.sources))

"""
Base preferences store abstraction for News Reader.

The aggregator treats preferences as one document it reads on demand and
replaces wholesale; where that document lives is up to the store.
"""

from abc import ABC, abstractmethod

from newsreader.models.preferences import UserPreferences


class PreferencesStore(ABC):
    """
    Abstract base class for all preferences backends.
    
    Implementations must provide:
    - load(): return the stored document (creating defaults if none exists)
    - save(): replace the stored document
    
    Both raise PreferencesError for documents that are unreadable or
    structurally invalid.
    """
    
    @property
    @abstractmethod
    def name(self) -> str:
        """Name of this backend, used for logging."""
        pass
    
    @abstractmethod
    def load(self) -> UserPreferences:
        """
        Load the active preferences.
        
        Returns:
            UserPreferences (defaults if nothing was stored yet).
            
        Raises:
            PreferencesError: If the stored document is malformed.
        """
        pass
    
    @abstractmethod
    def save(self, preferences: UserPreferences) -> None:
        """
        Replace the stored preferences.
        
        Raises:
            PreferencesError: If the document cannot be written.
        """
        pass
    
    def __str__(self) -> str:
        return f"PreferencesStore({self.name})"
    
    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"

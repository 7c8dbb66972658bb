"""
Filtering module.

Reduces item sets to those matching a user's preferences.
"""

from newsreader.filters.preference_filter import (
    matches_preferences,
    filter_items,
    filter_by_preferences,
)

__all__ = [
    "matches_preferences",
    "filter_items",
    "filter_by_preferences",
]

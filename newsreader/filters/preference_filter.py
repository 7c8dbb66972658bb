"""
Preference-based item filtering.

Three independent dimensions, each active only when non-empty:
- content types: exact match on item.content_type
- categories: exact match on item.category
- interests: case-insensitive substring of title + description; any one
  interest is enough

An item passes when every active dimension holds. With all three empty
the input is returned unchanged.
"""

from typing import Iterable, List, Sequence

from newsreader.models.news_item import NewsItem
from newsreader.models.preferences import UserPreferences


def matches_preferences(
    item: NewsItem,
    content_types: Sequence[str] = (),
    categories: Sequence[str] = (),
    interests: Sequence[str] = (),
) -> bool:
    """Check a single item against the active filter dimensions."""
    if content_types and str(item.content_type) not in content_types:
        return False
    
    if categories and item.category not in categories:
        return False
    
    if interests:
        text = item.text.lower()
        if not any(interest.lower() in text for interest in interests):
            return False
    
    return True


def filter_items(
    items: Iterable[NewsItem],
    content_types: Sequence[str] = (),
    categories: Sequence[str] = (),
    interests: Sequence[str] = (),
) -> List[NewsItem]:
    """
    Keep the items matching every active filter dimension, in input order.
    
    This is a pure function; filtering an already-filtered list with the
    same arguments returns the same list.
    """
    items = list(items)
    if not content_types and not categories and not interests:
        return items
    
    return [
        item for item in items
        if matches_preferences(item, content_types, categories, interests)
    ]


def filter_by_preferences(items: Iterable[NewsItem], preferences: UserPreferences) -> List[NewsItem]:
    """Apply a preferences document's three filter dimensions."""
    return filter_items(
        items,
        content_types=preferences.content_types,
        categories=preferences.categories,
        interests=preferences.interests,
    )

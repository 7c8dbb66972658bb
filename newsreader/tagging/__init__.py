"""
Tagging module.

Assigns region, language, topic and user tags from an item's text.
"""

from newsreader.tagging.keywords import (
    REGION_KEYWORDS,
    LANGUAGE_MARKERS,
    TOPIC_KEYWORDS,
    DEFAULT_LANGUAGE,
)
from newsreader.tagging.tagger import (
    TaggingResult,
    detect_region,
    detect_language,
    detect_topics,
    match_user_tags,
    dedupe_tags,
    compute_tags,
    auto_tag,
)

__all__ = [
    # Keyword tables
    "REGION_KEYWORDS",
    "LANGUAGE_MARKERS",
    "TOPIC_KEYWORDS",
    "DEFAULT_LANGUAGE",
    # Tagging functions
    "TaggingResult",
    "detect_region",
    "detect_language",
    "detect_topics",
    "match_user_tags",
    "dedupe_tags",
    "compute_tags",
    "auto_tag",
]

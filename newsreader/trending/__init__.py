"""
Trending module.

Ranks frequent terms and two-word phrases across news items.
"""

from newsreader.trending.extractor import (
    MIN_TERM_LENGTH,
    TITLE_WEIGHT,
    DESCRIPTION_WEIGHT,
    STOP_WORDS,
    extract_terms,
    count_terms,
    get_trending_topics,
)

__all__ = [
    "MIN_TERM_LENGTH",
    "TITLE_WEIGHT",
    "DESCRIPTION_WEIGHT",
    "STOP_WORDS",
    "extract_terms",
    "count_terms",
    "get_trending_topics",
]

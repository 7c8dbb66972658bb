"""
Keyword tables for auto-tagging.

This file is the single source of truth for the heuristics the tagger uses:

1. Regions: first region (in declaration order) with a matching keyword wins
2. Languages: marker words counted per language; most hits wins
3. Topics: every topic with at least one matching keyword is attached

Keys of REGION_KEYWORDS, LANGUAGE_MARKERS and TOPIC_KEYWORDS must be ids of
tags in newsreader.models.tags.DEFAULT_TAGS.

CUSTOMIZATION:

    Region and topic keywords are matched as case-insensitive substrings
    (e.g. "art" matches "smartphone" - be specific!). Pad a short keyword
    with spaces to match it as a whole word only.

    Language markers are matched against whole whitespace-separated tokens.
"""

# =============================================================================
# Regions
# =============================================================================

# Declaration order is the tie-break: "South American" text matches
# north-america ("american") before south-america is checked.
REGION_KEYWORDS: dict[str, list[str]] = {
    "north-america": ["usa", "canada", "mexico", "united states", "american"],
    "south-america": ["brazil", "argentina", "chile", "colombia", "venezuela"],
    "europe": ["eu", "european union", "uk", "britain", "germany", "france", "italy", "spain"],
    "asia": ["china", "japan", "india", "korea", "asian"],
    "africa": ["africa", "nigeria", "egypt", "south africa", "kenya"],
    "oceania": ["australia", "new zealand", "pacific"],
}


# =============================================================================
# Languages
# =============================================================================

# Order is the tie-break priority: on equal counts the earlier language wins.
LANGUAGE_MARKERS: dict[str, list[str]] = {
    "english": ["the", "and", "in", "of", "to"],
    "spanish": ["el", "la", "en", "de", "por"],
    "french": ["le", "la", "les", "en", "de"],
    "german": ["der", "die", "das", "und", "in"],
}

DEFAULT_LANGUAGE = "english"


# =============================================================================
# Topics
# =============================================================================

TOPIC_KEYWORDS: dict[str, list[str]] = {
    "politics": ["politics", "government", "election", "president", "minister"],
    "economy": ["economy", "market", "stock", "trade", "financial"],
    "technology": ["technology", "software", "digital", "cyber", " ai "],  # Space-padded to avoid matching "said"
    "science": ["science", "research", "study", "discovery"],
    "health": ["health", "medical", "disease", "treatment", "covid"],
    "sports": ["sports", "game", "tournament", "championship", "player"],
    "entertainment": ["entertainment", "movie", "music", "celebrity", "art"],
    "environment": ["environment", "climate", "pollution", "sustainable"],
}

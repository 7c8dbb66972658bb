"""
Trending-topic extraction.

Counts non-trivial words and two-word phrases across a set of items:

1. Lowercase and split title and description on whitespace
2. Strip surrounding punctuation from each token
3. Keep tokens of at least MIN_TERM_LENGTH characters that are not stop
   words and contain no digits
4. Bigrams are two adjacent tokens that both survive step 3
5. Title terms weigh TITLE_WEIGHT, description terms DESCRIPTION_WEIGHT
6. Terms with total frequency <= 1 are dropped; the rest are ranked by
   frequency (descending, then alphabetically) and cut to the limit,
   which never exceeds MAX_TRENDING_TOPICS
"""

from collections import Counter
from typing import Iterable, List

from newsreader.config import MAX_TRENDING_TOPICS, TRENDING_LIMIT
from newsreader.models.news_item import NewsItem, TrendingTopic


# =============================================================================
# Extraction Configuration
# =============================================================================

MIN_TERM_LENGTH: int = 4
TITLE_WEIGHT: int = 2
DESCRIPTION_WEIGHT: int = 1

PUNCTUATION: str = ".,!?\"'();:[]{}\\|/"

# Common English stop words plus news filler words
STOP_WORDS: frozenset[str] = frozenset({
    "a", "about", "above", "after", "again", "against", "all", "am", "an", "and",
    "any", "are", "aren't", "as", "at", "be", "because", "been", "before", "being",
    "below", "between", "both", "but", "by", "can't", "cannot", "could", "couldn't",
    "did", "didn't", "do", "does", "doesn't", "doing", "don't", "down", "during",
    "each", "few", "for", "from", "further", "had", "hadn't", "has", "hasn't",
    "have", "haven't", "having", "he", "he'd", "he'll", "he's", "her", "here",
    "here's", "hers", "herself", "him", "himself", "his", "how", "how's", "i",
    "i'd", "i'll", "i'm", "i've", "if", "in", "into", "is", "isn't", "it", "it's",
    "its", "itself", "let's", "me", "more", "most", "mustn't", "my", "myself",
    "no", "nor", "not", "of", "off", "on", "once", "only", "or", "other", "ought",
    "our", "ours", "ourselves", "out", "over", "own", "same", "shan't", "she",
    "she'd", "she'll", "she's", "should", "shouldn't", "so", "some", "such",
    "than", "that", "that's", "the", "their", "theirs", "them", "themselves",
    "then", "there", "there's", "these", "they", "they'd", "they'll", "they're",
    "they've", "this", "those", "through", "to", "too", "under", "until", "up",
    "very", "was", "wasn't", "we", "we'd", "we'll", "we're", "we've", "were",
    "weren't", "what", "what's", "when", "when's", "where", "where's", "which",
    "while", "who", "who's", "whom", "why", "why's", "with", "won't", "would",
    "wouldn't", "you", "you'd", "you'll", "you're", "you've", "your", "yours",
    "yourself", "yourselves",
    # News filler
    "said", "says", "say", "also", "like", "new", "one", "two", "time", "year",
    "years", "day", "days", "week", "weeks", "month", "months", "today",
    "tomorrow", "yesterday", "now", "later", "early", "earlier", "late",
    "latest", "recent", "recently",
})


# =============================================================================
# Term Extraction
# =============================================================================

def clean_token(token: str) -> str:
    return token.strip(PUNCTUATION)


def is_significant(token: str) -> bool:
    """Check whether a cleaned token is worth counting."""
    if len(token) < MIN_TERM_LENGTH:
        return False
    if token in STOP_WORDS:
        return False
    return not any(char.isdigit() for char in token)


def extract_terms(text: str) -> List[str]:
    """
    Extract candidate terms from text: significant single words, then bigrams.
    
    Example:
        >>> extract_terms("Artificial Intelligence beats chess champion")
        ['artificial', 'intelligence', 'beats', 'chess', 'champion',
         'artificial intelligence', 'intelligence beats', 'beats chess',
         'chess champion']
    """
    tokens = [clean_token(word) for word in text.lower().split()]
    keep = [is_significant(token) for token in tokens]
    
    words = [token for token, significant in zip(tokens, keep) if significant]
    bigrams = [
        f"{tokens[i]} {tokens[i + 1]}"
        for i in range(len(tokens) - 1)
        if keep[i] and keep[i + 1]
    ]
    return words + bigrams


def count_terms(items: Iterable[NewsItem]) -> Counter:
    """Accumulate weighted term frequencies across items."""
    frequency: Counter = Counter()
    for item in items:
        for term in extract_terms(item.title):
            frequency[term] += TITLE_WEIGHT
        for term in extract_terms(item.description):
            frequency[term] += DESCRIPTION_WEIGHT
    return frequency


def get_trending_topics(items: Iterable[NewsItem], limit: int = TRENDING_LIMIT) -> List[TrendingTopic]:
    """
    Rank the most frequent terms and phrases across items.
    
    Args:
        items: Items to analyze.
        limit: Maximum number of topics to return, clamped to
            0..MAX_TRENDING_TOPICS.
        
    Returns:
        At most `limit` TrendingTopics, each with frequency > 1, sorted by
        frequency descending and then alphabetically.
    """
    frequency = count_terms(items)
    ranked = sorted(
        ((term, count) for term, count in frequency.items() if count > 1),
        key=lambda pair: (-pair[1], pair[0]),
    )
    cutoff = max(0, min(limit, MAX_TRENDING_TOPICS))
    return [TrendingTopic(topic=term, frequency=count) for term, count in ranked[:cutoff]]

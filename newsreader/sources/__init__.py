"""
Content-type normalizers.

Fetchers for syndication, video, podcast and JSON API sources.
"""

from newsreader.sources.base import (
    Normalizer,
    FetchError,
    FeedParseError,
    MissingCredentialError,
    UnsupportedContentTypeError,
)
from newsreader.sources.rss import RSSNormalizer
from newsreader.sources.video import VideoNormalizer
from newsreader.sources.podcast import PodcastNormalizer
from newsreader.sources.api import APINormalizer
from newsreader.sources.registry import default_normalizers, get_normalizer

__all__ = [
    "Normalizer",
    "FetchError",
    "FeedParseError",
    "MissingCredentialError",
    "UnsupportedContentTypeError",
    "RSSNormalizer",
    "VideoNormalizer",
    "PodcastNormalizer",
    "APINormalizer",
    "default_normalizers",
    "get_normalizer",
]

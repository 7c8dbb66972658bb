"""
Normalizer registry.

Maps each ContentType value to the normalizer that handles it.
"""

from typing import Dict, Mapping, Optional

from newsreader.models.news_item import NewsSource
from newsreader.sources.base import Normalizer, UnsupportedContentTypeError
from newsreader.sources.rss import RSSNormalizer
from newsreader.sources.video import VideoNormalizer
from newsreader.sources.podcast import PodcastNormalizer
from newsreader.sources.api import APINormalizer


def default_normalizers(timeout: Optional[float] = None) -> Dict[str, Normalizer]:
    """
    Build one normalizer per supported content type.
    
    Args:
        timeout: Per-request timeout override (default: REQUEST_TIMEOUT).
    """
    kwargs = {"timeout": timeout} if timeout is not None else {}
    normalizers = [
        RSSNormalizer(**kwargs),
        VideoNormalizer(**kwargs),
        PodcastNormalizer(**kwargs),
        APINormalizer(**kwargs),
    ]
    return {normalizer.content_type: normalizer for normalizer in normalizers}


def get_normalizer(source: NewsSource, normalizers: Mapping[str, Normalizer]) -> Normalizer:
    """
    Select the normalizer for a source's declared content type.
    
    Raises:
        UnsupportedContentTypeError: If no normalizer is registered for it.
    """
    normalizer = normalizers.get(str(source.content_type))
    if normalizer is None:
        raise UnsupportedContentTypeError(
            source.name, f"unsupported content type: {source.content_type}"
        )
    return normalizer

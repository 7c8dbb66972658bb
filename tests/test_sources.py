"""
Tests for the content-type normalizers.

All network access is mocked; feeds are parsed from inline XML through the
real feedparser code path.
"""

from datetime import datetime, timezone
from unittest.mock import Mock, patch

import pytest
import requests

from newsreader.models import NewsSource
from newsreader.sources import (
    APINormalizer,
    FeedParseError,
    FetchError,
    MissingCredentialError,
    PodcastNormalizer,
    RSSNormalizer,
    UnsupportedContentTypeError,
    VideoNormalizer,
    default_normalizers,
    get_normalizer,
)


GET_PATH = "newsreader.sources.base.requests.get"


def mock_response(content: bytes = b"", status_code: int = 200, json_data=None) -> Mock:
    """Build a fake requests.Response."""
    response = Mock()
    response.status_code = status_code
    response.content = content
    if isinstance(json_data, Exception):
        response.json.side_effect = json_data
    else:
        response.json.return_value = json_data
    return response


# =============================================================================
# Feed Fixtures
# =============================================================================

RSS_FEED = b"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0" xmlns:media="http://search.yahoo.com/mrss/">
  <channel>
    <title>Example News</title>
    <link>https://example.com</link>
    <item>
      <title>Markets rally on trade deal</title>
      <link>https://example.com/markets</link>
      <description>Stocks climbed after the agreement.</description>
      <pubDate>Mon, 06 Jan 2025 10:00:00 GMT</pubDate>
      <media:thumbnail url="https://example.com/markets.jpg" width="240" height="135"/>
    </item>
    <item>
      <title>Second story</title>
      <link>https://example.com/second</link>
    </item>
    <item>
      <description>An entry with neither title nor link.</description>
    </item>
  </channel>
</rss>
"""

ATOM_FEED = b"""<?xml version="1.0" encoding="utf-8"?>
<feed xmlns="http://www.w3.org/2005/Atom">
  <title>Example Atom</title>
  <entry>
    <title>Atom entry</title>
    <link href="https://example.com/atom-entry"/>
    <id>urn:uuid:1</id>
    <updated>2025-01-05T08:30:00Z</updated>
    <summary>Atom summary</summary>
  </entry>
</feed>
"""

EMPTY_RSS_FEED = b"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0"><channel><title>Nothing here</title></channel></rss>
"""

PODCAST_FEED = b"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0" xmlns:itunes="http://www.itunes.com/dtds/podcast-1.0.dtd">
  <channel>
    <title>Example Podcast</title>
    <itunes:image href="https://example.com/show.jpg"/>
    <item>
      <title>Episode 1</title>
      <link>https://example.com/ep1</link>
      <description>The first episode.</description>
      <pubDate>Tue, 07 Jan 2025 06:00:00 GMT</pubDate>
      <enclosure url="https://cdn.example.com/ep1.mp3" length="1234" type="audio/mpeg"/>
      <itunes:duration>00:42:10</itunes:duration>
      <itunes:image href="https://example.com/ep1.jpg"/>
    </item>
    <item>
      <title>Episode 2</title>
      <link>https://example.com/ep2</link>
    </item>
  </channel>
</rss>
"""

VIDEO_FEED = b"""<?xml version="1.0" encoding="UTF-8"?>
<feed xmlns:yt="http://www.youtube.com/xml/schemas/2015" xmlns:media="http://search.yahoo.com/mrss/" xmlns="http://www.w3.org/2005/Atom">
  <title>Space Channel</title>
  <entry>
    <id>yt:video:abc123</id>
    <yt:videoId>abc123</yt:videoId>
    <title>Rocket launch highlights</title>
    <link rel="alternate" href="https://www.youtube.com/watch?v=abc123"/>
    <published>2025-01-06T10:00:00+00:00</published>
    <media:group>
      <media:title>Rocket launch highlights</media:title>
      <media:content url="https://www.youtube.com/v/abc123?version=3" type="application/x-shockwave-flash"/>
      <media:thumbnail url="https://i1.ytimg.com/vi/abc123/hqdefault.jpg" width="480" height="360"/>
      <media:description>Watch the full launch.</media:description>
    </media:group>
  </entry>
  <entry>
    <title>Bare entry</title>
    <link rel="alternate" href="https://www.youtube.com/watch?v=bare"/>
    <published>not a date</published>
  </entry>
  <entry>
    <title>No link entry</title>
  </entry>
</feed>
"""


@pytest.fixture
def video_source() -> NewsSource:
    return NewsSource("Space Channel", "https://www.youtube.com/feeds/videos.xml?channel_id=x", "Science", "video")


@pytest.fixture
def podcast_source() -> NewsSource:
    return NewsSource("Example Podcast", "https://example.com/podcast.xml", "Technology", "podcast")


@pytest.fixture
def api_source() -> NewsSource:
    return NewsSource("Headlines API", "https://api.example.com/top", "General", "api")


# =============================================================================
# Test Shared Request Handling
# =============================================================================

class TestRequestHandling:
    """Tests for the shared GET helper."""
    
    def test_uses_timeout_and_user_agent(self, rss_source):
        normalizer = RSSNormalizer(timeout=3, user_agent="TestAgent/1.0")
        
        with patch(GET_PATH) as mock_get:
            mock_get.return_value = mock_response(RSS_FEED)
            normalizer.fetch_items(rss_source)
        
        args, kwargs = mock_get.call_args
        assert args[0] == rss_source.url
        assert kwargs["timeout"] == 3
        assert kwargs["headers"]["User-Agent"] == "TestAgent/1.0"
    
    def test_network_error_becomes_fetch_error(self, rss_source):
        with patch(GET_PATH, side_effect=requests.ConnectionError("refused")):
            with pytest.raises(FetchError) as exc_info:
                RSSNormalizer().fetch_items(rss_source)
        
        assert exc_info.value.source_name == "Test Feed"
    
    def test_timeout_becomes_fetch_error(self, rss_source):
        with patch(GET_PATH, side_effect=requests.Timeout("too slow")):
            with pytest.raises(FetchError):
                RSSNormalizer().fetch_items(rss_source)
    
    @pytest.mark.parametrize("status_code", [301, 404, 500, 503])
    def test_non_success_status_fails(self, rss_source, status_code):
        with patch(GET_PATH, return_value=mock_response(RSS_FEED, status_code=status_code)):
            with pytest.raises(FetchError) as exc_info:
                RSSNormalizer().fetch_items(rss_source)
        
        assert f"received status code {status_code}" in str(exc_info.value)


# =============================================================================
# Test RSS Normalizer
# =============================================================================

class TestRSSNormalizer:
    """Tests for syndication feeds."""
    
    def test_normalizes_entries_in_order(self, rss_source):
        with patch(GET_PATH, return_value=mock_response(RSS_FEED)):
            items = RSSNormalizer().fetch_items(rss_source)
        
        assert [item.title for item in items] == ["Markets rally on trade deal", "Second story"]
    
    def test_maps_fields(self, rss_source):
        with patch(GET_PATH, return_value=mock_response(RSS_FEED)):
            item = RSSNormalizer().fetch_items(rss_source)[0]
        
        assert item.link == "https://example.com/markets"
        assert item.description == "Stocks climbed after the agreement."
        assert item.published == datetime(2025, 1, 6, 10, 0, tzinfo=timezone.utc)
        assert item.source == "Test Feed"
        assert item.category == "General"
        assert item.content_type == "rss"
        assert item.thumbnail == "https://example.com/markets.jpg"
    
    def test_items_are_not_enriched(self, rss_source):
        """Ids and tags are assigned later by the aggregator."""
        with patch(GET_PATH, return_value=mock_response(RSS_FEED)):
            item = RSSNormalizer().fetch_items(rss_source)[0]
        
        assert item.id == ""
        assert item.tags == ()
    
    def test_missing_date_defaults_to_now(self, rss_source):
        before = datetime.now(timezone.utc)
        with patch(GET_PATH, return_value=mock_response(RSS_FEED)):
            item = RSSNormalizer().fetch_items(rss_source)[1]
        
        assert item.published >= before
        assert item.thumbnail == ""
        assert item.description == ""
    
    def test_atom_feed_uses_updated_date(self, rss_source):
        with patch(GET_PATH, return_value=mock_response(ATOM_FEED)):
            items = RSSNormalizer().fetch_items(rss_source)
        
        assert len(items) == 1
        assert items[0].link == "https://example.com/atom-entry"
        assert items[0].description == "Atom summary"
        assert items[0].published == datetime(2025, 1, 5, 8, 30, tzinfo=timezone.utc)
    
    def test_unparseable_body_raises(self, rss_source):
        with patch(GET_PATH, return_value=mock_response(b"<<<this is not a feed")):
            with pytest.raises(FeedParseError):
                RSSNormalizer().fetch_items(rss_source)
    
    def test_empty_feed_returns_empty_list(self, rss_source):
        with patch(GET_PATH, return_value=mock_response(EMPTY_RSS_FEED)):
            assert RSSNormalizer().fetch_items(rss_source) == []
    
    def test_description_falls_back_to_content(self):
        normalizer = RSSNormalizer()
        assert normalizer._description({"content": [{"value": "Full body"}]}) == "Full body"
        assert normalizer._description({"summary": "Short", "content": [{"value": "Long"}]}) == "Short"
        assert normalizer._description({}) == ""


# =============================================================================
# Test Podcast Normalizer
# =============================================================================

class TestPodcastNormalizer:
    """Tests for audio show feeds."""
    
    def test_maps_audio_fields(self, podcast_source):
        with patch(GET_PATH, return_value=mock_response(PODCAST_FEED)):
            items = PodcastNormalizer().fetch_items(podcast_source)
        
        episode = items[0]
        assert episode.title == "Episode 1"
        assert episode.audio_url == "https://cdn.example.com/ep1.mp3"
        assert episode.duration == "00:42:10"
        assert episode.thumbnail == "https://example.com/ep1.jpg"
        assert episode.content_type == "podcast"
        assert episode.category == "Technology"
    
    def test_falls_back_to_show_image(self, podcast_source):
        with patch(GET_PATH, return_value=mock_response(PODCAST_FEED)):
            episode = PodcastNormalizer().fetch_items(podcast_source)[1]
        
        assert episode.thumbnail == "https://example.com/show.jpg"
        assert episode.audio_url == ""
        assert episode.duration == ""


# =============================================================================
# Test Video Normalizer
# =============================================================================

class TestVideoNormalizer:
    """Tests for video platform Atom feeds."""
    
    def test_maps_media_group(self, video_source):
        with patch(GET_PATH, return_value=mock_response(VIDEO_FEED)):
            items = VideoNormalizer().fetch_items(video_source)
        
        video = items[0]
        assert video.title == "Rocket launch highlights"
        assert video.link == "https://www.youtube.com/watch?v=abc123"
        assert video.description == "Watch the full launch."
        assert video.thumbnail == "https://i1.ytimg.com/vi/abc123/hqdefault.jpg"
        assert video.video_url == "https://www.youtube.com/v/abc123?version=3"
        assert video.published == datetime(2025, 1, 6, 10, 0, tzinfo=timezone.utc)
        assert video.content_type == "video"
    
    def test_skips_entries_without_link(self, video_source):
        with patch(GET_PATH, return_value=mock_response(VIDEO_FEED)):
            items = VideoNormalizer().fetch_items(video_source)
        
        assert [item.title for item in items] == ["Rocket launch highlights", "Bare entry"]
    
    def test_bare_entry_defaults(self, video_source):
        before = datetime.now(timezone.utc)
        with patch(GET_PATH, return_value=mock_response(VIDEO_FEED)):
            bare = VideoNormalizer().fetch_items(video_source)[1]
        
        assert bare.video_url == "https://www.youtube.com/watch?v=bare"
        assert bare.published >= before
        assert bare.thumbnail == ""
    
    def test_unparseable_feed_raises(self, video_source):
        with patch(GET_PATH, return_value=mock_response(b"<<<this is not a feed")):
            with pytest.raises(FeedParseError):
                VideoNormalizer().fetch_items(video_source)


# =============================================================================
# Test API Normalizer
# =============================================================================

class TestAPINormalizer:
    """Tests for authenticated JSON APIs."""
    
    def test_missing_key_fails_without_request(self, api_source):
        with patch(GET_PATH) as mock_get:
            with pytest.raises(MissingCredentialError) as exc_info:
                APINormalizer().fetch_items(api_source)
        
        mock_get.assert_not_called()
        assert "API key not found" in str(exc_info.value)
    
    def test_sends_bearer_token(self, api_source):
        with patch(GET_PATH) as mock_get:
            mock_get.return_value = mock_response(json_data={"articles": []})
            APINormalizer().fetch_items(api_source, api_key="secret")
        
        headers = mock_get.call_args.kwargs["headers"]
        assert headers["Authorization"] == "Bearer secret"
    
    def test_maps_articles(self, api_source):
        payload = {
            "status": "ok",
            "articles": [
                {
                    "title": "Election results",
                    "url": "https://news.example.com/election",
                    "description": "Votes counted.",
                    "publishedAt": "2025-01-06T10:00:00Z",
                    "urlToImage": "https://news.example.com/election.jpg",
                },
                {"title": "No url"},
                {"url": "https://news.example.com/no-title"},
                "not an object",
            ],
        }
        with patch(GET_PATH, return_value=mock_response(json_data=payload)):
            items = APINormalizer().fetch_items(api_source, api_key="secret")
        
        assert len(items) == 1
        item = items[0]
        assert item.title == "Election results"
        assert item.link == "https://news.example.com/election"
        assert item.thumbnail == "https://news.example.com/election.jpg"
        assert item.published == datetime(2025, 1, 6, 10, 0, tzinfo=timezone.utc)
        assert item.content_type == "api"
    
    def test_unparseable_date_defaults_to_now(self, api_source):
        before = datetime.now(timezone.utc)
        payload = {"articles": [{"title": "T", "url": "https://x.example.com", "publishedAt": "yesterday"}]}
        with patch(GET_PATH, return_value=mock_response(json_data=payload)):
            item = APINormalizer().fetch_items(api_source, api_key="secret")[0]
        
        assert item.published >= before
    
    def test_missing_articles_is_empty(self, api_source):
        with patch(GET_PATH, return_value=mock_response(json_data={"status": "ok"})):
            assert APINormalizer().fetch_items(api_source, api_key="secret") == []
    
    @pytest.mark.parametrize("json_data", [
        ValueError("Expecting value"),
        ["a", "list"],
        {"articles": "nope"},
    ])
    def test_undecodable_payload_raises(self, api_source, json_data):
        with patch(GET_PATH, return_value=mock_response(json_data=json_data)):
            with pytest.raises(FeedParseError):
                APINormalizer().fetch_items(api_source, api_key="secret")


# =============================================================================
# Test Registry
# =============================================================================

class TestRegistry:
    """Tests for normalizer selection."""
    
    def test_default_normalizers_cover_all_types(self):
        normalizers = default_normalizers()
        assert set(normalizers) == {"rss", "video", "podcast", "api"}
        assert isinstance(normalizers["podcast"], PodcastNormalizer)
    
    def test_timeout_override(self):
        normalizers = default_normalizers(timeout=2)
        assert all(n.timeout == 2 for n in normalizers.values())
    
    def test_get_normalizer(self, video_source):
        normalizers = default_normalizers()
        assert get_normalizer(video_source, normalizers) is normalizers["video"]
    
    def test_unknown_type_raises(self):
        source = NewsSource("Odd", "https://odd.example.com", content_type="newsletter")
        with pytest.raises(UnsupportedContentTypeError):
            get_normalizer(source, default_normalizers())

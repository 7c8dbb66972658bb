"""
Default news sources written to a fresh preferences document.

The NewsAPI source ships disabled: it needs an API key in the
preferences (apiKeys["NewsAPI Top Headlines"]) before it can be fetched.
"""

from newsreader.models.news_item import ContentType, NewsSource


DEFAULT_SOURCES: tuple[NewsSource, ...] = (
    # General / world news
    NewsSource("NPR News", "https://feeds.npr.org/1001/rss.xml", "General", ContentType.RSS.value),
    NewsSource("BBC World", "http://feeds.bbci.co.uk/news/world/rss.xml", "World News", ContentType.RSS.value),
    NewsSource("The Guardian", "https://www.theguardian.com/world/rss", "World News", ContentType.RSS.value),
    
    # Technology
    NewsSource("TechCrunch", "https://techcrunch.com/feed/", "Technology", ContentType.RSS.value),
    NewsSource("Ars Technica", "https://feeds.arstechnica.com/arstechnica/index", "Technology", ContentType.RSS.value),
    NewsSource("Hacker News", "https://news.ycombinator.com/rss", "Technology", ContentType.RSS.value),
    
    # Science
    NewsSource("Science Daily", "https://www.sciencedaily.com/rss/all.xml", "Science", ContentType.RSS.value),
    
    # Video
    NewsSource(
        "NASA YouTube",
        "https://www.youtube.com/feeds/videos.xml?channel_id=UCLA_DiR1FfKNvjuUpBHmylQ",
        "Science",
        ContentType.VIDEO.value,
    ),
    
    # Podcasts
    NewsSource("NPR Technology Podcast", "https://feeds.npr.org/510051/podcast.xml", "Technology", ContentType.PODCAST.value),
    NewsSource("TED Radio Hour", "https://feeds.npr.org/510298/podcast.xml", "Education", ContentType.PODCAST.value),
    
    # Authenticated API
    NewsSource(
        "NewsAPI Top Headlines",
        "https://newsapi.org/v2/top-headlines?language=en",
        "General",
        ContentType.API.value,
        enabled=False,
    ),
)

"""
News Reader - multi-source news aggregation.

Fetches syndication, video, podcast and API feeds concurrently, normalizes
them into one item shape, auto-tags each item and serves a filtered view
plus trending topics.
"""

__version__ = "0.1.0"

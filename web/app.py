"""
News Reader - JSON API

A small Flask app exposing the aggregator over HTTP.

Run with: python -m web.app
Or: news-reader --serve
"""

from datetime import datetime, timezone
from typing import Optional

import structlog
from flask import Flask, jsonify, request

from newsreader import __version__
from newsreader.config import BUILD_TIME, DEBUG, GIT_COMMIT, SERVER_HOST, SERVER_PORT, setup_logging
from newsreader.models import PreferencesError, Tag
from newsreader.pipeline import NewsAggregator, build_aggregator

logger = structlog.get_logger(__name__)


def create_app(aggregator: NewsAggregator) -> Flask:
    """
    Build the Flask app around one aggregator.
    
    Args:
        aggregator: Service object holding preferences and the news cache.
    """
    app = Flask(__name__)
    app.config["AGGREGATOR"] = aggregator
    
    # =========================================================================
    # Error Handlers
    # =========================================================================
    
    @app.errorhandler(PreferencesError)
    def handle_preferences_error(error: PreferencesError):
        logger.warning("invalid_request", error=str(error))
        return jsonify(error.to_dict()), 400
    
    def _json_body():
        """Decoded JSON body, or None when missing or malformed."""
        return request.get_json(silent=True)
    
    def _bad_request(message: str):
        return jsonify({"error": message}), 400
    
    # =========================================================================
    # News
    # =========================================================================
    
    @app.route("/api/news")
    def api_news():
        """Fetch every enabled source and return the filtered items."""
        items = aggregator.filter_news(aggregator.fetch_news())
        return jsonify([item.to_dict() for item in items])
    
    @app.route("/api/news/trending")
    def api_trending():
        """Trending topics over the cached items."""
        topics = aggregator.get_trending_topics()
        return jsonify({
            "topics": [topic.to_dict() for topic in topics],
            "count": len(topics),
            "time": datetime.now(timezone.utc).isoformat(),
        })
    
    @app.route("/api/news/<news_id>/tags", methods=["POST"])
    def api_news_tags(news_id):
        """Replace the manual tags of one item."""
        data = _json_body()
        if not isinstance(data, list):
            return _bad_request("Tags array required")
        
        tags = []
        for raw in data:
            if not isinstance(raw, dict) or not isinstance(raw.get("id"), str):
                return _bad_request("Each tag must be an object with a string id")
            tags.append(Tag.from_dict(raw))
        
        aggregator.update_news_tags(news_id, tags)
        return jsonify([tag.to_dict() for tag in tags])
    
    # =========================================================================
    # Tags
    # =========================================================================
    
    @app.route("/api/tags")
    def api_tags():
        system_tags, user_tags = aggregator.get_tags()
        return jsonify({
            "systemTags": [tag.to_dict() for tag in system_tags],
            "userTags": [tag.to_dict() for tag in user_tags],
        })
    
    @app.route("/api/tags", methods=["POST"])
    def api_create_tag():
        """Create a user tag from {name, color}."""
        data = _json_body()
        if not isinstance(data, dict):
            return _bad_request("No data provided")
        
        name = data.get("name")
        color = data.get("color") or ""
        if not isinstance(name, str) or not isinstance(color, str):
            return _bad_request("name and color must be strings")
        
        tag = aggregator.create_tag(name, color)
        return jsonify(tag.to_dict())
    
    # =========================================================================
    # Preferences
    # =========================================================================
    
    @app.route("/api/preferences")
    def api_preferences():
        return jsonify(aggregator.get_preferences().to_dict())
    
    @app.route("/api/preferences", methods=["PUT", "POST"])
    def api_update_preferences():
        """Validate, persist and activate a new preferences document."""
        data = _json_body()
        if data is None:
            return _bad_request("Invalid JSON body")
        
        preferences = aggregator.update_preferences(data)
        return jsonify(preferences.to_dict())
    
    # =========================================================================
    # Meta
    # =========================================================================
    
    @app.route("/api/version")
    def api_version():
        return jsonify({
            "version": __version__,
            "buildTime": BUILD_TIME or datetime.now(timezone.utc).isoformat(),
            "gitCommit": GIT_COMMIT,
        })
    
    return app


def run_server(
    aggregator: NewsAggregator,
    host: Optional[str] = None,
    port: Optional[int] = None,
    debug: bool = DEBUG,
) -> None:
    """Serve the API with Flask's built-in server."""
    host = host or SERVER_HOST
    port = port or SERVER_PORT
    
    print("=" * 50)
    print("News Reader API")
    print("=" * 50)
    print(f"Listening on http://{host}:{port}/api/news")
    print("Press Ctrl+C to stop")
    print("=" * 50)
    
    create_app(aggregator).run(host=host, port=port, debug=debug, use_reloader=False)


if __name__ == "__main__":
    setup_logging()
    run_server(build_aggregator())

#!/usr/bin/env python3
"""
News Reader - multi-source news aggregation.

Command-line entry point:
  - Fetch every enabled source (RSS, video, podcast, JSON API) concurrently
  - Tag items with region, language and topics
  - Filter by the saved preferences and print the result
  - Optionally serve the JSON API

Usage:
    python main.py                      # Fetch, filter and list items
    python main.py --trending           # Show trending topics instead
    python main.py --json               # Machine-readable output
    python main.py --serve              # Start the HTTP API

Examples:
    # Everything, ignoring filters, as JSON
    python main.py --no-filter --json

    # Use another preferences file
    python main.py --prefs ~/news/preferences.json
"""

import argparse
import json
import sys
from typing import List

import structlog

from newsreader import __version__
from newsreader.config import (
    LOG_LEVEL,
    MAX_TRENDING_TOPICS,
    TRENDING_LIMIT,
    print_config_summary,
    setup_logging,
    validate_config,
)
from newsreader.models import NewsItem, PreferencesError, TrendingTopic
from newsreader.pipeline import FetchResult, build_aggregator

logger = structlog.get_logger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create the command-line argument parser."""
    parser = argparse.ArgumentParser(
        prog="news-reader",
        description="Fetch, tag and filter news from multiple sources.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                           Fetch and list items matching preferences
  %(prog)s --no-filter               List every fetched item
  %(prog)s --trending --limit 5      Top 5 trending topics
  %(prog)s --json                    JSON output
  %(prog)s --prefs other.json        Use another preferences file
  %(prog)s --serve --port 9000       Serve the HTTP API on port 9000
        """,
    )
    
    # Core options
    parser.add_argument(
        "--prefs", "-p",
        default=None,
        metavar="PATH",
        help="Preferences file (default: PREFERENCES_FILE or preferences.json)",
    )
    
    parser.add_argument(
        "--no-filter",
        action="store_true",
        help="Show every fetched item, ignoring interests/categories/content types",
    )
    
    parser.add_argument(
        "--trending", "-t",
        action="store_true",
        help="Show trending topics instead of items",
    )
    
    parser.add_argument(
        "--limit", "-l",
        type=int,
        default=TRENDING_LIMIT,
        metavar="N",
        help=f"Maximum trending topics to show, 1-{MAX_TRENDING_TOPICS} (default: {TRENDING_LIMIT})",
    )
    
    # Server options
    parser.add_argument(
        "--serve",
        action="store_true",
        help="Start the HTTP API instead of running a single fetch",
    )
    
    parser.add_argument(
        "--host",
        default=None,
        help="Server bind address (default: SERVER_HOST)",
    )
    
    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Server port (default: SERVER_PORT)",
    )
    
    # Output options
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print JSON instead of text",
    )
    
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Show debug logging and the fetch summary",
    )
    
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Only show errors and results",
    )
    
    # Info options
    parser.add_argument(
        "--show-config",
        action="store_true",
        help="Show current configuration and exit",
    )
    
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    
    return parser


def show_config() -> None:
    """Display current configuration."""
    print("=" * 60)
    print("News Reader Configuration")
    print("=" * 60)
    print_config_summary()
    
    errors = validate_config()
    if errors:
        print("\nConfiguration warnings:")
        for error in errors:
            print(f"  ⚠️  {error}")
    else:
        print("\n✓ Configuration valid")
    print("=" * 60)


def print_items(items: List[NewsItem]) -> None:
    """Print items as a readable list."""
    if not items:
        print("No items.")
        return
    
    for item in items:
        print(f"[{item.source}] {item.title}")
        print(f"    {item.link}")
        labels = [tag.name for tag in item.tags]
        if labels:
            print(f"    tags: {', '.join(labels)}")


def print_trending(topics: List[TrendingTopic]) -> None:
    """Print trending topics with their weighted frequency."""
    if not topics:
        print("No trending topics.")
        return
    
    width = max(len(topic.topic) for topic in topics)
    for rank, topic in enumerate(topics, 1):
        print(f"{rank:>2}. {topic.topic:<{width}}  {topic.frequency}")


def _log_level(args: argparse.Namespace) -> str:
    if args.verbose:
        return "DEBUG"
    if args.quiet:
        return "ERROR"
    return LOG_LEVEL


def main(argv: list = None) -> int:
    """
    Main entry point.
    
    Args:
        argv: Command-line arguments (default: sys.argv[1:]).
        
    Returns:
        Exit code (0 = success, 1 = error).
    """
    parser = create_parser()
    args = parser.parse_args(argv)
    if not 1 <= args.limit <= MAX_TRENDING_TOPICS:
        parser.error(f"--limit must be between 1 and {MAX_TRENDING_TOPICS}")
    
    # Handle --show-config
    if args.show_config:
        show_config()
        return 0
    
    setup_logging(level=_log_level(args))
    
    try:
        aggregator = build_aggregator(args.prefs)
    except PreferencesError as e:
        print(f"❌ Invalid preferences: {e}", file=sys.stderr)
        return 1
    
    if args.serve:
        from web.app import run_server
        
        run_server(aggregator, host=args.host, port=args.port)
        return 0
    
    try:
        result: FetchResult = aggregator.run()
        
        if args.verbose and not args.json:
            print(result.to_summary())
            print()
        
        if args.trending:
            topics = aggregator.get_trending_topics(result.items, limit=args.limit)
            if args.json:
                print(json.dumps([topic.to_dict() for topic in topics], indent=2))
            else:
                print_trending(topics)
        else:
            items = result.items if args.no_filter else aggregator.filter_news(result.items)
            if args.json:
                print(json.dumps([item.to_dict() for item in items], indent=2))
            else:
                print_items(items)
        
        # All sources failed
        if result.sources_failed > 0 and result.sources_succeeded == 0:
            print(f"\n❌ All {result.sources_failed} sources failed", file=sys.stderr)
            return 1
        
        return 0
        
    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        return 130
    except Exception as e:
        logger.debug("cli_error", exc_info=True)
        print(f"\n❌ Fetch error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())

"""RSS feed generation for a markdown blog."""

from .config import SiteConfig, load_config
from .exceptions import BlogFeedError, ConfigurationError, MalformedDocumentError
from .feed import FeedDocument, FeedItem, build_feed, generate_feed, render_rss, write_feed
from .posts import PostRecord, load_posts

__all__ = [
    "BlogFeedError",
    "ConfigurationError",
    "FeedDocument",
    "FeedItem",
    "MalformedDocumentError",
    "PostRecord",
    "SiteConfig",
    "build_feed",
    "generate_feed",
    "load_config",
    "load_posts",
    "render_rss",
    "write_feed",
]

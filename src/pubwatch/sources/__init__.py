#!/usr/bin/env python3
"""
Source registry loading and fetch adapters.
"""

from .base import SourceAdapter
from .feed import FeedAdapter
from .scrape import ScrapeAdapter, BrowserSession
from .resolver import AdapterResolver
from .registry import SourceRegistry

__all__ = [
    'SourceAdapter', 'FeedAdapter', 'ScrapeAdapter', 'BrowserSession',
    'AdapterResolver', 'SourceRegistry'
]

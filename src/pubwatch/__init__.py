"""
pubwatch - publication watcher.

Collects recent articles from journal feeds and scraped listing pages into
a deduplicated JSON corpus.
"""

__version__ = "1.0.0"

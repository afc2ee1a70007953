#!/usr/bin/env python3
"""
Base classes for source adapters.

Defines the interface every fetch strategy (feed parsing, browser scraping)
implements so the orchestrator can treat them uniformly.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from ..models.article import Article
from ..models.source import SourceDescriptor


class SourceAdapter(ABC):
    """
    Abstract base class for all fetch adapters.

    Implementations turn one URL of a source into canonical articles or raise
    a ``SourceError`` subclass.
    """

    kind: str = ""

    @abstractmethod
    def fetch(self, source: SourceDescriptor, url: str) -> List[Article]:
        """
        Fetch articles for a source from one URL.

        Args:
            source: Registry entry the articles belong to
            url: URL to fetch (the source URL or one generated from it)

        Returns:
            Articles in the source's natural order

        Raises:
            SourceError: If fetching fails or nothing was found
        """
        pass

    def plan_urls(self, source: SourceDescriptor, now: Optional[datetime] = None) -> List[str]:
        """
        Get the URLs to fetch for a source in this run.

        Most sources are a single URL; adapters may expand a source into
        several listing pages.
        """
        return [source.url]

#!/usr/bin/env python3
"""
Base classes for per-site extraction strategies.

An extractor knows how to read the listing page of one publisher after the
browser has rendered it.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Any, List, Tuple
from urllib.parse import urlparse

from ...models.source import SourceDescriptor


@dataclass(frozen=True)
class RawItem:
    """A listing row as read from the page, before normalization."""
    title: str
    author: str = ""
    pub_date: str = ""
    description: str = ""
    abstract_link: str = ""
    pdf_link: str = ""
    html_link: str = ""


class SiteExtractor(ABC):
    """
    Abstract base class for site extraction strategies.

    Subclasses declare the hosts they handle in ``host_patterns``; a URL
    matches when its host equals a pattern or is a subdomain of it.
    """

    name: str = ""
    host_patterns: Tuple[str, ...] = ()

    def matches(self, url: str) -> bool:
        """Check whether this extractor handles the given URL."""
        host = (urlparse(url).hostname or '').lower()
        if not host:
            return False
        return any(host == pattern or host.endswith('.' + pattern) for pattern in self.host_patterns)

    @abstractmethod
    def extract(self, page: Any) -> List[RawItem]:
        """
        Read listing items from a rendered page.

        Args:
            page: Browser page positioned on the listing URL

        Returns:
            Raw items in page order
        """
        pass

    def plan_urls(self, source: SourceDescriptor, now: datetime) -> List[str]:
        """Listing URLs to visit for a source; defaults to the registry URL."""
        return [source.url]

#!/usr/bin/env python3
"""
Adapter resolution for registry entries.
"""

import logging
from typing import Dict, Optional

from .base import SourceAdapter
from .extractors import ExtractorRegistry, get_extractor_registry
from ..models.source import SourceDescriptor

logger = logging.getLogger(__name__)


class AdapterResolver:
    """
    Chooses the fetch adapter for a source.

    An explicit ``kind`` on the source wins. Otherwise a URL handled by a
    registered site extractor is scraped and everything else is read as a
    syndication feed.
    """

    def __init__(self,
                 feed_adapter: SourceAdapter,
                 scrape_adapter: SourceAdapter,
                 extractors: Optional[ExtractorRegistry] = None):
        self._adapters: Dict[str, SourceAdapter] = {
            'feed': feed_adapter,
            'scrape': scrape_adapter,
        }
        self.extractors = extractors or get_extractor_registry()

    def kind_for(self, source: SourceDescriptor) -> str:
        if source.kind:
            return source.kind
        if self.extractors.find(source.url) is not None:
            return 'scrape'
        return 'feed'

    def resolve(self, source: SourceDescriptor) -> SourceAdapter:
        """Get the adapter that fetches this source."""
        kind = self.kind_for(source)
        logger.debug(f"Resolved {source.id} to {kind} adapter")
        return self._adapters[kind]

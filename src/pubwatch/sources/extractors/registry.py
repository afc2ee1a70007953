#!/usr/bin/env python3
"""
Extractor registry for URL-based strategy dispatch.

Adding a scraped publisher means registering one more extractor here;
orchestration code never changes.
"""

import logging
from typing import Dict, List, Optional

from .base import SiteExtractor

logger = logging.getLogger(__name__)


class ExtractorRegistry:
    """Registry mapping URL host patterns to site extractors."""

    def __init__(self):
        """Initialize empty registry."""
        self._extractors: Dict[str, SiteExtractor] = {}

    def register(self, extractor: SiteExtractor, name: Optional[str] = None) -> None:
        """
        Register a site extractor instance.

        Args:
            extractor: Extractor to register
            name: Optional custom name (uses extractor.name if not provided)
        """
        name = name or extractor.name or extractor.__class__.__name__.lower().replace('extractor', '')
        self._extractors[name] = extractor
        logger.debug(f"Registered site extractor: {name}")

    def find(self, url: str) -> Optional[SiteExtractor]:
        """Get the first registered extractor that handles the URL."""
        for extractor in self._extractors.values():
            if extractor.matches(url):
                return extractor
        return None

    def list_available(self) -> List[str]:
        """Get list of registered extractor names."""
        return list(self._extractors.keys())


# Global registry instance
_global_registry = ExtractorRegistry()


def register_extractor(extractor: SiteExtractor, name: Optional[str] = None) -> None:
    """Register an extractor in the global registry."""
    _global_registry.register(extractor, name)


def get_extractor_registry() -> ExtractorRegistry:
    """Get the global extractor registry."""
    return _global_registry

#!/usr/bin/env python3
"""
Per-site extraction strategies for scraped sources.
"""

from .base import SiteExtractor, RawItem
from .registry import ExtractorRegistry, register_extractor, get_extractor_registry
from .chinaepi import ChinaEpiExtractor

# Import to trigger auto-registration
from . import auto_register

__all__ = [
    'SiteExtractor', 'RawItem', 'ExtractorRegistry', 'register_extractor',
    'get_extractor_registry', 'ChinaEpiExtractor'
]

#!/usr/bin/env python3
"""
Auto-registration of all built-in site extractors.

Import this module to register them in the global extractor registry.
"""

import logging
from .registry import register_extractor
from .chinaepi import ChinaEpiExtractor

logger = logging.getLogger(__name__)


def register_all_extractors():
    """Register all built-in site extractors."""
    extractors_to_register = [
        (ChinaEpiExtractor(), 'chinaepi'),
    ]

    for extractor, name in extractors_to_register:
        register_extractor(extractor, name)


# Auto-register on import
register_all_extractors()

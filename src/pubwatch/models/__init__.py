#!/usr/bin/env python3
"""
Core data models for publication watching.

Contains all data structures used throughout the application.
"""

from .article import Article, parse_pub_date, normalize_pub_date
from .source import SourceDescriptor, SOURCE_KINDS
from .run import FetchReport, RunRecord, RunLogEntry

__all__ = [
    'Article', 'parse_pub_date', 'normalize_pub_date',
    'SourceDescriptor', 'SOURCE_KINDS',
    'FetchReport', 'RunRecord', 'RunLogEntry'
]

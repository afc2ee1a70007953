#!/usr/bin/env python3
"""
Recency filtering for sources with a publication window.
"""

import logging
import math
from datetime import datetime
from typing import Dict, List, Optional

import pytz

from .models.article import Article

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 86400


def filter_latest(article: Article, latest_days: int, now: Optional[datetime] = None) -> bool:
    """
    Check whether an article falls inside the publication window.

    The distance is rounded up to whole days, so an article published
    ``latest_days`` days ago (to the second) is still kept. Articles whose
    date cannot be parsed are never recent.
    """
    published = article.published_at
    if published is None:
        return False

    now = now or datetime.now(pytz.utc)
    if now.tzinfo is None:
        now = pytz.utc.localize(now)

    delta_seconds = abs((now - published).total_seconds())
    days = math.ceil(delta_seconds / SECONDS_PER_DAY)
    return days <= latest_days


class RecencyPolicy:
    """Per-source publication windows keyed by source id."""

    def __init__(self, rules: Optional[Dict[str, int]] = None):
        self.rules = dict(rules or {})

    def window_for(self, source_id: str) -> Optional[int]:
        """Window in days for a source, or None if it is not filtered."""
        return self.rules.get(source_id)

    def apply(self, source_id: str, articles: List[Article], now: Optional[datetime] = None) -> List[Article]:
        """Keep only recent articles for sources that have a window."""
        days = self.window_for(source_id)
        if days is None:
            return list(articles)

        now = now or datetime.now(pytz.utc)
        kept = [article for article in articles if filter_latest(article, days, now)]

        if len(kept) < len(articles):
            logger.info(f"Recency filter ({days} days) dropped {len(articles) - len(kept)} of "
                        f"{len(articles)} articles for {source_id}")
        return kept

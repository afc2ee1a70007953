#!/usr/bin/env python3
"""
Fetch orchestration across all registered sources.

Sources are fetched one after another in registry order. A failing source
is recorded and skipped; only a run that yields no article at all is an
error.
"""

import logging
from datetime import datetime
from typing import List, Optional

import pytz

from .deduplication import dedup_by_title
from .exceptions import AggregateFetchError
from .models.article import Article
from .models.run import FetchReport
from .models.source import SourceDescriptor
from .recency import RecencyPolicy
from .sources.resolver import AdapterResolver

logger = logging.getLogger(__name__)


def _reason(error: Exception) -> str:
    return getattr(error, 'message', None) or str(error) or error.__class__.__name__


class FetchOrchestrator:
    """Runs every source through its adapter and collects the results."""

    def __init__(self, resolver: AdapterResolver, recency: Optional[RecencyPolicy] = None):
        self.resolver = resolver
        self.recency = recency or RecencyPolicy()

    def run(self, sources: List[SourceDescriptor], now: Optional[datetime] = None) -> FetchReport:
        """
        Fetch all sources.

        Returns:
            Report with the articles in source order and one
            ``"<title> (<reason>)"`` string per failed source

        Raises:
            AggregateFetchError: If no source produced any article
        """
        now = now or datetime.now(pytz.utc)
        report = FetchReport()

        for source in sources:
            try:
                articles = self.fetch_source(source, now)
            except Exception as e:
                failure = f"{source.title} ({_reason(e)})"
                logger.error(f"Error fetching {failure}")
                report.failures.append(failure)
                continue

            report.articles.extend(articles)
            report.succeeded.append(source.id)
            logger.info(f"Fetched {len(articles)} articles from {source.title}")

        if not report.articles:
            logger.critical("No articles were fetched from any source")
            raise AggregateFetchError(report.failures)

        logger.info(f"Fetched {len(report.articles)} articles from {len(report.succeeded)} of "
                    f"{report.sources_attempted} sources")
        return report

    def fetch_source(self, source: SourceDescriptor, now: datetime) -> List[Article]:
        """
        Fetch every URL of one source and filter the combined items.

        The source fails only when none of its URLs produced items; the last
        error is raised in that case.
        """
        adapter = self.resolver.resolve(source)
        urls = adapter.plan_urls(source, now)

        items: List[Article] = []
        last_error: Optional[Exception] = None
        fetched_any = False

        for url in urls:
            try:
                items.extend(adapter.fetch(source, url))
                fetched_any = True
            except Exception as e:
                last_error = e
                if len(urls) > 1:
                    logger.warning(f"Failed to fetch {url} for {source.title}: {_reason(e)}")

        if not fetched_any and last_error is not None:
            raise last_error

        unique_items = dedup_by_title(items)
        return self.recency.apply(source.id, unique_items, now)

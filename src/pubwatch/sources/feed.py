#!/usr/bin/env python3
"""
RSS/Atom feed adapter.

Downloads a feed with requests, parses it with feedparser and maps entries
to canonical articles. The download runs on a worker thread raced against an
overall deadline.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeoutError
from datetime import datetime
from typing import List, Optional

import feedparser
import pytz
import requests
from bs4 import BeautifulSoup

from .base import SourceAdapter
from ..exceptions import (
    SourceTimeoutError, SourceConnectionError, SourceParseError, EmptySourceError
)
from ..models.article import Article, normalize_pub_date
from ..models.source import SourceDescriptor

logger = logging.getLogger(__name__)


class FeedAdapter(SourceAdapter):
    """Syndication feed adapter with a request timeout and an overall race timeout."""

    kind = 'feed'

    def __init__(self,
                 request_timeout: int = 10,
                 race_timeout: int = 15,
                 user_agent: str = 'Mozilla/5.0 (compatible; RSS-Reader/1.0;)',
                 session: Optional[requests.Session] = None):
        """
        Initialize feed adapter.

        Args:
            request_timeout: Timeout passed to the HTTP request, in seconds
            race_timeout: Overall deadline for download plus parsing, in seconds
            user_agent: User-Agent header for feed requests
            session: Optional preconfigured session
        """
        self.request_timeout = request_timeout
        self.race_timeout = race_timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            'User-Agent': user_agent
        })

    def fetch(self, source: SourceDescriptor, url: str) -> List[Article]:
        """Fetch a feed, failing with a timeout if the race deadline passes first."""
        logger.info(f"Fetching feed from: {url}")

        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix='feed-fetch')
        future = executor.submit(self.fetch_feed, source, url)
        try:
            feed = future.result(timeout=self.race_timeout)
        except FutureTimeoutError:
            # The worker cannot be interrupted; its request timeout bounds it.
            future.cancel()
            raise SourceTimeoutError(source.title, self.race_timeout)
        finally:
            executor.shutdown(wait=False)

        return self.parse_entries(feed, source, url)

    def fetch_feed(self, source: SourceDescriptor, url: str) -> feedparser.FeedParserDict:
        """Download and parse a feed."""
        try:
            response = self.session.get(url, timeout=self.request_timeout)
            response.raise_for_status()
        except requests.Timeout:
            raise SourceTimeoutError(source.title, self.request_timeout)
        except requests.RequestException as e:
            raise SourceConnectionError(source.title, url, e)

        feed = feedparser.parse(response.content)

        if feed.bozo:
            if not feed.entries:
                raise SourceParseError(source.title, 'feed', feed.get('bozo_exception'))
            logger.warning(f"Feed parsing warning for {url}: {feed.get('bozo_exception')}")

        return feed

    def parse_entries(self,
                      feed: feedparser.FeedParserDict,
                      source: SourceDescriptor,
                      url: Optional[str] = None,
                      now: Optional[datetime] = None) -> List[Article]:
        """
        Map feed entries to articles.

        Raises:
            EmptySourceError: If the feed has no entries
        """
        entries = getattr(feed, 'entries', None) or []
        if not entries:
            raise EmptySourceError(source.title, url)

        logger.debug(f"Found {len(entries)} entries in {source.title} feed")
        now = now or datetime.now(pytz.utc)

        articles = []
        for entry in entries:
            articles.append(Article(
                id=source.id,
                title=(entry.get('title') or '').strip(),
                description=self._extract_description(entry),
                link=(entry.get('link') or '').strip(),
                pub_date=normalize_pub_date(entry.get('published') or entry.get('updated'), now),
                source=source.title,
                category=source.category
            ))

        return articles

    def _extract_description(self, entry) -> str:
        """Tag-free text of the entry summary, empty when it holds only markup."""
        # feedparser exposes description as an alias of summary
        summary = entry.get('summary') or ''
        return ' '.join(BeautifulSoup(summary, 'html.parser').get_text(' ').split())

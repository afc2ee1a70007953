#!/usr/bin/env python3
"""
Headless browser scraping adapter.

Renders listing pages of publishers without a feed in Chromium (Playwright)
and hands the rendered page to the site extractor registered for the URL.
"""

import logging
from datetime import datetime
from typing import Any, Callable, List, Optional

import pytz
from playwright.sync_api import sync_playwright, Error as PlaywrightError, TimeoutError as PlaywrightTimeoutError

from .base import SourceAdapter
from .extractors import ExtractorRegistry, RawItem, SiteExtractor, get_extractor_registry
from ..config import ScrapeConfig
from ..exceptions import (
    SourceTimeoutError, SourceNavigationError, SourceParseError,
    UnsupportedSourceError, EmptySourceError
)
from ..models.article import Article, normalize_pub_date
from ..models.source import SourceDescriptor

logger = logging.getLogger(__name__)

BLOCKED_BY_CLIENT = 'ERR_BLOCKED_BY_CLIENT'


class BrowserSession:
    """
    One browser instance with a single configured page.

    Use as a context manager; the browser is closed on exit whether or not
    the block raised.
    """

    def __init__(self, config: ScrapeConfig):
        self.config = config
        self._playwright = None
        self._browser = None
        self._context = None
        self.page = None

    def open(self) -> 'BrowserSession':
        """Launch the browser and open a page."""
        self._playwright = sync_playwright().start()
        self._browser = self._playwright.chromium.launch(
            headless=self.config.headless,
            args=list(self.config.launch_args)
        )
        width, height = self.config.viewport
        self._context = self._browser.new_context(
            user_agent=self.config.user_agent,
            viewport={'width': width, 'height': height},
            extra_http_headers=self.config.extra_headers,
            ignore_https_errors=True
        )
        self.page = self._context.new_page()
        self.page.set_default_navigation_timeout(self.config.navigation_timeout * 1000)
        self.page.set_default_timeout(self.config.navigation_timeout * 1000)
        logger.debug("Browser session opened")
        return self

    def close(self) -> None:
        """Tear down page context, browser and driver."""
        for name, resource, method in (
            ('context', self._context, 'close'),
            ('browser', self._browser, 'close'),
            ('playwright', self._playwright, 'stop'),
        ):
            if resource is None:
                continue
            try:
                getattr(resource, method)()
            except Exception as e:
                logger.warning(f"Failed to close browser {name}: {e}")

        self._context = self._browser = self._playwright = None
        self.page = None
        logger.debug("Browser session closed")

    def __enter__(self) -> 'BrowserSession':
        try:
            return self.open()
        except Exception:
            self.close()
            raise

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


class ScrapeAdapter(SourceAdapter):
    """Adapter for sources scraped through a registered site extractor."""

    kind = 'scrape'

    def __init__(self,
                 config: Optional[ScrapeConfig] = None,
                 extractors: Optional[ExtractorRegistry] = None,
                 session_factory: Optional[Callable[[ScrapeConfig], Any]] = None):
        """
        Initialize scrape adapter.

        Args:
            config: Browser settings
            extractors: Extractor registry (defaults to the global one)
            session_factory: Builds a browser session context manager from the config
        """
        self.config = config or ScrapeConfig()
        self.extractors = extractors or get_extractor_registry()
        self.session_factory = session_factory or BrowserSession

    def plan_urls(self, source: SourceDescriptor, now: Optional[datetime] = None) -> List[str]:
        """Let the site extractor expand the source into listing URLs."""
        extractor = self.extractors.find(source.url)
        if extractor is None:
            return [source.url]
        return extractor.plan_urls(source, now or datetime.now(pytz.utc))

    def fetch(self, source: SourceDescriptor, url: str) -> List[Article]:
        """
        Render one listing page and extract its articles.

        Raises:
            UnsupportedSourceError: If no extractor handles the URL
            SourceTimeoutError: If navigation or page readiness timed out
            SourceNavigationError: If the page could not be loaded
            SourceParseError: If the extractor failed on the page
            EmptySourceError: If the page yielded no titled items
        """
        extractor = self.extractors.find(url)
        if extractor is None:
            raise UnsupportedSourceError(source.title, url)

        logger.info(f"Scraping {source.title} from: {url}")

        with self.session_factory(self.config) as session:
            page = session.page
            self._navigate(page, source, url)
            self._wait_until_ready(page, source)
            items = self._extract(extractor, page, source)

        articles = self.build_articles(items, source)
        if not articles:
            raise EmptySourceError(source.title, url)

        logger.info(f"Scraped {len(articles)} items from {url}")
        return articles

    def _navigate(self, page: Any, source: SourceDescriptor, url: str) -> None:
        """Go to the URL, retrying with a full load if a client blocker interfered."""
        timeout_ms = self.config.navigation_timeout * 1000
        try:
            page.goto(url, wait_until='domcontentloaded', timeout=timeout_ms)
        except PlaywrightTimeoutError:
            raise SourceTimeoutError(source.title, self.config.navigation_timeout)
        except PlaywrightError as e:
            if BLOCKED_BY_CLIENT not in str(e):
                raise SourceNavigationError(source.title, url, e)

            logger.warning(f"Navigation to {url} blocked by client, retrying with full load")
            try:
                page.goto(url, wait_until='load', timeout=timeout_ms)
            except PlaywrightTimeoutError:
                raise SourceTimeoutError(source.title, self.config.navigation_timeout)
            except PlaywrightError as retry_error:
                raise SourceNavigationError(source.title, url, retry_error)

    def _wait_until_ready(self, page: Any, source: SourceDescriptor) -> None:
        try:
            page.wait_for_function(
                "() => document.readyState === 'complete'",
                timeout=self.config.ready_timeout * 1000
            )
        except PlaywrightTimeoutError:
            raise SourceTimeoutError(source.title, self.config.ready_timeout)

    def _extract(self, extractor: SiteExtractor, page: Any, source: SourceDescriptor) -> List[RawItem]:
        try:
            return extractor.extract(page)
        except PlaywrightError as e:
            raise SourceParseError(source.title, f'{extractor.name} listing', e)

    def build_articles(self,
                       items: List[RawItem],
                       source: SourceDescriptor,
                       now: Optional[datetime] = None) -> List[Article]:
        """Map raw listing items to articles, dropping untitled ones."""
        now = now or datetime.now(pytz.utc)
        articles = []
        for item in items:
            title = (item.title or '').strip()
            if not title:
                continue
            articles.append(Article(
                id=source.id,
                title=title,
                author=item.author or '',
                description=item.description or '',
                link=item.html_link or '',
                pub_date=normalize_pub_date(item.pub_date, now),
                source=source.title,
                category=source.category
            ))
        return articles

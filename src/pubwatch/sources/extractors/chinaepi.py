#!/usr/bin/env python3
"""
Chinese Journal of Epidemiology (中华流行病学杂志) listing extractor.

The journal has no feed; its issue listing is a table of five-row groups:
title, author, publish date, links, spacer.
"""

import logging
import re
from datetime import datetime
from typing import Any, List
from urllib.parse import urljoin

import pytz
from bs4 import BeautifulSoup

from .base import SiteExtractor, RawItem
from ...models.source import SourceDescriptor

logger = logging.getLogger(__name__)


class ChinaEpiExtractor(SiteExtractor):
    """Extractor for chinaepi.icdc.cn issue listings."""

    name = 'chinaepi'
    host_patterns = ('chinaepi.icdc.cn',)

    LISTING_URL = 'http://chinaepi.icdc.cn/zhlxbx/ch/reader/issue_list.aspx?year_id={year}&quarter_id={month}'
    TABLE_SELECTOR = 'table#table24'
    ROWS_PER_ITEM = 5
    DATE_PREFIX = '出版日期:'

    ABSTRACT_RE = re.compile(r'摘要')
    PDF_RE = re.compile(r'下载 PDF')
    HTML_RE = re.compile(r'Html全文')

    def __init__(self, periods: int = 3, selector_timeout: int = 10):
        """
        Args:
            periods: Number of monthly issues to cover, current month included
            selector_timeout: Seconds to wait for the listing table
        """
        self.periods = periods
        self.selector_timeout = selector_timeout
        self.site_tz = pytz.timezone('Asia/Shanghai')

    def plan_urls(self, source: SourceDescriptor, now: datetime) -> List[str]:
        """Listing URLs for the current month and the preceding ones."""
        if now.tzinfo is not None:
            now = now.astimezone(self.site_tz)

        urls = []
        for offset in range(self.periods):
            year = now.year
            month = now.month - offset
            while month < 1:
                month += 12
                year -= 1
            urls.append(self.LISTING_URL.format(year=year, month=month))

        logger.debug(f"Generated URLs for {source.title}: {urls}")
        return urls

    def extract(self, page: Any) -> List[RawItem]:
        page.wait_for_selector(self.TABLE_SELECTOR, timeout=self.selector_timeout * 1000)
        return self.parse_listing(page.content(), page.url)

    def parse_listing(self, html: str, base_url: str) -> List[RawItem]:
        """Parse the rendered listing HTML into raw items."""
        soup = BeautifulSoup(html, 'html.parser')
        items = []

        for table in soup.select(self.TABLE_SELECTOR):
            # first row is the table header
            data_rows = table.find_all('tr')[1:]

            for i in range(0, len(data_rows), self.ROWS_PER_ITEM):
                if i + self.ROWS_PER_ITEM - 1 >= len(data_rows):
                    break

                title_row, author_row, date_row, info_row = data_rows[i:i + 4]

                title_link = title_row.find('a')
                title = title_link.get_text().strip() if title_link else ''
                if not title:
                    continue

                author_cell = author_row.select_one('td:last-child')
                author = author_cell.get_text().strip() if author_cell else ''

                date_cell = date_row.select_one('td:last-child')
                pub_date = date_cell.get_text().replace(self.DATE_PREFIX, '').strip() if date_cell else ''

                abstract_link = pdf_link = html_link = ''
                for link in info_row.find_all('a'):
                    text = link.get_text().strip()
                    href = urljoin(base_url, link.get('href', '')) if link.get('href') else ''
                    if self.ABSTRACT_RE.search(text):
                        abstract_link = href
                    elif self.PDF_RE.search(text):
                        pdf_link = href
                    elif self.HTML_RE.search(text):
                        html_link = href

                items.append(RawItem(
                    title=title,
                    author=author,
                    pub_date=pub_date,
                    abstract_link=abstract_link,
                    pdf_link=pdf_link,
                    html_link=html_link
                ))

        logger.debug(f"Parsed {len(items)} items from {base_url}")
        return items

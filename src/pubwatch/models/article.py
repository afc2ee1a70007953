#!/usr/bin/env python3
"""
Article data model.

Represents one canonical article record as persisted in the corpus.
"""

import re
from datetime import datetime
from typing import Dict, Any, Optional
from dataclasses import dataclass

import pytz
from dateutil import parser as date_parser

_CJK_DATE_RE = re.compile(r'(\d{4})\s*年\s*(\d{1,2})\s*月\s*(\d{1,2})\s*日?')


def parse_pub_date(value: Any) -> Optional[datetime]:
    """
    Parse a publish date into an aware UTC datetime.

    Naive values are read as UTC. Returns None for anything that is not a
    recognisable date.
    """
    if isinstance(value, datetime):
        dt = value
    else:
        if not value or not isinstance(value, str):
            return None
        text = _CJK_DATE_RE.sub(
            lambda m: f"{m.group(1)}-{int(m.group(2)):02d}-{int(m.group(3)):02d}",
            value.strip()
        )
        try:
            dt = date_parser.parse(text)
        except (ValueError, OverflowError):
            return None

    try:
        if dt.tzinfo is None:
            dt = pytz.utc.localize(dt)
        return dt.astimezone(pytz.utc)
    except (ValueError, OverflowError):
        # Parses, but lands outside the datetime range once shifted to UTC
        return None


def normalize_pub_date(raw: Optional[str], now: Optional[datetime] = None) -> str:
    """
    Normalize a source-provided date to ISO-8601.

    Empty input becomes the fetch time. Text that cannot be parsed is kept
    as is so the recency filter can reject it.
    """
    if raw is None or not str(raw).strip():
        now = now or datetime.now(pytz.utc)
        return now.astimezone(pytz.utc).isoformat()

    parsed = parse_pub_date(raw)
    if parsed is None:
        return str(raw).strip()
    return parsed.isoformat()


@dataclass(frozen=True)
class Article:
    """
    A single article normalized from a feed item or a scraped listing row.

    ``id`` is the owning source's id and is shared by all of its articles;
    ``title`` is the deduplication key.
    """
    id: str
    title: str
    link: str
    pub_date: str
    source: str
    category: str
    description: str = ""
    author: Optional[str] = None

    @property
    def published_at(self) -> Optional[datetime]:
        """Publish date as an aware datetime, or None if malformed."""
        return parse_pub_date(self.pub_date)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the corpus JSON shape."""
        data = {
            'id': self.id,
            'title': self.title,
        }
        if self.author is not None:
            data['author'] = self.author
        data.update({
            'description': self.description,
            'link': self.link,
            'pubDate': self.pub_date,
            'source': self.source,
            'category': self.category
        })
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Article':
        """Create Article from a corpus JSON object."""
        author = data.get('author')
        return cls(
            id=str(data.get('id', '') or ''),
            title=str(data.get('title', '') or ''),
            link=str(data.get('link', '') or ''),
            pub_date=str(data.get('pubDate', '') or ''),
            source=str(data.get('source', '') or ''),
            category=str(data.get('category', '') or ''),
            description=str(data.get('description', '') or ''),
            author=str(author) if author is not None else None
        )

    def __repr__(self):
        return f"Article(id='{self.id}', title='{self.title[:50]}...', pubDate='{self.pub_date}')"

#!/usr/bin/env python3
"""
Title-based deduplication, corpus merging and canonical ordering.

Titles are compared exactly (case-sensitive, no normalization). When two
articles share a title the one seen first is kept, so articles already in
the corpus always win over freshly fetched copies.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, List

from .models.article import Article

logger = logging.getLogger(__name__)


@dataclass
class MergeResult:
    """Outcome of merging a fetch into the stored corpus."""
    articles: List[Article] = field(default_factory=list)
    existing_count: int = 0
    new_count: int = 0
    added_count: int = 0

    @property
    def duplicates_dropped(self) -> int:
        return self.existing_count + self.new_count - len(self.articles)


def dedup_by_title(articles: Iterable[Article]) -> List[Article]:
    """Drop articles whose title was already seen, keeping input order."""
    seen_titles = set()
    unique_articles = []

    for article in articles:
        if article.title in seen_titles:
            logger.debug(f"Duplicate title dropped: {article.title[:50]}...")
            continue
        seen_titles.add(article.title)
        unique_articles.append(article)

    return unique_articles


def merge_corpus(existing: List[Article], new: List[Article]) -> MergeResult:
    """
    Append new articles to the existing corpus, skipping known titles.

    Every existing article is kept. Running the merge again with the same
    new articles adds nothing.
    """
    kept_existing = len({article.title for article in existing})
    merged = dedup_by_title(list(existing) + list(new))

    result = MergeResult(
        articles=merged,
        existing_count=len(existing),
        new_count=len(new),
        added_count=len(merged) - kept_existing
    )

    logger.info(f"Merged {result.new_count} fetched articles into {result.existing_count} stored: "
                f"{result.added_count} added, {result.duplicates_dropped} duplicates dropped")
    return result


def _collation_key(source_id: str):
    # Case-insensitive first, lower case ahead of upper case on ties
    return (source_id.casefold(), source_id.swapcase())


def _sort_key(article: Article):
    published = article.published_at
    if published is None:
        return (_collation_key(article.id), 1, 0.0)
    return (_collation_key(article.id), 0, -published.timestamp())


def sort_corpus(articles: Iterable[Article]) -> List[Article]:
    """
    Order a corpus by source id ascending, then publish date newest first.

    Articles with unparseable dates come after dated ones of the same source.
    Ties keep their relative order.
    """
    return sorted(articles, key=_sort_key)

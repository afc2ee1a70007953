#!/usr/bin/env python3
"""
JSON file persistence for the article corpus.

The corpus is read once when a run starts and replaced as a whole when it
ends.
"""

import json
import logging
from pathlib import Path
from typing import Iterable, List, Union

from .exceptions import CorpusError
from .models.article import Article

logger = logging.getLogger(__name__)


class CorpusStore:
    """Loads and saves the corpus as a JSON array of articles."""

    def __init__(self, path: Union[str, Path] = "data/articles.json"):
        self.path = Path(path)

    def load(self) -> List[Article]:
        """
        Read the stored corpus.

        A missing file is a first run; an unreadable or malformed file is
        reported and treated as empty so the run can rebuild it.
        """
        if not self.path.exists():
            logger.info(f"No existing corpus at {self.path}, starting empty")
            return []

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            error = CorpusError(str(self.path), 'load', e)
            logger.error(f"{error.message}; starting with an empty corpus")
            return []

        if not isinstance(data, list):
            logger.error(f"Corpus at {self.path} is not a JSON array; starting with an empty corpus")
            return []

        articles = [Article.from_dict(item) for item in data if isinstance(item, dict)]
        skipped = len(data) - len(articles)
        if skipped:
            logger.warning(f"Skipped {skipped} malformed entries in {self.path}")

        logger.info(f"Loaded {len(articles)} articles from {self.path}")
        return articles

    def save(self, articles: Iterable[Article]) -> None:
        """
        Replace the corpus file with the given articles.

        Raises:
            CorpusError: If the file cannot be written
        """
        payload = [article.to_dict() for article in articles]
        temp_path = self.path.with_name(self.path.name + '.tmp')

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(temp_path, 'w', encoding='utf-8') as f:
                json.dump(payload, f, ensure_ascii=False, indent=2)
            temp_path.replace(self.path)
        except OSError as e:
            if temp_path.exists():
                temp_path.unlink()
            raise CorpusError(str(self.path), 'save', e) from e

        logger.info(f"Saved {len(payload)} articles to {self.path}")

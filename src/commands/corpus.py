#!/usr/bin/env python3
"""
Corpus command endpoints for fetching sources and inspecting the corpus.
"""

import logging
from argparse import Namespace
from collections import Counter

from .base import BaseCommand
from pubwatch.exceptions import AggregateFetchError
from pubwatch.pipeline import AggregationPipeline

logger = logging.getLogger(__name__)


class CorpusCommand(BaseCommand):
    """Handle corpus fetching and statistics."""

    SUBCOMMANDS = ('fetch', 'stats')

    def execute(self, subcommand: str, args: Namespace) -> int:
        """Execute corpus subcommand."""
        try:
            if subcommand == "fetch":
                return self.fetch(args)
            elif subcommand == "stats":
                return self.stats(args)
            else:
                available = ", ".join(self.get_available_subcommands())
                self.logger.error(f"Unknown subcommand '{subcommand}'. Available: {available}")
                return 1

        except (Exception, KeyboardInterrupt) as e:
            return self.handle_error(e, f"corpus {subcommand}")

    def fetch(self, args: Namespace) -> int:
        """Run one full fetch-merge-save cycle."""
        pipeline = AggregationPipeline(
            registry=self.source_registry(args),
            corpus_store=self.corpus_store(args),
            run_log=self.run_log(args),
            orchestrator=self.create_orchestrator()
        )

        source_ids = getattr(args, 'sources', None)
        try:
            record = pipeline.run(source_ids=source_ids, command_used="corpus fetch")
        except AggregateFetchError as e:
            print(f"❌ {e.message}")
            for failure in e.context.get('failures', []):
                print(f"   • {failure}")
            return 1

        print(f"\n=== Fetch Summary ===")
        print(f"📥 Articles fetched: {record.articles_fetched}")
        print(f"📚 Corpus size: {record.corpus_size}")
        print(f"⏱️  Took {record.processing_time:.1f}s")
        if record.failures:
            print(f"⚠️  Failed sources ({record.sources_failed}/{record.sources_total}):")
            for failure in record.failures:
                print(f"   • {failure}")
        else:
            print(f"✅ All {record.sources_total} sources fetched successfully")

        return 0

    def stats(self, args: Namespace) -> int:
        """Show article counts per source id."""
        articles = self.corpus_store(args).load()
        counts = Counter(article.id for article in articles)

        print(f"\n=== Corpus Statistics ===")
        print(f"📊 Total articles: {len(articles)}")
        if counts:
            print(f"📈 Articles by source:")
            for source_id in sorted(counts):
                print(f"  • {source_id}: {counts[source_id]}")

        return 0

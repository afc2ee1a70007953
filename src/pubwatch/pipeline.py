#!/usr/bin/env python3
"""
End-to-end aggregation run.

Loads the registry and the stored corpus, fetches every source, merges the
new articles in, writes the sorted corpus back and records the outcome in
the run log.
"""

import logging
import time
import uuid
from datetime import datetime
from typing import Iterable, Optional

import pytz

from .corpus_store import CorpusStore
from .deduplication import merge_corpus, sort_corpus
from .models.run import RunRecord
from .orchestrator import FetchOrchestrator
from .run_log import RunLog, SUCCESS_MESSAGE, failed_sources_message, critical_error_message
from .sources.registry import SourceRegistry

logger = logging.getLogger(__name__)


class AggregationPipeline:
    """Runs registry → fetch → merge → sort → save → log once."""

    def __init__(self,
                 registry: SourceRegistry,
                 corpus_store: CorpusStore,
                 run_log: RunLog,
                 orchestrator: FetchOrchestrator):
        self.registry = registry
        self.corpus_store = corpus_store
        self.run_log = run_log
        self.orchestrator = orchestrator

    def generate_run_id(self) -> str:
        """Generate unique run ID."""
        return str(uuid.uuid4())[:8]

    def run(self,
            source_ids: Optional[Iterable[str]] = None,
            command_used: str = "corpus fetch",
            now: Optional[datetime] = None) -> RunRecord:
        """
        Execute one aggregation run.

        Args:
            source_ids: Restrict fetching to these registry ids
            command_used: Command label stored on the run record
            now: Reference time for recency and the run log date

        Returns:
            Record of the finished run

        Raises:
            RegistryError: If the registry cannot be loaded (nothing is logged)
            AggregateFetchError: If no article was fetched (corpus untouched)
        """
        start_time = time.time()
        now = now or datetime.now(pytz.utc)
        record = RunRecord(
            run_id=self.generate_run_id(),
            timestamp=now,
            command_used=command_used
        )

        sources = self.registry.select(self.registry.load(), source_ids)
        record.sources_total = len(sources)
        logger.info(f"Run {record.run_id}: fetching {len(sources)} sources")

        try:
            existing = self.corpus_store.load()
            report = self.orchestrator.run(sources, now)

            merged = merge_corpus(existing, report.articles)
            corpus = sort_corpus(merged.articles)
            self.corpus_store.save(corpus)
        except Exception as e:
            record.success = False
            record.error_message = getattr(e, 'message', None) or str(e)
            record.processing_time = time.time() - start_time
            self.run_log.write(critical_error_message(e), now)
            raise

        record.articles_fetched = len(report.articles)
        record.corpus_size = len(corpus)
        record.failures = list(report.failures)
        record.sources_failed = len(report.failures)
        record.processing_time = time.time() - start_time

        if report.failures:
            self.run_log.write(failed_sources_message(report.failures), now)
        else:
            self.run_log.write(SUCCESS_MESSAGE, now)

        logger.info(f"Run {record.run_id} finished in {record.processing_time:.2f}s: "
                    f"{record.articles_fetched} fetched, {merged.added_count} new, "
                    f"corpus size {record.corpus_size}")
        return record

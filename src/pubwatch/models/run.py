#!/usr/bin/env python3
"""
Run bookkeeping models.

Contains the orchestrator's report, the per-run record and run log entries.
"""

from datetime import datetime
from typing import List, Optional
from dataclasses import dataclass, field

from .article import Article


@dataclass
class FetchReport:
    """Articles gathered in one orchestrator pass plus per-source failures."""
    articles: List[Article] = field(default_factory=list)
    failures: List[str] = field(default_factory=list)
    succeeded: List[str] = field(default_factory=list)

    @property
    def sources_attempted(self) -> int:
        return len(self.succeeded) + len(self.failures)


@dataclass
class RunRecord:
    """Represents a single execution run."""
    run_id: str
    timestamp: datetime
    command_used: str
    sources_total: int = 0
    sources_failed: int = 0
    articles_fetched: int = 0
    corpus_size: int = 0
    failures: List[str] = field(default_factory=list)
    success: bool = True
    processing_time: float = 0.0
    error_message: Optional[str] = None


@dataclass(frozen=True)
class RunLogEntry:
    """One line of the daily run log."""
    date: str
    message: str

    def to_line(self) -> str:
        return f"{self.date}: {self.message}"

    @classmethod
    def from_line(cls, line: str) -> Optional['RunLogEntry']:
        date, sep, message = line.partition(': ')
        if not sep:
            return None
        return cls(date=date.strip(), message=message.strip())

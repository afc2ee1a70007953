#!/usr/bin/env python3
"""
Daily run log.

Keeps at most one line per UTC date; a later run on the same day replaces
the earlier line.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Union

import pytz

from .models.run import RunLogEntry

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "All sources fetched successfully"


def failed_sources_message(failures: List[str]) -> str:
    return f"Failed sources: {'; '.join(failures)}"


def critical_error_message(error: Union[str, Exception]) -> str:
    message = getattr(error, 'message', None) or str(error)
    return f"Critical error: {message}"


class RunLog:
    """Line-per-day text log of run outcomes."""

    def __init__(self, path: Union[str, Path] = "data/log.txt"):
        self.path = Path(path)

    def write(self, message: str, today: Optional[datetime] = None) -> None:
        """
        Record today's outcome, replacing an existing line for the date.

        Failures to write are logged and never raised.
        """
        today = today or datetime.now(pytz.utc)
        if today.tzinfo is not None:
            today = today.astimezone(pytz.utc)
        date_key = today.strftime('%Y-%m-%d')
        line = RunLogEntry(date=date_key, message=message).to_line()

        try:
            lines = []
            if self.path.exists():
                with open(self.path, 'r', encoding='utf-8') as f:
                    lines = [existing for existing in f.read().splitlines() if existing.strip()]

            for index, existing in enumerate(lines):
                if existing.startswith(date_key):
                    lines[index] = line
                    break
            else:
                lines.append(line)

            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, 'w', encoding='utf-8') as f:
                f.write('\n'.join(lines) + '\n')
            logger.debug(f"Run log updated: {line}")
        except OSError as e:
            logger.error(f"Failed to write run log {self.path}: {e}")

    def entries(self) -> List[RunLogEntry]:
        """Read all parseable log lines in file order."""
        if not self.path.exists():
            return []

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                lines = f.read().splitlines()
        except OSError as e:
            logger.error(f"Failed to read run log {self.path}: {e}")
            return []

        entries = []
        for line in lines:
            entry = RunLogEntry.from_line(line)
            if entry is not None:
                entries.append(entry)
        return entries

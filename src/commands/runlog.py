#!/usr/bin/env python3
"""
Run log command endpoints.
"""

import logging
from argparse import Namespace

from .base import BaseCommand

logger = logging.getLogger(__name__)


class RunLogCommand(BaseCommand):
    """Show the daily run log."""

    SUBCOMMANDS = ('show',)

    def execute(self, subcommand: str, args: Namespace) -> int:
        """Execute runlog subcommand."""
        try:
            if subcommand == "show":
                return self.show(args)
            else:
                available = ", ".join(self.get_available_subcommands())
                self.logger.error(f"Unknown subcommand '{subcommand}'. Available: {available}")
                return 1

        except (Exception, KeyboardInterrupt) as e:
            return self.handle_error(e, f"runlog {subcommand}")

    def show(self, args: Namespace) -> int:
        """Print the most recent run log lines."""
        days = getattr(args, 'days', 7)
        if days is not None and days < 1:
            raise ValueError("--days must be at least 1")

        run_log = self.run_log(args)
        entries = run_log.entries()
        if days:
            entries = entries[-days:]

        if not entries:
            print(f"📭 No runs recorded in {run_log.path}")
            return 0

        print(f"\n=== Run Log ({len(entries)} days) ===")
        for entry in entries:
            if entry.message.startswith('Critical error'):
                icon = '❌'
            elif entry.message.startswith('Failed sources'):
                icon = '⚠️ '
            else:
                icon = '✅'
            print(f"{icon} {entry.to_line()}")

        return 0

#!/usr/bin/env python3
"""
Source registry command endpoints.
"""

import logging
from argparse import Namespace

from .base import BaseCommand

logger = logging.getLogger(__name__)


class SourcesCommand(BaseCommand):
    """Inspect the source registry."""

    SUBCOMMANDS = ('list',)

    def execute(self, subcommand: str, args: Namespace) -> int:
        """Execute sources subcommand."""
        try:
            if subcommand == "list":
                return self.list(args)
            else:
                available = ", ".join(self.get_available_subcommands())
                self.logger.error(f"Unknown subcommand '{subcommand}'. Available: {available}")
                return 1

        except (Exception, KeyboardInterrupt) as e:
            return self.handle_error(e, f"sources {subcommand}")

    def list(self, args: Namespace) -> int:
        """List registry entries with the adapter each one resolves to."""
        registry = self.source_registry(args)
        sources = registry.load()

        print(f"\n=== Sources ({len(sources)}) in {registry.path} ===")
        for source in sources:
            kind = self.resolver.kind_for(source)
            category = f" [{source.category}]" if source.category else ""
            print(f"  • {source.id} ({kind}){category}: {source.title}")
            print(f"      {source.url}")

        return 0

#!/usr/bin/env python3
"""
Command endpoints for the publication watcher.

Each top-level CLI command is handled by a dedicated command class.
"""

from typing import Dict, Type
from .base import BaseCommand
from .corpus import CorpusCommand
from .sources import SourcesCommand
from .runlog import RunLogCommand

# Command registry for easy extension
COMMANDS: Dict[str, Type[BaseCommand]] = {
    'corpus': CorpusCommand,
    'sources': SourcesCommand,
    'runlog': RunLogCommand,
}


def get_command(command_name: str) -> BaseCommand:
    """Get a command instance by name."""
    if command_name not in COMMANDS:
        available = ', '.join(COMMANDS.keys())
        raise ValueError(f"Unknown command '{command_name}'. Available: {available}")

    command_class = COMMANDS[command_name]
    return command_class()

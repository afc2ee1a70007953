#!/usr/bin/env python3
"""
Base command class for the modular command architecture.

Provides common functionality and interface that all commands inherit.
Uses dependency injection for better testability and maintainability.
"""

import logging
from abc import ABC, abstractmethod
from typing import List, Optional
from argparse import Namespace

from pubwatch.container import get_container
from pubwatch.corpus_store import CorpusStore
from pubwatch.run_log import RunLog
from pubwatch.sources.registry import SourceRegistry

logger = logging.getLogger(__name__)


class BaseCommand(ABC):
    """
    Base class for all command endpoints.

    Provides access to configured services and the file-backed stores, plus
    the shared error handling that maps exceptions to exit codes.
    """

    def __init__(self, container=None):
        """
        Initialize base command with dependency injection container.

        Args:
            container: Optional container instance. If None, uses global container.
        """
        self.logger = logging.getLogger(self.__class__.__name__)
        self._container = container or get_container()

    @property
    def config(self):
        """Get configuration from container."""
        return self._container.get('config')

    @property
    def resolver(self):
        """Get adapter resolver from container."""
        return self._container.get('adapter_resolver')

    def create_orchestrator(self):
        """Create new fetch orchestrator instance."""
        return self._container.get('orchestrator')

    def _path(self, args: Namespace, arg_name: str, default: str) -> str:
        value: Optional[str] = getattr(args, arg_name, None)
        return value or default

    def source_registry(self, args: Namespace) -> SourceRegistry:
        """Registry at --registry, else the configured path."""
        return SourceRegistry(self._path(args, 'registry', self.config.paths.registry_path))

    def corpus_store(self, args: Namespace) -> CorpusStore:
        """Corpus store at --corpus, else the configured path."""
        return CorpusStore(self._path(args, 'corpus', self.config.paths.corpus_path))

    def run_log(self, args: Namespace) -> RunLog:
        """Run log at --log-file, else the configured path."""
        return RunLog(self._path(args, 'log_file', self.config.paths.run_log_path))

    @abstractmethod
    def execute(self, subcommand: str, args: Namespace) -> int:
        """
        Execute the command with given subcommand and arguments.

        Args:
            subcommand: The specific action to perform
            args: Parsed command line arguments

        Returns:
            Exit code (0 for success, non-zero for error)
        """
        pass

    def get_available_subcommands(self) -> List[str]:
        """
        Get list of available subcommands for this command.

        Returns:
            List of subcommand names
        """
        return list(getattr(self, 'SUBCOMMANDS', ()))

    def handle_error(self, error: BaseException, context: str = "") -> int:
        """
        Standard error handling for commands.

        Args:
            error: The exception that occurred
            context: Additional context about where the error occurred

        Returns:
            Appropriate exit code
        """
        if isinstance(error, KeyboardInterrupt):
            self.logger.info("Command interrupted by user")
            return 130

        error_msg = f"{context}: {error}" if context else str(error)
        self.logger.error(error_msg, exc_info=True)

        # Map common exceptions to exit codes
        if isinstance(error, FileNotFoundError):
            return 2
        elif isinstance(error, PermissionError):
            return 13
        elif isinstance(error, ValueError):
            return 22
        else:
            return 1

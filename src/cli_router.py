#!/usr/bin/env python3
"""
CLI Router for the publication watcher.

Routes `<command> <subcommand>` invocations to the command classes.
"""

import argparse
import logging
import sys
from typing import Optional, List

from commands import get_command, COMMANDS
from pubwatch.config import get_config_manager
from pubwatch.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class CLIRouter:
    """
    CLI router for corpus commands.

    Command structure:
    - python run.py corpus fetch --sources MMWR AJPH --verbose
    - python run.py corpus stats
    - python run.py sources list
    - python run.py runlog show --days 7
    """

    def __init__(self):
        """Initialize CLI router."""
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """Create the main argument parser."""
        parser = argparse.ArgumentParser(
            description="Publication watcher: collects recent journal articles into a JSON corpus",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog=self._get_examples_text()
        )

        subparsers = parser.add_subparsers(
            dest='command',
            help='Available commands',
            metavar='{command}'
        )

        self._add_corpus_parser(subparsers)
        self._add_sources_parser(subparsers)
        self._add_runlog_parser(subparsers)

        return parser

    def _add_corpus_parser(self, subparsers):
        """Add corpus command parser."""
        corpus_parser = subparsers.add_parser(
            'corpus',
            help='Fetch sources into the corpus and inspect it'
        )

        corpus_subparsers = corpus_parser.add_subparsers(
            dest='subcommand',
            help='Corpus operations',
            metavar='{fetch,stats}'
        )

        # Fetch subcommand
        fetch_parser = corpus_subparsers.add_parser('fetch', help='Fetch all sources and merge new articles into the corpus')
        fetch_parser.add_argument('--sources', nargs='+', metavar='ID', default=None, help='Only fetch these source ids (default: all)')
        fetch_parser.add_argument('--registry', default=None, help='Source registry file (default: REGISTRY_PATH or data/sources.json)')
        fetch_parser.add_argument('--corpus', default=None, help='Corpus file (default: CORPUS_PATH or data/articles.json)')
        fetch_parser.add_argument('--log-file', dest='log_file', default=None, help='Run log file (default: RUN_LOG_PATH or data/log.txt)')
        fetch_parser.add_argument('--verbose', action='store_true', help='Verbose output')

        # Stats subcommand
        stats_parser = corpus_subparsers.add_parser('stats', help='Show article counts per source')
        stats_parser.add_argument('--corpus', default=None, help='Corpus file (default: CORPUS_PATH or data/articles.json)')

    def _add_sources_parser(self, subparsers):
        """Add sources command parser."""
        sources_parser = subparsers.add_parser(
            'sources',
            help='Source registry operations'
        )

        sources_subparsers = sources_parser.add_subparsers(
            dest='subcommand',
            help='Source operations',
            metavar='{list}'
        )

        list_parser = sources_subparsers.add_parser('list', help='List registered sources and their adapters')
        list_parser.add_argument('--registry', default=None, help='Source registry file (default: REGISTRY_PATH or data/sources.json)')

    def _add_runlog_parser(self, subparsers):
        """Add runlog command parser."""
        runlog_parser = subparsers.add_parser(
            'runlog',
            help='Daily run log operations'
        )

        runlog_subparsers = runlog_parser.add_subparsers(
            dest='subcommand',
            help='Run log operations',
            metavar='{show}'
        )

        show_parser = runlog_subparsers.add_parser('show', help='Show recent run outcomes')
        show_parser.add_argument('--log-file', dest='log_file', default=None, help='Run log file (default: RUN_LOG_PATH or data/log.txt)')
        show_parser.add_argument('--days', type=int, default=7, help='Days to show (default: 7)')

    def _get_examples_text(self) -> str:
        """Get examples text for help."""
        return """
Examples:
  # Scheduled run
  python run.py corpus fetch

  # Manual runs
  python run.py corpus fetch --sources 中华流病 --verbose
  python run.py corpus fetch --corpus /tmp/articles.json --log-file /tmp/log.txt

  # Inspection
  python run.py corpus stats
  python run.py sources list
  python run.py runlog show --days 14

"""

    def route_command(self, args: Optional[List[str]] = None) -> int:
        """
        Route command to appropriate handler.

        Args:
            args: Command line arguments (uses sys.argv if None)

        Returns:
            Exit code
        """
        try:
            if args is None:
                args = sys.argv[1:]

            parsed_args = self.parser.parse_args(args)

            if not parsed_args.command:
                self.parser.print_help()
                return 1

            return self._handle_command(parsed_args)

        except SystemExit as e:
            # argparse calls sys.exit() on error or help
            return e.code if e.code is not None else 0
        except Exception as e:
            logger.error(f"CLI routing error: {e}", exc_info=True)
            return 1

    def _configure_logging(self, args: argparse.Namespace) -> None:
        """Apply LOG_LEVEL / VERBOSE_LOGGING, then --verbose on top."""
        try:
            get_config_manager().update_logging()
        except ConfigurationError as e:
            logger.warning(f"Using default logging: {e.message}")

        if getattr(args, 'verbose', False):
            logging.getLogger().setLevel(logging.DEBUG)
            for handler in logging.getLogger().handlers:
                handler.setLevel(logging.DEBUG)

    def _handle_command(self, args: argparse.Namespace) -> int:
        """Handle command structure."""
        logger.debug(f"Handling command: {args.command}")

        if args.command not in COMMANDS:
            available = ', '.join(COMMANDS.keys())
            logger.error(f"Unknown command '{args.command}'. Available: {available}")
            return 1

        subcommand = getattr(args, 'subcommand', None)
        if not subcommand:
            logger.error(f"No subcommand specified for '{args.command}'")
            try:
                self.parser.parse_args([args.command, '--help'])  # Show help
            except SystemExit:
                pass
            return 1

        self._configure_logging(args)

        try:
            command = get_command(args.command)
            return command.execute(subcommand, args)
        except Exception as e:
            logger.error(f"Error executing {args.command} {subcommand}: {e}", exc_info=True)
            return 1


def main(args: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point.

    Args:
        args: Command line arguments (uses sys.argv if None)

    Returns:
        Exit code
    """
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    router = CLIRouter()
    return router.route_command(args)


if __name__ == '__main__':
    exit_code = main()
    sys.exit(exit_code)

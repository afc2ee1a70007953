#!/usr/bin/env python3
"""
Standardized exception hierarchy for the publication watcher.

Source errors are recovered per source by the fetch orchestrator; registry
and aggregate errors abort the run.
"""

from typing import Optional, Dict, Any


class PubwatchError(Exception):
    """Base exception for all pubwatch errors."""

    def __init__(self, message: str, error_code: Optional[str] = None, context: Optional[Dict[str, Any]] = None):
        """
        Initialize base exception.

        Args:
            message: Human-readable error message
            error_code: Machine-readable error code
            context: Additional error context
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.context = context or {}


# Configuration-related exceptions
class ConfigurationError(PubwatchError):
    """Configuration is invalid or missing."""

    def __init__(self, config_key: str, issue: str):
        message = f"Configuration error for {config_key}: {issue}"
        context = {
            'config_key': config_key,
            'issue': issue
        }
        super().__init__(message, context=context)


class RegistryError(PubwatchError):
    """Source registry could not be read or is malformed."""

    def __init__(self, path: str, issue: str):
        message = f"Cannot load source registry {path}: {issue}"
        context = {
            'path': path,
            'issue': issue
        }
        super().__init__(message, context=context)


# Source-related exceptions
#
# Messages are kept short because they end up in the run log as
# "<source title> (<message>)".
class SourceError(PubwatchError):
    """Base exception for per-source fetch errors."""

    def __init__(self, source_name: str, reason: str, context: Optional[Dict[str, Any]] = None):
        context = dict(context or {})
        context['source_name'] = source_name
        super().__init__(reason, context=context)
        self.source_name = source_name


class SourceTimeoutError(SourceError):
    """Source fetch did not finish in time."""

    def __init__(self, source_name: str, timeout_seconds: float):
        super().__init__(
            source_name,
            f"Timeout after {timeout_seconds:g}s",
            {'timeout_seconds': timeout_seconds}
        )


class SourceConnectionError(SourceError):
    """Failed to download content from the source."""

    def __init__(self, source_name: str, url: str, original_error: Exception):
        super().__init__(
            source_name,
            f"Connection failed: {original_error}",
            {'url': url, 'original_error': str(original_error)}
        )


class SourceParseError(SourceError):
    """Downloaded content could not be parsed."""

    def __init__(self, source_name: str, parse_stage: str, original_error: Optional[Exception] = None):
        reason = f"Failed to parse {parse_stage}"
        if original_error is not None:
            reason += f": {original_error}"
        super().__init__(
            source_name,
            reason,
            {'parse_stage': parse_stage, 'original_error': str(original_error) if original_error else None}
        )


class SourceNavigationError(SourceError):
    """Browser navigation to a listing page failed."""

    def __init__(self, source_name: str, url: str, original_error: Exception):
        super().__init__(
            source_name,
            f"Navigation failed: {original_error}",
            {'url': url, 'original_error': str(original_error)}
        )


class UnsupportedSourceError(SourceError):
    """No extraction strategy is registered for the URL."""

    def __init__(self, source_name: str, url: str):
        super().__init__(source_name, "Unsupported URL pattern", {'url': url})


class EmptySourceError(SourceError):
    """Source answered but yielded no items."""

    def __init__(self, source_name: str, url: Optional[str] = None):
        super().__init__(source_name, "No feed or items found", {'url': url})


# Corpus-related exceptions
class CorpusError(PubwatchError):
    """Corpus file could not be read or written."""

    def __init__(self, path: str, operation: str, original_error: Exception):
        message = f"Corpus {operation} failed for {path}: {original_error}"
        context = {
            'path': path,
            'operation': operation,
            'original_error': str(original_error)
        }
        super().__init__(message, context=context)


class AggregateFetchError(PubwatchError):
    """No source produced a single article."""

    def __init__(self, failures: Optional[list] = None):
        message = "No articles were fetched from any source"
        context = {'failures': list(failures or [])}
        super().__init__(message, context=context)

#!/usr/bin/env python3
"""
Dependency Injection Container

Central place where adapters, the resolver and the orchestrator are built
from configuration. Supports singleton and factory registrations.
"""

import logging
from typing import Any, Dict, Callable, TypeVar, Optional
from functools import wraps
import threading

logger = logging.getLogger(__name__)

T = TypeVar('T')


class Container:
    """Simple dependency injection container with lifecycle management."""

    def __init__(self):
        """Initialize empty container."""
        self._factories: Dict[str, Callable] = {}
        self._singletons: Dict[str, Any] = {}
        self._lock = threading.RLock()

    def register_singleton(self, service_name: str, factory: Callable[[], T]) -> None:
        """
        Register a service created once and reused.

        Args:
            service_name: Unique name for the service
            factory: Function that creates the service instance
        """
        with self._lock:
            factory._is_singleton = True
            self._factories[service_name] = factory
            self._singletons.pop(service_name, None)

    def register_factory(self, service_name: str, factory: Callable[[], T]) -> None:
        """Register a service created anew on every get()."""
        with self._lock:
            self._factories[service_name] = factory

    def register_instance(self, service_name: str, instance: T) -> None:
        """Register an existing instance as singleton."""
        with self._lock:
            self._singletons[service_name] = instance

    def get(self, service_name: str) -> Any:
        """
        Get service instance by name.

        Raises:
            KeyError: If service is not registered
        """
        if service_name in self._singletons:
            return self._singletons[service_name]

        if service_name not in self._factories:
            raise KeyError(f"Service '{service_name}' not registered")

        # Reentrant so factories can get() their own dependencies
        with self._lock:
            factory = self._factories[service_name]

            if getattr(factory, '_is_singleton', False):
                if service_name not in self._singletons:
                    self._singletons[service_name] = factory()
                    logger.debug(f"Created singleton instance for '{service_name}'")
                return self._singletons[service_name]

            instance = factory()
            logger.debug(f"Created new instance for '{service_name}'")
            return instance

    def clear(self) -> None:
        """Clear all registered services and instances."""
        with self._lock:
            self._factories.clear()
            self._singletons.clear()


def singleton(factory_func: Callable[[], T]) -> Callable[[], T]:
    """
    Decorator to mark a factory function as singleton.

    Usage:
        @singleton
        def create_feed_adapter():
            return FeedAdapter()
    """
    @wraps(factory_func)
    def wrapper():
        return factory_func()

    wrapper._is_singleton = True
    return wrapper


# Global container instance
_container: Optional[Container] = None
_container_lock = threading.Lock()


def get_container() -> Container:
    """Get global container instance (thread-safe singleton)."""
    global _container
    if _container is None:
        with _container_lock:
            if _container is None:
                _container = Container()
                _setup_default_services(_container)
    return _container


def reset_container() -> None:
    """Reset global container (useful for testing)."""
    global _container
    with _container_lock:
        if _container:
            _container.clear()
        _container = None


def _setup_default_services(container: Container) -> None:
    """Set up default service registrations with configuration injection."""

    @singleton
    def create_config():
        from .config import get_config
        return get_config()

    @singleton
    def create_extractor_registry():
        from .sources.extractors import get_extractor_registry
        return get_extractor_registry()

    @singleton
    def create_feed_adapter():
        from .sources.feed import FeedAdapter
        config = container.get('config')
        return FeedAdapter(
            request_timeout=config.feed.request_timeout,
            race_timeout=config.feed.race_timeout,
            user_agent=config.feed.user_agent
        )

    @singleton
    def create_scrape_adapter():
        from .sources.scrape import ScrapeAdapter
        config = container.get('config')
        return ScrapeAdapter(config.scrape, extractors=container.get('extractor_registry'))

    @singleton
    def create_adapter_resolver():
        from .sources.resolver import AdapterResolver
        return AdapterResolver(
            container.get('feed_adapter'),
            container.get('scrape_adapter'),
            extractors=container.get('extractor_registry')
        )

    @singleton
    def create_recency_policy():
        from .recency import RecencyPolicy
        config = container.get('config')
        return RecencyPolicy(config.app.recency_rules)

    def create_orchestrator():
        from .orchestrator import FetchOrchestrator
        return FetchOrchestrator(container.get('adapter_resolver'), container.get('recency_policy'))

    # Register services
    container.register_singleton('config', create_config)
    container.register_singleton('extractor_registry', create_extractor_registry)
    container.register_singleton('feed_adapter', create_feed_adapter)
    container.register_singleton('scrape_adapter', create_scrape_adapter)
    container.register_singleton('adapter_resolver', create_adapter_resolver)
    container.register_singleton('recency_policy', create_recency_policy)

    # Non-singletons
    container.register_factory('orchestrator', create_orchestrator)

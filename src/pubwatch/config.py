#!/usr/bin/env python3
"""
Centralized Configuration Manager

Provides a single source of truth for all application configuration,
including environment variables, defaults, and validation.
"""

import os
import logging
from dataclasses import dataclass, field
from typing import Optional, Dict, List, Tuple

from .env_loader import load_env_file, get_bool_env
from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_RECENCY_RULES: Dict[str, int] = {
    'MMWR': 60,
    'EJD': 60,
    'Epidemiology': 60,
    'AJPH': 60,
    '中华流病': 90,
}

BROWSER_USER_AGENT = (
    'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 '
    '(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36'
)


@dataclass
class PathsConfig:
    """Locations of the registry, corpus and run log files."""
    registry_path: str = "data/sources.json"
    corpus_path: str = "data/articles.json"
    run_log_path: str = "data/log.txt"


@dataclass
class FeedConfig:
    """Syndication feed fetching."""
    request_timeout: int = 10
    race_timeout: int = 15
    user_agent: str = "Mozilla/5.0 (compatible; RSS-Reader/1.0;)"


@dataclass
class ScrapeConfig:
    """Headless browser scraping."""
    navigation_timeout: int = 30
    ready_timeout: int = 30
    headless: bool = True
    user_agent: str = BROWSER_USER_AGENT
    accept_language: str = "zh-CN,zh;q=0.9,en;q=0.8"
    viewport: Tuple[int, int] = (1920, 1080)
    launch_args: List[str] = field(default_factory=lambda: [
        '--disable-extensions',
        '--disable-features=HttpsFirstBalancedModeAutoEnable',
        '--no-sandbox',
        '--disable-setuid-sandbox',
    ])

    @property
    def extra_headers(self) -> Dict[str, str]:
        return {
            'Accept': (
                'text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,'
                'image/webp,image/apng,*/*;q=0.8,application/signed-exchange;v=b3;q=0.7'
            ),
            'Accept-Language': self.accept_language,
            'Cache-Control': 'no-cache',
            'Pragma': 'no-cache',
            'Upgrade-Insecure-Requests': '1',
        }


@dataclass
class ApplicationConfig:
    """Core application configuration."""
    recency_rules: Dict[str, int] = field(default_factory=lambda: dict(DEFAULT_RECENCY_RULES))
    log_level: str = "INFO"
    verbose_logging: bool = False


@dataclass
class Config:
    """Master configuration container."""
    paths: PathsConfig = field(default_factory=PathsConfig)
    feed: FeedConfig = field(default_factory=FeedConfig)
    scrape: ScrapeConfig = field(default_factory=ScrapeConfig)
    app: ApplicationConfig = field(default_factory=ApplicationConfig)


def parse_recency_rules(raw: str) -> Dict[str, int]:
    """
    Parse ``ID=days,ID=days`` into a rules mapping.

    Raises:
        ConfigurationError: On a malformed pair or a non-integer day count
    """
    rules: Dict[str, int] = {}
    for pair in raw.split(','):
        pair = pair.strip()
        if not pair:
            continue
        source_id, sep, days = pair.rpartition('=')
        if not sep or not source_id.strip():
            raise ConfigurationError('RECENCY_RULES', f"expected ID=days, got '{pair}'")
        try:
            rules[source_id.strip()] = int(days)
        except ValueError:
            raise ConfigurationError('RECENCY_RULES', f"day count for {source_id.strip()} is not an integer")
    return rules


class ConfigManager:
    """Manages application configuration with validation and environment loading."""

    def __init__(self, env_file_path: str = ".env"):
        """
        Initialize configuration manager.

        Args:
            env_file_path: Path to .env file relative to project root
        """
        self._config: Optional[Config] = None
        self._env_file_path = env_file_path
        load_env_file(self._env_file_path)

    def get_config(self, force_reload: bool = False) -> Config:
        """
        Get application configuration.

        Args:
            force_reload: Force reloading configuration from environment

        Returns:
            Complete configuration object
        """
        if self._config is None or force_reload:
            self._config = self._build_config()
        return self._config

    def _build_config(self) -> Config:
        """Build configuration from environment variables."""
        paths_config = PathsConfig(
            registry_path=os.getenv('REGISTRY_PATH', PathsConfig.registry_path),
            corpus_path=os.getenv('CORPUS_PATH', PathsConfig.corpus_path),
            run_log_path=os.getenv('RUN_LOG_PATH', PathsConfig.run_log_path)
        )

        feed_config = FeedConfig(
            request_timeout=self._get_int_env('FEED_TIMEOUT', FeedConfig.request_timeout),
            race_timeout=self._get_int_env('FEED_RACE_TIMEOUT', FeedConfig.race_timeout),
            user_agent=os.getenv('FEED_USER_AGENT', FeedConfig.user_agent)
        )

        scrape_config = ScrapeConfig(
            navigation_timeout=self._get_int_env('SCRAPE_NAVIGATION_TIMEOUT', ScrapeConfig.navigation_timeout),
            ready_timeout=self._get_int_env('SCRAPE_READY_TIMEOUT', ScrapeConfig.ready_timeout),
            headless=get_bool_env('SCRAPE_HEADLESS', True),
            user_agent=os.getenv('SCRAPE_USER_AGENT', ScrapeConfig.user_agent),
            accept_language=os.getenv('SCRAPE_ACCEPT_LANGUAGE', ScrapeConfig.accept_language)
        )

        raw_rules = os.getenv('RECENCY_RULES')
        app_config = ApplicationConfig(
            recency_rules=parse_recency_rules(raw_rules) if raw_rules else dict(DEFAULT_RECENCY_RULES),
            log_level=os.getenv('LOG_LEVEL', 'INFO').upper(),
            verbose_logging=get_bool_env('VERBOSE_LOGGING', False)
        )

        config = Config(
            paths=paths_config,
            feed=feed_config,
            scrape=scrape_config,
            app=app_config
        )

        self._validate_config(config)
        return config

    def _get_int_env(self, key: str, default: int) -> int:
        """Get integer environment variable."""
        value = os.getenv(key)
        if value is None or value == '':
            return default
        try:
            return int(value)
        except ValueError:
            raise ConfigurationError(key, f"expected an integer, got '{value}'")

    def _validate_config(self, config: Config) -> None:
        """Validate configuration values."""
        errors = []

        if config.feed.request_timeout < 1:
            errors.append("FEED_TIMEOUT must be at least 1 second")

        if config.feed.race_timeout < config.feed.request_timeout:
            errors.append("FEED_RACE_TIMEOUT must not be shorter than FEED_TIMEOUT")

        if config.scrape.navigation_timeout < 1:
            errors.append("SCRAPE_NAVIGATION_TIMEOUT must be at least 1 second")

        if config.scrape.ready_timeout < 1:
            errors.append("SCRAPE_READY_TIMEOUT must be at least 1 second")

        negative = [source_id for source_id, days in config.app.recency_rules.items() if days < 0]
        if negative:
            errors.append(f"RECENCY_RULES day counts must be >= 0 (got negative for {', '.join(negative)})")

        valid_log_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if config.app.log_level not in valid_log_levels:
            errors.append(f"LOG_LEVEL must be one of: {', '.join(valid_log_levels)}")

        if errors:
            raise ConfigurationError('environment', '; '.join(errors))

        logger.debug("Configuration validation passed")

    def update_logging(self) -> None:
        """Configure logging based on current configuration."""
        config = self.get_config()

        numeric_level = getattr(logging, config.app.log_level)
        logging.getLogger().setLevel(numeric_level)

        if config.app.verbose_logging:
            format_str = '%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s'
        else:
            format_str = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

        for handler in logging.getLogger().handlers:
            handler.setLevel(numeric_level)
            formatter = logging.Formatter(format_str, datefmt='%Y-%m-%d %H:%M:%S')
            handler.setFormatter(formatter)


# Global configuration manager instance
_config_manager: Optional[ConfigManager] = None


def get_config_manager() -> ConfigManager:
    """Get global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def get_config() -> Config:
    """Get application configuration."""
    return get_config_manager().get_config()


def reset_config() -> None:
    """Reset configuration manager (useful for testing)."""
    global _config_manager
    _config_manager = None

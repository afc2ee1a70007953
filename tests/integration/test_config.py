import pytest

from pubwatch.config import ConfigManager, DEFAULT_RECENCY_RULES, parse_recency_rules
from pubwatch.exceptions import ConfigurationError

ENV_KEYS = [
    "REGISTRY_PATH", "CORPUS_PATH", "RUN_LOG_PATH", "FEED_TIMEOUT", "FEED_RACE_TIMEOUT",
    "FEED_USER_AGENT", "SCRAPE_NAVIGATION_TIMEOUT", "SCRAPE_READY_TIMEOUT", "SCRAPE_HEADLESS",
    "SCRAPE_USER_AGENT", "SCRAPE_ACCEPT_LANGUAGE", "RECENCY_RULES", "LOG_LEVEL", "VERBOSE_LOGGING",
]


@pytest.fixture
def clean_env(monkeypatch):
    # setenv first so values loaded from .env files are also undone
    for key in ENV_KEYS:
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)
    return monkeypatch


def build(env_file="does-not-exist.env"):
    return ConfigManager(env_file_path=env_file).get_config()


def test_defaults(clean_env):
    """Test configuration defaults without any environment."""
    config = build()

    assert config.paths.corpus_path == "data/articles.json"
    assert config.paths.registry_path == "data/sources.json"
    assert config.paths.run_log_path == "data/log.txt"
    assert config.feed.request_timeout == 10
    assert config.feed.race_timeout == 15
    assert config.scrape.navigation_timeout == 30
    assert config.scrape.viewport == (1920, 1080)
    assert config.scrape.headless is True
    assert config.app.recency_rules == DEFAULT_RECENCY_RULES
    assert config.app.recency_rules["中华流病"] == 90


def test_environment_overrides(clean_env):
    """Test that environment variables are picked up."""
    clean_env.setenv("CORPUS_PATH", "/tmp/corpus.json")
    clean_env.setenv("FEED_TIMEOUT", "5")
    clean_env.setenv("SCRAPE_HEADLESS", "false")
    clean_env.setenv("RECENCY_RULES", "MMWR=30, AJPH=7")
    clean_env.setenv("LOG_LEVEL", "debug")

    config = build()

    assert config.paths.corpus_path == "/tmp/corpus.json"
    assert config.feed.request_timeout == 5
    assert config.scrape.headless is False
    assert config.app.recency_rules == {"MMWR": 30, "AJPH": 7}
    assert config.app.log_level == "DEBUG"


def test_env_file_values_do_not_override_environment(clean_env, tmp_path):
    """Test .env loading precedence."""
    env_file = tmp_path / ".env"
    env_file.write_text("CORPUS_PATH=from-file.json\nRUN_LOG_PATH='quoted.txt'\n", encoding="utf-8")
    clean_env.setenv("CORPUS_PATH", "from-env.json")

    config = build(str(env_file))

    assert config.paths.corpus_path == "from-env.json"
    assert config.paths.run_log_path == "quoted.txt"


@pytest.mark.parametrize("key, value, fragment", [
    ("FEED_TIMEOUT", "abc", "expected an integer"),
    ("FEED_TIMEOUT", "0", "FEED_TIMEOUT must be at least 1 second"),
    ("FEED_RACE_TIMEOUT", "3", "FEED_RACE_TIMEOUT must not be shorter"),
    ("LOG_LEVEL", "LOUD", "LOG_LEVEL must be one of"),
    ("RECENCY_RULES", "MMWR=-1", "must be >= 0"),
])
def test_invalid_values_raise(clean_env, key, value, fragment):
    """Test configuration validation."""
    clean_env.setenv(key, value)

    with pytest.raises(ConfigurationError) as exc_info:
        build()

    assert fragment in exc_info.value.message


def test_parse_recency_rules_rejects_malformed_pairs():
    """Test the RECENCY_RULES syntax."""
    assert parse_recency_rules("中华流病=90,,MMWR=60") == {"中华流病": 90, "MMWR": 60}
    with pytest.raises(ConfigurationError):
        parse_recency_rules("MMWR")
    with pytest.raises(ConfigurationError):
        parse_recency_rules("MMWR=soon")

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[2]
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

# Also add the project root to handle absolute imports
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from pubwatch.config import ScrapeConfig  # noqa: E402
from pubwatch.exceptions import SourceTimeoutError  # noqa: E402
from pubwatch.models.article import Article  # noqa: E402
from pubwatch.models.source import SourceDescriptor  # noqa: E402
from pubwatch.sources.base import SourceAdapter  # noqa: E402
from pubwatch.sources.extractors.base import RawItem, SiteExtractor  # noqa: E402
from pubwatch.sources.extractors.registry import ExtractorRegistry  # noqa: E402

NOW = datetime(2024, 5, 20, 12, 0, tzinfo=timezone.utc)


def make_article(source_id: str, title: str, days_ago: float = 1, description: str = "", **overrides) -> Article:
    fields = dict(
        id=source_id,
        title=title,
        link=f"https://example.org/{source_id}/{title.replace(' ', '-')}",
        pub_date=(NOW - timedelta(days=days_ago)).isoformat(),
        source=f"{source_id} Journal",
        category="epi",
        description=description,
    )
    fields.update(overrides)
    return Article(**fields)


class FakeAdapter(SourceAdapter):
    """Adapter returning canned articles or raising canned errors per source id."""

    kind = "feed"

    def __init__(self, responses: Optional[Dict[str, Any]] = None, urls: Optional[Dict[str, List[str]]] = None) -> None:
        self.responses = responses or {}
        self.urls = urls or {}
        self.calls: List[str] = []

    def plan_urls(self, source, now=None):
        return self.urls.get(source.id, [source.url])

    def fetch(self, source, url):
        self.calls.append(url)
        response = self.responses.get(url, self.responses.get(source.id, []))
        if isinstance(response, BaseException):
            raise response
        if callable(response):
            return response(source, url)
        return list(response)


class FakeResolver:
    def __init__(self, adapter: SourceAdapter) -> None:
        self.adapter = adapter

    def resolve(self, source):
        return self.adapter

    def kind_for(self, source):
        return source.kind or self.adapter.kind


class FakeResponse:
    def __init__(self, content: bytes, status_code: int = 200) -> None:
        self.content = content
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            import requests
            raise requests.HTTPError(f"{self.status_code} Client Error")


class FakeHTTPSession:
    def __init__(self, response: Any = None) -> None:
        self.headers: Dict[str, str] = {}
        self.response = response
        self.requests: List[Dict[str, Any]] = []

    def get(self, url, timeout=None):
        self.requests.append({"url": url, "timeout": timeout})
        if isinstance(self.response, BaseException):
            raise self.response
        if callable(self.response):
            return self.response(url, timeout)
        return self.response


class FakePage:
    """Stands in for a Playwright page."""

    def __init__(self, html: str = "", goto_errors: Optional[List[BaseException]] = None,
                 ready_error: Optional[BaseException] = None) -> None:
        self.html = html
        self.goto_errors = list(goto_errors or [])
        self.ready_error = ready_error
        self.url = ""
        self.goto_calls: List[Dict[str, Any]] = []
        self.selectors: List[str] = []

    def goto(self, url, wait_until=None, timeout=None):
        self.goto_calls.append({"url": url, "wait_until": wait_until, "timeout": timeout})
        if self.goto_errors:
            raise self.goto_errors.pop(0)
        self.url = url

    def wait_for_function(self, expression, timeout=None):
        if self.ready_error is not None:
            raise self.ready_error

    def wait_for_selector(self, selector, timeout=None):
        self.selectors.append(selector)

    def content(self):
        return self.html


class FakeBrowserSession:
    """Context manager handing out a FakePage and recording teardown."""

    instances: List["FakeBrowserSession"] = []

    def __init__(self, config: ScrapeConfig, page: FakePage) -> None:
        self.config = config
        self.page = page
        self.closed = False
        FakeBrowserSession.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.closed = True
        return False


class StaticExtractor(SiteExtractor):
    name = "static"
    host_patterns = ("journal.example.cn",)

    def __init__(self, items: Optional[List[RawItem]] = None, error: Optional[BaseException] = None) -> None:
        self.items = items or []
        self.error = error

    def extract(self, page):
        if self.error is not None:
            raise self.error
        return list(self.items)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def article_factory() -> Callable[..., Article]:
    return make_article


@pytest.fixture
def feed_source() -> SourceDescriptor:
    return SourceDescriptor(id="MMWR", title="Morbidity and Mortality Weekly Report",
                            url="https://feeds.example.org/mmwr.rss", category="公共卫生")


@pytest.fixture
def scrape_source() -> SourceDescriptor:
    return SourceDescriptor(id="CJE", title="Chinese Journal", url="http://journal.example.cn/list", category="流行病学")


@pytest.fixture
def timeout_error() -> SourceTimeoutError:
    return SourceTimeoutError("B Journal", 15)


@pytest.fixture
def fake_session_factory():
    FakeBrowserSession.instances = []

    def _factory(page: FakePage):
        return lambda config: FakeBrowserSession(config, page)

    return _factory


@pytest.fixture
def static_registry_factory():
    def _factory(extractor: SiteExtractor) -> ExtractorRegistry:
        registry = ExtractorRegistry()
        registry.register(extractor)
        return registry

    return _factory


@pytest.fixture
def write_registry(tmp_path):
    def _write(entries) -> Path:
        import json
        path = tmp_path / "sources.json"
        path.write_text(json.dumps(entries, ensure_ascii=False), encoding="utf-8")
        return path

    return _write

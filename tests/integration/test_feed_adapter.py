import threading

import pytest
import requests

from conftest import FakeHTTPSession, FakeResponse
from pubwatch.exceptions import (
    EmptySourceError, SourceConnectionError, SourceParseError, SourceTimeoutError
)
from pubwatch.sources.feed import FeedAdapter

RSS = b"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
  <channel>
    <title>MMWR</title>
    <link>https://www.cdc.gov/mmwr</link>
    <description>Weekly reports</description>
    <item>
      <title> Measles Outbreak - Texas, 2024 </title>
      <link>https://www.cdc.gov/mmwr/volumes/73/wr/mm7301a1.htm</link>
      <description>&lt;p&gt;Summary of the &lt;b&gt;outbreak&lt;/b&gt; response.&lt;/p&gt;</description>
      <pubDate>Thu, 16 May 2024 14:00:00 GMT</pubDate>
    </item>
    <item>
      <title>Undated Notice</title>
      <link>https://www.cdc.gov/mmwr/notice.htm</link>
    </item>
  </channel>
</rss>
"""

EMPTY_RSS = b"""<?xml version="1.0"?><rss version="2.0"><channel><title>x</title></channel></rss>"""

BROKEN_RSS = b"""<?xml version="1.0"?><rss version="2.0"><channel><title>Broken</title></rss>"""

IMAGE_ONLY_RSS = b"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
  <channel>
    <title>MMWR</title>
    <item>
      <title>Figure of the week</title>
      <link>https://www.cdc.gov/mmwr/figure.htm</link>
      <description>&lt;img src="https://www.cdc.gov/mmwr/figure.png"/&gt;</description>
      <pubDate>Thu, 16 May 2024 14:00:00 GMT</pubDate>
    </item>
  </channel>
</rss>
"""


def test_fetch_maps_feed_items(feed_source):
    """Test that entries become articles with the source's fields."""
    session = FakeHTTPSession(FakeResponse(RSS))
    adapter = FeedAdapter(session=session)

    articles = adapter.fetch(feed_source, feed_source.url)

    assert len(articles) == 2
    first = articles[0]
    assert first.id == "MMWR"
    assert first.title == "Measles Outbreak - Texas, 2024"
    assert first.description == "Summary of the outbreak response."
    assert first.link == "https://www.cdc.gov/mmwr/volumes/73/wr/mm7301a1.htm"
    assert first.pub_date.startswith("2024-05-16T14:00:00")
    assert first.source == "Morbidity and Mortality Weekly Report"
    assert first.category == "公共卫生"
    assert first.author is None
    assert session.requests[0]["timeout"] == 10
    assert session.headers["User-Agent"] == "Mozilla/5.0 (compatible; RSS-Reader/1.0;)"


def test_missing_pub_date_defaults_to_fetch_time(feed_source):
    """Test that an undated item gets a parseable timestamp."""
    adapter = FeedAdapter(session=FakeHTTPSession(FakeResponse(RSS)))

    undated = adapter.fetch(feed_source, feed_source.url)[1]

    assert undated.published_at is not None
    assert undated.description == ""


def test_feed_without_items_is_empty_source(feed_source):
    """Test that a valid feed with no items fails the source."""
    adapter = FeedAdapter(session=FakeHTTPSession(FakeResponse(EMPTY_RSS)))

    with pytest.raises(EmptySourceError) as exc_info:
        adapter.fetch(feed_source, feed_source.url)

    assert exc_info.value.message == "No feed or items found"


def test_unparseable_feed_is_parse_error(feed_source):
    """Test that malformed XML without items is reported as a parse failure."""
    adapter = FeedAdapter(session=FakeHTTPSession(FakeResponse(BROKEN_RSS)))

    with pytest.raises(SourceParseError) as exc_info:
        adapter.fetch(feed_source, feed_source.url)

    assert exc_info.value.message.startswith("Failed to parse feed")


def test_markup_only_summary_becomes_empty_description(feed_source):
    """Test that a summary holding only tags yields no description."""
    adapter = FeedAdapter(session=FakeHTTPSession(FakeResponse(IMAGE_ONLY_RSS)))

    article = adapter.fetch(feed_source, feed_source.url)[0]

    assert article.title == "Figure of the week"
    assert article.description == ""


def test_http_errors_are_connection_errors(feed_source):
    """Test that HTTP failures map to connection errors."""
    adapter = FeedAdapter(session=FakeHTTPSession(FakeResponse(b"", status_code=503)))

    with pytest.raises(SourceConnectionError):
        adapter.fetch(feed_source, feed_source.url)


def test_request_timeout_is_timeout_error(feed_source):
    """Test that a request timeout maps to a source timeout."""
    adapter = FeedAdapter(session=FakeHTTPSession(requests.Timeout("read timed out")))

    with pytest.raises(SourceTimeoutError) as exc_info:
        adapter.fetch(feed_source, feed_source.url)

    assert exc_info.value.message == "Timeout after 10s"


def test_race_timeout_abandons_slow_fetch(feed_source):
    """Test that the overall deadline fires while the download hangs."""
    release = threading.Event()

    def hang(url, timeout):
        release.wait(5)
        return FakeResponse(RSS)

    adapter = FeedAdapter(session=FakeHTTPSession(hang))
    adapter.race_timeout = 0.05

    try:
        with pytest.raises(SourceTimeoutError) as exc_info:
            adapter.fetch(feed_source, feed_source.url)
    finally:
        release.set()

    assert exc_info.value.source_name == "Morbidity and Mortality Weekly Report"
    assert exc_info.value.message == "Timeout after 0.05s"

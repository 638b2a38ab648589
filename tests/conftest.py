import pytest
from typing import Dict, Optional
from unittest.mock import patch

from link_announcer.config import Settings
from link_announcer.errors import FetchFailure
from link_announcer.schemas.links import FetchResult


def html_result(url: str, title: Optional[str] = None, status: int = 200, content_type: str = "text/html; charset=utf-8") -> FetchResult:
    body = f"<html><head><title>{title}</title></head><body></body></html>" if title is not None else "<html></html>"
    return FetchResult(
        url=url,
        status_code=status,
        headers={"content-type": content_type},
        body=body.encode("utf-8"),
        encoding="utf-8",
        is_error=status >= 400,
        failure=FetchFailure.HTTP_STATUS if status >= 400 else None,
    )


class FakeFetcher:
    """Stands in for Fetcher: serves canned FetchResults and records calls."""

    def __init__(self, pages: Optional[Dict[str, FetchResult]] = None):
        self.pages = pages or {}
        self.calls = []

    def fetch(self, url: str) -> FetchResult:
        self.calls.append(url)
        if url in self.pages:
            return self.pages[url]
        return html_result(url, title=f"Title of {url}")

    def get_text(self, url: str, params: Optional[dict] = None) -> Optional[str]:
        self.calls.append(url)
        return None


@pytest.fixture
def settings():
    """
    Settings with explicit values so a developer's .env never leaks into tests.
    """
    return Settings(
        SLACK_BOT_TOKEN="xoxb-test",
        SLACK_APP_TOKEN="xapp-test",
        URL_CHANNEL_IDS="",
        URL_SHORTENER="passthrough",
        URL_DETECT_SCHEMELESS=False,
        URL_BASE_FORMAT="%message%",
        URL_MESSAGE_FORMAT="[ %link% ] %title%",
        URL_MERGE_LINKS=True,
        URL_TITLE_LENGTH=40,
        URL_SHOW_ERRORS=True,
        URL_EXPIRE_SECONDS=1800,
        URL_CACHE_LIMIT=10,
        URL_SSL_FALLBACK=True,
        URL_TLD_PATH=None,
    )


@pytest.fixture
def fake_fetcher():
    return FakeFetcher()


class FakeClock:
    """Controllable time source: tests move .now forward by hand."""

    def __init__(self, now: float = 1_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def pipeline(settings, fake_fetcher, clock):
    from link_announcer.pipeline.run import LinkPipeline
    return LinkPipeline(settings, fetcher=fake_fetcher, clock=clock)


@pytest.fixture
def mock_httpx():
    """
    Mocks httpx.Client for fetch tests.
    """
    with patch("httpx.Client") as mock_client:
        yield mock_client


@pytest.fixture
def html_page():
    """Factory for canned FetchResults: html_page(url, title=..., status=...)."""
    return html_result

"""Shared pytest fixtures for unit and route tests.

Retrieval tiers are replaced with AsyncMocks so no test touches the network
or starts a browser. Route tests override ``get_container`` with a container
built from those mocks.

Usage in new test files:
    def test_something(client, mock_fetcher):
        mock_fetcher.fetch.return_value = FetchResult(html=..., status_code=200)
        ...
"""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from adaptive_scraper.core.config import Settings
from adaptive_scraper.core.container import ServiceContainer, get_container
from adaptive_scraper.main import app
from adaptive_scraper.services.batch import BatchOrchestrator
from adaptive_scraper.services.headers import HeaderStore
from adaptive_scraper.services.rules.engine import RuleEngine
from adaptive_scraper.services.scraper.base import ContentRecord
from adaptive_scraper.services.scraper.content_extractor import ContentExtractor
from adaptive_scraper.services.scraper.pipeline import ScrapePipeline
from adaptive_scraper.services.tool_service import ToolService


ARTICLE_HTML = """
<!DOCTYPE html>
<html>
<head>
<title>Test Article</title>
<meta name="description" content="A short description">
<meta property="og:title" content="OG Title">
</head>
<body>
<nav><a href="/home">Home</a></nav>
<main>
<h1>Test Article</h1>
<p>This is a substantial test article with enough content to pass the minimum
length requirement. It contains multiple sentences so the main container wins.</p>
<p>Second paragraph adds more content. <a href="/next">Next page</a></p>
<img src="/images/photo.png" alt="Photo">
</main>
<footer>Copyright footer text</footer>
</body>
</html>
"""


@pytest.fixture()
def test_settings() -> Settings:
    """Settings with no settle delay and no browser auto-install."""
    return Settings(  # type: ignore[call-arg]
        _env_file=None,
        render_settle_delay_ms=0,
        browser_auto_install=False,
        browser_executable_path=None,
    )


@pytest.fixture()
def mock_fetcher() -> AsyncMock:
    """Static tier stand-in; set ``fetch.return_value`` or ``side_effect``."""
    return AsyncMock()


@pytest.fixture()
def mock_renderer() -> AsyncMock:
    """Browser tier stand-in; set ``render.return_value`` or ``side_effect``."""
    return AsyncMock()


@pytest.fixture()
def pipeline(mock_fetcher, mock_renderer, test_settings) -> ScrapePipeline:
    return ScrapePipeline(
        fetcher=mock_fetcher,
        renderer=mock_renderer,
        extractor=ContentExtractor(test_settings),
        config=test_settings,
    )


@pytest.fixture()
def container(pipeline, test_settings) -> ServiceContainer:
    """Service container wired to the mocked retrieval tiers."""
    rule_engine = RuleEngine()
    header_store = HeaderStore()
    batch = BatchOrchestrator(pipeline, rule_engine, header_store)
    return ServiceContainer(
        settings=test_settings,
        pipeline=pipeline,
        rule_engine=rule_engine,
        header_store=header_store,
        batch=batch,
        tools=ToolService(pipeline, rule_engine, header_store, batch),
    )


@pytest.fixture()
def client(container) -> TestClient:
    """TestClient with the service container overridden."""
    app.dependency_overrides[get_container] = lambda: container
    with TestClient(app) as tc:
        yield tc
    app.dependency_overrides.clear()


@pytest.fixture()
def make_record():
    """Return a helper that builds a ContentRecord with sensible defaults."""

    def _make(
        html: str = ARTICLE_HTML,
        url: str = "https://example.com/article",
        **overrides,
    ) -> ContentRecord:
        fields = {
            "source_url": url,
            "title": "Test Article",
            "body_text": "Body text",
            "raw_html": html,
        }
        fields.update(overrides)
        return ContentRecord(**fields)

    return _make

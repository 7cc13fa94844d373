"""Adaptive document retrieval and content extraction.

This package provides a two-tier retrieval pipeline:
1. httpx (static) - Single GET request, no script execution
2. Playwright (rendering) - Shared headless Chromium session for SPAs,
   inline data: documents and pages that ask for JavaScript

The ScrapePipeline picks the tier per request and hands the markup to the
ContentExtractor, which builds a ContentRecord.

Usage:
    from adaptive_scraper.services.scraper import (
        BrowserRenderer, ScrapePipeline, StaticFetcher,
    )

    pipeline = ScrapePipeline(StaticFetcher(), BrowserRenderer())
    try:
        record = await pipeline.scrape("https://example.com")
    finally:
        await pipeline.close()
"""

from adaptive_scraper.services.scraper.base import (
    ContentRecord,
    FetchResult,
    RenderResult,
    ScrapeOptions,
)
from adaptive_scraper.services.scraper.content_extractor import ContentExtractor
from adaptive_scraper.services.scraper.exceptions import (
    FetchError,
    RenderError,
    RetrievalError,
    ScraperError,
)
from adaptive_scraper.services.scraper.fetcher import StaticFetcher
from adaptive_scraper.services.scraper.pipeline import (
    ScrapePipeline,
    looks_js_dependent,
)
from adaptive_scraper.services.scraper.renderer import BrowserLocator, BrowserRenderer
from adaptive_scraper.services.scraper.text import clean_text

__all__ = [
    # Records and options
    "ContentRecord",
    "FetchResult",
    "RenderResult",
    "ScrapeOptions",
    # Components
    "StaticFetcher",
    "BrowserLocator",
    "BrowserRenderer",
    "ContentExtractor",
    "ScrapePipeline",
    "looks_js_dependent",
    "clean_text",
    # Exceptions
    "ScraperError",
    "FetchError",
    "RenderError",
    "RetrievalError",
]

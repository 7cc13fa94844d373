"""Retrieval pipeline choosing between static fetch and browser rendering."""

from __future__ import annotations

import dataclasses
import logging
from typing import Iterable

from adaptive_scraper.core.config import Settings, settings
from adaptive_scraper.services.scraper.base import (
    ContentRecord,
    DocumentFetcher,
    DocumentRenderer,
    ScrapeOptions,
)
from adaptive_scraper.services.scraper.content_extractor import ContentExtractor
from adaptive_scraper.services.scraper.exceptions import (
    FetchError,
    RenderError,
    RetrievalError,
)

logger = logging.getLogger(__name__)

# Set on a static record returned after its escalated render failed
RENDER_ERROR_KEY = "renderError"


def is_inline_document(url: str) -> bool:
    """True for data: URIs, which have no network origin to fetch from."""
    return url.strip().lower().startswith("data:")


def looks_js_dependent(html: str, phrases: Iterable[str]) -> bool:
    """Return True if ``html`` contains a no-script fallback phrase.

    Matching is case-insensitive substring search over the raw markup.
    """
    haystack = html.lower()
    return any(phrase.lower() in haystack for phrase in phrases if phrase)


class ScrapePipeline:
    """Retrieve a document and extract a ContentRecord from it.

    Decision order:
    1. Inline (data:) documents and forced renders go straight to the browser.
    2. Otherwise a static fetch is tried first.
    3. A static page that asks for JavaScript is re-fetched in the browser.
    4. A failed static fetch falls back to the browser.

    The renderer owns the shared browser session and is injected, so its
    lifetime belongs to whoever built the pipeline.
    """

    def __init__(
        self,
        fetcher: DocumentFetcher,
        renderer: DocumentRenderer,
        extractor: ContentExtractor | None = None,
        config: Settings | None = None,
    ) -> None:
        self.config = config or settings
        self.fetcher = fetcher
        self.renderer = renderer
        self.extractor = extractor or ContentExtractor(self.config)

    async def scrape(self, url: str, options: ScrapeOptions | None = None) -> ContentRecord:
        """Retrieve ``url`` with the cheapest tier that yields a usable page.

        Args:
            url: Address or data: URI to retrieve
            options: Per-request options (headers, timeout, forced rendering)

        Returns:
            ContentRecord extracted from the chosen tier's markup

        Raises:
            RetrievalError: If no attempted tier produced a document
        """
        options = options or ScrapeOptions()

        if is_inline_document(url):
            logger.debug("Inline document, rendering directly")
            return await self._render_only(url, options)

        if options.force_render:
            logger.debug("Rendering forced for %s", url)
            return await self._render_only(url, options)

        try:
            fetched = await self.fetcher.fetch(
                url,
                headers=options.headers,
                timeout_ms=options.timeout_ms,
            )
        except FetchError as fetch_error:
            logger.info("Static fetch failed, trying browser render: %s", fetch_error)
            try:
                return await self._render(url, options)
            except RenderError as render_error:
                raise RetrievalError(
                    url,
                    fetch_error=str(fetch_error),
                    render_error=str(render_error),
                ) from render_error

        static_record = self.extractor.extract(fetched.html, url)
        if not looks_js_dependent(fetched.html, self.config.js_required_phrases):
            logger.debug("Static fetch sufficient for %s", url)
            return static_record

        logger.info("Page at %s requires JavaScript, escalating to browser render", url)
        try:
            return await self._render(url, options)
        except RenderError as e:
            logger.warning(
                "Escalated render failed for %s, keeping static result: %s", url, e
            )
            return dataclasses.replace(
                static_record,
                metadata={**static_record.metadata, RENDER_ERROR_KEY: str(e)},
            )

    async def _render_only(self, url: str, options: ScrapeOptions) -> ContentRecord:
        try:
            return await self._render(url, options)
        except RenderError as e:
            raise RetrievalError(url, render_error=str(e)) from e

    async def _render(self, url: str, options: ScrapeOptions) -> ContentRecord:
        rendered = await self.renderer.render(
            url,
            headers=options.headers,
            timeout_ms=options.timeout_ms,
            wait_selector=options.wait_selector,
            screenshot=options.screenshot,
        )
        if rendered.screenshot_path:
            logger.info("Saved screenshot of %s to %s", url, rendered.screenshot_path)
        return self.extractor.extract(rendered.html, url)

    async def close(self) -> None:
        """Release the renderer's browser session."""
        await self.renderer.shutdown()

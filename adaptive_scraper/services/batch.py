"""Concurrent batch retrieval with per-item failure isolation."""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from adaptive_scraper.services.export import export_content
from adaptive_scraper.services.scraper.base import ContentRecord, ScrapeOptions

if TYPE_CHECKING:
    from adaptive_scraper.services.headers import HeaderStore
    from adaptive_scraper.services.rules.engine import RuleEngine
    from adaptive_scraper.services.scraper.pipeline import ScrapePipeline

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BatchOptions:
    """Options applied to every address in a batch."""

    force_render: bool = False
    rule_set: str | None = None
    output_format: str | None = None  # None returns the ContentRecord itself
    timeout_ms: int | None = None


@dataclass(frozen=True)
class BatchItemResult:
    """Settled outcome for one address."""

    url: str
    success: bool
    content: str | ContentRecord | None = None
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready mapping ({url, success, content|error})."""
        if not self.success:
            return {"url": self.url, "success": False, "error": self.error}
        content = self.content
        if isinstance(content, ContentRecord):
            content = content.to_dict()
        return {"url": self.url, "success": True, "content": content}


class BatchOrchestrator:
    """Run the retrieval pipeline over many addresses at once.

    Every address is its own unit of work: a failure anywhere in that unit
    (retrieval, rule application, export) becomes a failed entry instead of
    propagating, and the batch returns only after every unit has settled.
    """

    def __init__(
        self,
        pipeline: ScrapePipeline,
        rule_engine: RuleEngine,
        header_store: HeaderStore | None = None,
    ) -> None:
        self.pipeline = pipeline
        self.rule_engine = rule_engine
        self.header_store = header_store

    async def run_batch(
        self,
        urls: list[str],
        options: BatchOptions | None = None,
    ) -> list[BatchItemResult]:
        """Process ``urls`` concurrently.

        Returns:
            One BatchItemResult per input address, in input order
        """
        options = options or BatchOptions()
        logger.info("Starting batch of %d URL(s)", len(urls))
        start = time.perf_counter()

        results = await asyncio.gather(*(self._settle(url, options) for url in urls))

        failed = sum(1 for result in results if not result.success)
        logger.info(
            "Batch finished: %d succeeded, %d failed (%.1fms)",
            len(results) - failed,
            failed,
            (time.perf_counter() - start) * 1000,
        )
        return list(results)

    async def _settle(self, url: str, options: BatchOptions) -> BatchItemResult:
        """Run one unit of work, converting any failure into a result."""
        try:
            content = await self._process(url, options)
        except Exception as e:
            logger.warning("Batch item failed for %s: %s", url, e)
            return BatchItemResult(url=url, success=False, error=str(e) or type(e).__name__)
        return BatchItemResult(url=url, success=True, content=content)

    async def _process(self, url: str, options: BatchOptions) -> str | ContentRecord:
        headers = self.header_store.headers_for_url(url) if self.header_store else {}
        record = await self.pipeline.scrape(
            url,
            ScrapeOptions(
                force_render=options.force_render,
                headers=headers,
                timeout_ms=options.timeout_ms,
            ),
        )
        if options.rule_set:
            record = self.rule_engine.apply(options.rule_set, record)
        if options.output_format:
            return export_content(record, options.output_format)
        return record

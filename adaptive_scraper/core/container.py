"""Service wiring, shared registries, and the FastAPI dependency."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from adaptive_scraper.core.config import Settings
from adaptive_scraper.services.batch import BatchOrchestrator
from adaptive_scraper.services.headers import HeaderStore
from adaptive_scraper.services.rules.engine import RuleEngine
from adaptive_scraper.services.scraper.content_extractor import ContentExtractor
from adaptive_scraper.services.scraper.fetcher import StaticFetcher
from adaptive_scraper.services.scraper.pipeline import ScrapePipeline
from adaptive_scraper.services.scraper.renderer import BrowserRenderer
from adaptive_scraper.services.tool_service import ToolService

logger = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    """One process-wide set of services.

    The rule and header registries live here so every transport (REST, MCP)
    sees the same state. The renderer owns the only browser session.
    """

    settings: Settings
    pipeline: ScrapePipeline
    rule_engine: RuleEngine
    header_store: HeaderStore
    batch: BatchOrchestrator
    tools: ToolService

    @classmethod
    def build(cls, config: Settings | None = None) -> ServiceContainer:
        if config is None:
            from adaptive_scraper.core.config import settings as config

        pipeline = ScrapePipeline(
            fetcher=StaticFetcher(config),
            renderer=BrowserRenderer(config),
            extractor=ContentExtractor(config),
            config=config,
        )
        rule_engine = RuleEngine(load_defaults=config.load_default_rule_sets)
        header_store = HeaderStore(load_defaults=config.load_default_domain_headers)
        batch = BatchOrchestrator(pipeline, rule_engine, header_store)
        tools = ToolService(pipeline, rule_engine, header_store, batch)
        logger.debug(
            "Service container built (%d rule sets, %d header domains)",
            len(rule_engine.list_names()),
            len(header_store.list_domains()),
        )
        return cls(
            settings=config,
            pipeline=pipeline,
            rule_engine=rule_engine,
            header_store=header_store,
            batch=batch,
            tools=tools,
        )

    async def aclose(self) -> None:
        """Release the browser session, if one was started."""
        await self.pipeline.close()


# Lazy initialization so importing the app does not build services
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """FastAPI dependency returning the global service container."""
    global _container
    if _container is None:
        _container = ServiceContainer.build()
    return _container


async def shutdown_container() -> None:
    """Close and forget the global container."""
    global _container
    if _container is not None:
        await _container.aclose()
        _container = None


def reset_container() -> None:
    """Forget the global container without closing it. Used by tests."""
    global _container
    _container = None

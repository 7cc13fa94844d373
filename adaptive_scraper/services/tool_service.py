"""Tool front end: validates tool requests and routes them to the services.

The same dispatcher backs the HTTP tool endpoints and the MCP stdio server.
Every failure is turned into an error response; nothing is raised to the
transport.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any, Awaitable, Callable

from pydantic import BaseModel, ValidationError

from adaptive_scraper.exceptions import InvalidToolArgumentsError, UnknownToolError
from adaptive_scraper.schemas.tools import (
    BatchScrapeArguments,
    CreateRuleSetArguments,
    ScrapeUrlArguments,
    SetDomainHeadersArguments,
    ToolDefinition,
    ToolResponse,
)
from adaptive_scraper.services.batch import BatchOptions
from adaptive_scraper.services.export import export_content
from adaptive_scraper.services.scraper.base import ScrapeOptions

if TYPE_CHECKING:
    from adaptive_scraper.services.batch import BatchOrchestrator
    from adaptive_scraper.services.headers import HeaderStore
    from adaptive_scraper.services.rules.engine import RuleEngine
    from adaptive_scraper.services.scraper.pipeline import ScrapePipeline

logger = logging.getLogger(__name__)

TOOL_DESCRIPTIONS: dict[str, tuple[str, type[BaseModel]]] = {
    "scrape_url": (
        "Scrape a single URL. Static pages are fetched directly; pages that need "
        "JavaScript (SPAs) are rendered in a headless browser automatically.",
        ScrapeUrlArguments,
    ),
    "create_rule_set": (
        "Create or replace a named set of CSS extraction rules for later scrapes.",
        CreateRuleSetArguments,
    ),
    "set_domain_headers": (
        "Set custom request headers (e.g. Cookie, Authorization) for a domain.",
        SetDomainHeadersArguments,
    ),
    "batch_scrape": (
        "Scrape many URLs concurrently. Each URL succeeds or fails on its own.",
        BatchScrapeArguments,
    ),
}


def _validation_detail(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        location = ".".join(str(part) for part in item.get("loc", ())) or "arguments"
        parts.append(f"{location}: {item.get('msg', 'invalid value')}")
    return "; ".join(parts)


class ToolService:
    """Dispatch tool requests by name."""

    def __init__(
        self,
        pipeline: ScrapePipeline,
        rule_engine: RuleEngine,
        header_store: HeaderStore,
        batch: BatchOrchestrator,
    ) -> None:
        self.pipeline = pipeline
        self.rule_engine = rule_engine
        self.header_store = header_store
        self.batch = batch
        self._handlers: dict[str, Callable[[dict[str, Any]], Awaitable[str]]] = {
            "scrape_url": self._scrape_url,
            "create_rule_set": self._create_rule_set,
            "set_domain_headers": self._set_domain_headers,
            "batch_scrape": self._batch_scrape,
        }

    def list_tools(self) -> list[ToolDefinition]:
        """Describe every tool with its JSON input schema."""
        return [
            ToolDefinition(
                name=name,
                description=description,
                input_schema=model.model_json_schema(by_alias=True),
            )
            for name, (description, model) in TOOL_DESCRIPTIONS.items()
        ]

    async def handle_request(
        self, name: str, arguments: dict[str, Any] | None = None
    ) -> ToolResponse:
        """Run tool ``name`` and wrap the outcome in a ToolResponse."""
        try:
            handler = self._handlers.get(name)
            if handler is None:
                raise UnknownToolError(name)
            text = await handler(arguments or {})
        except Exception as e:
            logger.warning("Tool %s failed: %s", name, e)
            return ToolResponse.text(f"Error: {e}", is_error=True)
        return ToolResponse.text(text)

    def _parse(self, tool: str, model: type[BaseModel], arguments: dict[str, Any]):
        if not isinstance(arguments, dict):
            raise InvalidToolArgumentsError(tool, "arguments must be an object")
        try:
            return model.model_validate(arguments)
        except ValidationError as e:
            raise InvalidToolArgumentsError(tool, _validation_detail(e)) from e

    async def _scrape_url(self, arguments: dict[str, Any]) -> str:
        args: ScrapeUrlArguments = self._parse("scrape_url", ScrapeUrlArguments, arguments)

        headers = self.header_store.headers_for_url(args.url)
        if args.custom_headers:
            # Per-request headers are remembered for the host, like set_domain_headers
            headers = self.header_store.set_headers_for_url(args.url, args.custom_headers)

        record = await self.pipeline.scrape(
            args.url,
            ScrapeOptions(
                force_render=args.force_render,
                headers=headers,
                timeout_ms=args.timeout_ms,
                wait_selector=args.wait_selector,
                screenshot=args.screenshot,
            ),
        )
        if args.rule_set:
            record = self.rule_engine.apply(args.rule_set, record)
        return export_content(record, args.format)

    async def _create_rule_set(self, arguments: dict[str, Any]) -> str:
        args: CreateRuleSetArguments = self._parse(
            "create_rule_set", CreateRuleSetArguments, arguments
        )
        self.rule_engine.register(args.name, args.rules.model_dump(), args.description)
        return f'Rule set "{args.name}" created and ready to use.'

    async def _set_domain_headers(self, arguments: dict[str, Any]) -> str:
        args: SetDomainHeadersArguments = self._parse(
            "set_domain_headers", SetDomainHeadersArguments, arguments
        )
        self.header_store.set_headers(args.domain, args.headers)
        return f'Headers for domain "{args.domain}" have been set.'

    async def _batch_scrape(self, arguments: dict[str, Any]) -> str:
        args: BatchScrapeArguments = self._parse(
            "batch_scrape", BatchScrapeArguments, arguments
        )
        results = await self.batch.run_batch(
            args.urls,
            BatchOptions(
                force_render=args.force_render,
                rule_set=args.rule_set,
                output_format=args.format,
                timeout_ms=args.timeout_ms,
            ),
        )
        return json.dumps([r.to_dict() for r in results], indent=2, ensure_ascii=False)

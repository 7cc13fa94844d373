"""Pydantic v2 schemas for tool requests and responses."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from adaptive_scraper.core.config import settings


# -----------------------------------------------------------------------------
# Shared
# -----------------------------------------------------------------------------


class RuleSchema(BaseModel):
    """CSS selector rule used to re-derive content from stored HTML."""

    title: str | None = Field(default=None, description="Selector for the title")
    content: str | None = Field(
        default=None, description="Selector for the main content (all matches joined)"
    )
    links: str | None = Field(
        default=None, description="Selector for link elements (replaces all links)"
    )
    images: str | None = Field(
        default=None, description="Selector for image elements (replaces all images)"
    )
    exclude: list[str] = Field(
        default_factory=list, description="Selectors removed before extraction, in order"
    )
    custom: dict[str, str] = Field(
        default_factory=dict, description="Custom field name -> selector"
    )


# -----------------------------------------------------------------------------
# Tool argument schemas
# -----------------------------------------------------------------------------


class ScrapeUrlArguments(BaseModel):
    """Arguments for the scrape_url tool."""

    model_config = ConfigDict(populate_by_name=True)

    url: str = Field(..., min_length=1, description="URL (or data: URI) to scrape")
    format: str = Field(
        default_factory=lambda: settings.default_output_format,
        description="Output format: markdown, text, html or json",
    )
    force_render: bool = Field(
        default=False,
        alias="usePuppeteer",
        description="Render in a headless browser even if a static fetch would do",
    )
    rule_set: str | None = Field(
        default=None, alias="ruleSet", description="Rule set to apply after extraction"
    )
    custom_headers: dict[str, str] | None = Field(
        default=None,
        alias="customHeaders",
        description="Headers merged into the stored headers for this URL's domain",
    )
    wait_selector: str | None = Field(
        default=None,
        alias="waitForSelector",
        description="Selector the browser waits for before reading the page",
    )
    timeout_ms: int | None = Field(
        default=None, alias="timeout", gt=0, description="Per-tier timeout in milliseconds"
    )
    screenshot: bool = Field(default=False, description="Save a screenshot when rendering")


class CreateRuleSetArguments(BaseModel):
    """Arguments for the create_rule_set tool."""

    name: str = Field(..., min_length=1, description="Unique rule set name")
    rules: RuleSchema = Field(..., description="Extraction rules (CSS selectors)")
    description: str | None = Field(default=None, description="Optional description")


class SetDomainHeadersArguments(BaseModel):
    """Arguments for the set_domain_headers tool."""

    domain: str = Field(..., min_length=1, description='Domain such as "github.com"')
    headers: dict[str, str] = Field(..., description="Header name -> value")


class BatchScrapeArguments(BaseModel):
    """Arguments for the batch_scrape tool."""

    model_config = ConfigDict(populate_by_name=True)

    urls: list[str] = Field(..., min_length=1, description="URLs to scrape concurrently")
    format: str = Field(
        default_factory=lambda: settings.default_output_format,
        description="Output format: markdown, text, html or json",
    )
    force_render: bool = Field(default=False, alias="usePuppeteer")
    rule_set: str | None = Field(default=None, alias="ruleSet")
    timeout_ms: int | None = Field(default=None, alias="timeout", gt=0)

    @field_validator("urls")
    @classmethod
    def validate_urls_not_blank(cls, v: list[str]) -> list[str]:
        """Reject blank entries; they can never be fetched."""
        if any(not url.strip() for url in v):
            raise ValueError("URLs must not be blank")
        return v


# -----------------------------------------------------------------------------
# Response schemas
# -----------------------------------------------------------------------------


class ToolDefinition(BaseModel):
    """A tool advertised to clients."""

    name: str
    description: str
    input_schema: dict[str, Any]


class ToolListResponse(BaseModel):
    tools: list[ToolDefinition]


class ToolContent(BaseModel):
    """One content block of a tool response."""

    type: Literal["text"] = "text"
    text: str


class ToolResponse(BaseModel):
    """Uniform tool response; failures are reported, never raised."""

    content: list[ToolContent]
    is_error: bool = False

    @classmethod
    def text(cls, text: str, is_error: bool = False) -> ToolResponse:
        return cls(content=[ToolContent(text=text)], is_error=is_error)

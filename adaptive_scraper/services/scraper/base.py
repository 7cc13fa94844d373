"""Base types shared by the retrieval and extraction services."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Protocol


@dataclass(frozen=True)
class ScrapeOptions:
    """Per-request options for the retrieval pipeline."""

    force_render: bool = False  # Skip the static tier entirely
    headers: dict[str, str] = field(default_factory=dict)
    timeout_ms: int | None = None  # None means per-tier default from settings
    wait_selector: str | None = None  # Browser waits for this instead of settle delay
    screenshot: bool = False


@dataclass(frozen=True)
class FetchResult:
    """Outcome of a lightweight HTTP fetch."""

    html: str
    status_code: int
    content_type: str = ""


@dataclass(frozen=True)
class RenderResult:
    """Outcome of a browser render."""

    html: str
    screenshot_path: str | None = None


@dataclass(frozen=True)
class ContentRecord:
    """Canonical structured content extracted from one document.

    Records are never mutated once built; the rule engine derives a new
    record with ``dataclasses.replace``.
    """

    source_url: str  # Origin URL or inline data: identifier
    title: str
    body_text: str  # Normalized primary text (possibly empty)
    raw_html: str  # Markup actually parsed, kept for rule re-parsing
    links: list[str] = field(default_factory=list)
    images: list[str] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    retrieved_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready mapping of the record."""
        return {
            "url": self.source_url,
            "title": self.title,
            "content": self.body_text,
            "html": self.raw_html,
            "links": list(self.links),
            "images": list(self.images),
            "metadata": dict(self.metadata),
            "timestamp": self.retrieved_at.isoformat(),
        }


class DocumentFetcher(Protocol):
    """Protocol for the lightweight retrieval tier."""

    async def fetch(
        self,
        url: str,
        headers: dict[str, str] | None = None,
        timeout_ms: int | None = None,
    ) -> FetchResult:
        """Fetch ``url`` without executing scripts.

        Raises:
            FetchError: On timeout, transport failure or non-2xx status
        """
        ...


class DocumentRenderer(Protocol):
    """Protocol for the browser rendering tier."""

    async def render(
        self,
        url: str,
        headers: dict[str, str] | None = None,
        timeout_ms: int | None = None,
        wait_selector: str | None = None,
        screenshot: bool = False,
    ) -> RenderResult:
        """Render ``url`` in a browser and return the final markup.

        Raises:
            RenderError: If the session cannot start or navigation/wait fails
        """
        ...

    async def shutdown(self) -> None:
        """Release the shared browser session."""
        ...

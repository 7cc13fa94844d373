"""Abstract base class for content exporters.

Defines the interface that all exporter implementations must follow.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from adaptive_scraper.services.scraper.content_extractor import parse_html, remove_elements

if TYPE_CHECKING:
    from adaptive_scraper.services.scraper.base import ContentRecord

# Page chrome dropped before the HTML is re-rendered for output
CHROME_SELECTOR = "script, style, nav, header, footer, aside"


def main_content_html(html: str) -> str:
    """Return the document's body markup without scripts, styles and page chrome."""
    soup = parse_html(html)
    remove_elements(soup, CHROME_SELECTOR)
    if soup.body is not None:
        return soup.body.decode_contents()
    return soup.decode_contents()


def format_timestamp(record: ContentRecord) -> str:
    """Human-readable retrieval time."""
    return record.retrieved_at.strftime("%Y-%m-%d %H:%M:%S %Z").strip()


class ContentExporter(ABC):
    """Abstract base class for content exporters."""

    @property
    @abstractmethod
    def format_name(self) -> str:
        """Format tag accepted by ``get_exporter``."""
        pass

    @property
    @abstractmethod
    def content_type(self) -> str:
        """MIME type for the export format."""
        pass

    @abstractmethod
    def export(self, record: ContentRecord) -> str:
        """Render a content record as a string.

        Args:
            record: The record to render

        Returns:
            The formatted document
        """
        pass

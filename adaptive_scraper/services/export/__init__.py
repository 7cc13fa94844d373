"""Content export service module.

Provides exporters that turn a ContentRecord into markdown, text, html or json.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from adaptive_scraper.exceptions import UnsupportedFormatError
from adaptive_scraper.services.export.base import ContentExporter
from adaptive_scraper.services.export.html_exporter import HtmlExporter
from adaptive_scraper.services.export.json_exporter import JsonExporter
from adaptive_scraper.services.export.markdown import MarkdownExporter
from adaptive_scraper.services.export.text import TextExporter

if TYPE_CHECKING:
    from adaptive_scraper.services.scraper.base import ContentRecord


_EXPORTERS: dict[str, type[ContentExporter]] = {
    "markdown": MarkdownExporter,
    "text": TextExporter,
    "html": HtmlExporter,
    "json": JsonExporter,
}

SUPPORTED_FORMATS = tuple(_EXPORTERS)


def get_exporter(format: str) -> ContentExporter:
    """Factory function to get the appropriate exporter for a format.

    Args:
        format: The export format (markdown, text, html or json)

    Returns:
        An instance of the appropriate ContentExporter

    Raises:
        UnsupportedFormatError: If format is not supported
    """
    exporter_class = _EXPORTERS.get(str(format).lower())
    if exporter_class is None:
        raise UnsupportedFormatError(str(format))
    return exporter_class()


def export_content(record: ContentRecord, format: str) -> str:
    """Render ``record`` in ``format``."""
    return get_exporter(format).export(record)


__all__ = [
    "ContentExporter",
    "HtmlExporter",
    "JsonExporter",
    "MarkdownExporter",
    "SUPPORTED_FORMATS",
    "TextExporter",
    "export_content",
    "get_exporter",
]

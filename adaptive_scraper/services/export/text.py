"""Plain-text exporter for content records."""

from __future__ import annotations

from typing import TYPE_CHECKING

from adaptive_scraper.services.export.base import ContentExporter, format_timestamp

if TYPE_CHECKING:
    from adaptive_scraper.services.scraper.base import ContentRecord


class TextExporter(ContentExporter):
    """Export the title, source and body text with no markup."""

    @property
    def format_name(self) -> str:
        return "text"

    @property
    def content_type(self) -> str:
        return "text/plain"

    def export(self, record: ContentRecord) -> str:
        header = "\n".join(
            [
                f"Title: {record.title}",
                f"Source: {record.source_url}",
                f"Retrieved: {format_timestamp(record)}",
                "=" * 50,
            ]
        )
        return f"{header}\n\n{record.body_text}"

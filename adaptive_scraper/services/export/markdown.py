"""Markdown exporter for content records.

Converts the cleaned page HTML with markdownify and appends links, images
and short metadata values.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from markdownify import markdownify as md

from adaptive_scraper.services.export.base import (
    ContentExporter,
    format_timestamp,
    main_content_html,
)

if TYPE_CHECKING:
    from adaptive_scraper.services.scraper.base import ContentRecord

logger = logging.getLogger(__name__)

MAX_LINKS = 20
MAX_IMAGES = 10
MAX_METADATA_VALUE_LENGTH = 200


class MarkdownExporter(ContentExporter):
    """Export a content record to GitHub-flavored Markdown."""

    @property
    def format_name(self) -> str:
        return "markdown"

    @property
    def content_type(self) -> str:
        """MIME type for Markdown."""
        return "text/markdown"

    def export(self, record: ContentRecord) -> str:
        """Generate the Markdown document.

        The content section is converted from the page HTML; when conversion
        fails or yields nothing the normalized body text is used instead.
        """
        lines: list[str] = [
            f"# {record.title}",
            "",
            f"**Source:** {record.source_url}",
            f"**Retrieved:** {format_timestamp(record)}",
            "",
            "## Content",
            "",
            self._content_section(record),
        ]

        if record.links:
            lines.extend(["", "## Links", ""])
            lines.extend(f"- [{link}]({link})" for link in record.links[:MAX_LINKS])
            if len(record.links) > MAX_LINKS:
                lines.extend(["", f"*{len(record.links) - MAX_LINKS} more links...*"])

        if record.images:
            lines.extend(["", "## Images", ""])
            for image in record.images[:MAX_IMAGES]:
                lines.extend([f"![image]({image})", ""])
            if len(record.images) > MAX_IMAGES:
                lines.append(f"*{len(record.images) - MAX_IMAGES} more images...*")

        metadata_lines = [
            f"**{key}:** {value}"
            for key, value in record.metadata.items()
            if isinstance(value, str) and len(value) < MAX_METADATA_VALUE_LENGTH
        ]
        if metadata_lines:
            lines.extend(["", "## Metadata", ""])
            for line in metadata_lines:
                lines.extend([line, ""])

        return "\n".join(lines).rstrip() + "\n"

    def _content_section(self, record: ContentRecord) -> str:
        try:
            converted = md(
                main_content_html(record.raw_html),
                heading_style="ATX",  # Use # style headings
                bullets="-",  # Use - for unordered lists
                code_language="",
            ).strip()
        except Exception as e:
            logger.warning("Markdown conversion failed for %s: %s", record.source_url, e)
            converted = ""
        return converted or record.body_text

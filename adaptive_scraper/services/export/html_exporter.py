"""HTML exporter producing a standalone, lightly styled page."""

from __future__ import annotations

from html import escape
from typing import TYPE_CHECKING

from adaptive_scraper.services.export.base import (
    ContentExporter,
    format_timestamp,
    main_content_html,
)

if TYPE_CHECKING:
    from adaptive_scraper.services.scraper.base import ContentRecord

_PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{title}</title>
    <style>
        body {{
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
            max-width: 800px;
            margin: 0 auto;
            padding: 20px;
            line-height: 1.6;
        }}
        .header {{ border-bottom: 2px solid #eee; padding-bottom: 20px; margin-bottom: 30px; }}
        .meta {{ color: #666; font-size: 14px; }}
        .content {{ margin-top: 20px; }}
    </style>
</head>
<body>
    <div class="header">
        <h1>{title}</h1>
        <div class="meta">
            <p><strong>Source:</strong> <a href="{url}" target="_blank">{url}</a></p>
            <p><strong>Retrieved:</strong> {retrieved}</p>
        </div>
    </div>
    <div class="content">
{content}
    </div>
</body>
</html>
"""


class HtmlExporter(ContentExporter):
    """Export the cleaned page body wrapped in a readable HTML document."""

    @property
    def format_name(self) -> str:
        return "html"

    @property
    def content_type(self) -> str:
        return "text/html"

    def export(self, record: ContentRecord) -> str:
        return _PAGE_TEMPLATE.format(
            title=escape(record.title),
            url=escape(record.source_url, quote=True),
            retrieved=escape(format_timestamp(record)),
            content=main_content_html(record.raw_html),
        )

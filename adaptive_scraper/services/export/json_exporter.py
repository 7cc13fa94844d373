"""JSON exporter: the complete record, for programmatic consumers."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from adaptive_scraper.services.export.base import ContentExporter

if TYPE_CHECKING:
    from adaptive_scraper.services.scraper.base import ContentRecord


class JsonExporter(ContentExporter):
    @property
    def format_name(self) -> str:
        return "json"

    @property
    def content_type(self) -> str:
        return "application/json"

    def export(self, record: ContentRecord) -> str:
        return json.dumps(record.to_dict(), indent=2, ensure_ascii=False)

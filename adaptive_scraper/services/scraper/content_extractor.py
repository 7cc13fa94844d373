"""Heuristic content extraction from raw HTML."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Iterable
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup

from adaptive_scraper.core.config import Settings, settings
from adaptive_scraper.services.scraper.base import ContentRecord
from adaptive_scraper.services.scraper.text import clean_text

if TYPE_CHECKING:
    from bs4.element import Tag

logger = logging.getLogger(__name__)

# Most specific container first; body is the least specific candidate
CONTENT_SELECTORS = (
    "main",
    "article",
    ".content",
    ".post-content",
    ".entry-content",
    "#content",
    ".main-content",
    "body",
)

# Removed from a candidate container before reading its text
NOISE_SELECTOR = "script, style, nav, header, footer, aside, .actions, .buttons"

# Removed from the whole document in the last-resort fallback
FALLBACK_NOISE_SELECTOR = "script, style, nav, header, footer, aside"


def parse_html(html: str) -> BeautifulSoup:
    """Parse markup into a traversable tree."""
    return BeautifulSoup(html or "", "lxml")


def resolve_url(reference: str | None, base_url: str) -> str | None:
    """Resolve ``reference`` against ``base_url`` into an absolute address.

    Returns None for empty references and for anything that does not
    resolve to an absolute, parseable URL.
    """
    if not reference or reference.isspace():
        return None
    try:
        absolute = urljoin(base_url, reference.strip())
        parsed = urlparse(absolute)
    except ValueError:
        return None
    if not parsed.scheme:
        return None
    if parsed.scheme in ("http", "https") and not parsed.netloc:
        return None
    return absolute


def resolve_urls(references: Iterable[str | None], base_url: str) -> list[str]:
    """Resolve references, dropping failures and exact duplicates (order kept)."""
    resolved = (resolve_url(ref, base_url) for ref in references)
    return list(dict.fromkeys(url for url in resolved if url))


def remove_elements(root: BeautifulSoup | Tag, selector: str) -> None:
    """Decompose every element under ``root`` matching ``selector``."""
    for element in root.select(selector):
        # Nested matches are already gone once their ancestor is decomposed
        if not element.decomposed:
            element.decompose()


def attribute_value(element: Tag, name: str) -> str | None:
    """Return an attribute as a string (bs4 may hand back a list)."""
    value = element.get(name)
    if isinstance(value, list):
        return value[0] if value else None
    return value


class ContentExtractor:
    """Derive a ContentRecord from markup.

    Extraction never raises: missing structure yields a placeholder title or
    an empty body rather than an error.
    """

    def __init__(self, config: Settings | None = None) -> None:
        self.config = config or settings

    def extract(self, html: str, url: str) -> ContentRecord:
        """Extract title, text, links, images and metadata from ``html``.

        Args:
            html: Raw or rendered markup
            url: Source address, used to resolve relative references

        Returns:
            A new ContentRecord for the document
        """
        try:
            soup = parse_html(html)
            # Links, images and metadata are read before containers are stripped
            title = self._extract_title(soup)
            links = resolve_urls(
                (attribute_value(a, "href") for a in soup.select("a[href]")), url
            )
            images = resolve_urls(
                (attribute_value(img, "src") for img in soup.select("img[src]")), url
            )
            metadata = self._extract_metadata(soup)
            body_text = clean_text(self._extract_body(soup))
        except Exception as e:
            logger.warning("Extraction degraded for %s: %s", url, e)
            return ContentRecord(
                source_url=url,
                title=self.config.default_title,
                body_text="",
                raw_html=html or "",
            )

        logger.debug(
            "Extracted %d chars, %d links, %d images from %s",
            len(body_text),
            len(links),
            len(images),
            url,
        )
        return ContentRecord(
            source_url=url,
            title=title,
            body_text=body_text,
            raw_html=html or "",
            links=links,
            images=images,
            metadata=metadata,
        )

    def _extract_title(self, soup: BeautifulSoup) -> str:
        """Use <title>, then the first <h1>, then the placeholder."""
        for tag_name in ("title", "h1"):
            tag = soup.find(tag_name)
            if tag is not None:
                text = tag.get_text().strip()
                if text:
                    return text
        return self.config.default_title

    def _extract_body(self, soup: BeautifulSoup) -> str:
        """Return text of the first content container long enough to trust."""
        content = ""
        for selector in CONTENT_SELECTORS:
            elements = soup.select(selector)
            if not elements:
                continue
            for element in elements:
                if not element.decomposed:
                    remove_elements(element, NOISE_SELECTOR)
            content = " ".join(
                el.get_text(" ") for el in elements if not el.decomposed
            ).strip()
            if len(content) > self.config.min_content_length:
                return content

        if not content:
            remove_elements(soup, FALLBACK_NOISE_SELECTOR)
            root = soup.body or soup
            content = root.get_text(" ")
        return content

    def _extract_metadata(self, soup: BeautifulSoup) -> dict[str, Any]:
        """Collect <meta name|property=... content=...> pairs."""
        metadata: dict[str, Any] = {}
        for meta in soup.find_all("meta"):
            name = attribute_value(meta, "name") or attribute_value(meta, "property")
            content = attribute_value(meta, "content")
            if name and content:
                metadata[name] = content
        return metadata

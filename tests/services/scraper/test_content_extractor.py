"""Tests for heuristic content extraction."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from adaptive_scraper.core.config import Settings
from adaptive_scraper.services.scraper.content_extractor import (
    ContentExtractor,
    resolve_url,
    resolve_urls,
)


URL = "https://example.com/blog/post"

LONG_TEXT = (
    "This paragraph is long enough to be trusted as the primary content of the "
    "page because it clearly exceeds the minimum content length threshold."
)

ARTICLE_HTML = f"""
<!DOCTYPE html>
<html>
<head>
<title>  Example   Post </title>
<meta name="description" content="A post about things">
<meta property="og:type" content="article">
<meta charset="utf-8">
</head>
<body>
<header><a href="/">Logo</a></header>
<main>
<nav><a href="/blog">Blog</a></nav>
<h2>Heading</h2>
<p>{LONG_TEXT}</p>
<div class="actions"><button>Share</button></div>
<p>More text with a <a href="related">related post</a>.</p>
<img src="/img/a.png">
<img src="https://cdn.example.com/b.jpg">
<img src="/img/a.png">
<script>var tracking = true;</script>
</main>
<footer><a href="/about">About</a> Footer text</footer>
</body>
</html>
"""


@pytest.fixture()
def extractor() -> ContentExtractor:
    return ContentExtractor(Settings())


class TestTitleExtraction:
    """Test suite for title resolution."""

    def test_title_tag_used(self, extractor) -> None:
        record = extractor.extract(ARTICLE_HTML, URL)

        assert record.title == "Example   Post"

    def test_h1_fallback(self, extractor) -> None:
        html = "<html><body><h1>Only <em>Heading</em></h1></body></html>"

        record = extractor.extract(html, URL)

        assert record.title == "Only Heading"

    def test_empty_title_falls_through_to_h1(self, extractor) -> None:
        html = "<html><head><title>  </title></head><body><h1>Real</h1></body></html>"

        record = extractor.extract(html, URL)

        assert record.title == "Real"

    def test_placeholder_when_no_title(self) -> None:
        extractor = ContentExtractor(Settings(default_title="No Title"))

        record = extractor.extract("<html><body><p>text</p></body></html>", URL)

        assert record.title == "No Title"


class TestBodyExtraction:
    """Test suite for primary text selection."""

    def test_main_container_with_noise_removed(self, extractor) -> None:
        """Test that the main container wins and its noise is stripped."""
        record = extractor.extract(ARTICLE_HTML, URL)

        assert LONG_TEXT in record.body_text
        assert "Heading" in record.body_text
        assert "Blog" not in record.body_text
        assert "Share" not in record.body_text
        assert "tracking" not in record.body_text
        assert "Footer text" not in record.body_text
        assert "Logo" not in record.body_text

    def test_short_container_skipped_for_longer_one(self, extractor) -> None:
        """Test that a container under the length threshold is not trusted."""
        html = f"""
        <html><body>
        <main><p>Too short</p></main>
        <article><p>{LONG_TEXT}</p></article>
        </body></html>
        """

        record = extractor.extract(html, URL)

        assert record.body_text == LONG_TEXT

    def test_multiple_matches_joined(self, extractor) -> None:
        html = f"""
        <html><body>
        <article><p>First article.</p></article>
        <article><p>{LONG_TEXT}</p></article>
        </body></html>
        """

        record = extractor.extract(html, URL)

        assert record.body_text.startswith("First article.")
        assert record.body_text.endswith(LONG_TEXT)

    def test_short_page_keeps_body_text(self, extractor) -> None:
        """Test that a page with only short text still returns that text."""
        html = "<html><body><p>Short page</p></body></html>"

        record = extractor.extract(html, URL)

        assert record.body_text == "Short page"

    def test_whitespace_normalized(self, extractor) -> None:
        html = f"""
        <html><body><main>
        <p>Alpha     beta\t\tgamma</p>


        <p>{LONG_TEXT}</p>
        </main></body></html>
        """

        record = extractor.extract(html, URL)

        assert "Alpha beta gamma" in record.body_text
        assert "\n" not in record.body_text
        assert record.body_text == record.body_text.strip()

    def test_min_content_length_is_configurable(self) -> None:
        extractor = ContentExtractor(Settings(min_content_length=5))
        html = "<html><body><main>Main text</main><p>Outside</p></body></html>"

        record = extractor.extract(html, URL)

        assert record.body_text == "Main text"

    def test_empty_document(self, extractor) -> None:
        record = extractor.extract("", URL)

        assert record.title == "Untitled"
        assert record.body_text == ""
        assert record.links == []
        assert record.images == []

    def test_malformed_markup_does_not_raise(self, extractor) -> None:
        html = "<html><body><main><p>Unclosed <b>bold <i>italic</main></div></span>"

        record = extractor.extract(html, URL)

        assert "Unclosed" in record.body_text

    def test_failure_degrades_to_placeholder_record(self, extractor) -> None:
        """Test that an internal failure yields a degraded record, not an error."""
        with patch.object(extractor, "_extract_body", side_effect=RuntimeError("boom")):
            record = extractor.extract(ARTICLE_HTML, URL)

        assert record.title == "Untitled"
        assert record.body_text == ""
        assert record.raw_html == ARTICLE_HTML
        assert record.source_url == URL


class TestLinksImagesMetadata:
    """Test suite for links, images and metadata."""

    def test_links_resolved_in_document_order(self, extractor) -> None:
        """Test that all anchors, including page chrome, become absolute links."""
        record = extractor.extract(ARTICLE_HTML, URL)

        assert record.links == [
            "https://example.com/",
            "https://example.com/blog",
            "https://example.com/blog/related",
            "https://example.com/about",
        ]

    def test_images_resolved_and_deduplicated(self, extractor) -> None:
        record = extractor.extract(ARTICLE_HTML, URL)

        assert record.images == [
            "https://example.com/img/a.png",
            "https://cdn.example.com/b.jpg",
        ]

    def test_metadata_from_name_and_property(self, extractor) -> None:
        record = extractor.extract(ARTICLE_HTML, URL)

        assert record.metadata == {
            "description": "A post about things",
            "og:type": "article",
        }

    def test_raw_html_preserved(self, extractor) -> None:
        record = extractor.extract(ARTICLE_HTML, URL)

        assert record.raw_html == ARTICLE_HTML
        assert record.source_url == URL


class TestResolveUrl:
    """Test suite for reference resolution."""

    def test_relative_reference(self) -> None:
        assert resolve_url("../x.html", "https://a.com/b/c/") == "https://a.com/b/x.html"

    def test_absolute_reference_unchanged(self) -> None:
        assert resolve_url("https://b.com/y", "https://a.com/") == "https://b.com/y"

    def test_empty_reference(self) -> None:
        assert resolve_url("", "https://a.com/") is None
        assert resolve_url("   ", "https://a.com/") is None
        assert resolve_url(None, "https://a.com/") is None

    def test_relative_reference_without_absolute_base(self) -> None:
        """Test that relative references in inline documents are dropped."""
        assert resolve_url("/page", "data:text/html,<p>hi</p>") is None

    def test_unparseable_reference(self) -> None:
        assert resolve_url("http://[invalid", "https://a.com/") is None

    def test_resolve_urls_dedupes_keeping_order(self) -> None:
        refs = ["/b", "/a", "/b", "", None, "https://a.com/a"]

        assert resolve_urls(refs, "https://a.com/") == [
            "https://a.com/b",
            "https://a.com/a",
        ]

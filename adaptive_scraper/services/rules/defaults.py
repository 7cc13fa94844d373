"""Built-in rule sets registered when a RuleEngine starts."""

from __future__ import annotations

from adaptive_scraper.services.rules.models import ExtractionRule, RuleSet

DEFAULT_RULE_SETS: tuple[RuleSet, ...] = (
    RuleSet(
        name="blog",
        rules=ExtractionRule(
            title="h1, .post-title, .entry-title, .article-title",
            content="article, .post-content, .entry-content, .article-content, main",
            exclude=("nav", "header", "footer", ".sidebar", ".comments", ".related-posts"),
        ),
        description="Works for most blog post pages",
    ),
    RuleSet(
        name="news",
        rules=ExtractionRule(
            title="h1, .headline, .news-title",
            content=".article-body, .news-content, .story-body",
            exclude=("nav", "header", "footer", ".ad", ".advertisement", ".social-share"),
        ),
        description="News site articles",
    ),
    RuleSet(
        name="product",
        rules=ExtractionRule(
            title="h1, .product-title, .product-name",
            content=".product-description, .product-details",
            images=".product-images img, .gallery img",
            custom={
                "price": ".price, .product-price",
                "rating": ".rating, .stars",
                "availability": ".stock, .availability",
            },
        ),
        description="E-commerce product pages",
    ),
    RuleSet(
        name="documentation",
        rules=ExtractionRule(
            title="h1, .doc-title",
            content=".doc-content, .documentation, .content",
            links=".doc-nav a, .toc a",
            exclude=(".sidebar", ".nav", ".breadcrumb"),
        ),
        description="Technical documentation pages",
    ),
    RuleSet(
        name="forum",
        rules=ExtractionRule(
            title=".topic-title, .thread-title, h1",
            content=".post-content, .message-content",
            exclude=(".signature", ".user-info", ".post-meta"),
        ),
        description="Forum thread pages",
    ),
)

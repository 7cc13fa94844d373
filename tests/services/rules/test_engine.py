"""Tests for the rule engine registry and rule application."""

from __future__ import annotations

import pytest

from adaptive_scraper.services.rules import (
    DEFAULT_RULE_SETS,
    ExtractionRule,
    InvalidRuleError,
    RuleEngine,
    UnknownRuleSetError,
)
from adaptive_scraper.services.rules.engine import APPLIED_RULE_SET_KEY, CUSTOM_DATA_KEY


PRODUCT_HTML = """
<html>
<head><title>Shop</title></head>
<body>
<h1 class="promo">Sponsored</h1>
<h1>Real Title</h1>
<div class="body"><p>Para one</p></div>
<div class="body"><p>Para   two</p></div>
<div class="promo"><p class="body">Buy now</p></div>
<a href="/a">A</a>
<a class="keep" href="/b">B</a>
<a class="keep" href="https://other.com/c">C</a>
<img class="gallery" src="/img/1.png">
<span class="price">$10</span>
<span class="tag">x</span>
<span class="tag">y</span>
<span class="tag">z</span>
</body>
</html>
"""


@pytest.fixture()
def engine() -> RuleEngine:
    return RuleEngine(load_defaults=False)


@pytest.fixture()
def product_record(make_record):
    return make_record(
        html=PRODUCT_HTML,
        url="https://example.com/shop/item",
        title="Shop",
        body_text="Original body",
        links=["https://example.com/a"],
        images=["https://example.com/img/1.png"],
        metadata={"description": "kept"},
    )


class TestRegistry:
    """Test suite for rule set registration and lookup."""

    def test_defaults_loaded(self) -> None:
        engine = RuleEngine()

        assert engine.list_names() == [rs.name for rs in DEFAULT_RULE_SETS]
        assert {"blog", "news", "product", "documentation", "forum"} <= set(
            engine.list_names()
        )

    def test_defaults_can_be_disabled(self, engine) -> None:
        assert engine.list_names() == []

    def test_register_from_mapping(self, engine) -> None:
        rule_set = engine.register(
            "mine",
            {"title": "h2", "exclude": [".ad"], "custom": {"author": ".byline"}},
            description="My rules",
        )

        assert rule_set.name == "mine"
        assert rule_set.description == "My rules"
        assert rule_set.rules == ExtractionRule(
            title="h2", exclude=(".ad",), custom={"author": ".byline"}
        )
        assert engine.get("mine") is rule_set

    def test_register_overwrites_existing_name(self, engine) -> None:
        """Test that registering an existing name replaces it entirely."""
        engine.register("mine", ExtractionRule(title="h1", content="article"))
        engine.register("mine", ExtractionRule(title="h2"))

        rule_set = engine.require("mine")
        assert rule_set.rules.title == "h2"
        assert rule_set.rules.content is None
        assert engine.list_names() == ["mine"]

    def test_default_rule_set_can_be_overwritten(self) -> None:
        engine = RuleEngine()

        engine.register("blog", ExtractionRule(title=".custom-title"))

        assert engine.require("blog").rules.title == ".custom-title"

    def test_unknown_rule_set(self, engine) -> None:
        with pytest.raises(UnknownRuleSetError) as exc_info:
            engine.require("missing")

        assert str(exc_info.value) == 'Rule set "missing" does not exist'
        assert engine.get("missing") is None

    def test_remove(self, engine) -> None:
        engine.register("mine", ExtractionRule(title="h1"))

        assert engine.remove("mine") is True
        assert engine.remove("mine") is False
        assert engine.get("mine") is None

    @pytest.mark.parametrize("name", ["", "   "])
    def test_empty_name_rejected(self, engine, name) -> None:
        with pytest.raises(InvalidRuleError):
            engine.register(name, ExtractionRule(title="h1"))

    def test_malformed_selector_rejected(self, engine) -> None:
        with pytest.raises(InvalidRuleError, match="Invalid CSS selector"):
            engine.register("bad", {"title": "div["})

        assert engine.get("bad") is None

    @pytest.mark.parametrize(
        "rules",
        [
            {"title": 42},
            {"exclude": "nav"},
            {"exclude": ["nav", 3]},
            {"custom": {"price": 1}},
            "h1",
        ],
    )
    def test_wrongly_typed_fields_rejected(self, engine, rules) -> None:
        with pytest.raises(InvalidRuleError):
            engine.register("bad", rules)


class TestApply:
    """Test suite for re-deriving records from stored HTML."""

    def test_unknown_rule_set_raises(self, engine, product_record) -> None:
        with pytest.raises(UnknownRuleSetError):
            engine.apply("missing", product_record)

    def test_full_rule_application(self, engine, product_record) -> None:
        engine.register(
            "product",
            {
                "title": "h1",
                "content": ".body",
                "links": "a.keep",
                "images": "img.gallery",
                "exclude": [".promo"],
                "custom": {"price": ".price", "tags": ".tag", "rating": ".rating"},
            },
        )

        refined = engine.apply("product", product_record)

        assert refined.title == "Real Title"
        assert refined.body_text == "Para one Para two"
        assert refined.links == ["https://example.com/b", "https://other.com/c"]
        assert refined.images == ["https://example.com/img/1.png"]
        assert refined.metadata[CUSTOM_DATA_KEY] == {
            "price": "$10",
            "tags": ["x", "y", "z"],
        }
        assert refined.metadata[APPLIED_RULE_SET_KEY] == "product"
        assert refined.metadata["description"] == "kept"

    def test_exclusions_apply_before_every_selector(self, engine, product_record) -> None:
        """Test that excluded elements are invisible to title and content selectors."""
        engine.register("no-promo", {"title": "h1", "content": ".body", "exclude": [".promo"]})
        engine.register("with-promo", {"title": "h1", "content": ".body"})

        without = engine.apply("no-promo", product_record)
        with_promo = engine.apply("with-promo", product_record)

        assert without.title == "Real Title"
        assert "Buy now" not in without.body_text
        assert with_promo.title == "Sponsored"
        assert "Buy now" in with_promo.body_text

    def test_nested_exclusion_after_ancestor_removed(self, engine, make_record) -> None:
        html = '<div class="outer"><p class="inner">Inner</p></div><p class="inner">Loose</p>'
        record = make_record(html=html)
        engine.register("ordered", {"content": ".inner", "exclude": [".outer", ".outer .inner"]})

        refined = engine.apply("ordered", record)

        assert refined.body_text == "Loose"

    def test_absent_selectors_keep_record_values(self, engine, product_record) -> None:
        """Test that a rule with no selectors only adds the rule metadata."""
        engine.register("empty", ExtractionRule())

        refined = engine.apply("empty", product_record)

        assert refined.title == product_record.title
        assert refined.body_text == product_record.body_text
        assert refined.links == product_record.links
        assert refined.images == product_record.images
        assert refined.raw_html == product_record.raw_html
        assert refined.metadata == {
            "description": "kept",
            CUSTOM_DATA_KEY: {},
            APPLIED_RULE_SET_KEY: "empty",
        }

    def test_unmatched_title_and_content_keep_values(self, engine, product_record) -> None:
        engine.register("nomatch", {"title": ".nope", "content": ".nothing"})

        refined = engine.apply("nomatch", product_record)

        assert refined.title == "Shop"
        assert refined.body_text == "Original body"

    def test_unmatched_links_selector_empties_links(self, engine, product_record) -> None:
        """Test that a set links selector replaces links even with no matches."""
        engine.register("nolinks", {"links": "a.nothing", "images": "img.nothing"})

        refined = engine.apply("nolinks", product_record)

        assert refined.links == []
        assert refined.images == []

    def test_custom_field_cardinality(self, engine, product_record) -> None:
        engine.register(
            "custom", {"custom": {"one": ".price", "many": ".tag", "none": ".missing"}}
        )

        custom = engine.apply("custom", product_record).metadata[CUSTOM_DATA_KEY]

        assert custom["one"] == "$10"
        assert custom["many"] == ["x", "y", "z"]
        assert "none" not in custom

    def test_original_record_untouched(self, engine, product_record) -> None:
        engine.register("product", {"title": "h1", "exclude": [".promo"]})

        engine.apply("product", product_record)

        assert product_record.title == "Shop"
        assert product_record.metadata == {"description": "kept"}
        assert "Sponsored" in product_record.raw_html

    def test_default_blog_rule_set(self, make_record) -> None:
        engine = RuleEngine()
        html = """
        <html><body>
        <nav><h1>Site Name</h1></nav>
        <article><h1>Post Title</h1><p>Post body.</p></article>
        <div class="comments">Nice post!</div>
        </body></html>
        """

        refined = engine.apply("blog", make_record(html=html))

        assert refined.title == "Post Title"
        assert "Post body." in refined.body_text
        assert "Nice post!" not in refined.body_text

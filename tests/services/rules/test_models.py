"""Tests for rule data types."""

from __future__ import annotations

from adaptive_scraper.services.rules import ExtractionRule, RuleSet


class TestExtractionRule:
    """Test suite for ExtractionRule conversion helpers."""

    def test_from_dict_treats_empty_strings_as_unset(self) -> None:
        rule = ExtractionRule.from_dict({"title": "", "content": "article", "exclude": None})

        assert rule.title is None
        assert rule.content == "article"
        assert rule.exclude == ()

    def test_to_dict_omits_unset_fields(self) -> None:
        rule = ExtractionRule(title="h1", exclude=(".ad",))

        assert rule.to_dict() == {"title": "h1", "exclude": [".ad"]}

    def test_dict_round_trip(self) -> None:
        data = {
            "title": "h1",
            "content": ".body",
            "links": "a",
            "images": "img",
            "exclude": ["nav", ".ad"],
            "custom": {"price": ".price"},
        }

        assert ExtractionRule.from_dict(data).to_dict() == data

    def test_selectors_in_evaluation_order(self) -> None:
        rule = ExtractionRule(
            title="h1", images="img", exclude=("nav",), custom={"price": ".price"}
        )

        assert rule.selectors() == ["nav", "h1", "img", ".price"]


class TestRuleSet:
    def test_to_dict(self) -> None:
        rule_set = RuleSet(name="mine", rules=ExtractionRule(title="h1"), description="d")

        assert rule_set.to_dict() == {
            "name": "mine",
            "rules": {"title": "h1"},
            "description": "d",
        }

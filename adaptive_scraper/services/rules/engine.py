"""Rule engine: named CSS rule sets re-applied to stored HTML."""

from __future__ import annotations

import dataclasses
import logging
from typing import Any, Mapping

import soupsieve

from adaptive_scraper.services.rules.defaults import DEFAULT_RULE_SETS
from adaptive_scraper.services.rules.models import (
    ExtractionRule,
    InvalidRuleError,
    RuleSet,
    UnknownRuleSetError,
)
from adaptive_scraper.services.scraper.base import ContentRecord
from adaptive_scraper.services.scraper.content_extractor import (
    attribute_value,
    parse_html,
    remove_elements,
    resolve_urls,
)
from adaptive_scraper.services.scraper.text import clean_text

logger = logging.getLogger(__name__)

# Reserved metadata keys written by apply()
CUSTOM_DATA_KEY = "customData"
APPLIED_RULE_SET_KEY = "appliedRuleSet"


class RuleEngine:
    """Registry of named rule sets plus the logic to apply them.

    Registration is last-write-wins per name. Built-in rule sets are ordinary
    entries and may be overwritten or removed.

    Usage:
        engine = RuleEngine()
        engine.register("titles", ExtractionRule(title="h1.headline"))
        refined = engine.apply("titles", record)
    """

    def __init__(self, load_defaults: bool = True) -> None:
        self._rule_sets: dict[str, RuleSet] = {}
        if load_defaults:
            for rule_set in DEFAULT_RULE_SETS:
                self._rule_sets[rule_set.name] = rule_set

    def register(
        self,
        name: str,
        rule: ExtractionRule | Mapping[str, Any],
        description: str | None = None,
    ) -> RuleSet:
        """Create or replace the rule set called ``name``.

        Args:
            name: Unique rule set name
            rule: An ExtractionRule or its wire mapping
            description: Optional human-readable description

        Returns:
            The stored RuleSet

        Raises:
            InvalidRuleError: If the name is empty or a selector is malformed
        """
        if not name or not name.strip():
            raise InvalidRuleError("Rule set name must not be empty")
        if not isinstance(rule, ExtractionRule):
            rule = ExtractionRule.from_dict(rule)
        self._validate_selectors(rule)

        rule_set = RuleSet(name=name, rules=rule, description=description)
        replaced = name in self._rule_sets
        self._rule_sets[name] = rule_set
        logger.info("%s rule set %r", "Replaced" if replaced else "Registered", name)
        return rule_set

    def get(self, name: str) -> RuleSet | None:
        """Return the rule set called ``name``, or None."""
        return self._rule_sets.get(name)

    def require(self, name: str) -> RuleSet:
        """Return the rule set called ``name``.

        Raises:
            UnknownRuleSetError: If no such rule set is registered
        """
        rule_set = self._rule_sets.get(name)
        if rule_set is None:
            raise UnknownRuleSetError(name)
        return rule_set

    def list_names(self) -> list[str]:
        """Registered names in registration order."""
        return list(self._rule_sets)

    def remove(self, name: str) -> bool:
        """Delete a rule set. Returns False if it was not registered."""
        removed = self._rule_sets.pop(name, None) is not None
        if removed:
            logger.info("Removed rule set %r", name)
        return removed

    def apply(self, name: str, record: ContentRecord) -> ContentRecord:
        """Re-derive ``record`` from its stored HTML using rule set ``name``.

        Exclusions run first so they affect every later step. Title and
        content keep their original values when the selector matches nothing;
        links and images are replaced entirely whenever their selector is set.

        Returns:
            A new ContentRecord; ``record`` is left untouched

        Raises:
            UnknownRuleSetError: If ``name`` is not registered
        """
        rule_set = self.require(name)
        rules = rule_set.rules
        soup = parse_html(record.raw_html)

        for selector in rules.exclude:
            remove_elements(soup, selector)

        title = record.title
        if rules.title:
            first = soup.select_one(rules.title)
            if first is not None:
                title = first.get_text().strip()

        body_text = record.body_text
        if rules.content:
            matches = soup.select(rules.content)
            if matches:
                body_text = clean_text("\n\n".join(el.get_text() for el in matches))

        links = record.links
        if rules.links:
            links = resolve_urls(
                (attribute_value(el, "href") for el in soup.select(rules.links)),
                record.source_url,
            )

        images = record.images
        if rules.images:
            images = resolve_urls(
                (attribute_value(el, "src") for el in soup.select(rules.images)),
                record.source_url,
            )

        custom_data: dict[str, Any] = {}
        for field_name, selector in rules.custom.items():
            matches = soup.select(selector)
            if len(matches) == 1:
                custom_data[field_name] = matches[0].get_text().strip()
            elif len(matches) > 1:
                custom_data[field_name] = [el.get_text().strip() for el in matches]

        logger.debug(
            "Applied rule set %r to %s (%d custom fields)",
            name,
            record.source_url,
            len(custom_data),
        )
        return dataclasses.replace(
            record,
            title=title,
            body_text=body_text,
            links=list(links),
            images=list(images),
            metadata={
                **record.metadata,
                CUSTOM_DATA_KEY: custom_data,
                APPLIED_RULE_SET_KEY: name,
            },
        )

    def _validate_selectors(self, rule: ExtractionRule) -> None:
        for selector in rule.selectors():
            try:
                soupsieve.compile(selector)
            except soupsieve.SelectorSyntaxError as e:
                raise InvalidRuleError(f"Invalid CSS selector {selector!r}: {e}") from e

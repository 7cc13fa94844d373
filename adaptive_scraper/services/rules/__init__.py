"""Named, user-customizable extraction rule sets."""

from adaptive_scraper.services.rules.defaults import DEFAULT_RULE_SETS
from adaptive_scraper.services.rules.engine import RuleEngine
from adaptive_scraper.services.rules.models import (
    ExtractionRule,
    InvalidRuleError,
    RuleEngineError,
    RuleSet,
    UnknownRuleSetError,
)

__all__ = [
    "DEFAULT_RULE_SETS",
    "ExtractionRule",
    "InvalidRuleError",
    "RuleEngine",
    "RuleEngineError",
    "RuleSet",
    "UnknownRuleSetError",
]

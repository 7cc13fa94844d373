"""Rule set data types and rule engine exceptions."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping


class RuleEngineError(Exception):
    """Base exception for rule engine errors."""

    pass


class UnknownRuleSetError(RuleEngineError):
    """Raised when a rule set name is not registered.

    Error Code: UNKNOWN_RULE_SET
    """

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f'Rule set "{name}" does not exist')


class InvalidRuleError(RuleEngineError):
    """Raised when a rule contains a malformed field or CSS selector.

    Error Code: INVALID_RULE
    """

    pass


@dataclass(frozen=True)
class ExtractionRule:
    """CSS selectors used to re-derive a content record from stored HTML.

    Every field is optional; an unset field leaves the record's value alone.
    """

    title: str | None = None
    content: str | None = None
    links: str | None = None
    images: str | None = None
    exclude: tuple[str, ...] = ()  # Removed, in order, before anything is read
    custom: dict[str, str] = field(default_factory=dict)  # field name -> selector

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ExtractionRule:
        """Build a rule from its wire mapping.

        Raises:
            InvalidRuleError: If a field has the wrong type
        """
        if not isinstance(data, Mapping):
            raise InvalidRuleError("Rules must be an object of selector fields")

        selectors: dict[str, str | None] = {}
        for key in ("title", "content", "links", "images"):
            value = data.get(key)
            if value is not None and not isinstance(value, str):
                raise InvalidRuleError(f"Rule field '{key}' must be a selector string")
            selectors[key] = value or None

        exclude = data.get("exclude") or []
        if isinstance(exclude, str) or not all(isinstance(s, str) for s in exclude):
            raise InvalidRuleError("Rule field 'exclude' must be a list of selectors")

        custom = data.get("custom") or {}
        if not isinstance(custom, Mapping) or not all(
            isinstance(k, str) and isinstance(v, str) for k, v in custom.items()
        ):
            raise InvalidRuleError("Rule field 'custom' must map field names to selectors")

        return cls(exclude=tuple(exclude), custom=dict(custom), **selectors)

    def to_dict(self) -> dict[str, Any]:
        """Return the wire mapping, omitting unset fields."""
        data: dict[str, Any] = {}
        for key in ("title", "content", "links", "images"):
            value = getattr(self, key)
            if value:
                data[key] = value
        if self.exclude:
            data["exclude"] = list(self.exclude)
        if self.custom:
            data["custom"] = dict(self.custom)
        return data

    def selectors(self) -> list[str]:
        """Every selector the rule uses, in evaluation order."""
        fields = [self.title, self.content, self.links, self.images]
        return [*self.exclude, *(s for s in fields if s), *self.custom.values()]


@dataclass(frozen=True)
class RuleSet:
    """A named extraction rule, stored in the rule engine registry."""

    name: str
    rules: ExtractionRule
    description: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready mapping."""
        return {
            "name": self.name,
            "rules": self.rules.to_dict(),
            "description": self.description,
        }

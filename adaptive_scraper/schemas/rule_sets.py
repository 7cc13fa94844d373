"""Pydantic v2 schemas for rule set management endpoints."""

from __future__ import annotations

from pydantic import BaseModel, Field

from adaptive_scraper.schemas.tools import RuleSchema


class PutRuleSetRequest(BaseModel):
    """Request body for PUT /api/v1/rule-sets/{name}."""

    rules: RuleSchema = Field(..., description="Extraction rules (CSS selectors)")
    description: str | None = Field(
        default=None, max_length=1024, description="Optional description"
    )


class RuleSetResponse(BaseModel):
    """A stored rule set."""

    name: str
    rules: RuleSchema
    description: str | None = None


class RuleSetListResponse(BaseModel):
    rule_sets: list[RuleSetResponse]
    count: int = Field(..., ge=0)

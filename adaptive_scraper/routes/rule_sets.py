"""Rule set management REST endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from adaptive_scraper.core.container import ServiceContainer, get_container
from adaptive_scraper.schemas.rule_sets import (
    PutRuleSetRequest,
    RuleSetListResponse,
    RuleSetResponse,
)
from adaptive_scraper.services.rules import InvalidRuleError, RuleSet

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/rule-sets", tags=["rule-sets"])


def _not_found(name: str) -> HTTPException:
    return HTTPException(
        status_code=404,
        detail={
            "error": {
                "code": "RULE_SET_NOT_FOUND",
                "message": f'Rule set "{name}" does not exist',
            }
        },
    )


def _to_response(rule_set: RuleSet) -> RuleSetResponse:
    return RuleSetResponse.model_validate(rule_set.to_dict())


@router.get("", response_model=RuleSetListResponse)
async def list_rule_sets(
    container: ServiceContainer = Depends(get_container),
) -> RuleSetListResponse:
    """List every registered rule set, built-in ones included."""
    engine = container.rule_engine
    rule_sets = [_to_response(engine.require(name)) for name in engine.list_names()]
    return RuleSetListResponse(rule_sets=rule_sets, count=len(rule_sets))


@router.get("/{name}", response_model=RuleSetResponse)
async def get_rule_set(
    name: str,
    container: ServiceContainer = Depends(get_container),
) -> RuleSetResponse:
    """Retrieve a single rule set by name."""
    rule_set = container.rule_engine.get(name)
    if rule_set is None:
        raise _not_found(name)
    return _to_response(rule_set)


@router.put("/{name}", response_model=RuleSetResponse)
async def put_rule_set(
    name: str,
    request: PutRuleSetRequest,
    container: ServiceContainer = Depends(get_container),
) -> RuleSetResponse:
    """Create or replace a rule set."""
    try:
        rule_set = container.rule_engine.register(
            name, request.rules.model_dump(), request.description
        )
    except InvalidRuleError as e:
        logger.warning("Rejected rule set %r: %s", name, e)
        raise HTTPException(
            status_code=400,
            detail={
                "error": {
                    "code": "INVALID_RULE",
                    "message": str(e),
                }
            },
        )
    return _to_response(rule_set)


@router.delete("/{name}", status_code=204)
async def delete_rule_set(
    name: str,
    container: ServiceContainer = Depends(get_container),
) -> None:
    """Delete a rule set."""
    if not container.rule_engine.remove(name):
        raise _not_found(name)

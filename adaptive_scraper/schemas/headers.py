"""Pydantic v2 schemas for domain header endpoints."""

from __future__ import annotations

from pydantic import BaseModel, Field


class SetHeadersRequest(BaseModel):
    """Request body for PUT /api/v1/headers/{domain}.

    Fields are merged into the domain's existing headers.
    """

    headers: dict[str, str] = Field(..., description="Header name -> value")


class DomainHeadersResponse(BaseModel):
    domain: str
    headers: dict[str, str]


class HeaderListResponse(BaseModel):
    domains: list[DomainHeadersResponse]
    count: int = Field(..., ge=0)

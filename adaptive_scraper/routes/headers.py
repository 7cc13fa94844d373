"""Domain header REST endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from adaptive_scraper.core.container import ServiceContainer, get_container
from adaptive_scraper.schemas.headers import (
    DomainHeadersResponse,
    HeaderListResponse,
    SetHeadersRequest,
)
from adaptive_scraper.services.headers import normalize_domain

router = APIRouter(prefix="/api/v1/headers", tags=["headers"])


def _not_found(domain: str, field_name: str | None = None) -> HTTPException:
    if field_name is None:
        message = f"No headers configured for '{domain}'"
    else:
        message = f"Header '{field_name}' is not configured for '{domain}'"
    return HTTPException(
        status_code=404,
        detail={
            "error": {
                "code": "HEADERS_NOT_FOUND",
                "message": message,
            }
        },
    )


@router.get("", response_model=HeaderListResponse)
async def list_headers(
    container: ServiceContainer = Depends(get_container),
) -> HeaderListResponse:
    """List every domain with configured headers."""
    domains = [
        DomainHeadersResponse(domain=domain, headers=headers)
        for domain, headers in container.header_store.all_headers().items()
    ]
    return HeaderListResponse(domains=domains, count=len(domains))


@router.get("/{domain}", response_model=DomainHeadersResponse)
async def get_headers(
    domain: str,
    container: ServiceContainer = Depends(get_container),
) -> DomainHeadersResponse:
    """Headers for one domain (empty when none are configured)."""
    return DomainHeadersResponse(
        domain=normalize_domain(domain),
        headers=container.header_store.get_headers(domain),
    )


@router.put("/{domain}", response_model=DomainHeadersResponse)
async def set_headers(
    domain: str,
    request: SetHeadersRequest,
    container: ServiceContainer = Depends(get_container),
) -> DomainHeadersResponse:
    """Merge headers into a domain's entry and return the result."""
    try:
        merged = container.header_store.set_headers(domain, request.headers)
    except ValueError as e:
        raise HTTPException(
            status_code=400,
            detail={
                "error": {
                    "code": "INVALID_DOMAIN",
                    "message": str(e),
                }
            },
        )
    return DomainHeadersResponse(domain=normalize_domain(domain), headers=merged)


@router.delete("/{domain}", status_code=204)
async def delete_headers(
    domain: str,
    container: ServiceContainer = Depends(get_container),
) -> None:
    """Remove every header for a domain."""
    if not container.header_store.remove_headers(domain):
        raise _not_found(domain)


@router.delete("/{domain}/{field_name}", status_code=204)
async def delete_header_field(
    domain: str,
    field_name: str,
    container: ServiceContainer = Depends(get_container),
) -> None:
    """Remove one header field from a domain."""
    if not container.header_store.remove_header_field(domain, field_name):
        raise _not_found(domain, field_name)

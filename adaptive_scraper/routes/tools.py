"""Tool REST endpoints: list tools and invoke one by name."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends

from adaptive_scraper.core.container import ServiceContainer, get_container
from adaptive_scraper.schemas.tools import ToolListResponse, ToolResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/tools", tags=["tools"])


@router.get("", response_model=ToolListResponse)
async def list_tools(
    container: ServiceContainer = Depends(get_container),
) -> ToolListResponse:
    """List available tools with their JSON input schemas."""
    return ToolListResponse(tools=container.tools.list_tools())


@router.post("/{name}", response_model=ToolResponse)
async def call_tool(
    name: str,
    arguments: dict[str, Any] | None = Body(default=None),
    container: ServiceContainer = Depends(get_container),
) -> ToolResponse:
    """Invoke tool ``name``.

    Tool failures (unknown tool, bad arguments, retrieval errors) are part of
    the tool protocol: they come back as 200 with ``is_error`` set and an
    ``Error: ...`` text block.
    """
    return await container.tools.handle_request(name, arguments)

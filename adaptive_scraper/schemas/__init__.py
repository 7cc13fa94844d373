"""Pydantic schemas package."""

from adaptive_scraper.schemas.headers import (  # noqa: F401
    DomainHeadersResponse,
    HeaderListResponse,
    SetHeadersRequest,
)
from adaptive_scraper.schemas.rule_sets import (  # noqa: F401
    PutRuleSetRequest,
    RuleSetListResponse,
    RuleSetResponse,
)
from adaptive_scraper.schemas.tools import (  # noqa: F401
    BatchScrapeArguments,
    CreateRuleSetArguments,
    RuleSchema,
    ScrapeUrlArguments,
    SetDomainHeadersArguments,
    ToolContent,
    ToolDefinition,
    ToolListResponse,
    ToolResponse,
)

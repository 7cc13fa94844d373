"""Custom exceptions for the adaptive-scraper service.

Provides exception classes for the tool front end and content export.
Retrieval and rule errors live next to their services.
"""

from __future__ import annotations


class ToolServiceError(Exception):
    """Base exception for tool front end errors."""

    pass


class UnknownToolError(ToolServiceError):
    """Raised when a request names a tool that does not exist.

    Error Code: UNKNOWN_TOOL
    """

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown or unsupported tool: {name}")


class InvalidToolArgumentsError(ToolServiceError):
    """Raised when tool arguments are missing required fields or malformed.

    Error Code: INVALID_ARGUMENTS
    """

    def __init__(self, tool: str, detail: str) -> None:
        self.tool = tool
        self.detail = detail
        super().__init__(f"Invalid arguments for {tool}: {detail}")


# ---------------------------------------------------------------------------
# Export Exceptions
# ---------------------------------------------------------------------------


class ExportError(Exception):
    """Base exception for export-related errors."""

    pass


class UnsupportedFormatError(ExportError):
    """Raised when an unknown output format is requested.

    Error Code: UNSUPPORTED_FORMAT
    """

    def __init__(self, format_value: str) -> None:
        self.format_value = format_value
        super().__init__(
            f"Unsupported export format: {format_value}. "
            "Must be one of 'markdown', 'text', 'html' or 'json'."
        )

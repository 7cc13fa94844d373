"""Exception hierarchy for document retrieval."""

from __future__ import annotations


class ScraperError(Exception):
    """Base exception for all retrieval errors."""

    pass


class FetchError(ScraperError):
    """Raised when the lightweight HTTP fetch fails (timeout, transport, non-2xx)."""

    pass


class RenderError(ScraperError):
    """Raised when the browser session cannot start or navigation/wait fails."""

    pass


class RetrievalError(ScraperError):
    """Raised when no retrieval tier produced a document.

    Carries the message of every tier that was attempted so callers can see
    why the static fetch and the browser render both failed.
    """

    def __init__(
        self,
        url: str,
        *,
        fetch_error: str | None = None,
        render_error: str | None = None,
    ) -> None:
        self.url = url
        self.fetch_error = fetch_error
        self.render_error = render_error

        parts: list[str] = []
        if fetch_error:
            parts.append(f"static fetch failed: {fetch_error}")
        if render_error:
            parts.append(f"browser render failed: {render_error}")
        detail = "; ".join(parts) or "no retrieval tier succeeded"
        super().__init__(f"Could not retrieve {url}: {detail}")

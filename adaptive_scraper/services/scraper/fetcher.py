"""Lightweight HTTP fetcher (no script execution)."""

from __future__ import annotations

import json
import logging

import httpx

from adaptive_scraper.core.config import Settings, settings
from adaptive_scraper.services.scraper.base import FetchResult
from adaptive_scraper.services.scraper.exceptions import FetchError

logger = logging.getLogger(__name__)


class StaticFetcher:
    """Fetch a document with a single GET request.

    The default browser-like User-Agent is applied first and caller headers
    override it key by key.
    """

    def __init__(self, config: Settings | None = None) -> None:
        self.config = config or settings

    async def fetch(
        self,
        url: str,
        headers: dict[str, str] | None = None,
        timeout_ms: int | None = None,
    ) -> FetchResult:
        """Fetch ``url`` and return its body as text.

        Args:
            url: Address to fetch
            headers: Caller headers, merged over the default User-Agent
            timeout_ms: Request timeout (default: ``fetch_timeout_ms``)

        Returns:
            FetchResult with the document text and response status

        Raises:
            FetchError: On timeout, connection failure, malformed URL or non-2xx status
        """
        timeout_ms = timeout_ms if timeout_ms is not None else self.config.fetch_timeout_ms
        request_headers = {"User-Agent": self.config.static_user_agent, **(headers or {})}

        try:
            async with httpx.AsyncClient(
                timeout=timeout_ms / 1000,
                follow_redirects=True,
            ) as client:
                response = await client.get(url, headers=request_headers)
                response.raise_for_status()

                content_type = response.headers.get("content-type", "")
                html = self._as_text(response, content_type)
        except httpx.TimeoutException as e:
            raise FetchError(f"Timeout fetching {url}: {e}") from e
        except httpx.HTTPStatusError as e:
            raise FetchError(
                f"HTTP {e.response.status_code} from {url}: {e.response.reason_phrase}"
            ) from e
        except httpx.RequestError as e:
            raise FetchError(f"Network error fetching {url}: {e}") from e
        except httpx.InvalidURL as e:
            raise FetchError(f"Invalid URL {url}: {e}") from e

        logger.debug(
            "Fetched %d chars from %s (status=%d, type=%s)",
            len(html),
            url,
            response.status_code,
            content_type or "unknown",
        )
        return FetchResult(
            html=html,
            status_code=response.status_code,
            content_type=content_type,
        )

    def _as_text(self, response: httpx.Response, content_type: str) -> str:
        """Return the response body as a document string.

        JSON payloads are re-serialized so the caller always parses text.
        """
        if "json" in content_type.lower():
            try:
                return json.dumps(response.json(), ensure_ascii=False)
            except ValueError:
                logger.debug("Declared JSON body did not decode, using raw text")
        return response.text

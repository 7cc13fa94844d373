"""Per-domain custom request headers."""

from __future__ import annotations

import logging
import re
from urllib.parse import urlparse

logger = logging.getLogger(__name__)

_BROWSER_ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8"
_ACCEPT_LANGUAGE = "zh-CN,zh;q=0.9,en;q=0.8"

# Presets for sites that reject requests without browser-like headers
DEFAULT_DOMAIN_HEADERS: dict[str, dict[str, str]] = {
    "github.com": {
        "Accept": _BROWSER_ACCEPT,
        "Accept-Language": _ACCEPT_LANGUAGE,
        "Cache-Control": "no-cache",
    },
    "zhihu.com": {
        "Accept": _BROWSER_ACCEPT,
        "Accept-Language": _ACCEPT_LANGUAGE,
        "Referer": "https://www.zhihu.com/",
    },
    "weibo.com": {
        "Accept": _BROWSER_ACCEPT,
        "Accept-Language": _ACCEPT_LANGUAGE,
        "Referer": "https://weibo.com/",
    },
    "douban.com": {
        "Accept": _BROWSER_ACCEPT,
        "Accept-Language": _ACCEPT_LANGUAGE,
        "Referer": "https://www.douban.com/",
    },
    "jianshu.com": {
        "Accept": _BROWSER_ACCEPT,
        "Accept-Language": _ACCEPT_LANGUAGE,
        "Referer": "https://www.jianshu.com/",
    },
    "csdn.net": {
        "Accept": _BROWSER_ACCEPT,
        "Accept-Language": _ACCEPT_LANGUAGE,
        "Referer": "https://www.csdn.net/",
    },
}

_SCHEME = re.compile(r"^https?://", re.IGNORECASE)


def normalize_domain(domain: str) -> str:
    """Reduce a URL or host string to a lower-cased host.

    "https://www.Example.com:8080/path" -> "www.example.com"
    """
    normalized = _SCHEME.sub("", domain.strip())
    normalized = normalized.split("/")[0]
    normalized = normalized.split(":")[0]
    return normalized.lower()


def url_host(url: str) -> str | None:
    """Host of ``url`` as urlparse reports it, or None for data: and host-less URLs."""
    if url.strip().lower().startswith("data:"):
        return None
    try:
        return urlparse(url).hostname
    except ValueError:
        return None


class HeaderStore:
    """In-memory mapping of domain -> request headers.

    Lookups return copies, so a caller holding a snapshot never sees later
    writes.
    """

    def __init__(self, load_defaults: bool = True) -> None:
        self._domain_headers: dict[str, dict[str, str]] = {}
        if load_defaults:
            for domain, headers in DEFAULT_DOMAIN_HEADERS.items():
                self.set_headers(domain, headers)

    def set_headers(self, domain: str, headers: dict[str, str]) -> dict[str, str]:
        """Merge ``headers`` into the domain's entry (new values win).

        Returns:
            The domain's merged headers
        """
        key = normalize_domain(domain)
        if not key:
            raise ValueError(f"Cannot derive a domain from {domain!r}")
        merged = {**self._domain_headers.get(key, {}), **headers}
        self._domain_headers[key] = merged
        logger.debug("Set %d header(s) for %s", len(headers), key)
        return dict(merged)

    def get_headers(self, domain: str) -> dict[str, str]:
        """Return the headers for ``domain`` ({} when none are configured)."""
        return dict(self._domain_headers.get(normalize_domain(domain), {}))

    def headers_for_url(self, url: str) -> dict[str, str]:
        """Return headers for the host of ``url``; {} for data: or host-less URLs."""
        hostname = url_host(url)
        if not hostname:
            return {}
        return self.get_headers(hostname)

    def set_headers_for_url(self, url: str, headers: dict[str, str]) -> dict[str, str]:
        """Merge ``headers`` into the entry for the host of ``url``.

        The key is the same host ``headers_for_url`` looks up, so userinfo and
        ports never end up in it. data: and host-less URLs carry no headers:
        nothing is stored and {} is returned.
        """
        hostname = url_host(url)
        if not hostname:
            return {}
        return self.set_headers(hostname, headers)

    def remove_headers(self, domain: str) -> bool:
        """Delete every header configured for ``domain``."""
        return self._domain_headers.pop(normalize_domain(domain), None) is not None

    def remove_header_field(self, domain: str, field_name: str) -> bool:
        """Delete one header field from ``domain``'s entry."""
        headers = self._domain_headers.get(normalize_domain(domain))
        if headers is not None and field_name in headers:
            del headers[field_name]
            return True
        return False

    def list_domains(self) -> list[str]:
        """Domains with configured headers, in insertion order."""
        return list(self._domain_headers)

    def all_headers(self) -> dict[str, dict[str, str]]:
        """Deep copy of the whole store."""
        return {domain: dict(headers) for domain, headers in self._domain_headers.items()}

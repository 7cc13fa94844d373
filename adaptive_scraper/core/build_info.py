"""Service identity reported by the health and version endpoints."""

from __future__ import annotations

import subprocess
from functools import lru_cache

SERVICE_NAME = "adaptive-scraper-service"


@lru_cache(maxsize=1)
def get_git_sha() -> str:
    """Short git SHA of the checkout, or 'unknown' outside a git repo."""
    try:
        output = subprocess.check_output(
            ["git", "rev-parse", "HEAD"], stderr=subprocess.DEVNULL
        )
    except (subprocess.CalledProcessError, FileNotFoundError):
        return "unknown"
    return output.decode().strip()[:7]

"""Tests for the service identity helpers."""

from __future__ import annotations

import subprocess
from unittest.mock import patch

import pytest

from adaptive_scraper.core.build_info import get_git_sha


@pytest.fixture(autouse=True)
def _clear_sha_cache():
    get_git_sha.cache_clear()
    yield
    get_git_sha.cache_clear()


def test_git_sha_is_shortened() -> None:
    with patch.object(subprocess, "check_output", return_value=b"abcdef1234567890\n"):
        assert get_git_sha() == "abcdef1"


@pytest.mark.parametrize(
    "error",
    [FileNotFoundError("git"), subprocess.CalledProcessError(128, ["git"])],
)
def test_git_sha_unknown_outside_repo(error) -> None:
    with patch.object(subprocess, "check_output", side_effect=error):
        assert get_git_sha() == "unknown"

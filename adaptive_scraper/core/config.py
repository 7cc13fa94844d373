"""Application configuration using Pydantic Settings.

Loads settings from environment variables and .env file.
All settings have sensible defaults for local development.
"""

from __future__ import annotations

import json
import logging

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Valid Python logging levels
VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}

# Valid output formats for the exporters
VALID_OUTPUT_FORMATS = {"markdown", "text", "html", "json"}


class Settings(BaseSettings):
    """Service-wide configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- Server ---
    service_env: str = "development"
    host: str = "0.0.0.0"
    port: int = 15020
    debug: bool = False

    # --- Logging ---
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate and normalize log level to uppercase.

        Falls back to INFO if an invalid level is provided.
        """
        normalized = v.upper().strip()
        if normalized not in VALID_LOG_LEVELS:
            # Log a warning (to stderr since logging may not be configured yet)
            import sys

            print(
                f"WARNING: Invalid LOG_LEVEL '{v}'. "
                f"Valid levels are: {', '.join(sorted(VALID_LOG_LEVELS))}. "
                "Falling back to INFO.",
                file=sys.stderr,
            )
            return "INFO"
        return normalized

    def get_log_level_int(self) -> int:
        """Return the integer value of the configured log level."""
        return getattr(logging, self.log_level, logging.INFO)

    # --- Static fetch ---
    fetch_timeout_ms: int = 15_000
    static_user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
    )

    # Phrases that mark a no-script fallback page (matched case-insensitively)
    js_required_phrases: list[str] = [
        "您需要允许该网站执行 JavaScript",
        "enable JavaScript",
        "requires JavaScript",
        "not support a browser that has JavaScript disabled",
        "Please enable JavaScript",
    ]

    # --- Browser rendering ---
    render_timeout_ms: int = 60_000
    wait_selector_timeout_ms: int = 15_000
    render_settle_delay_ms: int = 3_000
    render_user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/108.0.0.0 Safari/537.36"
    )
    viewport_width: int = 1280
    viewport_height: int = 800
    browser_headless: bool = True
    # Explicit Chrome/Chromium binary; skips path probing when set
    browser_executable_path: str | None = None
    # Run `playwright install chromium` when no usable browser is found
    browser_auto_install: bool = True
    screenshot_dir: str = "."

    # --- Content extraction ---
    min_content_length: int = 100  # Minimum chars for a content container to win
    default_title: str = "Untitled"

    # --- Output ---
    default_output_format: str = "markdown"

    @field_validator("default_output_format")
    @classmethod
    def validate_output_format(cls, v: str) -> str:
        """Reject output formats that no exporter understands."""
        normalized = v.lower().strip()
        if normalized not in VALID_OUTPUT_FORMATS:
            raise ValueError(
                f"Invalid output format '{v}'. "
                f"Valid formats are: {', '.join(sorted(VALID_OUTPUT_FORMATS))}"
            )
        return normalized

    # --- Registries ---
    load_default_rule_sets: bool = True
    load_default_domain_headers: bool = True

    # --- CORS ---
    cors_origins: str = "http://localhost:15000,http://localhost:3000"

    def get_cors_origins(self) -> list[str]:
        """Parse cors_origins as JSON list or comma-separated string."""
        raw = self.cors_origins.strip()
        if raw.startswith("["):
            return json.loads(raw)
        return [o.strip() for o in raw.split(",") if o.strip()]


settings = Settings()

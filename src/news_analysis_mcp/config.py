"""Server configuration via environment variables."""

from __future__ import annotations

import os
from typing import get_args

from pydantic import BaseModel, Field, field_validator

from .types import NewsCategory, Transport

VALID_TRANSPORTS = set(get_args(Transport))
NEWS_CATEGORIES = set(get_args(NewsCategory))


def _optional_float(raw: str) -> float | None:
    """Parse an optional float env value; blank means unset."""
    value = raw.strip()
    return float(value) if value else None


class ServerConfig(BaseModel):
    """Runtime configuration resolved from environment."""

    gemini_api_key: str = Field(default="")
    default_model: str = Field(default="gemini-pro-latest")
    default_temperature: float | None = Field(default=None)
    analysis_timeout_seconds: float = Field(default=30.0)
    news_api_key: str = Field(default="")
    news_api_base_url: str = Field(default="https://newsapi.org/v2")
    news_api_timeout_seconds: float = Field(default=15.0)
    default_category: str = Field(default="general")
    default_country: str = Field(default="us")
    default_page_size: int = Field(default=10)
    default_language: str = Field(default="en")
    transport: str = Field(default="stdio")
    host: str = Field(default="127.0.0.1")
    port: int = Field(default=3000)

    @field_validator("analysis_timeout_seconds", "news_api_timeout_seconds")
    @classmethod
    def validate_timeouts(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("Timeouts must be > 0")
        return value

    @field_validator("default_temperature")
    @classmethod
    def validate_temperature(cls, value: float | None) -> float | None:
        if value is not None and not 0.0 <= value <= 2.0:
            raise ValueError("Temperature must be between 0.0 and 2.0")
        return value

    @field_validator("default_category")
    @classmethod
    def validate_category(cls, value: str) -> str:
        category = value.strip().lower()
        if category not in NEWS_CATEGORIES:
            allowed = ", ".join(sorted(NEWS_CATEGORIES))
            raise ValueError(f"Invalid news category '{value}'. Allowed: {allowed}")
        return category

    @field_validator("default_page_size")
    @classmethod
    def validate_page_size(cls, value: int) -> int:
        if not 1 <= value <= 100:
            raise ValueError("default_page_size must be between 1 and 100")
        return value

    @field_validator("transport")
    @classmethod
    def validate_transport(cls, value: str) -> str:
        transport = value.strip().lower()
        if transport not in VALID_TRANSPORTS:
            allowed = ", ".join(sorted(VALID_TRANSPORTS))
            raise ValueError(f"Invalid transport '{value}'. Allowed: {allowed}")
        return transport

    @field_validator("news_api_base_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @classmethod
    def from_env(cls) -> ServerConfig:
        """Build config from environment variables."""
        return cls(
            gemini_api_key=os.getenv("GEMINI_API_KEY", ""),
            default_model=os.getenv("GEMINI_MODEL", "gemini-pro-latest"),
            default_temperature=_optional_float(os.getenv("GEMINI_TEMPERATURE", "")),
            analysis_timeout_seconds=float(os.getenv("GEMINI_ANALYSIS_TIMEOUT", "30")),
            news_api_key=os.getenv("NEWS_API_KEY", ""),
            news_api_base_url=os.getenv("NEWS_API_BASE_URL", "https://newsapi.org/v2"),
            news_api_timeout_seconds=float(os.getenv("NEWS_API_TIMEOUT", "15")),
            default_category=os.getenv("NEWS_DEFAULT_CATEGORY", "general"),
            default_country=os.getenv("NEWS_DEFAULT_COUNTRY", "us"),
            default_page_size=int(os.getenv("NEWS_DEFAULT_PAGE_SIZE", "10")),
            default_language=os.getenv("NEWS_DEFAULT_LANGUAGE", "en"),
            transport=os.getenv("MCP_TRANSPORT", "stdio"),
            host=os.getenv("HOST", "127.0.0.1"),
            port=int(os.getenv("PORT", "3000")),
        )


_config: ServerConfig | None = None


def get_config() -> ServerConfig:
    """Return the global config singleton, creating it on first access.

    Loads ``~/.config/news-analysis-mcp/.env`` before reading env vars.
    Process environment always takes precedence over the config file.
    """
    global _config
    if _config is None:
        import logging

        from .dotenv import load_dotenv

        injected = load_dotenv()
        if injected:
            logger = logging.getLogger(__name__)
            logger.info(
                "Loaded %d var(s) from config: %s",
                len(injected),
                ", ".join(injected.keys()),
            )
        _config = ServerConfig.from_env()
    return _config


def update_config(**overrides: object) -> ServerConfig:
    """Patch the live config (used by the ``infra_configure`` tool)."""
    global _config
    cfg = get_config()
    data = cfg.model_dump()
    data.update({k: v for k, v in overrides.items() if v is not None})
    _config = ServerConfig(**data)
    return _config

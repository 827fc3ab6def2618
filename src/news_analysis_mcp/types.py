"""Shared type aliases for tool parameters."""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import Field

# ── Literal enums ────────────────────────────────────────────────────────────

NewsCategory = Literal[
    "business", "entertainment", "general", "health", "science", "sports", "technology",
]
Transport = Literal["stdio", "http"]

# ── Annotated aliases ────────────────────────────────────────────────────────

CountryCode = Annotated[str, Field(
    min_length=2,
    max_length=2,
    description="Two-letter ISO 3166-1 country code, e.g. 'us' or 'gb'",
)]
LanguageCode = Annotated[str, Field(
    min_length=2,
    max_length=2,
    description="Two-letter ISO 639-1 language code, e.g. 'en'",
)]
PageSize = Annotated[int, Field(ge=1, le=100, description="Number of articles to return")]
SearchQuery = Annotated[str, Field(min_length=1, max_length=500, description="Keywords or phrase to search for")]
ArticleField = Annotated[str | None, Field(max_length=100_000)]

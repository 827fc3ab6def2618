"""Thin async proxy for the newsapi.org v2 REST API.

Responses are passed through verbatim; only failures are reshaped, into
:class:`~news_analysis_mcp.errors.NewsApiError`.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from .config import get_config
from .errors import NEWS_KEY_URL, ConfigurationError, InputError, NewsApiError

logger = logging.getLogger(__name__)


def _require_key() -> str:
    key = get_config().news_api_key
    if not key:
        raise ConfigurationError("NEWS_API_KEY", hint=f"Get your key at {NEWS_KEY_URL}")
    return key


def _raise_for_upstream(response: httpx.Response) -> None:
    """Raise NewsApiError carrying the upstream ``message``/``code`` fields."""
    if response.is_success:
        return
    try:
        body = response.json()
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        body = {}
    raise NewsApiError(
        status=response.status_code,
        message=body.get("message") or response.reason_phrase or "Unknown error",
        code=body.get("code") or "UNKNOWN_ERROR",
    )


async def _get(endpoint: str, params: dict[str, Any]) -> dict:
    cfg = get_config()
    params = {**params, "apiKey": _require_key()}
    url = f"{cfg.news_api_base_url}/{endpoint}"
    async with httpx.AsyncClient(timeout=cfg.news_api_timeout_seconds) as client:
        response = await client.get(url, params=params)
    _raise_for_upstream(response)
    return response.json()


async def top_headlines(
    category: str | None = None,
    country: str | None = None,
    page_size: int | None = None,
) -> dict:
    """Fetch top headlines for a category and country.

    Args:
        category: News category; defaults to config's default_category.
        country: Two-letter country code; defaults to config's default_country.
        page_size: Articles per page; defaults to config's default_page_size.

    Returns:
        The upstream JSON body (``status``, ``totalResults``, ``articles``).

    Raises:
        ConfigurationError: If NEWS_API_KEY is not set.
        NewsApiError: If the upstream API returns an error status.
    """
    cfg = get_config()
    params = {
        "country": country or cfg.default_country,
        "category": category or cfg.default_category,
        "pageSize": page_size or cfg.default_page_size,
    }
    logger.info(
        "Fetching news: category=%s, country=%s, pageSize=%s",
        params["category"], params["country"], params["pageSize"],
    )
    data = await _get("top-headlines", params)
    logger.info("Fetched %d articles", len(data.get("articles") or []))
    return data


async def search(
    query: str,
    page_size: int | None = None,
    language: str | None = None,
) -> dict:
    """Search all articles by keyword, newest first.

    Raises:
        InputError: If *query* is blank.
        ConfigurationError: If NEWS_API_KEY is not set.
        NewsApiError: If the upstream API returns an error status.
    """
    if not query or not query.strip():
        raise InputError('Search query parameter "q" is required')

    cfg = get_config()
    params = {
        "q": query.strip(),
        "pageSize": page_size or cfg.default_page_size,
        "language": language or cfg.default_language,
        "sortBy": "publishedAt",
    }
    logger.info("Searching news for: %r", params["q"])
    data = await _get("everything", params)
    logger.info("Found %d articles", len(data.get("articles") or []))
    return data

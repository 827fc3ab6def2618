"""News proxy tools — 2 tools on a FastMCP sub-server."""

from __future__ import annotations

import logging

from fastmcp import FastMCP
from mcp.types import ToolAnnotations

from .. import news as news_api
from ..errors import ConfigurationError, InputError, make_news_error, make_tool_error
from ..types import CountryCode, LanguageCode, NewsCategory, PageSize, SearchQuery

logger = logging.getLogger(__name__)
news_server = FastMCP("news")


@news_server.tool(annotations=ToolAnnotations(readOnlyHint=True, openWorldHint=True))
async def news_headlines(
    category: NewsCategory | None = None,
    country: CountryCode | None = None,
    page_size: PageSize | None = None,
) -> dict:
    """Fetch top headlines from the News API.

    Args:
        category: News category (defaults to the configured category, "general").
        country: Two-letter country code (defaults to "us").
        page_size: How many articles to return (1-100, default 10).

    Returns:
        The News API response (status, totalResults, articles) unchanged,
        or an error dict.
    """
    try:
        return await news_api.top_headlines(category=category, country=country, page_size=page_size)
    except ConfigurationError as exc:
        return make_tool_error(exc)
    except Exception as exc:
        logger.error("Error fetching news: %s", exc)
        return make_news_error(exc, "fetch news")


@news_server.tool(annotations=ToolAnnotations(readOnlyHint=True, openWorldHint=True))
async def news_search(
    q: SearchQuery,
    page_size: PageSize | None = None,
    language: LanguageCode | None = None,
) -> dict:
    """Search all News API articles by keyword, newest first.

    Args:
        q: Keywords or phrase.
        page_size: How many articles to return (1-100, default 10).
        language: Two-letter language code (defaults to "en").

    Returns:
        The News API response unchanged, or an error dict.
    """
    try:
        return await news_api.search(q, page_size=page_size, language=language)
    except (InputError, ConfigurationError) as exc:
        return make_tool_error(exc)
    except Exception as exc:
        logger.error("Error searching news: %s", exc)
        return make_news_error(exc, "search news")

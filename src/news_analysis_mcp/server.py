"""Main FastMCP server — mounts all sub-servers."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastmcp import FastMCP

from .client import GeminiClient
from .config import get_config
from .tools.analysis import analysis_server
from .tools.infra import infra_server
from .tools.news import news_server

logger = logging.getLogger(__name__)


@asynccontextmanager
async def _lifespan(server: FastMCP):
    """Startup/shutdown hook — reports key status, tears down Gemini clients."""
    cfg = get_config()
    if not cfg.news_api_key:
        logger.warning("NEWS_API_KEY not found — get your key at https://newsapi.org/")
    if not cfg.gemini_api_key:
        logger.warning("GEMINI_API_KEY not found — get your key at https://ai.google.dev/")
    yield {}
    closed = await GeminiClient.close_all()
    logger.info("Lifespan shutdown: closed %d client(s)", closed)


app = FastMCP(
    "news-analysis",
    instructions=(
        "News headlines and keyword search via the News API, plus Gemini-powered "
        "article analysis: summary, key points, sentiment, tone, and bias."
    ),
    lifespan=_lifespan,
)

app.mount(analysis_server)
app.mount(news_server)
app.mount(infra_server)


def main() -> None:
    """Entry-point for ``news-analysis-mcp`` console script."""
    cfg = get_config()
    if cfg.transport == "http":
        logger.info("Serving on http://%s:%d", cfg.host, cfg.port)
        app.run(transport="http", host=cfg.host, port=cfg.port)
    else:
        app.run()


if __name__ == "__main__":
    main()

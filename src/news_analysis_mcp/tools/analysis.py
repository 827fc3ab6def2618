"""Article analysis tool — 1 tool on a FastMCP sub-server."""

from __future__ import annotations

import logging
import time
from typing import Annotated

from fastmcp import FastMCP
from mcp.types import ToolAnnotations
from pydantic import Field

from ..bounded import bounded_call
from ..client import GeminiClient
from ..config import get_config
from ..errors import ConfigurationError, InputError, classify_analysis_error, make_tool_error
from ..models.analysis import AnalysisInput
from ..normalizer import normalize
from ..prompts.analysis import build_analysis_prompt
from ..types import ArticleField

logger = logging.getLogger(__name__)
analysis_server = FastMCP("analysis")


@analysis_server.tool(annotations=ToolAnnotations(readOnlyHint=True, openWorldHint=True))
async def analyze_article(
    title: Annotated[ArticleField, Field(description="Article headline")] = None,
    description: Annotated[ArticleField, Field(description="Article description or standfirst")] = None,
    content: Annotated[ArticleField, Field(description="Article body text")] = None,
) -> dict:
    """Summarize a news article and assess its sentiment, tone, and bias.

    Provide at least one of title, description, or content. The model's
    reply is normalized so a successful call always returns all five
    fields, even when the reply was not valid JSON.

    Args:
        title: Article headline.
        description: Short description of the article.
        content: Article body.

    Returns:
        Dict with summary, keyPoints, sentiment {type, explanation}, tone,
        and biasDetection, or an error dict with error, details, and hint.
    """
    article = AnalysisInput(title=title, description=description, content=content)

    try:
        if not article.has_text():
            raise InputError(
                "No content provided. Please provide at least title, description, or content."
            )
        GeminiClient.get()
    except (InputError, ConfigurationError) as exc:
        return make_tool_error(exc)

    cfg = get_config()
    prompt = build_analysis_prompt(article)
    logger.info("Analyzing article with Gemini: %.50s", article.title or "(untitled)")

    started = time.perf_counter()
    try:
        raw = await bounded_call(
            lambda: GeminiClient.generate(prompt),
            timeout_seconds=cfg.analysis_timeout_seconds,
        )
    except Exception as exc:
        logger.error("Gemini analysis failed: %s", exc)
        return classify_analysis_error(exc).model_dump(mode="json")

    logger.info("Received Gemini response in %.2fs", time.perf_counter() - started)
    logger.debug("Raw response preview: %r", raw[:100])
    return normalize(raw).to_json()

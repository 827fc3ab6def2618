"""Infrastructure tools — 3 tools on a FastMCP sub-server."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Annotated

from fastmcp import FastMCP
from mcp.types import ToolAnnotations
from pydantic import Field

from ..bounded import pending_count
from ..config import get_config, update_config
from ..errors import make_tool_error

infra_server = FastMCP("infra")
_SENSITIVE_CONFIG_FIELDS = {
    "gemini_api_key",
    "news_api_key",
}


def _redacted_config() -> dict:
    """Return runtime config with secret-bearing fields removed."""
    return get_config().model_dump(exclude=_SENSITIVE_CONFIG_FIELDS)


@infra_server.tool(annotations=ToolAnnotations(readOnlyHint=True, openWorldHint=False))
async def infra_health() -> dict:
    """Liveness check.

    Returns:
        Dict with status, message, and an ISO-8601 UTC timestamp.
    """
    return {
        "status": "OK",
        "message": "Server is running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@infra_server.tool(annotations=ToolAnnotations(readOnlyHint=True, openWorldHint=False))
async def infra_status() -> dict:
    """Report which upstream API keys are configured, without revealing them.

    ``abandonedCalls`` counts model calls that outlived their deadline and
    are still running in the background.
    """
    cfg = get_config()
    return {
        "newsApiConfigured": bool(cfg.news_api_key),
        "geminiApiConfigured": bool(cfg.gemini_api_key),
        "model": cfg.default_model,
        "transport": cfg.transport,
        "port": cfg.port,
        "abandonedCalls": pending_count(),
    }


@infra_server.tool(
    annotations=ToolAnnotations(
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    )
)
async def infra_configure(
    model: Annotated[str | None, Field(description="Gemini model ID override")] = None,
    temperature: Annotated[float | None, Field(ge=0.0, le=2.0, description="Sampling temperature")] = None,
    analysis_timeout: Annotated[float | None, Field(
        gt=0, le=300, description="Seconds to wait for Gemini before giving up",
    )] = None,
) -> dict:
    """Reconfigure the server at runtime — model, temperature, or analysis timeout.

    Changes take effect immediately for all subsequent tool calls.

    Returns:
        Dict with current_config (secrets removed).
    """
    try:
        overrides: dict[str, object] = {}
        if model is not None:
            overrides["default_model"] = model
        if temperature is not None:
            overrides["default_temperature"] = temperature
        if analysis_timeout is not None:
            overrides["analysis_timeout_seconds"] = analysis_timeout

        if overrides:
            update_config(**overrides)
        return {"current_config": _redacted_config()}
    except Exception as exc:
        return make_tool_error(exc)

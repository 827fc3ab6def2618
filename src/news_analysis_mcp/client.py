"""Shared Gemini client pool and plain-text generation."""

from __future__ import annotations

import logging
import os
from typing import Any

from google import genai
from google.genai import types

from .config import get_config
from .errors import GEMINI_KEY_URL, ConfigurationError

logger = logging.getLogger(__name__)


class GeminiClient:
    """Process-wide Gemini client pool (one client per API key)."""

    _clients: dict[str, genai.Client] = {}

    @classmethod
    def get(cls, api_key: str | None = None) -> genai.Client:
        """Return (or create) the shared client for *api_key*.

        Raises:
            ConfigurationError: If no key is passed, configured, or exported.
        """
        key = api_key or get_config().gemini_api_key or os.getenv("GEMINI_API_KEY", "")
        if not key:
            raise ConfigurationError("GEMINI_API_KEY", hint=f"Get your key at {GEMINI_KEY_URL}")
        if key not in cls._clients:
            cls._clients[key] = genai.Client(api_key=key)
            logger.info("Created Gemini client (key …%s)", key[-4:])
        return cls._clients[key]

    @classmethod
    async def generate(cls, contents: Any) -> str:
        """Generate text via Gemini with the configured model and temperature.

        A single attempt: failures propagate to the caller unchanged so
        their messages can be classified.

        Returns:
            The model's text response with thinking parts stripped.
        """
        cfg = get_config()
        config = types.GenerateContentConfig()
        if cfg.default_temperature is not None:
            config.temperature = cfg.default_temperature

        client = cls.get()
        response = await client.aio.models.generate_content(
            model=cfg.default_model,
            contents=contents,
            config=config,
        )

        content = response.candidates[0].content if response.candidates else None
        parts = (content.parts if content else None) or []
        text_parts = [p.text for p in parts if p.text and not getattr(p, "thought", False)]
        return "\n".join(text_parts) if text_parts else (response.text or "")

    @classmethod
    async def close_all(cls) -> int:
        """Shut down all shared clients. Returns count closed."""
        count = 0
        for client in list(cls._clients.values()):
            try:
                await client.aio.aclose()
            except Exception:
                logger.debug("Async Gemini client close failed", exc_info=True)
            try:
                client.close()
            except Exception:
                logger.debug("Gemini client close failed", exc_info=True)
            count += 1
        cls._clients.clear()
        logger.info("Closed %d Gemini client(s)", count)
        return count

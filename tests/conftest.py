"""Shared test fixtures for news-analysis-mcp."""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch

import pytest


def unwrap_tool(tool: Any) -> Any:
    """Extract the raw coroutine from a FastMCP FunctionTool, if wrapped.

    FastMCP 2.x wraps @server.tool functions in FunctionTool (not callable).
    FastMCP 3.x preserves the original function. This helper works with both.
    """
    return getattr(tool, "fn", tool)


@pytest.fixture(autouse=True, scope="session")
def _unwrap_fastmcp_tools():
    """Patch tool modules so FunctionTool objects become directly callable."""
    import importlib
    import pkgutil

    import news_analysis_mcp.tools as tools_pkg

    for info in pkgutil.walk_packages(tools_pkg.__path__, tools_pkg.__name__ + "."):
        mod = importlib.import_module(info.name)
        for name in list(vars(mod)):
            obj = getattr(mod, name, None)
            if obj is not None and hasattr(obj, "fn") and not callable(obj):
                setattr(mod, name, obj.fn)


@pytest.fixture(autouse=True)
def _set_dummy_api_keys(monkeypatch):
    """Ensure tests never hit the real Gemini or News APIs."""
    monkeypatch.setenv("GEMINI_API_KEY", "test-key-not-real")
    monkeypatch.setenv("NEWS_API_KEY", "news-key-not-real")


@pytest.fixture(autouse=True)
def _isolate_dotenv(tmp_path, monkeypatch):
    """Prevent tests from loading the user's real ~/.config/news-analysis-mcp/.env."""
    monkeypatch.setattr(
        "news_analysis_mcp.dotenv.DEFAULT_ENV_PATH",
        tmp_path / "nonexistent.env",
    )


@pytest.fixture(autouse=True)
def clean_config():
    """Reset the config singleton between tests."""
    import news_analysis_mcp.config as cfg_mod

    cfg_mod._config = None
    yield
    cfg_mod._config = None


@pytest.fixture()
def mock_gemini_client():
    """Patch GeminiClient.get() and .generate() for unit tests."""
    with (
        patch("news_analysis_mcp.client.GeminiClient.get") as mock_get,
        patch(
            "news_analysis_mcp.client.GeminiClient.generate", new_callable=AsyncMock
        ) as mock_gen,
    ):
        client = MagicMock()
        mock_get.return_value = client
        yield {
            "get": mock_get,
            "generate": mock_gen,
            "client": client,
        }


class FakeResponse:
    """Minimal httpx.Response stand-in for the News API."""

    def __init__(self, status_code: int = 200, body: Any = None, reason: str = "OK"):
        self.status_code = status_code
        self._body = body if body is not None else {}
        self.reason_phrase = reason

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    def json(self) -> Any:
        if isinstance(self._body, Exception):
            raise self._body
        return self._body


class FakeClient:
    """Minimal httpx.AsyncClient mock that records GET calls."""

    def __init__(self, resp: FakeResponse | Exception):
        self._resp = resp
        self.calls: list[tuple[str, dict]] = []

    async def get(self, url, params=None):
        self.calls.append((url, params or {}))
        if isinstance(self._resp, Exception):
            raise self._resp
        return self._resp

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        pass


@pytest.fixture()
def fake_news_client():
    """Patch httpx.AsyncClient in the news module; call with a FakeResponse."""
    patches = []

    def _install(resp: FakeResponse | Exception) -> FakeClient:
        client = FakeClient(resp)
        p = patch("news_analysis_mcp.news.httpx.AsyncClient", return_value=client)
        p.start()
        patches.append(p)
        return client

    yield _install
    for p in patches:
        p.stop()

"""Load API keys from a shared per-user config file.

Reads ``~/.config/news-analysis-mcp/.env`` and injects any variable that
the process environment leaves unset, so the server finds its Gemini and
News API keys no matter which directory the MCP host launches it from.
"""

from __future__ import annotations

import os
from pathlib import Path

DEFAULT_ENV_PATH = Path.home() / ".config" / "news-analysis-mcp" / ".env"

_QUOTES = ('"', "'")


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in _QUOTES:
        return value[1:-1]
    return value


def _needs_value(key: str, current: str | None) -> bool:
    """True when *current* is missing, blank, or an unexpanded ``$KEY`` reference.

    Some MCP hosts forward ``NEWS_API_KEY="${NEWS_API_KEY}"`` verbatim when the
    user never exported the variable.
    """
    if current is None:
        return True
    value = _unquote(current.strip()).strip()
    if not value:
        return True
    if value in (f"${key}", f"${{{key}}}"):
        return True
    return value.startswith(f"${{{key}:-") and value.endswith("}")


def parse_dotenv(path: Path) -> dict[str, str]:
    """Read ``KEY=VALUE`` pairs from *path*.

    Blank lines and ``#`` comments are ignored, an ``export`` prefix is
    allowed, and one layer of matching quotes is stripped from values.
    Variables are not expanded. A missing file yields an empty dict.
    """
    if not path.is_file():
        return {}

    pairs: dict[str, str] = {}
    for raw in path.read_text().splitlines():
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        line = line.removeprefix("export ")
        key, sep, value = line.partition("=")
        key = key.strip()
        if not sep or not key:
            continue
        pairs[key] = _unquote(value.strip())
    return pairs


def load_dotenv(path: Path | None = None) -> dict[str, str]:
    """Inject values from *path* into ``os.environ`` where they are needed.

    Args:
        path: File to read. Defaults to :data:`DEFAULT_ENV_PATH`.

    Returns:
        The variables that were injected.
    """
    injected: dict[str, str] = {}
    for key, value in parse_dotenv(path or DEFAULT_ENV_PATH).items():
        if _needs_value(key, os.environ.get(key)):
            os.environ[key] = value
            injected[key] = value
    return injected

"""Turn a raw model completion into a fully populated AnalysisRecord.

Models asked for "JSON only" still wrap the object in markdown fences,
chat around it, drop fields, or answer in plain prose. ``normalize`` cleans
the text, tries a strict parse, and then either coerces the parsed object
field by field or falls back to a record built from the raw text.
``normalize`` never raises.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from typing import Any

from .models.analysis import (
    NO_SUMMARY,
    NOT_ANALYZED,
    NOT_SPECIFIED,
    AnalysisRecord,
    Sentiment,
)

logger = logging.getLogger(__name__)

FENCE_RE = re.compile(r"```(?:json)?\s*")

SUMMARY_LIMIT = 500
ELLIPSIS = "..."

FALLBACK_KEY_POINTS = (
    "AI analysis completed",
    "Response could not be fully parsed",
    "See summary for full details",
)
FALLBACK_SENTIMENT = Sentiment(type="Neutral", explanation="Automatic sentiment parsing unavailable")
FALLBACK_TONE = "Informative"
FALLBACK_BIAS = "Could not perform automatic bias detection"


@dataclass(frozen=True)
class ParsedObject:
    """Strict parse succeeded: a JSON object with a usable summary."""

    data: dict[str, Any]


@dataclass(frozen=True)
class StructuralFailure:
    """Strict parse failed; ``reason`` is for logs only."""

    reason: str


ParseResult = ParsedObject | StructuralFailure


def clean_completion(raw: str) -> str:
    """Strip fences and surrounding chatter, leaving the likely JSON object.

    Fences are removed everywhere, not only at the ends. When the text
    contains a ``{`` followed later by a ``}``, only the span from the first
    ``{`` to the last ``}`` is kept.
    """
    text = FENCE_RE.sub("", raw.strip()).strip()
    start = text.find("{")
    end = text.rfind("}")
    if start != -1 and end > start:
        text = text[start : end + 1]
    return text


def try_parse_strict(text: str) -> ParseResult:
    """Parse *text* as a JSON object that carries a truthy ``summary``."""
    try:
        data = json.loads(text)
    except (ValueError, RecursionError) as exc:
        return StructuralFailure(f"invalid JSON: {exc}")
    if not isinstance(data, dict):
        return StructuralFailure(f"expected a JSON object, got {type(data).__name__}")
    if not data.get("summary"):
        return StructuralFailure("missing summary")
    return ParsedObject(data)


def _utf8_safe(text: str) -> str:
    # Lone surrogates survive json.loads but cannot be encoded on the way out.
    return text.encode("utf-8", "replace").decode("utf-8")


def _as_text(value: Any) -> str:
    if not isinstance(value, str):
        value = json.dumps(value, ensure_ascii=False)
    return _utf8_safe(value)


def _text_field(data: dict[str, Any], key: str, default: str) -> str:
    value = data.get(key)
    return _as_text(value) if value else default


def _key_points(value: Any) -> tuple[str, ...]:
    if not isinstance(value, list):
        return ()
    return tuple(_as_text(point) for point in value)


def _sentiment(value: Any) -> Sentiment:
    # All or nothing: a half-formed sentiment object is replaced, not merged.
    if (
        isinstance(value, dict)
        and isinstance(value.get("type"), str)
        and isinstance(value.get("explanation"), str)
    ):
        return Sentiment(type=_as_text(value["type"]), explanation=_as_text(value["explanation"]))
    return Sentiment()


def coerce_record(data: dict[str, Any]) -> AnalysisRecord:
    """Build a record from a parsed object, defaulting each bad or missing field."""
    return AnalysisRecord(
        summary=_text_field(data, "summary", NO_SUMMARY),
        key_points=_key_points(data.get("keyPoints")),
        sentiment=_sentiment(data.get("sentiment")),
        tone=_text_field(data, "tone", NOT_SPECIFIED),
        bias_detection=_text_field(data, "biasDetection", NOT_ANALYZED),
    )


def truncate_summary(raw: str) -> str:
    """First SUMMARY_LIMIT characters of *raw* plus an ellipsis, if longer."""
    if len(raw) > SUMMARY_LIMIT:
        return raw[:SUMMARY_LIMIT] + ELLIPSIS
    return raw


def fallback_record(raw: str) -> AnalysisRecord:
    """Degraded record for a completion that could not be parsed."""
    return AnalysisRecord(
        summary=truncate_summary(_utf8_safe(raw)),
        key_points=FALLBACK_KEY_POINTS,
        sentiment=FALLBACK_SENTIMENT,
        tone=FALLBACK_TONE,
        bias_detection=FALLBACK_BIAS,
    )


def normalize(raw: str) -> AnalysisRecord:
    """Normalize a raw completion into an AnalysisRecord.

    Args:
        raw: Text returned by the model, in any shape.

    Returns:
        The coerced record when the completion holds a JSON object with a
        summary, otherwise the fallback record built from *raw* itself.
    """
    if not isinstance(raw, str):
        raw = "" if raw is None else str(raw)

    result = try_parse_strict(clean_completion(raw))
    if isinstance(result, StructuralFailure):
        logger.warning("Could not parse analysis response (%s); using raw text", result.reason)
        logger.debug("Unparsed response preview: %r", raw[:100])
        return fallback_record(raw)

    return coerce_record(result.data)

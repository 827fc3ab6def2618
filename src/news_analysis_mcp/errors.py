"""Structured error handling — exceptions, categories, and tool error models."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel

GEMINI_KEY_URL = "https://makersuite.google.com/app/apikey"
NEWS_KEY_URL = "https://newsapi.org/"


class InputError(ValueError):
    """Raised when a request carries no usable input."""


class ConfigurationError(Exception):
    """Raised when a required credential is not configured."""

    def __init__(self, variable: str, hint: str = "") -> None:
        super().__init__(f"{variable} not configured in .env file")
        self.variable = variable
        self.hint = hint


class AnalysisTimeoutError(TimeoutError):
    """Raised when the model call loses the race against its deadline."""

    def __init__(self, timeout_seconds: float) -> None:
        super().__init__(f"Gemini API timeout after {timeout_seconds:g}s")
        self.timeout_seconds = timeout_seconds


class NewsApiError(Exception):
    """Raised when the news API answers with a non-success status."""

    def __init__(self, status: int, message: str, code: str = "UNKNOWN_ERROR") -> None:
        super().__init__(f"News API error {status}: {message}")
        self.status = status
        self.message = message
        self.code = code


class ErrorCategory(str, Enum):
    """Categories of errors for diagnostics."""

    INPUT_MISSING = "INPUT_MISSING"
    CONFIG_MISSING = "CONFIG_MISSING"
    API_KEY_INVALID = "API_KEY_INVALID"
    API_QUOTA_EXCEEDED = "API_QUOTA_EXCEEDED"
    API_TIMEOUT = "API_TIMEOUT"
    MODEL_UNAVAILABLE = "MODEL_UNAVAILABLE"
    NEWS_API_ERROR = "NEWS_API_ERROR"
    NETWORK_ERROR = "NETWORK_ERROR"
    UNKNOWN = "UNKNOWN"


class ToolError(BaseModel):
    """Structured error returned from any tool."""

    error: str
    category: str
    hint: str
    retryable: bool = False
    retry_after_seconds: int | None = None


class AnalysisFailure(BaseModel):
    """Error body for a failed model call: ``{error, details, hint}``."""

    error: str
    details: str
    hint: str = ""
    category: str = ErrorCategory.UNKNOWN.value
    retryable: bool = False


class NewsFailure(BaseModel):
    """Error body for a failed news API proxy call."""

    error: str
    details: str
    code: str = "UNKNOWN_ERROR"
    status: int = 500


# Checked in order; the first signature found in the message wins.
_ANALYSIS_SIGNATURES: tuple[tuple[str, ErrorCategory, str, str], ...] = (
    (
        "API key",
        ErrorCategory.API_KEY_INVALID,
        "Invalid Gemini API Key",
        f"Please check your GEMINI_API_KEY in .env file. Get a key at {GEMINI_KEY_URL}",
    ),
    (
        "quota",
        ErrorCategory.API_QUOTA_EXCEEDED,
        "API Quota Exceeded",
        "You have exceeded your Gemini API quota. Wait a few minutes or check "
        "your quota at https://makersuite.google.com/",
    ),
    (
        "timeout",
        ErrorCategory.API_TIMEOUT,
        "Request Timeout",
        "The AI took too long to respond. Try with a shorter article.",
    ),
    (
        "model not found",
        ErrorCategory.MODEL_UNAVAILABLE,
        "Model Not Available",
        "The configured Gemini model might not be available in your region.",
    ),
)


def classify_analysis_error(error: Exception) -> AnalysisFailure:
    """Map a failed model call to an error/details/hint triple.

    Substring matching on the message is a heuristic: the upstream
    message format is not stable.
    """
    message = str(error)
    for needle, category, title, hint in _ANALYSIS_SIGNATURES:
        if needle in message:
            return AnalysisFailure(
                error=title,
                details=message,
                hint=hint,
                category=category.value,
                retryable=category in {ErrorCategory.API_QUOTA_EXCEEDED, ErrorCategory.API_TIMEOUT},
            )
    return AnalysisFailure(error="Failed to analyze with Gemini AI", details=message)


def categorize_error(error: Exception) -> tuple[ErrorCategory, str]:
    """Map an exception to an ErrorCategory + human-readable hint."""
    if isinstance(error, InputError):
        return (ErrorCategory.INPUT_MISSING, str(error))
    if isinstance(error, ConfigurationError):
        return (ErrorCategory.CONFIG_MISSING, error.hint or str(error))
    if isinstance(error, NewsApiError):
        if error.status == 401:
            return (ErrorCategory.API_KEY_INVALID, f"Check NEWS_API_KEY — get a key at {NEWS_KEY_URL}")
        if error.status == 429:
            return (ErrorCategory.API_QUOTA_EXCEEDED, "News API rate limit hit — wait and retry")
        return (ErrorCategory.NEWS_API_ERROR, error.message)
    if isinstance(error, TimeoutError):
        return (ErrorCategory.NETWORK_ERROR, "Request timed out — try again or check connectivity")

    s = str(error).lower()
    if "timeout" in s or "timed out" in s:
        return (ErrorCategory.NETWORK_ERROR, "Request timed out — try again or check connectivity")
    if "connect" in s or "refused" in s or "unreachable" in s:
        return (ErrorCategory.NETWORK_ERROR, "Cannot reach the upstream API — check network connectivity")

    return (ErrorCategory.UNKNOWN, str(error))


def make_tool_error(error: Exception) -> dict:
    """Create a serialisable ToolError dict from an exception."""
    cat, hint = categorize_error(error)
    retryable = cat in {
        ErrorCategory.API_QUOTA_EXCEEDED,
        ErrorCategory.NETWORK_ERROR,
    }
    return ToolError(
        error=str(error),
        category=cat.value,
        hint=hint,
        retryable=retryable,
        retry_after_seconds=60 if cat == ErrorCategory.API_QUOTA_EXCEEDED else None,
    ).model_dump(mode="json")


def make_news_error(error: Exception, action: str) -> dict:
    """Create a NewsFailure dict; *action* reads e.g. ``"fetch news"``."""
    if isinstance(error, NewsApiError):
        failure = NewsFailure(
            error=f"Failed to {action}",
            details=error.message,
            code=error.code,
            status=error.status,
        )
    else:
        failure = NewsFailure(error=f"Failed to {action}", details=str(error))
    return failure.model_dump(mode="json")

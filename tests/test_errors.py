"""Tests for error classification and structured error dicts."""

from __future__ import annotations

import httpx
import pytest

from news_analysis_mcp.errors import (
    AnalysisTimeoutError,
    ConfigurationError,
    InputError,
    NewsApiError,
    classify_analysis_error,
    make_news_error,
    make_tool_error,
)


class TestClassifyAnalysisError:
    def test_api_key(self):
        failure = classify_analysis_error(Exception("400 API key not valid. Please pass a valid API key."))
        assert failure.error == "Invalid Gemini API Key"
        assert "GEMINI_API_KEY" in failure.hint
        assert failure.category == "API_KEY_INVALID"

    def test_quota(self):
        failure = classify_analysis_error(Exception("429 You exceeded your current quota"))
        assert failure.error == "API Quota Exceeded"
        assert failure.retryable is True

    def test_timeout(self):
        failure = classify_analysis_error(AnalysisTimeoutError(30))
        assert failure.error == "Request Timeout"
        assert failure.details == "Gemini API timeout after 30s"
        assert "shorter article" in failure.hint

    def test_model_not_found(self):
        failure = classify_analysis_error(Exception("404 model not found for API version v1beta"))
        assert failure.error == "Model Not Available"

    def test_first_match_wins(self):
        failure = classify_analysis_error(Exception("API key quota timeout model not found"))
        assert failure.error == "Invalid Gemini API Key"

    def test_quota_beats_timeout(self):
        failure = classify_analysis_error(Exception("quota check timeout"))
        assert failure.error == "API Quota Exceeded"

    def test_matching_is_case_sensitive(self):
        failure = classify_analysis_error(Exception("Timeout waiting for QUOTA"))
        assert failure.error == "Failed to analyze with Gemini AI"

    def test_unclassified(self):
        failure = classify_analysis_error(RuntimeError("something odd"))
        assert failure.model_dump(mode="json") == {
            "error": "Failed to analyze with Gemini AI",
            "details": "something odd",
            "hint": "",
            "category": "UNKNOWN",
            "retryable": False,
        }


class TestMakeToolError:
    def test_input_error(self):
        result = make_tool_error(InputError("No content provided."))
        assert result["category"] == "INPUT_MISSING"
        assert result["retryable"] is False

    def test_configuration_error_uses_hint(self):
        result = make_tool_error(ConfigurationError("NEWS_API_KEY", hint="Get your key at https://newsapi.org/"))
        assert result["category"] == "CONFIG_MISSING"
        assert result["error"] == "NEWS_API_KEY not configured in .env file"
        assert result["hint"] == "Get your key at https://newsapi.org/"

    def test_builtin_timeout_maps_to_network_error(self):
        result = make_tool_error(TimeoutError())
        assert result["category"] == "NETWORK_ERROR"
        assert result["retryable"] is True

    def test_httpx_timeout_maps_to_network_error(self):
        result = make_tool_error(httpx.ReadTimeout("read timed out"))
        assert result["category"] == "NETWORK_ERROR"
        assert result["retryable"] is True

    def test_httpx_network_maps_to_network_error(self):
        result = make_tool_error(httpx.ConnectError("connection refused"))
        assert result["category"] == "NETWORK_ERROR"

    @pytest.mark.parametrize(("status", "category"), [
        (401, "API_KEY_INVALID"),
        (429, "API_QUOTA_EXCEEDED"),
        (500, "NEWS_API_ERROR"),
    ])
    def test_news_api_statuses(self, status, category):
        result = make_tool_error(NewsApiError(status, "upstream said no"))
        assert result["category"] == category

    def test_quota_sets_retry_after(self):
        result = make_tool_error(NewsApiError(429, "rateLimited"))
        assert result["retry_after_seconds"] == 60


class TestMakeNewsError:
    def test_upstream_error_fields(self):
        exc = NewsApiError(401, "Your API key is invalid.", code="apiKeyInvalid")
        assert make_news_error(exc, "fetch news") == {
            "error": "Failed to fetch news",
            "details": "Your API key is invalid.",
            "code": "apiKeyInvalid",
            "status": 401,
        }

    def test_transport_error_defaults(self):
        result = make_news_error(httpx.ConnectError("connection refused"), "search news")
        assert result == {
            "error": "Failed to search news",
            "details": "connection refused",
            "code": "UNKNOWN_ERROR",
            "status": 500,
        }

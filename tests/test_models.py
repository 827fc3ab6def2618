"""Tests for Pydantic models."""

from news_analysis_mcp.models.analysis import AnalysisInput, AnalysisRecord, Sentiment


class TestAnalysisInput:
    def test_has_text(self):
        assert AnalysisInput(content="body").has_text()
        assert not AnalysisInput().has_text()
        assert not AnalysisInput(title="", description="").has_text()


class TestAnalysisRecord:
    def test_defaults(self):
        out = AnalysisRecord().to_json()
        assert out == {
            "summary": "No summary available",
            "keyPoints": [],
            "sentiment": {"type": "Neutral", "explanation": "Not analyzed"},
            "tone": "Not specified",
            "biasDetection": "Not analyzed",
        }

    def test_accepts_camel_case_input(self):
        r = AnalysisRecord.model_validate({
            "summary": "s",
            "keyPoints": ["a"],
            "biasDetection": "none",
        })
        assert r.key_points == ("a",)
        assert r.bias_detection == "none"

    def test_sentiment_defaults(self):
        assert Sentiment() == Sentiment(type="Neutral", explanation="Not analyzed")

"""Article analysis models — request shape and the normalized analysis record.

``AnalysisRecord`` serializes with camelCase keys (``keyPoints``,
``biasDetection``) because that is the shape the frontend renders.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

NO_SUMMARY = "No summary available"
NOT_ANALYZED = "Not analyzed"
NOT_SPECIFIED = "Not specified"


class AnalysisInput(BaseModel):
    """Article text submitted for analysis. Any field may be missing."""

    title: str | None = None
    description: str | None = None
    content: str | None = None

    def has_text(self) -> bool:
        """True when at least one field carries non-empty text."""
        return any((self.title, self.description, self.content))


class Sentiment(BaseModel):
    """Overall sentiment; ``type`` is Positive/Negative/Neutral or the model's own label."""

    model_config = ConfigDict(frozen=True)

    type: str = "Neutral"
    explanation: str = NOT_ANALYZED


class AnalysisRecord(BaseModel):
    """Fully populated analysis of one article.

    Built fresh per request by ``normalizer.normalize``; every field has a
    value whether or not the model produced one.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    summary: str = NO_SUMMARY
    key_points: tuple[str, ...] = Field(default=(), alias="keyPoints")
    sentiment: Sentiment = Field(default_factory=Sentiment)
    tone: str = NOT_SPECIFIED
    bias_detection: str = Field(default=NOT_ANALYZED, alias="biasDetection")

    def to_json(self) -> dict:
        """Serialize with the camelCase keys callers expect."""
        return self.model_dump(mode="json", by_alias=True)

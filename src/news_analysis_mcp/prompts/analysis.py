"""Article analysis prompt templates.

ARTICLE_TEXT — the Title/Description/Content block. Variables: {title},
{description}, {content}.
ANALYSIS_PROMPT — asks for the five-key JSON analysis object.
Variables: {article_text}.

The model does not always honour the "JSON only" instruction; the
normalizer repairs or falls back on whatever comes back.
"""

from __future__ import annotations

from ..models.analysis import AnalysisInput

MISSING_FIELD = "N/A"

ARTICLE_TEXT = """\
Title: {title}
Description: {description}
Content: {content}"""

ANALYSIS_PROMPT = """\
Analyze this news article and respond with ONLY a JSON object (no markdown, no extra text):

{{
  "summary": "2-3 sentence summary here",
  "keyPoints": ["point 1", "point 2", "point 3"],
  "sentiment": {{
    "type": "Positive or Negative or Neutral",
    "explanation": "why this sentiment"
  }},
  "tone": "the article's tone",
  "biasDetection": "bias analysis or 'No significant bias detected'"
}}

Article to analyze:
{article_text}"""


def build_article_text(article: AnalysisInput) -> str:
    """Render the article fields, substituting ``N/A`` for missing ones."""
    return ARTICLE_TEXT.format(
        title=article.title or MISSING_FIELD,
        description=article.description or MISSING_FIELD,
        content=article.content or MISSING_FIELD,
    ).strip()


def build_analysis_prompt(article: AnalysisInput) -> str:
    """Full prompt for one analysis call."""
    return ANALYSIS_PROMPT.format(article_text=build_article_text(article))

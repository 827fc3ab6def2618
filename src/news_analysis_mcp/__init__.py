"""News headlines and Gemini article analysis, served over MCP."""

__version__ = "0.1.0"

"""LLM provider package - Gemini structured output for conceptlab."""

from .google_provider import GeminiJSONProvider

__all__ = ["GeminiJSONProvider"]

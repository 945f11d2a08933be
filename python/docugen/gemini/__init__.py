"""Gemini API client module."""

from docugen.gemini.client import GeminiClient
from docugen.gemini.schemas import (
    DocumentInput,
    GeminiResponse,
    GenerationConfig,
)

__all__ = [
    "GeminiClient",
    "DocumentInput",
    "GeminiResponse",
    "GenerationConfig",
]

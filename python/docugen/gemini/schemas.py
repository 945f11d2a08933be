"""Pydantic schemas for Gemini API interactions."""

from typing import Any

from pydantic import BaseModel, Field


class GenerationConfig(BaseModel):
    """Configuration for text generation."""

    temperature: float = Field(default=0.4, ge=0.0, le=2.0)
    top_p: float = Field(default=0.95, ge=0.0, le=1.0)
    top_k: int = Field(default=40, ge=1)
    max_output_tokens: int = Field(default=32768, ge=1, le=65536)
    system_instruction: str | None = None
    response_mime_type: str | None = None
    response_schema: dict[str, Any] | None = None


class DocumentInput(BaseModel):
    """A file sent inline alongside the prompt."""

    data: bytes
    mime_type: str = "application/pdf"
    filename: str | None = None


class GeminiResponse(BaseModel):
    """Response from Gemini API."""

    text: str
    model: str
    finish_reason: str | None = None
    usage: dict[str, int] | None = None

"""Gemini API client using google-genai SDK with retries, timeouts, and safe logging."""

import json
from typing import Type, TypeVar

from google import genai
from google.genai import types
from google.genai.errors import APIError, ClientError, ServerError
from pydantic import BaseModel, ValidationError
from tenacity import (
    AsyncRetrying,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from docugen.config import Settings
from docugen.errors import LLMError
from docugen.gemini.schemas import DocumentInput, GeminiResponse, GenerationConfig
from docugen.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T", bound=BaseModel)


def is_retryable(exc: BaseException) -> bool:
    """Server errors and rate limiting are transient; other client errors are not."""
    if isinstance(exc, ServerError):
        return True
    return isinstance(exc, ClientError) and exc.code == 429


class GeminiClient:
    """
    Gemini API client using google-genai SDK with:
    - Retry with exponential backoff on 5xx and 429
    - Configurable timeouts
    - Safe logging (no tokens, truncated content)
    - Inline PDF attachments
    - JSON-mode output with an explicit response schema
    """

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self._client = self._create_client()

    def _create_client(self) -> genai.Client:
        """Create and configure the Gemini client."""
        client = genai.Client(
            api_key=self.settings.gemini_api_key,
            http_options=types.HttpOptions(
                timeout=self.settings.gemini_timeout_seconds * 1000,
            ),
        )
        logger.info(
            "Gemini client configured",
            model_text=self.settings.gemini_model_text,
            timeout_seconds=self.settings.gemini_timeout_seconds,
        )
        return client

    def _build_config(
        self,
        config: GenerationConfig | None = None,
    ) -> types.GenerateContentConfig:
        """Build generation config for the API."""
        cfg = config or GenerationConfig()

        gen_config = types.GenerateContentConfig(
            temperature=cfg.temperature,
            top_p=cfg.top_p,
            top_k=cfg.top_k,
            max_output_tokens=cfg.max_output_tokens,
        )

        if cfg.system_instruction:
            gen_config.system_instruction = cfg.system_instruction
        if cfg.response_mime_type:
            gen_config.response_mime_type = cfg.response_mime_type
        if cfg.response_schema:
            gen_config.response_schema = cfg.response_schema

        return gen_config

    def _build_contents(
        self,
        prompt: str,
        document: DocumentInput | None,
    ) -> str | list[types.Part]:
        """Plain prompt, or prompt plus an inline file part."""
        if document is None:
            return prompt
        return [
            types.Part.from_text(text=prompt),
            types.Part.from_bytes(data=document.data, mime_type=document.mime_type),
        ]

    def _log_request(
        self,
        prompt: str,
        model: str,
        document: DocumentInput | None = None,
    ) -> None:
        """Log request safely (truncate content)."""
        truncated = prompt[:200] + "..." if len(prompt) > 200 else prompt
        logger.info(
            "Gemini request",
            model=model,
            prompt_length=len(prompt),
            prompt_preview=truncated,
            document=document.filename if document else None,
            document_bytes=len(document.data) if document else 0,
        )

    def _log_response(self, response: GeminiResponse) -> None:
        """Log response safely."""
        truncated = (
            response.text[:200] + "..." if len(response.text) > 200 else response.text
        )
        logger.info(
            "Gemini response",
            model=response.model,
            response_length=len(response.text),
            response_preview=truncated,
            finish_reason=response.finish_reason,
            usage=response.usage,
        )

    async def _generate_once(
        self,
        model_name: str,
        contents: str | list[types.Part],
        config: GenerationConfig | None,
    ) -> GeminiResponse:
        response = await self._client.aio.models.generate_content(
            model=model_name,
            contents=contents,  # type: ignore[arg-type]
            config=self._build_config(config),
        )

        usage = None
        if response.usage_metadata:
            usage = {
                "prompt_tokens": response.usage_metadata.prompt_token_count or 0,
                "completion_tokens": response.usage_metadata.candidates_token_count or 0,
                "total_tokens": response.usage_metadata.total_token_count or 0,
            }

        finish_reason = None
        if response.candidates and response.candidates[0].finish_reason:
            finish_reason = response.candidates[0].finish_reason.name

        return GeminiResponse(
            text=response.text or "",
            model=model_name,
            finish_reason=finish_reason,
            usage=usage,
        )

    async def generate(
        self,
        prompt: str,
        document: DocumentInput | None = None,
        model: str | None = None,
        config: GenerationConfig | None = None,
    ) -> GeminiResponse:
        """
        Generate text from a prompt, optionally with an attached file.

        Args:
            prompt: The input prompt
            document: Optional inline file (e.g. the estimate PDF)
            model: Model name (defaults to settings.gemini_model_text)
            config: Generation configuration

        Returns:
            GeminiResponse with generated text

        Raises:
            LLMError: If generation fails after retries or returns nothing
        """
        model_name = model or self.settings.gemini_model_text
        contents = self._build_contents(prompt, document)
        self._log_request(prompt, model_name, document)

        try:
            async for attempt in AsyncRetrying(
                retry=retry_if_exception(is_retryable),
                stop=stop_after_attempt(self.settings.gemini_max_retries),
                wait=wait_exponential(multiplier=1, min=2, max=60),
                reraise=True,
            ):
                with attempt:
                    if attempt.retry_state.attempt_number > 1:
                        logger.warning(
                            "Retrying Gemini request",
                            attempt=attempt.retry_state.attempt_number,
                            model=model_name,
                        )
                    result = await self._generate_once(model_name, contents, config)
        except APIError as e:
            logger.error("Gemini API error", error=str(e), model=model_name)
            raise LLMError(f"Text generation failed: {str(e)}") from e
        except Exception as e:
            logger.error("Gemini generation failed", error=str(e), model=model_name)
            raise LLMError(f"Text generation failed: {str(e)}") from e

        self._log_response(result)

        if not result.text.strip():
            raise LLMError("Received an empty response from the AI model.")

        return result

    async def generate_json(
        self,
        prompt: str,
        response_schema: dict,
        document: DocumentInput | None = None,
        model: str | None = None,
        config: GenerationConfig | None = None,
    ) -> GeminiResponse:
        """
        Generate a JSON reply constrained by ``response_schema``.

        The raw text is returned undecoded; callers own the parse step.
        """
        json_config = (config or GenerationConfig()).model_copy(
            update={
                "response_mime_type": "application/json",
                "response_schema": response_schema,
            }
        )
        return await self.generate(prompt, document, model, json_config)

    async def generate_structured(
        self,
        prompt: str,
        output_schema: Type[T],
        response_schema: dict,
        model: str | None = None,
        config: GenerationConfig | None = None,
    ) -> T:
        """
        Generate JSON and validate it against a Pydantic model.

        Raises:
            LLMError: If generation, decoding or validation fails
        """
        response = await self.generate_json(
            prompt,
            response_schema,
            model=model,
            config=config,
        )

        try:
            return output_schema.model_validate(json.loads(response.text))
        except (json.JSONDecodeError, ValidationError) as e:
            logger.error(
                "Structured generation failed",
                error=str(e),
                schema=output_schema.__name__,
                response_preview=response.text[:200],
            )
            raise LLMError(f"Structured generation failed: {str(e)}") from e

"""Tests for the Gemini client wrapper."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from google.genai.errors import ClientError, ServerError
from tenacity import wait_none

from docugen.config import Settings
from docugen.errors import LLMError
from docugen.gemini.client import GeminiClient
from docugen.gemini.schemas import DocumentInput, GenerationConfig
from docugen.schemas.estimate import PdfRenderOutput


def fake_response(text: str | None) -> MagicMock:
    response = MagicMock()
    response.text = text
    response.usage_metadata = None
    response.candidates = []
    return response


@pytest.fixture
def settings() -> Settings:
    return Settings(
        internal_api_token="token",
        gemini_api_key="key",
        gemini_max_retries=1,
    )


@pytest.fixture
def generate_content():
    with patch("docugen.gemini.client.genai.Client") as client_cls:
        mock = AsyncMock(return_value=fake_response("hello"))
        client_cls.return_value.aio.models.generate_content = mock
        yield mock


class TestGeminiClient:
    """Tests for GeminiClient."""

    @pytest.mark.asyncio
    async def test_generate(self, settings, generate_content):
        client = GeminiClient(settings)

        response = await client.generate("prompt")

        assert response.text == "hello"
        assert response.model == settings.gemini_model_text
        assert generate_content.await_args.kwargs["contents"] == "prompt"

    @pytest.mark.asyncio
    async def test_document_is_sent_inline(self, settings, generate_content):
        client = GeminiClient(settings)

        await client.generate(
            "prompt",
            document=DocumentInput(data=b"%PDF-1.4", filename="estimate.pdf"),
        )

        contents = generate_content.await_args.kwargs["contents"]
        assert len(contents) == 2
        assert contents[0].text == "prompt"
        assert contents[1].inline_data.mime_type == "application/pdf"
        assert contents[1].inline_data.data == b"%PDF-1.4"

    @pytest.mark.asyncio
    async def test_generate_json_sets_schema(self, settings, generate_content):
        client = GeminiClient(settings)
        schema = {"type": "OBJECT", "properties": {}}

        await client.generate_json("prompt", schema, config=GenerationConfig(temperature=0.2))

        config = generate_content.await_args.kwargs["config"]
        assert config.response_mime_type == "application/json"
        assert config.temperature == 0.2

    @pytest.mark.asyncio
    async def test_empty_response(self, settings, generate_content):
        generate_content.return_value = fake_response("   ")
        client = GeminiClient(settings)

        with pytest.raises(LLMError, match="empty response"):
            await client.generate("prompt")

    @pytest.mark.asyncio
    async def test_failure_is_wrapped(self, settings, generate_content):
        generate_content.side_effect = RuntimeError("connection reset")
        client = GeminiClient(settings)

        with pytest.raises(LLMError) as exc_info:
            await client.generate("prompt")
        assert "connection reset" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_generate_structured(self, settings, generate_content):
        generate_content.return_value = fake_response('{"pdfContent": "JVBERi0="}')
        client = GeminiClient(settings)

        output = await client.generate_structured("prompt", PdfRenderOutput, {})

        assert output.pdf_content == "JVBERi0="

    @pytest.mark.asyncio
    async def test_generate_structured_invalid(self, settings, generate_content):
        generate_content.return_value = fake_response('{"other": 1}')
        client = GeminiClient(settings)

        with pytest.raises(LLMError):
            await client.generate_structured("prompt", PdfRenderOutput, {})


def api_error_body(code: int, status: str) -> dict:
    return {"error": {"code": code, "message": status.lower(), "status": status}}


class TestGeminiClientRetries:
    """Transient failures are retried; other client errors fail at once."""

    @pytest.fixture
    def retry_settings(self) -> Settings:
        return Settings(
            internal_api_token="token",
            gemini_api_key="key",
            gemini_max_retries=3,
        )

    @pytest.fixture(autouse=True)
    def no_backoff(self):
        with patch("docugen.gemini.client.wait_exponential", return_value=wait_none()):
            yield

    @pytest.mark.asyncio
    async def test_server_error_and_rate_limit_are_retried(
        self, retry_settings, generate_content
    ):
        generate_content.side_effect = [
            ServerError(503, api_error_body(503, "UNAVAILABLE")),
            ClientError(429, api_error_body(429, "RESOURCE_EXHAUSTED")),
            fake_response("hi"),
        ]
        client = GeminiClient(retry_settings)

        response = await client.generate("prompt")

        assert response.text == "hi"
        assert generate_content.await_count == 3

    @pytest.mark.asyncio
    async def test_bad_request_is_not_retried(self, retry_settings, generate_content):
        generate_content.side_effect = ClientError(400, api_error_body(400, "INVALID_ARGUMENT"))
        client = GeminiClient(retry_settings)

        with pytest.raises(LLMError):
            await client.generate("prompt")
        assert generate_content.await_count == 1

    @pytest.mark.asyncio
    async def test_gives_up_after_max_retries(self, retry_settings, generate_content):
        generate_content.side_effect = ServerError(500, api_error_body(500, "INTERNAL"))
        client = GeminiClient(retry_settings)

        with pytest.raises(LLMError):
            await client.generate("prompt")
        assert generate_content.await_count == 3

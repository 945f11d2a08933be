"""Error taxonomy and the JSON error responses the API returns."""

from typing import Any

from fastapi import HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from docugen.logging import get_logger, get_request_id

logger = get_logger(__name__)


class ErrorResponse(BaseModel):
    """Standard error response format."""

    code: str
    message: str
    details: dict[str, Any] | None = None
    request_id: str | None = None


class APIError(Exception):
    """Base API error with status code and error code."""

    expose_details = False

    def __init__(
        self,
        status_code: int,
        code: str,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.status_code = status_code
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)


class BadRequestError(APIError):
    """400 Bad Request."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(400, "BAD_REQUEST", message, details)


class UnauthorizedError(APIError):
    """401 Unauthorized."""

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(401, "UNAUTHORIZED", message)


class NotFoundError(APIError):
    """404 Not Found - unknown session or document index."""

    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(404, "NOT_FOUND", message)


class LLMError(APIError):
    """500 LLM Error - Gemini call failed or returned nothing."""

    def __init__(self, message: str = "LLM processing failed") -> None:
        super().__init__(500, "LLM_ERROR", message)


class MalformedResponseError(APIError):
    """
    502 Malformed Response - the model reply is not usable JSON.

    ``details`` (decode position or validation errors) is returned to the
    caller, since it describes the upstream reply rather than our internals.
    """

    expose_details = True

    def __init__(
        self,
        message: str = "The AI response could not be parsed",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(502, "MALFORMED_RESPONSE", message, details)


class EmptyResultError(APIError):
    """500 Empty Result - parsing produced no documents."""

    def __init__(
        self,
        message: str = "Could not parse the AI response into document sections",
    ) -> None:
        super().__init__(500, "EMPTY_RESULT", message)


class DocumentProcessingError(APIError):
    """500 Document Processing Error - e.g. an undecodable rendered PDF."""

    def __init__(self, message: str = "Document processing failed") -> None:
        super().__init__(500, "DOCUMENT_PROCESSING_ERROR", message)


HTTP_ERROR_CODES = {
    400: "BAD_REQUEST",
    401: "UNAUTHORIZED",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    413: "PAYLOAD_TOO_LARGE",
    422: "VALIDATION_ERROR",
    500: "INTERNAL_ERROR",
}


def error_response(
    status_code: int,
    code: str,
    message: str,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    """Build the JSON error body shared by every handler."""
    body = ErrorResponse(
        code=code,
        message=message,
        details=details or None,
        request_id=get_request_id(),
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Handle APIError exceptions."""
    if exc.status_code >= 500:
        logger.error(
            "Request failed",
            code=exc.code,
            message=exc.message,
            details=exc.details,
            status_code=exc.status_code,
            path=request.url.path,
        )
    else:
        logger.warning(
            "Request rejected",
            code=exc.code,
            message=exc.message,
            status_code=exc.status_code,
            path=request.url.path,
        )

    # 5xx details stay in the logs unless the error opts in
    show_details = exc.status_code < 500 or exc.expose_details
    return error_response(
        exc.status_code,
        exc.code,
        exc.message,
        exc.details if show_details else None,
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle FastAPI HTTPException."""
    code = HTTP_ERROR_CODES.get(exc.status_code, "ERROR")
    message = str(exc.detail) if exc.detail else "An error occurred"

    logger.warning("HTTP exception", code=code, message=message, status_code=exc.status_code)
    return error_response(exc.status_code, code, message)


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Handle malformed request bodies and form fields."""
    errors = jsonable_encoder(exc.errors())
    logger.warning("Request validation failed", path=request.url.path, errors=len(errors))
    return error_response(
        422,
        "VALIDATION_ERROR",
        "Request validation failed",
        {"errors": errors},
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unhandled exceptions."""
    logger.exception("Unhandled exception", path=request.url.path, exc_info=exc)
    return error_response(500, "INTERNAL_ERROR", "An internal error occurred")

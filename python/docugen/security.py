"""Shared-secret authentication for the report API."""

import secrets
from typing import Annotated

from fastapi import Depends, Header

from docugen.config import Settings, get_settings
from docugen.errors import UnauthorizedError
from docugen.logging import get_logger

logger = get_logger(__name__)

INTERNAL_TOKEN_HEADER = "X-Internal-Token"
BEARER_PREFIX = "Bearer "


def extract_token(
    internal_token: str | None,
    authorization: str | None,
) -> str | None:
    """Token from X-Internal-Token, else from an ``Authorization: Bearer`` header."""
    if internal_token:
        return internal_token
    if authorization and authorization.startswith(BEARER_PREFIX):
        return authorization[len(BEARER_PREFIX):].strip() or None
    return None


async def verify_internal_token(
    x_internal_token: Annotated[str | None, Header(alias=INTERNAL_TOKEN_HEADER)] = None,
    authorization: Annotated[str | None, Header()] = None,
    settings: Settings = Depends(get_settings),
) -> None:
    """
    Verify the caller's shared secret.

    Uses constant-time comparison.

    Raises:
        UnauthorizedError: If token is missing or invalid
    """
    token = extract_token(x_internal_token, authorization)
    if token is None:
        logger.warning("Missing API token")
        raise UnauthorizedError("Missing API token")

    if not secrets.compare_digest(token.encode(), settings.internal_api_token.encode()):
        logger.warning("Invalid API token")
        raise UnauthorizedError("Invalid API token")


# Type alias for dependency injection
InternalAuth = Annotated[None, Depends(verify_internal_token)]

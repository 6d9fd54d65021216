"""
Error taxonomy for the first-aid guidance core.

Adapters raise ServiceUnavailableError (credential/quota) or ProviderError
(everything else). The orchestrator turns exhaustion into a single
AllProvidersUnavailableError so callers never see provider-specific text.
"""
from typing import Optional

from fastapi import HTTPException

UNAVAILABLE_MESSAGE = "All AI services are currently unavailable. Please try again later."
HTTP_UNAVAILABLE_MESSAGE = (
    "All AI services are temporarily unavailable. Please try again later."
)


class AIServiceError(Exception):
    """Base class for every error raised by the guidance core."""

    api_unavailable = False

    def __init__(self, message: str, provider: Optional[str] = None):
        super().__init__(message)
        self.provider = provider


class ServiceUnavailableError(AIServiceError):
    """Provider rejected the call for authentication or rate-limit reasons (401/429)."""

    api_unavailable = True

    def __init__(self, provider: str, status_code: Optional[int] = None):
        super().__init__(
            f"{provider} API service unavailable. Please try again later or "
            f"contact support to update API credentials.",
            provider=provider,
        )
        self.status_code = status_code


class ProviderError(AIServiceError):
    """Any other transport or provider failure, wrapped with the provider name."""

    def __init__(self, provider: str, message: str):
        super().__init__(f"{provider} service error: {message}", provider=provider)


class AllProvidersUnavailableError(AIServiceError):
    """Every configured provider failed. Individual errors live in ``attempts``."""

    api_unavailable = True

    def __init__(self, attempts: Optional[list] = None, message: str = UNAVAILABLE_MESSAGE):
        super().__init__(message)
        self.attempts = list(attempts or [])


class NoAIServiceAvailableError(AllProvidersUnavailableError):
    """No provider has a credential configured; nothing was attempted."""

    def __init__(self):
        super().__init__(
            attempts=[],
            message=(
                "No AI service available: configure OPENAI_API_KEY, "
                "GEMINI_API_KEY or DEEPSEEK_API_KEY."
            ),
        )


class ResponseParseError(ValueError):
    """Provider output could not be read as a JSON object."""


def to_http_exception(error: Exception) -> HTTPException:
    """Map a core error to the HTTPException the web layer should raise.

    Unavailable errors become 503 with the ``apiUnavailable`` flag the web
    client checks; anything else is a generic 500. Provider messages are
    never forwarded.
    """
    if isinstance(error, AIServiceError) and error.api_unavailable:
        return HTTPException(
            status_code=503,
            detail={"message": HTTP_UNAVAILABLE_MESSAGE, "apiUnavailable": True},
        )
    return HTTPException(
        status_code=500,
        detail={"message": "Error processing first aid request.", "apiUnavailable": False},
    )

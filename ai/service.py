from abc import ABC, abstractmethod
from typing import Any, Optional

EMPTY_RESPONSE = "No response"


class CompletionService(ABC):
    """
    Base class for chat-completion backends.

    Implementations send a single user-role message and return the
    model's text.  Provider failures must be raised as
    ``errors.UpstreamError`` carrying the upstream message and status.
    """

    @abstractmethod
    def complete(
        self,
        prompt: str,
        *,
        model: str,
        temperature: float,
        max_tokens: int,
    ) -> str:
        """Send *prompt* to the model and return its response text."""
        ...


def upstream_error_message(body: Any) -> Optional[str]:
    """
    Pull the human-readable message out of a provider error body.

    Accepts both the full envelope ``{"error": {"message": ...}}`` and the
    already-unwrapped ``{"message": ...}`` the SDKs store on exceptions.
    """
    if not isinstance(body, dict):
        return None
    inner = body.get("error", body)
    if isinstance(inner, dict):
        message = inner.get("message")
        return str(message) if message else None
    if isinstance(inner, str) and inner:
        return inner
    return None

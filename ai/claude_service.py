"""
CompletionService implementation backed by the Anthropic Claude API.

Reads the credential from Settings (ANTHROPIC_API_KEY).
Default model: claude-sonnet-4-5

Retries connection errors (never statuses or timeouts) with exponential
backoff via tenacity; the SDK's built-in retries are switched off.
"""

from __future__ import annotations

import logging

from anthropic import (
    Anthropic,
    APIConnectionError,
    APIStatusError,
    APITimeoutError,
)
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
    retry_if_not_exception_type,
    before_sleep_log,
)

from ai.service import EMPTY_RESPONSE, CompletionService, upstream_error_message
from errors import UpstreamError

logger = logging.getLogger(__name__)

# Retry configuration
_MAX_RETRIES = 3
_MIN_WAIT_SECONDS = 1
_MAX_WAIT_SECONDS = 10

_retry_decorator = retry(
    retry=(
        retry_if_exception_type(APIConnectionError)
        & retry_if_not_exception_type(APITimeoutError)
    ),
    stop=stop_after_attempt(_MAX_RETRIES),
    wait=wait_exponential(multiplier=1, min=_MIN_WAIT_SECONDS, max=_MAX_WAIT_SECONDS),
    before_sleep=before_sleep_log(logger, logging.WARNING),
    reraise=True,
)


class ClaudeService(CompletionService):
    """CompletionService backed by the Anthropic Claude API."""

    def __init__(self, api_key: str, timeout: float = 60.0):
        self._client = Anthropic(api_key=api_key, timeout=timeout, max_retries=0)

    @_retry_decorator
    def _create(self, prompt: str, model: str, temperature: float, max_tokens: int):
        return self._client.messages.create(
            model=model,
            max_tokens=max_tokens,
            temperature=temperature,
            messages=[{"role": "user", "content": prompt}],
        )

    def complete(
        self,
        prompt: str,
        *,
        model: str,
        temperature: float,
        max_tokens: int,
    ) -> str:
        try:
            message = self._create(prompt, model, temperature, max_tokens)
        except APITimeoutError as exc:
            raise UpstreamError("API request timed out", status_code=504) from exc
        except APIConnectionError as exc:
            raise UpstreamError(status_code=502) from exc
        except APIStatusError as exc:
            raise UpstreamError(
                upstream_error_message(exc.body), status_code=exc.status_code
            ) from exc

        # Claude may interleave non-text blocks; join the text ones
        text = "".join(
            block.text for block in message.content if getattr(block, "type", "") == "text"
        )
        return text or EMPTY_RESPONSE

"""
CompletionService for OpenAI-compatible chat-completion APIs.

Covers both OpenAI itself and Groq (via ``base_url``).  The SDK's own
retry loop is disabled: only connection failures that never produced an
HTTP status are retried, with exponential backoff via tenacity.  Non-success
statuses and timeouts are reported straight back as ``UpstreamError``.
"""

import logging
from typing import Optional

import httpx
from openai import OpenAI, APIConnectionError, APIStatusError, APITimeoutError
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


class OpenAIService(CompletionService):
    """CompletionService backed by an OpenAI-compatible endpoint."""

    def __init__(
        self,
        api_key: str,
        base_url: Optional[str] = None,
        timeout: float = 60.0,
        http_client: Optional[httpx.Client] = None,
    ):
        self._client = OpenAI(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout,
            max_retries=0,
            http_client=http_client,
        )

    @_retry_decorator
    def _create(self, prompt: str, model: str, temperature: float, max_tokens: int):
        return self._client.chat.completions.create(
            model=model,
            messages=[{"role": "user", "content": prompt}],
            temperature=temperature,
            max_tokens=max_tokens,
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
            response = self._create(prompt, model, temperature, max_tokens)
        except APITimeoutError as exc:
            raise UpstreamError("API request timed out", status_code=504) from exc
        except APIConnectionError as exc:
            raise UpstreamError(status_code=502) from exc
        except APIStatusError as exc:
            raise UpstreamError(
                upstream_error_message(exc.body), status_code=exc.status_code
            ) from exc

        if not response.choices:
            return EMPTY_RESPONSE
        return response.choices[0].message.content or EMPTY_RESPONSE

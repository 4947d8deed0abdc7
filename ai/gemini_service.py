"""
CompletionService backed by the Google Gemini API.

google-genai raises its own ``APIError`` for HTTP statuses but lets httpx
transport errors through unwrapped, so timeouts and connection failures
are mapped here from the httpx exception types.  Connection failures that
never produced a status are retried with exponential backoff via tenacity.
"""

import logging

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
    retry_if_not_exception_type,
    before_sleep_log,
)

from ai.service import EMPTY_RESPONSE, CompletionService
from errors import UpstreamError

logger = logging.getLogger(__name__)

_MAX_RETRIES = 3
_MIN_WAIT_SECONDS = 1
_MAX_WAIT_SECONDS = 10

_CONNECTION_EXCEPTIONS = (httpx.TransportError, ConnectionError)

_retry_decorator = retry(
    retry=(
        retry_if_exception_type(_CONNECTION_EXCEPTIONS)
        & retry_if_not_exception_type(httpx.TimeoutException)
    ),
    stop=stop_after_attempt(_MAX_RETRIES),
    wait=wait_exponential(multiplier=1, min=_MIN_WAIT_SECONDS, max=_MAX_WAIT_SECONDS),
    before_sleep=before_sleep_log(logger, logging.WARNING),
    reraise=True,
)


class GeminiService(CompletionService):
    """CompletionService backed by the Google Gemini API."""

    def __init__(self, api_key: str, timeout: float = 60.0):
        self._client = genai.Client(
            api_key=api_key,
            http_options=types.HttpOptions(timeout=int(timeout * 1000)),
        )

    @_retry_decorator
    def _generate(self, prompt: str, model: str, temperature: float, max_tokens: int):
        return self._client.models.generate_content(
            model=model,
            contents=prompt,
            config=types.GenerateContentConfig(
                temperature=temperature,
                max_output_tokens=max_tokens,
            ),
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
            response = self._generate(prompt, model, temperature, max_tokens)
        except genai_errors.APIError as exc:
            raise UpstreamError(exc.message, status_code=exc.code) from exc
        except httpx.TimeoutException as exc:
            raise UpstreamError("API request timed out", status_code=504) from exc
        except _CONNECTION_EXCEPTIONS as exc:
            raise UpstreamError(status_code=502) from exc
        return response.text or EMPTY_RESPONSE

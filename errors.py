"""
Error taxonomy for the analysis pipeline.

Every error carries a user-facing message and an HTTP-style status code so
the boundary (HTTP endpoint or CLI) can report it without further mapping.
Chart-block parse failures are deliberately absent: they are recovered
inside the response parser and never surface as errors.
"""

from __future__ import annotations

from typing import Optional

GENERIC_FAILURE_MESSAGE = "Failed to analyze data. Please try again."
UPSTREAM_FAILURE_MESSAGE = "API request failed"


class AnalysisError(Exception):
    """Base class for failures reported back to the caller."""

    status_code: int = 500

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class InvalidRequestError(AnalysisError):
    """The request is missing a question or dataset, or is malformed."""

    status_code = 400


class ConfigurationError(AnalysisError):
    """A required setting (credential, provider, prompt version) is missing or unknown."""

    status_code = 500


class UpstreamError(AnalysisError):
    """The completion service failed or returned a non-success status."""

    status_code = 500

    def __init__(
        self,
        message: Optional[str] = None,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message or UPSTREAM_FAILURE_MESSAGE, status_code)

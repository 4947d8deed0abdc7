"""
Analysis Orchestrator.

Validates a request, renders its prompt, sends it to the completion
service and splits the answer into narrative text and an optional chart.
``analyze`` never raises: every failure comes back as an error
AnalysisResponse carrying a message and status code.
"""

from __future__ import annotations

import logging
import threading
from typing import Optional

from ai.factory import get_completion_service
from ai.response_parser import decompose_response
from ai.service import CompletionService
from dto.analysis import AnalysisRequest, AnalysisResponse, AnalysisResult
from errors import GENERIC_FAILURE_MESSAGE, AnalysisError, InvalidRequestError
from settings import Settings

from analysis_flow.prompt_builder import build_prompt

logger = logging.getLogger(__name__)

NO_DATA_MESSAGE = "No data provided. Please upload a file first."
NO_QUESTION_MESSAGE = "No question provided. Please ask a question about your data."


def validate_request(request: AnalysisRequest) -> None:
    if not request.primary_dataset.raw_text.strip():
        raise InvalidRequestError(NO_DATA_MESSAGE)
    if not request.question.strip():
        raise InvalidRequestError(NO_QUESTION_MESSAGE)


class AnalysisOrchestrator:
    """
    Runs one analysis turn end to end.

    Holds only the settings and a lazily created completion service, so a
    single instance can serve concurrent requests.
    """

    def __init__(
        self,
        settings: Settings,
        service: Optional[CompletionService] = None,
    ) -> None:
        self._settings = settings
        self._service = service
        self._service_lock = threading.Lock()

    @property
    def settings(self) -> Settings:
        return self._settings

    def analyze(self, request: AnalysisRequest) -> AnalysisResponse:
        try:
            result = self._run(request)
        except AnalysisError as exc:
            logger.warning(
                "  [Orchestrator] Analysis rejected (%d): %s",
                exc.status_code,
                exc.message,
            )
            return AnalysisResponse.failure(exc.message, exc.status_code)
        except Exception:
            logger.exception("  [Orchestrator] Analysis failed")
            return AnalysisResponse.failure(GENERIC_FAILURE_MESSAGE, 500)
        return AnalysisResponse.success(result)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _run(self, request: AnalysisRequest) -> AnalysisResult:
        validate_request(request)
        self._settings.require_api_key()

        logger.info(
            "  [Orchestrator] Question on '%s' (%d rows, %d dataset(s))",
            request.file_name or request.primary_dataset.name,
            request.primary_dataset.row_count,
            request.dataset_count,
        )
        prompt = build_prompt(request, self._settings)

        model = request.model_id or self._settings.default_model
        raw = self._get_service().complete(
            prompt.text,
            model=model,
            temperature=self._settings.temperature,
            max_tokens=self._settings.max_tokens,
        )
        logger.info("  [Orchestrator] %s returned %d chars", model, len(raw))

        result = decompose_response(raw)
        if result.chart is not None:
            logger.info(
                "  [Orchestrator] Extracted %s chart with %d record(s)",
                result.chart.type,
                len(result.chart.data),
            )
        return result

    def _get_service(self) -> CompletionService:
        if self._service is None:
            with self._service_lock:
                if self._service is None:
                    self._service = get_completion_service(self._settings)
        return self._service

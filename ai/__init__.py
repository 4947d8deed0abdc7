from ai.service import CompletionService
from ai.factory import get_completion_service
from ai.response_parser import decompose_response

__all__ = [
    "CompletionService",
    "get_completion_service",
    "decompose_response",
]

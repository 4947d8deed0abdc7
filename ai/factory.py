from ai.service import CompletionService
from ai.openai_service import OpenAIService
from ai.gemini_service import GeminiService
from ai.claude_service import ClaudeService
from settings import Settings, normalise_provider


def get_completion_service(settings: Settings) -> CompletionService:
    """
    Instantiate the CompletionService for ``settings.provider``:
      - "groq" / "openai"  → OpenAIService (Groq through its base URL)
      - "claude"           → ClaudeService
      - "gemini"           → GeminiService

    The credential must already be present; call
    ``settings.require_api_key()`` first.
    """
    provider = normalise_provider(settings.provider)
    api_key = settings.require_api_key()
    if provider == "gemini":
        return GeminiService(api_key, timeout=settings.request_timeout)
    if provider == "claude":
        return ClaudeService(api_key, timeout=settings.request_timeout)
    return OpenAIService(
        api_key,
        base_url=settings.base_url,
        timeout=settings.request_timeout,
    )

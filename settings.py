"""
Runtime configuration for the analysis pipeline.

``Settings`` is built once (usually via ``Settings.from_env``) and passed
explicitly into the orchestrator; nothing in request handling reads the
environment directly.

Provider selection mirrors the ANALYSIS_PROVIDER env var:
  - "groq"    → OpenAI-compatible Groq endpoint (default)
  - "openai"  → OpenAI
  - "claude"  → Anthropic Claude   (alias: "anthropic")
  - "gemini"  → Google Gemini
"""

from __future__ import annotations

import os
from typing import Any, Dict, NamedTuple, Optional

import dotenv
from pydantic import BaseModel, Field, ValidationError, model_validator

from errors import ConfigurationError


class ProviderDefaults(NamedTuple):
    api_key_env: str
    model: str
    base_url: Optional[str]


PROVIDERS: Dict[str, ProviderDefaults] = {
    "groq": ProviderDefaults(
        "GROQ_API_KEY", "llama-3.3-70b-versatile", "https://api.groq.com/openai/v1"
    ),
    "openai": ProviderDefaults("OPENAI_API_KEY", "gpt-4o-mini", None),
    "claude": ProviderDefaults("ANTHROPIC_API_KEY", "claude-sonnet-4-5", None),
    "gemini": ProviderDefaults("GEMINI_API_KEY", "gemini-2.5-flash", None),
}

_PROVIDER_ALIASES = {"anthropic": "claude"}

DEFAULT_PROVIDER = "groq"


def normalise_provider(provider: str) -> str:
    """Lower-case *provider* and resolve aliases; raise on unknown names."""
    name = provider.lower().strip()
    name = _PROVIDER_ALIASES.get(name, name)
    if name not in PROVIDERS:
        raise ConfigurationError(f"Unknown AI provider: {provider!r}")
    return name


_ENV_VARS_BY_FIELD: Dict[str, str] = {
    "temperature": "ANALYSIS_TEMPERATURE",
    "max_tokens": "ANALYSIS_MAX_TOKENS",
    "request_timeout": "ANALYSIS_TIMEOUT_SECONDS",
    "max_chars": "ANALYSIS_MAX_CHARS",
    "comparison_max_chars": "ANALYSIS_COMPARISON_MAX_CHARS",
    "prompt_version": "ANALYSIS_PROMPT_VERSION",
}


def _describe_invalid_settings(exc: ValidationError) -> str:
    """Name the offending env var(s) for each field pydantic rejected."""
    problems = []
    for error in exc.errors():
        field_name = str(error["loc"][0]) if error["loc"] else "settings"
        env_var = _ENV_VARS_BY_FIELD.get(field_name, field_name)
        problems.append(f"{env_var}: {error['msg']}")
    return "Invalid configuration. " + "; ".join(problems)


class Settings(BaseModel):
    provider: str = DEFAULT_PROVIDER
    api_key: Optional[str] = None
    # Filled from PROVIDERS when not given explicitly
    default_model: str
    base_url: Optional[str] = None

    # Sampling temperature stays in (0, 1.5]
    temperature: float = Field(0.7, gt=0.0, le=1.5)
    max_tokens: int = Field(2048, gt=0)
    request_timeout: float = Field(60.0, gt=0.0)

    # Character budgets for CSV payloads embedded in prompts
    max_chars: int = Field(8000, gt=0)
    comparison_max_chars: int = Field(4000, gt=0)

    prompt_version: str = "v2"

    @model_validator(mode="before")
    @classmethod
    def _apply_provider_defaults(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        values = dict(data)
        provider = normalise_provider(values.get("provider") or DEFAULT_PROVIDER)
        defaults = PROVIDERS[provider]
        values["provider"] = provider
        if not values.get("default_model"):
            values["default_model"] = defaults.model
        if "base_url" not in values:
            values["base_url"] = defaults.base_url
        return values

    @property
    def api_key_env(self) -> str:
        return PROVIDERS[normalise_provider(self.provider)].api_key_env

    def require_api_key(self) -> str:
        """Return the credential or raise ``ConfigurationError`` naming the env var."""
        if not self.api_key:
            raise ConfigurationError(
                f"{self.api_key_env} is not configured. "
                "Set it in the environment or in a .env file."
            )
        return self.api_key

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the process environment (and ``.env``, if present)."""
        dotenv.load_dotenv()

        provider = normalise_provider(os.getenv("ANALYSIS_PROVIDER", DEFAULT_PROVIDER))
        defaults = PROVIDERS[provider]

        values: Dict[str, object] = {
            "provider": provider,
            "api_key": os.getenv(defaults.api_key_env) or None,
            "default_model": os.getenv("ANALYSIS_MODEL") or defaults.model,
            "base_url": os.getenv("ANALYSIS_BASE_URL") or defaults.base_url,
        }
        for field_name, env_var in _ENV_VARS_BY_FIELD.items():
            raw = os.getenv(env_var)
            if raw:
                values[field_name] = raw

        try:
            return cls(**values)
        except ValidationError as exc:
            raise ConfigurationError(_describe_invalid_settings(exc)) from exc

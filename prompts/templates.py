"""
Versioned prompt-template registry.

Each version maps a TemplateKind to a render function
``(request, max_chars) -> str``.  Switching ANALYSIS_PROMPT_VERSION swaps
the prompt text without touching the orchestration code.

  - "v1": narrative-only templates
  - "v2": the same templates plus the optional ```chart block (default)
"""

from __future__ import annotations

from functools import partial
from typing import Callable, Dict

from dto.analysis import AnalysisRequest, TemplateKind
from errors import ConfigurationError
from prompts.analysis import get_analysis_prompt
from prompts.comparison import get_comparison_prompt

RenderFn = Callable[[AnalysisRequest, int], str]

PROMPT_TEMPLATES: Dict[str, Dict[TemplateKind, RenderFn]] = {
    "v1": {
        TemplateKind.SINGLE_ANALYSIS: partial(get_analysis_prompt, include_chart=False),
        TemplateKind.COMPARISON: partial(get_comparison_prompt, include_chart=False),
    },
    "v2": {
        TemplateKind.SINGLE_ANALYSIS: get_analysis_prompt,
        TemplateKind.COMPARISON: get_comparison_prompt,
    },
}


def get_template(version: str, kind: TemplateKind) -> RenderFn:
    templates = PROMPT_TEMPLATES.get(version)
    if templates is None:
        raise ConfigurationError(f"Unknown prompt version: {version!r}")
    return templates[kind]

from __future__ import annotations

import logging

from dto.analysis import AnalysisRequest, PreparedPrompt, TemplateKind
from prompts.templates import get_template
from settings import Settings

from analysis_flow.mode import select_template_kind

logger = logging.getLogger(__name__)


def build_prompt(request: AnalysisRequest, settings: Settings) -> PreparedPrompt:
    """Select the template for *request* and render it within the configured budgets."""
    kind = select_template_kind(request.question, request.dataset_count)
    if kind is TemplateKind.COMPARISON:
        max_chars = settings.comparison_max_chars
    else:
        max_chars = settings.max_chars

    render = get_template(settings.prompt_version, kind)
    text = render(request, max_chars)

    logger.info(
        "  [Prompt] %s prompt (%s): %d chars (~%d tokens)",
        kind.value,
        settings.prompt_version,
        len(text),
        len(text) // 4,
    )
    return PreparedPrompt(template_kind=kind, text=text)

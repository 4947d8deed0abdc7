"""
Template selection.

A request is a comparison when the question mentions "compare" (any case)
AND more than one dataset is loaded.  This is a plain substring rule, not
intent detection: "Compare" and "compared" match, while "comparing",
"versus" and "difference between" do not.
"""

from __future__ import annotations

from dto.analysis import TemplateKind

COMPARISON_KEYWORD = "compare"


def is_comparison_request(question: str, dataset_count: int) -> bool:
    return COMPARISON_KEYWORD in question.lower() and dataset_count > 1


def select_template_kind(question: str, dataset_count: int) -> TemplateKind:
    if is_comparison_request(question, dataset_count):
        return TemplateKind.COMPARISON
    return TemplateKind.SINGLE_ANALYSIS

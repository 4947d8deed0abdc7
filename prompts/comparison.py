"""
Prompt for a multi-dataset comparison turn.

Each dataset is truncated independently to the (smaller) per-file budget
so the whole prompt stays bounded however many files are compared.
"""

from __future__ import annotations

from typing import List

from dto.analysis import AnalysisRequest
from prompts.chart import get_chart_instructions
from utils.payload import prepare_payload


def get_comparison_prompt(
    request: AnalysisRequest,
    max_chars: int,
    include_chart: bool = True,
) -> str:
    sections: List[str] = []
    for i, dataset in enumerate(request.comparison_datasets, start=1):
        payload = prepare_payload(dataset, max_chars)
        sections.append(
            f"--- FILE {i}: {dataset.name} ({payload.annotation}) ---\n{payload.text}"
        )
    files = "\n\n".join(sections)

    prompt = f"""You are a professional financial analyst.  Compare the following datasets and provide insights.

{files}

QUESTION: {request.question}

IMPORTANT: Provide a detailed text analysis, NOT code.  Include:
1. Key differences between datasets
2. Performance comparison
3. Notable trends in each dataset
4. Recommendations

Format your response with markdown (tables, bullet points, bold text) and cite specific figures from each file.
"""
    if include_chart:
        prompt += get_chart_instructions()
    return prompt

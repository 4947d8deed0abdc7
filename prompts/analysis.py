"""
Prompt for a single-dataset analysis turn.
"""

from __future__ import annotations

from dto.analysis import AnalysisRequest
from dto.api import DEFAULT_FILE_NAME
from prompts.chart import get_chart_instructions
from utils.payload import parse_header, prepare_payload


def get_analysis_prompt(
    request: AnalysisRequest,
    max_chars: int,
    include_chart: bool = True,
) -> str:
    dataset = request.primary_dataset
    payload = prepare_payload(dataset, max_chars)
    columns = parse_header(dataset.raw_text)

    sample_note = ""
    if payload.truncated:
        sample_note = (
            f"\n- The data above is a sample ({payload.included_rows:,} of "
            f"{payload.total_rows:,} rows); say so whenever a figure depends on rows you cannot see"
        )

    prompt = f"""You are a professional financial analyst.  Analyze the following data and answer the question.

FILE: {request.file_name or DEFAULT_FILE_NAME}
SIZE: {payload.annotation}
COLUMNS: {", ".join(columns)}

DATA (CSV format):
{payload.text}

QUESTION: {request.question}

IMPORTANT INSTRUCTIONS:
- Provide a TEXT analysis, NOT code or Python scripts
- Answer in plain English with clear explanations
- Use markdown formatting (tables, bullet points, bold text)
- Include specific numbers and percentages from the data
- Highlight key insights and trends{sample_note}

DO NOT write code.  DO NOT write Python scripts.  Provide a written analysis.
"""
    if include_chart:
        prompt += get_chart_instructions()
    return prompt

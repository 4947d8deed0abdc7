"""
Splits a model response into narrative text and an optional chart.

The model may append a fenced block opened by a literal ```chart marker and
closed by the next ``` marker.  Only the first such block is considered.
A block whose body is not a valid ChartDescriptor is left in place and
ignored: the caller gets the original text untouched and no chart.
"""

import json
import logging
from typing import Optional, Tuple

from pydantic import ValidationError

from dto.analysis import AnalysisResult
from dto.chart import ChartDescriptor

logger = logging.getLogger(__name__)

CHART_FENCE_OPEN = "```chart"
CHART_FENCE_CLOSE = "```"


def find_chart_block(raw: str) -> Optional[Tuple[int, int, str]]:
    """
    Locate the first ```chart ... ``` block.

    Returns ``(block_start, block_end, body)`` where ``raw[block_start:block_end]``
    is the whole block (fences included) and *body* is the text strictly
    between the fences, or ``None`` if no complete block exists.
    """
    start = raw.find(CHART_FENCE_OPEN)
    if start == -1:
        return None
    body_start = start + len(CHART_FENCE_OPEN)
    end = raw.find(CHART_FENCE_CLOSE, body_start)
    if end == -1:
        return None
    return start, end + len(CHART_FENCE_CLOSE), raw[body_start:end]


def parse_chart_descriptor(body: str) -> Optional[ChartDescriptor]:
    """Parse a chart block body, or return ``None`` (logged) if it is unusable."""
    try:
        parsed = json.loads(body)
    except json.JSONDecodeError as exc:
        logger.warning("Failed to parse chart JSON: %s (%s)", exc, body[:200])
        return None

    if not isinstance(parsed, dict):
        logger.warning("Chart block is not a JSON object: %s", body[:200])
        return None

    try:
        return ChartDescriptor.model_validate(parsed)
    except ValidationError as exc:
        logger.warning("Chart JSON does not describe a supported chart: %s", exc)
        return None


def decompose_response(raw: str) -> AnalysisResult:
    block = find_chart_block(raw)
    if block is None:
        return AnalysisResult(narrative_text=raw)

    start, end, body = block
    chart = parse_chart_descriptor(body)
    if chart is None:
        return AnalysisResult(narrative_text=raw)

    narrative = (raw[:start] + raw[end:]).strip()
    return AnalysisResult(narrative_text=narrative, chart=chart)

"""
DTOs for a single analysis turn.

    AnalysisRequest ──► PreparedPrompt ──► (completion service)
                                               │
    AnalysisResponse ◄── AnalysisResult ◄──────┘
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict

from dto.chart import ChartDescriptor
from dto.dataset import Dataset


class TemplateKind(str, Enum):
    SINGLE_ANALYSIS = "single_analysis"
    COMPARISON = "comparison"


class AnalysisRequest(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    question: str
    primary_dataset: Dataset
    file_name: str = ""
    model_id: Optional[str] = None
    # Every loaded file, the primary one included, in upload order
    comparison_datasets: List[Dataset] = []

    @property
    def dataset_count(self) -> int:
        return len(self.comparison_datasets) or 1


class PreparedPrompt(BaseModel):
    template_kind: TemplateKind
    text: str


class AnalysisResult(BaseModel):
    """Model output split into prose and an optional chart."""

    narrative_text: str
    chart: Optional[ChartDescriptor] = None


class AnalysisResponse(BaseModel):
    """
    What the orchestrator hands back to the caller: either a narrative
    (plus optional chart) or an error message, always with a status code.
    """

    response: Optional[str] = None
    chart: Optional[ChartDescriptor] = None
    error: Optional[str] = None
    status_code: int = 200

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, result: AnalysisResult) -> "AnalysisResponse":
        return cls(response=result.narrative_text, chart=result.chart)

    @classmethod
    def failure(cls, message: str, status_code: int) -> "AnalysisResponse":
        return cls(error=message, status_code=status_code)

    def to_body(self) -> Dict[str, Any]:
        """Render the wire shape ``{response, chart?}`` or ``{error}``."""
        if self.error is not None:
            return {"error": self.error}
        body: Dict[str, Any] = {"response": self.response}
        if self.chart is not None:
            body["chart"] = self.chart.to_wire()
        return body

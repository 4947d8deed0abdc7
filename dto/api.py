"""
Wire-level request bodies for the HTTP endpoint and the CLI.

Field aliases match the JSON the browser client sends (``fileName``,
``allFiles``).  Every field is optional here so that a missing question or
dataset is reported by the orchestrator with a proper message instead of a
schema error.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from dto.analysis import AnalysisRequest
from dto.dataset import Dataset

DEFAULT_FILE_NAME = "data.csv"


class UploadedFile(BaseModel):
    name: str = DEFAULT_FILE_NAME
    data: str = ""


class AnalyzeRequestBody(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    question: Optional[str] = None
    data: Optional[str] = None
    file_name: Optional[str] = Field(None, alias="fileName")
    model: Optional[str] = None
    all_files: Optional[List[UploadedFile]] = Field(None, alias="allFiles")

    def to_request(self) -> AnalysisRequest:
        file_name = self.file_name or DEFAULT_FILE_NAME
        return AnalysisRequest(
            question=self.question or "",
            primary_dataset=Dataset(name=file_name, raw_text=self.data or ""),
            file_name=file_name,
            model_id=self.model or None,
            comparison_datasets=[
                Dataset(name=f.name, raw_text=f.data) for f in self.all_files or []
            ],
        )


class PreviewRequestBody(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    data: Optional[str] = None
    file_name: Optional[str] = Field(None, alias="fileName")

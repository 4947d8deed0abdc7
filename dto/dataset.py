"""
Dataset DTOs.

A Dataset is a named block of comma-separated text exactly as the caller
uploaded it.  PreparedPayload is the size-bounded rendition of a Dataset
that gets embedded in a prompt.
"""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict


class Dataset(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    raw_text: str

    @property
    def row_count(self) -> int:
        """Number of non-blank data rows below the header."""
        lines = [line for line in self.raw_text.splitlines() if line.strip()]
        return max(len(lines) - 1, 0)


class PreparedPayload(BaseModel):
    """Truncated CSV text plus what the prompt needs to know about the cut."""

    text: str
    total_rows: int
    included_rows: int
    truncated: bool = False

    @property
    def omitted_rows(self) -> int:
        return self.total_rows - self.included_rows

    @property
    def annotation(self) -> str:
        if self.truncated:
            return f"{self.total_rows:,} total rows (showing sample)"
        return f"{self.total_rows:,} rows"


class DatasetPreview(BaseModel):
    """Upload summary: header columns, row count and the first few rows."""

    file_name: str
    columns: List[str] = []
    rows: int = 0
    preview: List[List[str]] = []

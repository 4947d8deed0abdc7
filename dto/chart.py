from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

CHART_TYPES = Literal["bar", "line", "pie", "area", "scatter", "radar"]


class ChartDescriptor(BaseModel):
    """
    A visualisation the model embedded in its answer as a ```chart block.

    Field names follow the wire format (``xKey`` / ``yKeys``); unknown keys
    the model adds are kept so the descriptor round-trips unchanged.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    type: CHART_TYPES
    title: str
    data: List[Dict[str, Any]] = Field(..., min_length=1)
    x_key: Optional[str] = Field(None, alias="xKey")
    y_keys: Optional[List[str]] = Field(None, alias="yKeys")

    @model_validator(mode="after")
    def _records_match_keys(self) -> "ChartDescriptor":
        required = list(self.y_keys or [])
        if self.x_key:
            required.append(self.x_key)
        for i, record in enumerate(self.data):
            missing = [key for key in required if key not in record]
            if missing:
                raise ValueError(f"data[{i}] is missing key(s): {', '.join(missing)}")
        return self

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)

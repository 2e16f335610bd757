"""Pydantic schemas describing the outcome of a processing pass."""

from __future__ import annotations

from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, Field


class SensorKind(str, Enum):
    """Supported instrument kinds, valued by their one-character frame tag."""

    temperature = "T"
    pressure = "P"


class ProcessReport(BaseModel):
    """Summary produced by one sensor's processing step."""

    sensor: str
    kind: SensorKind
    reading_count: int = Field(..., ge=0, description="Readings left after processing.")
    mean: Optional[Union[int, float]] = Field(
        default=None, description="Mean of the remaining readings; unset when there were none."
    )
    dropped_value: Optional[float] = Field(
        default=None, description="Reading discarded by the low-outlier filter."
    )

from __future__ import annotations

from datetime import date as Date
from typing import List, Optional

from pydantic import BaseModel, Field

from config import DEFAULT_LONG_TERM_DAYS, DEFAULT_SHORT_TERM_DAYS
from engine.detection import DataPoint, DeclineOverride, RiseOverride


class DataPointRequest(BaseModel):
    date: Date
    value: float
    config: Optional[RiseOverride] = None


class RisePointsRequest(BaseModel):
    data_points: List[DataPoint] = Field(default_factory=list)
    config: Optional[RiseOverride] = None


class RiseValuesRequest(BaseModel):
    values: List[Optional[float]] = Field(default_factory=list)
    config: Optional[RiseOverride] = None


class DataWindowPayload(BaseModel):
    max_size: Optional[int] = Field(default=None, gt=0)
    short_term_days: int = Field(default=DEFAULT_SHORT_TERM_DAYS, gt=0)
    long_term_days: int = Field(default=DEFAULT_LONG_TERM_DAYS, gt=0)
    data_points: List[DataPoint] = Field(default_factory=list)


class RiseWindowRequest(BaseModel):
    data_window: DataWindowPayload
    config: Optional[RiseOverride] = None


class DeclinePointsRequest(BaseModel):
    data_points: List[DataPoint] = Field(default_factory=list)
    config: Optional[DeclineOverride] = None


class DeclineValuesRequest(BaseModel):
    values: List[Optional[float]] = Field(default_factory=list)
    config: Optional[DeclineOverride] = None

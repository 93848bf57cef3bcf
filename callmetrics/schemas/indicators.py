from __future__ import annotations

import datetime
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict

from callmetrics.schemas.records import PeriodRange


class CalculationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    value: Union[int, float]
    formatted: str
    precision: int
    is_valid: bool
    error: Optional[str] = None


class IndicatorCalculations(BaseModel):
    model_config = ConfigDict(frozen=True)

    volume: CalculationResult
    mean_talk_time: CalculationResult
    mean_attendance_rating: CalculationResult
    mean_resolution_rating: CalculationResult


class GeneralIndicators(BaseModel):
    model_config = ConfigDict(frozen=True)

    period: PeriodRange
    total_calls: int
    mean_talk_time_minutes: float
    mean_attendance_rating: float
    mean_resolution_rating: float
    calculations: IndicatorCalculations


class OperatorIndicators(BaseModel):
    model_config = ConfigDict(frozen=True)

    operator_name: str
    total_calls: int
    mean_talk_time_minutes: float
    mean_attendance_rating: float
    mean_resolution_rating: float
    efficiency: float = 0.0
    calculations: IndicatorCalculations


class PeriodIndicators(BaseModel):
    model_config = ConfigDict(frozen=True)

    general: GeneralIndicators
    operators: List[OperatorIndicators]


class PeriodReport(BaseModel):
    model_config = ConfigDict(frozen=True)

    generated_at: datetime.datetime
    periods: List[PeriodIndicators]

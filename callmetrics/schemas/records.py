from __future__ import annotations

import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class CallRecord(BaseModel):
    """One answered call after normalization."""

    model_config = ConfigDict(frozen=True)

    # None when the sheet date could not be parsed; never matches a period
    date: Optional[datetime.date] = None
    operator_name: str = ""
    talk_time_seconds: int = Field(default=0, ge=0)
    rating_attendance: float = Field(default=0.0, ge=0, le=5)
    rating_resolution: float = Field(default=0.0, ge=0, le=5)
    outcome: str
    disconnection: str = ""


class PeriodKind(str, Enum):
    YESTERDAY = "yesterday"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"
    CUSTOM = "custom"


class PeriodRange(BaseModel):
    """Inclusive day-granularity range."""

    model_config = ConfigDict(frozen=True)

    kind: PeriodKind
    label: str
    start: datetime.date
    end: datetime.date

    @model_validator(mode="after")
    def check_bounds(self) -> "PeriodRange":
        if self.start > self.end:
            raise ValueError(f"period start {self.start} is after end {self.end}")
        return self

    def contains(self, day: Optional[datetime.date]) -> bool:
        if day is None:
            return False
        if isinstance(day, datetime.datetime):
            day = day.date()
        return self.start <= day <= self.end


class NormalizationReport(BaseModel):
    model_config = ConfigDict(frozen=True)

    records: List[CallRecord]
    total_rows: int = 0
    answered_rows: int = 0
    unanswered_rows: int = 0
    malformed_rows: int = 0
    invalid_dates: int = 0
    missing_talk_time: int = 0
    invalid_ratings: int = 0
    data_quality: float = 0.0

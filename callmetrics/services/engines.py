# callmetrics/services/engines.py
# Independent calculation engines, one indicator each.
# calculate() never raises: failures come back as invalid results.

import math
from abc import ABC, abstractmethod
from typing import Iterable, Optional

from callmetrics.config import settings
from callmetrics.constants import EMPTY_COUNT_DISPLAY, EMPTY_RATING_DISPLAY, EMPTY_TIME_DISPLAY
from callmetrics.observability.metrics import record_engine_failure
from callmetrics.schemas.indicators import CalculationResult
from callmetrics.schemas.records import CallRecord
from callmetrics.utils.formulas import (
    Number,
    calc_mean,
    calc_minutes,
    format_clock,
    format_count,
    format_rating,
    is_valid_rating,
)
from callmetrics.utils.logger import log_exception


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class CalculationEngine(ABC):
    """Base engine: wraps the concrete computation in the failure policy."""

    name = "engine"
    empty_display = EMPTY_COUNT_DISPLAY
    empty_precision = 0

    def calculate(self, records: Iterable[CallRecord]) -> CalculationResult:
        try:
            return self._calculate(records)
        except Exception as e:
            log_exception(e, context=f"{self.name} engine")
            record_engine_failure(self.name)
            return self._invalid(f"calculation failed: {e}")

    @abstractmethod
    def _calculate(self, records: Iterable[CallRecord]) -> CalculationResult:
        ...

    @abstractmethod
    def validate(self, value: Number) -> bool:
        ...

    @abstractmethod
    def format(self, value: Number) -> str:
        ...

    def _invalid(self, error: str) -> CalculationResult:
        return CalculationResult(
            value=0,
            formatted=self.empty_display,
            precision=self.empty_precision,
            is_valid=False,
            error=error,
        )


class VolumeEngine(CalculationEngine):
    """Answered-call count. Every record is an answered call already."""

    name = "volume"

    def __init__(self, separator: Optional[str] = None):
        self._separator = separator if separator is not None else settings.THOUSANDS_SEPARATOR

    def _calculate(self, records):
        total = sum(1 for _ in records)
        if not total:
            return self._invalid("no calls found")

        valid = self.validate(total)
        return CalculationResult(
            value=total,
            formatted=self.format(total),
            precision=0,
            is_valid=valid,
            error=None if valid else "invalid call count",
        )

    def validate(self, value):
        return _is_number(value) and math.isfinite(value) and float(value).is_integer() and value >= 0

    def format(self, value):
        return format_count(value, self._separator)


class MeanTalkTimeEngine(CalculationEngine):
    """Mean talk time in minutes over calls that carry a talk time."""

    name = "mean_talk_time"
    empty_display = EMPTY_TIME_DISPLAY

    def _calculate(self, records):
        seconds = [r.talk_time_seconds for r in records if r.talk_time_seconds > 0]
        if not seconds:
            return self._invalid("no valid time found")

        minutes = calc_minutes(calc_mean(seconds))
        valid = self.validate(minutes)
        return CalculationResult(
            value=minutes,
            formatted=self.format(minutes),
            precision=2,
            is_valid=valid,
            error=None if valid else "negative talk time",
        )

    def validate(self, value):
        return _is_number(value) and math.isfinite(value) and value >= 0

    def format(self, value):
        return format_clock(value)


class MeanRatingEngine(CalculationEngine):
    """Mean of one survey rating, ignoring absent (zero) answers."""

    field = ""
    empty_display = EMPTY_RATING_DISPLAY
    empty_precision = 1

    def _calculate(self, records):
        ratings = [getattr(r, self.field) for r in records]
        ratings = [v for v in ratings if v > 0]
        if not ratings:
            return self._invalid("no valid rating found")

        mean = calc_mean(ratings)
        valid = self.validate(mean)
        return CalculationResult(
            value=mean,
            formatted=self.format(mean),
            precision=1,
            is_valid=valid,
            error=None if valid else "rating outside the 0-5 range",
        )

    def validate(self, value):
        return _is_number(value) and is_valid_rating(value)

    def format(self, value):
        return format_rating(value)


class MeanAttendanceRatingEngine(MeanRatingEngine):
    """Survey question 1: how the operator handled the call."""

    name = "mean_attendance_rating"
    field = "rating_attendance"


class MeanResolutionRatingEngine(MeanRatingEngine):
    """Survey question 2: whether the issue was solved."""

    name = "mean_resolution_rating"
    field = "rating_resolution"

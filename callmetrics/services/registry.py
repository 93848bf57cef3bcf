# callmetrics/services/registry.py

from enum import Enum
from typing import Callable, Dict, Iterable, Union

from callmetrics.errors import UnknownEngineError
from callmetrics.schemas.indicators import IndicatorCalculations
from callmetrics.schemas.records import CallRecord
from callmetrics.services.engines import (
    CalculationEngine,
    MeanAttendanceRatingEngine,
    MeanResolutionRatingEngine,
    MeanTalkTimeEngine,
    VolumeEngine,
)


class EngineKind(str, Enum):
    VOLUME = "volume"
    MEAN_TALK_TIME = "mean_talk_time"
    MEAN_ATTENDANCE_RATING = "mean_attendance_rating"
    MEAN_RESOLUTION_RATING = "mean_resolution_rating"


_FACTORIES: Dict[EngineKind, Callable[[], CalculationEngine]] = {
    EngineKind.VOLUME: VolumeEngine,
    EngineKind.MEAN_TALK_TIME: MeanTalkTimeEngine,
    EngineKind.MEAN_ATTENDANCE_RATING: MeanAttendanceRatingEngine,
    EngineKind.MEAN_RESOLUTION_RATING: MeanResolutionRatingEngine,
}


class EngineRegistry:
    """Hands out one engine instance per kind, built on first use.

    Engines are stateless, so the instances can be shared freely.
    """

    def __init__(self):
        self._engines: Dict[EngineKind, CalculationEngine] = {}

    def get_engine(self, kind: Union[EngineKind, str]) -> CalculationEngine:
        try:
            key = EngineKind(kind)
        except (ValueError, TypeError):
            raise UnknownEngineError(kind) from None

        engine = self._engines.get(key)
        if engine is None:
            # setdefault keeps the first instance if two callers race here
            engine = self._engines.setdefault(key, _FACTORIES[key]())
        return engine

    def calculate_all(self, records: Iterable[CallRecord]) -> IndicatorCalculations:
        """Run all four engines over the same record set."""
        records = list(records)
        return IndicatorCalculations(
            volume=self.get_engine(EngineKind.VOLUME).calculate(records),
            mean_talk_time=self.get_engine(EngineKind.MEAN_TALK_TIME).calculate(records),
            mean_attendance_rating=self.get_engine(EngineKind.MEAN_ATTENDANCE_RATING).calculate(records),
            mean_resolution_rating=self.get_engine(EngineKind.MEAN_RESOLUTION_RATING).calculate(records),
        )


default_registry = EngineRegistry()


def get_engine(kind: Union[EngineKind, str]) -> CalculationEngine:
    return default_registry.get_engine(kind)


def calculate_all(records: Iterable[CallRecord]) -> IndicatorCalculations:
    return default_registry.calculate_all(records)

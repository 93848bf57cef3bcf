# callmetrics/services/aggregator.py

from datetime import date, datetime, time
from typing import Dict, Iterable, List, Optional, Union

from callmetrics.errors import InvalidInputError, ensure_iterable
from callmetrics.observability.metrics import observe_latency
from callmetrics.observability.tracing import get_tracer
from callmetrics.schemas.indicators import (
    GeneralIndicators,
    IndicatorCalculations,
    OperatorIndicators,
    PeriodIndicators,
    PeriodReport,
)
from callmetrics.schemas.records import CallRecord, PeriodRange
from callmetrics.services.periods import filter_by_period, resolve_periods
from callmetrics.services.registry import EngineRegistry, default_registry
from callmetrics.utils.formulas import calc_efficiency
from callmetrics.utils.logger import log_info


class Aggregator:
    """Business logic for period-scoped and per-operator indicators."""

    def __init__(self, registry: Optional[EngineRegistry] = None):
        # Store registry dependency
        self._registry = registry or default_registry

    def compute_general(self, records: Iterable[CallRecord], period: PeriodRange) -> GeneralIndicators:
        """Overall indicators for one period.

        An empty period still runs every engine, so the result is a
        well-formed all-invalid set rather than a special case.
        """
        records = _check_records(records)
        _check_period(period)

        with observe_latency("compute_general"), get_tracer().start_as_current_span(
            "aggregator.compute_general"
        ) as span:
            filtered = filter_by_period(records, period)
            span.set_attribute("period.kind", period.kind.value)
            span.set_attribute("records.in_period", len(filtered))

            calculations = self._registry.calculate_all(filtered)
            log_info(f"General indicators for {period.label}: {len(filtered)} of {len(records)} calls in period")

            return GeneralIndicators(period=period, calculations=calculations, **_numbers(calculations))

    def compute_by_operator(self, records: Iterable[CallRecord], period: PeriodRange) -> List[OperatorIndicators]:
        """Per-operator indicators, busiest operator first."""
        records = _check_records(records)
        _check_period(period)

        with observe_latency("compute_by_operator"), get_tracer().start_as_current_span(
            "aggregator.compute_by_operator"
        ) as span:
            filtered = filter_by_period(records, period)
            groups = group_by_operator(filtered)
            span.set_attribute("period.kind", period.kind.value)
            span.set_attribute("operators", len(groups))

            operators: List[OperatorIndicators] = []
            for name, group in groups.items():
                calculations = self._registry.calculate_all(group)
                numbers = _numbers(calculations)
                operators.append(
                    OperatorIndicators(
                        operator_name=name,
                        efficiency=calc_efficiency(
                            numbers["total_calls"],
                            numbers["mean_talk_time_minutes"] * 60,
                            numbers["mean_attendance_rating"],
                            numbers["mean_resolution_rating"],
                        ),
                        calculations=calculations,
                        **numbers,
                    )
                )

            # sorted() is stable, ties keep first-seen order
            operators = sorted(operators, key=lambda o: o.calculations.volume.value, reverse=True)
            log_info(f"Operator indicators for {period.label}: {len(operators)} operators")
            return operators

    def compute_report(self, records: Iterable[CallRecord], now: Union[date, datetime]) -> PeriodReport:
        """General and per-operator indicators for every standard period."""
        records = _check_records(records)
        periods = resolve_periods(now)
        generated_at = now if isinstance(now, datetime) else datetime.combine(now, time())

        return PeriodReport(
            generated_at=generated_at,
            periods=[
                PeriodIndicators(
                    general=self.compute_general(records, period),
                    operators=self.compute_by_operator(records, period),
                )
                for period in periods
            ],
        )


def group_by_operator(records: Iterable[CallRecord]) -> Dict[str, List[CallRecord]]:
    """Group records by operator name; blank names are left out."""
    groups: Dict[str, List[CallRecord]] = {}
    for record in records:
        name = record.operator_name.strip()
        if not name:
            continue
        groups.setdefault(name, []).append(record)
    return groups


def _numbers(calculations: IndicatorCalculations) -> dict:
    return {
        "total_calls": int(calculations.volume.value),
        "mean_talk_time_minutes": float(calculations.mean_talk_time.value),
        "mean_attendance_rating": float(calculations.mean_attendance_rating.value),
        "mean_resolution_rating": float(calculations.mean_resolution_rating.value),
    }


def _check_records(records: Iterable[CallRecord]) -> List[CallRecord]:
    ensure_iterable(records, "records")
    records = list(records)
    for index, record in enumerate(records):
        if not isinstance(record, CallRecord):
            raise InvalidInputError(
                f"record {index} is a {type(record).__name__}, expected CallRecord",
                details={"index": index, "type": type(record).__name__},
            )
    return records


def _check_period(period: PeriodRange) -> None:
    if not isinstance(period, PeriodRange):
        raise InvalidInputError(
            f"period must be a PeriodRange, got {type(period).__name__}",
            details={"type": type(period).__name__},
        )

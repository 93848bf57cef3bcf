# callmetrics/services/normalizer.py

from collections.abc import Iterable, Mapping
from typing import Any, Dict, List, Optional, Sequence, Tuple

from callmetrics.config import settings
from callmetrics.constants import COLUMN_ALIASES
from callmetrics.errors import ensure_iterable
from callmetrics.observability.metrics import record_rows
from callmetrics.schemas.records import CallRecord, NormalizationReport
from callmetrics.utils.formulas import calc_data_quality
from callmetrics.utils.logger import log_debug, log_info, log_warning
from callmetrics.utils.parsing import (
    answered_vocabulary,
    clean_text,
    is_answered,
    parse_date,
    parse_rating,
    parse_time,
)

ColumnMap = Dict[str, Any]

# Distinct header layouts remembered per normalizer; oldest is evicted first
COLUMN_CACHE_SIZE = 64


class RowNormalizer:
    """Turns raw sheet rows into CallRecords.

    Only answered calls survive. Bad cells degrade to "absent" values,
    they never abort the batch.
    """

    def __init__(
        self,
        answered_outcomes: Optional[Sequence[str]] = None,
        min_year: Optional[int] = None,
        aliases: Optional[Dict[str, Tuple[str, ...]]] = None,
    ):
        self._vocabulary = answered_vocabulary(answered_outcomes or settings.ANSWERED_OUTCOMES)
        self._min_year = min_year if min_year is not None else settings.MIN_VALID_YEAR
        self._aliases = aliases or COLUMN_ALIASES
        self._column_cache: Dict[Tuple[Any, ...], ColumnMap] = {}

    def resolve_columns(self, headers: Iterable[str]) -> ColumnMap:
        """Map each canonical field to the header carrying it (or None)."""
        key = tuple(headers)
        cached = self._column_cache.get(key)
        if cached is not None:
            return cached

        by_lower: Dict[str, Any] = {}
        for header in key:
            by_lower.setdefault(clean_text(header).lower(), header)

        resolved: ColumnMap = {}
        for field, spellings in self._aliases.items():
            resolved[field] = next(
                (by_lower[s.lower()] for s in spellings if s.lower() in by_lower),
                None,
            )
        if len(self._column_cache) >= COLUMN_CACHE_SIZE:
            self._column_cache.pop(next(iter(self._column_cache)))
        self._column_cache[key] = resolved
        log_debug(f"Resolved columns for {len(key)} headers: {resolved}")
        return resolved

    def normalize(self, raw_rows: Iterable[Mapping[str, Any]]) -> List[CallRecord]:
        return self.normalize_with_report(raw_rows).records

    def normalize_with_report(self, raw_rows: Iterable[Mapping[str, Any]]) -> NormalizationReport:
        ensure_iterable(raw_rows, "rows")

        records: List[CallRecord] = []
        total = malformed = unanswered = 0
        invalid_dates = missing_talk_time = invalid_ratings = 0

        for index, row in enumerate(raw_rows):
            total += 1
            if not isinstance(row, Mapping):
                malformed += 1
                log_warning(f"Skipping row {index}: expected a mapping, got {type(row).__name__}")
                continue

            columns = self.resolve_columns(row.keys())
            outcome = _cell(row, columns, "outcome")
            if not is_answered(outcome, self._vocabulary):
                unanswered += 1
                continue

            raw_attendance = _cell(row, columns, "rating_attendance")
            raw_resolution = _cell(row, columns, "rating_resolution")
            record = CallRecord(
                date=parse_date(_cell(row, columns, "date"), self._min_year),
                operator_name=clean_text(_cell(row, columns, "operator")),
                talk_time_seconds=parse_time(_cell(row, columns, "talk_time")),
                rating_attendance=parse_rating(raw_attendance),
                rating_resolution=parse_rating(raw_resolution),
                outcome=clean_text(outcome),
                disconnection=clean_text(_cell(row, columns, "disconnection")),
            )

            if record.date is None:
                invalid_dates += 1
            if not record.talk_time_seconds:
                missing_talk_time += 1
            if _rejected(raw_attendance, record.rating_attendance) or _rejected(
                raw_resolution, record.rating_resolution
            ):
                invalid_ratings += 1
            records.append(record)

        record_rows("kept", len(records))
        record_rows("unanswered", unanswered)
        record_rows("malformed", malformed)
        log_info(
            f"Normalized {total} rows: {len(records)} answered, "
            f"{unanswered} not answered, {malformed} malformed"
        )

        return NormalizationReport(
            records=records,
            total_rows=total,
            answered_rows=len(records),
            unanswered_rows=unanswered,
            malformed_rows=malformed,
            invalid_dates=invalid_dates,
            missing_talk_time=missing_talk_time,
            invalid_ratings=invalid_ratings,
            data_quality=calc_data_quality(len(records) - invalid_dates, len(records)),
        )


def _cell(row: Mapping[str, Any], columns: ColumnMap, field: str) -> Any:
    header = columns.get(field)
    return row.get(header) if header is not None else None


def _rejected(raw: Any, parsed: float) -> bool:
    """A rating cell that was filled in but did not yield a usable score."""
    return bool(clean_text(raw)) and not parsed


_default_normalizer: Optional[RowNormalizer] = None


def get_normalizer() -> RowNormalizer:
    global _default_normalizer
    if _default_normalizer is None:
        _default_normalizer = RowNormalizer()
    return _default_normalizer


def normalize(raw_rows: Iterable[Mapping[str, Any]]) -> List[CallRecord]:
    """Normalize raw rows with the settings-driven default normalizer."""
    return get_normalizer().normalize(raw_rows)


def normalize_with_report(raw_rows: Iterable[Mapping[str, Any]]) -> NormalizationReport:
    return get_normalizer().normalize_with_report(raw_rows)

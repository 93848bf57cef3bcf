# callmetrics/utils/formulas.py
# Single source of truth for all indicator arithmetic and display formats
# Pure functions with no side effects

import math
from typing import Iterable, Union

from callmetrics.constants import (
    EFFICIENCY_FULL_VOLUME_CALLS,
    EFFICIENCY_TALK_TIME_CEILING_SECONDS,
    MAX_RATING,
)

Number = Union[int, float]


def calc_mean(values: Iterable[Number]) -> float:
    """Arithmetic mean; 0.0 for an empty input."""
    total = 0.0
    count = 0
    for v in values:
        total += v
        count += 1
    if not count:
        return 0.0
    return total / count


def calc_minutes(seconds: Number) -> float:
    """Convert seconds to minutes without rounding."""
    return seconds / 60 if seconds else 0.0


def format_count(value: Number, separator: str = ".") -> str:
    """
    Thousands-grouped integer.
    1234567 -> '1.234.567' with the pt-BR separator.
    """
    return f"{int(value):,}".replace(",", separator)


def format_clock(minutes: Number) -> str:
    """
    Render a duration given in minutes as H:MM:SS or M:SS.
    Minutes and seconds come from the fractional minute value:
    hours = floor(v/60), mins = floor(v%60), secs = floor((v%1)*60)
    """
    hours = math.floor(minutes / 60)
    mins = math.floor(minutes % 60)
    secs = math.floor((minutes % 1) * 60)
    if hours > 0:
        return f"{hours}:{mins:02d}:{secs:02d}"
    return f"{mins}:{secs:02d}"


def format_rating(value: Number) -> str:
    """One-decimal rating, e.g. 4 -> '4.0'."""
    return f"{value:.1f}"


def is_valid_rating(value: Number) -> bool:
    return math.isfinite(value) and 0 <= value <= MAX_RATING


def calc_efficiency(
    total_calls: Number,
    mean_talk_seconds: Number,
    attendance: Number,
    resolution: Number,
) -> float:
    """
    Combined operator score in percent.
    volume  = min(calls / 10, 1)
    quality = (attendance + resolution) / 2 / 5
    time    = max(1 - talk_seconds / 300, 0)
    """
    volume = min(total_calls / EFFICIENCY_FULL_VOLUME_CALLS, 1)
    quality = (attendance + resolution) / 2 / MAX_RATING
    time_score = max(1 - mean_talk_seconds / EFFICIENCY_TALK_TIME_CEILING_SECONDS, 0)
    return round(volume * quality * time_score * 100, 2)


def calc_data_quality(valid: Number, total: Number) -> float:
    """Share of valid rows as a percentage with 2 decimals."""
    if not total:
        return 0.0
    return round(valid / total * 100, 2)

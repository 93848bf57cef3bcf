# callmetrics/utils/parsing.py
# Cell parsers for spreadsheet values
# Every parser returns an "absent" value instead of raising

import math
import re
import unicodedata
from datetime import date, datetime
from typing import Any, Iterable, Optional

from callmetrics.constants import MAX_RATING

_BR_DATE = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})(?:\s+.*)?$")
_LEADING_NUMBER = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)")
_DIGITS = re.compile(r"^\d+$", re.ASCII)


def clean_text(raw: Any) -> str:
    """Trimmed text in NFC form; sheets exported on macOS carry decomposed accents."""
    if raw is None:
        return ""
    return unicodedata.normalize("NFC", str(raw)).strip()


def parse_date(raw: Any, min_year: int = 2000) -> Optional[date]:
    """
    Parse a sheet date into a calendar day.
    DD/MM/YYYY first (optionally followed by a time part), ISO as fallback.
    """
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    if not isinstance(raw, str):
        return None
    s = raw.strip()
    if not s:
        return None

    m = _BR_DATE.match(s)
    if m:
        day, month, year = (int(g) for g in m.groups())
        if 1 <= day <= 31 and 1 <= month <= 12 and year >= min_year:
            try:
                return date(year, month, day)
            except ValueError:
                # 31/02 and friends
                return None
        return None

    return _parse_iso(s)


def _parse_iso(s: str) -> Optional[date]:
    s = s.replace("Z", "").strip()
    try:
        return datetime.fromisoformat(s).date()
    except ValueError:
        try:
            return datetime.fromisoformat(s.replace(" ", "T")).date()
        except ValueError:
            return None


def parse_time(raw: Any) -> int:
    """
    Talk time in whole seconds from 'MM:SS' or 'HH:MM:SS'.
    A bare number is read as seconds, unlike text-only sheet readers that
    zero it. Day-fraction durations (0.0038 for 5:30) are not converted and
    truncate to 0. Anything else is 0.
    """
    if isinstance(raw, bool) or raw is None:
        return 0
    if isinstance(raw, (int, float)):
        if not math.isfinite(raw) or raw < 0:
            return 0
        return int(raw)
    if not isinstance(raw, str):
        return 0
    s = raw.strip()
    if not s:
        return 0

    parts = s.split(":")
    if not all(_DIGITS.match(p.strip()) for p in parts):
        return 0
    nums = [int(p) for p in parts]

    if len(nums) == 3:
        hours, minutes, seconds = nums
        if minutes < 60 and seconds < 60:
            return hours * 3600 + minutes * 60 + seconds
    elif len(nums) == 2:
        minutes, seconds = nums
        if seconds < 60:
            return minutes * 60 + seconds
    return 0


def parse_rating(raw: Any) -> float:
    """
    Survey rating in [0, 5]; decimal comma accepted.
    Out of range or unreadable values count as absent (0).
    """
    if isinstance(raw, bool) or raw is None:
        return 0.0
    if isinstance(raw, (int, float)):
        value = float(raw)
    elif isinstance(raw, str):
        m = _LEADING_NUMBER.match(raw.strip().replace(",", ".", 1))
        if not m:
            return 0.0
        value = float(m.group(0))
    else:
        return 0.0

    if not math.isfinite(value) or value < 0 or value > MAX_RATING:
        return 0.0
    return value


def answered_vocabulary(labels: Iterable[str]) -> frozenset:
    return frozenset(clean_text(label).lower() for label in labels if clean_text(label))


def is_answered(raw: Any, vocabulary: frozenset) -> bool:
    label = clean_text(raw).lower()
    return bool(label) and label in vocabulary

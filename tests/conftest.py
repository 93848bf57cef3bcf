# tests/conftest.py
# Shared fixtures for unit and cross-module tests

from datetime import date

import pytest

from callmetrics.schemas.records import CallRecord
from callmetrics.services.periods import custom_period


@pytest.fixture
def make_record():
    """Factory for answered-call records with neutral defaults."""
    def _make(**overrides):
        data = {
            "date": date(2024, 1, 15),
            "operator_name": "Ana",
            "talk_time_seconds": 0,
            "rating_attendance": 0.0,
            "rating_resolution": 0.0,
            "outcome": "Atendida",
        }
        data.update(overrides)
        return CallRecord(**data)
    return _make


@pytest.fixture
def jan_15():
    """Single-day period covering 15/01/2024."""
    return custom_period(date(2024, 1, 15), date(2024, 1, 15))

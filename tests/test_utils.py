# tests/test_utils.py
# End-to-end checks: raw sheet rows -> normalizer -> aggregator

from datetime import date

import pytest

from callmetrics.services.aggregator import Aggregator
from callmetrics.services.normalizer import RowNormalizer
from callmetrics.services.periods import custom_period
from callmetrics.services.registry import get_engine
from callmetrics.utils.formulas import format_clock
from callmetrics.utils.parsing import parse_time

# --- Test data fixtures ---
# Rows look like a pt-BR call-center export.

@pytest.fixture
def sheet_rows():
    """ One answered call for Ana and one lost call for Bea on 15/01/2024. """
    return [
        {'Chamada': 'Atendida', 'Operador': 'Ana', 'Data': '15/01/2024', 'Tempo Falado': '05:30', 'Pergunta 1': '4', 'Pergunta 2': '5'},
        {'Chamada': 'Perdida', 'Operador': 'Bea', 'Data': '15/01/2024'},
    ]

@pytest.fixture
def busy_day_rows():
    """ 3 calls for Ana, 5 calls for Bea. """
    rows = [{'Chamada': 'Atendida', 'Operador': 'Ana', 'Data': '15/01/2024', 'Tempo Falado': '02:00'} for _ in range(3)]
    rows += [{'Chamada': 'Atendida', 'Operador': 'Bea', 'Data': '15/01/2024', 'Tempo Falado': '04:00'} for _ in range(5)]
    return rows

@pytest.fixture
def period():
    return custom_period(date(2024, 1, 15), date(2024, 1, 15))

# --- Tests ---

def test_single_answered_call(sheet_rows, period):
    """ Only the answered row counts toward the period indicators. """
    records = RowNormalizer().normalize(sheet_rows)
    calculations = Aggregator().compute_general(records, period).calculations

    assert calculations.volume.value == 1
    assert calculations.mean_talk_time.formatted == "5:30"
    assert calculations.mean_attendance_rating.formatted == "4.0"
    assert calculations.mean_resolution_rating.formatted == "5.0"

def test_out_of_range_rating_is_absent(period):
    """ A rating of 6 is read as "not answered", not as 6 or 5. """
    rows = [
        {'Chamada': 'Atendida', 'Operador': 'Ana', 'Data': '15/01/2024', 'Pergunta 1': '6'},
        {'Chamada': 'Atendida', 'Operador': 'Ana', 'Data': '15/01/2024', 'Pergunta 1': '4'},
    ]
    records = RowNormalizer().normalize(rows)
    assert records[0].rating_attendance == 0

    result = Aggregator().compute_general(records, period).calculations.mean_attendance_rating
    assert result.value == 4.0     # mean of [4], the 6 is dropped

def test_busiest_operator_first(busy_day_rows, period):
    records = RowNormalizer().normalize(busy_day_rows)
    operators = Aggregator().compute_by_operator(records, period)

    assert [o.operator_name for o in operators] == ['Bea', 'Ana']
    assert operators[0].calculations.volume.value == 5
    assert operators[0].calculations.mean_talk_time.formatted == "4:00"
    assert operators[1].calculations.mean_talk_time.formatted == "2:00"

def test_empty_input(period):
    """ No rows is a "no data" state, not an error. """
    general = Aggregator().compute_general(RowNormalizer().normalize([]), period)

    for result in general.calculations.model_dump().values():
        assert result['is_valid'] is False
        assert result['value'] == 0

def test_undated_rows_are_counted_by_engines_but_never_in_periods(period):
    rows = [{'Chamada': 'Atendida', 'Operador': 'Ana', 'Data': 'ontem'}]
    records = RowNormalizer().normalize(rows)

    assert get_engine('volume').calculate(records).value == 1
    assert Aggregator().compute_general(records, period).total_calls == 0

def test_talk_time_display_round_trips_within_a_second():
    """ Every MM:SS cell from 00:01 to 59:59 is shown back within one second. """
    # seconds come from the fractional minute and are floored, so 01:01 shows as 1:00
    off = []
    for total in range(1, 3600):
        clock = f"{total // 60:02d}:{total % 60:02d}"
        seconds = parse_time(clock)
        shown = format_clock(seconds / 60)

        assert seconds == total
        if abs(parse_time(shown) - seconds) > 1:
            off.append((clock, shown))

    assert off == []

@pytest.mark.parametrize("clock", ["00:30", "01:15", "05:30", "10:45", "12:00", "59:30"])
def test_talk_time_display_exact_for_binary_fractions(clock):
    """ Seconds that are exact binary fractions of a minute come back unchanged. """
    seconds = parse_time(clock)
    minutes, secs = divmod(seconds, 60)

    assert format_clock(seconds / 60) == f"{minutes}:{secs:02d}"

# tests/test_diagnostics.py

import pytest

np = pytest.importorskip("numpy")

import cyclecal
from cyclecal.core.time import to_jdn
from cyclecal.diagnostics import cycle_lengths as cl
from datetime import date


def test_month_lengths_over_a_leap_year():
    cal = cyclecal.get_calendar("gregorian")
    lengths = cl.cycle_lengths(cal, "month", to_jdn(date(2023, 12, 1)), to_jdn(date(2025, 1, 31)))
    # Complete months: 2024-01 .. 2024-12
    assert lengths.tolist() == [31, 29, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31]


def test_year_lengths_across_1900():
    cal = cyclecal.get_calendar("gregorian")
    lengths = cl.cycle_lengths(cal, "year", to_jdn(date(1895, 6, 1)), to_jdn(date(1905, 6, 1)))
    # 1896 .. 1904; 1900 is not a leap year.
    assert lengths.tolist() == [366, 365, 365, 365, 365, 365, 365, 365, 366]


def test_unknown_cycle_id():
    cal = cyclecal.get_calendar("julian")
    with pytest.raises(KeyError, match="era"):
        cl.cycle_values(cal, "era", 2451545, 2451546)


def test_main_prints_histogram(capsys):
    assert cl.main(["--cycle", "month", "--start", "2001-01-01", "--end", "2001-12-31"]) == 0
    out = capsys.readouterr().out
    assert "periods=10" in out
    assert "30 days : 4" in out

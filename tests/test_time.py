# tests/test_time.py

import random
from datetime import date

from cyclecal.core.time import from_jdn, parse_ymd, to_jdn


def test_jdn_date_roundtrip():
    random.seed(42)
    # Constrain to year 1 - 9999 to avoid datetime out of range
    for _ in range(10000):
        jdn_in = random.randint(1721426, 5373484)
        assert to_jdn(from_jdn(jdn_in)) == jdn_in


def test_known_epochs():
    assert to_jdn(date(2000, 1, 1)) == 2451545
    assert to_jdn(date(1, 1, 1)) == 1721426
    assert to_jdn(date(1582, 10, 15)) == 2299161
    assert from_jdn(2440588) == date(1970, 1, 1)


def test_parse_ymd():
    assert parse_ymd("2024-02-29") == date(2024, 2, 29)

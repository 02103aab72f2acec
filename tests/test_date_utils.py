from datetime import datetime

import pytest

from subify.utils.date_utils import add_months, utcnow


@pytest.mark.parametrize(
    "start, months, expected",
    [
        (datetime(2024, 1, 15), 12, datetime(2025, 1, 15)),
        (datetime(2024, 1, 31), 1, datetime(2024, 2, 29)),
        (datetime(2023, 1, 31), 1, datetime(2023, 2, 28)),
        (datetime(2024, 3, 31), 1, datetime(2024, 4, 30)),
        (datetime(2024, 11, 30), 3, datetime(2025, 2, 28)),
        (datetime(2024, 2, 10, 9, 30), 1, datetime(2024, 3, 10, 9, 30)),
        (datetime(2024, 3, 15), -3, datetime(2023, 12, 15)),
    ],
)
def test_add_months_clamps_to_month_end(start, months, expected):
    assert add_months(start, months) == expected


def test_add_months_is_not_fixed_day_arithmetic():
    # 12 calendar months across a leap day is 366 days, not 360 or 365
    assert (add_months(datetime(2024, 1, 1), 12) - datetime(2024, 1, 1)).days == 366


def test_utcnow_is_naive():
    assert utcnow().tzinfo is None

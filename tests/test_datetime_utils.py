import re

import pytest

from utils import datetime_utils as du
from utils.validators import is_valid_date, is_valid_year_month, is_valid_color, is_valid_username


def test_iter_month_dates_handles_leap_years():
    dates = list(du.iter_month_dates("2024-02"))
    assert len(dates) == 29
    assert dates[0] == "2024-02-01"
    assert dates[-1] == "2024-02-29"
    assert du.days_in_month("2025-02") == 28


@pytest.mark.parametrize("month,delta,expected", [
    ("2025-01", -1, "2024-12"),
    ("2025-12", 1, "2026-01"),
    ("2025-06", 0, "2025-06"),
    ("2025-06", 13, "2026-07"),
])
def test_shift_month(month, delta, expected):
    assert du.shift_month(month, delta) == expected


def test_first_weekday_sunday_based():
    assert du.first_weekday("2025-06") == 0  # 1 июня 2025 - воскресенье
    assert du.first_weekday("2025-07") == 2


def test_today_in_timezone():
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2}", du.today_str("Europe/Moscow"))
    assert du.current_month_key("UTC") == du.today_str("UTC")[:7]


def test_validators():
    assert is_valid_date("2025-06-01")
    assert not is_valid_date("2025-6-1")
    assert is_valid_year_month("2025-12")
    assert not is_valid_year_month("2025-13")
    assert not is_valid_year_month("0000-01")
    assert not is_valid_year_month("2025-06\n")
    assert not is_valid_color("#abc\n")
    assert is_valid_color("#abc")
    assert not is_valid_color("#abcd")
    assert is_valid_username("alice")
    assert not is_valid_username("a:b")

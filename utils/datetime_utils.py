import calendar
from datetime import date, datetime, timedelta
from typing import Iterator, Optional, Tuple

import pytz


def get_timezone(tz_name: Optional[str] = None):
    if tz_name is None:
        from config import config
        tz_name = config.tracker.timezone
    return pytz.timezone(tz_name)


def now_local(tz_name: Optional[str] = None) -> datetime:
    return datetime.now(get_timezone(tz_name))


def today_str(tz_name: Optional[str] = None) -> str:
    return now_local(tz_name).strftime("%Y-%m-%d")


def current_month_key(tz_name: Optional[str] = None) -> str:
    return now_local(tz_name).strftime("%Y-%m")


def month_key(year: int, month: int) -> str:
    return f"{year:04d}-{month:02d}"


def parse_year_month(year_month: str) -> Tuple[int, int]:
    year, month = year_month.split("-")
    return int(year), int(month)


def shift_month(year_month: str, delta: int) -> str:
    """Соседний месяц: -1 назад, +1 вперёд"""
    year, month = parse_year_month(year_month)
    index = year * 12 + (month - 1) + delta
    return month_key(index // 12, index % 12 + 1)


def days_in_month(year_month: str) -> int:
    year, month = parse_year_month(year_month)
    return calendar.monthrange(year, month)[1]


def iter_month_dates(year_month: str) -> Iterator[str]:
    """Все даты месяца в формате YYYY-MM-DD"""
    year, month = parse_year_month(year_month)
    first = date(year, month, 1)
    for offset in range(days_in_month(year_month)):
        yield (first + timedelta(days=offset)).isoformat()


def first_weekday(year_month: str) -> int:
    """День недели первого числа (0 - воскресенье)"""
    year, month = parse_year_month(year_month)
    return (date(year, month, 1).weekday() + 1) % 7

import re
from datetime import date

_COLOR_RE = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")
_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_MONTH_RE = re.compile(r"^(\d{4})-(\d{2})$")


def is_valid_username(username: str) -> bool:
    return isinstance(username, str) and 1 <= len(username.strip()) <= 64 and ':' not in username


def is_valid_color(color: str) -> bool:
    return isinstance(color, str) and bool(_COLOR_RE.fullmatch(color))


def is_valid_date(date_str: str) -> bool:
    if not isinstance(date_str, str) or not _DATE_RE.fullmatch(date_str):
        return False
    try:
        date.fromisoformat(date_str)
    except ValueError:
        return False
    return True


def is_valid_year_month(year_month: str) -> bool:
    if not isinstance(year_month, str):
        return False
    match = _MONTH_RE.fullmatch(year_month)
    return bool(match) and int(match.group(1)) >= 1 and 1 <= int(match.group(2)) <= 12

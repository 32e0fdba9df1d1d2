"""Calendar geometry — leap years, month lengths, month labels, selectable years."""

import datetime

from lunarcalendar.errors import ImpossibleDateError

MONTH_NAMES: tuple[str, ...] = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)

FIRST_OPTION_YEAR = 1980
OPTION_YEARS_AHEAD = 10

_DAYS_IN_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


def is_leap_year(year: int) -> bool:
    """Gregorian leap-year rule."""
    return (year % 4 == 0 and year % 100 != 0) or year % 400 == 0


def days_in_month(year: int, month: int) -> int:
    """Number of days in a 0-based month (0 = January) of the given year.

    Raises:
        ImpossibleDateError: If month is outside 0..11.
    """
    if not 0 <= month < 12:
        raise ImpossibleDateError(f"Month index out of range 0..11: {month}")
    if month == 1 and is_leap_year(year):
        return 29
    return _DAYS_IN_MONTH[month]


def max_days_in_year(year: int) -> int:
    """Longest month length of the year — the grid's row count."""
    return max(days_in_month(year, month) for month in range(12))


def year_options(today: datetime.date | None = None) -> list[int]:
    """Selectable years: 1980 through the current year + 10, inclusive.

    Read from the wall clock on every call.
    """
    current_year = (today or datetime.date.today()).year
    return list(range(FIRST_OPTION_YEAR, current_year + OPTION_YEARS_AHEAD + 1))

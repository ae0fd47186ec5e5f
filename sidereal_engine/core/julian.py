"""
julian.py
=========
Gregorian calendar ↔ Julian Day.

Source: Meeus, "Astronomical Algorithms" 2nd ed., Ch. 7.

The valid year range comes from :class:`sidereal_engine.config.Settings`
(1582–2100 by default). Dates outside it, and calendar-impossible dates,
raise :class:`InvalidDate`; nothing is silently clamped.
"""

import math
from typing import Optional, Tuple

from ..config import get_settings
from ..errors import InvalidDate

J2000 = 2451545.0          # 2000-01-01 12:00 UT
JULIAN_CENTURY = 36525.0

_DAYS_IN_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


def is_leap_year(year: int) -> bool:
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_month(year: int, month: int) -> int:
    if month == 2 and is_leap_year(year):
        return 29
    return _DAYS_IN_MONTH[month - 1]


def validate_date(year: int, month: int, day: int,
                  hour: int = 0, minute: int = 0, second: float = 0,
                  min_year: Optional[int] = None,
                  max_year: Optional[int] = None) -> None:
    """Raise InvalidDate unless every component is in range."""
    settings = get_settings()
    lo = settings.MIN_YEAR if min_year is None else min_year
    hi = settings.MAX_YEAR if max_year is None else max_year

    if int(year) != year or not lo <= year <= hi:
        raise InvalidDate(f"Year must be between {lo} and {hi}, got {year}")
    if int(month) != month or not 1 <= month <= 12:
        raise InvalidDate(f"Month must be between 1 and 12, got {month}")
    max_day = days_in_month(year, month)
    if int(day) != day or not 1 <= day <= max_day:
        raise InvalidDate(f"Day must be between 1 and {max_day} "
                          f"for month {month} of {year}, got {day}")
    if int(hour) != hour or not 0 <= hour <= 23:
        raise InvalidDate(f"Hour must be between 0 and 23, got {hour}")
    if int(minute) != minute or not 0 <= minute <= 59:
        raise InvalidDate(f"Minute must be between 0 and 59, got {minute}")
    if not (math.isfinite(second) and 0 <= second < 60):
        raise InvalidDate(f"Second must be in [0, 60), got {second}")


def _gregorian_to_jd(year: int, month: int, day: float) -> float:
    """Meeus Ch. 7; ``day`` may carry the fraction of the day."""
    if month <= 2:
        year -= 1
        month += 12
    a = year // 100
    b = 2 - a + a // 4
    return (math.floor(365.25 * (year + 4716))
            + math.floor(30.6001 * (month + 1))
            + day + b - 1524.5)


def julian_day(year: int, month: int, day: int,
               hour: int = 0, minute: int = 0, second: float = 0) -> float:
    """
    Julian Day of a Gregorian date and UT time.

    >>> julian_day(2000, 1, 1, 12, 0, 0)
    2451545.0
    """
    validate_date(year, month, day, hour, minute, second)
    # integer day first, fraction added last to keep sub-second precision
    jd = _gregorian_to_jd(year, month, day)
    return jd + (hour * 3600 + minute * 60 + second) / 86400.0


def julian_day_utc(year: int, month: int, day: int,
                   hour: int = 0, minute: int = 0, second: float = 0,
                   timezone_offset: float = 0.0) -> float:
    """
    Julian Day (UT) of a local civil time.
    timezone_offset: hours east of Greenwich, e.g. 5.5 for IST.
    """
    if not (math.isfinite(timezone_offset) and -12.0 <= timezone_offset <= 14.0):
        raise InvalidDate("Timezone offset must be between -12 and 14 hours, "
                          f"got {timezone_offset}")
    return julian_day(year, month, day, hour, minute, second) - timezone_offset / 24.0


def julian_centuries(jd: float) -> float:
    """Julian centuries since J2000.0."""
    return (jd - J2000) / JULIAN_CENTURY


def jd_to_gregorian(jd: float) -> Tuple[int, int, float]:
    """
    Julian Day → (year, month, day_with_fraction).
    Source: Meeus Ch. 7
    """
    jd = jd + 0.5
    z = int(jd)
    f = jd - z
    if z < 2299161:
        a = z
    else:
        alpha = int((z - 1867216.25) / 36524.25)
        a = z + 1 + alpha - int(alpha / 4)
    b = a + 1524
    c = int((b - 122.1) / 365.25)
    d = int(365.25 * c)
    e = int((b - d) / 30.6001)
    day = b - d - int(30.6001 * e) + f
    month = e - 1 if e < 14 else e - 13
    year = c - 4716 if month > 2 else c - 4715
    return year, month, day


def decimal_year(jd: float) -> float:
    """Calendar year with the elapsed fraction of that year, e.g. 1990.37."""
    year, _, _ = jd_to_gregorian(jd)
    start = _gregorian_to_jd(year, 1, 1)
    length = _gregorian_to_jd(year + 1, 1, 1) - start
    return year + (jd - start) / length

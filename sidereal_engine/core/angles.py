"""
angles.py
=========
Angle arithmetic shared by every other module.

All public outputs of the engine are normalized angles in [0, 360).
Non-finite input is a caller bug and raises immediately instead of being
folded into a meaningless position.
"""

import math
from typing import NamedTuple

from ..errors import DomainError

DEG_TO_RAD = math.pi / 180.0
RAD_TO_DEG = 180.0 / math.pi

DEGREES_PER_SIGN = 30.0

SIGNS = ("Aries", "Taurus", "Gemini", "Cancer", "Leo", "Virgo",
         "Libra", "Scorpio", "Sagittarius", "Capricorn", "Aquarius", "Pisces")


def _require_finite(value: float, what: str = "angle") -> float:
    if not math.isfinite(value):
        raise DomainError(f"{what} must be a finite number, got {value!r}")
    return value


def normalize(angle: float) -> float:
    """Reduce any finite real to [0, 360)."""
    _require_finite(angle)
    result = math.fmod(angle, 360.0)
    if result < 0.0:
        result += 360.0
    # -1e-15 + 360 rounds to 360.0
    if result >= 360.0:
        result = 0.0
    return result + 0.0  # folds -0.0


def to_radians(degrees: float) -> float:
    return degrees * DEG_TO_RAD


def to_degrees(radians: float) -> float:
    return radians * RAD_TO_DEG


def sign_of(longitude: float) -> int:
    """Zodiac sign index 0–11 of a longitude."""
    return int(normalize(longitude) // DEGREES_PER_SIGN) % 12


def degree_in_sign(longitude: float) -> float:
    return normalize(longitude) % DEGREES_PER_SIGN


def angular_distance(a: float, b: float) -> float:
    """Shortest separation between two longitudes, in [0, 180]."""
    diff = normalize(a - b)
    return 360.0 - diff if diff > 180.0 else diff


# ---------------------------------------------------------------------------
# Degrees / minutes / seconds
# ---------------------------------------------------------------------------

class DMS(NamedTuple):
    degrees: int
    minutes: int
    seconds: float
    # only needed when |value| < 1°, where degrees == 0 cannot hold the sign
    negative: bool = False


def to_dms(decimal_degrees: float, precision: int = 2) -> DMS:
    """
    Split decimal degrees into (degrees, minutes, seconds).
    The sign lives on ``degrees``; minutes and seconds are never negative.
    """
    _require_finite(decimal_degrees, "decimal degrees")
    negative = decimal_degrees < 0
    total = round(abs(decimal_degrees) * 3600.0, precision)
    d, rest = divmod(total, 3600.0)
    m, s = divmod(rest, 60.0)
    d, m, s = int(d), int(m), round(s, precision)
    if s >= 60.0:
        s -= 60.0
        m += 1
    if m >= 60:
        m -= 60
        d += 1
    return DMS(-d if negative else d, m, s, negative)


def from_dms(degrees: int, minutes: int = 0, seconds: float = 0.0,
             negative: bool = False) -> float:
    """Inverse of :func:`to_dms`."""
    if minutes < 0 or seconds < 0:
        raise DomainError("minutes and seconds must be non-negative; "
                          "carry the sign on degrees")
    magnitude = abs(degrees) + minutes / 60.0 + seconds / 3600.0
    return -magnitude if (degrees < 0 or negative) else magnitude


def format_dms(decimal_degrees: float) -> str:
    """Format decimal degrees as D°M'S\" string."""
    d, m, s, negative = to_dms(decimal_degrees, precision=1)
    sign = "-" if negative and d == 0 else ""
    return f"{sign}{d}°{m}'{s:.1f}\""

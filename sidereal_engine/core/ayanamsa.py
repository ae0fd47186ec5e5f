"""
ayanamsa.py
===========
Precession offset between the tropical and the sidereal zodiac.

Each system is a straight line in calendar years anchored at 2000.0:

    ayanamsa(year) = base + rate_arcsec_per_year * (year - 2000) / 3600

Lahiri (Chitrapaksha) is the Indian government standard and the default.
:func:`to_sidereal` is the only place in the package where a tropical
longitude becomes a sidereal one.
"""

import math
from types import MappingProxyType

from ..errors import DomainError
from .angles import normalize

AYANAMSA_BASE_YEAR = 2000.0

# system: (degrees at AYANAMSA_BASE_YEAR, precession in arcsec / year)
AYANAMSA_SYSTEMS = MappingProxyType({
    "lahiri": (23.85045, 50.2882),
    "raman":  (22.46000, 50.2388),
    "kp":     (23.86000, 50.2388),
    "fagan":  (24.74000, 50.2388),
})


def ayanamsa_for(year: float, system: str = "lahiri") -> float:
    """Ayanamsa in degrees for a (possibly fractional) calendar year."""
    if not math.isfinite(year):
        raise DomainError(f"year must be finite, got {year!r}")
    try:
        base, rate = AYANAMSA_SYSTEMS[system.lower()]
    except KeyError:
        raise DomainError(f"Unknown ayanamsa system: {system}. "
                          f"Supported: {sorted(AYANAMSA_SYSTEMS)}") from None
    return base + rate * (year - AYANAMSA_BASE_YEAR) / 3600.0


def to_sidereal(tropical_longitude: float, ayanamsa: float) -> float:
    return normalize(tropical_longitude - ayanamsa)

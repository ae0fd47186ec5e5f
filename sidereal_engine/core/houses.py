"""
houses.py
=========
Ascendant and house cusp calculations.

Supported systems:
  - Whole Sign (Vedic default)
  - Equal House
  - Placidus (time-division of the diurnal/nocturnal semi-arcs)

Every system returns 12 cusps, index 0 = 1st house. Cusps are in the
zodiac of the ascendant that is passed in; the time-based Placidus cusps
are computed tropically from the sidereal time and shifted by ``ayanamsa``.

Source: Meeus Ch. 13–14; Holden, J.H. (1994). "A History of Horoscopic Astrology"
"""

import logging
import math
from enum import Enum
from types import MappingProxyType
from typing import Callable, Mapping, Optional, Sequence, Tuple, Union

from ..config import get_settings
from ..errors import DomainError, UnsupportedLatitude
from .angles import DEGREES_PER_SIGN, normalize, sign_of, to_degrees, to_radians
from .ayanamsa import to_sidereal

logger = logging.getLogger(__name__)

J2000_OBLIQUITY = 23.4392911   # mean obliquity at J2000.0, degrees

HouseCusps = Tuple[float, ...]


class HouseSystem(str, Enum):
    WHOLE_SIGN = "whole_sign"
    EQUAL = "equal"
    PLACIDUS = "placidus"


def _check_latitude(latitude: float) -> None:
    if not math.isfinite(latitude) or abs(latitude) >= 90.0:
        raise DomainError(f"Latitude must be strictly between -90 and 90, got {latitude}")


# ---------------------------------------------------------------------------
# Ascendant (Lagna) and Midheaven
# ---------------------------------------------------------------------------

def ascendant(lst: float, latitude: float, obliquity: Optional[float] = None) -> float:
    """
    Ecliptic degree rising on the eastern horizon for a Local Sidereal
    Time (degrees). Source: Meeus Ch. 14

        tan(asc) = cos(RAMC) / -(sin(RAMC)·cos ε + tan φ·sin ε)

    On the equator the ecliptic is symmetric about the meridian, so the
    ascendant lies a quadrant east of the cardinal sidereal times:
    ascendant(0, 0) == 90, ascendant(90, 0) == 180.
    """
    _check_latitude(latitude)
    eps = to_radians(J2000_OBLIQUITY if obliquity is None else obliquity)
    ramc = to_radians(normalize(lst))
    phi = to_radians(latitude)

    y = math.cos(ramc)
    x = -(math.sin(ramc) * math.cos(eps) + math.tan(phi) * math.sin(eps))
    return normalize(to_degrees(math.atan2(y, x)))


def midheaven(lst: float, obliquity: Optional[float] = None) -> float:
    """Ecliptic longitude culminating on the meridian (MC)."""
    eps = to_radians(J2000_OBLIQUITY if obliquity is None else obliquity)
    ramc = to_radians(normalize(lst))
    return normalize(to_degrees(math.atan2(math.sin(ramc), math.cos(ramc) * math.cos(eps))))


# ---------------------------------------------------------------------------
# House systems
# ---------------------------------------------------------------------------

def whole_sign_cusps(asc: float, lst: float = 0.0, latitude: float = 0.0,
                     obliquity: Optional[float] = None, ayanamsa: float = 0.0) -> HouseCusps:
    """
    Whole Sign house cusps. House 1 = sign containing Ascendant.
    Each house = entire zodiac sign (30°).
    """
    lagna_start = sign_of(asc) * DEGREES_PER_SIGN
    return tuple(normalize(lagna_start + DEGREES_PER_SIGN * i) for i in range(12))


def equal_house_cusps(asc: float, lst: float = 0.0, latitude: float = 0.0,
                      obliquity: Optional[float] = None, ayanamsa: float = 0.0) -> HouseCusps:
    """
    Equal House cusps. House 1 begins exactly at Ascendant.
    Each house = 30°.
    """
    return tuple(normalize(asc + DEGREES_PER_SIGN * i) for i in range(12))


def _ra_to_ecliptic(ra: float, eps: float) -> float:
    """Ecliptic longitude (deg) of the ecliptic point with right ascension ``ra`` (rad)."""
    return normalize(to_degrees(math.atan2(math.sin(ra), math.cos(ra) * math.cos(eps))))


def _placidus_cusp(lst: float, phi: float, eps: float,
                   fraction: float, above_horizon: bool) -> float:
    """
    Solve one intermediate Placidus cusp (tropical longitude, degrees).

    Above the horizon the cusp lies ``fraction`` of its diurnal semi-arc
    east of the meridian; below, ``fraction`` of its nocturnal semi-arc
    west of the lower meridian. The semi-arcs depend on the cusp's own
    declination, so the right ascension is iterated to a fixed point.
    """
    if above_horizon:
        ra = lst + fraction * 90.0
    else:
        ra = lst + 180.0 - fraction * 90.0

    for _ in range(50):
        lon = _ra_to_ecliptic(to_radians(ra), eps)
        dec = math.asin(math.sin(eps) * math.sin(to_radians(lon)))
        x = math.tan(dec) * math.tan(phi)
        if abs(x) > 1.0:
            raise UnsupportedLatitude("Placidus semi-arc undefined at latitude "
                                      f"{to_degrees(phi):.4f}")
        ad = to_degrees(math.asin(x))  # ascensional difference
        if above_horizon:
            ra_new = lst + fraction * (90.0 + ad)
        else:
            ra_new = lst + 180.0 - fraction * (90.0 - ad)
        if abs(ra_new - ra) < 1e-10:
            ra = ra_new
            break
        ra = ra_new

    return _ra_to_ecliptic(to_radians(ra), eps)


def placidus_cusps(asc: float, lst: float, latitude: float,
                   obliquity: Optional[float] = None, ayanamsa: float = 0.0) -> HouseCusps:
    """
    Placidus house cusps.
    Houses 1/7 = Ascendant/Descendant, 10/4 = sidereal time and its opposite,
    11, 12, 2, 3 by semi-arc trisection, 5, 6, 8, 9 opposite those.
    """
    _check_latitude(latitude)
    limit = get_settings().PLACIDUS_MAX_LATITUDE
    if abs(latitude) > limit:
        raise UnsupportedLatitude(f"Placidus house system is not valid for latitudes "
                                  f"beyond ±{limit:g} degrees, got {latitude}")

    eps = to_radians(J2000_OBLIQUITY if obliquity is None else obliquity)
    phi = to_radians(latitude)
    ramc = normalize(lst)

    h11 = to_sidereal(_placidus_cusp(ramc, phi, eps, 1 / 3, True), ayanamsa)
    h12 = to_sidereal(_placidus_cusp(ramc, phi, eps, 2 / 3, True), ayanamsa)
    h2 = to_sidereal(_placidus_cusp(ramc, phi, eps, 2 / 3, False), ayanamsa)
    h3 = to_sidereal(_placidus_cusp(ramc, phi, eps, 1 / 3, False), ayanamsa)
    mc = to_sidereal(ramc, ayanamsa)

    def opp(x):
        return normalize(x + 180.0)

    asc = normalize(asc)
    return (asc, h2, h3, opp(mc), opp(h11), opp(h12),
            opp(asc), opp(h2), opp(h3), mc, h11, h12)


HouseStrategy = Callable[..., HouseCusps]

HOUSE_SYSTEMS: Mapping[HouseSystem, HouseStrategy] = MappingProxyType({
    HouseSystem.WHOLE_SIGN: whole_sign_cusps,
    HouseSystem.EQUAL: equal_house_cusps,
    HouseSystem.PLACIDUS: placidus_cusps,
})


def house_system(name: Union[str, HouseSystem]) -> HouseSystem:
    if isinstance(name, HouseSystem):
        return name
    try:
        return HouseSystem(str(name).strip().lower())
    except ValueError:
        raise DomainError(f"Unknown house system: {name}. "
                          f"Supported: {[s.value for s in HouseSystem]}") from None


def house_cusps(system: Union[str, HouseSystem], asc: float, lst: float = 0.0,
                latitude: float = 0.0, obliquity: Optional[float] = None,
                ayanamsa: float = 0.0) -> HouseCusps:
    """
    Returns the 12 cusps for ``system`` ('whole_sign', 'equal', 'placidus').
    ``asc`` must already be in the target zodiac; ``ayanamsa`` shifts the
    time-based cusps into it.
    """
    system = house_system(system)
    cusps = HOUSE_SYSTEMS[system](asc, lst, latitude, obliquity, ayanamsa)
    logger.debug("%s cusps: %s", system.value,
                 ", ".join(f"{c:.4f}" for c in cusps))
    return cusps


def house_of(longitude: float, cusps: Sequence[float]) -> int:
    """
    Returns 1-based house number for a longitude given 12 cusps
    in the same zodiac. A cusp belongs to the house it opens.
    """
    if len(cusps) != 12:
        raise DomainError(f"Expected 12 cusps, got {len(cusps)}")
    lon = normalize(longitude)
    for i in range(12):
        start = cusps[i]
        span = normalize(cusps[(i + 1) % 12] - start)
        if normalize(lon - start) < span:
            return i + 1
    return 1

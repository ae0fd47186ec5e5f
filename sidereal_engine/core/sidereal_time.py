"""
sidereal_time.py
================
Sidereal time and the obliquity of the ecliptic.

Source: Meeus Ch. 12 (sidereal time), Ch. 22 (nutation and obliquity).
"""

import math
from typing import Tuple

from .angles import normalize, to_radians
from .julian import J2000, julian_centuries


def gmst(jd: float) -> float:
    """
    Greenwich Mean Sidereal Time in degrees.
    Source: Meeus Ch. 12, Eq. 12.4
    """
    t = julian_centuries(jd)
    theta = (280.46061837
             + 360.98564736629 * (jd - J2000)
             + 0.000387933 * t * t
             - t * t * t / 38710000.0)
    return normalize(theta)


def lst(gmst_deg: float, geo_longitude: float) -> float:
    """Local Sidereal Time; geo_longitude positive East."""
    return normalize(gmst_deg + geo_longitude)


def mean_obliquity(jd: float) -> float:
    """Mean obliquity of the ecliptic in degrees (Meeus Eq. 22.2)."""
    t = julian_centuries(jd)
    return (23.0 + 26.0 / 60.0 + 21.448 / 3600.0
            - (46.8150 * t + 0.00059 * t * t - 0.001813 * t * t * t) / 3600.0)


def nutation(jd: float) -> Tuple[float, float]:
    """
    Returns (delta_psi_arcsec, delta_eps_arcsec).
    Low-precision series of Meeus Ch. 22 (~0.5" in psi, ~0.1" in eps).
    """
    t = julian_centuries(jd)
    omega = to_radians(normalize(125.04452 - 1934.136261 * t + 0.0020708 * t * t))
    sun_l = to_radians(normalize(280.4665 + 36000.7698 * t))
    moon_l = to_radians(normalize(218.3165 + 481267.8813 * t))

    dpsi = (-17.20 * math.sin(omega) - 1.32 * math.sin(2 * sun_l)
            - 0.23 * math.sin(2 * moon_l) + 0.21 * math.sin(2 * omega))
    deps = (9.20 * math.cos(omega) + 0.57 * math.cos(2 * sun_l)
            + 0.10 * math.cos(2 * moon_l) - 0.09 * math.cos(2 * omega))
    return dpsi, deps


def true_obliquity(jd: float) -> float:
    _, deps = nutation(jd)
    return mean_obliquity(jd) + deps / 3600.0

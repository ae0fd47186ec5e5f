"""
ephemeris.py
============
Geocentric ecliptic longitudes of the nine Vedic bodies.

Uses Jean Meeus "Astronomical Algorithms" 2nd ed.

Two providers implement :class:`BodyPositionProvider`:

  MeeusEphemeris       Sun (Ch. 25), Moon (main terms of Table 47.A),
                       planets from mean orbital elements solved with
                       Kepler's equation and moved from heliocentric to
                       geocentric coordinates, true lunar node.
                       ~0.05° Sun/Moon, ~0.5° planets for 1800–2100.

  MeanMotionEphemeris  Linear mean longitudes only. Planets are off by
                       up to tens of degrees; useful as a cheap placeholder
                       and as a second implementation of the interface.

Providers return TROPICAL longitudes. :func:`compute_positions` is where
they become sidereal, through :func:`ayanamsa.to_sidereal`.

For production accuracy, plug in a provider backed by a full VSOP87 series
or an external ephemeris; nothing else in the package changes.
"""

import logging
import math
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Dict, Protocol, Tuple

from ..errors import DomainError
from .angles import normalize, sign_of, degree_in_sign, to_radians as _r, to_degrees as _d
from .ayanamsa import to_sidereal
from .julian import J2000, julian_centuries
from .sidereal_time import nutation

logger = logging.getLogger(__name__)


class Body(str, Enum):
    SUN = "Sun"
    MOON = "Moon"
    MERCURY = "Mercury"
    VENUS = "Venus"
    MARS = "Mars"
    JUPITER = "Jupiter"
    SATURN = "Saturn"
    RAHU = "Rahu"
    KETU = "Ketu"


BODIES: Tuple[Body, ...] = tuple(Body)
PLANETS = (Body.MERCURY, Body.VENUS, Body.MARS, Body.JUPITER, Body.SATURN)
NODES = (Body.RAHU, Body.KETU)


@dataclass(frozen=True)
class BodyPosition:
    body:       Body
    longitude:  float
    tropical:   bool = False
    retrograde: bool = False

    @property
    def sign(self) -> int:
        return sign_of(self.longitude)

    @property
    def degree_in_sign(self) -> float:
        return degree_in_sign(self.longitude)


def sidereal_position(position: BodyPosition, ayanamsa: float) -> BodyPosition:
    """Tropical BodyPosition → sidereal BodyPosition."""
    if not position.tropical:
        raise DomainError(f"{position.body.value} is already sidereal")
    return BodyPosition(position.body, to_sidereal(position.longitude, ayanamsa),
                        tropical=False, retrograde=position.retrograde)


class BodyPositionProvider(Protocol):
    """Anything that can produce tropical longitudes for a Julian Day (UT)."""

    def tropical_longitudes(self, jd: float) -> Dict[Body, float]:
        ...


# ── Sun (Meeus Ch. 25), already geocentric ─────────────────────

def sun_longitude(t: float, dpsi: float) -> Tuple[float, float]:
    """Returns (apparent_longitude_deg, radius_AU)."""
    l0 = normalize(280.46646 + 36000.76983 * t + 0.0003032 * t * t)
    m = normalize(357.52911 + 35999.05029 * t - 0.0001537 * t * t)
    m_r = _r(m)
    e = 0.016708634 - 0.000042037 * t - 0.0000001267 * t * t

    c = ((1.914602 - 0.004817 * t - 0.000014 * t * t) * math.sin(m_r)
         + (0.019993 - 0.000101 * t) * math.sin(2 * m_r)
         + 0.000289 * math.sin(3 * m_r))

    true_lon = l0 + c
    v = _r(m + c)
    r = (1.000001018 * (1 - e * e)) / (1 + e * math.cos(v))

    # aberration (-20.4898") and nutation in longitude
    apparent = normalize(true_lon + dpsi / 3600.0 - 20.4898 / 3600.0 / r)
    return apparent, r


# ── Moon (Meeus Ch. 47), already geocentric ────────────────────

# (D, M, M', F, coefficient of sin in 1e-6 degrees), Table 47.A
_MOON_LONGITUDE_TERMS = (
    (0, 0, 1, 0, 6288774), (2, 0, -1, 0, 1274027), (2, 0, 0, 0, 658314),
    (0, 0, 2, 0, 213618), (0, 1, 0, 0, -185116), (0, 0, 0, 2, -114332),
    (2, 0, -2, 0, 58793), (2, -1, -1, 0, 57066), (2, 0, 1, 0, 53322),
    (2, -1, 0, 0, 45758), (0, 1, -1, 0, -40923), (1, 0, 0, 0, -34720),
    (0, 1, 1, 0, -30383), (2, 0, 0, -2, 15327), (0, 0, 1, 2, -12528),
    (0, 0, 1, -2, 10980), (4, 0, -1, 0, 10675), (0, 0, 3, 0, 10034),
    (4, 0, -2, 0, 8548), (2, 1, -1, 0, -7888), (2, 1, 0, 0, -6766),
    (1, 0, -1, 0, -5163), (1, 1, 0, 0, 4987), (2, -1, 1, 0, 4036),
    (2, 0, 2, 0, 3994), (4, 0, 0, 0, 3861), (2, 0, -3, 0, 3665),
    (0, 1, -2, 0, -2689), (2, 0, -1, 2, -2602), (2, -1, -2, 0, 2390),
    (1, 0, 1, 0, -2348), (2, -2, 0, 0, 2236), (0, 1, 2, 0, -2120),
    (0, 2, 0, 0, -2069),
)


def _lunar_arguments(t: float) -> Tuple[float, float, float, float, float]:
    """(L', D, M, M', F) in degrees, Meeus Eq. 47.1–47.5."""
    t2, t3 = t * t, t * t * t
    lp = normalize(218.3164477 + 481267.88123421 * t - 0.0015786 * t2 + t3 / 538841.0)
    d = normalize(297.8501921 + 445267.1114034 * t - 0.0018819 * t2 + t3 / 545868.0)
    m = normalize(357.5291092 + 35999.0502909 * t - 0.0001536 * t2 + t3 / 24490000.0)
    mp = normalize(134.9633964 + 477198.8675055 * t + 0.0087414 * t2 + t3 / 69699.0)
    f = normalize(93.2720950 + 483202.0175233 * t - 0.0036539 * t2 - t3 / 3526000.0)
    return lp, d, m, mp, f


def moon_longitude(t: float, dpsi: float) -> float:
    """Apparent geocentric longitude of the Moon in degrees."""
    lp, d, m, mp, f = _lunar_arguments(t)
    e = 1.0 - 0.002516 * t - 0.0000074 * t * t

    sigma = 0.0
    for cd, cm, cmp_, cf, coeff in _MOON_LONGITUDE_TERMS:
        arg = _r(cd * d + cm * m + cmp_ * mp + cf * f)
        sigma += coeff * (e ** abs(cm)) * math.sin(arg)

    # additive terms: Venus, Jupiter, flattening of the Earth
    a1 = _r(normalize(119.75 + 131.849 * t))
    a2 = _r(normalize(53.09 + 479264.290 * t))
    sigma += 3958 * math.sin(a1) + 1962 * math.sin(_r(lp - f)) + 318 * math.sin(a2)

    return normalize(lp + sigma / 1_000_000.0 + dpsi / 3600.0)


def rahu_longitude(t: float) -> float:
    """True ascending lunar node (Rahu). Meeus Ch. 47."""
    _, d, m, mp, f = _lunar_arguments(t)
    omega = 125.0445479 - 1934.1362891 * t + 0.0020754 * t * t + t ** 3 / 467441.0
    omega -= (1.4979 * math.sin(_r(2 * (d - f)))
              + 0.1500 * math.sin(_r(m))
              + 0.1226 * math.sin(_r(2 * d))
              - 0.1176 * math.sin(_r(2 * f))
              + 0.0801 * math.sin(_r(2 * (mp - f))))
    return normalize(omega)


# ── Planets: mean orbital elements (Meeus Table 31.A, of date) ─

@dataclass(frozen=True)
class OrbitalElements:
    mean_longitude: Tuple[float, float]   # L  = a0 + a1*T   (deg)
    semi_major_axis: float                # a  (AU)
    eccentricity: Tuple[float, float]     # e  = e0 + e1*T
    inclination: Tuple[float, float]      # i  (deg)
    node: Tuple[float, float]             # Ω  (deg)
    perihelion_arg: Tuple[float, float]   # ω  (deg), ϖ = ω + Ω

    def at(self, t: float) -> Tuple[float, float, float, float, float, float]:
        def lin(p):
            return p[0] + p[1] * t
        return (normalize(lin(self.mean_longitude)), self.semi_major_axis,
                lin(self.eccentricity), lin(self.inclination),
                normalize(lin(self.node)), normalize(lin(self.perihelion_arg)))


ORBITAL_ELEMENTS = MappingProxyType({
    Body.MERCURY: OrbitalElements((252.2509, 149474.0722), 0.387098,
                                  (0.205632, 0.000020), (7.0050, 0.0018),
                                  (48.3309, 1.1862), (29.1252, 0.3703)),
    Body.VENUS:   OrbitalElements((181.9798, 58519.2130), 0.723330,
                                  (0.006772, -0.000048), (3.3947, 0.0010),
                                  (76.6799, 0.9011), (54.8838, 0.5011)),
    Body.MARS:    OrbitalElements((355.4330, 19141.6964), 1.523679,
                                  (0.093401, 0.000092), (1.8497, -0.0006),
                                  (49.5581, 0.7721), (286.5021, 1.0689)),
    Body.JUPITER: OrbitalElements((34.3515, 3036.3028), 5.202603,
                                  (0.048495, 0.000163), (1.3033, -0.0055),
                                  (100.4644, 1.0210), (273.8669, 0.5917)),
    Body.SATURN:  OrbitalElements((50.0774, 1223.5111), 9.554909,
                                  (0.055509, -0.000347), (2.4889, -0.0037),
                                  (113.6655, 0.8771), (339.3913, 1.0867)),
})

# Jupiter–Saturn great inequality, added to heliocentric longitude.
# (coefficient deg, 'sin'|'cos', k_jupiter, k_saturn, phase deg) applied to
# the mean anomalies Mj and Ms.
_PERTURBATIONS = MappingProxyType({
    Body.JUPITER: (
        (-0.332, "sin", 2, -5, -67.6), (-0.056, "sin", 2, -2, 21.0),
        (0.042, "sin", 3, -5, 21.0), (-0.036, "sin", 1, -2, 0.0),
        (0.022, "cos", 1, -1, 0.0), (0.023, "sin", 2, -3, 52.0),
        (-0.016, "sin", 1, -5, -69.0),
    ),
    Body.SATURN: (
        (0.812, "sin", 2, -5, -67.6), (-0.229, "cos", 2, -4, -2.0),
        (0.119, "sin", 1, -2, -3.0), (0.046, "sin", 2, -6, -69.0),
        (0.014, "sin", 1, -3, 32.0),
    ),
})


def _mean_anomaly(body: Body, t: float) -> float:
    l, _, _, _, node, w = ORBITAL_ELEMENTS[body].at(t)
    return normalize(l - w - node)


def _solve_kepler(m_rad: float, e: float) -> float:
    """Eccentric anomaly (radians) by Newton-Raphson."""
    ecc = m_rad + e * math.sin(m_rad) * (1 + e * math.cos(m_rad))
    for _ in range(20):
        delta = (ecc - e * math.sin(ecc) - m_rad) / (1 - e * math.cos(ecc))
        ecc -= delta
        if abs(delta) < 1e-12:
            break
    return ecc


def heliocentric_position(body: Body, t: float) -> Tuple[float, float, float]:
    """Heliocentric ecliptic (longitude deg, latitude deg, radius AU)."""
    l, a, e, incl, node, w = ORBITAL_ELEMENTS[body].at(t)
    m = normalize(l - w - node)
    ecc = _solve_kepler(_r(m), e)
    v = _d(2 * math.atan2(math.sqrt(1 + e) * math.sin(ecc / 2),
                          math.sqrt(1 - e) * math.cos(ecc / 2)))
    r = a * (1 - e * math.cos(ecc))

    u = _r(v + w)  # argument of latitude
    i = _r(incl)
    lon = normalize(_d(math.atan2(math.sin(u) * math.cos(i), math.cos(u))) + node)
    lat = _d(math.asin(math.sin(i) * math.sin(u)))

    terms = _PERTURBATIONS.get(body)
    if terms:
        mj = _mean_anomaly(Body.JUPITER, t)
        ms = _mean_anomaly(Body.SATURN, t)
        for coeff, fn, kj, ks, phase in terms:
            arg = _r(kj * mj + ks * ms + phase)
            lon += coeff * (math.sin(arg) if fn == "sin" else math.cos(arg))
        lon = normalize(lon)
    return lon, lat, r


def _helio_to_geo_lon(l_planet: float, b_planet: float, r_planet: float,
                      l_earth: float, r_earth: float) -> float:
    """Heliocentric planet + Earth → geocentric ecliptic longitude."""
    cb = math.cos(_r(b_planet))
    x = r_planet * cb * math.cos(_r(l_planet)) - r_earth * math.cos(_r(l_earth))
    y = r_planet * cb * math.sin(_r(l_planet)) - r_earth * math.sin(_r(l_earth))
    return normalize(_d(math.atan2(y, x)))


class MeeusEphemeris:
    """Default provider: low-order Meeus series."""

    def tropical_longitudes(self, jd: float) -> Dict[Body, float]:
        t = julian_centuries(jd)
        dpsi, _ = nutation(jd)

        sun, sun_r = sun_longitude(t, dpsi)
        rahu = rahu_longitude(t)
        result = {
            Body.SUN: sun,
            Body.MOON: moon_longitude(t, dpsi),
            Body.RAHU: rahu,
            Body.KETU: normalize(rahu + 180.0),
        }

        # Earth heliocentric = Sun geocentric + 180
        earth_l = normalize(sun - dpsi / 3600.0 + 180.0)
        for planet in PLANETS:
            l, b, r = heliocentric_position(planet, t)
            result[planet] = normalize(_helio_to_geo_lon(l, b, r, earth_l, sun_r)
                                       + dpsi / 3600.0)
        return result


class MeanMotionEphemeris:
    """
    Linear mean longitudes: L = L0 + n * (JD - J2000).
    Moon gets its three largest periodic terms; nodes regress uniformly.
    """

    # body: (L0 deg at J2000, mean daily motion deg/day)
    MEAN_MOTIONS = MappingProxyType({
        Body.SUN:     (280.459, 0.98564736),
        Body.MERCURY: (252.251, 4.09233445),
        Body.VENUS:   (181.979, 1.60213034),
        Body.MARS:    (355.433, 0.52402068),
        Body.JUPITER: (34.351, 0.08308529),
        Body.SATURN:  (50.078, 0.03344414),
        Body.RAHU:    (125.045, -0.05295377),
    })

    def tropical_longitudes(self, jd: float) -> Dict[Body, float]:
        days = jd - J2000
        result = {body: normalize(l0 + n * days)
                  for body, (l0, n) in self.MEAN_MOTIONS.items()}

        lp, d, _, mp, _ = _lunar_arguments(julian_centuries(jd))
        result[Body.MOON] = normalize(lp
                                      + 6.288774 * math.sin(_r(mp))
                                      + 1.274027 * math.sin(_r(2 * d - mp))
                                      + 0.658314 * math.sin(_r(2 * d)))
        result[Body.KETU] = normalize(result[Body.RAHU] + 180.0)
        return result


# ── Retrograde detection ────────────────────────────────────────

def _retrograde_flags(provider: BodyPositionProvider, jd: float) -> Dict[Body, bool]:
    """
    A planet is retrograde when its geocentric longitude is decreasing,
    judged over one day centred on ``jd``. The nodes always regress;
    the luminaries never do.
    """
    before = provider.tropical_longitudes(jd - 0.5)
    after = provider.tropical_longitudes(jd + 0.5)
    flags = {body: False for body in BODIES}
    for body in NODES:
        flags[body] = True
    for body in PLANETS:
        motion = normalize(after[body] - before[body])
        flags[body] = motion > 180.0
    return flags


def compute_positions(provider: BodyPositionProvider, jd: float,
                      ayanamsa: float) -> Dict[Body, BodyPosition]:
    """Sidereal BodyPosition for each of the nine bodies."""
    tropical = provider.tropical_longitudes(jd)
    missing = [b.value for b in BODIES if b not in tropical]
    if missing:
        raise DomainError(f"Provider {type(provider).__name__} returned no "
                          f"longitude for: {', '.join(missing)}")
    retro = _retrograde_flags(provider, jd)

    positions = {}
    for body in BODIES:
        trop = BodyPosition(body, normalize(tropical[body]), tropical=True,
                            retrograde=retro[body])
        positions[body] = sidereal_position(trop, ayanamsa)
        logger.debug("%s tropical=%.6f sidereal=%.6f retro=%s", body.value,
                     trop.longitude, positions[body].longitude, trop.retrograde)
    return positions

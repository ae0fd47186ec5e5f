"""
chart.py
========
Main sidereal chart generator.

Orchestrates time conversion, ayanamsa, sidereal time, ephemeris and house
modules to produce a :class:`~sidereal_engine.models.Chart`.

Usage:
    from sidereal_engine import BirthInput, generate_chart

    chart = generate_chart(
        BirthInput(year=1990, month=5, day=15,
                   hour=14, minute=30, second=0,
                   timezone_offset=5.5,        # IST = UTC+5:30
                   latitude=28.6139,           # Delhi
                   longitude=77.2090),
        house_system="whole_sign",             # or equal, placidus
        ayanamsa_system="lahiri",              # or raman, kp, fagan
    )
    chart.nakshatra().name
    chart.divisional(["D9"])
"""

import logging
from concurrent.futures import Executor
from functools import partial
from typing import Iterable, List, Mapping, Optional, Union

from ..config import get_settings
from ..core.ayanamsa import ayanamsa_for, to_sidereal
from ..core.ephemeris import BodyPositionProvider, MeeusEphemeris, compute_positions
from ..core.houses import HouseSystem, ascendant, house_cusps, house_system as _house_system
from ..core.julian import decimal_year, julian_day_utc
from ..core.sidereal_time import gmst, lst, true_obliquity
from ..models import BirthInput, Chart

logger = logging.getLogger(__name__)

BirthLike = Union[BirthInput, Mapping]


def generate_chart(
    birth: BirthLike,
    house_system: Optional[Union[str, HouseSystem]] = None,
    ayanamsa_system: Optional[str] = None,
    provider: Optional[BodyPositionProvider] = None,
) -> Chart:
    """
    Generate a sidereal chart.

    Args:
        birth: BirthInput, or a mapping accepted by BirthInput
               (``latitudeDeg``/``longitudeDeg`` aliases included).
               Time is LOCAL civil time at ``timezone_offset``.
        house_system: 'whole_sign', 'equal', 'placidus'; default from settings
        ayanamsa_system: 'lahiri', 'raman', 'kp', 'fagan'; default from settings
        provider: any BodyPositionProvider; MeeusEphemeris by default

    Raises:
        InvalidDate, DomainError, UnsupportedLatitude
    """
    if not isinstance(birth, BirthInput):
        birth = BirthInput.model_validate(birth)

    settings = get_settings()
    system = _house_system(house_system or settings.DEFAULT_HOUSE_SYSTEM)
    ayanamsa_name = (ayanamsa_system or settings.DEFAULT_AYANAMSA).lower()
    provider = provider or MeeusEphemeris()

    # ---- Time: local civil → UT Julian Day ----
    jd = julian_day_utc(birth.year, birth.month, birth.day,
                        birth.hour, birth.minute, birth.second,
                        timezone_offset=birth.timezone_offset)
    ayanamsa = ayanamsa_for(decimal_year(jd), ayanamsa_name)

    # ---- Earth orientation ----
    local_st = lst(gmst(jd), birth.longitude)
    obliquity = true_obliquity(jd)
    logger.debug("jd=%.6f ayanamsa=%.6f lst=%.6f obliquity=%.6f",
                 jd, ayanamsa, local_st, obliquity)

    # ---- Bodies ----
    positions = compute_positions(provider, jd, ayanamsa)

    # ---- Lagna and houses ----
    asc = to_sidereal(ascendant(local_st, birth.latitude, obliquity), ayanamsa)
    cusps = house_cusps(system, asc, local_st, birth.latitude, obliquity, ayanamsa)

    return Chart(
        julian_day=jd,
        ayanamsa=ayanamsa,
        ascendant=asc,
        houses=cusps,
        bodies={b: p.longitude for b, p in positions.items()},
        house_system=system.value,
        ayanamsa_system=ayanamsa_name,
        local_sidereal_time=local_st,
        obliquity=obliquity,
        retrograde=frozenset(b for b, p in positions.items() if p.retrograde),
    )


def generate_charts(births: Iterable[BirthLike],
                    executor: Optional[Executor] = None,
                    **options) -> List[Chart]:
    """
    Generate one chart per birth, in input order.

    Charts share no state, so an ``executor`` (thread or process pool) may
    compute them in parallel. ``options`` are passed to :func:`generate_chart`.
    The first failing birth raises.
    """
    build = partial(generate_chart, **options)
    if executor is None:
        return [build(birth) for birth in births]
    return list(executor.map(build, births))

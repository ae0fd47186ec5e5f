"""
divisional_charts.py
====================
Divisional (Varga) chart calculations for Vedic astrology.

A divisional chart is computed by dividing each zodiac sign into N equal parts,
then mapping each part to a divisional sign. The remainder inside the part is
stretched back over a full 30° sign.

Which sign a part maps to is not uniform across charts, so every chart is a
:class:`VargaDefinition` row naming one of four sign rules:

  SIGN_TYPE_BASED  movable / fixed / dual signs start from the sign itself,
                   the 9th or the 5th (D4, D9)
  PARITY_BASED     odd and even signs branch (D2 Hora, D10 Dasamsa)
  FIXED_OFFSET     a fixed offset per part (D3 Drekkana: 1st, 5th, 9th)
  GENERIC          count on from the sign, optionally from a start offset

Charts implemented:
  D1–D10, D12, D16, D20, D24, D27, D30, D40, D45, D60

Source: Parashara BPHS; Sanjay Rath (2002) "Crux of Vedic Astrology"
"""

import math
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Callable, Dict, Hashable, Iterable, Mapping, Optional, Tuple, Union

from ..errors import UnsupportedChart
from .angles import DEGREES_PER_SIGN, SIGNS, degree_in_sign, normalize, sign_of

MOVABLE_SIGNS = frozenset({0, 3, 6, 9})    # Aries, Cancer, Libra, Capricorn
FIXED_SIGNS = frozenset({1, 4, 7, 10})     # Taurus, Leo, Scorpio, Aquarius
DUAL_SIGNS = frozenset({2, 5, 8, 11})      # Gemini, Virgo, Sagittarius, Pisces

# counting starts from the sign itself, the 9th, or the 5th
SIGN_TYPE_OFFSETS = MappingProxyType({"movable": 0, "fixed": 8, "dual": 4})


def sign_type(sign: int) -> str:
    if sign in MOVABLE_SIGNS:
        return "movable"
    if sign in FIXED_SIGNS:
        return "fixed"
    return "dual"


class SignRule(Enum):
    SIGN_TYPE_BASED = "sign_type_based"
    PARITY_BASED = "parity_based"
    FIXED_OFFSET = "fixed_offset"
    GENERIC = "generic"


@dataclass(frozen=True)
class VargaDefinition:
    code: str
    divisor: int
    sign_rule: SignRule
    name: str
    significance: str
    start_offset: int = 0
    # FIXED_OFFSET: offset per part; PARITY_BASED: offset for (even, odd) sign index
    offsets: Tuple[int, ...] = ()
    # PARITY_BASED charts that map parts straight onto fixed signs (Hora)
    result_signs: Tuple[int, ...] = ()


@dataclass(frozen=True)
class DivisionalPosition:
    source_longitude: float
    chart_code: str
    result_longitude: float

    @property
    def sign(self) -> int:
        return sign_of(self.result_longitude)

    @property
    def sign_name(self) -> str:
        return SIGNS[self.sign]

    @property
    def degree_in_sign(self) -> float:
        return degree_in_sign(self.result_longitude)


# ---------------------------------------------------------------------------
# Sign rules: (sign, division_index, definition) -> divisional sign 0–11
# ---------------------------------------------------------------------------

def _sign_type_rule(sign: int, index: int, varga: VargaDefinition) -> int:
    return (sign + SIGN_TYPE_OFFSETS[sign_type(sign)] + index) % 12


def _parity_rule(sign: int, index: int, varga: VargaDefinition) -> int:
    parity = sign % 2
    if varga.result_signs:
        # Aries, Gemini, ... take the result signs in order, the others reversed
        return varga.result_signs[(index + parity) % len(varga.result_signs)] % 12
    return (sign + varga.offsets[parity] + index) % 12


def _fixed_offset_rule(sign: int, index: int, varga: VargaDefinition) -> int:
    return (sign + varga.offsets[index % len(varga.offsets)]) % 12


def _generic_rule(sign: int, index: int, varga: VargaDefinition) -> int:
    return (sign + varga.start_offset + index) % 12


SIGN_RULES: Mapping[SignRule, Callable[[int, int, VargaDefinition], int]] = MappingProxyType({
    SignRule.SIGN_TYPE_BASED: _sign_type_rule,
    SignRule.PARITY_BASED: _parity_rule,
    SignRule.FIXED_OFFSET: _fixed_offset_rule,
    SignRule.GENERIC: _generic_rule,
})


# ---------------------------------------------------------------------------
# Registry of all supported divisional charts
# ---------------------------------------------------------------------------

_G = SignRule.GENERIC

VARGAS: Mapping[str, VargaDefinition] = MappingProxyType({v.code: v for v in (
    VargaDefinition("D1", 1, _G, "Rashi Chart", "Main birth chart, overall life"),
    VargaDefinition("D2", 2, SignRule.PARITY_BASED, "Hora Chart", "Wealth and family",
                    result_signs=(3, 4)),   # Cancer, Leo
    VargaDefinition("D3", 3, SignRule.FIXED_OFFSET, "Dreshkana Chart", "Siblings and courage",
                    offsets=(0, 4, 8)),
    VargaDefinition("D4", 4, SignRule.SIGN_TYPE_BASED, "Chaturthamsa Chart", "Fortune and property"),
    VargaDefinition("D5", 5, _G, "Panchamsa Chart", "Power and authority", start_offset=4),
    VargaDefinition("D6", 6, _G, "Shashthamsa Chart", "Health and enemies", start_offset=8),
    VargaDefinition("D7", 7, _G, "Saptamsa Chart", "Children and progeny"),
    VargaDefinition("D8", 8, _G, "Ashtamsa Chart", "Sudden events", start_offset=4),
    VargaDefinition("D9", 9, SignRule.SIGN_TYPE_BASED, "Navamsa Chart", "Marriage, dharma"),
    VargaDefinition("D10", 10, SignRule.PARITY_BASED, "Dashamsa Chart", "Career and profession",
                    offsets=(0, 8)),
    VargaDefinition("D12", 12, _G, "Dwodashamsa Chart", "Parents and spirituality"),
    VargaDefinition("D16", 16, _G, "Shodashamsa Chart", "Vehicles and comforts"),
    VargaDefinition("D20", 20, _G, "Vimshamsa Chart", "Spiritual practices"),
    VargaDefinition("D24", 24, _G, "Chaturvimshamsa Chart", "Education and learning"),
    VargaDefinition("D27", 27, _G, "Saptavimshamsa Chart", "Strengths and weaknesses"),
    VargaDefinition("D30", 30, _G, "Trimshamsa Chart", "Misfortunes and hardships"),
    VargaDefinition("D40", 40, _G, "Khavedamsa Chart", "Auspiciousness"),
    VargaDefinition("D45", 45, _G, "Akshavedamsa Chart", "All aspects of life"),
    VargaDefinition("D60", 60, _G, "Shashtiamsa Chart", "Karma and past life"),
)})


def supported_charts() -> Tuple[str, ...]:
    return tuple(VARGAS)


def varga_definition(chart: Union[str, VargaDefinition]) -> VargaDefinition:
    """
    Look up a chart by code ('D9', 'd9') or validate a definition.

    A definition passed in must carry a registered code; it may redefine
    how that chart is divided (e.g. another Hora order).
    """
    if isinstance(chart, VargaDefinition):
        varga = chart
        code = varga.code
    else:
        code = str(chart).strip().upper()
        varga = VARGAS.get(code)
    if code not in VARGAS:
        raise UnsupportedChart(f"Unknown divisional chart: {code}. "
                               f"Supported: {list(VARGAS)}")
    if varga.divisor <= 0:
        raise UnsupportedChart(f"Divisor must be positive for {varga.code}, got {varga.divisor}")
    if varga.sign_rule is SignRule.PARITY_BASED and not varga.result_signs \
            and len(varga.offsets) < 2:
        raise UnsupportedChart(f"{varga.code} needs result_signs or (even, odd) offsets")
    if varga.sign_rule is SignRule.FIXED_OFFSET and not varga.offsets:
        raise UnsupportedChart(f"{varga.code} needs at least one offset")
    return varga


def divisional_position(longitude: float,
                        chart: Union[str, VargaDefinition]) -> DivisionalPosition:
    """
    Map a sidereal longitude into a divisional chart.

    >>> divisional_position(45.0, "D9").sign_name
    'Taurus'
    """
    varga = varga_definition(chart)
    lon = normalize(longitude)
    n = varga.divisor
    if n == 1:
        return DivisionalPosition(lon, varga.code, lon)

    sign = sign_of(lon)
    scaled = degree_in_sign(lon) * n
    index = min(int(scaled // DEGREES_PER_SIGN), n - 1)
    # remainder stretched back to a full sign, kept below 30 after rounding
    result_deg = min(max(scaled - index * DEGREES_PER_SIGN, 0.0),
                     math.nextafter(DEGREES_PER_SIGN, 0.0))

    result_sign = SIGN_RULES[varga.sign_rule](sign, index, varga)
    return DivisionalPosition(lon, varga.code,
                              normalize(result_sign * DEGREES_PER_SIGN + result_deg))


def compute_all_divisional_positions(longitude: float,
                                     charts: Optional[Iterable[str]] = None
                                     ) -> Dict[str, DivisionalPosition]:
    """
    Compute all divisional positions for a single longitude.
    Returns dict of {chart_code: DivisionalPosition}
    """
    codes = supported_charts() if charts is None else charts
    return {varga_definition(code).code: divisional_position(longitude, code)
            for code in codes}


def compute_divisional_chart(longitudes: Mapping[Hashable, float],
                             chart: Union[str, VargaDefinition]
                             ) -> Dict[Hashable, DivisionalPosition]:
    """
    Compute one divisional chart for every body of a chart.

    Args:
        longitudes: {body: sidereal longitude}
        chart: chart code such as "D9", or a VargaDefinition

    Returns:
        dict of {body: DivisionalPosition}
    """
    varga = varga_definition(chart)
    return {body: divisional_position(lon, varga) for body, lon in longitudes.items()}


def divisional_houses(ascendant: float,
                      chart: Union[str, VargaDefinition]) -> Tuple[float, ...]:
    """
    Equal houses counted from the divisional position of the ascendant.
    """
    asc = divisional_position(ascendant, chart).result_longitude
    return tuple(normalize(asc + DEGREES_PER_SIGN * i) for i in range(12))

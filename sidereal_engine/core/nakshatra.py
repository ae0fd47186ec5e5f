"""
nakshatra.py
============
Lunar mansions. The sidereal zodiac is cut into 27 nakshatras of
13°20' each, every nakshatra into 4 padas of 3°20'.
"""

import math
from dataclasses import dataclass

from .angles import normalize

NAKSHATRA_SPAN = 360.0 / 27.0
PADA_SPAN = NAKSHATRA_SPAN / 4.0

NAKSHATRAS = (
    "Ashwini", "Bharani", "Krittika", "Rohini", "Mrigashira", "Ardra",
    "Punarvasu", "Pushya", "Ashlesha", "Magha", "Purva Phalguni", "Uttara Phalguni",
    "Hasta", "Chitra", "Swati", "Vishakha", "Anuradha", "Jyeshtha",
    "Mula", "Purva Ashadha", "Uttara Ashadha", "Shravana", "Dhanishtha",
    "Shatabhisha", "Purva Bhadrapada", "Uttara Bhadrapada", "Revati",
)

# Vimshottari lords repeat every nine nakshatras starting at Ashwini
_LORD_CYCLE = ("Ketu", "Venus", "Sun", "Moon", "Mars",
               "Rahu", "Jupiter", "Saturn", "Mercury")
NAKSHATRA_LORDS = tuple(_LORD_CYCLE[i % 9] for i in range(27))


@dataclass(frozen=True)
class Nakshatra:
    index: int                      # 0–26
    pada: int                       # 1–4
    degrees_into_nakshatra: float   # [0, 13.333...)

    @property
    def name(self) -> str:
        return NAKSHATRAS[self.index]

    @property
    def lord(self) -> str:
        return NAKSHATRA_LORDS[self.index]

    @property
    def elapsed(self) -> float:
        """Fraction of the nakshatra already traversed."""
        return self.degrees_into_nakshatra / NAKSHATRA_SPAN


def nakshatra_of(sidereal_longitude: float) -> Nakshatra:
    """
    Nakshatra and pada of a sidereal longitude (usually the Moon).
    360° is the same point as 0° and lands in Ashwini pada 1.
    """
    lon = normalize(sidereal_longitude)
    index = min(int(lon / NAKSHATRA_SPAN), 26)
    into = min(lon - index * NAKSHATRA_SPAN, math.nextafter(NAKSHATRA_SPAN, 0.0))
    if into < 0.0:
        into = 0.0
    pada = min(int(into / PADA_SPAN), 3) + 1
    return Nakshatra(index, pada, into)

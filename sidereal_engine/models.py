"""
models.py
=========
Input and output shapes of the engine.

BirthInput  validated civil birth data (pydantic)
Chart       the canonical sidereal chart, immutable once built
"""

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .core.angles import SIGNS, sign_of, degree_in_sign
from .core.divisional_charts import DivisionalPosition, compute_divisional_chart, supported_charts
from .core.ephemeris import BODIES, Body, BodyPosition
from .core.houses import house_of
from .core.nakshatra import Nakshatra, nakshatra_of


class BirthInput(BaseModel):
    """
    Civil birth moment and place. Calendar validity (Feb 30, year range)
    is checked by :func:`julian.julian_day`, which raises InvalidDate.
    """
    model_config = ConfigDict(populate_by_name=True)

    year:            int   = Field(...)
    month:           int   = Field(..., ge=1,    le=12)
    day:             int   = Field(..., ge=1,    le=31)
    hour:            int   = Field(0,   ge=0,    le=23)
    minute:          int   = Field(0,   ge=0,    le=59)
    second:          float = Field(0.0, ge=0,    lt=60)
    latitude:        float = Field(..., gt=-90,  lt=90, alias="latitudeDeg")
    longitude:       float = Field(..., ge=-180, le=180, alias="longitudeDeg")
    timezone_offset: float = Field(0.0, ge=-12,  le=14)


@dataclass(frozen=True)
class Chart:
    julian_day:          float
    ayanamsa:            float
    ascendant:           float
    houses:              Tuple[float, ...]
    bodies:              Mapping[Body, float]
    house_system:        str
    ayanamsa_system:     str = "lahiri"
    local_sidereal_time: float = 0.0
    obliquity:           float = 0.0
    retrograde:          FrozenSet[Body] = field(default_factory=frozenset)

    def positions(self) -> Dict[Body, BodyPosition]:
        return {body: BodyPosition(body, lon, retrograde=body in self.retrograde)
                for body, lon in self.bodies.items()}

    def nakshatra(self, body: Body = Body.MOON) -> Nakshatra:
        return nakshatra_of(self.bodies[Body(body)])

    def house_of(self, body: Body) -> int:
        return house_of(self.bodies[Body(body)], self.houses)

    def divisional(self, codes: Optional[Iterable[str]] = None,
                   bodies: Optional[Iterable[Body]] = None
                   ) -> Dict[str, Dict[Body, DivisionalPosition]]:
        """
        Divisional positions keyed by chart code, then body.
        Defaults to every supported chart and all nine bodies.
        """
        wanted = BODIES if bodies is None else tuple(Body(b) for b in bodies)
        longitudes = {body: self.bodies[body] for body in wanted}
        return {code.upper(): compute_divisional_chart(longitudes, code)
                for code in (supported_charts() if codes is None else codes)}

    def to_dict(self) -> dict:
        moon = self.nakshatra()
        return {
            "julian_day": self.julian_day,
            "ayanamsa": {"system": self.ayanamsa_system, "value": round(self.ayanamsa, 6)},
            "ascendant": {
                "longitude": round(self.ascendant, 6),
                "sign": SIGNS[sign_of(self.ascendant)],
                "degree": round(degree_in_sign(self.ascendant), 4),
            },
            "house_system": self.house_system,
            "houses": [round(c, 6) for c in self.houses],
            "bodies": {
                body.value: {
                    "longitude": round(lon, 6),
                    "sign": SIGNS[sign_of(lon)],
                    "degree": round(degree_in_sign(lon), 4),
                    "house": self.house_of(body),
                    "retrograde": body in self.retrograde,
                }
                for body, lon in self.bodies.items()
            },
            "moon_nakshatra": {
                "index": moon.index,
                "name": moon.name,
                "pada": moon.pada,
                "lord": moon.lord,
            },
            "local_sidereal_time": round(self.local_sidereal_time, 6),
            "obliquity": round(self.obliquity, 6),
        }

"""
Sidereal Engine
===============
Sidereal astronomical core and Varga (divisional chart) engine for
Vedic astrology.

Quick start:
    from sidereal_engine import BirthInput, generate_chart

    chart = generate_chart(BirthInput(
        year=1990, month=5, day=15,
        hour=14, minute=30, second=0,
        timezone_offset=5.5,
        latitude=28.6139,
        longitude=77.2090,
    ))
    chart.nakshatra().name
    chart.divisional(["D9", "D10"])
"""

from .config import Settings, get_settings
from .core.divisional_charts import DivisionalPosition, VargaDefinition, divisional_position
from .core.ephemeris import Body, BodyPosition, BodyPositionProvider, MeanMotionEphemeris, MeeusEphemeris
from .core.houses import HouseSystem
from .core.nakshatra import Nakshatra, nakshatra_of
from .errors import DomainError, InvalidDate, SiderealEngineError, UnsupportedChart, UnsupportedLatitude
from .models import BirthInput, Chart
from .tools.chart import generate_chart, generate_charts

__version__ = "1.0.0"
__all__ = [
    "generate_chart", "generate_charts",
    "BirthInput", "Chart",
    "Body", "BodyPosition", "BodyPositionProvider", "MeeusEphemeris", "MeanMotionEphemeris",
    "HouseSystem", "Nakshatra", "nakshatra_of",
    "DivisionalPosition", "VargaDefinition", "divisional_position",
    "Settings", "get_settings",
    "SiderealEngineError", "InvalidDate", "DomainError", "UnsupportedLatitude", "UnsupportedChart",
]

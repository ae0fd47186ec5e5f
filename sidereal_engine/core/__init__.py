# Sidereal Engine - Core modules
from .angles import normalize, to_dms, from_dms, sign_of, degree_in_sign
from .julian import julian_day, julian_day_utc, julian_centuries
from .ayanamsa import ayanamsa_for, to_sidereal
from .sidereal_time import gmst, lst, true_obliquity
from .ephemeris import compute_positions
from .houses import ascendant, house_cusps, house_of
from .nakshatra import nakshatra_of
from .divisional_charts import divisional_position, compute_divisional_chart

__all__ = [
    "normalize", "to_dms", "from_dms", "sign_of", "degree_in_sign",
    "julian_day", "julian_day_utc", "julian_centuries",
    "ayanamsa_for", "to_sidereal",
    "gmst", "lst", "true_obliquity",
    "compute_positions",
    "ascendant", "house_cusps", "house_of",
    "nakshatra_of",
    "divisional_position", "compute_divisional_chart",
]

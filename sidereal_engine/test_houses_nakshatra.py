"""
test_houses_nakshatra.py
========================
Ascendant, house systems and nakshatra lookup.
"""

import math

import pytest

from sidereal_engine.config import get_settings
from sidereal_engine.core.houses import (
    HOUSE_SYSTEMS, HouseSystem, ascendant, equal_house_cusps, house_cusps, house_of,
    midheaven, placidus_cusps, whole_sign_cusps,
)
from sidereal_engine.core.angles import normalize
from sidereal_engine.core.nakshatra import NAKSHATRA_LORDS, NAKSHATRAS, NAKSHATRA_SPAN, nakshatra_of
from sidereal_engine.errors import DomainError, UnsupportedLatitude

OBLIQUITY = 23.4393
CUSP_TOLERANCE_DEG = 1e-6


# ---------------------------------------------------------------------------
# Ascendant and MC
# ---------------------------------------------------------------------------

def test_ascendant_on_the_equator_is_a_quadrant_past_the_sidereal_time():
    assert ascendant(0.0, 0.0) == pytest.approx(90.0, abs=1e-9)
    assert ascendant(90.0, 0.0) == pytest.approx(180.0, abs=1e-9)
    assert ascendant(180.0, 0.0) == pytest.approx(270.0, abs=1e-9)
    assert ascendant(270.0, 0.0) == pytest.approx(0.0, abs=1e-9)


def test_ascendant_reference_value():
    # RAMC 120°, latitude 40° N
    assert ascendant(120.0, 40.0, OBLIQUITY) == pytest.approx(203.8996, abs=1e-3)


@pytest.mark.parametrize("latitude", [-60.0, -40.0, 0.0, 28.6, 51.5, 60.0])
def test_ascendant_rises_east_of_the_midheaven(latitude):
    for lst in range(0, 360, 10):
        asc = ascendant(float(lst), latitude, OBLIQUITY)
        mc = midheaven(float(lst), OBLIQUITY)
        assert 0.0 < normalize(asc - mc) < 180.0


@pytest.mark.parametrize("latitude", [91.0, -90.0, 90.0, math.nan, math.inf])
def test_ascendant_rejects_polar_latitudes(latitude):
    with pytest.raises(DomainError):
        ascendant(90.0, latitude)


def test_ascendant_is_normalized():
    for lst in range(0, 360, 15):
        for lat in (-66.0, -23.5, 12.9, 51.5):
            assert 0.0 <= ascendant(float(lst), lat, OBLIQUITY) < 360.0


def test_midheaven_cardinal_points():
    for lst in (0.0, 90.0, 180.0, 270.0):
        assert midheaven(lst, OBLIQUITY) == pytest.approx(lst, abs=1e-9)


# ---------------------------------------------------------------------------
# House systems
# ---------------------------------------------------------------------------

def test_whole_sign_cusps_start_at_ascendant_sign():
    cusps = whole_sign_cusps(95.0)
    assert cusps[0] == 90.0
    assert cusps[11] == 60.0
    assert all(c % 30.0 == 0.0 for c in cusps)


def test_equal_cusps_are_thirty_degrees_apart():
    cusps = equal_house_cusps(355.0)
    assert len(cusps) == 12
    assert cusps[1] == pytest.approx(25.0)
    for a, b in zip(cusps, cusps[1:] + cusps[:1]):
        assert normalize(b - a) == pytest.approx(30.0)


def test_placidus_rejects_high_latitude():
    asc = ascendant(100.0, 65.0, OBLIQUITY)
    with pytest.raises(UnsupportedLatitude, match="60"):
        placidus_cusps(asc, 100.0, 65.0, OBLIQUITY)
    with pytest.raises(UnsupportedLatitude):
        placidus_cusps(asc, 100.0, -65.0, OBLIQUITY)


def test_unsupported_latitude_is_a_domain_error():
    with pytest.raises(DomainError):
        house_cusps("placidus", 0.0, 100.0, 65.0, OBLIQUITY)


@pytest.mark.parametrize("latitude", [40.0, -40.0, 60.0, 0.0])
def test_placidus_axes_and_opposites(latitude):
    lst = 100.0
    asc = ascendant(lst, latitude, OBLIQUITY)
    cusps = placidus_cusps(asc, lst, latitude, OBLIQUITY)
    assert len(cusps) == 12
    assert cusps[0] == pytest.approx(asc)
    assert cusps[9] == pytest.approx(lst)
    assert cusps[3] == pytest.approx(normalize(lst + 180.0))
    for i in range(6):
        assert cusps[i + 6] == pytest.approx(normalize(cusps[i] + 180.0), abs=CUSP_TOLERANCE_DEG)


@pytest.mark.parametrize("latitude", [-40.0, 0.0, 28.6, 40.0, 55.0])
def test_placidus_cusps_run_in_house_order(latitude):
    for lst in range(0, 360, 30):
        asc = ascendant(float(lst), latitude, OBLIQUITY)
        cusps = placidus_cusps(asc, float(lst), latitude, OBLIQUITY)
        spans = [normalize(b - a) for a, b in zip(cusps, cusps[1:] + cusps[:1])]
        assert all(0.0 < s < 180.0 for s in spans), (lst, spans)
        assert sum(spans) == pytest.approx(360.0)
        assert house_of(normalize(asc + 1.0), cusps) == 1


def test_placidus_on_the_equator_trisects_right_ascension():
    # no ascensional difference: houses 11 and 12 sit 30° and 60° of RA past the MC
    cusps = placidus_cusps(ascendant(100.0, 0.0, OBLIQUITY), 100.0, 0.0, OBLIQUITY)
    assert cusps[10] == pytest.approx(midheaven(130.0, OBLIQUITY), abs=CUSP_TOLERANCE_DEG)
    assert cusps[11] == pytest.approx(midheaven(160.0, OBLIQUITY), abs=CUSP_TOLERANCE_DEG)
    assert cusps[1] == pytest.approx(midheaven(220.0, OBLIQUITY), abs=CUSP_TOLERANCE_DEG)


def test_placidus_shifts_time_based_cusps_by_ayanamsa():
    tropical = placidus_cusps(0.0, 100.0, 40.0, OBLIQUITY)
    sidereal = placidus_cusps(0.0, 100.0, 40.0, OBLIQUITY, ayanamsa=24.0)
    assert sidereal[9] == pytest.approx(76.0)
    assert sidereal[10] == pytest.approx(normalize(tropical[10] - 24.0))


def test_placidus_limit_comes_from_settings(monkeypatch):
    monkeypatch.setenv("SIDEREAL_PLACIDUS_MAX_LATITUDE", "70")
    get_settings.cache_clear()
    cusps = placidus_cusps(0.0, 100.0, 65.0, OBLIQUITY)
    assert len(cusps) == 12


def test_house_cusps_dispatch():
    assert set(HOUSE_SYSTEMS) == set(HouseSystem)
    assert house_cusps("whole_sign", 95.0) == whole_sign_cusps(95.0)
    assert house_cusps(HouseSystem.EQUAL, 95.0) == equal_house_cusps(95.0)
    assert house_cusps("placidus", 10.0, 100.0, 40.0, OBLIQUITY) == \
        placidus_cusps(10.0, 100.0, 40.0, OBLIQUITY)


def test_house_cusps_unknown_system():
    with pytest.raises(DomainError, match="Unknown house system"):
        house_cusps("koch", 95.0)


def test_house_of():
    cusps = equal_house_cusps(10.0)
    assert house_of(10.0, cusps) == 1
    assert house_of(39.99, cusps) == 1
    assert house_of(40.0, cusps) == 2
    assert house_of(5.0, cusps) == 12
    wrapped = whole_sign_cusps(335.0)
    assert house_of(345.0, wrapped) == 1
    assert house_of(0.0, wrapped) == 2
    with pytest.raises(DomainError):
        house_of(0.0, cusps[:11])


# ---------------------------------------------------------------------------
# Nakshatra
# ---------------------------------------------------------------------------

NAKSHATRA_CASES = [
    (0.0, 0, 1, "Ashwini"),
    (360.0, 0, 1, "Ashwini"),
    (13.34, 1, 1, "Bharani"),
    (16.8, 1, 2, "Bharani"),
    (123.0, 9, 1, "Magha"),
    (348.0, 26, 1, "Revati"),
    (359.999, 26, 4, "Revati"),
    (-1.0, 26, 4, "Revati"),
]


@pytest.mark.parametrize("lon, index, pada, name", NAKSHATRA_CASES)
def test_nakshatra_of(lon, index, pada, name):
    nak = nakshatra_of(lon)
    assert (nak.index, nak.pada, nak.name) == (index, pada, name)


def test_nakshatra_wraps_at_360():
    assert nakshatra_of(360.0) == nakshatra_of(0.0)


def test_nakshatra_matches_sector_table():
    for i in range(0, 36000, 7):
        lon = i * 0.01
        nak = nakshatra_of(lon)
        assert nak.index == int(lon / NAKSHATRA_SPAN)
        assert 1 <= nak.pada <= 4
        assert 0.0 <= nak.degrees_into_nakshatra < NAKSHATRA_SPAN


def test_nakshatra_tables():
    assert len(NAKSHATRAS) == len(NAKSHATRA_LORDS) == 27
    assert nakshatra_of(0.0).lord == "Ketu"
    assert nakshatra_of(350.0).lord == "Mercury"
    assert NAKSHATRA_LORDS[9] == "Ketu"     # Magha restarts the cycle


def test_nakshatra_elapsed():
    assert nakshatra_of(NAKSHATRA_SPAN * 2.5).elapsed == pytest.approx(0.5)

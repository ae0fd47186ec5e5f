"""
test_divisional.py
==================
Varga engine: identity, range sweep and the classical sign rules.
"""

import pytest

from sidereal_engine.core.angles import SIGNS, normalize
from sidereal_engine.core.divisional_charts import (
    SIGN_RULES, VARGAS, SignRule, VargaDefinition, compute_all_divisional_positions,
    compute_divisional_chart, divisional_houses, divisional_position, sign_type,
    supported_charts, varga_definition,
)
from sidereal_engine.core.ephemeris import Body
from sidereal_engine.errors import UnsupportedChart

EXPECTED_CODES = ("D1", "D2", "D3", "D4", "D5", "D6", "D7", "D8", "D9", "D10",
                  "D12", "D16", "D20", "D24", "D27", "D30", "D40", "D45", "D60")


def sign_name(lon, code):
    return divisional_position(lon, code).sign_name


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

def test_supported_charts():
    assert supported_charts() == EXPECTED_CODES
    for code in EXPECTED_CODES:
        varga = VARGAS[code]
        assert varga.code == code
        assert varga.divisor == int(code[1:])
        assert varga.name.endswith("Chart")
    assert VARGAS["D9"].significance == "Marriage, dharma"


def test_every_rule_has_a_strategy():
    assert set(SIGN_RULES) == set(SignRule)


def test_sign_types():
    assert [sign_type(s) for s in range(12)] == ["movable", "fixed", "dual"] * 4


def test_lookup_is_case_insensitive():
    assert varga_definition("d9") is VARGAS["D9"]


@pytest.mark.parametrize("code", ["D11", "D0", "Navamsa", ""])
def test_unknown_chart(code):
    with pytest.raises(UnsupportedChart):
        divisional_position(10.0, code)


@pytest.mark.parametrize("divisor", [0, -3])
def test_non_positive_divisor(divisor):
    bad = VargaDefinition("D9", divisor, SignRule.GENERIC, "Broken Chart", "")
    with pytest.raises(UnsupportedChart, match="Divisor"):
        divisional_position(10.0, bad)


def test_definition_with_unregistered_code():
    d99 = VargaDefinition("D99", 99, SignRule.GENERIC, "x", "y")
    with pytest.raises(UnsupportedChart, match="D99"):
        divisional_position(45.0, d99)
    with pytest.raises(UnsupportedChart):
        compute_divisional_chart({Body.SUN: 45.0}, d99)


@pytest.mark.parametrize("bad", [
    VargaDefinition("D2", 2, SignRule.PARITY_BASED, "Hora Chart", ""),
    VargaDefinition("D10", 10, SignRule.PARITY_BASED, "Dashamsa Chart", "", offsets=(0,)),
    VargaDefinition("D3", 3, SignRule.FIXED_OFFSET, "Dreshkana Chart", ""),
])
def test_definition_missing_rule_offsets(bad):
    with pytest.raises(UnsupportedChart, match=bad.code):
        divisional_position(10.0, bad)


# ---------------------------------------------------------------------------
# Invariants
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("lon", [0.0, 0.5, 29.999, 30.0, 123.456, 359.9999, 360.0, -30.0, 725.5])
def test_d1_is_identity(lon):
    pos = divisional_position(lon, "D1")
    assert pos.result_longitude == normalize(lon)
    assert pos.source_longitude == normalize(lon)


@pytest.mark.parametrize("code", ["D1", "D9", "D60"])
def test_source_longitude_is_normalized(code):
    for lon in (-30.0, 360.0, 725.5):
        pos = divisional_position(lon, code)
        assert pos.source_longitude == normalize(lon)
        assert 0.0 <= pos.source_longitude < 360.0


@pytest.mark.parametrize("code", EXPECTED_CODES)
def test_result_always_in_range(code):
    n = VARGAS[code].divisor
    grid = [i * 0.05 for i in range(7200)]
    # both sides of every division boundary
    edges = [s * 30.0 + k * 30.0 / n + eps
             for s in range(12) for k in range(n + 1) for eps in (-1e-9, 0.0, 1e-9)]
    for lon in grid + edges:
        pos = divisional_position(lon, code)
        assert 0 <= pos.sign <= 11
        assert 0.0 <= pos.result_longitude < 360.0
        assert 0.0 <= pos.degree_in_sign < 30.0


@pytest.mark.parametrize("code", EXPECTED_CODES)
def test_every_division_reaches_a_sign(code):
    n = VARGAS[code].divisor
    width = 30.0 / n
    for sign in range(12):
        for index in range(n):
            mid = sign * 30.0 + (index + 0.5) * width
            assert divisional_position(mid, code).degree_in_sign == pytest.approx(15.0, abs=1e-6)


# ---------------------------------------------------------------------------
# Sign rules
# ---------------------------------------------------------------------------

D9_CASES = [
    (1.0, "Aries"),         # movable: starts from itself
    (29.9, "Sagittarius"),  # 9th navamsa of Aries
    (30.5, "Capricorn"),    # fixed: starts from the 9th
    (45.0, "Taurus"),
    (60.5, "Libra"),        # dual: starts from the 5th
    (90.5, "Cancer"),
    (120.5, "Aries"),       # Leo
    (359.9, "Pisces"),
]

D2_CASES = [
    (5.0, "Cancer"), (20.0, "Leo"),       # Aries
    (35.0, "Leo"), (50.0, "Cancer"),      # Taurus
    (65.0, "Cancer"), (80.0, "Leo"),      # Gemini
]

D3_CASES = [
    (5.0, "Aries"), (15.0, "Leo"), (25.0, "Sagittarius"),
    (35.0, "Taurus"), (45.0, "Virgo"), (55.0, "Capricorn"),
]

D10_CASES = [
    (1.0, "Aries"), (4.0, "Taurus"), (29.0, "Capricorn"),   # Aries counts from itself
    (31.0, "Capricorn"), (34.0, "Aquarius"),                # Taurus counts from the 9th
]

GENERIC_CASES = [
    ("D5", 1.0, "Leo"),         # start offset 4
    ("D6", 1.0, "Sagittarius"), # start offset 8
    ("D7", 31.0, "Taurus"),
    ("D8", 1.0, "Leo"),
    ("D12", 32.6, "Gemini"),
    ("D60", 0.6, "Taurus"),
]


@pytest.mark.parametrize("lon, expected", D9_CASES)
def test_navamsa(lon, expected):
    assert sign_name(lon, "D9") == expected


@pytest.mark.parametrize("lon, expected", D2_CASES)
def test_hora(lon, expected):
    assert sign_name(lon, "D2") == expected


@pytest.mark.parametrize("lon, expected", D3_CASES)
def test_drekkana(lon, expected):
    assert sign_name(lon, "D3") == expected


@pytest.mark.parametrize("lon, expected", D10_CASES)
def test_dasamsa(lon, expected):
    assert sign_name(lon, "D10") == expected


@pytest.mark.parametrize("code, lon, expected", GENERIC_CASES)
def test_generic_charts(code, lon, expected):
    assert sign_name(lon, code) == expected


def test_chaturthamsa_uses_sign_type():
    # Taurus is fixed: first part counts from the 9th sign
    assert sign_name(31.0, "D4") == "Capricorn"
    assert sign_name(1.0, "D4") == "Aries"


def test_remainder_is_stretched_over_the_sign():
    pos = divisional_position(1.0, "D9")
    assert pos.result_longitude == pytest.approx(9.0)
    assert pos.chart_code == "D9"
    assert divisional_position(16.0, "D2").degree_in_sign == pytest.approx(2.0)


def test_registered_code_can_be_redefined():
    # classical Hora: odd signs (Aries, Gemini, ...) start with Leo
    leo_first = VargaDefinition("D2", 2, SignRule.PARITY_BASED, "Hora Chart",
                                "Wealth and family", result_signs=(4, 3))
    assert divisional_position(5.0, leo_first).sign_name == SIGNS[4]
    assert divisional_position(35.0, leo_first).sign_name == SIGNS[3]
    assert divisional_position(5.0, "D2").sign_name == SIGNS[3]


# ---------------------------------------------------------------------------
# Chart helpers
# ---------------------------------------------------------------------------

def test_compute_divisional_chart():
    longitudes = {Body.SUN: 45.0, Body.MOON: 1.0}
    chart = compute_divisional_chart(longitudes, "D9")
    assert set(chart) == {Body.SUN, Body.MOON}
    assert chart[Body.SUN].sign_name == "Taurus"
    assert chart[Body.MOON].sign_name == "Aries"


def test_compute_all_divisional_positions():
    positions = compute_all_divisional_positions(100.0)
    assert tuple(positions) == EXPECTED_CODES
    assert positions["D1"].result_longitude == 100.0
    subset = compute_all_divisional_positions(100.0, ["d9", "D10"])
    assert tuple(subset) == ("D9", "D10")


def test_divisional_houses_are_equal_from_divisional_ascendant():
    houses = divisional_houses(45.0, "D9")
    assert houses[0] == pytest.approx(divisional_position(45.0, "D9").result_longitude)
    assert houses[0] == pytest.approx(45.0)
    assert houses[1] == pytest.approx(75.0)
    assert len(houses) == 12

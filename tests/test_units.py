import pytest

from consist_formats.core.exceptions import STFError
from consist_formats.core.units import (
    normalise_speed_unit,
    split_unit_literal,
    to_meters_per_second,
)


def test_meters_per_second_is_identity():
    assert to_meters_per_second(12.5, "m/s") == 12.5


def test_kmh_matches_direct_mps_literal():
    assert to_meters_per_second(100, "km/h") == pytest.approx(27.7777778)
    assert to_meters_per_second(36, "km/h") == pytest.approx(10.0)


def test_mph_conversion():
    assert to_meters_per_second(60, "mph") == pytest.approx(26.8224)


def test_unknown_unit_returns_value_unchanged():
    assert to_meters_per_second(42.0, "unknown-unit") == 42.0
    assert to_meters_per_second(42.0, "KM/H") == 42.0


@pytest.mark.parametrize(
    "suffix,expected",
    [("kph", "km/h"), ("KMH", "km/h"), ("mps", "m/s"), ("MPH", "mph"), ("furlongs", "furlongs")],
)
def test_normalise_speed_unit(suffix, expected):
    assert normalise_speed_unit(suffix) == expected


def test_split_unit_literal():
    assert split_unit_literal("60mph") == (60.0, "mph")
    assert split_unit_literal("100km/h") == (100.0, "km/h")
    assert split_unit_literal("22.352") == (22.352, None)
    assert split_unit_literal("-1.5e1") == (-15.0, None)


def test_split_unit_literal_rejects_non_numbers():
    with pytest.raises(STFError):
        split_unit_literal("fast")

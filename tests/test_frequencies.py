"""Tests for frequency and headway calculation."""

import pytest

from geom2gtfs.errors import AttributeParseError, InvalidInputError
from geom2gtfs.frequencies import headway_seconds, make_frequency


def test_arrivals_per_hour_headway() -> None:
    """4 arrivals per hour is a 15 minute headway."""
    freq = make_frequency("0", 6, 9, "4", use_periods=False, wait_factor=1.0)

    assert freq == {
        "trip_id": "0",
        "start_time": 6 * 3600,
        "end_time": 9 * 3600,
        "headway_secs": 900,
    }


def test_periods_headway_with_wait_factor() -> None:
    """10 minutes between departures halved by a wait factor of 2 is 300 s."""
    freq = make_frequency("0", 6, 9, "10", use_periods=True, wait_factor=2.0)

    assert freq["headway_secs"] == 300


def test_headway_is_truncated() -> None:
    # 3600 / 7 = 514.28...
    assert headway_seconds(7.0, use_periods=False, wait_factor=1.0) == 514
    # 2.5 min * 60 / 1.5 = 100.0
    assert headway_seconds(2.5, use_periods=True, wait_factor=1.5) == 100


def test_decimal_attribute_value() -> None:
    freq = make_frequency("0", 16, 19, "7.5", use_periods=False, wait_factor=1.0)

    assert freq["headway_secs"] == 480


@pytest.mark.parametrize("raw", [None, "None", "0", "0.0", "0.000"])
def test_windows_without_service_are_skipped(raw) -> None:
    assert make_frequency("0", 6, 9, raw, use_periods=False, wait_factor=1.0) is None


@pytest.mark.parametrize("raw", ["abc", "", "ten", "nan", "inf", "-4"])
def test_unusable_values_raise(raw) -> None:
    with pytest.raises(AttributeParseError) as excinfo:
        make_frequency("0", 6, 9, raw, use_periods=False, wait_factor=1.0, prop_name="peak")

    assert "peak" in str(excinfo.value)
    assert excinfo.value.name == "peak"


def test_parse_error_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        make_frequency("0", 6, 9, "x", use_periods=True, wait_factor=1.0)


def test_window_order_is_not_checked() -> None:
    freq = make_frequency("0", 22, 2, "2", use_periods=False, wait_factor=1.0)

    assert freq["start_time"] == 22 * 3600
    assert freq["end_time"] == 2 * 3600


@pytest.mark.parametrize("wait_factor", [0, -1.0])
def test_non_positive_wait_factor_rejected(wait_factor) -> None:
    with pytest.raises(InvalidInputError):
        make_frequency("0", 6, 9, "4", use_periods=False, wait_factor=wait_factor)


@pytest.mark.parametrize("raw, use_periods", [("1e-320", False), ("1e308", True)])
def test_unrepresentable_headway_raises(raw, use_periods) -> None:
    """A tiny rate or a huge period gives an infinite headway."""
    with pytest.raises(AttributeParseError) as excinfo:
        make_frequency("0", 6, 9, raw, use_periods=use_periods, wait_factor=1.0, prop_name="peak")

    assert excinfo.value.value == raw

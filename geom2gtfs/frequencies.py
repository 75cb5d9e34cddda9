"""
Frequency records from per-window route attributes.

Each service window names the attribute holding that window's frequency.
The value is either minutes between departures (``use_periods``) or
arrivals per hour, and becomes a GTFS frequencies.txt row.
"""

import math
from collections import namedtuple

from geom2gtfs.errors import AttributeParseError, InvalidInputError
from geom2gtfs.gtfs_lib import NO_VALUE


# start and end are hours of the day; prop_name is the attribute with the frequency
TimeWindow = namedtuple("TimeWindow", ["start", "end", "prop_name"])


def headway_seconds(value, use_periods, wait_factor):
    """
    Convert a frequency value into a headway in whole seconds.

    Args:
        value: Minutes between departures if use_periods, else arrivals per hour
        use_periods: How to read ``value``
        wait_factor: Divisor applied to the headway, must be positive

    Returns:
        int: Headway in seconds, truncated

    Raises:
        OverflowError: If the headway is too large to be represented
    """
    if not wait_factor > 0:
        raise InvalidInputError(f"wait factor must be positive, got {wait_factor!r}")

    if use_periods:
        headway = value * 60  # minutes to seconds
    else:
        headway = 3600 / value  # arrivals per hour
    return int(headway / wait_factor)


def make_frequency(trip_id, begin_hour, end_hour, raw_value, use_periods, wait_factor,
                   prop_name="frequency"):
    """
    Build a frequencies.txt record for one trip and time window.

    Args:
        trip_id: Trip the frequency applies to
        begin_hour: Window start, hour of the day
        end_hour: Window end, hour of the day
        raw_value: Attribute value as read from the feature, or None
        use_periods: Read the value as minutes between departures
        wait_factor: Headway divisor
        prop_name: Attribute the value came from, used in error messages

    Returns:
        dict | None: Frequency record, or None when the window has no service

    Raises:
        AttributeParseError: If the value is not a finite, non-negative number
    """
    if raw_value is None or raw_value == NO_VALUE:
        return None

    try:
        value = float(raw_value)
    except (TypeError, ValueError):
        raise AttributeParseError(prop_name, raw_value) from None
    if not math.isfinite(value) or value < 0:
        raise AttributeParseError(prop_name, raw_value, "a non-negative number")

    if value == 0.0:
        return None

    try:
        headway = headway_seconds(value, use_periods, wait_factor)
    except OverflowError:
        # int() of an infinite headway, from a tiny rate or a huge period
        raise AttributeParseError(prop_name, raw_value, "a frequency with a finite headway") from None

    return {
        "trip_id": trip_id,
        "start_time": begin_hour * 3600,
        "end_time": end_hour * 3600,
        "headway_secs": headway,
    }

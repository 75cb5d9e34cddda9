#!/usr/bin/env python3
"""
GTFS Utility Library

This module provides GTFS-compliant enumerations and small helpers shared by
the feed synthesis code: route type resolution, the "no value" token found in
frequency attributes, and GTFS time formatting.
"""

from enum import Enum

from geom2gtfs.errors import AttributeParseError


# Attribute value meaning "no frequency in this window"
NO_VALUE = "None"


class RouteTypes(Enum):
    """
    GTFS route_type enumeration defining different modes of transportation.

    These values correspond to the GTFS specification route_type field,
    which categorizes the type of vehicle used on each route.
    """
    TRAM = 0  # Tram, Streetcar, Light rail. Any light rail or street level system within a metropolitan area.
    SUBWAY = 1  # Subway, Metro. Any underground rail system within a metropolitan area.
    RAIL = 2  # Rail. Used for intercity or long-distance travel.
    BUS = 3  # Bus. Used for short- and long-distance bus routes.
    FERRY = 4  # Ferry. Used for short- and long-distance boat service.
    CABLE = 5  # Cable tram. Used for street-level rail cars where the cable runs beneath the vehicle (e.g., cable car in San Francisco).
    AERIAL = 6  # Aerial lift, suspended cable car (e.g., gondola lift, aerial tramway). Cable transport where cabins, cars, gondolas or open chairs are suspended by means of one or more cables.
    FUNICULAR = 7  # Funicular. Any rail system designed for steep inclines.
    TROLLEY = 11  # Trolleybus. Electric buses that draw power from overhead wires using poles.
    MONORAIL = (
        12  # Monorail. Railway in which the track consists of a single rail or a beam.
    )


class ServiceAvailable(Enum):
    """
    GTFS service availability enumeration for calendar service patterns.

    Used in calendar.txt to indicate whether service operates on specific days.
    """
    YES = 1  # Service is available
    NO = 0  # Service is not available


class ServiceException(Enum):
    """
    GTFS exception_type enumeration for calendar date exceptions.

    Used in calendar_dates.txt to indicate service additions or removals
    on specific dates that differ from the regular calendar pattern.
    """
    ADDED = 1  # Service is added
    REMOVED = 2  # Service is removed


def route_type_from_value(value):
    """
    Resolve a route type from a GTFS integer or a RouteTypes member name.

    Accepts ints (3), numeric strings ("3", "3.0") and names in any case
    ("bus", "BUS").

    Args:
        value: Raw route type as found in configuration or a feature attribute

    Returns:
        RouteTypes: The matching enumeration member

    Raises:
        AttributeParseError: If the value names no known route type
    """
    if isinstance(value, RouteTypes):
        return value
    if isinstance(value, int):
        code = value
    else:
        text = str(value).strip()
        if text.upper() in RouteTypes.__members__:
            return RouteTypes[text.upper()]
        try:
            code = int(float(text))
        except (ValueError, OverflowError):
            raise AttributeParseError("mode", value) from None
    try:
        return RouteTypes(code)
    except ValueError:
        raise AttributeParseError("mode", value) from None


def format_gtfs_time(seconds):
    """
    Format seconds since midnight as a GTFS HH:MM:SS string.

    Hours are not wrapped at 24, as GTFS allows service past midnight
    to be written as 25:10:00.
    """
    hours, remainder = divmod(int(seconds), 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"

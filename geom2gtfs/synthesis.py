"""
Feed synthesis: route features in, a frequency-based GTFS feed out.

For every feature that passes the configured filter, one route is created,
stops are placed along its line, and one trip per direction is built with
stop times from a constant speed and frequencies from the service windows.
Features are processed one at a time; any fatal error stops the run.
"""

import holidays

from geom2gtfs.errors import (
    ConfigError,
    FeatureError,
    Geom2GtfsError,
    GeometryError,
    InvalidInputError,
)
from geom2gtfs.feed import GtfsFeed, IdSequence
from geom2gtfs.gtfs_lib import ServiceAvailable, ServiceException
from geom2gtfs.stops import place_stops_on_parts
from geom2gtfs.trips import make_frequency_trip


DEFAULT_AGENCY_ID = "0"
DEFAULT_SERVICE_ID = "0"

WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]


def skipped_windows(windows, frequencies):
    """
    Windows that produced no frequency record.

    Records come out in window order with skipped windows left out, so the
    windows are matched against them in sequence by start and end time.
    """
    skipped = []
    pending = iter(frequencies)
    current = next(pending, None)
    for window in windows:
        if (
            current is not None
            and current["start_time"] == window.start * 3600
            and current["end_time"] == window.end * 3600
        ):
            current = next(pending, None)
        else:
            skipped.append(window)
    return skipped


def make_agency(config):
    return {
        "agency_id": DEFAULT_AGENCY_ID,
        "agency_name": config.agency_name,
        "agency_url": config.agency_url,
        "agency_timezone": config.agency_timezone,
    }


def make_calendar(config):
    """Calendar running every day of the week between the configured dates."""
    calendar = {"service_id": DEFAULT_SERVICE_ID}
    for day in WEEKDAYS:
        calendar[day] = ServiceAvailable.YES.value
    calendar["start_date"] = int(config.start_date.strftime("%Y%m%d"))
    calendar["end_date"] = int(config.end_date.strftime("%Y%m%d"))
    return calendar


def make_calendar_dates(config):
    """
    Service removals for public holidays inside the calendar range.

    Empty unless a ``holidays`` country code is configured.
    """
    if not config.holidays:
        return []
    years = range(config.start_date.year, config.end_date.year + 1)
    try:
        country = holidays.country_holidays(config.holidays, years=years)
    except NotImplementedError:
        raise ConfigError(f"unknown holiday country {config.holidays!r}") from None
    return [
        {
            "service_id": DEFAULT_SERVICE_ID,
            "date": int(d.strftime("%Y%m%d")),  # e.g. 20250704
            "exception_type": ServiceException.REMOVED.value,
        }
        for d in sorted(country.keys())
        if config.start_date <= d <= config.end_date
    ]


def feature_to_gtfs(feature, config, feed, stop_ids, trip_ids):
    """
    Add the route, stops, trips, stop times and frequencies for one feature.

    Returns:
        dict: The route record that was added
    """
    route_id = feature.get_property(config.route_id_prop_name)
    if route_id is None:
        raise InvalidInputError(f"attribute '{config.route_id_prop_name}' is missing, cannot name the route")
    route_name = feature.get_property(config.route_name_prop_name)

    mode = config.get_mode(feature)
    spacing = config.get_spacing(feature, mode)
    speed = config.get_speed(feature, mode)
    if not speed > 0:
        raise InvalidInputError(f"speed must be positive, got {speed!r}")

    # Place every part first so geometry problems surface before any record is added
    parts = place_stops_on_parts(feature.parts, spacing, route_id)
    if len(parts) > 1 and not config.allow_multiline:
        raise GeometryError("features may only contain a single linestring")

    route = {
        "route_id": route_id,
        "agency_id": DEFAULT_AGENCY_ID,
        "route_short_name": route_name,
        "route_type": mode.value,
    }
    feed.routes.append(route)

    directions = [False, True] if config.bidirectional else [False]
    for candidates in parts:
        stops = []
        for candidate in candidates:
            stop_id = stop_ids.next_id()
            lon, lat = candidate.position
            stops.append(
                {
                    "stop_id": stop_id,
                    "stop_name": stop_id,
                    "stop_lat": lat,
                    "stop_lon": lon,
                }
            )
        feed.stops.extend(stops)

        for reverse in directions:
            trip, stop_times, frequencies = make_frequency_trip(
                feature,
                candidates,
                stops,
                route_id,
                trip_ids.next_id(),
                DEFAULT_SERVICE_ID,
                config.service_windows,
                speed,
                reverse=reverse,
                use_periods=config.use_periods,
                wait_factor=config.wait_factor,
            )
            feed.trips.append(trip)
            feed.stop_times.extend(stop_times)
            feed.frequencies.extend(frequencies)

            for window in skipped_windows(config.service_windows, frequencies):
                print(
                    f"⚠️ Trip {trip['trip_id']} on route {route_id} has no service in window "
                    f"'{window.prop_name}' ({window.start}-{window.end}h)"
                )
            if not frequencies:
                print(f"⚠️ Trip {trip['trip_id']} on route {route_id} has no service in any window")

    return route


def build_feed(features, config):
    """
    Synthesize a complete feed from route features.

    Args:
        features: Iterable of features (see geom2gtfs.features)
        config: Config for the run

    Returns:
        GtfsFeed: Agency, calendar and everything generated per feature

    Raises:
        FeatureError: On the first feature that cannot be processed
    """
    feed = GtfsFeed()
    feed.agencies.append(make_agency(config))
    feed.calendars.append(make_calendar(config))
    feed.calendar_dates.extend(make_calendar_dates(config))

    stop_ids = IdSequence()
    trip_ids = IdSequence()

    for feature in features:
        feature = config.prepare(feature)
        if not config.passes_filter(feature):
            continue

        route_name = feature.get_property(config.route_name_prop_name)
        print(f'generating stops for "{route_name}"')

        try:
            feature_to_gtfs(feature, config, feed, stop_ids, trip_ids)
        except Geom2GtfsError as e:
            route_id = feature.get_property(config.route_id_prop_name)
            raise FeatureError(feature.name, route_id, e) from e

    return feed

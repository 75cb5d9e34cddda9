"""
Trip assembly for synthesized routes.

A trip visits a route's placed stops in order (or in reverse), with stop
times derived from distance along the line at a constant speed, and one
frequency record for each service window that has service.
"""

from geom2gtfs.errors import InvalidInputError
from geom2gtfs.frequencies import make_frequency


def make_frequency_trip(
    feature,
    candidates,
    stops,
    route_id,
    trip_id,
    service_id,
    windows,
    speed,
    reverse=False,
    use_periods=False,
    wait_factor=1.0,
):
    """
    Build one frequency-based trip over a set of placed stops.

    Both directions of a route share the same stops; a reversed trip only
    changes visit order, and its times are measured from its own first stop.
    Arrival and departure times are equal, dwell is not modeled.

    Args:
        feature: Feature whose attributes hold the per-window frequencies
        candidates: CandidateStops for one line part, in placement order
        stops: Stop records parallel to ``candidates``
        route_id: Route the trip belongs to
        trip_id: Identifier for the new trip
        service_id: Calendar the trip runs on
        windows: TimeWindows to build frequencies for
        speed: Travel speed in meters per second
        reverse: Visit the stops last to first
        use_periods: Frequency attributes are minutes between departures
        wait_factor: Headway divisor

    Returns:
        tuple: (trip, stop_times, frequencies)
    """
    if not speed > 0:
        raise InvalidInputError(f"speed must be positive, got {speed!r}")
    if len(candidates) != len(stops):
        raise ValueError("candidates and stops must be the same length")

    trip = {
        "route_id": route_id,
        "service_id": service_id,
        "trip_id": trip_id,
    }

    frequencies = []
    for window in windows:
        freq = make_frequency(
            trip_id,
            window.start,
            window.end,
            feature.get_property(window.prop_name),
            use_periods,
            wait_factor,
            prop_name=window.prop_name,
        )
        if freq is not None:
            frequencies.append(freq)

    order = range(len(candidates))
    if reverse:
        order = reversed(order)

    stop_times = []
    first_dist = None
    for i, ix in enumerate(order):
        candidate = candidates[ix]
        if first_dist is None:
            first_dist = candidate.dist
        offset = int(abs(candidate.dist - first_dist) / speed)
        stop_times.append(
            {
                "trip_id": trip_id,
                "arrival_time": offset,
                "departure_time": offset,
                "stop_id": stops[ix]["stop_id"],
                "stop_sequence": i,
            }
        )

    return trip, stop_times, frequencies

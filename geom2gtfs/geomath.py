"""
Distance and interpolation helpers over (longitude, latitude) points.

All distances are in meters. Stop spacing is configured in meters and
travel speed in meters per second, so the three must stay in step.
"""

from geopy.distance import great_circle


def distance(p1, p2):
    """
    Great-circle distance between two points.

    Args:
        p1: (lon, lat) start point
        p2: (lon, lat) end point

    Returns:
        float: Distance in meters
    """
    # geopy expects (lat, lon)
    return great_circle((p1[1], p1[0]), (p2[1], p2[0])).meters


def interpolate(p1, p2, fraction):
    """
    Point at ``fraction`` of the way from p1 to p2.

    Interpolation is linear in coordinate space, with no geodesic
    correction. Over stop-spacing distances the difference is negligible.
    """
    return (
        p1[0] + (p2[0] - p1[0]) * fraction,
        p1[1] + (p2[1] - p1[1]) * fraction,
    )

"""
Stop placement along route geometry.

Walks a line at a fixed spacing and returns candidate stop positions. The
distance left over at the end of one segment is carried into the next, so
spacing is measured along the whole line rather than restarting at every
vertex.
"""

import math
from collections import namedtuple

from geom2gtfs.errors import GeometryError, InvalidInputError
from geom2gtfs.geomath import distance, interpolate


# position is (lon, lat); dist is meters from the start of the line part
CandidateStop = namedtuple("CandidateStop", ["position", "dist", "route_id"])


def place_stops(coords, spacing, route_id):
    """
    Place candidate stops every ``spacing`` meters along a line.

    The first candidate sits at the start of the line. A final candidate is
    always added at the last coordinate with ``dist`` equal to the line's
    total length, even when the last regular stop landed right next to it.

    Args:
        coords: Sequence of (lon, lat) points, at least two
        spacing: Distance between stops in meters, must be positive
        route_id: Route the stops belong to

    Returns:
        list[CandidateStop]: Candidates in order of distance along the line

    Raises:
        InvalidInputError: If spacing is not a positive finite number
        GeometryError: If the line has fewer than two coordinates
    """
    if not (spacing > 0 and math.isfinite(spacing)):
        raise InvalidInputError(f"stop spacing must be positive, got {spacing!r}")
    if len(coords) < 2:
        raise GeometryError(f"line for route {route_id!r} needs at least two coordinates")

    candidates = []
    overshoot = 0.0
    seg_start_dist = 0.0
    total_len = 0.0

    for p1, p2 in zip(coords, coords[1:]):
        seg_len = distance(p1, p2)
        total_len += seg_len

        # a zero-length segment emits nothing and passes the cursor on unchanged
        cursor = overshoot
        while cursor < seg_len:
            position = interpolate(p1, p2, cursor / seg_len)
            candidates.append(CandidateStop(position, seg_start_dist + cursor, route_id))
            cursor += spacing

        overshoot = cursor - seg_len
        seg_start_dist += seg_len

    last = coords[-1]
    candidates.append(CandidateStop((last[0], last[1]), total_len, route_id))
    return candidates


def place_stops_on_parts(parts, spacing, route_id):
    """Place stops on every part of a (multi-)line independently, one list per part."""
    return [place_stops(part, spacing, route_id) for part in parts]

"""Pytest configuration and fixtures."""

import json
from pathlib import Path

import pytest

from geom2gtfs.geomath import distance


# Along the equator great-circle distance grows linearly with longitude
METERS_PER_DEGREE = distance((0.0, 0.0), (1.0, 0.0))


def equator_point(meters: float) -> tuple[float, float]:
    """Point on the equator ``meters`` east of (0, 0)."""
    return (meters / METERS_PER_DEGREE, 0.0)


@pytest.fixture
def at_meters():
    """Factory for equator points at a distance in meters from the origin."""
    return equator_point


@pytest.fixture
def base_config() -> dict:
    """Minimal valid configuration data."""
    return {
        "agency_name": "Test Transit",
        "agency_url": "https://transit.example.com",
        "agency_timezone": "America/New_York",
        "start_date": "20250101",
        "end_date": "20251231",
        "route_id_prop_name": "ROUTE_ID",
        "route_name_prop_name": "NAME",
        "spacing": 300,
        "speed": 10,
        "service_windows": [
            {"start": 6, "end": 9, "propname": "peak"},
            {"start": 9, "end": 16, "propname": "offpeak"},
        ],
    }


def write_geojson(path: Path, features: list[dict]) -> Path:
    """Write a FeatureCollection of the given features."""
    with open(path, "w", encoding="utf-8") as f:
        json.dump({"type": "FeatureCollection", "features": features}, f)
    return path


def line_feature(coords, properties, feature_id=None, multi=False) -> dict:
    feature = {
        "type": "Feature",
        "geometry": {
            "type": "MultiLineString" if multi else "LineString",
            "coordinates": coords,
        },
        "properties": properties,
    }
    if feature_id is not None:
        feature["id"] = feature_id
    return feature


@pytest.fixture
def routes_geojson(tmp_path: Path) -> Path:
    """Two single-line routes: a 1000.4 m line and a 610 m line."""
    start = list(equator_point(0))
    return write_geojson(
        tmp_path / "routes.geojson",
        [
            line_feature(
                [start, list(equator_point(1000.4))],
                {"ROUTE_ID": "R1", "NAME": "Main St", "peak": "10", "offpeak": "0"},
                feature_id="r1",
            ),
            line_feature(
                [start, list(equator_point(610))],
                {"ROUTE_ID": "R2", "NAME": "Cross St", "peak": "4", "offpeak": "None"},
                feature_id="r2",
            ),
        ],
    )


@pytest.fixture
def config_file(tmp_path: Path, base_config: dict) -> Path:
    path = tmp_path / "config.json"
    with open(path, "w", encoding="utf-8") as f:
        json.dump(base_config, f)
    return path

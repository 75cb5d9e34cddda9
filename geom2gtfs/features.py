"""
Input features: route geometry plus string attributes.

A feature is anything with ``name``, ``parts`` (one list of (lon, lat)
points per line) and ``get_property``. GeoFeature holds what the geometry
file provides; JoinedFeature overlays fields joined in from a CSV table.
"""

import math

import geojson
import pandas as pd

from geom2gtfs.errors import AttributeParseError, ConfigError, GeometryError


class Feature:
    """
    Attribute lookup shared by plain and joined features.

    Subclasses provide ``name``, ``parts`` and ``get_property``; get_float converts
    the raw strings and reports bad values with an AttributeParseError
    naming the attribute.
    """

    name = None
    parts = ()

    def get_property(self, key):
        """Return the attribute as a string, or None when it is absent."""
        raise NotImplementedError

    def get_float(self, key, default=None):
        value = self.get_property(key)
        if value is None:
            return default
        try:
            number = float(value)
        except ValueError:
            raise AttributeParseError(key, value) from None
        if not math.isfinite(number):
            raise AttributeParseError(key, value, "a finite number")
        return number


class GeoFeature(Feature):
    """A feature exactly as read from the geometry file."""

    def __init__(self, name, parts, properties):
        self.name = name
        self.parts = parts
        self._properties = properties

    def get_property(self, key):
        value = self._properties.get(key)
        if value is None:
            return None
        return str(value)

    def __repr__(self):
        return f"GeoFeature({self.name!r}, parts={len(self.parts)})"


class JoinedFeature(Feature):
    """
    A feature with extra fields joined from an external table.

    Joined fields take precedence; anything not joined falls through to
    the wrapped feature.
    """

    def __init__(self, feature, extra_fields):
        self.feature = feature
        self.extra_fields = extra_fields

    @property
    def name(self):
        return self.feature.name

    @property
    def parts(self):
        return self.feature.parts

    def get_property(self, key):
        value = self.extra_fields.get(key)
        if value is not None:
            return value
        return self.feature.get_property(key)

    def __repr__(self):
        return f"JoinedFeature({self.name!r}, extra={sorted(self.extra_fields)})"


class CsvJoinTable:
    """
    Extra feature attributes loaded from a CSV file.

    Rows are matched to features by comparing ``csv_col`` in the table with
    the feature's ``feature_col`` attribute.
    """

    def __init__(self, filename, csv_col, feature_col):
        self.filename = filename
        self.csv_col = csv_col
        self.feature_col = feature_col

        # "None" is the no-service token and "NA" a valid key, so no NA parsing
        df = pd.read_csv(filename, dtype=str, keep_default_na=False)
        if csv_col not in df.columns:
            raise ConfigError(f"join column '{csv_col}' not found in {filename}")

        self.rows = {}
        for _, row in df.iterrows():
            key = row[csv_col].strip()
            if not key:
                continue
            # Empty cells are left unjoined so the feature's own value shows through
            self.rows[key] = {
                col: val for col, val in row.items() if col != csv_col and val != ""
            }

    def get_extra_fields(self, feature):
        """Joined fields for ``feature``, empty when no row matches."""
        key = feature.get_property(self.feature_col)
        if key is None:
            return {}
        return dict(self.rows.get(key.strip(), {}))

    def join(self, feature):
        return JoinedFeature(feature, self.get_extra_fields(feature))


def parts_from_geometry(geometry):
    """
    Split a GeoJSON geometry into line parts of (lon, lat) tuples.

    Raises:
        GeometryError: For anything other than LineString or MultiLineString
    """
    if geometry is None:
        raise GeometryError("feature has no geometry")

    geom_type = geometry["type"]
    if geom_type == "LineString":
        lines = [geometry["coordinates"]]
    elif geom_type == "MultiLineString":
        lines = geometry["coordinates"]
    else:
        raise GeometryError(f"unsupported geometry type '{geom_type}', expected lines")

    # Drop elevation if present
    return [[(pt[0], pt[1]) for pt in line] for line in lines]


def load_features(fp):
    """
    Read route features from a GeoJSON FeatureCollection.

    Args:
        fp (str): Path to the GeoJSON file

    Returns:
        list[GeoFeature]: One feature per GeoJSON feature, in file order.
            A feature is named by its ``id``, or its index when it has none.
    """
    with open(fp, "r", encoding="utf-8") as f:
        fc = geojson.load(f)

    features = []
    for i, feat in enumerate(fc["features"]):
        name = feat.get("id")
        if name is None:
            name = i
        features.append(
            GeoFeature(
                name,
                parts_from_geometry(feat.get("geometry")),
                dict(feat.get("properties") or {}),
            )
        )
    return features

"""
Exceptions raised while synthesizing a feed.

Every fatal problem derives from Geom2GtfsError so a run can stop on the
first one with a single except clause.
"""


class Geom2GtfsError(Exception):
    """Base class for fatal synthesis errors."""


class ConfigError(Geom2GtfsError):
    """The configuration file is missing a key or holds an unusable value."""


class InvalidInputError(Geom2GtfsError):
    """A numeric input such as spacing, speed or wait factor is out of range."""


class GeometryError(Geom2GtfsError):
    """A feature's geometry cannot be turned into stops."""


class AttributeParseError(Geom2GtfsError, ValueError):
    """
    A feature attribute could not be converted to the requested type.

    Carries the attribute name and the raw value so the message points at
    the offending data.
    """

    def __init__(self, name, value, expected="a number"):
        self.name = name
        self.value = value
        super().__init__(f"attribute '{name}' has value {value!r}, expected {expected}")


class FeatureError(Geom2GtfsError):
    """A fatal error tied to one input feature."""

    def __init__(self, feature_name, route_id, cause):
        self.feature_name = feature_name
        self.route_id = route_id
        self.cause = cause
        super().__init__(f"feature {feature_name!r} (route {route_id!r}): {cause}")

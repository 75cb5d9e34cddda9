"""
Run configuration for feed synthesis.

Loaded from a JSON file. Besides the fixed run settings (agency, service
dates, service windows) it knows how to resolve per-feature values: route
type, stop spacing and speed can each come from a feature attribute, with
a configured default that may itself vary by route type.
"""

import json
import math
from datetime import datetime
from pathlib import Path

from geom2gtfs.errors import AttributeParseError, ConfigError
from geom2gtfs.features import CsvJoinTable
from geom2gtfs.frequencies import TimeWindow
from geom2gtfs.gtfs_lib import route_type_from_value


REQUIRED_KEYS = [
    "agency_name",
    "agency_url",
    "agency_timezone",
    "start_date",
    "end_date",
    "route_id_prop_name",
    "route_name_prop_name",
    "service_windows",
]

DEFAULT_MODE = "BUS"
DEFAULT_SPACING = 400  # meters
DEFAULT_SPEED = 8.0  # meters per second


def _parse_date(value, key):
    """Parse a YYYYMMDD config date."""
    try:
        return datetime.strptime(str(value), "%Y%m%d").date()
    except ValueError:
        raise ConfigError(f"'{key}' must be a YYYYMMDD date, got {value!r}") from None


def _positive_number(value, key):
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f"'{key}' must be a number, got {value!r}")
    if not (value > 0 and math.isfinite(value)):
        raise ConfigError(f"'{key}' must be positive, got {value!r}")
    return value


def _flag(value, key):
    # JSON true/false only; bool("false") would be True
    if not isinstance(value, bool):
        raise ConfigError(f"'{key}' must be true or false, got {value!r}")
    return value


def _per_mode(value, key):
    """
    Normalize a scalar-or-mapping setting into {RouteTypes: number}.

    A scalar applies to every route type and is stored under None.
    """
    if isinstance(value, dict):
        by_mode = {}
        for mode, number in value.items():
            try:
                route_type = route_type_from_value(mode)
            except AttributeParseError:
                raise ConfigError(f"'{key}' has unknown route type {mode!r}") from None
            by_mode[route_type] = _positive_number(number, f"{key}.{mode}")
        return by_mode
    return {None: _positive_number(value, key)}


def _service_windows(raw):
    if not isinstance(raw, list) or not raw:
        raise ConfigError("'service_windows' must be a non-empty list")
    windows = []
    for i, window in enumerate(raw):
        try:
            windows.append(TimeWindow(int(window["start"]), int(window["end"]), window["propname"]))
        except (KeyError, TypeError, ValueError):
            raise ConfigError(
                f"service window {i} needs integer 'start', 'end' and a 'propname'"
            ) from None
    return windows


class Config:
    """
    Settings for one synthesis run.

    Args:
        data (dict): Parsed configuration
        base_dir: Directory relative file names (the CSV join) resolve against

    Raises:
        ConfigError: If a required key is missing or a value is unusable
    """

    def __init__(self, data, base_dir="."):
        missing = [key for key in REQUIRED_KEYS if key not in data]
        if missing:
            raise ConfigError(f"missing required config keys: {', '.join(missing)}")

        self.agency_name = data["agency_name"]
        self.agency_url = data["agency_url"]
        self.agency_timezone = data["agency_timezone"]

        self.start_date = _parse_date(data["start_date"], "start_date")
        self.end_date = _parse_date(data["end_date"], "end_date")
        if self.end_date < self.start_date:
            raise ConfigError("'end_date' is before 'start_date'")

        self.route_id_prop_name = data["route_id_prop_name"]
        self.route_name_prop_name = data["route_name_prop_name"]

        try:
            self.mode = route_type_from_value(data.get("mode", DEFAULT_MODE))
        except AttributeParseError:
            raise ConfigError(f"unknown route type {data.get('mode')!r}") from None
        self.mode_prop_name = data.get("mode_prop_name")
        self.mode_map = {}
        for raw, mode in data.get("mode_map", {}).items():
            try:
                self.mode_map[str(raw)] = route_type_from_value(mode)
            except AttributeParseError:
                raise ConfigError(f"'mode_map' has unknown route type {mode!r}") from None

        self.spacing = _per_mode(data.get("spacing", DEFAULT_SPACING), "spacing")
        self.spacing_prop_name = data.get("spacing_prop_name")
        self.speed = _per_mode(data.get("speed", DEFAULT_SPEED), "speed")
        self.speed_prop_name = data.get("speed_prop_name")

        self.service_windows = _service_windows(data["service_windows"])
        self.use_periods = _flag(data.get("use_periods", False), "use_periods")
        self.bidirectional = _flag(data.get("bidirectional", False), "bidirectional")
        self.wait_factor = _positive_number(data.get("wait_factor", 1.0), "wait_factor")
        self.allow_multiline = _flag(data.get("allow_multiline", False), "allow_multiline")
        self.holidays = data.get("holidays")

        self.filter = data.get("filter")
        if self.filter is not None:
            if "prop_name" not in self.filter or not isinstance(self.filter.get("values"), list):
                raise ConfigError("'filter' needs a 'prop_name' and a list of 'values'")
            self._filter_values = {str(v) for v in self.filter["values"]}

        self.csv_join = None
        join = data.get("csv_join")
        if join is not None:
            try:
                filename = Path(base_dir) / join["filename"]
                self.csv_join = CsvJoinTable(filename, join["csv_col"], join["feature_col"])
            except KeyError as e:
                raise ConfigError(f"'csv_join' is missing {e}") from None
            except FileNotFoundError:
                raise ConfigError(f"join table not found: {filename}") from None

    @classmethod
    def from_file(cls, fp):
        """Load a configuration from a JSON file."""
        path = Path(fp)
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"could not parse {path}: {e}") from None
        return cls(data, base_dir=path.parent)

    def passes_filter(self, feature):
        """Whether a feature should be turned into a route."""
        if self.filter is None:
            return True
        return feature.get_property(self.filter["prop_name"]) in self._filter_values

    def prepare(self, feature):
        """Apply the CSV join, if one is configured."""
        if self.csv_join is None:
            return feature
        return self.csv_join.join(feature)

    def get_mode(self, feature):
        """Route type for a feature: attribute value, mapped if listed in mode_map."""
        if self.mode_prop_name is None:
            return self.mode
        raw = feature.get_property(self.mode_prop_name)
        if raw is None:
            return self.mode
        if raw in self.mode_map:
            return self.mode_map[raw]
        try:
            return route_type_from_value(raw)
        except AttributeParseError:
            raise AttributeParseError(self.mode_prop_name, raw, "a route type") from None

    def _lookup(self, feature, prop_name, by_mode, mode):
        if prop_name is not None:
            value = feature.get_float(prop_name)
            if value is not None:
                return value
        if mode in by_mode:
            return by_mode[mode]
        if None in by_mode:
            return by_mode[None]
        raise ConfigError(f"no value configured for route type {mode.name}")

    def get_spacing(self, feature, mode=None):
        """Stop spacing in meters for a feature."""
        if mode is None:
            mode = self.get_mode(feature)
        return self._lookup(feature, self.spacing_prop_name, self.spacing, mode)

    def get_speed(self, feature, mode=None):
        """Travel speed in meters per second for a feature."""
        if mode is None:
            mode = self.get_mode(feature)
        return self._lookup(feature, self.speed_prop_name, self.speed, mode)


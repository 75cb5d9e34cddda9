#!/usr/bin/env python3
"""
In-memory GTFS feed and its on-disk writer.

Records are plain dicts keyed by GTFS column name. The writer turns each
collection into a CSV file with pandas and, for ``.zip`` outputs, packages
them into a standard GTFS archive.
"""

import itertools
import shutil
import tempfile
from pathlib import Path

import pandas as pd

from geom2gtfs.gtfs_lib import format_gtfs_time


# Column order for every file the feed can contain
COLUMNS = {
    "agency.txt": ["agency_id", "agency_name", "agency_url", "agency_timezone"],
    "calendar.txt": [
        "service_id",
        "monday",
        "tuesday",
        "wednesday",
        "thursday",
        "friday",
        "saturday",
        "sunday",
        "start_date",
        "end_date",
    ],
    "calendar_dates.txt": ["service_id", "date", "exception_type"],
    "routes.txt": ["route_id", "agency_id", "route_short_name", "route_type"],
    "stops.txt": ["stop_id", "stop_name", "stop_lat", "stop_lon"],
    "trips.txt": ["route_id", "service_id", "trip_id"],
    "stop_times.txt": ["trip_id", "arrival_time", "departure_time", "stop_id", "stop_sequence"],
    "frequencies.txt": ["trip_id", "start_time", "end_time", "headway_secs"],
}

# Files that may be left out of the feed when they have no rows
OPTIONAL_FILES = {"calendar_dates.txt"}


class IdSequence:
    """Hands out "0", "1", "2", ... as identifiers."""

    def __init__(self, start=0):
        self._counter = itertools.count(start)

    def next_id(self):
        return str(next(self._counter))


class GtfsFeed:
    """
    Collections of GTFS records built up during a run.

    Records are appended once and never edited afterwards.
    """

    def __init__(self):
        self.agencies = []
        self.calendars = []
        self.calendar_dates = []
        self.routes = []
        self.stops = []
        self.trips = []
        self.stop_times = []
        self.frequencies = []

    def stats(self):
        return {
            "routes": len(self.routes),
            "stops": len(self.stops),
            "trips": len(self.trips),
            "stop_times": len(self.stop_times),
            "frequencies": len(self.frequencies),
        }

    def files(self):
        """
        Map each GTFS filename to the rows it should contain.

        Stop time and frequency times are formatted as HH:MM:SS here;
        in memory they stay as seconds since midnight.
        """
        return {
            "agency.txt": self.agencies,
            "calendar.txt": self.calendars,
            "calendar_dates.txt": self.calendar_dates,
            "routes.txt": self.routes,
            "stops.txt": self.stops,
            "trips.txt": self.trips,
            "stop_times.txt": [
                {
                    **st,
                    "arrival_time": format_gtfs_time(st["arrival_time"]),
                    "departure_time": format_gtfs_time(st["departure_time"]),
                }
                for st in self.stop_times
            ],
            "frequencies.txt": [
                {
                    **freq,
                    "start_time": format_gtfs_time(freq["start_time"]),
                    "end_time": format_gtfs_time(freq["end_time"]),
                }
                for freq in self.frequencies
            ],
        }


def write_feed_files(feed, directory):
    """Write one CSV per GTFS file into ``directory``; returns the paths written."""
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)

    written = []
    for filename, rows in feed.files().items():
        if not rows and filename in OPTIONAL_FILES:
            continue
        path = directory / filename
        pd.DataFrame(rows, columns=COLUMNS[filename]).to_csv(path, index=False)
        written.append(path)
    return written


def write_feed(feed, output_path):
    """
    Write a feed to disk.

    A path ending in ``.zip`` becomes a GTFS zip archive; anything else is
    treated as a directory to hold the individual .txt files.

    Args:
        feed: GtfsFeed to write
        output_path: Destination zip file or directory

    Returns:
        Path: The archive or directory written
    """
    output_path = Path(output_path)
    if output_path.suffix.lower() != ".zip":
        write_feed_files(feed, output_path)
        return output_path

    output_path.parent.mkdir(parents=True, exist_ok=True)
    # Create GTFS files in temporary directory, then zip them
    with tempfile.TemporaryDirectory() as tmpdirname:
        write_feed_files(feed, tmpdirname)
        archive = shutil.make_archive(str(output_path.with_suffix("")), "zip", tmpdirname)
    return Path(archive)

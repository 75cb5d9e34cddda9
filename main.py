#!/usr/bin/env python3
"""
geom2gtfs Feed Generator

This script synthesizes GTFS (General Transit Feed Specification) data from
planning-level route geometry. Stops are placed at a fixed spacing along each
route line, trips are timed with a constant speed, and service levels come
from per-time-window frequency attributes on each route.
"""

import argparse
import sys
from pathlib import Path

import pandas as pd

from geom2gtfs.config import Config
from geom2gtfs.errors import Geom2GtfsError
from geom2gtfs.features import load_features
from geom2gtfs.feed import write_feed
from geom2gtfs.stops import place_stops_on_parts
from geom2gtfs.synthesis import build_feed


def generate_gtfs(input_path, config_path, output_path):
    """
    Generate a complete GTFS feed from a GeoJSON file of route lines.

    Generated files include:
    - agency.txt: The configured agency
    - calendar.txt: One service running every day between the configured dates
    - calendar_dates.txt: Holiday removals, when a holiday country is configured
    - routes.txt: One route per input feature
    - stops.txt: Stops placed along each route line
    - trips.txt: One trip per route and direction
    - stop_times.txt: Stop sequences timed from a constant speed
    - frequencies.txt: Headways per service window

    Args:
        input_path: GeoJSON FeatureCollection of LineString/MultiLineString routes
        config_path: JSON configuration file
        output_path: Output .zip archive, or a directory
    """
    config = Config.from_file(config_path)
    features = load_features(input_path)

    feed = build_feed(features, config)
    written = write_feed(feed, output_path)

    print(f"✅ GTFS feed created at: {written}")
    print(f"   {feed.stats()}")


def generate_stops(input_path, config_path, output_path):
    """
    Write the placed stops for every route to a CSV file for inspection.

    Useful for checking spacing settings on a map before generating a feed.
    The CSV has one row per stop: route_id, part, sequence, stop_lon,
    stop_lat and dist (meters along the line).
    """
    config = Config.from_file(config_path)

    rows = []
    for feature in load_features(input_path):
        feature = config.prepare(feature)
        if not config.passes_filter(feature):
            continue
        route_id = feature.get_property(config.route_id_prop_name)
        spacing = config.get_spacing(feature)
        for part, candidates in enumerate(place_stops_on_parts(feature.parts, spacing, route_id)):
            for seq, candidate in enumerate(candidates):
                lon, lat = candidate.position
                rows.append(
                    {
                        "route_id": route_id,
                        "part": part,
                        "sequence": seq,
                        "stop_lon": lon,
                        "stop_lat": lat,
                        "dist": candidate.dist,
                    }
                )

    pd.DataFrame(
        rows, columns=["route_id", "part", "sequence", "stop_lon", "stop_lat", "dist"]
    ).to_csv(Path(output_path), index=False)
    print(f"✅ Wrote {len(rows)} stops to {output_path}")


def main(argv=None):
    # Set up command-line argument parser with subcommands
    parser = argparse.ArgumentParser(
        description="geom2gtfs - Generate frequency-based GTFS feeds from route geometry"
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Generate GTFS zip file
    gtfs_parser = subparsers.add_parser("gen-gtfs", help="Generate GTFS feed")
    gtfs_parser.add_argument("--input", type=str, required=True, help="GeoJSON file of route lines")
    gtfs_parser.add_argument("--config", type=str, required=True, help="JSON configuration file")
    gtfs_parser.add_argument(
        "--output",
        type=str,
        default="gtfs.zip",
        help="Output .zip archive or directory (default: gtfs.zip)",
    )

    # Write placed stops to CSV
    stops_parser = subparsers.add_parser("gen-stops", help="Write placed stops to a CSV file")
    stops_parser.add_argument("--input", type=str, required=True, help="GeoJSON file of route lines")
    stops_parser.add_argument("--config", type=str, required=True, help="JSON configuration file")
    stops_parser.add_argument(
        "--output",
        type=str,
        default="stops.csv",
        help="Output CSV file (default: stops.csv)",
    )

    args = parser.parse_args(argv)

    # Execute the requested command
    try:
        if args.command == "gen-gtfs":
            generate_gtfs(args.input, args.config, args.output)
        elif args.command == "gen-stops":
            generate_stops(args.input, args.config, args.output)
        else:
            # No command specified, show help
            parser.print_help()
            return 1
    except (Geom2GtfsError, FileNotFoundError) as e:
        print(f"❌ Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

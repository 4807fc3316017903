"""Compute sun position and panel efficiency for one location and local time."""

import argparse
import logging

from solar_alignment._types import SimulatorConfig, TrackingMode
from solar_alignment.angles import direction_vector
from solar_alignment.inputs import (
    parse_instant,
    parse_location,
    parse_panel_orientation,
)
from solar_alignment.tracking import TrackingController, summarize


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description=__doc__)
    p.add_argument("--lat", default="45.0", help="Latitude in degrees (+N).")
    p.add_argument("--lon", default="0.0", help="Longitude in degrees (+E).")
    p.add_argument("--date", required=True, help="Local date, YYYY-MM-DD.")
    p.add_argument("--time", required=True, help="Local time, HH:MM.")
    p.add_argument("--auto", action="store_true", help="Point the panel at the sun.")
    p.add_argument("--panel-azimuth", default="0.0", help="Manual panel azimuth, 0-360.")
    p.add_argument("--panel-elevation", default="45.0", help="Manual panel elevation, 0-90.")
    p.add_argument("-v", "--verbose", action="store_true", help="Log each recomputation.")
    return p


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        location = parse_location(args.lat, args.lon, strict=True)
        instant = parse_instant(args.date, args.time)
        manual = parse_panel_orientation(args.panel_azimuth, args.panel_elevation)
    except ValueError as exc:
        raise SystemExit(f"error: {exc}")

    config = SimulatorConfig(
        latitude=location.latitude,
        longitude=location.longitude,
        panel_azimuth=manual.azimuth,
        panel_elevation=manual.elevation,
        mode=TrackingMode.AUTO if args.auto else TrackingMode.MANUAL,
    )
    snapshot = TrackingController(instant, config).snapshot
    summary = summarize(snapshot)
    x, y, z = direction_vector(snapshot.sun)

    print("=== Solar Alignment ===")
    print(f"Location: {summary['latitude']:.2f}°, {summary['longitude']:.2f}°")
    print(f"Local time: {summary['timestamp']} (day {summary['day_of_year']})")
    print()
    print("--- Sun ---")
    print(f"Azimuth: {summary['sun_azimuth']:.2f}° (0°=N, 90°=E, 180°=S)")
    print(f"Elevation: {summary['sun_elevation']:.2f}°")
    print(f"Direction: ({x:.3f}, {y:.3f}, {z:.3f})")
    print()
    print(f"--- Panel ({summary['mode']}) ---")
    print(f"Azimuth: {summary['panel_azimuth']:.2f}°")
    print(f"Elevation: {summary['panel_elevation']:.2f}°")
    print(f"Efficiency: {summary['efficiency']:.1f}%")
    return summary


if __name__ == "__main__":
    main()

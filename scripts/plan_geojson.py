from __future__ import annotations

import argparse
import json
import sys
import uuid
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

from straightline.errors import StraightLineError
from straightline.geo import GeoPoint, Waypoint
from straightline.logger import LoggingMode
from straightline.options import DEFAULT_INTERVAL_M, RouterOptions
from straightline.plan import plan

if TYPE_CHECKING:
    from straightline.assemble import RouteResult

FEATURE_COLLECTION_TYPE = "FeatureCollection"
POINT_TYPE = "Point"
MIN_COORDINATE_COMPONENTS = 2


def echo(message: str = "", *, stream: TextIO = sys.stdout) -> None:
    """Write a line to the chosen stream and flush immediately."""
    stream.write(f"{message}\n")
    stream.flush()


def parse_args() -> argparse.Namespace:
    """Parse CLI arguments."""
    parser = argparse.ArgumentParser(
        description=(
            "Connect the Point features of a GeoJSON FeatureCollection with "
            "sampled great-circle legs, in feature order."
        ),
    )
    parser.add_argument(
        "-i",
        "--input",
        help="GeoJSON file to read. When omitted, a temporary file is created "
        "for you to fill in.",
    )
    parser.add_argument(
        "-d",
        "--directory",
        default=".",
        help="Directory where the temporary GeoJSON file will be created.",
    )
    parser.add_argument(
        "--interval",
        type=float,
        default=DEFAULT_INTERVAL_M,
        help="Distance in meters between sampled points (default: %(default)s).",
    )
    parser.add_argument(
        "--log",
        default=LoggingMode.NONE.value,
        choices=[mode.value for mode in LoggingMode],
        help="Progress output written before the result.",
    )
    return parser.parse_args()


def create_temp_geojson_file(directory: Path) -> Path:
    """Create an empty, uniquely named GeoJSON file for the user to edit."""
    directory.mkdir(parents=True, exist_ok=True)
    temp_path = directory / f"waypoints-{uuid.uuid4().hex}.geojson"
    temp_path.write_text("", encoding="utf-8")
    return temp_path


def wait_for_user_to_fill(path: Path) -> None:
    echo(f"Paste your GeoJSON FeatureCollection of Point features into: {path}")
    echo("Save the file, then return here.")
    input("Press Enter to continue once the file is ready...")


def cleanup_file(path: Path) -> None:
    """Remove the temporary GeoJSON file."""
    path.unlink(missing_ok=True)


def load_feature_collection(path: Path) -> dict:
    """Load and validate that the JSON document is a FeatureCollection."""
    raw_contents = path.read_text(encoding="utf-8").strip()
    if not raw_contents:
        raise ValueError("The GeoJSON file is empty.")

    try:
        document = json.loads(raw_contents)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Unable to parse JSON: {exc}") from exc

    if not isinstance(document, dict) or document.get("type") != FEATURE_COLLECTION_TYPE:
        raise ValueError("GeoJSON must be a FeatureCollection.")

    if not isinstance(document.get("features"), list):
        raise ValueError("FeatureCollection must contain a features array.")

    return document


def extract_waypoint(feature: dict, index: int) -> Waypoint:
    """Return a named waypoint from a Point feature."""
    geometry = feature.get("geometry")
    if not isinstance(geometry, dict):
        raise ValueError(f"Feature #{index} is missing its geometry.")

    if geometry.get("type") != POINT_TYPE:
        raise ValueError(f"Feature #{index} must be a Point geometry.")

    coordinates = geometry.get("coordinates")
    if not isinstance(coordinates, (list, tuple)):
        raise ValueError(f"Feature #{index} coordinates must be a list.")
    if len(coordinates) < MIN_COORDINATE_COMPONENTS:
        raise ValueError(f"Feature #{index} is missing longitude/latitude values.")

    try:
        point = GeoPoint.from_coordinate((float(coordinates[0]), float(coordinates[1])))
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Feature #{index} coordinates must be numeric.") from exc

    properties = feature.get("properties") or {}
    name = properties.get("name") if isinstance(properties, dict) else None
    return Waypoint(point, name if isinstance(name, str) else None)


def parse_waypoints_from_geojson(path: Path) -> list[Waypoint]:
    """Read the waypoints, in feature order, from the GeoJSON file."""
    document = load_feature_collection(path)
    return [
        extract_waypoint(feature, idx + 1)
        for idx, feature in enumerate(document["features"])
    ]


def build_geojson(result: RouteResult) -> dict:
    """Create a GeoJSON feature collection describing the route."""
    features = [
        {
            "type": "Feature",
            "properties": {"role": "waypoint", "index": idx, "name": waypoint.name},
            "geometry": {
                "type": "Point",
                "coordinates": waypoint.lat_lng.as_coordinate(),
            },
        }
        for idx, waypoint in enumerate(result.input_waypoints)
    ]

    features.append(
        {
            "type": "Feature",
            "properties": {
                "role": "path",
                "distance": result.summary.total_distance,
                "instructions": [item.text for item in result.instructions],
            },
            "geometry": result.to_linestring().__geo_interface__,
        },
    )

    return {"type": "FeatureCollection", "features": features}


def main() -> None:
    """Entry point for the GeoJSON-driven CLI."""
    args = parse_args()
    temp_path: Path | None = None

    if args.input:
        input_path = Path(args.input).expanduser().resolve()
    else:
        directory = Path(args.directory).expanduser().resolve()
        temp_path = input_path = create_temp_geojson_file(directory)
        echo(f"Created temporary GeoJSON file at: {temp_path}")

    try:
        if temp_path is not None:
            wait_for_user_to_fill(temp_path)
        waypoints = parse_waypoints_from_geojson(input_path)
    except KeyboardInterrupt:
        echo()
        echo("Aborted by user.")
        sys.exit(1)
    except (OSError, ValueError) as exc:
        echo(f"Invalid GeoJSON input: {exc}", stream=sys.stderr)
        sys.exit(1)
    finally:
        if temp_path is not None:
            cleanup_file(temp_path)

    try:
        options = RouterOptions(interval=args.interval)
        result = plan(waypoints, options, logging_mode=args.log)
    except StraightLineError as exc:
        echo(f"Cannot route: {exc}", stream=sys.stderr)
        sys.exit(1)

    echo(json.dumps(build_geojson(result)))


if __name__ == "__main__":
    main()

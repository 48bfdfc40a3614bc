import json

import pytest

from scripts.plan_geojson import build_geojson, extract_waypoint, load_feature_collection
from straightline.geo import GeoPoint, Waypoint
from straightline.plan import plan


def _point_feature(coordinates, name=None):
    return {
        "type": "Feature",
        "properties": {"name": name} if name else {},
        "geometry": {"type": "Point", "coordinates": coordinates},
    }


def test_extract_named_waypoint():
    waypoint = extract_waypoint(_point_feature([2.35, 48.85], "Paris"), 1)
    assert waypoint == Waypoint(GeoPoint(48.85, 2.35), "Paris")


def test_extract_unnamed_waypoint():
    waypoint = extract_waypoint(_point_feature([0, 0]), 1)
    assert waypoint.name is None


@pytest.mark.parametrize(
    ("feature", "reason"),
    [
        ({"type": "Feature"}, "missing its geometry"),
        (
            {"geometry": {"type": "LineString", "coordinates": [[0, 0], [1, 1]]}},
            "must be a Point",
        ),
        ({"geometry": {"type": "Point"}}, "must be a list"),
        (_point_feature([1.0]), "missing longitude/latitude"),
        (_point_feature(["east", 0]), "must be numeric"),
    ],
)
def test_extract_rejects_malformed_features(feature, reason):
    with pytest.raises(ValueError, match=reason):
        extract_waypoint(feature, 3)


def test_load_feature_collection(tmp_path):
    path = tmp_path / "stops.geojson"
    path.write_text(json.dumps({"type": "Feature"}), encoding="utf-8")
    with pytest.raises(ValueError, match="FeatureCollection"):
        load_feature_collection(path)

    path.write_text("", encoding="utf-8")
    with pytest.raises(ValueError, match="empty"):
        load_feature_collection(path)


def test_build_geojson():
    route = plan(
        [Waypoint.at(0.0, 0.0, "start"), Waypoint.at(0.0, 1.0, "end")],
        {"interval": 50000},
    )
    document = build_geojson(route)

    waypoints, path = document["features"][:-1], document["features"][-1]
    assert [feature["properties"]["name"] for feature in waypoints] == ["start", "end"]
    assert waypoints[1]["geometry"]["coordinates"] == (1.0, 0.0)
    assert path["geometry"]["type"] == "LineString"
    assert len(path["geometry"]["coordinates"]) == 4
    assert path["properties"]["instructions"] == ["Azimuth 90"]
    json.dumps(document)

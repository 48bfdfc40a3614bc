import inspect

import pytest

from straightline.assemble import RouteResult, assemble_route, round_half_up
from straightline.errors import InsufficientWaypoints, InvalidCoordinate
from straightline.geo import Waypoint
from straightline.options import RouterOptions

COARSE = RouterOptions(interval=20000.0)

A = Waypoint.at(51.5, -0.1, "London")
B = Waypoint.at(50.85, 4.35, "Brussels")
C = Waypoint.at(48.85, 2.35, "Paris")


@pytest.fixture
def three_stop_route() -> RouteResult:
    return assemble_route([A, B, C], COARSE)


def test_equator_scenario():
    route = assemble_route(
        [Waypoint.at(0.0, 0.0), Waypoint.at(0.0, 1.0)],
        RouterOptions(interval=100000.0),
    )
    assert len(route.coordinates) >= 2
    assert route.summary.total_distance == pytest.approx(111319.49, abs=0.5)
    assert [item.text for item in route.instructions] == ["Azimuth 90"]


def test_one_instruction_per_leg(three_stop_route):
    assert len(three_stop_route.instructions) == 2
    assert all(item.type == "Straight" for item in three_stop_route.instructions)
    assert all(item.time == 0.0 for item in three_stop_route.instructions)


def test_waypoint_indices(three_stop_route):
    indices = three_stop_route.waypoint_indices
    assert len(indices) == 3
    assert indices[0] == 0
    assert indices[-1] == len(three_stop_route.coordinates) - 1
    assert indices == sorted(indices)


def test_instructions_point_at_leg_start(three_stop_route):
    starts = [item.index for item in three_stop_route.instructions]
    assert starts == three_stop_route.waypoint_indices[:-1]


def test_leg_boundaries_are_not_deduplicated(three_stop_route):
    boundary = three_stop_route.waypoint_indices[1]
    coordinates = three_stop_route.coordinates
    assert coordinates[boundary - 1] == B.lat_lng
    assert coordinates[boundary] == B.lat_lng


def test_summary_totals(three_stop_route):
    legs = sum(item.distance for item in three_stop_route.instructions)
    assert three_stop_route.summary.total_distance == pytest.approx(legs, rel=1e-6)
    assert three_stop_route.summary.total_time == 0.0
    assert three_stop_route.summary.total_ascend == 0.0


def test_actual_waypoints_keep_only_outer_names(three_stop_route):
    first, last = three_stop_route.actual_waypoints
    assert (first.name, last.name) == ("London", "Paris")
    assert first.lat_lng == three_stop_route.coordinates[0]
    assert last.lat_lng == three_stop_route.coordinates[-1]
    assert three_stop_route.input_waypoints == (A, B, C)


@pytest.mark.parametrize("waypoints", [[], [Waypoint.at(51.5, -0.1)]])
def test_requires_two_waypoints(waypoints):
    with pytest.raises(InsufficientWaypoints):
        assemble_route(waypoints)


@pytest.mark.parametrize("bad", [float("nan"), float("inf")])
def test_rejects_non_finite_coordinates(bad):
    with pytest.raises(InvalidCoordinate, match="#1"):
        assemble_route([A, Waypoint.at(bad, 0.0)])


def test_round_half_up():
    assert round_half_up(89.5) == 90
    assert round_half_up(90.4) == 90
    assert round_half_up(0.5) == 1
    assert round_half_up(359.6) == 360


def test_to_dict_shape(three_stop_route):
    payload = three_stop_route.to_dict()

    assert payload["name"] == ""
    assert payload["summary"]["totalAscend"] == 0
    assert payload["coordinates"][0] == {"lat": 51.5, "lng": -0.1}
    assert payload["actualWaypoints"][1]["name"] == "Paris"
    assert payload["inputWaypoints"][1] == {
        "latLng": {"lat": 50.85, "lng": 4.35},
        "name": "Brussels",
    }
    assert set(payload["instructions"][0]) == {"type", "text", "distance", "time", "index"}
    assert payload["waypointIndices"] == three_stop_route.waypoint_indices


def test_to_linestring(three_stop_route):
    line = three_stop_route.to_linestring()
    assert len(line.coords) == len(three_stop_route.coordinates)
    assert line.coords[0] == (-0.1, 51.5)


def test_default_logger_is_created_per_call(capsys):
    assert inspect.signature(assemble_route).parameters["logger"].default is None
    assemble_route([A, C], COARSE)
    assert capsys.readouterr().out == ""

"""Flask API surface for exposing the straight-line router."""

from __future__ import annotations

from typing import Any

from flask import Flask, Response, jsonify, request
from werkzeug.exceptions import BadRequest

from straightline.errors import StraightLineError
from straightline.geo import GeoPoint, Waypoint
from straightline.router import StraightLineRouter

app = Flask(__name__)

ROUTER = StraightLineRouter()


def _parse_waypoint(payload: object, label: str) -> Waypoint:
    """Validate that payload looks like {'lat': float, 'lng': float, 'name'?: str}."""
    if not isinstance(payload, dict):
        msg = f"{label} must be an object with 'lat' and 'lng'."
        raise BadRequest(msg)

    lat = payload.get("lat")
    lng = payload.get("lng", payload.get("lon"))
    if not _is_number(lat) or not _is_number(lng):
        msg = f"{label} must include numeric 'lat' and 'lng' fields."
        raise BadRequest(msg)

    name = payload.get("name")
    if name is not None and not isinstance(name, str):
        msg = f"{label}.name must be a string."
        raise BadRequest(msg)

    return Waypoint(GeoPoint(float(lat), float(lng)), name)


def _parse_waypoints(payload: object) -> list[Waypoint]:
    if not isinstance(payload, list):
        msg = "waypoints must be an array of coordinates."
        raise BadRequest(msg)

    return [
        _parse_waypoint(item, f"waypoints[{index}]")
        for index, item in enumerate(payload)
    ]


def _parse_options(payload: object) -> dict[str, Any] | None:
    if payload is None:
        return None
    if not isinstance(payload, dict):
        msg = "options must be an object."
        raise BadRequest(msg)
    return payload


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@app.after_request
def _inject_cors(response: Response) -> Response:  # type: ignore[override]
    """Allow simple cross-origin requests from map frontends."""
    response.headers.setdefault("Access-Control-Allow-Origin", "*")
    response.headers.setdefault("Access-Control-Allow-Headers", "Content-Type")
    response.headers.setdefault("Access-Control-Allow-Methods", "POST, OPTIONS")
    return response


@app.route("/api/route", methods=["POST", "OPTIONS"])
def route_waypoints() -> Response:
    """Route straight through the posted waypoints."""
    if request.method == "OPTIONS":
        return Response("", status=204)

    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        msg = "Request body must be a JSON object."
        raise BadRequest(msg)

    waypoints = _parse_waypoints(payload.get("waypoints"))
    options = _parse_options(payload.get("options"))

    try:
        result = ROUTER.compute(waypoints, options)
    except StraightLineError as exc:
        raise BadRequest(str(exc)) from exc

    return jsonify({"routes": [result.to_dict()]})


if __name__ == "__main__":  # pragma: no cover
    app.run()

from src.courier.models.domain import Coordinate, GeoPoint
from src.courier.services.outputs.routing_formatter import route_to_geojson, route_to_json
from src.courier.services.routing.models import FromCoordinate, OptimizedRoute


def _point(pid: str, lat: float, lng: float) -> GeoPoint:
    return GeoPoint(id=pid, lat=lat, lng=lng, name=f"Point {pid}")


def test_route_to_json_rounds_distance():
    points = [_point("A", 0.0, 0.0), _point("B", 0.0, 1.0)]
    route = OptimizedRoute(
        points=points,
        order=["A", "B"],
        distance_km=111.19492664455873,
        start=FromCoordinate(Coordinate(lat=0.0, lng=-1.0)),
    )

    payload = route_to_json(route)

    assert payload["distance_km"] == 111.2
    assert payload["order"] == ["A", "B"]
    assert payload["start"] == {"lat": 0.0, "lng": -1.0}
    assert payload["points"][1]["id"] == "B"


def test_route_to_geojson_with_start():
    points = [_point("A", 52.2, 21.0), _point("B", 52.3, 21.1)]

    collection = route_to_geojson(points, Coordinate(lat=52.0, lng=20.9))

    assert collection["type"] == "FeatureCollection"
    stops = [feature for feature in collection["features"] if feature["geometry"]["type"] == "Point"]
    lines = [feature for feature in collection["features"] if feature["geometry"]["type"] == "LineString"]
    assert [stop["properties"]["sequence"] for stop in stops] == [1, 2]
    assert stops[0]["geometry"]["coordinates"] == [21.0, 52.2]
    assert lines[0]["geometry"]["coordinates"] == [[20.9, 52.0], [21.0, 52.2], [21.1, 52.3]]


def test_route_to_geojson_single_point_has_no_line():
    collection = route_to_geojson([_point("A", 52.2, 21.0)])

    assert [feature["geometry"]["type"] for feature in collection["features"]] == ["Point"]

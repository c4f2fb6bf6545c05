"""
Geometric primitives for zone containment.

Points are (lat, lng) in degrees. Polygon rings are sequences of (lng, lat)
vertices (GeoJSON order) and are closed implicitly.

Point-in-polygon uses the half-open even-odd rule: a point on a left or
bottom edge counts as inside, a point on a right or top edge as outside.
"""
import math
from typing import Sequence, Tuple

EARTH_RADIUS_M = 6371000.0

LatLng = Tuple[float, float]
LngLat = Tuple[float, float]


def haversine_distance_meters(p1: LatLng, p2: LatLng) -> float:
    lat1, lng1 = p1
    lat2, lng2 = p2
    d_lat = math.radians(lat2 - lat1)
    d_lng = math.radians(lng2 - lng1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lng / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_M * c


def point_in_circle(point: LatLng, center: LatLng, radius_meters: float) -> bool:
    # distance == radius is inside
    return haversine_distance_meters(point, center) <= radius_meters


def point_in_polygon(point: LatLng, ring: Sequence[LngLat]) -> bool:
    if len(ring) < 3:
        return False
    lat, lng = point
    x, y = lng, lat
    inside = False
    j = len(ring) - 1
    for i in range(len(ring)):
        xi, yi = ring[i]
        xj, yj = ring[j]
        if (yi > y) != (yj > y):
            x_cross = (xj - xi) * (y - yi) / (yj - yi) + xi
            if x < x_cross:
                inside = not inside
        j = i
    return inside


def circle_area_m2(radius_meters: float) -> float:
    return math.pi * radius_meters * radius_meters


def polygon_area_m2(ring: Sequence[LngLat]) -> float:
    """Shoelace area on an equirectangular projection centred on the ring's mean latitude."""
    if len(ring) < 3:
        return 0.0
    lat0 = math.radians(sum(lat for _, lat in ring) / len(ring))
    pts = [
        (EARTH_RADIUS_M * math.radians(lng) * math.cos(lat0), EARTH_RADIUS_M * math.radians(lat))
        for lng, lat in ring
    ]
    twice = 0.0
    for i in range(len(pts)):
        x1, y1 = pts[i]
        x2, y2 = pts[(i + 1) % len(pts)]
        twice += x1 * y2 - x2 * y1
    return abs(twice) / 2

"""
Map a point to the pricing zone that contains it.

When zones overlap, the winner is decided by (priority asc, NULL last),
then area asc (smallest zone wins), then id asc.
"""
import logging
from typing import Iterable, List, Optional, Sequence

from pydantic import TypeAdapter, ValidationError
from sqlalchemy.orm import Session

from app.models.zone import Zone
from app.schemas.zone import CircleGeometry, PolygonGeometry, ZoneGeometry, ZoneSpec
from app.services.errors import ConfigurationInvalid, GeometryInputInvalid
from app.services.geo_math import (
    LatLng,
    circle_area_m2,
    point_in_circle,
    point_in_polygon,
    polygon_area_m2,
)
from app.services.pricing_service import validate_zone_pricing

logger = logging.getLogger(__name__)

_geometry_adapter = TypeAdapter(ZoneGeometry)


def geometry_from_row(zone: Zone) -> CircleGeometry | PolygonGeometry:
    """Validate the loosely stored geometry columns once, at the store boundary."""
    if zone.zone_type == "circle":
        raw = {
            "zone_type": "circle",
            "center_lat": zone.center_lat,
            "center_lng": zone.center_lng,
            "radius_meters": zone.radius_meters,
        }
    elif zone.zone_type == "polygon":
        coords = zone.coordinates
        if not isinstance(coords, (list, tuple)):
            raise GeometryInputInvalid(zone.id, "polygon coordinates missing")
        raw = {"zone_type": "polygon", "ring": coords}
    else:
        raise GeometryInputInvalid(zone.id, f"unknown zone_type {zone.zone_type!r}")
    try:
        return _geometry_adapter.validate_python(raw)
    except ValidationError as e:
        raise GeometryInputInvalid(zone.id, str(e.errors()[0].get("msg", "invalid")))


def zone_spec_from_row(zone: Zone) -> ZoneSpec:
    spec = ZoneSpec(
        id=zone.id,
        name=zone.name,
        geometry=geometry_from_row(zone),
        pricing_type=zone.pricing_type or "",
        multiplier=zone.multiplier,
        fixed_price=zone.fixed_price,
        priority=zone.priority,
    )
    validate_zone_pricing(spec)
    return spec


def load_active_zones(db: Session) -> List[ZoneSpec]:
    """Active zones as validated specs. Malformed zones are logged and left out."""
    out: List[ZoneSpec] = []
    for row in db.query(Zone).filter(Zone.is_active == True).all():  # noqa: E712
        try:
            out.append(zone_spec_from_row(row))
        except (GeometryInputInvalid, ConfigurationInvalid) as e:
            logger.warning("Skipping zone %s: %s", row.id, e.reason)
    return out


def zone_area_m2(zone: ZoneSpec) -> float:
    g = zone.geometry
    if isinstance(g, CircleGeometry):
        return circle_area_m2(g.radius_meters)
    return polygon_area_m2(g.ring)


def precedence_key(zone: ZoneSpec):
    return (
        zone.priority is None,
        zone.priority if zone.priority is not None else 0,
        zone_area_m2(zone),
        zone.id,
    )


def zone_contains(zone: ZoneSpec, point: LatLng) -> bool:
    g = zone.geometry
    if isinstance(g, CircleGeometry):
        return point_in_circle(point, (g.center_lat, g.center_lng), g.radius_meters)
    return point_in_polygon(point, g.ring)


def order_zones(zones: Iterable[ZoneSpec]) -> List[ZoneSpec]:
    return sorted(zones, key=precedence_key)


def matching_zones(point: LatLng, zones: Sequence[ZoneSpec]) -> List[ZoneSpec]:
    """Every zone containing the point, in precedence order."""
    return [z for z in order_zones(zones) if zone_contains(z, point)]


def resolve_zone(point: LatLng, zones: Sequence[ZoneSpec]) -> Optional[ZoneSpec]:
    """First zone in precedence order containing the point, or None (base pricing)."""
    for zone in order_zones(zones):
        if zone_contains(zone, point):
            return zone
    return None

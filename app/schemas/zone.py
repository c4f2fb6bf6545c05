from decimal import Decimal
from typing import Annotated, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field


class CircleGeometry(BaseModel):
    model_config = ConfigDict(frozen=True)

    zone_type: Literal["circle"] = "circle"
    center_lat: float = Field(ge=-90, le=90)
    center_lng: float = Field(ge=-180, le=180)
    radius_meters: float = Field(gt=0)


class PolygonGeometry(BaseModel):
    model_config = ConfigDict(frozen=True)

    zone_type: Literal["polygon"] = "polygon"
    # (lng, lat) vertices, first vertex is NOT repeated at the end
    ring: Tuple[Tuple[float, float], ...] = Field(min_length=3)


ZoneGeometry = Annotated[Union[CircleGeometry, PolygonGeometry], Field(discriminator="zone_type")]


class ZoneSpec(BaseModel):
    """A zone validated at the store boundary; the resolver and pricing only ever see these."""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    geometry: ZoneGeometry
    pricing_type: str
    multiplier: Optional[Decimal] = None
    fixed_price: Optional[Decimal] = None
    priority: Optional[int] = None


class ZoneOut(BaseModel):
    id: str
    name: str
    zoneType: str
    pricingType: str
    multiplier: Optional[Decimal] = None
    fixedPrice: Optional[Decimal] = None
    priority: Optional[int] = None

    @classmethod
    def from_spec(cls, zone: ZoneSpec) -> "ZoneOut":
        return cls(
            id=zone.id,
            name=zone.name,
            zoneType=zone.geometry.zone_type,
            pricingType=zone.pricing_type,
            multiplier=zone.multiplier,
            fixedPrice=zone.fixed_price,
            priority=zone.priority,
        )


class ZoneResolveOut(BaseModel):
    zone: Optional[ZoneOut] = None

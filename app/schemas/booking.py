from datetime import date, time
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class BookingRequest(BaseModel):
    """Immutable input threaded through the orchestrator."""
    model_config = ConfigDict(frozen=True)

    service_id: str
    scheduled_date: date
    scheduled_time: time
    lat: Optional[float] = Field(default=None, ge=-90, le=90)
    lng: Optional[float] = Field(default=None, ge=-180, le=180)
    customer_name: str = ""
    customer_email: str = ""
    customer_phone: Optional[str] = None
    address: Optional[str] = None
    payment_method: Optional[str] = None
    notes: Optional[str] = None

    @property
    def point(self) -> Optional[tuple[float, float]]:
        if self.lat is None or self.lng is None:
            return None
        return (self.lat, self.lng)


class BookingCreate(BaseModel):
    serviceId: str
    scheduledDate: date
    scheduledTime: time
    lat: Optional[float] = Field(default=None, ge=-90, le=90)
    lng: Optional[float] = Field(default=None, ge=-180, le=180)
    customerName: str = ""
    customerEmail: str  # plain str to allow .local and other dev domains
    customerPhone: Optional[str] = None
    address: Optional[str] = None
    paymentMethod: Optional[str] = None
    notes: Optional[str] = None

    def to_request(self) -> BookingRequest:
        return BookingRequest(
            service_id=self.serviceId,
            scheduled_date=self.scheduledDate,
            scheduled_time=self.scheduledTime,
            lat=self.lat,
            lng=self.lng,
            customer_name=self.customerName,
            customer_email=self.customerEmail.lower(),
            customer_phone=self.customerPhone,
            address=self.address,
            payment_method=self.paymentMethod,
            notes=self.notes,
        )


class BookingOut(BaseModel):
    id: str
    serviceId: str
    zoneId: Optional[str] = None
    scheduledDate: str
    scheduledTime: str
    totalAmount: Decimal
    reservationPrice: Optional[Decimal] = None
    bookingStatus: str
    paymentStatus: str

    @classmethod
    def from_model(cls, b) -> "BookingOut":
        return cls(
            id=b.id,
            serviceId=b.service_id,
            zoneId=b.zone_id,
            scheduledDate=b.scheduled_date.isoformat(),
            scheduledTime=b.scheduled_time.strftime("%H:%M"),
            totalAmount=b.total_amount,
            reservationPrice=b.reservation_price,
            bookingStatus=b.booking_status,
            paymentStatus=b.payment_status,
        )


class RejectionOut(BaseModel):
    reason: str
    detail: str = ""

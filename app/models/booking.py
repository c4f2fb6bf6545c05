from datetime import date, datetime, time, timezone
from decimal import Decimal
from sqlalchemy import String, DateTime, Date, Time, Float, Numeric, Text, Index
from sqlalchemy.orm import Mapped, mapped_column
from app.db.session import Base

class Booking(Base):
    __tablename__ = "bookings"
    __table_args__ = (
        Index("ix_bookings_schedule", "scheduled_date", "scheduled_time"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True)

    service_id: Mapped[str] = mapped_column(String(36), index=True)
    zone_id: Mapped[str] = mapped_column(String(36), nullable=True, index=True)

    customer_name: Mapped[str] = mapped_column(String(200), default="")
    customer_email: Mapped[str] = mapped_column(String(320), default="")
    customer_phone: Mapped[str] = mapped_column(String(40), nullable=True)
    address: Mapped[str] = mapped_column(String(500), nullable=True)
    latitude: Mapped[float] = mapped_column(Float, nullable=True)
    longitude: Mapped[float] = mapped_column(Float, nullable=True)

    scheduled_date: Mapped[date] = mapped_column(Date, index=True)
    scheduled_time: Mapped[time] = mapped_column(Time)  # slot start

    total_amount: Mapped[Decimal] = mapped_column(Numeric(10, 2))
    reservation_price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=True)

    booking_status: Mapped[str] = mapped_column(String(30), default="pending", index=True)  # pending, confirmed, cancelled, completed
    payment_status: Mapped[str] = mapped_column(String(30), default="pending")  # pending, paid, refunded
    payment_method: Mapped[str] = mapped_column(String(40), nullable=True)
    notes: Mapped[str] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))


class BookingDayLock(Base):
    """One row per scheduled date; locked FOR UPDATE around the capacity re-check and insert."""
    __tablename__ = "booking_day_locks"

    day: Mapped[date] = mapped_column(Date, primary_key=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

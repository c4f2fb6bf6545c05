from decimal import Decimal
from sqlalchemy import String, Integer, DateTime, Boolean, Float, Numeric, JSON
from sqlalchemy.orm import Mapped, mapped_column
from datetime import datetime, timezone
from app.db.session import Base

class Zone(Base):
    __tablename__ = "zones"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    name: Mapped[str] = mapped_column(String(120))
    description: Mapped[str] = mapped_column(String(500), nullable=True)
    color: Mapped[str] = mapped_column(String(20), nullable=True)

    zone_type: Mapped[str] = mapped_column(String(12), default="circle")  # circle|polygon
    # circle
    center_lat: Mapped[float] = mapped_column(Float, nullable=True)
    center_lng: Mapped[float] = mapped_column(Float, nullable=True)
    radius_meters: Mapped[float] = mapped_column(Float, nullable=True)
    # polygon: [[lng, lat], ...], implicitly closed
    coordinates: Mapped[list] = mapped_column(JSON, nullable=True)

    pricing_type: Mapped[str] = mapped_column(String(12), default="percentage")  # percentage|fixed
    multiplier: Mapped[Decimal] = mapped_column(Numeric(6, 3), nullable=True)
    fixed_price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=True)

    # Lower wins when zones overlap; NULL sorts after every explicit priority
    priority: Mapped[int] = mapped_column(Integer, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

from decimal import Decimal
from sqlalchemy import String, DateTime, Boolean, Numeric, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column
from datetime import datetime, timezone
from app.db.session import Base

class ServiceZonePrice(Base):
    __tablename__ = "service_zone_prices"
    __table_args__ = (
        UniqueConstraint("service_id", "zone_id", name="uq_service_zone_price"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    service_id: Mapped[str] = mapped_column(String(36), index=True)
    zone_id: Mapped[str] = mapped_column(String(36), index=True)
    custom_price: Mapped[Decimal] = mapped_column(Numeric(10, 2))
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

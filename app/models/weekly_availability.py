from datetime import datetime, time, timezone
from sqlalchemy import String, Integer, DateTime, Boolean, Time
from sqlalchemy.orm import Mapped, mapped_column
from app.db.session import Base

class WeeklyAvailability(Base):
    __tablename__ = "weekly_availability"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    # 0=Sun..6=Sat (NOT Python's date.weekday())
    day_of_week: Mapped[int] = mapped_column(Integer, unique=True, index=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

    # A window is unset when either bound is NULL
    time_slot_1_start: Mapped[time] = mapped_column(Time, nullable=True)
    time_slot_1_end: Mapped[time] = mapped_column(Time, nullable=True)
    time_slot_2_start: Mapped[time] = mapped_column(Time, nullable=True)
    time_slot_2_end: Mapped[time] = mapped_column(Time, nullable=True)
    time_slot_3_start: Mapped[time] = mapped_column(Time, nullable=True)
    time_slot_3_end: Mapped[time] = mapped_column(Time, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

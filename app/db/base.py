from app.db.session import Base  # noqa: F401

# Import all models so metadata (alembic, create_all) sees them
from app.models.zone import Zone  # noqa: F401
from app.models.service import Service  # noqa: F401
from app.models.service_zone_price import ServiceZonePrice  # noqa: F401
from app.models.weekly_availability import WeeklyAvailability  # noqa: F401
from app.models.non_working_day import NonWorkingDay  # noqa: F401
from app.models.setting import Setting  # noqa: F401
from app.models.booking import Booking, BookingDayLock  # noqa: F401
from app.models.booking_history import BookingHistory  # noqa: F401

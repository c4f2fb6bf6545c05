from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "local"
    APP_NAME: str = "Geofenced Booking API"
    # Comma-separated origins for CORS. If empty, uses localhost defaults.
    CORS_ORIGINS: str = ""
    LOG_LEVEL: str = "INFO"

    DATABASE_URL: str = "sqlite:///./booking.db"

    @field_validator("DATABASE_URL", mode="after")
    @classmethod
    def normalize_database_url(cls, v: str) -> str:
        """Render and others give postgres://; SQLAlchemy expects postgresql+psycopg2://."""
        if v and v.startswith("postgres://"):
            return "postgresql+psycopg2://" + v[11:]
        return v

    # Statement/lock timeout for store calls. Expiry surfaces as STORE_UNAVAILABLE.
    STORE_TIMEOUT_MS: int = 5000

    # Fallbacks when the key/value settings table has no row
    DEFAULT_MAX_BOOKINGS_PER_SLOT: int = 5
    DEFAULT_MAX_BOOKINGS_PER_DAY: int = 20

    # Zone used to decide "today" (past dates are never bookable)
    BOOKING_TIMEZONE: str = "UTC"


settings = Settings()

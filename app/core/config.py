from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    SALON_NAME: str = "Your Salon"
    SALON_TIMEZONE: str = "Africa/Johannesburg"

    SALON_OPEN_TIME: str = "09:00"
    SALON_CLOSE_TIME: str = "17:00"
    SLOT_INTERVAL_MINUTES: int = 15
    DEFAULT_BOOKING_DURATION_MINUTES: int = 60

    SALON_API_BASE_URL: str | None = None
    SALON_API_TOKEN: str | None = None
    SALON_API_TIMEOUT_SECONDS: float = 10.0

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"


settings = Settings()

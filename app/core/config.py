from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    STORE_NAME: str = "PerDiem Store"
    # Weekly rules and overrides are authored in this timezone's wall time.
    STORE_TIMEZONE: str = "America/New_York"

    SLOT_INTERVAL_MINUTES: int = 30
    OPENING_SOON_MINUTES: int = 60
    CLOSING_SOON_MINUTES: int = 30
    DAYS_AHEAD: int = 30

    STORE_PROVIDER: str = "memory"
    BOOKINGS_DATA_DIR: str = "./data/kv"

    SCHEDULE_API_BASE_URL: str | None = None
    SCHEDULE_API_USERNAME: str | None = None
    SCHEDULE_API_PASSWORD: str | None = None
    SCHEDULE_API_TIMEOUT_SECONDS: float = 30.0


settings = Settings()

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    BUSINESS_NAME: str = "Divine Braids"
    BUSINESS_TIMEZONE: str = "America/New_York"

    SLOT_INTERVAL_MINUTES: int = 30
    DEFAULT_SERVICE_DURATION_MINUTES: int = 60

    LEDGER_PROVIDER: str = "memory"  # "memory" | "json"
    LEDGER_DATA_DIR: str = "./data/ledger"

    NOTIFICATION_WEBHOOK_URL: str | None = None
    NOTIFICATION_TIMEOUT_SECONDS: float = 10.0


settings = Settings()

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "NexTrip Countdown API"
    debug: bool = False
    log_level: str = "INFO"
    # CORS: "*" for dev; in production set to comma-separated origins
    cors_origins: str = "*"
    rate_limit: str = "60/minute"  # slowapi limit string for /next-departure

    # Metro Transit NexTrip v2 (public, no key required)
    nextrip_base_url: str = "https://svc.metrotransit.org/nextripv2"
    nextrip_timeout_seconds: float = 10.0


def get_settings() -> Settings:
    return Settings()

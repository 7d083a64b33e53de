from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    VENUE_API_BASE_URL: str = "https://v2.api.noroff.dev"
    VENUE_API_KEY: str | None = None
    VENUE_API_ACCESS_TOKEN: str | None = None
    GATEWAY_TIMEOUT_SECONDS: float = 10.0

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    CONFIRMATION_PREFIX: str = "BK"


settings = Settings()

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    DATABASE_URL: str = "sqlite:///./wellness.db"
    APP_ENV: str = "development"

    # Comma-separated allowed origins, or "*" to allow all.
    # Example: "https://myapp.com,https://api.myapp.com"
    CORS_ORIGINS: str = "*"

    # IANA zone used for "today" when a request does not pass `now`.
    TIMEZONE: str = "UTC"

    HEATMAP_WINDOW_DAYS: int = 28
    # Clients re-request the dashboard after this many seconds.
    STATS_REFRESH_SECONDS: int = 300

    LOG_LEVEL: str = "INFO"

    @property
    def cors_origins_list(self) -> list[str]:
        if self.CORS_ORIGINS.strip() == "*":
            return ["*"]
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


settings = Settings()

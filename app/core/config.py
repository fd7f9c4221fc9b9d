# app/core/config.py
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    DATABASE_URL: str = Field(default="sqlite:///./queue.db")
    APP_NAME: str = "Walk-in Queue API"
    APP_DESC: str = "Ticket issuance, counter calls and reports for a walk-in queue"
    APP_VERSION: str = "1.0.0"

    # Ticket issuance window, local time: [open, close)
    SERVICE_OPEN_HOUR: int = Field(default=7, ge=0, le=23)
    SERVICE_CLOSE_HOUR: int = Field(default=17, ge=1, le=24)

    # Share of called customers that never show up
    ABANDONMENT_PROBABILITY: float = Field(default=0.05, ge=0.0, le=1.0)

    # How many served tickets the display screen shows
    RECENT_CALLS_LIMIT: int = Field(default=5, ge=1)

    LOG_LEVEL: str = "INFO"

    # CORS origins, comma separated
    CORS_ORIGINS: str | None = None

    # Pydantic v2 style config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def cors_origins(self) -> list[str]:
        if not self.CORS_ORIGINS:
            return ["*"]
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()


__all__ = ["Settings", "get_settings"]

from __future__ import annotations

from typing import Optional

from pydantic import AnyUrl, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8-sig",
        case_sensitive=False,
        extra="ignore",
    )

    APP_ENV: str = "local"
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    LOG_LEVEL: str = "DEBUG"
    # "text" or "json"
    LOG_FORMAT: str = "text"

    FRONTEND_CORS_ORIGINS: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000"],
    )

    # "memory" or "supabase"
    CATALOG_BACKEND: str = "memory"

    # Only the Supabase catalog repositories need these
    SUPABASE_URL: Optional[AnyUrl] = None
    SUPABASE_SERVICE_ROLE_KEY: Optional[str] = None

    @property
    def is_development(self) -> bool:
        return self.APP_ENV.lower() in ("local", "development", "dev")


settings = Settings()

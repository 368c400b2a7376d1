from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    database_url: str = Field(default="sqlite:///./database.sqlite", alias="DATABASE_URL")
    database_synchronize: bool = Field(default=True, alias="DATABASE_SYNCHRONIZE")

    jwt_secret: str = Field(default="change-me", alias="JWT_SECRET")
    jwt_exp_minutes: int = Field(default=60, alias="JWT_EXP_MINUTES")
    jwt_refresh_exp_minutes: int = Field(default=60 * 24 * 7, alias="JWT_REFRESH_EXP_MINUTES")

    cors_origin: str = Field(default="http://localhost:5173", alias="CORS_ORIGIN")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    random_cache_ttl_seconds: float = Field(default=60.0, alias="RANDOM_CACHE_TTL_SECONDS")
    demo_items_total: int = Field(default=100, alias="DEMO_ITEMS_TOTAL")
    enable_payments_debug: bool = Field(default=True, alias="ENABLE_PAYMENTS_DEBUG")

    @property
    def cors_origins(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origin.split(",") if origin.strip()]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()

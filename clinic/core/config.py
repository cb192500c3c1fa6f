from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingConfig(BaseSettings):
    # Flat LOG_* variables, not nested under AppConfig.
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    level: str = Field(default="INFO", alias="LOG_LEVEL")
    json_logs: bool = Field(default=False, alias="LOG_JSON")


class AppConfig(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    env: str = Field(default="development", alias="APP_ENV")
    host: str = Field(default="0.0.0.0", alias="APP_HOST")
    port: int = Field(default=4000, alias="APP_PORT")
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:5173", "http://127.0.0.1:5173", "http://localhost:3000"],
        alias="CORS_ORIGINS",
    )

    database_url: str = Field(default="sqlite:///./data/clinic.db", alias="DATABASE_URL")

    # Clinic civil time is a fixed offset from UTC, independent of the host zone.
    clinic_utc_offset_hours: int = Field(default=8, alias="CLINIC_UTC_OFFSET_HOURS")
    daily_capacity: int = Field(default=4, alias="DAILY_CAPACITY")

    jwt_secret: str = Field(default="dev_fallback_secret", alias="JWT_SECRET")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(default=60 * 8, alias="ACCESS_TOKEN_EXPIRE_MINUTES")

    seed_admin_email: str = Field(default="admin@gmail.com", alias="SEED_ADMIN_EMAIL")
    seed_admin_password: str = Field(default="admin12345", alias="SEED_ADMIN_PASSWORD")

    logging: LoggingConfig = Field(default_factory=LoggingConfig)


@lru_cache
def get_settings() -> AppConfig:
    return AppConfig()

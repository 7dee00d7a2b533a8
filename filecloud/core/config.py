# filecloud/core/config.py
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    database_url: str = "sqlite:///./filecloud.db"

    # Uploads are read fully into memory, so this also caps request memory
    max_upload_size: int = 100 * 1024 * 1024

    cors_origins: list[str] = ["http://localhost:8080"]

    log_level: str = "INFO"
    log_file: str | None = None

    # login -> password, created on startup if missing
    seed_users: dict[str, str] = {"user": "user"}

    host: str = "0.0.0.0"
    port: int = 8081

    # Tell pydantic-settings to load from .env at project root
    model_config = SettingsConfigDict(
        env_prefix="FILECLOUD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # ignore any extra stuff in .env
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()

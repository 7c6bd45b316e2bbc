"""Application settings using environment variables."""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_DIR = Path(__file__).resolve().parents[1]


class Settings(BaseSettings):
    """Environment-driven configuration for the message board."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    BOARD_DATABASE_URL: str = "sqlite:///./data.db"

    BOARD_SESSION_COOKIE_NAME: str = "authToken"
    BOARD_SESSION_TTL_MINUTES: int = 60 * 24 * 30
    BOARD_SESSION_COOKIE_SECURE: bool = False

    BOARD_BCRYPT_ROUNDS: int = 10

    BOARD_HOST: str = "0.0.0.0"
    BOARD_PORT: int = 8080
    BOARD_LOG_LEVEL: str = "INFO"

    BOARD_TEMPLATES_DIR: Path = PACKAGE_DIR / "templates"
    BOARD_STATIC_DIR: Path = PACKAGE_DIR / "static"

    @property
    def session_ttl_seconds(self) -> int:
        return self.BOARD_SESSION_TTL_MINUTES * 60

    def engine_options(self) -> dict:
        """Extra create_engine() kwargs for the configured backend."""
        if self.BOARD_DATABASE_URL.startswith("sqlite"):
            return {"connect_args": {"check_same_thread": False}}
        return {"pool_pre_ping": True}


@lru_cache()
def get_settings() -> Settings:
    """Return a cached Settings instance to avoid re-parsing env."""
    return Settings()

# app/core/config.py
import os
from typing import List

from pydantic import BaseModel, Field

from dotenv import load_dotenv

load_dotenv()


class ConfigurationError(RuntimeError):
    pass


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


def _required_database_url() -> str:
    url = os.getenv("DATABASE_URL", "").strip()
    if not url:
        raise ConfigurationError(
            "Please define the DATABASE_URL environment variable (or add it to .env)"
        )
    return url


class Settings(BaseModel):
    DATABASE_URL: str
    AUTO_MIGRATE: bool = Field(default_factory=lambda: _env_bool("AUTO_MIGRATE", "true"))
    LOG_LEVEL: str = Field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())
    CORS_ORIGINS: List[str] = Field(
        default_factory=lambda: [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
    )
    ASSET_TIMEOUT_SECONDS: float = Field(default_factory=lambda: float(os.getenv("ASSET_TIMEOUT_SECONDS", "15")))


def load_settings() -> Settings:
    return Settings(DATABASE_URL=_required_database_url())


settings = load_settings()

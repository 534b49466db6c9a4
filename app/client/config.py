# app/client/config.py
import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()


class ClientSettings(BaseModel):
    """Settings for code that only talks HTTP to a registry; no database involved."""

    REGISTRY_API_URL: str = Field(default_factory=lambda: os.getenv("REGISTRY_API_URL", "http://localhost:8000"))
    ASSET_TIMEOUT_SECONDS: float = Field(default_factory=lambda: float(os.getenv("ASSET_TIMEOUT_SECONDS", "15")))
    LOG_LEVEL: str = Field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())


def load_client_settings() -> ClientSettings:
    return ClientSettings()

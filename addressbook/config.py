"""
Configuration settings for the address book store.
Reads from environment variables and ``.env``; NEVER logs secret values.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_REPO_ROOT = Path(__file__).resolve().parents[1]

DATABASE_NAME = "AddressBook.db"
DATABASE_VERSION = 1


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Paths
    DATABASE_PATH: Path = Field(
        default=_REPO_ROOT / "data" / DATABASE_NAME,
        validation_alias="DATABASE_PATH",
    )

    # Schema
    DATABASE_VERSION: int = Field(default=DATABASE_VERSION, validation_alias="DATABASE_VERSION")
    BUSY_TIMEOUT_SECONDS: float = Field(default=5.0, validation_alias="BUSY_TIMEOUT_SECONDS")

    # Logging
    LOG_LEVEL: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    @field_validator("DATABASE_VERSION")
    @classmethod
    def _version_positive(cls, value: int) -> int:
        if value < 1:
            raise ValueError("DATABASE_VERSION must be >= 1")
        return value

    @field_validator("LOG_LEVEL")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.upper()


@dataclass(frozen=True)
class StoreConfig:
    """What the schema manager needs to open the store."""
    path: Path
    version: int = DATABASE_VERSION
    busy_timeout: float = 5.0


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


def get_store_config(settings: Settings | None = None) -> StoreConfig:
    settings = settings or get_settings()
    return StoreConfig(
        path=Path(settings.DATABASE_PATH),
        version=settings.DATABASE_VERSION,
        busy_timeout=settings.BUSY_TIMEOUT_SECONDS,
    )

# invoicing/config.py
"""
Environment-driven settings for the dashboard service.

DATABASE_URL (or POSTGRES_URL) picks the store; everything else has a
default that works against the local sqlite file.
"""

import logging
from functools import lru_cache

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    database_url: str = Field(
        default="sqlite:///db.sqlite",
        validation_alias=AliasChoices("DATABASE_URL", "POSTGRES_URL"),
    )
    database_echo: bool = False

    log_level: str = "INFO"

    # one worker per dashboard card query
    card_data_workers: int = Field(default=3, ge=1)

    @field_validator("database_url", mode="before")
    @classmethod
    def normalize_postgres_scheme(cls, v):
        # Hosted Postgres providers hand out postgres://, SQLAlchemy wants postgresql://
        if isinstance(v, str) and v.startswith("postgres://"):
            return v.replace("postgres://", "postgresql://", 1)
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
    )

# config.py
# Runtime settings, overridable through CALPUZZLE_* environment variables

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Search
    progress_interval: int = Field(default=10_000, gt=0)
    prune_islands: bool = False
    find_all: bool = False

    # Host
    log_level: str = "INFO"
    cell_size: int = Field(default=64, gt=0)

    model_config = SettingsConfigDict(
        env_prefix="CALPUZZLE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )


settings = Settings()

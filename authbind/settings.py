from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Process settings.

    Notes:
    - Everything is optional; with no environment the engine runs on defaults.
    - ``AUTHBIND_CONFIG_PATH`` points at a YAML file with an ``authorization`` section.
    """

    model_config = SettingsConfigDict(env_prefix="AUTHBIND_", extra="ignore")

    config_path: str | None = None
    log_level: str = "INFO"

    def resolved_config_path(self) -> Path | None:
        if self.config_path:
            return Path(self.config_path)
        return None


@lru_cache
def get_settings() -> Settings:
    return Settings()

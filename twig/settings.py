from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Repository settings, overridable through TWIG_* environment variables.
    """

    model_config = SettingsConfigDict(env_prefix="TWIG_")

    default_branch: str = "master"
    commit_id_length: int = 7
    remote_separator: str = "__"

    # CLI only
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value


@lru_cache
def get_settings() -> Settings:
    return Settings()

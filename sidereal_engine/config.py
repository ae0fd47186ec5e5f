"""
config.py
=========
Runtime settings, read from the environment with the ``SIDEREAL_`` prefix.

    SIDEREAL_MIN_YEAR=1800 SIDEREAL_DEFAULT_HOUSE_SYSTEM=placidus ...
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="SIDEREAL_", case_sensitive=True)

    # ─── Calendar ─────────────────────────
    MIN_YEAR: int = 1582
    MAX_YEAR: int = 2100

    # ─── Chart defaults ───────────────────
    DEFAULT_AYANAMSA: str = "lahiri"
    DEFAULT_HOUSE_SYSTEM: str = "whole_sign"
    PLACIDUS_MAX_LATITUDE: float = Field(60.0, gt=0.0, lt=90.0)


@lru_cache
def get_settings() -> Settings:
    return Settings()

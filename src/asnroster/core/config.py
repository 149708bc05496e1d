"""Application configuration using pydantic-settings with grouped env prefixes."""

from __future__ import annotations

from typing import Literal

from pydantic_settings import BaseSettings


class EngineConfig(BaseSettings):
    """Classification and retirement forecast configuration."""

    model_config = {"env_prefix": "ASNROSTER_ENGINE_"}

    default_horizon_years: int = 5
    max_horizon_years: int = 20  # bounds the year x category grid
    retiring_soon_age: int = 55


class AppSettings(BaseSettings):
    """Root application settings aggregating all sub-configs."""

    model_config = {"env_prefix": "ASNROSTER_"}

    environment: Literal["dev", "uat", "prod"] = "dev"
    log_level: str = "INFO"

    engine: EngineConfig = EngineConfig()

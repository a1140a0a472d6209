"""
Shared configuration management for the Server ACL.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AclSettings(BaseSettings):
    """Engine settings, read from ``ACL_*`` environment variables or ``.env``."""

    model_config = SettingsConfigDict(
        env_prefix="ACL_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    # Environment
    env: str = Field(default="local")
    log_level: str = Field(default="info")

    # Rules
    rules_file: Optional[str] = Field(default=None, description="YAML or JSON ACL config")

    # Time limits; None means no limit
    population_timeout_seconds: Optional[float] = Field(default=None, gt=0)
    decision_timeout_seconds: Optional[float] = Field(default=None, gt=0)

    # Observability
    metrics_enabled: bool = Field(default=True)


@lru_cache()
def get_settings() -> AclSettings:
    """Get the process settings (cached)."""
    return AclSettings()

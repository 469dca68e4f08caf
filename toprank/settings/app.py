"""Ranking defaults powered by Pydantic BaseSettings."""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from toprank.ranking.models import RankingConfig, SameValueBehavior


class RankingSettings(BaseSettings):
    """Centralized environment configuration."""

    model_config = SettingsConfigDict(
        env_prefix="TOPRANK_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    default_capacity: int = Field(default=10, ge=0)
    default_behavior: SameValueBehavior = SameValueBehavior.ADD_AFTER_EQUAL
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_json: bool = True

    def to_config(self, capacity: int | None = None) -> RankingConfig:
        """Build a RankingConfig from these defaults.

        Args:
            capacity: Optional capacity overriding ``default_capacity``.

        Returns:
            Validated ranking configuration.
        """
        return RankingConfig(
            capacity=self.default_capacity if capacity is None else capacity,
            behavior=self.default_behavior,
        )


def get_settings() -> RankingSettings:
    """Get a settings instance."""
    return RankingSettings()

"""Application settings."""

from toprank.settings.app import RankingSettings, get_settings


__all__ = ["RankingSettings", "get_settings"]

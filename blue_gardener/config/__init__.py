"""Configuration management for blue-gardener."""

from .config import Config, ConfigData, ProfileEntry

__all__ = ["Config", "ConfigData", "ProfileEntry"]

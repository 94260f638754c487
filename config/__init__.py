"""Environment-driven configuration."""

from .config import Config, ConfigError, SearchProviderType

__all__ = ["Config", "ConfigError", "SearchProviderType"]

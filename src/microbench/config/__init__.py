"""Configuration loading package."""

from .config_loader import DEFAULT_CONFIG, ConfigLoader, default_config

__all__ = ["ConfigLoader", "DEFAULT_CONFIG", "default_config"]

"""
Configuration module for settings and sources.

Provides:
- YAML config loading with validation
- Source definitions and service settings
- Environment variable substitution
"""

from .settings import ConfigError, Settings, SourceConfig
from .loader import AppConfig, ConfigLoader, load_config, substitute_env_vars

__all__ = [
    "AppConfig",
    "ConfigError",
    "ConfigLoader",
    "Settings",
    "SourceConfig",
    "load_config",
    "substitute_env_vars",
]

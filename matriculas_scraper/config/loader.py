"""
YAML configuration loader.

Loads settings and source definitions with:
- Environment variable substitution
- Required field validation
- Default values
"""

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml
import structlog

from .settings import ConfigError, Settings, SourceConfig

logger = structlog.get_logger(__name__)

DEFAULT_CONFIG_FILE = "sources.yml"


def substitute_env_vars(text: str) -> str:
    """
    Substitute environment variables in text.

    Supports formats:
    - ${VAR_NAME} - required, empty string (with a warning) if missing
    - ${VAR_NAME:-default} - optional with default

    Args:
        text: Text with env var placeholders

    Returns:
        Text with substituted values
    """
    def replace(match):
        var_expr = match.group(1)
        if ":-" in var_expr:
            var_name, default = var_expr.split(":-", 1)
            return os.getenv(var_name, default)
        else:
            value = os.getenv(var_expr)
            if value is None:
                logger.warning("env_var_not_set", var=var_expr)
                return ""
            return value

    return re.sub(r"\$\{([^}]+)\}", replace, text)


@dataclass
class AppConfig:
    """Loaded configuration: settings plus enabled sources."""
    settings: Settings = field(default_factory=Settings)
    sources: list[SourceConfig] = field(default_factory=list)


class ConfigLoader:
    """
    Configuration loader for settings and sources.

    Loads YAML config files and validates source definitions.
    """

    def __init__(self, config_dir: Optional[str] = None):
        """
        Initialize config loader.

        Args:
            config_dir: Directory containing config files
                       (defaults to package config directory)
        """
        if config_dir:
            self.config_dir = Path(config_dir)
        else:
            self.config_dir = Path(__file__).parent

    def load_file(self, filename: str) -> dict:
        """
        Load YAML config file.

        Args:
            filename: Config file name (relative to config_dir)

        Returns:
            Parsed config dict
        """
        filepath = self.config_dir / filename

        if not filepath.exists():
            raise FileNotFoundError(f"Config file not found: {filepath}")

        logger.info("loading_config", file=str(filepath))

        with open(filepath, "r", encoding="utf-8") as f:
            content = f.read()

        content = substitute_env_vars(content)
        config = yaml.safe_load(content)

        if config is not None and not isinstance(config, dict):
            raise ConfigError(f"Config root must be a mapping: {filepath}")

        return config or {}

    def load(self, filename: str = DEFAULT_CONFIG_FILE) -> AppConfig:
        """
        Load settings and enabled sources.

        Args:
            filename: Config file name

        Returns:
            AppConfig with settings and sources
        """
        config = self.load_file(filename)

        settings = Settings.from_dict(config.get("settings"))

        sources = []
        for source_data in config.get("sources") or []:
            source = SourceConfig.from_dict(source_data)
            if not source.enabled:
                logger.info("source_disabled", source_id=source.source_id)
                continue
            sources.append(source)
            logger.debug("source_loaded", source_id=source.source_id)

        return AppConfig(settings=settings, sources=sources)


def load_config(config_path: Optional[str] = None) -> AppConfig:
    """
    Convenience function to load configuration.

    Args:
        config_path: Optional path to a sources.yml file

    Returns:
        AppConfig
    """
    if config_path:
        path = Path(config_path)
        return ConfigLoader(str(path.parent)).load(path.name)
    return ConfigLoader().load()

"""
Configuration dataclasses for sources and service settings.
"""

from dataclasses import dataclass, field
from typing import Optional


class ConfigError(ValueError):
    """Invalid or incomplete configuration."""


@dataclass
class SourceConfig:
    """Configuration for one HTML source page."""

    source_id: str
    source_name: str
    url: str

    enabled: bool = True

    # Extra metadata
    metadata: dict = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict) -> "SourceConfig":
        """Create from dictionary (e.g., from YAML)."""
        required = ["source_id", "url"]
        for name in required:
            if not data.get(name):
                raise ConfigError(f"Missing required field: {name}")

        return cls(
            source_id=data["source_id"],
            source_name=data.get("source_name") or data["source_id"],
            url=data["url"],
            enabled=bool(data.get("enabled", True)),
            metadata=data.get("metadata") or {},
        )


@dataclass
class Settings:
    """Service-wide settings."""

    port: int = 3000
    cache_ttl: int = 6 * 60 * 60
    data_file: Optional[str] = "data/matriculas_monthly.json"

    # HTTP client
    requests_per_second: float = 2.0
    timeout: float = 30.0
    max_retries: int = 3

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "Settings":
        """Create from dictionary, falling back to defaults for missing keys."""
        data = data or {}
        defaults = cls()
        try:
            return cls(
                port=int(data.get("port", defaults.port)),
                cache_ttl=int(data.get("cache_ttl", defaults.cache_ttl)),
                data_file=data.get("data_file", defaults.data_file) or None,
                requests_per_second=float(
                    data.get("requests_per_second", defaults.requests_per_second)
                ),
                timeout=float(data.get("timeout", defaults.timeout)),
                max_retries=int(data.get("max_retries", defaults.max_retries)),
            )
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid settings: {e}") from e

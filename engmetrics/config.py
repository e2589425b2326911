"""
API Configuration Management

Provides centralized, validated configuration for the metrics API.
Values come from environment variables (optionally via a ``.env`` file)
and are validated once, failing fast on anything malformed.

Usage:
    from engmetrics.config import get_config

    config = get_config()
    print(config.log_level)
    print(config.cache_max_age)

Environment:
    METRICS_API_LOG_LEVEL      DEBUG | INFO | WARNING | ERROR | CRITICAL (default: INFO)
    METRICS_API_JSON_LOGS      true/false (default: false)
    METRICS_API_LOG_FILE       optional path, always written as JSON
    METRICS_API_FIXTURES_DIR   optional directory overriding the bundled fixtures
    METRICS_API_CACHE_MAX_AGE  Cache-Control max-age in seconds for metrics (default: 300)

Raises:
    ConfigurationError: If configuration is invalid
"""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off", "")


class ConfigurationError(Exception):
    """Raised when configuration is missing or invalid."""

    pass


@dataclass
class ApiConfig:
    """
    Validated metrics API configuration.
    """

    log_level: str = "INFO"
    json_logs: bool = False
    log_file: Path | None = None
    fixtures_dir: Path | None = None
    cache_max_age: int = 300

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self):
        """
        Validate API configuration.

        Raises:
            ConfigurationError: If configuration is invalid
        """
        self.log_level = self.log_level.upper()
        if self.log_level not in VALID_LOG_LEVELS:
            raise ConfigurationError(
                f"METRICS_API_LOG_LEVEL must be one of {', '.join(VALID_LOG_LEVELS)}: {self.log_level}"
            )

        if self.fixtures_dir is not None and not self.fixtures_dir.is_dir():
            raise ConfigurationError(f"METRICS_API_FIXTURES_DIR is not a directory: {self.fixtures_dir}")

        if self.cache_max_age < 0:
            raise ConfigurationError(f"METRICS_API_CACHE_MAX_AGE must not be negative: {self.cache_max_age}")


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"{name} must be true or false: {raw}")


def _parse_int(name: str, raw: str) -> int:
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer: {raw}")


def load_config() -> ApiConfig:
    """
    Build a validated configuration from the current environment.

    Returns:
        ApiConfig: Validated configuration

    Raises:
        ConfigurationError: If configuration is missing or invalid
    """
    load_dotenv()

    log_file = os.getenv("METRICS_API_LOG_FILE")
    fixtures_dir = os.getenv("METRICS_API_FIXTURES_DIR")

    return ApiConfig(
        log_level=os.getenv("METRICS_API_LOG_LEVEL", "INFO"),
        json_logs=_parse_bool("METRICS_API_JSON_LOGS", os.getenv("METRICS_API_JSON_LOGS", "false")),
        log_file=Path(log_file) if log_file else None,
        fixtures_dir=Path(fixtures_dir) if fixtures_dir else None,
        cache_max_age=_parse_int("METRICS_API_CACHE_MAX_AGE", os.getenv("METRICS_API_CACHE_MAX_AGE", "300")),
    )


# Convenience function for getting configuration
_config_instance: ApiConfig | None = None


def get_config() -> ApiConfig:
    """
    Get the global configuration instance (singleton pattern).

    Returns:
        ApiConfig: The validated configuration
    """
    global _config_instance
    if _config_instance is None:
        _config_instance = load_config()
    return _config_instance

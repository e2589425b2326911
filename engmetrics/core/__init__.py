"""
Core Infrastructure - Logging and Configuration

This package provides the shared infrastructure that the rest of the
application imports instead of configuring libraries directly.

Usage:
    from engmetrics.core import get_config, get_logger

    logger = get_logger(__name__)
    config = get_config()
"""

from engmetrics.config import ApiConfig, ConfigurationError, get_config, load_config
from engmetrics.core.logging_config import ContextFormatter, JSONFormatter, get_logger, setup_logging

__all__ = [
    # Configuration
    "ApiConfig",
    "ConfigurationError",
    "get_config",
    "load_config",
    # Logging
    "ContextFormatter",
    "JSONFormatter",
    "get_logger",
    "setup_logging",
]

"""
Core module containing configuration, logging, security and exceptions.
"""

from .config import (
    BaseConfig,
    DevelopmentConfig,
    ProductionConfig,
    TestingConfig,
    config,
    get_config,
)
from .logging import JSONFormatter, SensitiveDataFilter, get_logger, setup_logging

__all__ = [
    # Configuration
    "BaseConfig",
    "DevelopmentConfig",
    "TestingConfig",
    "ProductionConfig",
    "get_config",
    "config",
    # Logging
    "setup_logging",
    "get_logger",
    "JSONFormatter",
    "SensitiveDataFilter",
]

"""Core infrastructure components for expo-stallion."""

from .config import Config, get_config
from .exceptions import (
    ConfigurationError,
    ProjectLayoutError,
    ResourceFormatError,
    StallionPluginError,
)
from .logging import get_logger, setup_logging
from .types import ProjectKey, ServiceResult

__all__ = [
    "Config",
    "get_config",
    "ConfigurationError",
    "ProjectLayoutError",
    "ResourceFormatError",
    "StallionPluginError",
    "get_logger",
    "setup_logging",
    "ProjectKey",
    "ServiceResult",
]

"""Data models for expo-stallion."""

from .patch import AndroidDialect, Diagnostic, IOSDialect, PatchResult, Platform
from .plugin import (
    APP_TOKEN_PREFIX,
    FileReport,
    FileStatus,
    PluginResult,
    StallionPluginProps,
)

__all__ = [
    "AndroidDialect",
    "Diagnostic",
    "IOSDialect",
    "PatchResult",
    "Platform",
    "APP_TOKEN_PREFIX",
    "FileReport",
    "FileStatus",
    "PluginResult",
    "StallionPluginProps",
]

"""
Custom exception hierarchy for expo-stallion.

All exceptions inherit from StallionPluginError. Only configuration errors are
fatal for a plugin run; the others are caught per file and turned into warnings.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class StallionPluginError(Exception):
    """Base exception for all expo-stallion errors."""

    message: str
    context: dict[str, Any] = field(default_factory=dict)
    cause: Exception | None = None

    def __str__(self) -> str:
        ctx = f" | context: {self.context}" if self.context else ""
        cause = f" | caused by: {self.cause}" if self.cause else ""
        return f"{self.message}{ctx}{cause}"


@dataclass
class ConfigurationError(StallionPluginError):
    """Raised when plugin properties are present but malformed.

    Aborts the whole run before any project file is read.
    """

    field_name: str | None = None

    def __str__(self) -> str:
        base = super().__str__()
        if self.field_name:
            return f"expo-stallion: invalid '{self.field_name}': {base}"
        return f"expo-stallion: {base}"


@dataclass
class ProjectLayoutError(StallionPluginError):
    """Raised when an expected native project file cannot be located."""

    platform: str = ""
    expected: str = ""

    def __str__(self) -> str:
        where = f" (expected {self.expected})" if self.expected else ""
        return f"[{self.platform}] {self.message}{where}"


@dataclass
class ResourceFormatError(StallionPluginError):
    """Raised when strings.xml or Info.plist cannot be parsed."""

    resource: str = ""

    def __str__(self) -> str:
        return f"Could not parse {self.resource}: {super().__str__()}"

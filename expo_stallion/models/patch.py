"""
Patch-related data models.

These models describe what the engine decided about one native entry file: which
dialect it is written in, the resulting text, and any diagnostics raised.
"""

from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field


class Platform(str, Enum):
    """Native platform of an entry file."""

    ANDROID = "android"
    IOS = "ios"


class AndroidDialect(str, Enum):
    """Structural variants of MainApplication."""

    EXPO_REACT_HOST_WRAPPER = "expo_react_host_wrapper"  # Expo ReactNativeHostWrapper
    REACT_HOST = "react_host"  # getDefaultReactHost(...) builder
    KOTLIN_HOST = "kotlin_host"  # Kotlin MainApplication class
    JAVA_HOST = "java_host"  # Java MainApplication class
    UNRECOGNIZED = "unrecognized"


class IOSDialect(str, Enum):
    """Structural variants of AppDelegate."""

    SWIFT_DELEGATE = "swift_delegate"
    OBJC_DELEGATE = "objc_delegate"
    UNRECOGNIZED = "unrecognized"


class Diagnostic(BaseModel):
    """A non-fatal message about one file."""

    severity: Literal["info", "warning"] = Field(default="warning")
    file_name: str = Field(description="Logical or relative name of the affected file")
    message: str

    def __str__(self) -> str:
        return f"{self.file_name}: {self.message}"


class PatchResult(BaseModel):
    """Outcome of running the patch pipeline over one entry file."""

    file_name: str
    platform: Platform
    dialect: AndroidDialect | IOSDialect
    contents: str = Field(description="Final file text (the input when nothing changed)")
    changed: bool = Field(default=False)
    already_patched: bool = Field(default=False)
    diagnostics: list[Diagnostic] = Field(default_factory=list)

    @property
    def warnings(self) -> list[Diagnostic]:
        """Diagnostics with warning severity."""
        return [d for d in self.diagnostics if d.severity == "warning"]

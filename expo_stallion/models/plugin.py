"""
Plugin-level data models.

Properties accepted by the plugin and the report returned after a run over a
whole Expo project.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from .patch import Diagnostic, Platform

APP_TOKEN_PREFIX = "spb_"


class StallionPluginProps(BaseModel):
    """Properties passed to the plugin (``projectId`` / ``appToken`` in app.json)."""

    model_config = ConfigDict(populate_by_name=True)

    project_id: str | None = Field(default=None, alias="projectId")
    app_token: str | None = Field(default=None, alias="appToken")

    @property
    def is_complete(self) -> bool:
        """Both credentials are present and non-empty."""
        return bool(self.project_id) and bool(self.app_token)


class FileStatus(str, Enum):
    """What happened to a single project file."""

    PATCHED = "patched"
    UNCHANGED = "unchanged"  # already in its final form
    UNRECOGNIZED = "unrecognized"  # left untouched, needs manual wiring
    MISSING = "missing"


class FileReport(BaseModel):
    """Per-file outcome of a plugin run."""

    platform: Platform
    path: str = Field(description="Path relative to the project root")
    status: FileStatus
    dialect: str | None = Field(default=None)
    written: bool = Field(default=False, description="Whether new contents were persisted")


class PluginResult(BaseModel):
    """Result of a complete plugin run."""

    success: bool = True
    skipped: bool = False
    files: list[FileReport] = Field(default_factory=list)
    diagnostics: list[Diagnostic] = Field(default_factory=list)

    def report_for(self, path: str) -> FileReport | None:
        """Get a file report by relative path."""
        for report in self.files:
            if report.path == path:
                return report
        return None

    @property
    def warnings(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.severity == "warning"]

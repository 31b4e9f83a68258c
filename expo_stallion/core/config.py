"""
Configuration management for expo-stallion.

Provides centralized, type-safe configuration with environment variable overrides
so that credentials can be provisioned the same way CI secrets are.
"""

from __future__ import annotations

import os
from functools import lru_cache
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field, SecretStr

# Load .env file if it exists (looks in cwd and parent directories)
load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).lower() in ("1", "true", "yes")


class PatchConfig(BaseModel):
    """Which native platforms get patched and how."""

    android_enabled: bool = Field(default=True, description="Patch the Android project")
    ios_enabled: bool = Field(default=True, description="Patch the iOS project")
    dry_run: bool = Field(default=False, description="Compute patches without writing files")


class Config(BaseModel):
    """Root configuration for expo-stallion."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Logging level"
    )
    json_logs: bool = Field(default=False, description="Force JSON log output")
    patch: PatchConfig = Field(default_factory=PatchConfig)

    # Stallion credentials (loaded from environment)
    project_id: str | None = Field(default=None, description="Stallion project id")
    app_token: SecretStr | None = Field(default=None, description="Stallion app token (spb_...)")

    model_config = {"extra": "ignore"}

    @classmethod
    def from_env(cls) -> Config:
        """Create configuration from environment variables."""
        app_token = os.environ.get("STALLION_APP_TOKEN", "")
        return cls(
            log_level=os.environ.get("STALLION_LOG_LEVEL", "INFO").upper(),  # type: ignore
            json_logs=_env_flag("STALLION_JSON_LOGS", "false"),
            patch=PatchConfig(
                android_enabled=_env_flag("STALLION_PATCH_ANDROID", "true"),
                ios_enabled=_env_flag("STALLION_PATCH_IOS", "true"),
                dry_run=_env_flag("STALLION_DRY_RUN", "false"),
            ),
            project_id=os.environ.get("STALLION_PROJECT_ID") or None,
            app_token=SecretStr(app_token) if app_token else None,
        )


@lru_cache(maxsize=1)
def get_config() -> Config:
    """Get cached configuration instance."""
    return Config.from_env()

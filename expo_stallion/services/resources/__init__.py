"""Resource injection service."""

from .service import (
    APP_TOKEN_KEY,
    PROJECT_ID_KEY,
    ResourceService,
    upsert_plist_keys,
    upsert_string_resources,
)

__all__ = [
    "APP_TOKEN_KEY",
    "PROJECT_ID_KEY",
    "ResourceService",
    "upsert_plist_keys",
    "upsert_string_resources",
]

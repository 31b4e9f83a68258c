"""Project layout service."""

from .service import ProjectLayout, platform_for

__all__ = ["ProjectLayout", "platform_for"]

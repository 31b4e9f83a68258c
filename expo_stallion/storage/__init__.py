"""Project file access for expo-stallion."""

from .interface import ProjectStore
from .local import LocalProjectStore

__all__ = ["ProjectStore", "LocalProjectStore"]

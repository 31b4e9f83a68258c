"""Orchestration module for expo-stallion."""

from .pipeline import run_plugin, validate_props

__all__ = [
    "run_plugin",
    "validate_props",
]

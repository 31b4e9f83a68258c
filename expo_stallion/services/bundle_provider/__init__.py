"""Bundle provider service."""

from .service import BundleProviderService

__all__ = ["BundleProviderService"]

"""Services package for expo-stallion."""

from .bundle_provider import BundleProviderService
from .layout import ProjectLayout
from .resources import ResourceService

__all__ = [
    "BundleProviderService",
    "ProjectLayout",
    "ResourceService",
]

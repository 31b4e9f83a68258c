"""Pure text-patching engine for native entry files."""

from .classifier import classify_android, classify_ios
from .dispatcher import patch_app_delegate, patch_main_application, patch_source
from .guard import is_android_patched, is_ios_patched, is_patched
from .imports import inject_import

__all__ = [
    "classify_android",
    "classify_ios",
    "patch_app_delegate",
    "patch_main_application",
    "patch_source",
    "is_android_patched",
    "is_ios_patched",
    "is_patched",
    "inject_import",
]

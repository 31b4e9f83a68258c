"""
Idempotency guard.

A file counts as patched only when the debug/release conditional and the
Stallion accessor appear together as one construct. The accessor alone is not
enough: older patches called it unconditionally.
"""

from __future__ import annotations

import re

from ..models.patch import Platform

# Kotlin block/expression form, Java block form and the host-builder argument.
ANDROID_CANONICAL_PATTERN = re.compile(
    r"if\s*\(\s*BuildConfig\.DEBUG\s*\)\s*"
    r"\{?\s*(?:return\s+)?null\s*;?\s*\}?\s*"
    r"else\s*\{?\s*(?:return\s+)?Stallion\.getJSBundleFile\s*\("
)

# Swift and Objective-C: dev bundle under #if DEBUG, Stallion under #else.
IOS_CANONICAL_PATTERN = re.compile(
    r"#if(?:def)?[ \t]+DEBUG\b"
    r"(?:(?!#endif)[\s\S])*?\.expo/\.virtual-metro-entry"
    r"(?:(?!#endif)[\s\S])*?#else\s+"
    r"return\s+(?:StallionModule\.getBundleURL\s*\(\s*\)|\[\s*StallionModule\s+getBundleURL\s*\])"
)


def is_android_patched(text: str) -> bool:
    return ANDROID_CANONICAL_PATTERN.search(text) is not None


def is_ios_patched(text: str) -> bool:
    return IOS_CANONICAL_PATTERN.search(text) is not None


def is_patched(text: str, platform: Platform) -> bool:
    """Check whether ``text`` already holds the final Stallion hook for ``platform``."""
    if platform is Platform.ANDROID:
        return is_android_patched(text)
    return is_ios_patched(text)

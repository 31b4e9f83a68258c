"""
Dialect dispatcher.

Runs guard -> classify -> exactly one patcher for a single entry file and owns
the warning raised when a file cannot be patched. Returns diagnostics as data;
nothing here logs or touches the filesystem.
"""

from __future__ import annotations

from collections.abc import Callable

from ..models.patch import (
    AndroidDialect,
    Diagnostic,
    IOSDialect,
    PatchResult,
    Platform,
)
from .android import (
    patch_expo_react_host,
    patch_java_main_application,
    patch_kotlin_main_application,
    patch_react_host,
)
from .classifier import classify_android, classify_ios
from .guard import is_android_patched, is_ios_patched
from .ios import patch_objc_app_delegate, patch_swift_app_delegate

Patcher = Callable[[str], str]

ANDROID_PATCHERS: dict[AndroidDialect, Patcher] = {
    AndroidDialect.EXPO_REACT_HOST_WRAPPER: patch_expo_react_host,
    AndroidDialect.REACT_HOST: patch_react_host,
    AndroidDialect.KOTLIN_HOST: patch_kotlin_main_application,
    AndroidDialect.JAVA_HOST: patch_java_main_application,
}

IOS_PATCHERS: dict[IOSDialect, Patcher] = {
    IOSDialect.SWIFT_DELEGATE: patch_swift_app_delegate,
    IOSDialect.OBJC_DELEGATE: patch_objc_app_delegate,
}

UNRECOGNIZED_MAIN_APPLICATION = (
    "Could not detect MainApplication style. "
    "Please manually configure the Stallion bundle provider."
)
UNRECOGNIZED_APP_DELEGATE = (
    "Could not detect AppDelegate structure. "
    "Please manually configure the Stallion bundle URL."
)
AMBIGUOUS_APP_DELEGATE = (
    "Could not definitively detect AppDelegate language; patched as {language}."
)
NO_ANCHOR = (
    "Detected {dialect} but found no place to install the Stallion hook. "
    "Please configure it manually."
)


def _warning(file_name: str, message: str) -> Diagnostic:
    return Diagnostic(severity="warning", file_name=file_name, message=message)


def _result(
    text: str,
    patched: str,
    file_name: str,
    platform: Platform,
    dialect: AndroidDialect | IOSDialect,
    diagnostics: list[Diagnostic] | None = None,
    already_patched: bool = False,
) -> PatchResult:
    return PatchResult(
        file_name=file_name,
        platform=platform,
        dialect=dialect,
        contents=patched,
        changed=patched != text,
        already_patched=already_patched,
        diagnostics=diagnostics or [],
    )


def patch_main_application(text: str, file_name: str = "MainApplication") -> PatchResult:
    """Install the Stallion bundle provider into an Android MainApplication source.

    Args:
        text: Current file contents.
        file_name: Name used in diagnostics.

    Returns:
        PatchResult whose ``contents`` is the patched text, or ``text`` itself
        when the file is already patched or cannot be patched.
    """
    dialect = classify_android(text)
    if is_android_patched(text):
        return _result(text, text, file_name, Platform.ANDROID, dialect, already_patched=True)

    if dialect is AndroidDialect.UNRECOGNIZED:
        warning = _warning(file_name, UNRECOGNIZED_MAIN_APPLICATION)
        return _result(text, text, file_name, Platform.ANDROID, dialect, [warning])

    patched = ANDROID_PATCHERS[dialect](text)
    if patched == text:
        warning = _warning(file_name, NO_ANCHOR.format(dialect=dialect.value))
        return _result(text, text, file_name, Platform.ANDROID, dialect, [warning])
    return _result(text, patched, file_name, Platform.ANDROID, dialect)


def patch_app_delegate(text: str, file_name: str = "AppDelegate") -> PatchResult:
    """Install the Stallion bundle URL into an iOS AppDelegate source.

    When the language cannot be classified, the Swift patch is attempted first
    and the Objective-C patch only if Swift changed nothing.
    """
    dialect = classify_ios(text)
    if is_ios_patched(text):
        return _result(text, text, file_name, Platform.IOS, dialect, already_patched=True)

    if dialect is IOSDialect.UNRECOGNIZED:
        for language, patcher in (("Swift", patch_swift_app_delegate), ("Objective-C", patch_objc_app_delegate)):
            patched = patcher(text)
            if patched != text:
                warning = _warning(file_name, AMBIGUOUS_APP_DELEGATE.format(language=language))
                return _result(text, patched, file_name, Platform.IOS, dialect, [warning])
        warning = _warning(file_name, UNRECOGNIZED_APP_DELEGATE)
        return _result(text, text, file_name, Platform.IOS, dialect, [warning])

    patched = IOS_PATCHERS[dialect](text)
    if patched == text:
        warning = _warning(file_name, NO_ANCHOR.format(dialect=dialect.value))
        return _result(text, text, file_name, Platform.IOS, dialect, [warning])
    return _result(text, patched, file_name, Platform.IOS, dialect)


def patch_source(text: str, platform: Platform, file_name: str) -> PatchResult:
    """Dispatch on platform."""
    if platform is Platform.ANDROID:
        return patch_main_application(text, file_name)
    return patch_app_delegate(text, file_name)

"""
Dialect classification for native entry files.

Dialects overlap lexically (the Expo wrapper form also mentions ReactHost and
declares a class with overrides), so classification walks an ordered precedence
table and returns the first dialect whose predicate holds. Only substring checks
are used; nothing is parsed.

Android precedence:
    1. EXPO_REACT_HOST_WRAPPER - ReactNativeHostWrapper + DefaultReactNativeHost
       + getJSMainModuleName
    2. REACT_HOST - ReactHost or getDefaultReactHost
    3. KOTLIN_HOST - class MainApplication with ``override fun``
    4. JAVA_HOST - class MainApplication without ``override fun``

iOS precedence:
    1. SWIFT_DELEGATE - ``import`` without ``#import``, ``@objc`` with ``func``,
       or ``func`` without Objective-C markers
    2. OBJC_DELEGATE - ``@implementation``, ``#import`` or ``@interface``
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

from ..models.patch import AndroidDialect, IOSDialect

D = TypeVar("D")

Predicate = Callable[[str], bool]


def _is_expo_react_host_wrapper(text: str) -> bool:
    return (
        "ReactNativeHostWrapper" in text
        and "DefaultReactNativeHost" in text
        and "getJSMainModuleName" in text
    )


def _is_react_host(text: str) -> bool:
    return "ReactHost" in text or "getDefaultReactHost" in text


def _is_kotlin_host(text: str) -> bool:
    return "class MainApplication" in text and "override fun" in text


def _is_java_host(text: str) -> bool:
    return "class MainApplication" in text and "override fun" not in text


def _is_swift_delegate(text: str) -> bool:
    objc_include = "#import" in text
    return (
        ("import " in text and not objc_include)
        or ("@objc" in text and "func" in text)
        or ("func " in text and "@implementation" not in text and not objc_include)
    )


def _is_objc_delegate(text: str) -> bool:
    return "@implementation" in text or "#import" in text or "@interface" in text


ANDROID_PRECEDENCE: tuple[tuple[AndroidDialect, Predicate], ...] = (
    (AndroidDialect.EXPO_REACT_HOST_WRAPPER, _is_expo_react_host_wrapper),
    (AndroidDialect.REACT_HOST, _is_react_host),
    (AndroidDialect.KOTLIN_HOST, _is_kotlin_host),
    (AndroidDialect.JAVA_HOST, _is_java_host),
)

IOS_PRECEDENCE: tuple[tuple[IOSDialect, Predicate], ...] = (
    (IOSDialect.SWIFT_DELEGATE, _is_swift_delegate),
    (IOSDialect.OBJC_DELEGATE, _is_objc_delegate),
)


def classify(text: str, precedence: tuple[tuple[D, Predicate], ...], fallback: D) -> D:
    """Return the first dialect in ``precedence`` whose predicate holds."""
    for dialect, predicate in precedence:
        if predicate(text):
            return dialect
    return fallback


def classify_android(text: str) -> AndroidDialect:
    """Classify a MainApplication source."""
    return classify(text, ANDROID_PRECEDENCE, AndroidDialect.UNRECOGNIZED)


def classify_ios(text: str) -> IOSDialect:
    """Classify an AppDelegate source."""
    return classify(text, IOS_PRECEDENCE, IOSDialect.UNRECOGNIZED)

"""
Import injection for native entry files.

Each language has its own import-line pattern. A missing import is inserted right
after the last existing import (by offset) or, when the file has none, at the
very start of the file.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

# Kotlin and Swift: statement ends at the line end
LINE_IMPORT_PATTERN = re.compile(r"^[ \t]*import[ \t]+[^\n]+\n", re.MULTILINE)
# Java: statement ends with a semicolon
JAVA_IMPORT_PATTERN = re.compile(r"^[ \t]*import[ \t]+[^\n]+;[ \t]*\r?\n", re.MULTILINE)
# Objective-C: preprocessor include
OBJC_IMPORT_PATTERN = re.compile(r"^[ \t]*#import[ \t]+[^\n]+\n", re.MULTILINE)

KOTLIN_STALLION_IMPORT = "import com.stallion.Stallion"
JAVA_STALLION_IMPORT = "import com.stallion.Stallion;"
SWIFT_STALLION_IMPORT = "import react_native_stallion"
SWIFT_REACT_IMPORT = "import React"
OBJC_STALLION_IMPORT = "#import <react_native_stallion/StallionModule.h>"
OBJC_STALLION_IMPORT_ALIASES = ('#import "StallionModule.h"',)
OBJC_BUNDLE_PROVIDER_IMPORT = "#import <React/RCTBundleURLProvider.h>"
OBJC_BUNDLE_PROVIDER_IMPORT_ALIASES = ('#import "RCTBundleURLProvider.h"',)


def has_line(text: str, statement: str) -> bool:
    """Check whether ``statement`` appears verbatim as a whole line."""
    pattern = rf"^[ \t]*{re.escape(statement)}[ \t]*\r?$"
    return re.search(pattern, text, re.MULTILINE) is not None


def _line_ending(text: str) -> str:
    first = text.find("\n")
    return "\r\n" if first > 0 and text[first - 1] == "\r" else "\n"


def inject_import(
    text: str,
    statement: str,
    pattern: re.Pattern[str],
    aliases: Iterable[str] = (),
) -> str:
    """Ensure ``statement`` is imported exactly once.

    Args:
        text: File contents.
        statement: Import line to add, without trailing newline.
        pattern: Language-specific pattern matching one existing import line.
        aliases: Equivalent spellings that also satisfy the import.

    Returns:
        The contents with the import present.
    """
    if any(has_line(text, candidate) for candidate in (statement, *aliases)):
        return text

    last = None
    for last in pattern.finditer(text):
        pass

    if last is None:
        return statement + _line_ending(text) + text
    line = statement + ("\r\n" if last.group().endswith("\r\n") else "\n")
    return text[: last.end()] + line + text[last.end() :]


def inject_imports(
    text: str,
    statements: Iterable[tuple[str, tuple[str, ...]]],
    pattern: re.Pattern[str],
) -> str:
    """Apply :func:`inject_import` for several ``(statement, aliases)`` pairs in order."""
    for statement, aliases in statements:
        text = inject_import(text, statement, pattern, aliases)
    return text

"""
AppDelegate patchers for Swift and Objective-C.

Debug builds keep loading the Expo dev-server entry; release builds ask Stallion
for the bundle URL.
"""

from __future__ import annotations

import re

from .guard import is_ios_patched
from .imports import (
    LINE_IMPORT_PATTERN,
    OBJC_BUNDLE_PROVIDER_IMPORT,
    OBJC_BUNDLE_PROVIDER_IMPORT_ALIASES,
    OBJC_IMPORT_PATTERN,
    OBJC_STALLION_IMPORT,
    OBJC_STALLION_IMPORT_ALIASES,
    SWIFT_REACT_IMPORT,
    SWIFT_STALLION_IMPORT,
    inject_imports,
)
from .scanner import (
    body_indent,
    find_declaration,
    find_matching,
    insert_before,
    insert_before_closing,
    replace_declaration,
)

SWIFT_HOOK = """override func bundleURL() -> URL? {
  #if DEBUG
    return RCTBundleURLProvider.sharedSettings()
      .jsBundleURL(forBundleRoot: ".expo/.virtual-metro-entry")
  #else
    return StallionModule.getBundleURL()
  #endif
}"""

OBJC_HOOK = """- (NSURL *)bundleURL {
#if DEBUG
  return [[RCTBundleURLProvider sharedSettings]
    jsBundleURLForBundleRoot:@".expo/.virtual-metro-entry"];
#else
  return [StallionModule getBundleURL];
#endif
}"""

SWIFT_IMPORTS = ((SWIFT_STALLION_IMPORT, ()), (SWIFT_REACT_IMPORT, ()))
OBJC_IMPORTS = (
    (OBJC_STALLION_IMPORT, OBJC_STALLION_IMPORT_ALIASES),
    (OBJC_BUNDLE_PROVIDER_IMPORT, OBJC_BUNDLE_PROVIDER_IMPORT_ALIASES),
)

SWIFT_HOOK_PATTERN = re.compile(
    r"(?:override\s+)?(?:(?:public|open)\s+)?func\s+bundleURL\s*\(\s*\)\s*->\s*URL\??"
)
SWIFT_LAUNCH_PATTERN = re.compile(
    r"(?:(?:public|open|override|@objc)\s+)*func\s+application\s*\(\s*_\s+application\s*:\s*UIApplication\s*,"
    r"\s*didFinishLaunchingWithOptions\b"
)
SWIFT_DELEGATE_CLASS_PATTERN = re.compile(r"\bclass\s+\w*AppDelegate\b[^{]*\{")

OBJC_HOOK_PATTERN = re.compile(r"-\s*\(\s*NSURL\s*\*\s*\)\s*bundleURL\b")
OBJC_LAUNCH_PATTERN = re.compile(
    r"-\s*\(\s*BOOL\s*\)\s*application\s*:\s*\(\s*UIApplication\s*\*\s*\)\s*\w+\s+"
    r"didFinishLaunchingWithOptions\s*:"
)
OBJC_IMPLEMENTATION_PATTERN = re.compile(r"@implementation\s+\w*AppDelegate\b")
OBJC_END_PATTERN = re.compile(r"^[ \t]*@end\b", re.MULTILINE)


def _install_swift_hook(text: str) -> str | None:
    existing = find_declaration(text, SWIFT_HOOK_PATTERN)
    if existing:
        return replace_declaration(text, existing, SWIFT_HOOK)

    launch = SWIFT_LAUNCH_PATTERN.search(text)
    if launch:
        return insert_before(text, launch.start(), SWIFT_HOOK)

    delegate = SWIFT_DELEGATE_CLASS_PATTERN.search(text)
    if delegate:
        open_brace = delegate.end() - 1
        close = find_matching(text, open_brace)
        if close is not None:
            indent = body_indent(text, open_brace, close)
            return insert_before_closing(text, close, SWIFT_HOOK, indent)
    return None


def _install_objc_hook(text: str) -> str | None:
    existing = find_declaration(text, OBJC_HOOK_PATTERN)
    if existing:
        return replace_declaration(text, existing, OBJC_HOOK)

    launch = OBJC_LAUNCH_PATTERN.search(text)
    if launch:
        return insert_before(text, launch.start(), OBJC_HOOK)

    implementation = OBJC_IMPLEMENTATION_PATTERN.search(text)
    if implementation:
        end = OBJC_END_PATTERN.search(text, implementation.end())
        if end:
            return insert_before(text, end.start(), OBJC_HOOK)
    return None


def patch_swift_app_delegate(text: str) -> str:
    """Patch a Swift AppDelegate."""
    if is_ios_patched(text):
        return text
    imported = inject_imports(text, SWIFT_IMPORTS, LINE_IMPORT_PATTERN)
    patched = _install_swift_hook(imported)
    return text if patched is None else patched


def patch_objc_app_delegate(text: str) -> str:
    """Patch an Objective-C AppDelegate."""
    if is_ios_patched(text):
        return text
    imported = inject_imports(text, OBJC_IMPORTS, OBJC_IMPORT_PATTERN)
    patched = _install_objc_hook(imported)
    return text if patched is None else patched

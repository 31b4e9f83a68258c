"""
MainApplication patchers, one per Android dialect.

Every patcher is total: it returns the patched text, or the input unchanged when
the file has no usable anchor. Imports are only kept when the hook itself was
installed, so a failed patch never leaves a half-edited file.
"""

from __future__ import annotations

import re
from collections.abc import Callable

from .guard import is_android_patched
from .imports import (
    JAVA_IMPORT_PATTERN,
    JAVA_STALLION_IMPORT,
    KOTLIN_STALLION_IMPORT,
    LINE_IMPORT_PATTERN,
    inject_import,
)
from .scanner import (
    body_indent,
    declaration_end,
    expression_end,
    find_declaration,
    find_matching,
    indent_block,
    insert_after_line,
    insert_before,
    insert_before_closing,
    line_indent,
    replace_declaration,
    skip_whitespace,
)

KOTLIN_HOOK = """override fun getJSBundleFile(): String? {
  return if (BuildConfig.DEBUG) {
    null
  } else {
    Stallion.getJSBundleFile(applicationContext)
  }
}"""

JAVA_HOOK = """@Override
protected String getJSBundleFile() {
  if (BuildConfig.DEBUG) {
    return null;
  } else {
    return Stallion.getJSBundleFile(getApplicationContext());
  }
}"""

HOST_BUNDLE_ARGUMENT = "jsBundleFilePath"
HOST_BUNDLE_VALUE = "if (BuildConfig.DEBUG) null else Stallion.getJSBundleFile(applicationContext)"

KOTLIN_HOOK_PATTERN = re.compile(
    r"(?:(?:public|protected|internal)\s+)?override\s+fun\s+getJSBundleFile\s*\(\s*\)(?:\s*:\s*String\??)?"
)
JAVA_HOOK_PATTERN = re.compile(
    r"(?:@\w+\s+)*(?:(?:public|protected|private)\s+)?(?:@\w+\s+)?String\s+getJSBundleFile\s*\(\s*\)"
)
JS_MAIN_MODULE_PATTERN = re.compile(
    r"override\s+fun\s+getJSMainModuleName\s*\(\s*\)(?:\s*:\s*String\??)?"
)
DEFAULT_HOST_OBJECT_PATTERN = re.compile(r"object\s*:\s*DefaultReactNativeHost\s*\(")
DEFAULT_REACT_HOST_CALL_PATTERN = re.compile(r"\bgetDefaultReactHost\s*\(")
REACT_HOST_CALL_PATTERN = re.compile(r"\bReactHost\s*\(")
BUNDLE_ARGUMENT_PATTERN = re.compile(rf"\b{HOST_BUNDLE_ARGUMENT}\s*[:=]\s*")
KOTLIN_ON_CREATE_PATTERN = re.compile(r"(?:(?:public|protected)\s+)?override\s+fun\s+onCreate\s*\(")
JAVA_ON_CREATE_PATTERN = re.compile(
    r"(?:@Override\s+)?(?:(?:public|protected)\s+)?void\s+onCreate\s*\("
)
MAIN_APPLICATION_CLASS_PATTERN = re.compile(r"\bclass\s+MainApplication\b[^{]*\{")


def insert_before_class_end(text: str, hook: str) -> str | None:
    """Insert ``hook`` as the last member of ``class MainApplication``."""
    match = MAIN_APPLICATION_CLASS_PATTERN.search(text)
    if not match:
        return None
    open_brace = match.end() - 1
    close = find_matching(text, open_brace)
    if close is None:
        return None
    return insert_before_closing(text, close, hook, body_indent(text, open_brace, close))


def _install_class_hook(
    text: str,
    hook: str,
    hook_pattern: re.Pattern[str],
    on_create_pattern: re.Pattern[str],
) -> str | None:
    existing = find_declaration(text, hook_pattern)
    if existing:
        return replace_declaration(text, existing, hook)

    on_create = on_create_pattern.search(text)
    if on_create:
        return insert_before(text, on_create.start(), hook)

    return insert_before_class_end(text, hook)


def _install_wrapper_hook(text: str) -> str | None:
    existing = find_declaration(text, KOTLIN_HOOK_PATTERN)
    if existing:
        return replace_declaration(text, existing, KOTLIN_HOOK)

    accessor = JS_MAIN_MODULE_PATTERN.search(text)
    if accessor:
        end = declaration_end(text, accessor.end()) or accessor.end()
        return insert_after_line(text, end, KOTLIN_HOOK, line_indent(text, accessor.start()))

    host_object = DEFAULT_HOST_OBJECT_PATTERN.search(text)
    if host_object:
        close_paren = find_matching(text, host_object.end() - 1)
        if close_paren is None:
            return None
        brace = skip_whitespace(text, close_paren + 1)
        if brace >= len(text) or text[brace] != "{":
            return None
        close_brace = find_matching(text, brace)
        if close_brace is None:
            return None
        indent = body_indent(text, brace, close_brace)
        return text[: brace + 1] + "\n" + indent_block(KOTLIN_HOOK, indent) + "\n" + text[brace + 1 :]

    return None


def _set_call_argument(text: str, call: re.Match[str]) -> str | None:
    """Set ``jsBundleFilePath`` on the call whose ``(`` ends ``call``."""
    open_paren = call.end() - 1
    close_paren = find_matching(text, open_paren)
    if close_paren is None:
        return None

    argument = BUNDLE_ARGUMENT_PATTERN.search(text, open_paren, close_paren)
    if argument:
        value_start = argument.end()
        value_end = expression_end(text, value_start, stops=",)")
        while value_end > value_start and text[value_end - 1] in " \t\r":
            value_end -= 1
        return text[:value_start] + HOST_BUNDLE_VALUE + text[value_end:]

    leading = f"{HOST_BUNDLE_ARGUMENT} = {HOST_BUNDLE_VALUE}"
    after = open_paren + 1
    first = skip_whitespace(text, after)
    if "\n" in text[after:first]:
        # Arguments laid out one per line: match the first argument's indent.
        indent = line_indent(text, first) if first < close_paren else line_indent(text, open_paren) + "    "
        return text[:after] + "\n" + indent + leading + "," + text[after:]
    if first == close_paren:
        return text[:after] + leading + text[close_paren:]
    return text[:after] + leading + ", " + text[first:]


def _install_host_argument(text: str) -> str | None:
    call = DEFAULT_REACT_HOST_CALL_PATTERN.search(text) or REACT_HOST_CALL_PATTERN.search(text)
    if not call:
        return None
    return _set_call_argument(text, call)


def _patch(
    text: str,
    import_line: str,
    import_pattern: re.Pattern[str],
    install: Callable[[str], str | None],
) -> str:
    if is_android_patched(text):
        return text
    imported = inject_import(text, import_line, import_pattern)
    patched = install(imported)
    return text if patched is None else patched


def patch_expo_react_host(text: str) -> str:
    """Patch Expo's ReactNativeHostWrapper + DefaultReactNativeHost form."""
    return _patch(text, KOTLIN_STALLION_IMPORT, LINE_IMPORT_PATTERN, _install_wrapper_hook)


def patch_react_host(text: str) -> str:
    """Patch the ``jsBundleFilePath`` argument of the ReactHost builder call."""
    return _patch(text, KOTLIN_STALLION_IMPORT, LINE_IMPORT_PATTERN, _install_host_argument)


def patch_kotlin_main_application(text: str) -> str:
    """Patch a Kotlin MainApplication class."""
    return _patch(
        text,
        KOTLIN_STALLION_IMPORT,
        LINE_IMPORT_PATTERN,
        lambda t: _install_class_hook(t, KOTLIN_HOOK, KOTLIN_HOOK_PATTERN, KOTLIN_ON_CREATE_PATTERN),
    )


def patch_java_main_application(text: str) -> str:
    """Patch a Java MainApplication class."""
    return _patch(
        text,
        JAVA_STALLION_IMPORT,
        JAVA_IMPORT_PATTERN,
        lambda t: _install_class_hook(t, JAVA_HOOK, JAVA_HOOK_PATTERN, JAVA_ON_CREATE_PATTERN),
    )

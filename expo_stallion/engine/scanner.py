"""
Delimiter-aware text scanning.

Method bodies in the entry files nest braces and parentheses, so the end of a
declaration is found by counting depth from its opening delimiter instead of
with a single regular expression. String literals and comments are skipped so
that braces inside them do not count.
"""

from __future__ import annotations

import re

_PAIRS = {"{": "}", "(": ")", "[": "]"}

INDENT_UNIT = "  "


def _skip_literal(text: str, i: int) -> int:
    """Return the index just past a literal or comment starting at ``i``.

    Returns ``i`` itself when no literal or comment starts there.
    """
    ch = text[i]
    nxt = text[i + 1] if i + 1 < len(text) else ""

    if ch == "/" and nxt == "/":
        end = text.find("\n", i)
        return len(text) if end == -1 else end
    if ch == "/" and nxt == "*":
        end = text.find("*/", i + 2)
        return len(text) if end == -1 else end + 2

    if ch == '"':
        if text.startswith('"""', i):
            end = text.find('"""', i + 3)
            return len(text) if end == -1 else end + 3
        j = i + 1
        while j < len(text):
            c = text[j]
            if c == "\\":
                j += 2
                continue
            if c == '"' or c == "\n":
                return j + 1
            j += 1
        return len(text)

    if ch == "'":
        # Character literals are short; anything else is a stray apostrophe.
        j = i + 1
        while j < len(text) and j < i + 8:
            c = text[j]
            if c == "\\":
                j += 2
                continue
            if c == "'":
                return j + 1
            if c == "\n":
                break
            j += 1
        return i + 1

    return i


def find_matching(text: str, open_index: int) -> int | None:
    """Find the delimiter that closes the one at ``open_index``.

    Args:
        text: Source text.
        open_index: Index of a ``{``, ``(`` or ``[``.

    Returns:
        Index of the matching closing delimiter, or None when the text is
        unbalanced or ``open_index`` is not an opening delimiter.
    """
    if open_index < 0 or open_index >= len(text):
        return None
    opener = text[open_index]
    closer = _PAIRS.get(opener)
    if closer is None:
        return None

    depth = 0
    i = open_index
    while i < len(text):
        skipped = _skip_literal(text, i)
        if skipped != i:
            i = skipped
            continue
        c = text[i]
        if c == opener:
            depth += 1
        elif c == closer:
            depth -= 1
            if depth == 0:
                return i
        i += 1
    return None


def skip_whitespace(text: str, index: int) -> int:
    while index < len(text) and text[index].isspace():
        index += 1
    return index


def expression_end(text: str, start: int, stops: str = "") -> int:
    """Find where an expression starting at ``start`` ends.

    The expression ends at a newline or at one of ``stops`` found at depth
    zero; nested delimiters are skipped as a whole.
    """
    i = start
    while i < len(text):
        if text.startswith("//", i):
            return i
        skipped = _skip_literal(text, i)
        if skipped != i:
            i = skipped
            continue
        c = text[i]
        if c in _PAIRS:
            close = find_matching(text, i)
            if close is None:
                return len(text)
            i = close + 1
            continue
        if c == "\n" or c in stops:
            return i
        i += 1
    return len(text)


def declaration_end(text: str, signature_end: int) -> int | None:
    """Find the end of a declaration whose signature ends at ``signature_end``.

    Handles block bodies (``{ ... }``) and single-expression bodies
    (``= expr``). Returns None when neither follows the signature or the body
    never closes.
    """
    j = skip_whitespace(text, signature_end)
    if j >= len(text):
        return None
    if text[j] == "{":
        close = find_matching(text, j)
        return None if close is None else close + 1
    if text[j] == "=":
        # The expression may start on the line after ``=``.
        value = skip_whitespace(text, j + 1)
        end = expression_end(text, value)
        return end if end > value else None
    return None


def find_declaration(text: str, pattern: re.Pattern[str]) -> tuple[int, int] | None:
    """Locate the first declaration matching ``pattern`` that has a body.

    Returns:
        ``(start, end)`` of the declaration, from its first modifier through its
        closing delimiter, or None.
    """
    for match in pattern.finditer(text):
        end = declaration_end(text, match.end())
        if end is not None:
            return match.start(), end
    return None


def replace_declaration(text: str, span: tuple[int, int], block: str) -> str:
    """Replace ``text[start:end]`` with ``block``, keeping the line's indentation."""
    start, end = span
    indent = line_indent(text, start)
    return text[:start] + indent_block(block, indent, skip_first=True) + text[end:]


def line_start(text: str, index: int) -> int:
    return text.rfind("\n", 0, index) + 1


def line_indent(text: str, index: int) -> str:
    """Leading whitespace of the line containing ``index``."""
    start = line_start(text, index)
    end = start
    while end < len(text) and text[end] in " \t":
        end += 1
    return text[start:end]


def body_indent(text: str, open_index: int, close_index: int) -> str:
    """Indentation used for members inside ``text[open_index:close_index]``."""
    base = line_indent(text, open_index)
    for line in text[open_index + 1 : close_index].splitlines()[1:]:
        if line.strip():
            indent = line[: len(line) - len(line.lstrip(" \t"))]
            if len(indent) > len(base):
                return indent
            break
    return base + INDENT_UNIT


def indent_block(block: str, indent: str, skip_first: bool = False) -> str:
    """Prefix every non-empty line of ``block`` with ``indent``."""
    lines = block.split("\n")
    out = []
    for n, line in enumerate(lines):
        if not line or (skip_first and n == 0):
            out.append(line)
        else:
            out.append(indent + line)
    return "\n".join(out)


def insert_before(text: str, index: int, block: str) -> str:
    """Insert ``block`` as its own paragraph ahead of the line holding ``index``."""
    start = line_start(text, index)
    indent = line_indent(text, index)
    if text[start:index].strip():
        return text[:index] + "\n" + indent_block(block, indent) + "\n" + indent + text[index:]
    return text[:start] + indent_block(block, indent) + "\n\n" + text[start:]


def insert_before_closing(text: str, close_index: int, block: str, indent: str) -> str:
    """Insert ``block`` as the last member before the delimiter at ``close_index``."""
    start = line_start(text, close_index)
    rendered = indent_block(block, indent)
    if text[start:close_index].strip():
        return text[:close_index] + "\n" + rendered + "\n" + text[close_index:]
    return text[:start] + "\n" + rendered + "\n" + text[start:]


def insert_after_line(text: str, index: int, block: str, indent: str) -> str:
    """Insert ``block`` after the line holding ``index``, separated by a blank line."""
    eol = text.find("\n", index)
    rendered = indent_block(block, indent)
    if eol == -1:
        return text + "\n\n" + rendered + "\n"
    return text[: eol + 1] + "\n" + rendered + "\n" + text[eol + 1 :]

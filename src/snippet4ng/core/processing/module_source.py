from __future__ import annotations

"""
TypeScript Module Source Editor.

Structural editing of Angular-generated sources. A lightweight scanner marks
which characters are code (as opposed to string literals or comments) so
brackets can be matched reliably, which lets the '@NgModule' metadata and its
'imports' array be located and rewritten as lists of entries instead of via
pattern substitution.
"""

import logging
import re
from typing import List, Optional, Tuple

from snippet4ng.domain.errors import ModuleSourceError

logger = logging.getLogger(__name__)

Span = Tuple[int, int]

_OPENERS = {"(": ")", "[": "]", "{": "}"}
_CLOSERS = {")", "]", "}"}

_NGMODULE_DECORATOR = re.compile(r"@NgModule\s*\(\s*\{")
_EXPORTED_CLASS = re.compile(r"export class [^\s{]*")
_IDENT_CHAR = re.compile(r"[\w$]")

# -----------------------------------------------------------------------------
# SCANNER
# -----------------------------------------------------------------------------

def code_mask(source: str, mask_strings: bool = True) -> List[bool]:
    """
    Flag every character that belongs to code.

    String literals (single, double and template quoted) and comments are
    masked out, quotes and comment markers included.

    Args:
        source: TypeScript source text.
        mask_strings: If False, only comments are masked out.

    Returns:
        List[bool]: One flag per character of 'source'.
    """
    mask = [True] * len(source)
    i = 0
    n = len(source)
    while i < n:
        ch = source[i]
        nxt = source[i + 1] if i + 1 < n else ""

        if ch == "/" and nxt == "/":
            end = source.find("\n", i)
            end = n if end == -1 else end
        elif ch == "/" and nxt == "*":
            end = source.find("*/", i + 2)
            end = n if end == -1 else end + 2
        elif ch in ("'", '"', "`"):
            end = i + 1
            while end < n and source[end] != ch:
                end += 2 if source[end] == "\\" else 1
            end = min(end + 1, n)
            if not mask_strings:
                i = end
                continue
        else:
            i += 1
            continue

        for j in range(i, end):
            mask[j] = False
        i = end
    return mask


def find_matching(source: str, open_index: int, mask: Optional[List[bool]] = None) -> int:
    """
    Locate the bracket closing the one at 'open_index'.

    Raises:
        ModuleSourceError: If the brackets are unbalanced.
    """
    mask = mask if mask is not None else code_mask(source)
    stack: List[str] = []
    for i in range(open_index, len(source)):
        if not mask[i]:
            continue
        ch = source[i]
        if ch in _OPENERS:
            stack.append(_OPENERS[ch])
        elif ch in _CLOSERS:
            if not stack or stack.pop() != ch:
                break
            if not stack:
                return i
    raise ModuleSourceError(f"Unbalanced bracket at offset {open_index}.")


def split_top_level(text: str) -> List[str]:
    """
    Split a comma separated list without breaking nested expressions.

    'A, B.forRoot([x, y])' yields ['A', 'B.forRoot([x, y])']. Entries are
    trimmed and empty entries (trailing commas) dropped.
    """
    mask = code_mask(text)
    entries: List[str] = []
    depth = 0
    start = 0
    for i, ch in enumerate(text):
        if not mask[i]:
            continue
        if ch in _OPENERS:
            depth += 1
        elif ch in _CLOSERS:
            depth -= 1
        elif ch == "," and depth == 0:
            entries.append(text[start:i])
            start = i + 1
    entries.append(text[start:])
    return [e.strip() for e in entries if e.strip()]

# -----------------------------------------------------------------------------
# NGMODULE LOOKUP
# -----------------------------------------------------------------------------

def find_ngmodule_metadata(source: str, mask: Optional[List[bool]] = None) -> Optional[Span]:
    """
    Return the span of the '@NgModule({...})' metadata object (both braces).
    """
    mask = mask if mask is not None else code_mask(source)
    for match in _NGMODULE_DECORATOR.finditer(source):
        if not mask[match.start()]:
            continue
        brace = match.end() - 1
        return brace, find_matching(source, brace, mask)
    return None


def find_property_list(
        source: str,
        key: str,
        metadata: Span,
        mask: Optional[List[bool]] = None
) -> Optional[Span]:
    """
    Return the span of the array bound to 'key' in a metadata object.

    Only properties at the top level of the object are considered.

    Args:
        source: Full source text.
        key: Property name, e.g. 'imports'.
        metadata: Span of the object literal braces.
        mask: Precomputed code mask.

    Returns:
        Optional[Span]: Span of the '[' and ']' brackets, or None when the
        object has no such property.

    Raises:
        ModuleSourceError: If the property is bound to something other than
            an array literal, e.g. a shared constant or a spread.
    """
    mask = mask if mask is not None else code_mask(source)
    prop = re.compile(rf"{re.escape(key)}\s*:")
    open_brace, close_brace = metadata
    depth = 0
    for i in range(open_brace + 1, close_brace):
        if not mask[i]:
            continue
        ch = source[i]
        if ch in _OPENERS:
            depth += 1
        elif ch in _CLOSERS:
            depth -= 1
        elif depth == 0 and not _IDENT_CHAR.match(source[i - 1]):
            m = prop.match(source, i)
            if m:
                value = _next_code_index(source, m.end(), close_brace, mask)
                if value is None or source[value] != "[":
                    raise ModuleSourceError(f"'{key}' is not an array literal.")
                return value, find_matching(source, value, mask)
    return None

# -----------------------------------------------------------------------------
# EDITING API
# -----------------------------------------------------------------------------

def add_declared_import(source: str, name: str) -> Tuple[str, bool]:
    """
    Add a module to the 'imports' array of the '@NgModule' metadata.

    The array is created when the metadata has none. Existing entries are
    kept verbatim.

    Args:
        source: Module source text.
        name: Module class to import.

    Returns:
        Tuple[str, bool]: (New source, whether it changed).

    Raises:
        ModuleSourceError: If the source has no '@NgModule({...})' metadata or
            its 'imports' is not an array literal.
    """
    mask = code_mask(source)
    metadata = find_ngmodule_metadata(source, mask)
    if metadata is None:
        raise ModuleSourceError("No @NgModule metadata found.")

    span = find_property_list(source, "imports", metadata, mask)
    if span is None:
        open_brace, close_brace = metadata
        prop = f"imports: [\n    {name}\n  ]"
        body = source[open_brace + 1:close_brace]
        if body.strip():
            new_body = f"\n  {prop}," + body
        else:
            new_body = f"\n  {prop}\n"
        return source[:open_brace + 1] + new_body + source[close_brace:], True

    start, end = span
    entries = split_top_level(source[start + 1:end])
    if name in (_code_text(entry) for entry in entries):
        return source, False

    # Comments stay attached to their entries
    items = [_append_comma(entry) for entry in entries] + [name]
    rendered = "[\n    " + "\n    ".join(items) + "\n  ]"
    return source[:start] + rendered + source[end + 1:], True


def add_import_statement(source: str, name: str, import_path: str) -> Tuple[str, bool]:
    """Prepend 'import { name } from path;' unless that exact line exists."""
    statement = f"import {{ {name} }} from '{import_path}';\n"
    if statement in source:
        return source, False
    return statement + source, True


def rename_exported_class(source: str, new_name: str) -> Tuple[str, bool]:
    """
    Rename the first exported class. Nothing else in the source changes.

    Returns:
        Tuple[str, bool]: (New source, whether an exported class was found).
    """
    new_source, count = _EXPORTED_CLASS.subn(f"export class {new_name}", source, count=1)
    return new_source, bool(count)

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _next_code_index(source: str, start: int, stop: int, mask: List[bool]) -> Optional[int]:
    """Index of the first non-blank code character in [start, stop)."""
    for i in range(start, stop):
        if mask[i] and not source[i].isspace():
            return i
    return None


def _code_text(entry: str) -> str:
    """An entry with its comments removed and surrounding blanks trimmed."""
    mask = code_mask(entry, mask_strings=False)
    return "".join(ch for ch, is_code in zip(entry, mask) if is_code).strip()


def _append_comma(entry: str) -> str:
    """
    Add a separating comma after the last code character of an entry.

    A trailing line comment would otherwise swallow the comma. Entries made
    only of comments are returned unchanged.
    """
    mask = code_mask(entry, mask_strings=False)
    last = _next_code_index(entry[::-1], 0, len(entry), mask[::-1])
    if last is None:
        return entry
    cut = len(entry) - last
    return entry[:cut] + "," + entry[cut:]

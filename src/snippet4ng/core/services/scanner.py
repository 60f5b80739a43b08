from __future__ import annotations

"""
Snippet Discovery Service.

Traverses the snippet root and yields every template file together with the
directory segments that drive name derivation. Also persists the per-file
error report at the end of a batch.
"""

import logging
import os
from dataclasses import replace
from typing import Iterable, List, Tuple
from urllib.parse import unquote

from snippet4ng.domain.constants import DEFAULT_SNIPPET_EXTENSION
from snippet4ng.domain.errors import SnippetReadError
from snippet4ng.domain.models import SnippetError, SnippetFile

logger = logging.getLogger(__name__)


# ==============================================================================
# PUBLIC API
# ==============================================================================

def yield_snippet_files(
        input_path: str,
        extension: str = DEFAULT_SNIPPET_EXTENSION,
) -> Iterable[SnippetFile]:
    """
    Walk the snippet root and yield each snippet file with its location.

    Directories and files are visited in sorted order; hidden directories are
    pruned. Content is not read here: a single unreadable file must fail on
    its own, so callers load it per snippet with 'read_snippet'.

    Args:
        input_path: Root directory of the snippet tree.
        extension: Snippet file extension, dot included.

    Yields:
        SnippetFile: One entry per discovered snippet.
    """
    root_abs = os.path.abspath(input_path)
    if not os.path.isdir(root_abs):
        logger.error(f"Directory does not exist: {root_abs}")
        return

    for root, dirs, files in os.walk(root_abs):
        dirs[:] = sorted(d for d in dirs if not d.startswith("."))
        files.sort()

        for file_name in files:
            base_name, ext = os.path.splitext(file_name)
            if ext != extension:
                continue

            file_path = os.path.join(root, file_name)
            rel_path = os.path.relpath(file_path, root_abs)
            relative_dir = _split_segments(os.path.dirname(rel_path))

            yield SnippetFile(
                file_path=file_path,
                rel_path=rel_path,
                relative_dir=relative_dir,
                original_segments=tuple(unquote(seg) for seg in relative_dir),
                base_name=base_name,
            )


def read_snippet(snippet: SnippetFile) -> SnippetFile:
    """
    Load the template text of a discovered snippet.

    The file is read without newline translation so it can be written back
    byte-for-byte.

    Raises:
        SnippetReadError: If the file cannot be read or is not valid UTF-8.
    """
    try:
        with open(snippet.file_path, "r", encoding="utf-8", newline="") as f:
            content = f.read()
    except UnicodeDecodeError as e:
        raise SnippetReadError(f"Snippet is not valid UTF-8 text: {e}") from e
    except OSError as e:
        raise SnippetReadError(f"Cannot read snippet: {e}") from e

    return replace(snippet, content=content)


def finalize_error_reporting(
        save_error_log: bool,
        error_output_path: str,
        errors: List[SnippetError]
) -> str:
    """
    Persist collected per-snippet failures to a report file.

    Args:
        save_error_log: Permission flag to write the file.
        error_output_path: Target filesystem path for the report.
        errors: Failures collected during the batch.

    Returns:
        str: The path to the report, or an empty string if not saved.
    """
    if not (save_error_log and errors):
        return ""

    try:
        os.makedirs(os.path.dirname(os.path.abspath(error_output_path)), exist_ok=True)
        with open(error_output_path, "w", encoding="utf-8") as f:
            f.write("SNIPPET GENERATION ERRORS REPORT:\n")
            f.write("=" * 80 + "\n")
            for err_item in errors:
                f.write(f"FILE: {err_item.rel_path}\n")
                f.write(f"ERROR: {err_item.error}\n")
                f.write("-" * 80 + "\n")
    except OSError as e:
        logger.error(f"Failed to persist error report to '{error_output_path}': {e}")
        return ""

    return error_output_path


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _split_segments(rel_dir: str) -> Tuple[str, ...]:
    """Split a relative directory into segments; the root yields none."""
    if not rel_dir or rel_dir == os.curdir:
        return ()
    return tuple(part for part in rel_dir.split(os.sep) if part)

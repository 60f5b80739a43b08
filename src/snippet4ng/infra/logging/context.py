from __future__ import annotations

"""
Per-Snippet Log Context.

A batch interleaves output of the pipeline, the Angular CLI and the module
editor for many snippets. The engine marks which snippet is in progress and
a filter stamps it on every record, so a log file can be grepped per snippet.
"""

import logging
from contextlib import contextmanager
from typing import Iterator

NO_SNIPPET = "-"

_current_snippet: str = NO_SNIPPET


@contextmanager
def snippet_context(rel_path: str) -> Iterator[None]:
    """Attribute records emitted inside the block to 'rel_path'."""
    global _current_snippet
    previous = _current_snippet
    _current_snippet = rel_path
    try:
        yield
    finally:
        _current_snippet = previous


def current_snippet() -> str:
    return _current_snippet


class SnippetContextFilter(logging.Filter):
    """Adds a 'snippet' attribute to each record. Never drops records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.snippet = _current_snippet
        return True

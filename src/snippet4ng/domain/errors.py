from __future__ import annotations

"""
Domain Exception Hierarchy.

Every failure raised by the scaffolding pipeline derives from a single base
so the orchestrator can isolate it to the offending snippet file.
"""


class Snippet4NGError(Exception):
    """Base class for all pipeline failures."""


class InvalidSnippetNameError(Snippet4NGError):
    """A snippet file name sanitizes down to an empty identifier."""


class SnippetReadError(Snippet4NGError):
    """A snippet file cannot be read or is not valid UTF-8 text."""


class MissingContainerError(Snippet4NGError):
    """The module expected to own a component is not present on disk."""


class ScaffoldCommandError(Snippet4NGError):
    """The external scaffolding generator failed or could not be started."""

    def __init__(self, message: str, returncode: int | None = None):
        super().__init__(message)
        self.returncode = returncode


class ModuleSourceError(Snippet4NGError):
    """A module source file lacks the structure required to patch it."""

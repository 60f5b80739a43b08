from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides cross-platform path resolution for persistent application data and
the workspace abstraction through which the pipeline reads and writes
generated sources. All pipeline paths are relative to the project root so
the same stages run against the real disk or an in-memory workspace.
"""

import os
from abc import ABC, abstractmethod
from typing import Optional

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = "Snippet4NG"
UNIX_APP_DIR_NAME = ".snippet4ng"

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Resolve the standard OS-specific directory for persistent application data.

    Standards:
    - Windows: %LOCALAPPDATA%/Snippet4NG
    - Linux/Mac: ~/.snippet4ng

    Returns:
        str: Absolute path to the application data directory.
    """
    path: str = ""

    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    if not path:
        home = os.path.expanduser("~")
        path = os.path.join(home, UNIX_APP_DIR_NAME)

    try:
        os.makedirs(path, exist_ok=True)
    except OSError:
        pass

    return os.path.abspath(path)


def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a directory path string into an absolute filesystem path.

    Handles environment variable expansion and user home shortcuts.
    Reverts to fallback if the input is empty.

    Args:
        path: Raw input path string.
        fallback: Default path to use if the input is empty.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    p = os.path.expandvars(os.path.expanduser(p))
    return os.path.abspath(p)


def to_import_path(from_dir: str, target: str) -> str:
    """
    Build an ES module specifier from one project path to another.

    The result uses forward slashes, always starts with './' or '../' and
    carries no '.ts' extension.

    Args:
        from_dir: Directory of the importing file.
        target: Path of the imported file (extension optional).

    Returns:
        str: Relative import specifier.
    """
    rel = os.path.relpath(target, from_dir).replace("\\", "/")
    if not rel.startswith("."):
        rel = "./" + rel
    if rel.endswith(".ts"):
        rel = rel[:-3]
    return rel

# -----------------------------------------------------------------------------
# WORKSPACE ABSTRACTION
# -----------------------------------------------------------------------------

class Workspace(ABC):
    """
    Text file access rooted at the Angular project directory.
    """

    @abstractmethod
    def exists(self, rel_path: str) -> bool:
        """Return True if a file exists at the project-relative path."""

    @abstractmethod
    def read_text(self, rel_path: str) -> str:
        """Read a UTF-8 text file. Raises OSError if it is missing."""

    @abstractmethod
    def write_text(self, rel_path: str, content: str) -> None:
        """Create or replace a UTF-8 text file, creating parent directories."""


class LocalWorkspace(Workspace):
    """Workspace backed by the real filesystem."""

    def __init__(self, root: str):
        self.root = os.path.abspath(root)

    def resolve(self, rel_path: str) -> str:
        return os.path.join(self.root, rel_path)

    def exists(self, rel_path: str) -> bool:
        return os.path.isfile(self.resolve(rel_path))

    def read_text(self, rel_path: str) -> str:
        with open(self.resolve(rel_path), "r", encoding="utf-8") as f:
            return f.read()

    def write_text(self, rel_path: str, content: str) -> None:
        full = self.resolve(rel_path)
        parent = os.path.dirname(full)
        if parent:
            os.makedirs(parent, exist_ok=True)
        # newline="" keeps snippet line endings byte-for-byte
        with open(full, "w", encoding="utf-8", newline="") as f:
            f.write(content)

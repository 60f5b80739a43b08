from __future__ import annotations

"""
Scaffolding Generator Adapters.

Abstract interface over the external tool that creates component and module
skeletons, and its Angular CLI implementation. Calls are blocking and must
never overlap: the CLI rewrites shared project files without locking.
"""

import logging
import shlex
import subprocess
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence, Union

from snippet4ng.domain.constants import DEFAULT_NG_COMMAND
from snippet4ng.domain.errors import ScaffoldCommandError

logger = logging.getLogger(__name__)


class ScaffoldGenerator(ABC):
    """
    Creates skeletons on disk for components and their container modules.
    """

    @abstractmethod
    def create_leaf(self, path: str, owner: str, selector: str, *, force: bool = True) -> None:
        """
        Create a component skeleton.

        Args:
            path: Component path relative to the application root.
            owner: Path whose nearest module declares and exports the component.
            selector: Custom element selector.
            force: Overwrite stale artifacts.

        Raises:
            ScaffoldCommandError: If the generator fails.
        """

    @abstractmethod
    def create_container(self, path: str, *, force: bool = True) -> None:
        """
        Create a module skeleton at 'path'.

        Raises:
            ScaffoldCommandError: If the generator fails.
        """


class AngularCliGenerator(ScaffoldGenerator):
    """
    Generator backed by 'ng generate', run in the Angular project root.
    """

    def __init__(self, command: Union[str, Sequence[str]] = DEFAULT_NG_COMMAND, cwd: Optional[str] = None):
        """
        Args:
            command: Executable invocation, e.g. 'ng' or 'npx ng'.
            cwd: Angular project root. Defaults to the current directory.
        """
        self.command: List[str] = shlex.split(command) if isinstance(command, str) else list(command)
        self.cwd = cwd

    def create_leaf(self, path: str, owner: str, selector: str, *, force: bool = True) -> None:
        args = [
            "generate", "component", _posix(path),
            f"--module={_posix(owner)}",
            "--export",
            "--flat=false",
            "--skip-tests",
            f"--selector={selector}",
        ]
        if force:
            args.append("--force")
        self._run(args)

    def create_container(self, path: str, *, force: bool = True) -> None:
        args = ["generate", "module", _posix(path), "--flat=false"]
        if force:
            args.append("--force")
        self._run(args)

    def _run(self, args: List[str]) -> None:
        cmd = self.command + args
        logger.info(f"Executing: {' '.join(cmd)}")
        try:
            completed = subprocess.run(
                cmd,
                cwd=self.cwd,
                check=True,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except FileNotFoundError as e:
            raise ScaffoldCommandError(f"Generator executable not found: {self.command[0]}") from e
        except subprocess.CalledProcessError as e:
            detail = (e.stderr or "").strip()
            msg = f"Command \"{' '.join(cmd)}\" failed with exit code {e.returncode}"
            raise ScaffoldCommandError(
                f"{msg}: {detail}" if detail else msg,
                returncode=e.returncode,
            ) from e

        # Keep the CLI chatter out of stdout, which may carry JSON output
        for line in (completed.stdout or "").splitlines():
            logger.debug(f"ng: {line}")


def _posix(path: str) -> str:
    """Angular CLI paths always use forward slashes."""
    return path.replace("\\", "/")

from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. An in-memory workspace and a fake generator mimicking the files
   'ng generate' produces, so pipeline stages run without Node.js.
"""

import os
import sys
from pathlib import Path
from typing import Any, Callable, Dict, List, Tuple

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from snippet4ng.core.processing.naming import pascal_from_kebab  # noqa: E402
from snippet4ng.core.services.generator import ScaffoldGenerator  # noqa: E402
from snippet4ng.domain.errors import ScaffoldCommandError  # noqa: E402
from snippet4ng.infra.fs import LocalWorkspace, Workspace  # noqa: E402

MODULE_TEMPLATE = """import {{ NgModule }} from '@angular/core';
import {{ CommonModule }} from '@angular/common';



@NgModule({{
  declarations: [],
  imports: [
    CommonModule
  ]
}})
export class {name}Module {{ }}
"""

COMPONENT_TEMPLATE = """import {{ Component }} from '@angular/core';

@Component({{
  selector: '{selector}',
  templateUrl: './{stem}.component.html',
  styleUrls: ['./{stem}.component.css']
}})
export class {name}Component {{

}}
"""


# -----------------------------------------------------------------------------
# Test Doubles
# -----------------------------------------------------------------------------
class MemoryWorkspace(Workspace):
    """Workspace keeping files in a dict keyed by normalized path."""

    def __init__(self) -> None:
        self.files: Dict[str, str] = {}
        self.writes: List[str] = []

    @staticmethod
    def _key(rel_path: str) -> str:
        return os.path.normpath(rel_path)

    def exists(self, rel_path: str) -> bool:
        return self._key(rel_path) in self.files

    def read_text(self, rel_path: str) -> str:
        try:
            return self.files[self._key(rel_path)]
        except KeyError:
            raise FileNotFoundError(rel_path) from None

    def write_text(self, rel_path: str, content: str) -> None:
        self.files[self._key(rel_path)] = content
        self.writes.append(self._key(rel_path))


class FakeGenerator(ScaffoldGenerator):
    """
    Stand-in for the Angular CLI writing the same files 'ng generate' would.

    The component class is deliberately generated with a placeholder name so
    tests can observe the rename performed by the pipeline.
    """

    def __init__(self, workspace: Workspace, app_root: str = "src/app") -> None:
        self.workspace = workspace
        self.app_root = app_root
        self.leaf_calls: List[Tuple[str, str, str, bool]] = []
        self.container_calls: List[Tuple[str, bool]] = []
        self.fail_on: set = set()

    def create_container(self, path: str, *, force: bool = True) -> None:
        self.container_calls.append((path, force))
        if path in self.fail_on:
            raise ScaffoldCommandError(f"ng generate module {path} failed", returncode=1)
        stem = os.path.basename(path)
        self.workspace.write_text(
            os.path.join(self.app_root, path, f"{stem}.module.ts"),
            MODULE_TEMPLATE.format(name=pascal_from_kebab(stem)),
        )

    def create_leaf(self, path: str, owner: str, selector: str, *, force: bool = True) -> None:
        self.leaf_calls.append((path, owner, selector, force))
        if path in self.fail_on:
            raise ScaffoldCommandError(f"ng generate component {path} failed", returncode=1)
        stem = os.path.basename(path)
        base = os.path.join(self.app_root, path)
        self.workspace.write_text(
            os.path.join(base, f"{stem}.component.ts"),
            COMPONENT_TEMPLATE.format(selector=selector, stem=stem, name="NgGenerated"),
        )
        self.workspace.write_text(os.path.join(base, f"{stem}.component.html"), f"<p>{stem} works!</p>\n")
        self.workspace.write_text(os.path.join(base, f"{stem}.component.css"), "")


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def memory_workspace() -> MemoryWorkspace:
    return MemoryWorkspace()


@pytest.fixture
def fake_generator(memory_workspace: MemoryWorkspace) -> FakeGenerator:
    return FakeGenerator(memory_workspace)


@pytest.fixture
def angular_project(tmp_path: Path) -> Path:
    """An empty Angular project root with a snippet tree location."""
    root = tmp_path / "project"
    (root / "src" / "app").mkdir(parents=True)
    (root / "Templates" / "Snippets").mkdir(parents=True)
    return root


@pytest.fixture
def local_workspace(angular_project: Path) -> LocalWorkspace:
    return LocalWorkspace(str(angular_project))


@pytest.fixture
def mock_config_dict(angular_project: Path) -> Dict[str, Any]:
    """A complete configuration pointing at the temporary project."""
    return {
        "input_path": "Templates/Snippets",
        "project_root": str(angular_project),
        "app_root": "src/app",
        "snippet_extension": ".txt",
        "ng_command": "ng",
        "selector_prefix": "app",
        "save_error_log": False,
        "error_log_path": "snippet4ng_errors.txt",
    }


@pytest.fixture
def local_generator(local_workspace: LocalWorkspace) -> FakeGenerator:
    return FakeGenerator(local_workspace)


@pytest.fixture
def write_snippet(angular_project: Path) -> Callable[[str, str], Path]:
    """Return a helper creating snippet files below the snippet root."""
    def _write(rel_path: str, content: str) -> Path:
        path = angular_project / "Templates" / "Snippets" / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content.encode("utf-8"))
        return path
    return _write

from __future__ import annotations

"""
Module Hierarchy Stage.

Ensures that every directory level above a component has its NgModule and
that each module imports the module of the level above it. Both steps are
idempotent: the in-memory HierarchyState short-circuits work already done in
the current run, and existence/containment checks on disk make re-runs over
an already generated project no-ops.
"""

import logging
import os
from typing import List, Optional

from snippet4ng.core.processing.module_source import (
    add_declared_import,
    add_import_statement,
)
from snippet4ng.core.processing.naming import sanitize
from snippet4ng.core.services.generator import ScaffoldGenerator
from snippet4ng.domain.constants import (
    DEFAULT_APP_ROOT,
    MODULE_FILE_SUFFIX,
    MODULE_SUFFIX,
)
from snippet4ng.domain.errors import MissingContainerError, ModuleSourceError
from snippet4ng.domain.models import ContainerNode, DerivedNames, HierarchyState
from snippet4ng.infra.fs import Workspace, to_import_path

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def module_file_path(app_root: str, container_path: str, segment: str) -> str:
    """Project-relative path of the module generated for a directory level."""
    return os.path.join(app_root, container_path, sanitize(segment) + MODULE_FILE_SUFFIX)


def build_container_hierarchy(
        names: DerivedNames,
        generator: ScaffoldGenerator,
        workspace: Workspace,
        state: HierarchyState,
        *,
        app_root: str = DEFAULT_APP_ROOT,
) -> List[ContainerNode]:
    """
    Materialize and wire the module chain enclosing a component.

    Args:
        names: Identifiers derived for the component.
        generator: Skeleton creation capability.
        workspace: Project file access.
        state: Work already performed during this run.
        app_root: Application source root relative to the project root.

    Returns:
        List[ContainerNode]: The chain from the outermost module inwards.
        Empty for a component at the snippet root.

    Raises:
        ScaffoldCommandError: If a module skeleton cannot be generated.
        MissingContainerError: If the generator did not produce the module file.
    """
    nodes: List[ContainerNode] = []
    parent: Optional[ContainerNode] = None

    for i, segment in enumerate(names.segments):
        accumulated = os.path.join(*names.segments[:i + 1])
        node = ContainerNode(
            path=accumulated,
            name=names.container_names[i] + MODULE_SUFFIX,
            file_path=module_file_path(app_root, accumulated, segment),
            parent=parent,
        )

        _ensure_container(node, generator, workspace, state)
        if parent is not None:
            _wire_parent(node, parent, workspace, state)

        nodes.append(node)
        parent = node

    return nodes


# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _ensure_container(
        node: ContainerNode,
        generator: ScaffoldGenerator,
        workspace: Workspace,
        state: HierarchyState,
) -> None:
    """Generate the module skeleton unless it already exists."""
    if state.is_materialized(node.path):
        return

    if workspace.exists(node.file_path):
        logger.debug(f"Module {node.name} already exists at path: {node.file_path}")
    else:
        logger.info(f"Generating module {node.name} at path: {node.path}")
        generator.create_container(node.path, force=True)
        if not workspace.exists(node.file_path):
            raise MissingContainerError(
                f"Generator did not create module file at path: {node.file_path}"
            )

    state.mark_materialized(node.path)


def _wire_parent(
        node: ContainerNode,
        parent: ContainerNode,
        workspace: Workspace,
        state: HierarchyState,
) -> None:
    """
    Make a module import its parent module.

    Adds the ES import line and the '@NgModule' imports entry, each only if
    absent. A module without '@NgModule' metadata is reported and left as is.
    """
    if state.is_wired(node.path, parent.path):
        return

    source = workspace.read_text(node.file_path)
    import_path = to_import_path(os.path.dirname(node.file_path), parent.file_path)

    source, added_statement = add_import_statement(source, parent.name, import_path)
    if added_statement:
        logger.info(f"Added import statement for {parent.name} in {node.name}")
    else:
        logger.debug(f"{parent.name} is already imported in {node.name}")

    added_entry = False
    try:
        source, added_entry = add_declared_import(source, parent.name)
    except ModuleSourceError as e:
        logger.error(
            f"Could not update imports array in {node.file_path}: {e} "
            f"Manual intervention may be required."
        )

    if added_entry:
        logger.info(f"Added {parent.name} to imports array in {node.name}")

    if added_statement or added_entry:
        workspace.write_text(node.file_path, source)

    state.mark_wired(node.path, parent.path)

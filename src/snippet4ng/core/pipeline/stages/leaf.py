from __future__ import annotations

"""
Component Generation Stage.

Generates a component skeleton, replaces its template with the snippet,
renames its class to the derived name and writes a Storybook story that
renders it within its nearest enclosing module.
"""

import logging
import os

from snippet4ng.core.pipeline.stages.hierarchy import module_file_path
from snippet4ng.core.pipeline.stages.story import render_story
from snippet4ng.core.processing.module_source import rename_exported_class
from snippet4ng.core.services.generator import ScaffoldGenerator
from snippet4ng.domain.constants import (
    COMPONENT_HTML_SUFFIX,
    COMPONENT_TS_SUFFIX,
    DEFAULT_APP_ROOT,
    MODULE_SUFFIX,
    STORY_FILE_SUFFIX,
)
from snippet4ng.domain.errors import MissingContainerError, ModuleSourceError
from snippet4ng.domain.models import DerivedNames, LeafArtifact, SnippetFile
from snippet4ng.infra.fs import Workspace, to_import_path

logger = logging.getLogger(__name__)


def generate_leaf(
        snippet: SnippetFile,
        names: DerivedNames,
        generator: ScaffoldGenerator,
        workspace: Workspace,
        *,
        app_root: str = DEFAULT_APP_ROOT,
) -> LeafArtifact:
    """
    Generate and wire the component for a snippet.

    Args:
        snippet: Source snippet with its raw template content.
        names: Identifiers derived for the snippet.
        generator: Skeleton creation capability.
        workspace: Project file access.
        app_root: Application source root relative to the project root.

    Returns:
        LeafArtifact: Paths of the generated files. 'story_path' is empty for
        components at the snippet root, which have no enclosing module.

    Raises:
        ScaffoldCommandError: If the component skeleton cannot be generated.
        ModuleSourceError: If the generated source has no exported class.
        MissingContainerError: If the nearest module file is absent.
    """
    generator.create_leaf(names.leaf_path, names.leaf_path, names.tag_name, force=True)

    component_dir = os.path.join(app_root, names.leaf_path)
    template_path = os.path.join(component_dir, names.leaf_name + COMPONENT_HTML_SUFFIX)
    source_path = os.path.join(component_dir, names.leaf_name + COMPONENT_TS_SUFFIX)

    workspace.write_text(template_path, snippet.content)
    logger.info(f"Updated template for {names.leaf_type_name}")

    source, renamed = rename_exported_class(workspace.read_text(source_path), names.leaf_type_name)
    if not renamed:
        raise ModuleSourceError(f"No exported class found in {source_path}")
    workspace.write_text(source_path, source)
    logger.info(f"Updated component class name for {names.leaf_type_name}")

    artifact = LeafArtifact(
        type_name=names.leaf_type_name,
        component_dir=component_dir,
        template_path=template_path,
        source_path=source_path,
    )

    if not names.has_container:
        logger.info(f"{names.leaf_type_name} has no enclosing module. Skipping story creation.")
        return artifact

    parent_module = names.container_names[-1] + MODULE_SUFFIX
    parent_module_path = module_file_path(app_root, names.container_path, names.segments[-1])
    if not workspace.exists(parent_module_path):
        raise MissingContainerError(f"Parent module file does not exist at path: {parent_module_path}")

    story_path = os.path.join(component_dir, names.leaf_name + STORY_FILE_SUFFIX)
    story = render_story(
        component=names.leaf_type_name,
        leaf_name=names.leaf_name,
        module=parent_module,
        module_path=to_import_path(component_dir, parent_module_path),
        title=names.breadcrumb_title,
    )
    workspace.write_text(story_path, story)
    logger.info(f"Storybook story generated for {names.leaf_type_name}")

    return LeafArtifact(
        type_name=names.leaf_type_name,
        component_dir=component_dir,
        template_path=template_path,
        source_path=source_path,
        story_path=story_path,
        parent_module=parent_module,
    )

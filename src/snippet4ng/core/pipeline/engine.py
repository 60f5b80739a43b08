from __future__ import annotations

"""
Core orchestration pipeline.

Coordinates the generation workflow for a whole snippet tree:
1. Validates configuration and resolves paths.
2. Discovers snippet files.
3. For each snippet, sequentially: derives names, materializes the module
   hierarchy, generates and wires the component and its story.
4. Isolates per-snippet failures and reports a summary.

Snippets are never processed concurrently: a component may depend on a
module created for an earlier sibling, and the Angular CLI edits shared
project files without locking.
"""

import logging
import os
from typing import Any, Dict, List, Optional

from snippet4ng.core.pipeline.stages.hierarchy import build_container_hierarchy
from snippet4ng.core.pipeline.stages.leaf import generate_leaf
from snippet4ng.core.pipeline.stages.validator import validate_config
from snippet4ng.core.processing.identifiers import derive_names
from snippet4ng.core.services.generator import AngularCliGenerator, ScaffoldGenerator
from snippet4ng.core.services.scanner import (
    finalize_error_reporting,
    read_snippet,
    yield_snippet_files,
)
from snippet4ng.domain.constants import MODULE_SUFFIX
from snippet4ng.domain.models import (
    DerivedNames,
    HierarchyState,
    PipelineResult,
    SnippetError,
    create_error_result,
    create_success_result,
)
from snippet4ng.infra.fs import LocalWorkspace, Workspace, normalize_path
from snippet4ng.infra.logging import snippet_context

logger = logging.getLogger(__name__)


def run_pipeline(
        config: Optional[Dict[str, Any]],
        *,
        generator: Optional[ScaffoldGenerator] = None,
        workspace: Optional[Workspace] = None,
        dry_run: bool = False,
) -> PipelineResult:
    """
    Execute the full generation pipeline over a snippet tree.

    Args:
        config: The configuration dictionary (raw or partial).
        generator: Skeleton creation capability. Defaults to the Angular CLI.
        workspace: Project file access. Defaults to the local project root.
        dry_run: If True, only derive and report names; nothing is generated.

    Returns:
        PipelineResult: Status, counters and per-snippet failures.
    """
    logger.info("Pipeline execution started.")

    # -------------------------------------------------------------------------
    # 1) Config & Path Normalization
    # -------------------------------------------------------------------------
    cfg, warnings = validate_config(config, strict=False)
    for warning in warnings:
        logger.warning(f"Configuration Warning: {warning}")

    project_root = normalize_path(cfg["project_root"], os.getcwd())
    cfg["project_root"] = project_root
    input_path = _resolve_against(cfg["input_path"], project_root)
    app_root = cfg["app_root"]

    if not os.path.isdir(input_path):
        msg = f"Invalid input directory: {input_path}"
        logger.error(msg)
        return create_error_result(msg, cfg, input_path)

    # -------------------------------------------------------------------------
    # 2) Discovery
    # -------------------------------------------------------------------------
    extension = cfg["snippet_extension"]
    snippets = list(yield_snippet_files(input_path, extension))

    if not snippets:
        logger.warning(f"No {extension} files found in directory: {input_path}")
        return create_success_result(
            cfg, input_path, dry_run=dry_run, summary_extra=_summary(0, 0, 0, 0, 0)
        )

    if workspace is None:
        workspace = LocalWorkspace(project_root)
    if generator is None and not dry_run:
        generator = AngularCliGenerator(cfg["ng_command"], cwd=project_root)

    # -------------------------------------------------------------------------
    # 3) Per-Snippet Generation
    # -------------------------------------------------------------------------
    state = HierarchyState()
    errors: List[SnippetError] = []
    generated: List[str] = []
    planned: List[Dict[str, Any]] = []
    stories = 0
    skipped_stories = 0

    for snippet in snippets:
        with snippet_context(snippet.rel_path):
            logger.info(f"Processing file: {snippet.rel_path}")
            try:
                snippet = read_snippet(snippet)
                names = derive_names(
                    snippet.relative_dir,
                    snippet.base_name,
                    snippet.original_segments,
                    selector_prefix=cfg["selector_prefix"],
                )

                if dry_run:
                    planned.append(_plan_entry(snippet.rel_path, names))
                    continue

                build_container_hierarchy(names, generator, workspace, state, app_root=app_root)
                artifact = generate_leaf(snippet, names, generator, workspace, app_root=app_root)

            except Exception as e:
                logger.error(f"Failed to generate component for {snippet.file_path}: {e}")
                errors.append(SnippetError(rel_path=snippet.rel_path, error=str(e)))
                continue

        generated.append(names.leaf_path)
        if artifact.has_story:
            stories += 1
        else:
            skipped_stories += 1

    # -------------------------------------------------------------------------
    # 4) Reporting
    # -------------------------------------------------------------------------
    error_log_path = finalize_error_reporting(
        cfg["save_error_log"] and not dry_run,
        _resolve_against(cfg["error_log_path"], project_root),
        errors,
    )

    processed = len(planned) if dry_run else len(generated)
    logger.info(
        f"Pipeline finished: {processed}/{len(snippets)} snippet(s) "
        f"{'planned' if dry_run else 'generated'}, {len(errors)} failed."
    )

    return create_success_result(
        cfg,
        input_path,
        dry_run=dry_run,
        processed=processed,
        errors=errors,
        generated=generated,
        planned=planned,
        error_log_path=error_log_path,
        summary_extra=_summary(len(snippets), processed, len(errors), stories, skipped_stories),
    )


# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _resolve_against(path: str, base: str) -> str:
    """Resolve a possibly relative path against 'base'."""
    p = os.path.expandvars(os.path.expanduser(path))
    if not os.path.isabs(p):
        p = os.path.join(base, p)
    return os.path.abspath(p)


def _summary(total: int, processed: int, failed: int, stories: int, skipped_stories: int) -> Dict[str, Any]:
    return {
        "total": total,
        "processed": processed,
        "failed": failed,
        "stories": stories,
        "skipped_stories": skipped_stories,
    }


def _plan_entry(rel_path: str, names: DerivedNames) -> Dict[str, Any]:
    """Describe what would be generated for a snippet."""
    return {
        "snippet": rel_path,
        "component_path": names.leaf_path.replace(os.sep, "/"),
        "class_name": names.leaf_type_name,
        "selector": names.tag_name,
        "modules": [name + MODULE_SUFFIX for name in names.container_names],
        "title": names.breadcrumb_title,
        "story": names.has_container,
    }

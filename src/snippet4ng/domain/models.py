from __future__ import annotations

"""
Pipeline Domain Data Models.

Defines the data structures exchanged between the scanner, the identifier
deriver, the generation stages and the interface layer, plus the factory
functions used to build execution results.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set, Tuple

# -----------------------------------------------------------------------------
# INPUT MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class SnippetFile:
    """
    A discovered snippet file and its raw template content.

    Attributes:
        file_path: Absolute path of the snippet on disk.
        rel_path: Path relative to the scan root (display only).
        relative_dir: Raw directory segments between the scan root and the file.
        original_segments: Directory segments decoded for human display.
        base_name: File name without its extension.
        content: Raw template text, written back untouched. Empty until the
            file has been read with 'read_snippet'.
    """
    file_path: str
    rel_path: str
    relative_dir: Tuple[str, ...]
    original_segments: Tuple[str, ...]
    base_name: str
    content: str = ""


@dataclass(frozen=True)
class DerivedNames:
    """
    Every identifier derived for a single snippet.

    Attributes:
        segments: Sanitized directory segments, one per container level.
        container_path: Segments joined with the platform separator.
        container_names: PascalCase container names (without suffix).
        leaf_name: Hyphen-case component name.
        leaf_path: Component path relative to the application root.
        leaf_type_name: Exported component class name.
        tag_name: Component selector.
        breadcrumb_title: Storybook title.
    """
    segments: Tuple[str, ...]
    container_path: str
    container_names: Tuple[str, ...]
    leaf_name: str
    leaf_path: str
    leaf_type_name: str
    tag_name: str
    breadcrumb_title: str

    @property
    def has_container(self) -> bool:
        return bool(self.segments) and bool(self.container_names)

# -----------------------------------------------------------------------------
# OUTPUT MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ContainerNode:
    """
    A module level in the enclosing hierarchy of a component.

    Attributes:
        path: Accumulated directory path relative to the app root.
        name: Module class name, suffix included.
        file_path: Module source path relative to the project root.
        parent: The enclosing module this one imports, if any.
    """
    path: str
    name: str
    file_path: str
    parent: Optional["ContainerNode"] = None


@dataclass(frozen=True)
class LeafArtifact:
    """Files produced for a single component."""
    type_name: str
    component_dir: str
    template_path: str
    source_path: str
    story_path: str = ""
    parent_module: str = ""

    @property
    def has_story(self) -> bool:
        return bool(self.story_path)


@dataclass(frozen=True)
class SnippetError:
    """
    Failure details for a snippet that could not be processed.

    Attributes:
        rel_path: Snippet path relative to the scan root.
        error: Descriptive error message.
    """
    rel_path: str
    error: str


@dataclass
class HierarchyState:
    """
    In-memory record of the module work already performed during a run.

    Consulted before touching disk so repeated levels across sibling
    snippets are neither regenerated nor rewired.
    """
    materialized: Set[str] = field(default_factory=set)
    wired: Set[Tuple[str, str]] = field(default_factory=set)

    def is_materialized(self, path: str) -> bool:
        return path in self.materialized

    def mark_materialized(self, path: str) -> None:
        self.materialized.add(path)

    def is_wired(self, child: str, parent: str) -> bool:
        return (child, parent) in self.wired

    def mark_wired(self, child: str, parent: str) -> None:
        self.wired.add((child, parent))

# -----------------------------------------------------------------------------
# EXECUTION RESULT
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class PipelineResult:
    """
    Result of a complete batch execution.

    Attributes:
        ok: False only when the batch could not start or some snippet failed.
        error: Descriptive message for a batch-level failure.
        input_path: Normalized snippet root.
        project_root: Directory where the generator runs.
        app_root: Application source root relative to the project root.
        dry_run: Whether the run only planned names.
        processed: Snippets fully generated.
        failed: Snippets whose pipeline raised.
        errors: Per-snippet failure records.
        generated: Component paths generated, in processing order.
        planned: Derived names per snippet (dry runs).
        error_log_path: Written error report, if any.
        summary: Counters for rendering.
    """
    ok: bool
    error: str

    input_path: str
    project_root: str
    app_root: str
    dry_run: bool = False

    processed: int = 0
    failed: int = 0
    errors: List[SnippetError] = field(default_factory=list)
    generated: List[str] = field(default_factory=list)
    planned: List[Dict[str, Any]] = field(default_factory=list)
    error_log_path: str = ""

    summary: Dict[str, Any] = field(default_factory=dict)

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_error_result(
        error: str,
        cfg: Dict[str, Any],
        input_path: str,
        summary_extra: Optional[Dict[str, Any]] = None
) -> PipelineResult:
    """
    Create a failed pipeline result for a batch that could not start.

    Args:
        error: Detailed error description.
        cfg: Configuration used during the failed run.
        input_path: The target snippet directory.
        summary_extra: Additional metadata for the summary payload.

    Returns:
        PipelineResult: An immutable error result object.
    """
    return PipelineResult(
        ok=False,
        error=error,
        input_path=input_path,
        project_root=cfg.get("project_root", ""),
        app_root=cfg.get("app_root", ""),
        summary=summary_extra or {},
    )


def create_success_result(
        cfg: Dict[str, Any],
        input_path: str,
        *,
        dry_run: bool = False,
        processed: int = 0,
        errors: Optional[List[SnippetError]] = None,
        generated: Optional[List[str]] = None,
        planned: Optional[List[Dict[str, Any]]] = None,
        error_log_path: str = "",
        summary_extra: Optional[Dict[str, Any]] = None
) -> PipelineResult:
    """
    Create the result of a batch that ran to completion.

    The result is 'ok' only if no snippet failed.

    Returns:
        PipelineResult: An immutable result object.
    """
    errors = errors or []
    return PipelineResult(
        ok=not errors,
        error="" if not errors else f"{len(errors)} snippet(s) failed.",
        input_path=input_path,
        project_root=cfg.get("project_root", ""),
        app_root=cfg.get("app_root", ""),
        dry_run=dry_run,
        processed=processed,
        failed=len(errors),
        errors=errors,
        generated=generated or [],
        planned=planned or [],
        error_log_path=error_log_path,
        summary=summary_extra or {},
    )

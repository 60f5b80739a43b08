from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, merging of configuration
sources (defaults, saved configuration and command-line overrides), pipeline
execution and result rendering.
"""

import json
import os
import sys
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from snippet4ng.core.pipeline.engine import run_pipeline
from snippet4ng.core.pipeline.stages.validator import validate_config
from snippet4ng.domain.config import get_default_config, load_config, save_config
from snippet4ng.domain.models import PipelineResult
from snippet4ng.infra.logging import LoggingConfig, configure_logging, get_logger
from snippet4ng.interface.cli import args as cli_args

logger = get_logger(__name__)

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the CLI workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: 0 on success, 1 if any snippet failed or the pipeline crashed,
        2 for an invalid input directory, 130 when interrupted.
    """
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    log_level = "DEBUG" if args.debug else "INFO"
    configure_logging(LoggingConfig(level=log_level, console=True, log_file=args.log_file))

    logger.debug("CLI execution initiated. Resolving configuration hierarchy...")

    base_conf = get_default_config() if args.use_defaults else load_config()
    raw_conf = _merge_config(base_conf, cli_args.args_to_overrides(args))

    clean_conf, warnings = validate_config(raw_conf, strict=False)
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if args.dump_config:
        print(json.dumps(clean_conf, ensure_ascii=False, indent=2))
        return 0

    if args.save_config:
        save_config(clean_conf)

    try:
        result = run_pipeline(clean_conf, dry_run=bool(args.dry_run))
    except KeyboardInterrupt:
        logger.warning("Interrupted by user.")
        return 130
    except Exception as e:
        logger.critical(f"Pipeline failed: {e}", exc_info=True)
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    if args.json_output:
        print(json.dumps(asdict(result), ensure_ascii=False, indent=2))
    else:
        _print_human_summary(result)

    if not result.ok and result.failed == 0:
        return 2
    return 0 if result.ok else 1

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Shallow merge of the non-None overrides into the base configuration."""
    out = dict(base)
    for k, v in overrides.items():
        if k in out and v is not None:
            out[k] = v
    return out

# -----------------------------------------------------------------------------
# VIEW RENDERING (HUMAN READABLE)
# -----------------------------------------------------------------------------

def _print_human_summary(result: PipelineResult) -> None:
    """
    Print the execution result to standard output.

    Args:
        result: The pipeline result to render.
    """
    if not result.ok and result.failed == 0:
        print(f"ERROR: {result.error}", file=sys.stderr)
        return

    summary = result.summary

    if result.dry_run:
        print(f"Dry run: {len(result.planned)} component(s) planned from {result.input_path}")
        for entry in result.planned:
            modules = " > ".join(entry["modules"]) or "(none)"
            print(f"  - {entry['component_path']}: {entry['class_name']} <{entry['selector']}>")
            print(f"      modules: {modules}")
            print(f"      title: {entry['title']}")
    else:
        print(f"Snippets found: {summary.get('total', 0)}")
        print(f"Components generated: {summary.get('processed', 0)}")
        print(f"Stories generated: {summary.get('stories', 0)}")
        if summary.get("skipped_stories"):
            print(f"Root-level components without story: {summary['skipped_stories']}")

    if result.errors:
        print(f"Failed: {result.failed}", file=sys.stderr)
        for err in result.errors:
            print(f"  - {err.rel_path}: {err.error}", file=sys.stderr)

    if result.error_log_path:
        print(f"Error report: {os.path.normpath(result.error_log_path)}")

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())

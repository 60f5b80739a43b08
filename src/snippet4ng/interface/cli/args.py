from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line interface schema and translates parsed arguments
into configuration overrides.
"""

import argparse
from typing import Any, Dict

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the snippet4ng CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="snippet4ng",
        description=(
            "Generate Angular components, their module hierarchy and Storybook "
            "stories from a tree of HTML snippet files."
        ),
    )

    # --- Path Management ---
    p.add_argument(
        "-i", "--input",
        dest="input_path",
        default=None,
        help="Snippet root directory (relative paths resolve against the project root).",
    )
    p.add_argument(
        "-p", "--project-root",
        dest="project_root",
        default=None,
        help="Angular project directory where 'ng generate' runs.",
    )
    p.add_argument(
        "--app-root",
        dest="app_root",
        default=None,
        help="Application source root inside the project (default: src/app).",
    )
    p.add_argument(
        "--ext",
        dest="snippet_extension",
        default=None,
        help="Snippet file extension (default: .txt).",
    )

    # --- Generator ---
    p.add_argument(
        "--ng",
        dest="ng_command",
        default=None,
        help="Angular CLI invocation, e.g. 'npx ng' (default: ng).",
    )
    p.add_argument(
        "--selector-prefix",
        dest="selector_prefix",
        default=None,
        help="Component selector prefix (default: app).",
    )

    # --- Runtime ---
    p.add_argument(
        "--dry-run",
        action="store_true",
        help="Only print the derived names; generate nothing.",
    )
    p.add_argument(
        "--error-log",
        dest="error_log_path",
        default=None,
        help="Write a report of failed snippets to this file.",
    )

    # --- Configuration and Diagnostics ---
    p.add_argument(
        "--use-defaults",
        action="store_true",
        help="Ignore the saved configuration.",
    )
    p.add_argument(
        "--save-config",
        action="store_true",
        help="Persist the effective configuration for later runs.",
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the effective configuration as JSON and exit.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write the log to this file.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )

    # --- Format Selection ---
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the result as JSON.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into configuration overrides.

    Options left unset map to None and do not override anything.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {
        "input_path": args.input_path,
        "project_root": args.project_root,
        "app_root": args.app_root,
        "snippet_extension": args.snippet_extension,
        "ng_command": args.ng_command,
        "selector_prefix": args.selector_prefix,
    }

    if args.error_log_path:
        overrides["error_log_path"] = args.error_log_path
        overrides["save_error_log"] = True

    return overrides

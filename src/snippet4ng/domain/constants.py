from __future__ import annotations

"""
Domain Constants.

Naming conventions shared by the identifier deriver, the hierarchy builder
and the component generator. Values mirror Angular CLI's own file layout.
"""

from typing import Dict

CURRENT_CONFIG_VERSION = "1.0.0"

DEFAULT_INPUT_DIR = "Templates/Snippets"
DEFAULT_APP_ROOT = "src/app"
DEFAULT_SNIPPET_EXTENSION = ".txt"
DEFAULT_NG_COMMAND = "ng"
DEFAULT_SELECTOR_PREFIX = "app"
DEFAULT_ERROR_LOG_NAME = "snippet4ng_errors.txt"

# -----------------------------------------------------------------------------
# TYPE NAME SUFFIXES
# -----------------------------------------------------------------------------

COMPONENT_SUFFIX = "Component"
MODULE_SUFFIX = "Module"

# Prefix applied when a selector would otherwise start with a digit
DIGIT_SELECTOR_PREFIX = "ngx"

BREADCRUMB_SEPARATOR = " / "

# -----------------------------------------------------------------------------
# GENERATED FILE NAMES
# -----------------------------------------------------------------------------

MODULE_FILE_SUFFIX = ".module.ts"
COMPONENT_TS_SUFFIX = ".component.ts"
COMPONENT_HTML_SUFFIX = ".component.html"
STORY_FILE_SUFFIX = ".stories.ts"

DIGIT_WORDS: Dict[str, str] = {
    "0": "zero",
    "1": "one",
    "2": "two",
    "3": "three",
    "4": "four",
    "5": "five",
    "6": "six",
    "7": "seven",
    "8": "eight",
    "9": "nine",
}

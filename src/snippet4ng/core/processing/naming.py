from __future__ import annotations

"""
Name Sanitization Service.

Pure string transforms used to turn arbitrary directory and file names into
valid Angular identifiers: character filtering, spelling out digits, and
conversions between hyphen-case, PascalCase and Title Case.
"""

import logging
import re
from typing import Any, Final

from snippet4ng.domain.constants import DIGIT_WORDS

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PATTERNS
# -----------------------------------------------------------------------------

_INVALID_CHARS: Final[re.Pattern] = re.compile(r"[^a-zA-Z0-9\-]")
_HYPHEN_RUNS: Final[re.Pattern] = re.compile(r"-+")
_EDGE_HYPHENS: Final[re.Pattern] = re.compile(r"^-|-$")

_DIMENSION_PATTERN: Final[re.Pattern] = re.compile(r"(\d+)x(\d+)", re.IGNORECASE)
_DIGIT_RUN: Final[re.Pattern] = re.compile(r"\d+")

_WORD_TOKEN: Final[re.Pattern] = re.compile(r"\w\S*")
_CASE_BOUNDARY: Final[re.Pattern] = re.compile(r"([a-z])([A-Z])")

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def sanitize(name: Any) -> str:
    """
    Reduce a name to lowercase letters, digits and single hyphens.

    Args:
        name: Raw name. Non-string input is logged and treated as empty.

    Returns:
        str: Sanitized name, possibly empty.
    """
    if not isinstance(name, str):
        logger.warning(f"sanitize received a non-string value: {name!r}")
        return ""
    out = _INVALID_CHARS.sub("-", name)
    out = _HYPHEN_RUNS.sub("-", out)
    out = _EDGE_HYPHENS.sub("", out)
    return out.lower()


def digits_to_words(digits: Any) -> str:
    """
    Spell every digit of a string as its English word, without separators.

    '42' becomes 'fourtwo'. Non-digit characters are kept as they are.
    """
    if not isinstance(digits, str):
        logger.warning(f"digits_to_words received a non-string value: {digits!r}")
        return ""
    return "".join(DIGIT_WORDS.get(ch, ch) for ch in digits)


def replace_numbers_with_words(text: Any) -> str:
    """
    Replace numbers in a name with their spelled-out form.

    Dimension patterns such as '2x2' are resolved first ('twobytwo') so that
    the 'x' is not left between two converted digit runs.

    Args:
        text: Name to process.

    Returns:
        str: Name without digits.
    """
    if not isinstance(text, str):
        logger.warning(f"replace_numbers_with_words received a non-string value: {text!r}")
        return ""
    out = _DIMENSION_PATTERN.sub(
        lambda m: digits_to_words(m.group(1)) + "by" + digits_to_words(m.group(2)),
        text,
    )
    return _DIGIT_RUN.sub(lambda m: digits_to_words(m.group(0)), out)


def to_title_case(text: Any) -> str:
    """Capitalize each word and lowercase the rest of it."""
    if not isinstance(text, str):
        logger.warning(f"to_title_case received a non-string value: {text!r}")
        return ""
    return _WORD_TOKEN.sub(lambda m: m.group(0)[0].upper() + m.group(0)[1:].lower(), text)


def kebab_from_pascal(text: str) -> str:
    """'BasicCard' -> 'basic-card'."""
    return _CASE_BOUNDARY.sub(r"\1-\2", text).lower()


def pascal_from_kebab(text: str) -> str:
    """'basic-card' -> 'BasicCard'. Empty tokens are dropped."""
    return "".join(token[0].upper() + token[1:] for token in text.split("-") if token)

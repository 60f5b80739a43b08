from __future__ import annotations

"""
Identifier Derivation.

Computes every name needed to scaffold one component from the location of
its snippet file: the sanitized directory chain, module names, component
class name, selector and the Storybook breadcrumb title.
"""

import logging
import os
import re
from typing import Sequence

from snippet4ng.core.processing.naming import (
    pascal_from_kebab,
    replace_numbers_with_words,
    sanitize,
    to_title_case,
)
from snippet4ng.domain.constants import (
    BREADCRUMB_SEPARATOR,
    COMPONENT_SUFFIX,
    DEFAULT_SELECTOR_PREFIX,
    DIGIT_SELECTOR_PREFIX,
)
from snippet4ng.domain.errors import InvalidSnippetNameError
from snippet4ng.domain.models import DerivedNames

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")
_HYPHEN_BEFORE_DIGIT = re.compile(r"-(?=\d)")


def to_identifier_segment(raw: str) -> str:
    """
    Turn a raw directory or file name into a hyphen-case identifier.

    Whitespace becomes hyphens, invalid characters are stripped and digits
    are spelled out.
    """
    collapsed = _WHITESPACE.sub("-", raw.strip())
    return replace_numbers_with_words(sanitize(collapsed))


def build_tag_name(
        leaf_name: str,
        selector_prefix: str = DEFAULT_SELECTOR_PREFIX,
        digit_prefix: str = DIGIT_SELECTOR_PREFIX,
) -> str:
    """
    Build a custom element selector for a component.

    Angular selectors may not place a hyphen directly before a digit nor
    start with one.
    """
    base = _HYPHEN_BEFORE_DIGIT.sub("", leaf_name)
    if base[:1].isdigit():
        base = f"{digit_prefix}-{base}"
    return f"{selector_prefix}-{base}"


def build_breadcrumb(original_segments: Sequence[str], leaf_name: str) -> str:
    parts = list(original_segments) + [leaf_name.replace("-", " ")]
    return BREADCRUMB_SEPARATOR.join(to_title_case(p) for p in parts)


def derive_names(
        relative_dir: Sequence[str],
        file_base_name: str,
        original_segments: Sequence[str],
        *,
        selector_prefix: str = DEFAULT_SELECTOR_PREFIX,
        digit_prefix: str = DIGIT_SELECTOR_PREFIX,
) -> DerivedNames:
    """
    Derive the full identifier set for a snippet.

    Args:
        relative_dir: Raw directory segments below the scan root (may be empty).
        file_base_name: Snippet file name without extension.
        original_segments: Directory segments as shown to humans.
        selector_prefix: Product prefix for the component selector.
        digit_prefix: Prefix used when a selector would start with a digit.

    Returns:
        DerivedNames: Immutable identifier set.

    Raises:
        InvalidSnippetNameError: If the file name has no usable characters.
    """
    segments = tuple(to_identifier_segment(seg) for seg in relative_dir)
    for raw, clean in zip(relative_dir, segments):
        logger.debug(f"Sanitized directory segment: {raw!r} -> {clean!r}")
        if not clean:
            raise InvalidSnippetNameError(
                f"Directory name '{raw}' has no usable characters."
            )

    leaf_name = to_identifier_segment(file_base_name)
    if not leaf_name:
        raise InvalidSnippetNameError(
            f"Snippet name '{file_base_name}' has no usable characters."
        )

    container_path = os.path.join(*segments) if segments else ""
    leaf_path = os.path.join(container_path, leaf_name) if container_path else leaf_name

    names = DerivedNames(
        segments=segments,
        container_path=container_path,
        container_names=tuple(pascal_from_kebab(seg) for seg in segments),
        leaf_name=leaf_name,
        leaf_path=leaf_path,
        leaf_type_name=pascal_from_kebab(leaf_name) + COMPONENT_SUFFIX,
        tag_name=build_tag_name(leaf_name, selector_prefix, digit_prefix),
        breadcrumb_title=build_breadcrumb(original_segments, leaf_name),
    )

    logger.debug(
        f"Derived {names.leaf_type_name} <{names.tag_name}> at '{names.leaf_path}' "
        f"(modules: {', '.join(names.container_names) or 'none'})"
    )
    return names
